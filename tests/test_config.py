"""Tests for timelog.core.config."""

import pytest

from timelog.core.config import Config


class TestConfig:
    def test_defaults(self):
        c = Config()
        assert c.label_id_policy == "reuse"
        assert c.json_indent == 2
        assert c.structured_logging is False
        assert c.data_dir.is_absolute()

    def test_from_data_dir(self, tmp_path):
        c = Config.from_data_dir(tmp_path)
        assert c.data_dir == tmp_path.resolve()
        assert c.events_path == tmp_path.resolve() / "events.json"
        assert c.checkpoints_path == tmp_path.resolve() / "checkpoints.json"

    def test_overrides(self, tmp_path):
        c = Config.from_data_dir(tmp_path, events_file="log.json")
        assert c.events_path.name == "log.json"

    def test_unknown_policy(self):
        with pytest.raises(ValueError, match="Unknown label_id_policy"):
            Config(label_id_policy="random")

    def test_ensure_directories(self, tmp_path):
        c = Config.from_data_dir(tmp_path / "a" / "b")
        c.ensure_directories()
        assert c.data_dir.is_dir()

    def test_from_yaml_nested(self, tmp_path):
        yaml_path = tmp_path / "timelog.yaml"
        yaml_path.write_text(
            f"timelog:\n"
            f"  data_dir: {tmp_path}\n"
            f"  label_id_policy: monotonic\n"
            f"  json_indent: 4\n"
            f"  unrelated: ignored\n",
            encoding="utf-8",
        )
        c = Config.from_yaml(yaml_path)
        assert c.label_id_policy == "monotonic"
        assert c.json_indent == 4
        assert c.data_dir == tmp_path.resolve()

    def test_from_yaml_top_level(self, tmp_path):
        yaml_path = tmp_path / "timelog.yaml"
        yaml_path.write_text("structured_logging: true\n", encoding="utf-8")
        c = Config.from_yaml(yaml_path)
        assert c.structured_logging is True

    def test_from_yaml_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.from_yaml(tmp_path / "nonexistent.yaml")

    def test_to_dict(self):
        d = Config().to_dict()
        assert "data_dir" in d
        assert d["label_id_policy"] == "reuse"
