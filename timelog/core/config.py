"""
timelog.core.config -- Configuration for the timelog record store.

Supports loading from YAML and programmatic construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

LABEL_ID_POLICIES = frozenset({"reuse", "monotonic"})


@dataclass
class Config:
    """
    Central configuration object.

    Construct directly, via ``Config.from_yaml(path)``, or via
    ``Config.from_data_dir(path)`` for quick bootstrap.
    """

    # -- storage ------------------------------------------------------------
    data_dir: Path = field(default_factory=lambda: Path("./timelog_data"))
    events_file: str = "events.json"
    checkpoints_file: str = "checkpoints.json"
    json_indent: int = 2

    # -- labels -------------------------------------------------------------
    # "reuse": smallest free id (what existing snapshots were written with)
    # "monotonic": freed ids are never handed out again
    label_id_policy: str = "reuse"

    # -- logging ------------------------------------------------------------
    structured_logging: bool = False  # emit JSON log lines when True
    log_level: str = "INFO"

    # -----------------------------------------------------------------------
    # Derived paths (all relative to data_dir)
    # -----------------------------------------------------------------------

    @property
    def events_path(self) -> Path:
        return self.data_dir / self.events_file

    @property
    def checkpoints_path(self) -> Path:
        return self.data_dir / self.checkpoints_file

    # -----------------------------------------------------------------------
    # Construction helpers
    # -----------------------------------------------------------------------

    def __post_init__(self) -> None:
        # normalise data_dir to an absolute Path
        self.data_dir = Path(self.data_dir).resolve()
        if self.label_id_policy not in LABEL_ID_POLICIES:
            raise ValueError(
                f"Unknown label_id_policy {self.label_id_policy!r}; "
                f"expected one of {sorted(LABEL_ID_POLICIES)}"
            )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from a YAML file.

        Any key in the YAML that matches a Config field is applied.
        Unknown keys are silently ignored so the file can carry
        application-level settings alongside timelog config.
        """
        import yaml

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as fh:
            raw: Dict[str, Any] = yaml.safe_load(fh) or {}

        # pull the timelog section if nested, else use top-level
        data = raw.get("timelog", raw)

        if "data_dir" in data:
            data["data_dir"] = Path(data["data_dir"])

        known = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in known}

        return cls(**filtered)

    @classmethod
    def from_data_dir(cls, data_dir: str | Path, **overrides: Any) -> "Config":
        """Quick constructor -- just point at a data directory."""
        return cls(data_dir=Path(data_dir), **overrides)

    def ensure_directories(self) -> None:
        """Create the data directory if it doesn't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to a plain dict (YAML/JSON-safe)."""
        return {
            "data_dir": str(self.data_dir),
            "events_file": self.events_file,
            "checkpoints_file": self.checkpoints_file,
            "json_indent": self.json_indent,
            "label_id_policy": self.label_id_policy,
            "structured_logging": self.structured_logging,
            "log_level": self.log_level,
        }
