"""Shared fixtures for timelog tests."""

import pytest

from timelog.core.config import Config
from timelog.store import CheckpointStore, EventStore


@pytest.fixture
def config(tmp_path):
    """Provide a Config pointing at a temp directory."""
    cfg = Config.from_data_dir(tmp_path)
    cfg.ensure_directories()
    return cfg


@pytest.fixture
def events():
    """An EventStore with three tags: zro, frs, scn."""
    store = EventStore()
    store.add_label("Zeroeth", "zro")
    store.add_label("First", "frs")
    store.add_label("Second", "scn")
    return store


@pytest.fixture
def timeline(events):
    """Events at 100, 110 and 125."""
    events.add_entry(100, "wake up", ["zro"])
    events.add_entry(110, "coffee", ["frs"])
    events.add_entry(125, "start work", ["frs", "scn"])
    return events


@pytest.fixture
def checkpoints():
    """A CheckpointStore with two projects: web, cli."""
    store = CheckpointStore()
    store.add_label("Website", "web")
    store.add_label("Command line", "cli")
    return store
