import asyncio
import sys
import tempfile
from pathlib import Path
from typing import Optional

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


class Recorder:
    """Component recording its start/stop effects into a shared list."""

    def __init__(self, label: str, effects: list, delay: Optional[float] = None):
        self.label = label
        self.effects = effects
        self.delay = delay
        self.running = False

    async def start(self):
        if self.delay is not None:
            await asyncio.sleep(self.delay)
        self.effects.append(f"Start {self.label}")
        self.running = True

    async def stop(self):
        if self.delay is not None:
            await asyncio.sleep(self.delay)
        self.effects.append(f"Stop {self.label}")
        self.running = False


class SyncRecorder:
    """Same as Recorder, with plain (non-async) hooks."""

    def __init__(self, label: str, effects: list):
        self.label = label
        self.effects = effects

    def start(self):
        self.effects.append(f"Start {self.label}")

    def stop(self):
        self.effects.append(f"Stop {self.label}")


@pytest.fixture
def effects():
    """Ordered list of observed lifecycle effects."""
    return []


@pytest.fixture
def recorder(effects):
    """Factory for async recording components."""
    def _make(label: str, delay: Optional[float] = None) -> Recorder:
        return Recorder(label, effects, delay)
    return _make


@pytest.fixture
def sync_recorder(effects):
    """Factory for sync recording components."""
    def _make(label: str) -> SyncRecorder:
        return SyncRecorder(label, effects)
    return _make


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_yaml_config(temp_dir):
    """Create a sample YAML data file."""
    config_path = temp_dir / "config.yaml"
    config_path.write_text("""
database:
  url: postgres://localhost/app
  pool_size: 5
scheduler:
  tick: 10
""")
    return config_path


@pytest.fixture
def sample_json_config(temp_dir):
    """Create a sample JSON data file."""
    config_path = temp_dir / "config.json"
    config_path.write_text("""{
    "a": 1,
    "b": 2
}""")
    return config_path


@pytest.fixture
def empty_config_file(temp_dir):
    """Create an empty data file."""
    config_path = temp_dir / "empty.yaml"
    config_path.write_text("")
    return config_path


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep CYCLUS_* variables of the outer environment out of the tests."""
    import os
    for key in list(os.environ):
        if key.startswith("CYCLUS_"):
            monkeypatch.delenv(key)
    yield
