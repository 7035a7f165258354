import json
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path when the package is not installed
PROJECT_ROOT = Path(__file__).parent.parent.resolve()
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from network_config.config_store import ConfigStore, get_config_store


@pytest.fixture
def store():
    """A fresh store that ignores the real process environment."""
    return ConfigStore(environ={})


@pytest.fixture
def default_store():
    """The process-wide store, reset before and after the test."""
    s = get_config_store()
    s.reset()
    yield s
    s.reset()


@pytest.fixture
def write_json(tmp_path):
    """Write a JSON document under tmp_path and return its path as a string."""

    def _write(relative, data):
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def config_dir(tmp_path, write_json):
    """A directory laid out like the package: app/network-config*.json plus config.json."""
    write_json("app/network-config.json", {"network-config": {"orderer": {"url": "grpcs://localhost:7050"}}})
    write_json("app/network-config-testnet.json", {"network-config": {"orderer": {"url": "grpcs://testnet:7050"}}})
    write_json("config.json", {"channelName": "mychannel", "request-timeout": 120000})
    return str(tmp_path)
