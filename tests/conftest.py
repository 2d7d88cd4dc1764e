"""Shared pytest fixtures for the graph guidance test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from core import resources
from core.config import ConfigLoader
from core.dispatcher import GuidanceDispatcher
from core.topics import load_topics

PROJECT_ROOT = Path(__file__).resolve().parent.parent
RESOURCES_DIR = PROJECT_ROOT / "resources"
TOPICS_DIR = RESOURCES_DIR / "topics"


@pytest.fixture(autouse=True)
def reset_globals(monkeypatch):
    """Isolate the config singleton and the shared registry between tests."""
    monkeypatch.delenv("GRAPH_GUIDANCE_CONFIG", raising=False)
    ConfigLoader.reset()
    resources.set_resource_map({})
    resources.set_dispatcher(None)
    yield
    ConfigLoader.reset()
    resources.set_resource_map({})
    resources.set_dispatcher(None)


@pytest.fixture(scope="session")
def topics():
    return load_topics(TOPICS_DIR)


@pytest.fixture
def dispatcher(topics) -> GuidanceDispatcher:
    return GuidanceDispatcher(topics)


@pytest.fixture
def installed_dispatcher(dispatcher) -> GuidanceDispatcher:
    """The shipped dispatcher, published the way the server does at startup."""
    resources.set_dispatcher(dispatcher)
    return dispatcher


@pytest.fixture
def server_config() -> dict:
    return {
        "server_name": "kusto-graph-guidance-test",
        "resources_dir": str(RESOURCES_DIR),
        "topics_dir": str(TOPICS_DIR),
        "json_indent": 2,
    }


@pytest.fixture
def write_topic(tmp_path):
    """Write a topic YAML file into a temporary topics directory and return its path."""

    def _write(file_name: str, text: str) -> Path:
        path = tmp_path / file_name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
