"""Pytest configuration and fixtures."""

import os
from pathlib import Path

import pytest

from scriptpanel.config import ScriptPanelSettings, reset_settings, set_settings

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers",
        "unit: mark test as unit test",
    )
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test",
    )


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Run every test with default settings and no SCRIPTPANEL_ variables."""
    for name in list(os.environ):
        if name.startswith("SCRIPTPANEL_"):
            monkeypatch.delenv(name, raising=False)

    reset_settings()
    set_settings(ScriptPanelSettings())
    yield
    reset_settings()


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the sample scripts."""
    return FIXTURES_DIR


@pytest.fixture
def comic_script() -> str:
    """Markdown comic script with a title page, a cast list and two pages."""
    return (FIXTURES_DIR / "comic_issue.md").read_text(encoding="utf-8")


@pytest.fixture
def screenplay_script() -> str:
    """Two-scene screenplay."""
    return (FIXTURES_DIR / "screenplay.txt").read_text(encoding="utf-8")


@pytest.fixture
def stage_play_script() -> str:
    """One-act stage play with two scenes."""
    return (FIXTURES_DIR / "stage_play.txt").read_text(encoding="utf-8")


@pytest.fixture
def tv_script() -> str:
    """TV episode with a teaser and one act."""
    return (FIXTURES_DIR / "tv_episode.txt").read_text(encoding="utf-8")
