"""Shared pytest fixtures."""

import os

import pytest

import obsid.config


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep the developer's OBSID_* settings and .env file out of the tests."""
    for name in list(os.environ):
        if name.startswith("OBSID_"):
            monkeypatch.delenv(name)
    monkeypatch.setattr(obsid.config, "load_dotenv", lambda *args, **kwargs: False)


@pytest.fixture
def daily_dir(tmp_path):
    """The daily notes folder of a vault rooted at tmp_path."""
    path = tmp_path / "Daily Notes"
    path.mkdir()
    return path
