"""Shared pytest fixtures.

``backend/`` is put on ``sys.path`` by the pytest ``pythonpath`` setting in
pyproject.toml, so ``models``, ``services`` and ``routers`` import directly.
"""

import pytest

from services.config_manager import CONFIG_DIR_ENV, ConfigManager
from services.diff_generator import DiffGenerator


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point the config singleton at an empty temp directory"""
    monkeypatch.setenv(CONFIG_DIR_ENV, str(tmp_path))
    ConfigManager.reset_instance()
    yield tmp_path
    ConfigManager.reset_instance()


@pytest.fixture
def generator():
    return DiffGenerator()
