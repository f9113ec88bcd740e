"""Shared fixtures: isolate config files, env vars and published tables."""

import os

import pytest

from cryptoplug import config as config_module
from cryptoplug.cli.commands import config_cmd
from cryptoplug.features import probe_build_flags
from cryptoplug.plugins import reset_feature_cache


@pytest.fixture(autouse=True)
def isolated_state(tmp_path, monkeypatch):
    config_dir = tmp_path / "config"
    config_file = config_dir / "config.json"
    monkeypatch.setattr(config_module, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_file)
    monkeypatch.setattr(config_cmd, "CONFIG_FILE", config_file)
    # No .env discovery from the developer's working tree
    monkeypatch.setattr(config_module, "_dotenv_loaded", True)
    for name in list(os.environ):
        if name.startswith("CRYPTOPLUG"):
            monkeypatch.delenv(name)

    config_module.reset_config()
    reset_feature_cache()
    yield
    config_module.reset_config()
    reset_feature_cache()
    probe_build_flags.cache_clear()
