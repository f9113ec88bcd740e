"""Tests for settings layering and boolean parsing."""

import json
import logging

import pytest

from cryptoplug import config as config_module
from cryptoplug.config import (
    CryptoplugConfig,
    configure,
    env_var_for,
    flatten_settings,
    get_config,
    parse_bool,
    plugin_setting,
    reset_config,
)


class TestParseBool:
    @pytest.mark.parametrize(
        "value", ["1", "yes", "TRUE", "Enabled", " on ", True, 1]
    )
    def test_true(self, value):
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["0", "no", "False", "disabled", "off", False, 0])
    def test_false(self, value):
        assert parse_bool(value) is False

    @pytest.mark.parametrize("value", ["maybe", "", None, 1.5])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_bool(value)


class TestHelpers:
    def test_flatten_settings(self):
        nested = {"plugins": {"cryptography": {"use_rng": False}}, "top": 1}
        assert flatten_settings(nested) == {
            "plugins.cryptography.use_rng": False,
            "top": 1,
        }

    def test_plugin_setting(self):
        assert plugin_setting("cryptography", "use_rng") == "plugins.cryptography.use_rng"

    def test_env_var_for(self):
        config = CryptoplugConfig()
        assert (
            env_var_for(config, "plugins.cryptography.use_rng")
            == "CRYPTOPLUG__PLUGINS__CRYPTOGRAPHY__USE_RNG"
        )


class TestLookups:
    def test_missing_key_uses_default(self):
        config = CryptoplugConfig()
        assert config.get_bool("plugins.cryptography.use_rng", True) is True
        assert config.get_bool("plugins.cryptography.use_rng", False) is False

    def test_relative_and_qualified_keys(self):
        config = CryptoplugConfig()
        config.set("plugins.cryptography.use_rng", "no")
        assert config.get("cryptoplug.plugins.cryptography.use_rng") == "no"
        assert config.get_bool("plugins.cryptography.use_rng", True) is False

    def test_invalid_value_warns_and_uses_default(self, caplog):
        config = CryptoplugConfig(
            settings={"cryptoplug.plugins.cryptography.use_rng": "sometimes"}
        )
        with caplog.at_level(logging.WARNING, logger="cryptoplug"):
            assert config.get_bool("plugins.cryptography.use_rng", True) is True
        assert "Invalid boolean" in caplog.text

    def test_namespace_scopes_keys(self):
        config = CryptoplugConfig(
            namespace="charon",
            settings={"cryptoplug.plugins.cryptography.use_rng": False},
        )
        assert config.get_bool("plugins.cryptography.use_rng", True) is True

    def test_unset(self):
        config = CryptoplugConfig()
        config.set("plugins.cryptography.use_rng", False)
        assert config.unset("plugins.cryptography.use_rng") is True
        assert config.unset("plugins.cryptography.use_rng") is False


class TestLoad:
    def test_defaults_without_file(self):
        config = CryptoplugConfig.load()
        assert config.namespace == "cryptoplug"
        assert config.settings == {}

    def test_file_layer(self):
        config_module.CONFIG_DIR.mkdir(parents=True)
        config_module.CONFIG_FILE.write_text(
            json.dumps(
                {"settings": {"cryptoplug": {"plugins": {"cryptography": {"use_rng": False}}}}}
            )
        )
        config = CryptoplugConfig.load()
        assert config.get_bool("plugins.cryptography.use_rng", True) is False

    def test_env_overrides_file(self, monkeypatch):
        config_module.CONFIG_DIR.mkdir(parents=True)
        config_module.CONFIG_FILE.write_text(
            json.dumps({"settings": {"cryptoplug.plugins.cryptography.use_rng": False}})
        )
        monkeypatch.setenv("CRYPTOPLUG__PLUGINS__CRYPTOGRAPHY__USE_RNG", "yes")
        config = CryptoplugConfig.load()
        assert config.get_bool("plugins.cryptography.use_rng", False) is True

    def test_namespace_from_env(self, monkeypatch):
        monkeypatch.setenv("CRYPTOPLUG_NAMESPACE", "charon")
        monkeypatch.setenv("CHARON__PLUGINS__CRYPTOGRAPHY__USE_RNG", "off")
        config = CryptoplugConfig.load()
        assert config.namespace == "charon"
        assert config.get_bool("plugins.cryptography.use_rng", True) is False

    def test_corrupt_file_is_ignored(self, caplog):
        config_module.CONFIG_DIR.mkdir(parents=True)
        config_module.CONFIG_FILE.write_text("{not json")
        with caplog.at_level(logging.WARNING, logger="cryptoplug"):
            config = CryptoplugConfig.load()
        assert config.settings == {}
        assert "Failed to load config" in caplog.text

    def test_save_round_trip(self):
        config = CryptoplugConfig()
        config.set("plugins.cryptography.use_rng", False)
        config.save()

        loaded = CryptoplugConfig.load()
        assert loaded.settings == {"cryptoplug.plugins.cryptography.use_rng": False}


class TestGlobalConfig:
    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_configure_replaces(self):
        custom = CryptoplugConfig(namespace="custom")
        configure(custom)
        assert get_config() is custom

    def test_reset_reloads(self):
        first = get_config()
        reset_config()
        assert get_config() is not first
