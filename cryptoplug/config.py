"""Configuration management for cryptoplug.

Settings are a flat mapping of dotted keys under a namespace, e.g.
``cryptoplug.plugins.cryptography.use_rng``. Lookups pass a key relative to
the namespace and a default:

    get_config().get_bool("plugins.cryptography.use_rng", True)

Config resolution order (highest priority first):
1. Programmatic (CryptoplugConfig constructed in code, installed via configure())
2. Environment variables (CRYPTOPLUG__PLUGINS__CRYPTOGRAPHY__USE_RNG=no)
3. Config file (~/.config/cryptoplug/config.json, managed by `cryptoplug config`)
4. The default passed to the lookup

Environment variable names are the namespace upper-cased, followed by the
key with ``__`` as the separator. CRYPTOPLUG_NAMESPACE selects the namespace.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "cryptoplug"
CONFIG_FILE = CONFIG_DIR / "config.json"

DEFAULT_NAMESPACE = "cryptoplug"
NAMESPACE_ENV = "CRYPTOPLUG_NAMESPACE"


# =============================================================================
# Value parsing
# =============================================================================

_TRUE_WORDS = {"1", "yes", "true", "enabled", "on"}
_FALSE_WORDS = {"0", "no", "false", "disabled", "off"}


def parse_bool(value: Any) -> bool:
    """Parse a settings value as a boolean.

    Accepts booleans, integers and the words yes/no, true/false,
    enabled/disabled, on/off, 1/0 (case-insensitive).

    Raises:
        ValueError: If the value is not recognizably boolean.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ValueError(f"Not a boolean setting value: {value!r}")


def flatten_settings(data: dict, prefix: str = "") -> dict[str, Any]:
    """Flatten nested dicts into dotted keys.

    Examples:
        {"plugins": {"cryptography": {"use_rng": False}}}
            → {"plugins.cryptography.use_rng": False}
    """
    flat: dict[str, Any] = {}
    for k, v in data.items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            flat.update(flatten_settings(v, key))
        else:
            flat[key] = v
    return flat


def plugin_setting(plugin: str, option: str) -> str:
    """Key of a per-plugin option, relative to the namespace."""
    return f"plugins.{plugin}.{option}"


# =============================================================================
# Main config class
# =============================================================================


@dataclass
class CryptoplugConfig:
    """Top-level cryptoplug configuration.

    Construct programmatically for package use, or load from config file for CLI use.

    Examples:
        # Package use: no files needed
        config = CryptoplugConfig(
            settings={"cryptoplug.plugins.cryptography.use_rng": False},
        )

        # CLI use: loads from ~/.config/cryptoplug/config.json
        config = CryptoplugConfig.load()
    """

    namespace: str = DEFAULT_NAMESPACE
    settings: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def load(cls) -> "CryptoplugConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > lookup defaults.
        """
        config = cls()

        # Layer 1: Load from config file if it exists
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                _apply_dict(config, data)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)

        # Layer 2: Env var overrides
        _ensure_dotenv()
        if val := os.environ.get(NAMESPACE_ENV):
            config.namespace = val
        _apply_env(config)

        return config

    def save(self) -> None:
        """Save config to ~/.config/cryptoplug/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        data: dict[str, Any] = {"settings": dict(sorted(self.settings.items()))}
        if self.namespace != DEFAULT_NAMESPACE:
            data["namespace"] = self.namespace
        return data

    # ── Lookups ──

    def qualify(self, key: str) -> str:
        """Prefix a relative key with the namespace."""
        if key.startswith(f"{self.namespace}."):
            return key
        return f"{self.namespace}.{key}"

    def get(self, key: str, default: Any = None) -> Any:
        return self.settings.get(self.qualify(key), default)

    def get_bool(self, key: str, default: bool) -> bool:
        """Look up a boolean setting.

        Unparseable values are logged and fall back to the default.
        """
        full_key = self.qualify(key)
        if full_key not in self.settings:
            return default
        try:
            return parse_bool(self.settings[full_key])
        except ValueError:
            logger.warning(
                "Invalid boolean for %s=%r, using default %s",
                full_key,
                self.settings[full_key],
                default,
            )
            return default

    def set(self, key: str, value: Any) -> None:
        self.settings[self.qualify(key)] = value

    def unset(self, key: str) -> bool:
        return self.settings.pop(self.qualify(key), None) is not None


# =============================================================================
# Config layering
# =============================================================================


def _apply_dict(config: CryptoplugConfig, data: dict) -> None:
    """Apply a config file dict onto a CryptoplugConfig.

    ``settings`` may be nested or use dotted keys; keys are taken to be
    fully qualified (they include the namespace).
    """
    if isinstance(data.get("namespace"), str):
        config.namespace = data["namespace"]
    if "settings" in data and isinstance(data["settings"], dict):
        config.settings.update(flatten_settings(data["settings"]))


def env_var_for(config: CryptoplugConfig, key: str) -> str:
    """Environment variable that overrides a setting key."""
    return config.qualify(key).upper().replace(".", "__")


def _apply_env(config: CryptoplugConfig) -> None:
    prefix = f"{config.namespace.upper()}__"
    for name, value in os.environ.items():
        if not name.startswith(prefix):
            continue
        key = name[len(prefix) :].lower().replace("__", ".")
        config.settings[f"{config.namespace}.{key}"] = value


_dotenv_loaded = False


def _ensure_dotenv() -> None:
    """Load .env file into os.environ if not already loaded."""
    global _dotenv_loaded
    if not _dotenv_loaded:
        _dotenv_loaded = True
        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path=dotenv_path, override=False)


# =============================================================================
# Global config singleton
# =============================================================================

_config: CryptoplugConfig | None = None


def get_config() -> CryptoplugConfig:
    """Get the global CryptoplugConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    Use configure() to replace the global config programmatically.
    """
    global _config
    if _config is None:
        _config = CryptoplugConfig.load()
    return _config


def configure(config: CryptoplugConfig) -> None:
    """Set the global CryptoplugConfig programmatically.

    Use this when cryptoplug is used as a package:
        from cryptoplug.config import configure, CryptoplugConfig
        configure(CryptoplugConfig(settings={"cryptoplug.plugins.cryptography.use_rng": "no"}))
    """
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None
