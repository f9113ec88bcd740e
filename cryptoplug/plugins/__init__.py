"""Backend plugin registry and factory.

Provides:
- BUILTIN_PLUGINS: Registry of known plugin names → factory info
- create_plugin(): Create a plugin descriptor from a plugin name
- reset_feature_cache(): Drop published feature tables (for testing)
"""

import importlib
from typing import Any

from ..features import reset_publishers
from .base import Plugin, PluginError


# =============================================================================
# Plugin Registry
# =============================================================================

# Each entry: (module, class_name)
# Lazy-imported so a backend's library is only loaded when its plugin is.
_BUILTIN_REGISTRY: dict[str, dict] = {
    "cryptography": {
        "module": ".pyca",
        "class": "CryptographyPlugin",
    },
}

BUILTIN_PLUGINS = tuple(_BUILTIN_REGISTRY)


def create_plugin(plugin_name: str, **kwargs: Any) -> Plugin:
    """Create a plugin descriptor by name.

    Args:
        plugin_name: Plugin name (e.g., "cryptography")
        **kwargs: Passed to the plugin constructor (e.g., flags=BuildFlags(...))

    Returns:
        Plugin instance

    Raises:
        ValueError: If plugin is unknown
    """
    if plugin_name not in _BUILTIN_REGISTRY:
        raise ValueError(
            f"Unknown plugin: {plugin_name!r}. "
            f"Available: {', '.join(sorted(_BUILTIN_REGISTRY))}"
        )

    entry = _BUILTIN_REGISTRY[plugin_name]
    module = importlib.import_module(entry["module"], package=__package__)
    cls = getattr(module, entry["class"])
    return cls(**kwargs)


def reset_feature_cache() -> None:
    """Reset every published feature table (for testing)."""
    reset_publishers()


__all__ = [
    "Plugin",
    "PluginError",
    "BUILTIN_PLUGINS",
    "create_plugin",
    "reset_feature_cache",
]
