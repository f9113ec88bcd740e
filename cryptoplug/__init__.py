"""cryptoplug: capability registry builder for pluggable cryptography backends.

A backend plugin advertises the algorithms it can construct as an ordered
feature table, assembled once per process from the backend's build flags
and a single runtime setting (``<namespace>.plugins.<name>.use_rng``).

    from cryptoplug import create_plugin

    plugin = create_plugin("cryptography")
    entries, count = plugin.get_features()
"""

__version__ = "0.1.0"

from .plugins import Plugin, PluginError, create_plugin, reset_feature_cache  # noqa: E402

__all__ = [
    "__version__",
    "Plugin",
    "PluginError",
    "create_plugin",
    "reset_feature_cache",
]
