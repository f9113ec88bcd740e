"""Abstract base class for backend plugins."""

from abc import ABC, abstractmethod

from ..core.models import FeatureDescriptor


class PluginError(Exception):
    """Raised when a plugin descriptor is used after destroy()."""


class Plugin(ABC):
    """Descriptor a host loader uses to discover a backend's capabilities.

    Loaders call get_name() and get_features(), then destroy() when the
    plugin is unloaded. The feature table is process-wide and outlives any
    one descriptor: destroy() releases the descriptor only.
    """

    def __init__(self) -> None:
        self._destroyed = False

    @abstractmethod
    def get_name(self) -> str:
        """Constant identifying name of the backend."""

    @abstractmethod
    def get_features(self) -> tuple[tuple[FeatureDescriptor, ...], int]:
        """Return ``(entries, count)``; entries are read-only and process-lived."""

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def destroy(self) -> None:
        self._destroyed = True

    def _ensure_alive(self) -> None:
        if self._destroyed:
            raise PluginError(f"Plugin {self.get_name()!r} has been destroyed")

    def __repr__(self) -> str:
        state = "destroyed" if self._destroyed else "loaded"
        return f"<{type(self).__name__} {self.get_name()!r} {state}>"
