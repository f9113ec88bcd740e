"""Build-once publication of a backend's feature table.

The first get_features() call assembles the table and caches it; every later
call returns the cached tuple without touching sub-tables or settings again.
The RNG toggle is therefore sampled exactly once per publisher.

Thread-safe: concurrent first callers serialize on a lock and all observe
the same table object. The cache is assigned only after the table is fully
built.
"""

import logging
import threading
from typing import Callable, Mapping

from ..core.models import FeatureDescriptor
from .assembler import FeatureTable, TableAssembler
from .subtables import DEFAULT_ASSEMBLY_ORDER, RNG_SUBTABLE, SubTable, static_capacity

logger = logging.getLogger(__name__)


class FeaturePublisher:
    """Memoized feature table for one backend.

    Args:
        name: Backend name (for logging).
        subtables: Every sub-table the backend defines, keyed by name.
        rng_enabled: Runtime setting lookup, called once on first build.
        include_generic_pubkey: Also assemble the generic "pubkey" loader
            sub-table, placed before "privkey". Off by default.
    """

    def __init__(
        self,
        name: str,
        subtables: Mapping[str, SubTable],
        rng_enabled: Callable[[], bool] = lambda: True,
        include_generic_pubkey: bool = False,
    ) -> None:
        self.name = name
        self._subtables = dict(subtables)
        self._rng_enabled = rng_enabled
        self._include_generic_pubkey = include_generic_pubkey
        self._lock = threading.Lock()
        self._table: FeatureTable | None = None
        self.build_count = 0

    @property
    def is_built(self) -> bool:
        return self._table is not None

    def assembly_order(self) -> tuple[str, ...]:
        """Names of the always-included sub-tables, in table order."""
        if not self._include_generic_pubkey:
            return DEFAULT_ASSEMBLY_ORDER
        index = DEFAULT_ASSEMBLY_ORDER.index("privkey")
        return (
            DEFAULT_ASSEMBLY_ORDER[:index]
            + ("pubkey",)
            + DEFAULT_ASSEMBLY_ORDER[index:]
        )

    def table(self) -> FeatureTable:
        """Return the cached table, building it on first access."""
        table = self._table
        if table is None:
            with self._lock:
                if self._table is None:
                    self._table = self._build()
                table = self._table
        return table

    def get_features(self) -> tuple[tuple[FeatureDescriptor, ...], int]:
        table = self.table()
        return table.entries, table.count

    def _build(self) -> FeatureTable:
        self.build_count += 1
        assembler = TableAssembler(capacity=static_capacity())
        for name in self.assembly_order():
            subtable = self._subtables.get(name)
            if subtable is None:
                logger.debug("%s: no %s sub-table defined, skipping", self.name, name)
                continue
            assembler.add(subtable)

        if self._rng_enabled():
            rng = self._subtables.get(RNG_SUBTABLE)
            if rng is not None:
                assembler.add(rng)
        else:
            logger.debug("%s: RNG features disabled by configuration", self.name)

        table = assembler.freeze()
        logger.info(
            "%s: published %d features (capacity %d)",
            self.name,
            table.count,
            table.capacity,
        )
        return table


# =============================================================================
# Process-wide publishers
# =============================================================================

_publishers: dict[str, FeaturePublisher] = {}
_publishers_lock = threading.Lock()


def get_publisher(name: str, factory: Callable[[], FeaturePublisher]) -> FeaturePublisher:
    """Get the process-wide publisher for a backend, creating it on first use."""
    publisher = _publishers.get(name)
    if publisher is None:
        with _publishers_lock:
            publisher = _publishers.get(name)
            if publisher is None:
                publisher = factory()
                _publishers[name] = publisher
    return publisher


def reset_publishers() -> None:
    """Drop every cached publisher (for testing)."""
    with _publishers_lock:
        _publishers.clear()
