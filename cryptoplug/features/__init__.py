"""Feature table assembly.

Provides:
- BuildFlags / probe_build_flags(): what the backend library makes available
- Sub-table builders, one per algorithm family
- TableAssembler / assemble(): ordered concatenation into a FeatureTable
- FeaturePublisher: thread-safe build-once publication
"""

from .assembler import FeatureTable, Segment, TableAssembler, assemble
from .flags import BuildFlags, probe_build_flags
from .publisher import FeaturePublisher, get_publisher, reset_publishers
from .subtables import (
    DEFAULT_ASSEMBLY_ORDER,
    RNG_SUBTABLE,
    SUBTABLE_BUILDERS,
    SubTable,
    build_subtables,
    static_capacity,
)

__all__ = [
    "BuildFlags",
    "probe_build_flags",
    "FeatureTable",
    "Segment",
    "TableAssembler",
    "assemble",
    "FeaturePublisher",
    "get_publisher",
    "reset_publishers",
    "DEFAULT_ASSEMBLY_ORDER",
    "RNG_SUBTABLE",
    "SUBTABLE_BUILDERS",
    "SubTable",
    "build_subtables",
    "static_capacity",
]
