"""Merge sub-tables into one contiguous feature table."""

from dataclasses import dataclass, field
from typing import Iterable

from ..core.models import FeatureDescriptor
from .subtables import SubTable


@dataclass(frozen=True)
class Segment:
    """Where one sub-table landed in the assembled table."""

    name: str
    offset: int
    length: int


@dataclass(frozen=True)
class FeatureTable:
    """The assembled, read-only table a plugin publishes."""

    entries: tuple[FeatureDescriptor, ...]
    capacity: int
    segments: tuple[Segment, ...] = ()

    @property
    def count(self) -> int:
        return len(self.entries)

    def segment(self, name: str) -> tuple[FeatureDescriptor, ...]:
        """Entries contributed by one sub-table (empty if it was not included)."""
        for seg in self.segments:
            if seg.name == name:
                return self.entries[seg.offset : seg.offset + seg.length]
        return ()


@dataclass
class TableAssembler:
    """Appends sub-tables in order into storage sized to ``capacity``.

    capacity is the static upper bound (every sub-table fully populated);
    the realized count is tracked separately and is usually smaller.
    """

    capacity: int
    count: int = 0
    _entries: list[FeatureDescriptor] = field(default_factory=list)
    _segments: list[Segment] = field(default_factory=list)

    def add(self, subtable: SubTable) -> int:
        """Append one sub-table and return the new total count."""
        descriptors = subtable.descriptors()
        if self.count + len(descriptors) > self.capacity:
            raise OverflowError(
                f"Sub-table {subtable.name!r} ({len(descriptors)} entries) "
                f"overflows table capacity {self.capacity} at count {self.count}"
            )
        self._segments.append(Segment(subtable.name, self.count, len(descriptors)))
        self._entries.extend(descriptors)
        self.count += len(descriptors)
        return self.count

    def add_all(self, subtables: Iterable[SubTable]) -> int:
        for subtable in subtables:
            self.add(subtable)
        return self.count

    def freeze(self) -> FeatureTable:
        return FeatureTable(
            entries=tuple(self._entries),
            capacity=self.capacity,
            segments=tuple(self._segments),
        )


def assemble(subtables: Iterable[SubTable], capacity: int | None = None) -> FeatureTable:
    """Concatenate sub-tables in the given order.

    Without an explicit capacity the table is sized to exactly fit.
    """
    subtables = list(subtables)
    if capacity is None:
        capacity = sum(s.size for s in subtables)
    assembler = TableAssembler(capacity=capacity)
    assembler.add_all(subtables)
    return assembler.freeze()
