"""Tests for table assembly."""

import pytest

from cryptoplug.core.models import (
    ConstructorRef,
    Family,
    FeatureKind,
    HashAlgorithm,
    Provide,
    ProviderRecord,
)
from cryptoplug.features import (
    BuildFlags,
    Segment,
    SubTable,
    TableAssembler,
    assemble,
    build_subtables,
)


def _subtable(name: str, provides: int) -> SubTable:
    record = ProviderRecord(
        family=Family.HASHER,
        constructor=ConstructorRef(path=f"tests.fake:{name}"),
        provides=tuple(
            Provide(family=Family.HASHER, algorithm_id=HashAlgorithm.SHA256, key_size=i)
            for i in range(provides)
        ),
    )
    return SubTable.of(name, record if provides else None)


class TestTableAssembler:
    def test_concatenates_in_order(self):
        table = assemble([_subtable("a", 2), _subtable("b", 1)])
        assert table.count == 5
        assert [str(d.constructor) for d in table.entries] == [
            "tests.fake:a",
            "tests.fake:a",
            "tests.fake:a",
            "tests.fake:b",
            "tests.fake:b",
        ]

    def test_add_returns_running_count(self):
        assembler = TableAssembler(capacity=10)
        assert assembler.add(_subtable("a", 2)) == 3
        assert assembler.add(_subtable("b", 0)) == 3
        assert assembler.add(_subtable("c", 1)) == 5

    def test_empty_subtable_leaves_no_gap(self):
        table = assemble([_subtable("a", 1), _subtable("empty", 0), _subtable("b", 1)])
        assert table.count == 4
        assert table.segments == (
            Segment("a", 0, 2),
            Segment("empty", 2, 0),
            Segment("b", 2, 2),
        )
        assert table.segment("empty") == ()

    def test_segment_lookup(self):
        table = assemble([_subtable("a", 1), _subtable("b", 2)])
        b = table.segment("b")
        assert len(b) == 3
        assert b[0].kind == FeatureKind.REGISTER
        assert table.segment("missing") == ()

    def test_capacity_is_an_upper_bound(self):
        table = assemble([_subtable("a", 1)], capacity=100)
        assert table.capacity == 100
        assert table.count == 2

    def test_overflow_raises(self):
        assembler = TableAssembler(capacity=3)
        assembler.add(_subtable("a", 1))
        with pytest.raises(OverflowError, match="'b'"):
            assembler.add(_subtable("b", 1))
        # Failed add leaves the table untouched
        assert assembler.count == 2
        assert assembler.freeze().count == 2

    def test_empty_table(self):
        table = assemble([])
        assert table.count == 0
        assert table.entries == ()


class TestExclusion:
    """Leaving a sub-table out removes exactly its entries."""

    @pytest.mark.parametrize("excluded", ["dh", "hash", "rsa", "ed25519"])
    def test_exclusion_preserves_relative_order(self, excluded):
        subtables = build_subtables(BuildFlags())
        names = ["dh", "ecdh", "crypt", "hash", "rsa", "ed25519"]

        full = assemble(subtables[n] for n in names)
        partial = assemble(subtables[n] for n in names if n != excluded)

        assert partial.count == full.count - subtables[excluded].size
        expected = tuple(
            d for seg in full.segments if seg.name != excluded
            for d in full.segment(seg.name)
        )
        assert partial.entries == expected
