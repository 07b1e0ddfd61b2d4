import pytest

from cmpreport.edits import (
    EditType,
    coalesce_adjacent_edits,
    coalesce_intervening_identical,
    format_ascii,
)
from cmpreport.textnode import DiffStats

I = EditType.IDENTITY
X = EditType.UNIQUE_X
Y = EditType.UNIQUE_Y
M = EditType.MODIFIED


def _totals(groups):
    return (
        sum(g.num_identical for g in groups),
        sum(g.num_removed for g in groups),
        sum(g.num_inserted for g in groups),
        sum(g.num_modified for g in groups),
    )


def test_coalesce_adjacent_edits_groups_runs():
    groups = coalesce_adjacent_edits("byte", [I, I, X, Y, M, I])
    assert groups == [
        DiffStats(name="byte", num_identical=2),
        DiffStats(name="byte", num_removed=1, num_inserted=1, num_modified=1),
        DiffStats(name="byte", num_identical=1),
    ]


def test_coalesce_adjacent_edits_empty():
    assert coalesce_adjacent_edits("line", []) == []


def test_coalesce_adjacent_edits_starting_with_difference():
    groups = coalesce_adjacent_edits("line", [X, X, I])
    assert groups[0] == DiffStats(name="line", num_removed=2)
    assert groups[1] == DiffStats(name="line", num_identical=1)


def test_coalesce_adjacent_edits_alternates_equal_and_unequal():
    edits = [I, X, I, Y, M, I, I, X]
    groups = coalesce_adjacent_edits("int", edits)
    kinds = [g.num_diff() == 0 for g in groups]
    assert all(a != b for a, b in zip(kinds, kinds[1:]))
    assert _totals(groups) == (
        edits.count(I),
        edits.count(X),
        edits.count(Y),
        edits.count(M),
    )


def test_coalesce_adjacent_edits_rejects_unknown_edit():
    with pytest.raises(ValueError):
        coalesce_adjacent_edits("byte", [I, "bogus"])


def test_intervening_identical_merges_short_run():
    groups = [
        DiffStats(name="byte", num_removed=1),
        DiffStats(name="byte", num_identical=2),
        DiffStats(name="byte", num_inserted=1),
    ]
    merged = coalesce_intervening_identical(groups, 4)
    assert merged == [
        DiffStats(name="byte", num_removed=1, num_identical=2, num_inserted=1)
    ]


def test_intervening_identical_keeps_long_run():
    groups = [
        DiffStats(name="byte", num_removed=1),
        DiffStats(name="byte", num_identical=5),
        DiffStats(name="byte", num_inserted=1),
    ]
    assert coalesce_intervening_identical(groups, 4) == groups


def test_intervening_identical_requires_both_removal_and_insertion():
    groups = [
        DiffStats(name="byte", num_removed=1),
        DiffStats(name="byte", num_identical=1),
        DiffStats(name="byte", num_removed=2),
    ]
    assert coalesce_intervening_identical(groups, 4) == groups


def test_intervening_identical_preserves_totals_and_input():
    groups = coalesce_adjacent_edits("byte", [I, X, I, Y, I, X, Y, I, I, I, I, I, I, M])
    snapshot = [DiffStats(**vars(g)) for g in groups]
    merged = coalesce_intervening_identical(groups, 2)
    assert _totals(merged) == _totals(groups)
    assert len(merged) < len(groups)
    assert groups == snapshot


def test_intervening_identical_name_mismatch_raises():
    groups = [
        DiffStats(name="byte", num_removed=1),
        DiffStats(name="line", num_identical=1),
        DiffStats(name="byte", num_inserted=1),
    ]
    with pytest.raises(ValueError):
        coalesce_intervening_identical(groups, 4)


def test_format_ascii_replaces_unprintable_bytes():
    assert format_ascii(b"ab\x00~\x7f ") == "ab.~. "


def test_format_ascii_keeps_length_per_byte():
    data = "héllo"
    out = format_ascii(data)
    assert len(out) == len(data.encode("utf-8"))
    assert out.startswith("h") and out.endswith("llo")