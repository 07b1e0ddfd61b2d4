"""Grouping of edit scripts into summary statistics for slice diffs."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum

from cmpreport.textnode import DiffStats


class EditType(Enum):
    """A single step of an edit script transforming x into y."""

    IDENTITY = "identity"
    UNIQUE_X = "unique_x"
    UNIQUE_Y = "unique_y"
    MODIFIED = "modified"


_EQUAL_CASE = 1
_UNEQUAL_CASE = 2


def coalesce_adjacent_edits(name: str, edits: Iterable[EditType]) -> list[DiffStats]:
    """Group an edit script into runs of equal and unequal edits."""
    groups: list[DiffStats] = []
    prev_case = 0

    def current(case: int) -> DiffStats:
        nonlocal prev_case
        if prev_case != case:
            groups.append(DiffStats(name=name))
            prev_case = case
        return groups[-1]

    for edit in edits:
        if edit is EditType.IDENTITY:
            current(_EQUAL_CASE).num_identical += 1
        elif edit is EditType.UNIQUE_X:
            current(_UNEQUAL_CASE).num_removed += 1
        elif edit is EditType.UNIQUE_Y:
            current(_UNEQUAL_CASE).num_inserted += 1
        elif edit is EditType.MODIFIED:
            current(_UNEQUAL_CASE).num_modified += 1
        else:
            raise ValueError(f"unknown edit: {edit!r}")
    return groups


def coalesce_intervening_identical(
    groups: Sequence[DiffStats], window_size: int
) -> list[DiffStats]:
    """Merge short equal runs into the unequal runs that surround them.

    An equal run of at most *window_size* items is folded into its neighbours
    when, between them, they both remove and insert items. This smooths out
    high-frequency changes that would otherwise print as many small hunks.
    """
    result: list[DiffStats] = []
    for stats in groups:
        if len(result) >= 2 and stats.num_diff() > 0:
            prev, curr = result[-2], result[-1]
            had_x, had_y = prev.num_removed > 0, prev.num_inserted > 0
            has_x, has_y = stats.num_removed > 0, stats.num_inserted > 0
            if (had_x or has_x) and (had_y or has_y) and curr.num_identical <= window_size:
                result[-2] = prev.append(curr).append(stats)
                result.pop()
                continue
        result.append(stats)
    return result


def format_ascii(data: bytes | str) -> str:
    """Render bytes as printable ASCII, replacing anything else with '.'."""
    if isinstance(data, str):
        data = data.encode("utf-8", errors="surrogateescape")
    return "".join(chr(b) if 0x20 <= b <= 0x7E else "." for b in data)