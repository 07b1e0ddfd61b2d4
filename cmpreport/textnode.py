"""Tree representation of structured report text and its rendering."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field, replace
from enum import Enum

MAX_COLUMN_LENGTH = 80


class DiffMode(Enum):
    """How a node relates to the two compared values."""

    UNKNOWN = ""
    IDENTICAL = " "
    REMOVED = "-"
    INSERTED = "+"


_MARKERS = {
    DiffMode.UNKNOWN: "  ",
    DiffMode.IDENTICAL: "  ",
    DiffMode.REMOVED: "- ",
    DiffMode.INSERTED: "+ ",
}


def _combine(outer: DiffMode | None, inner: DiffMode | None) -> DiffMode | None:
    """Merge an enclosing diff mode with a record's own mode.

    A removed mode nested in an inserted one (or the reverse) yields None,
    which renders with no marker at all.
    """
    if outer is None or inner is None:
        return None
    if outer in (DiffMode.UNKNOWN, DiffMode.IDENTICAL):
        if inner is DiffMode.UNKNOWN:
            return outer
        return inner
    if inner in (DiffMode.UNKNOWN, DiffMode.IDENTICAL) or inner is outer:
        return outer
    return None


def indent(level: int, diff: DiffMode | None) -> str:
    """Return the line prefix for a diff marker followed by *level* tabs."""
    marker = _MARKERS.get(diff, "") if diff is not None else ""
    return marker + "\t" * level


def _blen(s: str) -> int:
    return len(s.encode("utf-8", errors="surrogatepass"))


@dataclass
class DiffStats:
    """Counts of coalesced records of one kind."""

    name: str = ""
    num_ignored: int = 0
    num_identical: int = 0
    num_removed: int = 0
    num_inserted: int = 0
    num_modified: int = 0

    def is_zero(self) -> bool:
        """Report whether every count is zero, regardless of the name."""
        return not any(
            (
                self.num_ignored,
                self.num_identical,
                self.num_removed,
                self.num_inserted,
                self.num_modified,
            )
        )

    def num_diff(self) -> int:
        """Number of records that differ."""
        return self.num_removed + self.num_inserted + self.num_modified

    def append(self, other: DiffStats) -> DiffStats:
        """Return a new summary holding the sum of both summaries."""
        if self.name != other.name:
            raise ValueError(
                f"cannot merge statistics for {self.name!r} and {other.name!r}"
            )
        return DiffStats(
            name=self.name,
            num_ignored=self.num_ignored + other.num_ignored,
            num_identical=self.num_identical + other.num_identical,
            num_removed=self.num_removed + other.num_removed,
            num_inserted=self.num_inserted + other.num_inserted,
            num_modified=self.num_modified + other.num_modified,
        )

    def __str__(self) -> str:
        labels = ("ignored", "identical", "removed", "inserted", "modified")
        counts = (
            self.num_ignored,
            self.num_identical,
            self.num_removed,
            self.num_inserted,
            self.num_modified,
        )
        parts = [f"{n} {label}" for label, n in zip(labels, counts) if n > 0]
        total = sum(counts)

        name = self.name
        if total > 1:
            name += "s"
            if name.endswith("ys"):
                name = name[:-2] + "ies"

        if not parts:
            return ""
        if len(parts) <= 2:
            return " and ".join(parts) + " " + name
        return ", ".join(parts[:-1]) + ", and " + parts[-1] + " " + name


class TextNode(abc.ABC):
    """A node of structured text: a TextWrap, TextList or TextLine."""

    @abc.abstractmethod
    def width(self) -> int:
        """Length in bytes of a single-line rendering of the tree."""

    @abc.abstractmethod
    def equal(self, other: TextNode) -> bool:
        """Report whether two trees are structurally identical."""

    @abc.abstractmethod
    def render(self) -> str:
        """Return the textual representation of the tree."""

    @abc.abstractmethod
    def _compact(self, mode: DiffMode | None) -> tuple[str, TextNode]:
        """Return the single-line text and the node with collapsible parts collapsed."""

    @abc.abstractmethod
    def _expand(self, mode: DiffMode | None, level: int) -> str:
        """Return the multi-line text; requires a prior _compact pass."""


@dataclass(frozen=True)
class TextLine(TextNode):
    """A single line of text; always a leaf."""

    text: str

    def width(self) -> int:
        return _blen(self.text)

    def equal(self, other: TextNode) -> bool:
        return isinstance(other, TextLine) and self.text == other.text

    def render(self) -> str:
        return self.text

    def _compact(self, mode: DiffMode | None) -> tuple[str, TextNode]:
        return self.text, self

    def _expand(self, mode: DiffMode | None, level: int) -> str:
        return self.text


TEXT_NIL = TextLine("nil")
TEXT_ELLIPSIS = TextLine("...")


@dataclass(eq=False)
class TextWrap(TextNode):
    """A node surrounded by a prefix and a suffix, with optional metadata."""

    prefix: str
    value: TextNode
    suffix: str = ""
    metadata: object = None

    def width(self) -> int:
        return _blen(self.prefix) + self.value.width() + _blen(self.suffix)

    def equal(self, other: TextNode) -> bool:
        return (
            isinstance(other, TextWrap)
            and self.prefix == other.prefix
            and self.value.equal(other.value)
            and self.suffix == other.suffix
        )

    def render(self) -> str:
        mode = DiffMode.UNKNOWN
        _, node = self._compact(mode)
        return indent(0, mode) + node._expand(mode, 0) + "\n"

    def _compact(self, mode: DiffMode | None) -> tuple[str, TextNode]:
        inner, self.value = self.value._compact(mode)
        text = self.prefix + inner + self.suffix
        if isinstance(self.value, TextLine):
            return text, TextLine(text)
        return text, self

    def _expand(self, mode: DiffMode | None, level: int) -> str:
        return self.prefix + self.value._expand(mode, level) + self.suffix


@dataclass
class TextRecord:
    """One entry of a TextList."""

    value: TextNode
    key: str = ""
    diff: DiffMode = DiffMode.UNKNOWN
    elide_comma: bool = False
    comment: str | DiffStats | None = None


class TextList(list, TextNode):
    """A comma-separated sequence of records, rendered on one or many lines."""

    def append_ellipsis(self, stats: DiffStats) -> None:
        """Append an ellipsis unless one ends the list; merge non-zero stats into it."""
        has_stats = not stats.is_zero()
        if not self or not self[-1].value.equal(TEXT_ELLIPSIS):
            self.append(
                TextRecord(
                    value=TEXT_ELLIPSIS,
                    elide_comma=True,
                    comment=stats if has_stats else None,
                )
            )
            return
        if has_stats:
            last = self[-1]
            if not isinstance(last.comment, DiffStats):
                raise TypeError("trailing ellipsis carries no statistics to merge into")
            last.comment = last.comment.append(stats)

    def width(self) -> int:
        total = 0
        for pos, record in enumerate(self):
            total += _blen(record.key)
            if record.key:
                total += len(": ")
            total += record.value.width()
            if pos < len(self) - 1:
                total += len(", ")
        return total

    def equal(self, other: TextNode) -> bool:
        if not isinstance(other, TextList) or len(self) != len(other):
            return False
        return all(
            a.diff == b.diff
            and a.key == b.key
            and a.value.equal(b.value)
            and a.comment == b.comment
            for a, b in zip(self, other)
        )

    def render(self) -> str:
        return TextWrap("{", self, "}").render()

    def _compact(self, mode: DiffMode | None) -> tuple[str, TextNode]:
        records = [replace(r) for r in self]
        multi_line = False
        parts = []
        for record in records:
            if record.diff in (DiffMode.INSERTED, DiffMode.REMOVED):
                multi_line = True
            text, record.value = record.value._compact(_combine(mode, record.diff))
            if not isinstance(record.value, TextLine):
                multi_line = True
            if record.comment is not None:
                multi_line = True
            parts.append(f"{record.key}: {text}" if record.key else text)
        text = ", ".join(parts)
        if mode in (DiffMode.INSERTED, DiffMode.REMOVED) and _blen(text) > MAX_COLUMN_LENGTH:
            multi_line = True
        if not multi_line:
            return text, TextLine(text)
        return text, TextList(records)

    def _expand(self, mode: DiffMode | None, level: int) -> str:
        key_pad = _align_lens(
            self,
            lambda r: r.key == "" or not isinstance(r.value, TextLine),
            lambda r: len(r.key),
        )
        value_pad = _align_lens(
            self,
            lambda r: (
                not isinstance(r.value, TextLine)
                or r.value.equal(TEXT_ELLIPSIS)
                or r.comment is None
            ),
            lambda r: len(r.value.text),
        )

        is_simple = bool(self) and all(
            r.diff is DiffMode.UNKNOWN
            and r.key == ""
            and isinstance(r.value, TextLine)
            and r.comment is None
            for r in self
        )
        out = []
        if is_simple:
            inner = level + 1
            batch = ""
            for record in self:
                line = record.value.text
                if _blen(batch) + _blen(line) + len(", ") > MAX_COLUMN_LENGTH and batch:
                    out.append("\n" + indent(inner, mode) + batch.rstrip(" "))
                    batch = ""
                batch += line + ", "
            if batch:
                out.append("\n" + indent(inner, mode) + batch.rstrip(" "))
            out.append("\n" + indent(level, mode))
            return "".join(out)

        inner = level + 1
        for record, kpad, vpad in zip(self, key_pad, value_pad):
            rmode = _combine(mode, record.diff)
            out.append("\n" + indent(inner, rmode))
            if record.key:
                out.append(record.key + ": ")
            out.append(" " * kpad)
            out.append(record.value._expand(rmode, inner))
            if not record.elide_comma:
                out.append(",")
            out.append(" " * vpad)
            if record.comment is not None:
                out.append(" // " + str(record.comment))
        out.append("\n" + indent(level, mode))
        return "".join(out)


def _align_lens(records, skip, length) -> list[int]:
    """Compute padding that aligns runs of consecutive non-skipped records."""
    pads = [0] * len(records)
    start = end = longest = 0

    def flush() -> None:
        for j in range(start, end):
            pads[j] = longest - length(records[j])

    for pos, record in enumerate(records):
        if skip(record):
            flush()
            start = end = pos + 1
            longest = 0
        else:
            longest = max(longest, length(record))
            end = pos + 1
    flush()
    return pads