"""Tracking of visited pointers and resolution of cyclic references in reports."""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from dataclasses import dataclass

from cmpreport.literals import format_hex
from cmpreport.textnode import (
    TEXT_ELLIPSIS,
    DiffMode,
    TextList,
    TextNode,
    TextWrap,
)

POINTER_DELIM_PREFIX = "⟪"
POINTER_DELIM_SUFFIX = "⟫"

Pointer = Hashable
PointerPair = tuple


def format_pointer(p, with_delims: bool) -> str:
    """Format a pointer address, optionally within reference delimiters."""
    text = format_hex(0 if p is None else int(p))
    if with_delims:
        return POINTER_DELIM_PREFIX + text + POINTER_DELIM_SUFFIX
    return text


class PointerReferences:
    """A stack of pointer pairs visited so far; None stands for a nil pointer."""

    def __init__(self) -> None:
        self._stack: list[tuple] = []

    def __len__(self) -> int:
        return len(self._stack)

    def __iter__(self) -> Iterator[tuple]:
        return iter(self._stack)

    def push_pair(self, px, py, mode: DiffMode) -> tuple:
        """Push the pointers of both sides, keeping only those the mode shows."""
        if mode in (DiffMode.UNKNOWN, DiffMode.IDENTICAL):
            pair = (px, py)
        elif mode is DiffMode.REMOVED:
            pair = (px, None)
        elif mode is DiffMode.INSERTED:
            pair = (None, py)
        else:
            raise ValueError(f"invalid diff mode: {mode!r}")
        self._stack.append(pair)
        return pair

    def push(self, p) -> tuple:
        """Push a single pointer; return it and whether it was already on the stack."""
        if any(p == a or p == b for a, b in self._stack):
            return p, True
        self._stack.append((p, p))
        return p, False

    def pop(self) -> None:
        """Remove the most recently pushed entry."""
        if not self._stack:
            raise IndexError("pop from empty pointer stack")
        self._stack.pop()


@dataclass(frozen=True)
class TrunkReference:
    """Marks a sub-tree as the value referred to by a single pointer."""

    p: object


@dataclass(frozen=True)
class TrunkReferences:
    """Marks a sub-tree as the value referred to by either pointer of a pair."""

    pair: tuple


@dataclass(frozen=True)
class LeafReference:
    """Marks a truncated value that refers to another part of the tree."""

    p: object


def wrap_trunk_references(pair: tuple, node: TextNode) -> TextWrap:
    """Wrap a node with trunk metadata for a pair of pointers."""
    p0, p1 = pair
    if p0 is None:
        meta: object = TrunkReference(p1)
    elif p1 is None:
        meta = TrunkReference(p0)
    elif p0 == p1:
        meta = TrunkReference(p0)
    else:
        meta = TrunkReferences((p0, p1))
    return TextWrap("", node, "", meta)


def wrap_trunk_reference(p, print_address: bool, node: TextNode) -> TextWrap:
    """Wrap a node with trunk metadata for a single pointer."""
    prefix = format_pointer(p, True) if print_address else ""
    return TextWrap(prefix, node, "", TrunkReference(p))


def make_leaf_reference(p, print_address: bool) -> TextWrap:
    """Build a truncated node that refers back to the pointer's trunk."""
    inner = TextWrap("(", TEXT_ELLIPSIS, ")")
    prefix = format_pointer(p, True) if print_address else ""
    return TextWrap(prefix, inner, "", LeafReference(p))


def _walk(node: TextNode) -> Iterator[TextNode]:
    yield node
    if isinstance(node, TextWrap):
        yield from _walk(node.value)
    elif isinstance(node, TextList):
        for record in node:
            yield from _walk(record.value)


def resolve_references(node: TextNode) -> None:
    """Label each referenced trunk and its leaves with a shared reference ID."""
    trunks: list[TextWrap] = []
    leaves: list[TextWrap] = []
    for n in _walk(node):
        if not isinstance(n, TextWrap):
            continue
        if isinstance(n.metadata, LeafReference):
            leaves.append(n)
        elif isinstance(n.metadata, (TrunkReference, TrunkReferences)):
            trunks.append(n)

    if not leaves:
        return

    leaf_ptrs = {leaf.metadata.p for leaf in leaves}

    # Pointers that always occur together as the same pair share one ID.
    paired: dict = {}

    def unpair(p) -> None:
        other = paired.get(p)
        if other is not None:
            paired[other] = None
        paired[p] = None

    for trunk in trunks:
        meta = trunk.metadata
        if isinstance(meta, TrunkReference):
            unpair(meta.p)
            continue
        a, b = meta.pair
        ok0, ok1 = a in paired, b in paired
        if not ok0 and not ok1:
            paired[a] = b
            paired[b] = a
        elif ok0 and ok1 and paired[a] == b and paired[b] == a:
            pass
        else:
            unpair(a)
            unpair(b)

    ids: dict = {}
    next_id = 0

    def new_id() -> int:
        nonlocal next_id
        value = next_id
        next_id += 1
        return value

    for trunk in trunks:
        meta = trunk.metadata
        if isinstance(meta, TrunkReference):
            if meta.p in leaf_ptrs:
                if meta.p not in ids:
                    ids[meta.p] = new_id()
                trunk.prefix = update_reference_prefix(
                    trunk.prefix, format_reference(ids[meta.p])
                )
            continue

        a, b = meta.pair
        print0, print1 = a in leaf_ptrs, b in leaf_ptrs
        if not (print0 or print1):
            continue
        ok0, ok1 = a in ids, b in ids
        if paired.get(a) == b and paired.get(b) == a:
            if ok0 != ok1:
                raise RuntimeError("paired pointers must be labelled together")
            if ok0:
                if ids[a] != ids[b]:
                    raise RuntimeError("paired pointers must share one ID")
                ref_id = ids[a]
            else:
                ref_id = new_id()
                ids[a] = ids[b] = ref_id
            trunk.prefix = update_reference_prefix(trunk.prefix, format_reference(ref_id))
            continue

        if print0 and not ok0:
            ids[a] = new_id()
        if print1 and not ok1:
            ids[b] = new_id()
        if print0 and print1:
            ref = format_reference(ids[a]) + "," + format_reference(ids[b])
        elif print0:
            ref = format_reference(ids[a])
        else:
            ref = format_reference(ids[b])
        trunk.prefix = update_reference_prefix(trunk.prefix, ref)

    for leaf in leaves:
        p = leaf.metadata.p
        if p in ids:
            leaf.prefix = update_reference_prefix(leaf.prefix, format_reference(ids[p]))


def format_reference(ref_id: int) -> str:
    """Format a reference identifier."""
    return f"ref#{ref_id}"


def update_reference_prefix(prefix: str, ref: str) -> str:
    """Insert a reference label into a node prefix, before any address."""
    if prefix == "":
        return POINTER_DELIM_PREFIX + ref + POINTER_DELIM_SUFFIX
    rest = prefix[len(POINTER_DELIM_PREFIX):] if prefix.startswith(POINTER_DELIM_PREFIX) else prefix
    return POINTER_DELIM_PREFIX + ref + ": " + rest


def wrap_parens(node: TextNode) -> TextNode:
    """Surround a node with parentheses unless it is already delimited.

    One level of reference wrapping is looked through.
    """
    ref_node: TextWrap | None = None
    if isinstance(node, TextWrap):
        inner = node
        if isinstance(node.metadata, (LeafReference, TrunkReference, TrunkReferences)):
            ref_node = node
            if isinstance(ref_node.value, TextWrap):
                inner = ref_node.value
        has_parens = inner.prefix.startswith("(") and inner.suffix.endswith(")")
        has_braces = inner.prefix.startswith("{") and inner.suffix.endswith("}")
        if has_parens or has_braces:
            return node
    if ref_node is not None:
        ref_node.value = TextWrap("(", ref_node.value, ")")
        return node
    return TextWrap("(", node, ")")