import pytest

from cmpreport.references import (
    LeafReference,
    PointerReferences,
    TrunkReference,
    TrunkReferences,
    format_pointer,
    format_reference,
    make_leaf_reference,
    resolve_references,
    update_reference_prefix,
    wrap_parens,
    wrap_trunk_reference,
    wrap_trunk_references,
)
from cmpreport.textnode import TEXT_ELLIPSIS, DiffMode, TextLine, TextList, TextRecord, TextWrap


def test_format_pointer_with_and_without_delims():
    assert format_pointer(0xDEADF00F, True) == "⟪0xdeadf00f⟫"
    assert format_pointer(0xDEADF00F, False) == "0xdeadf00f"


def test_format_reference():
    assert format_reference(0) == "ref#0"
    assert format_reference(12) == "ref#12"


def test_update_reference_prefix():
    assert update_reference_prefix("", "ref#0") == "⟪ref#0⟫"
    assert update_reference_prefix("⟪0xdeadf00f⟫", "ref#1") == "⟪ref#1: 0xdeadf00f⟫"


def test_push_detects_revisit():
    refs = PointerReferences()
    assert refs.push(5) == (5, False)
    assert refs.push(5) == (5, True)
    assert len(refs) == 1


def test_push_pair_respects_mode():
    refs = PointerReferences()
    assert refs.push_pair(1, 2, DiffMode.UNKNOWN) == (1, 2)
    assert refs.push_pair(1, 2, DiffMode.REMOVED) == (1, None)
    assert refs.push_pair(1, 2, DiffMode.INSERTED) == (None, 2)
    assert list(refs) == [(1, 2), (1, None), (None, 2)]
    assert refs.push(2) == (2, True)


def test_pop_and_empty_pop():
    refs = PointerReferences()
    refs.push(3)
    refs.pop()
    assert len(refs) == 0
    assert refs.push(3) == (3, False)
    refs.pop()
    with pytest.raises(IndexError):
        refs.pop()


def test_wrap_trunk_references_metadata():
    node = TextLine("x")
    assert wrap_trunk_references((None, 4), node).metadata == TrunkReference(4)
    assert wrap_trunk_references((4, None), node).metadata == TrunkReference(4)
    assert wrap_trunk_references((4, 4), node).metadata == TrunkReference(4)
    assert wrap_trunk_references((4, 5), node).metadata == TrunkReferences((4, 5))


def test_make_leaf_reference_shape():
    leaf = make_leaf_reference(9, False)
    assert leaf.metadata == LeafReference(9)
    assert leaf.prefix == ""
    assert leaf.value.equal(TextWrap("(", TEXT_ELLIPSIS, ")"))
    assert make_leaf_reference(0xDEADF00F, True).prefix == "⟪0xdeadf00f⟫"


def test_resolve_single_cycle():
    leaf = make_leaf_reference(7, False)
    trunk = wrap_trunk_reference(7, False, TextWrap("{", TextList([TextRecord(value=leaf)]), "}"))
    resolve_references(trunk)
    assert trunk.prefix == "⟪ref#0⟫"
    assert leaf.prefix == trunk.prefix


def test_resolve_without_leaves_leaves_prefixes():
    trunk = wrap_trunk_reference(7, False, TextLine("x"))
    resolve_references(trunk)
    assert trunk.prefix == ""


def test_resolve_pair_shares_id():
    leaf_a = make_leaf_reference(1, False)
    leaf_b = make_leaf_reference(2, False)
    body = TextList([TextRecord(value=leaf_a), TextRecord(value=leaf_b)])
    trunk = wrap_trunk_references((1, 2), TextWrap("{", body, "}"))
    resolve_references(trunk)
    assert trunk.prefix == "⟪ref#0⟫"
    assert leaf_a.prefix == leaf_b.prefix == trunk.prefix


def test_resolve_broken_pair_gets_two_ids():
    leaf_a = make_leaf_reference(1, False)
    leaf_b = make_leaf_reference(2, False)
    standalone = wrap_trunk_reference(1, False, TextLine("y"))
    body = TextList(
        [TextRecord(value=leaf_a), TextRecord(value=leaf_b), TextRecord(value=standalone)]
    )
    trunk = wrap_trunk_references((1, 2), TextWrap("{", body, "}"))
    resolve_references(trunk)
    assert trunk.prefix == "⟪ref#0,ref#1⟫"
    assert standalone.prefix == leaf_a.prefix
    assert leaf_a.prefix != leaf_b.prefix


def test_wrap_parens_plain_line():
    node = TextLine("5")
    wrapped = wrap_parens(node)
    assert wrapped.equal(TextWrap("(", node, ")"))


def test_wrap_parens_keeps_braces():
    node = TextWrap("{", TextLine("a"), "}")
    assert wrap_parens(node) is node
    assert node.prefix == "{"


def test_wrap_parens_through_reference():
    inner = TextLine("5")
    ref = wrap_trunk_reference(3, False, inner)
    out = wrap_parens(ref)
    assert out is ref
    assert ref.value.equal(TextWrap("(", inner, ")"))


def test_wrap_parens_reference_to_delimited_value():
    inner = TextWrap("(", TextLine("z"), ")")
    ref = wrap_trunk_reference(3, False, inner)
    assert wrap_parens(ref) is ref
    assert ref.value is inner