# cmpreport

Building blocks for human-readable difference reports. The package provides
a text tree that lays itself out on one line or across several, summaries of
grouped edits, literal formatting for strings and integers, a tree that
records where two compared values agree or differ, and pointer-reference
tracking for labelling cyclic data.

## Install

    pip install .

For running the tests:

    pip install ".[test]"
    pytest

## Modules

### `cmpreport.textnode`

- `DiffMode` — `UNKNOWN`, `IDENTICAL`, `REMOVED` (`-`) and `INSERTED` (`+`).
- `TextLine`, `TextWrap`, `TextList` and `TextRecord` form a text tree.
  `TextWrap` adds a prefix, a suffix and optional metadata around a node.
  `TextList` is a list of `TextRecord`s, each with a value and optionally
  a key, a diff mode, a comment and `elide_comma`.
- Every node has `width()` (length in bytes of its one-line form),
  `equal(other)` (structural comparison) and `render()`. Rendering collapses a
  list onto one line when nothing in it forces more. Removed or inserted
  records, nested lists and comments do force it, as does a removed or
  inserted list longer than 80 columns. Otherwise the list is expanded one
  record per line, with `-`/`+` markers, tab indentation and aligned keys and
  comments. Lists of plain values are packed several to a line.
- `DiffStats` counts ignored, identical, removed, inserted and modified
  records of one name. It provides `is_zero()`, `num_diff()` and `append(other)`.
  `append` raises `ValueError` when the names differ. Its `str()` is an
  English summary, e.g. `"2 identical and 1 removed fields"`.
- `TextList.append_ellipsis(stats)` appends a `...` record unless the list
  already ends with one, merging non-zero statistics into its comment.
- `indent(level, diff)` returns the marker and tab prefix of a line.

### `cmpreport.edits`

- `EditType` — `IDENTITY`, `UNIQUE_X`, `UNIQUE_Y`, `MODIFIED`.
- `coalesce_adjacent_edits(name, edits)` groups an edit script into
  alternating `DiffStats` runs of equal and unequal edits.
- `coalesce_intervening_identical(groups, window_size)` folds an equal run
  of at most `window_size` items into its unequal neighbours when, between
  them, they both remove and insert.
- `format_ascii(data)` shows printable ASCII bytes as themselves and every
  other byte as `.`.

### `cmpreport.literals`

- `format_hex(value)` formats an unsigned 64-bit integer as `0x..`,
  zero-padded to whole bytes. Out-of-range values raise `ValueError`.
- `quote_string(s)` returns a double-quoted literal with escapes.
- `format_string(s)` uses the double-quoted form when it needs no escapes.
  Otherwise it uses a backtick-quoted raw form if the text is printable and
  has no newline or backtick, and falls back to the escaped double-quoted form.

### `cmpreport.valuenode`

- `ValueNode` records the comparison of two value trees.
  `push_record(key, type_name, value_x, value_y)` adds a field, element
  (key `None`) or entry child. `push_value(...)` adds the single child of an
  indirection or a named transformation. `report(equal, ignored, by_method,
  by_func)` records a leaf result. `pop_step()` rolls the child's counts
  (same, diff, ignored, compared, transformed, children, depth) into its
  parent. Misuse raises `ValueError`.
- `ABSENT` marks a side that has no value.

### `cmpreport.references`

- `PointerReferences` is a stack of visited pointers: `push_pair(px, py,
  mode)`, `push(p)` (returns the pointer and whether it was already seen),
  and `pop()`.
- `wrap_trunk_references`, `wrap_trunk_reference` and `make_leaf_reference`
  attach `TrunkReferences`, `TrunkReference` and `LeafReference` metadata to
  text nodes.
- `resolve_references(node)` gives every trunk that a leaf points back to a
  `⟪ref#N⟫` label, and labels the leaves to match. Pointers that always
  occur as the same pair share one label.
- `format_pointer`, `format_reference`, `update_reference_prefix` and
  `wrap_parens` are the formatting helpers these use.

## Example

```python
from cmpreport.textnode import DiffMode, TextLine, TextList, TextRecord, TextWrap

body = TextList([
    TextRecord(key="Name", value=TextLine('"alice"')),
    TextRecord(diff=DiffMode.REMOVED, key="Age", value=TextLine("30")),
    TextRecord(diff=DiffMode.INSERTED, key="Age", value=TextLine("31")),
])
print(TextWrap(prefix="User{", value=body, suffix="}").render())
```

## What it does not do

The package does not compare two objects by itself. It has no walker that
visits values, no option system, and no single call that turns two values
into a finished report. The caller builds the `ValueNode` tree and the text
tree from these pieces. There is no command-line tool.

The layout of a rendered report is meant for people. It may change between
releases, so do not parse it.