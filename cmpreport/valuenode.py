"""Tree of compared values recording where the two sides agree or differ."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class _Absent:
    """Marker for a side of a comparison that has no value."""

    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


@dataclass
class ReportRecord:
    """A struct field, sequence element or mapping entry of a node.

    The key is None for sequence elements.
    """

    key: Any
    value: ValueNode


@dataclass(eq=False)
class ValueNode:
    """A single node of the report tree.

    Counts are accumulated from children when they are popped.
    """

    type_name: str = ""
    value_x: Any = ABSENT
    value_y: Any = ABSENT
    parent: ValueNode | None = field(default=None, repr=False)

    num_same: int = 0
    num_diff: int = 0
    num_ignored: int = 0
    num_compared: int = 0
    num_transformed: int = 0
    num_children: int = 0
    max_depth: int = 0

    records: list[ReportRecord] = field(default_factory=list)
    value: ValueNode | None = None
    transformer_name: str = ""

    def push_record(self, key, type_name, value_x, value_y) -> ValueNode:
        """Add a child for a field, element (key None) or entry and return it."""
        if self.value is not None:
            raise ValueError("node already holds a single child value")
        child = ValueNode(
            type_name=type_name, value_x=value_x, value_y=value_y, parent=self
        )
        self.records.append(ReportRecord(key=key, value=child))
        return child

    def push_value(self, type_name, value_x, value_y, transformer_name="") -> ValueNode:
        """Add the single child of an indirection, type assertion or
        transformation and return it."""
        if self.value is not None or self.records:
            raise ValueError("node already has children")
        child = ValueNode(
            type_name=type_name, value_x=value_x, value_y=value_y, parent=self
        )
        self.value = child
        if transformer_name:
            self.transformer_name = transformer_name
            self.num_transformed += 1
        return child

    def report(self, equal, ignored=False, by_method=False, by_func=False) -> None:
        """Record the result of comparing this leaf node."""
        if self.max_depth != 0:
            raise ValueError("results may only be reported on leaf nodes")
        if self.num_same + self.num_diff + self.num_ignored != 0:
            raise ValueError("a result was already reported for this node")
        compared = int(bool(by_method)) + int(bool(by_func))
        if self.num_compared + compared > 1:
            raise ValueError("a leaf may be compared by at most one method or function")

        if ignored:
            self.num_ignored += 1
        elif equal:
            self.num_same += 1
        else:
            self.num_diff += 1
        self.num_compared += compared

    def pop_step(self) -> ValueNode | None:
        """Fold this node's counts into its parent and return the parent."""
        parent = self.parent
        if parent is None:
            return None
        parent.num_same += self.num_same
        parent.num_diff += self.num_diff
        parent.num_ignored += self.num_ignored
        parent.num_compared += self.num_compared
        parent.num_transformed += self.num_transformed
        parent.num_children += self.num_children + 1
        parent.max_depth = max(parent.max_depth, self.max_depth + 1)
        return parent