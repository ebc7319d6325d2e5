"""Node datatypes shared by the tree algebra and session modules."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Node:
    """One named tree node.

    ``children`` is ``None`` when the node's children are not materialized
    (either not loaded yet or a plain leaf); ``has_children`` tells the two
    apart. ``has_children=True`` marks a node whose children can be fetched.
    """

    id: str
    name: str
    children: tuple["Node", ...] | None = None
    has_children: bool | None = None

    def __post_init__(self) -> None:
        if self.children is not None and not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @property
    def is_expandable(self) -> bool:
        """Return whether the node shows an expand affordance."""
        return bool(self.children) or bool(self.has_children)

    @property
    def needs_load(self) -> bool:
        """Return whether expanding this node must fetch its children."""
        return bool(self.has_children) and self.children is None


Forest = tuple[Node, ...]


__all__ = [
    "Node",
    "Forest",
]
