"""Pure structural operations over a forest of ``Node`` values.

Every operation returns a new forest and never mutates its input. Subtrees
that are not on the path to a changed node keep their identity, and an
operation that changes nothing returns the input forest itself, so callers
can detect no-ops with ``is``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, replace

from .types import Forest, Node


def iter_nodes(forest: Forest) -> Iterator[Node]:
    """Yield every node of ``forest`` in depth-first pre-order."""
    stack = list(reversed(forest))
    while stack:
        node = stack.pop()
        yield node
        if node.children:
            stack.extend(reversed(node.children))


def node_ids(forest: Forest) -> list[str]:
    """Return all node ids in pre-order (duplicates included)."""
    return [node.id for node in iter_nodes(forest)]


def locate(forest: Forest, node_id: str) -> Node | None:
    """Return the first node with ``node_id`` in pre-order, or ``None``."""
    for node in iter_nodes(forest):
        if node.id == node_id:
            return node
    return None


def contains(node: Node, node_id: str) -> bool:
    """Return whether ``node_id`` is ``node`` itself or anywhere below it."""
    if node.id == node_id:
        return True
    if not node.children:
        return False
    return any(contains(child, node_id) for child in node.children)


def find_parent_position(forest: Forest, node_id: str) -> tuple[str | None, int] | None:
    """Return ``(parent_id, index)`` for ``node_id``; ``parent_id`` is ``None`` for roots."""

    def search(nodes: Forest, parent_id: str | None) -> tuple[str | None, int] | None:
        for index, node in enumerate(nodes):
            if node.id == node_id:
                return parent_id, index
            if node.children:
                found = search(node.children, node.id)
                if found is not None:
                    return found
        return None

    return search(forest, None)


def _update_nodes(
    nodes: Forest,
    node_id: str,
    transform: Callable[[Node], Node],
) -> tuple[Forest, bool]:
    """Rebuild ``nodes`` along the path to ``node_id``; report whether anything changed."""
    rebuilt: list[Node] = []
    changed = False
    for node in nodes:
        if node.id == node_id:
            updated = transform(node)
            changed = changed or updated is not node
            rebuilt.append(updated)
            continue
        if node.children:
            children, child_changed = _update_nodes(node.children, node_id, transform)
            if child_changed:
                rebuilt.append(replace(node, children=children))
                changed = True
                continue
        rebuilt.append(node)
    if not changed:
        return nodes, False
    return tuple(rebuilt), True


def update_by_id(
    forest: Forest,
    node_id: str,
    transform: Callable[[Node], Node],
) -> Forest:
    """Replace the node with ``node_id`` by ``transform(node)``.

    Returns ``forest`` itself when no node matches or the transform returns
    the node unchanged.
    """
    updated, _changed = _update_nodes(forest, node_id, transform)
    return updated


@dataclass(frozen=True)
class RemoveResult:
    """Forest after a removal plus the detached subtree, if one was found."""

    forest: Forest
    removed: Node | None = None


def _remove_nodes(nodes: Forest, node_id: str) -> tuple[Forest, Node | None]:
    for index, node in enumerate(nodes):
        if node.id == node_id:
            return nodes[:index] + nodes[index + 1 :], node
        if not node.children:
            continue
        children, removed = _remove_nodes(node.children, node_id)
        if removed is None:
            continue
        parent = replace(node, children=children, has_children=len(children) > 0)
        return nodes[:index] + (parent,) + nodes[index + 1 :], removed
    return nodes, None


def remove_by_id(forest: Forest, node_id: str) -> RemoveResult:
    """Detach the node with ``node_id`` together with its whole subtree.

    The parent that lost the child gets ``has_children`` recomputed from its
    remaining children. Unknown ids return the input forest unchanged.
    """
    remaining, removed = _remove_nodes(forest, node_id)
    return RemoveResult(forest=remaining, removed=removed)


def _splice(nodes: Forest, index: int, node: Node) -> Forest:
    position = max(0, min(index, len(nodes)))
    return nodes[:position] + (node,) + nodes[position:]


def insert_at(forest: Forest, parent_id: str | None, index: int, node: Node) -> Forest:
    """Insert ``node`` at ``index`` under ``parent_id`` (``None`` means root level).

    ``index`` is clamped into ``[0, len(siblings)]``. The receiving parent is
    always marked ``has_children=True``. A missing parent leaves the forest
    unchanged.
    """
    if parent_id is None:
        return _splice(forest, index, node)

    def attach(parent: Node) -> Node:
        return replace(
            parent,
            children=_splice(parent.children or (), index, node),
            has_children=True,
        )

    return update_by_id(forest, parent_id, attach)


__all__ = [
    "RemoveResult",
    "iter_nodes",
    "node_ids",
    "locate",
    "contains",
    "find_parent_position",
    "update_by_id",
    "remove_by_id",
    "insert_at",
]
