"""Immutable tree model: node types, structural algebra and moves.

All operations are pure functions over ``Forest`` values.
"""

from __future__ import annotations

from .algebra import (
    RemoveResult,
    contains,
    find_parent_position,
    insert_at,
    iter_nodes,
    locate,
    node_ids,
    remove_by_id,
    update_by_id,
)
from .move import move_node
from .types import Forest, Node

__all__ = [
    "Node",
    "Forest",
    "RemoveResult",
    "iter_nodes",
    "node_ids",
    "locate",
    "contains",
    "find_parent_position",
    "update_by_id",
    "remove_by_id",
    "insert_at",
    "move_node",
]
