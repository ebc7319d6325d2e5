"""Relocation of a subtree to a new parent and position."""

from __future__ import annotations

import logging

from .algebra import contains, insert_at, locate, remove_by_id
from .types import Forest

logger = logging.getLogger(__name__)


def move_node(forest: Forest, node_id: str, new_parent_id: str | None, index: int) -> Forest:
    """Move ``node_id`` with its subtree under ``new_parent_id`` at ``index``.

    ``index`` is read against the sibling list after the node has been
    detached. Unknown nodes and moves into the node's own subtree return
    ``forest`` unchanged, as do moves to a parent that is not in the forest.
    """
    dragged = locate(forest, node_id)
    if dragged is None:
        logger.debug("move ignored: node %s not found", node_id)
        return forest

    if new_parent_id is not None:
        if contains(dragged, new_parent_id):
            logger.debug("move ignored: %s is inside the subtree of %s", new_parent_id, node_id)
            return forest
        if locate(forest, new_parent_id) is None:
            logger.debug("move ignored: target parent %s not found", new_parent_id)
            return forest

    result = remove_by_id(forest, node_id)
    if result.removed is None:
        return forest
    return insert_at(result.forest, new_parent_id, index, result.removed)


__all__ = ["move_node"]
