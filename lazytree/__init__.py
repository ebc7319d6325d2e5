"""Public package surface for lazytree.

An editable tree of named nodes with lazily loaded children. Structural
edits are pure forest transformations; ``TreeSession`` holds the state.
"""

from __future__ import annotations

from .errors import ChildFetchError, CommandError, LazyTreeError
from .identity import IdGenerator
from .loading import LatencyPolicy, LazyChildCache, LoadCoordinator, LoadState
from .session import TreeSession
from .tree_model import (
    Forest,
    Node,
    RemoveResult,
    contains,
    insert_at,
    locate,
    move_node,
    remove_by_id,
    update_by_id,
)


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "Node",
    "Forest",
    "RemoveResult",
    "locate",
    "contains",
    "update_by_id",
    "remove_by_id",
    "insert_at",
    "move_node",
    "IdGenerator",
    "LatencyPolicy",
    "LazyChildCache",
    "LoadCoordinator",
    "LoadState",
    "TreeSession",
    "LazyTreeError",
    "ChildFetchError",
    "CommandError",
    "main",
]
