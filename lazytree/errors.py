"""Exception types raised by lazytree."""

from __future__ import annotations


class LazyTreeError(Exception):
    """Base class for lazytree errors."""


class ChildFetchError(LazyTreeError):
    """The child fetch collaborator failed for ``node_id``; expanding again retries."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"failed to fetch children of {node_id!r}")
        self.node_id = node_id


class CommandError(LazyTreeError):
    """A CLI command line could not be parsed."""


__all__ = [
    "LazyTreeError",
    "ChildFetchError",
    "CommandError",
]
