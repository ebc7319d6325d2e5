"""Process-unique id minting for newly created nodes."""

from __future__ import annotations

import re

from .tree_model import Forest, iter_nodes

DEFAULT_PREFIX = "node-"
DEFAULT_FLOOR = 100


class IdGenerator:
    """Monotonic ``<prefix><n>`` id source; ids are never reused.

    Not thread-safe; each session owns its own generator.
    """

    def __init__(self, start: int = DEFAULT_FLOOR, prefix: str = DEFAULT_PREFIX) -> None:
        self._counter = start
        self._prefix = prefix

    @classmethod
    def for_forest(
        cls,
        forest: Forest,
        floor: int = DEFAULT_FLOOR,
        prefix: str = DEFAULT_PREFIX,
    ) -> "IdGenerator":
        """Seed a generator above every ``<prefix><n>`` id already in ``forest``."""
        pattern = re.compile(rf"{re.escape(prefix)}(\d+)")
        highest = floor
        for node in iter_nodes(forest):
            match = pattern.fullmatch(node.id)
            if match is not None:
                highest = max(highest, int(match.group(1)))
        return cls(start=highest, prefix=prefix)

    @property
    def last_issued(self) -> int:
        return self._counter

    def next(self) -> str:
        self._counter += 1
        return f"{self._prefix}{self._counter}"


__all__ = [
    "IdGenerator",
    "DEFAULT_PREFIX",
    "DEFAULT_FLOOR",
]
