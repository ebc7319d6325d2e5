"""Long-lived editing session over one forest.

``TreeSession`` owns the forest value, the expanded-id set, the id generator
and the lazy-loading state, and applies caller intents (expand, rename, add,
remove, move) as pure forest transformations. Each mutating intent replaces
``session.forest`` with a new value; unchanged intents leave the same object
in place.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable
from dataclasses import replace

from .identity import IdGenerator
from .loading import FetchChildren, LatencyPolicy, LazyChildCache, LoadCoordinator, LoadingListener, Sleeper
from .tree_model import Forest, Node, insert_at, iter_nodes, locate, move_node, remove_by_id, update_by_id

logger = logging.getLogger(__name__)


def _no_children(_node_id: str) -> tuple[Node, ...]:
    return ()


class TreeSession:
    """Editing state for one forest: expansion, lazy loading and structural intents."""

    def __init__(
        self,
        forest: Iterable[Node] = (),
        fetch_children: FetchChildren | None = None,
        *,
        id_generator: IdGenerator | None = None,
        cache: LazyChildCache | None = None,
        policy: LatencyPolicy | None = None,
        sleep: Sleeper | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._forest: Forest = tuple(forest)
        self._expanded: set[str] = set()
        self.id_generator = id_generator if id_generator is not None else IdGenerator.for_forest(self._forest)
        self.loader = LoadCoordinator(
            fetch_children if fetch_children is not None else _no_children,
            cache=cache,
            policy=policy,
            sleep=sleep,
            rng=rng,
        )

    @property
    def forest(self) -> Forest:
        return self._forest

    @property
    def expanded_ids(self) -> frozenset[str]:
        return frozenset(self._expanded)

    def is_expanded(self, node_id: str) -> bool:
        return node_id in self._expanded

    def is_loading(self, node_id: str) -> bool:
        return self.loader.is_loading(node_id)

    def subscribe_loading(self, listener: LoadingListener) -> Callable[[], None]:
        return self.loader.subscribe(listener)

    def _commit(self, forest: Forest) -> bool:
        if forest is self._forest:
            return False
        self._forest = forest
        return True

    def _attach_children(self, node_id: str, children: tuple[Node, ...]) -> None:
        # Applied to the forest current at settle time; a node removed while
        # its fetch was in flight makes this a no-op.
        self._commit(
            update_by_id(
                self._forest,
                node_id,
                lambda node: replace(node, children=children, has_children=len(children) > 0),
            )
        )

    async def expand(self, node_id: str) -> None:
        """Mark ``node_id`` expanded and load its children when they are not materialized.

        Leaves and unknown ids are ignored.

        Raises ``ChildFetchError`` when the fetch collaborator fails.
        """
        node = locate(self._forest, node_id)
        if node is None or not node.is_expandable:
            return
        self._expanded.add(node_id)
        if node.needs_load:
            await self.loader.load(node_id, lambda children: self._attach_children(node_id, children))

    def collapse(self, node_id: str) -> None:
        self._expanded.discard(node_id)

    async def toggle(self, node_id: str) -> None:
        if node_id in self._expanded:
            self.collapse(node_id)
            return
        await self.expand(node_id)

    def rename(self, node_id: str, new_name: str) -> bool:
        """Rename ``node_id``; blank names and unknown ids are ignored."""
        value = new_name.strip()
        if not value:
            logger.debug("rename of %s ignored: blank name", node_id)
            return False
        return self._commit(
            update_by_id(
                self._forest,
                node_id,
                lambda node: node if node.name == value else replace(node, name=value),
            )
        )

    def add_child(self, parent_id: str, name: str) -> Node | None:
        """Append a new child named ``name`` to ``parent_id`` and expand the parent."""
        value = name.strip()
        if not value:
            logger.debug("add under %s ignored: blank name", parent_id)
            return None
        parent = locate(self._forest, parent_id)
        if parent is None:
            return None
        child = Node(id=self.id_generator.next(), name=value)
        self._commit(insert_at(self._forest, parent_id, len(parent.children or ()), child))
        self._expanded.add(parent_id)
        return child

    def remove(self, node_id: str) -> Node | None:
        """Detach ``node_id`` and its subtree; returns the removed subtree."""
        result = remove_by_id(self._forest, node_id)
        if result.removed is None:
            return None
        self._commit(result.forest)
        self._expanded.difference_update(node.id for node in iter_nodes((result.removed,)))
        return result.removed

    def move(self, node_id: str, new_parent_id: str | None, index: int) -> bool:
        """Relocate ``node_id`` under ``new_parent_id`` at ``index`` and expand the new parent."""
        moved = self._commit(move_node(self._forest, node_id, new_parent_id, index))
        if moved and new_parent_id is not None:
            self._expanded.add(new_parent_id)
        return moved


__all__ = ["TreeSession"]
