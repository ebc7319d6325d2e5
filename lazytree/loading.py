"""Lazy child loading: an append-only child cache and a per-node load coordinator.

The coordinator runs on asyncio and guarantees at most one outstanding fetch
per node id. The duplicate check and the loading mark happen before the first
suspension point, so concurrent expand requests for the same id collapse into
one fetch.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import random
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from .errors import ChildFetchError
from .tree_model import Node

logger = logging.getLogger(__name__)

FetchChildren = Callable[[str], Sequence[Node] | Awaitable[Sequence[Node]]]
LoadingListener = Callable[[str, bool], None]
Sleeper = Callable[[float], Awaitable[object]]


class LoadState(str, Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"


@dataclass(frozen=True)
class LatencyPolicy:
    """Simulated backend latency applied before fetched children are attached.

    Cache hits wait ``cached_delay``; first fetches wait
    ``fetch_delay_min + random() * fetch_delay_spread`` seconds.
    """

    cached_delay: float = 0.4
    fetch_delay_min: float = 0.5
    fetch_delay_spread: float = 0.6

    def fetch_delay(self, rng: random.Random) -> float:
        return self.fetch_delay_min + rng.random() * self.fetch_delay_spread


NO_DELAY = LatencyPolicy(cached_delay=0.0, fetch_delay_min=0.0, fetch_delay_spread=0.0)


class LazyChildCache:
    """Append-only ``node id -> children`` store; the first recorded result wins."""

    def __init__(self) -> None:
        self._entries: dict[str, tuple[Node, ...]] = {}

    def get(self, node_id: str) -> tuple[Node, ...] | None:
        return self._entries.get(node_id)

    def remember(self, node_id: str, children: Sequence[Node]) -> tuple[Node, ...]:
        """Record ``children`` unless ``node_id`` already has an entry; return the stored value."""
        existing = self._entries.get(node_id)
        if existing is not None:
            return existing
        stored = tuple(children)
        self._entries[node_id] = stored
        return stored

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class LoadCoordinator:
    """Tracks in-flight child loads and serves repeat loads from ``LazyChildCache``."""

    def __init__(
        self,
        fetch_children: FetchChildren,
        *,
        cache: LazyChildCache | None = None,
        policy: LatencyPolicy | None = None,
        sleep: Sleeper | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._fetch_children = fetch_children
        self._cache = cache if cache is not None else LazyChildCache()
        self._policy = policy if policy is not None else LatencyPolicy()
        self._sleep = sleep if sleep is not None else asyncio.sleep
        self._rng = rng if rng is not None else random.Random()
        self._loading: set[str] = set()
        self._listeners: list[LoadingListener] = []

    @property
    def cache(self) -> LazyChildCache:
        return self._cache

    @property
    def policy(self) -> LatencyPolicy:
        return self._policy

    @property
    def loading_ids(self) -> frozenset[str]:
        return frozenset(self._loading)

    def is_loading(self, node_id: str) -> bool:
        return node_id in self._loading

    def state(self, node_id: str) -> LoadState:
        if node_id in self._loading:
            return LoadState.LOADING
        if node_id in self._cache:
            return LoadState.LOADED
        return LoadState.UNLOADED

    def subscribe(self, listener: LoadingListener) -> Callable[[], None]:
        """Call ``listener(node_id, loading)`` on every loading-set change.

        Returns a callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_loading(self, node_id: str, loading: bool) -> None:
        if loading:
            self._loading.add(node_id)
        else:
            self._loading.discard(node_id)
        for listener in list(self._listeners):
            listener(node_id, loading)

    async def _fetch(self, node_id: str) -> tuple[Node, ...]:
        try:
            fetched = self._fetch_children(node_id)
            if inspect.isawaitable(fetched):
                fetched = await fetched
            return tuple(fetched)
        except Exception as exc:
            logger.warning("fetching children of %s failed: %s", node_id, exc)
            raise ChildFetchError(node_id) from exc

    async def load(
        self,
        node_id: str,
        on_loaded: Callable[[tuple[Node, ...]], None],
    ) -> tuple[Node, ...] | None:
        """Load children of ``node_id`` and hand them to ``on_loaded``.

        Returns ``None`` without doing anything when a load for ``node_id`` is
        already in flight. ``on_loaded`` runs before the id leaves the loading
        set. A failing fetch leaves the id unloaded and raises
        ``ChildFetchError``.
        """
        if node_id in self._loading:
            logger.debug("load of %s already in flight", node_id)
            return None

        self._set_loading(node_id, True)
        try:
            children = self._cache.get(node_id)
            if children is not None:
                logger.debug("serving %d cached children for %s", len(children), node_id)
                delay = self._policy.cached_delay
            else:
                logger.debug("cache miss for %s, fetching", node_id)
                children = self._cache.remember(node_id, await self._fetch(node_id))
                delay = self._policy.fetch_delay(self._rng)
            await self._sleep(delay)
            on_loaded(children)
        finally:
            self._set_loading(node_id, False)
        return children


__all__ = [
    "Sleeper",
    "FetchChildren",
    "LoadingListener",
    "LoadState",
    "LatencyPolicy",
    "NO_DELAY",
    "LazyChildCache",
    "LoadCoordinator",
]
