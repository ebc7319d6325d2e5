"""Demo forest and a randomized child source standing in for a slow backend."""

from __future__ import annotations

import random

from .identity import IdGenerator
from .loading import LatencyPolicy
from .session import TreeSession
from .tree_model import Forest, Node

CHILD_LABELS = (
    "Roadmap",
    "Research",
    "Specs",
    "Notes",
    "Drafts",
    "Milestones",
    "Assets",
    "Archive",
)
HAS_CHILDREN_CHANCE = 0.35

DEMO_FOREST: Forest = (
    Node("root-1", "Product", has_children=True),
    Node(
        "root-2",
        "Design",
        children=(
            Node("design-1", "Wireframes"),
            Node("design-2", "Brand", has_children=True),
        ),
    ),
    Node(
        "root-3",
        "Engineering",
        children=(
            Node(
                "eng-1",
                "Frontend",
                children=(
                    Node("eng-1-1", "TreeView.tsx"),
                    Node("eng-1-2", "App.css"),
                ),
            ),
            Node("eng-2", "Backend"),
        ),
    ),
)


class RandomChildSource:
    """Fetch collaborator producing 2-4 labelled children with fresh ids."""

    def __init__(self, id_generator: IdGenerator, rng: random.Random | None = None) -> None:
        self._id_generator = id_generator
        self._rng = rng if rng is not None else random.Random()

    def __call__(self, node_id: str) -> tuple[Node, ...]:
        count = 2 + self._rng.randrange(3)
        children: list[Node] = []
        for index in range(count):
            label = CHILD_LABELS[(index + self._rng.randrange(6)) % len(CHILD_LABELS)]
            children.append(
                Node(
                    id=self._id_generator.next(),
                    name=label,
                    has_children=self._rng.random() < HAS_CHILDREN_CHANCE,
                )
            )
        return tuple(children)


def build_demo_session(
    policy: LatencyPolicy | None = None,
    *,
    id_floor: int = 100,
    rng: random.Random | None = None,
) -> TreeSession:
    """Return a session over ``DEMO_FOREST`` whose lazy children come from ``RandomChildSource``."""
    rng = rng if rng is not None else random.Random()
    id_generator = IdGenerator.for_forest(DEMO_FOREST, floor=id_floor)
    return TreeSession(
        DEMO_FOREST,
        RandomChildSource(id_generator, rng),
        id_generator=id_generator,
        policy=policy,
        rng=rng,
    )


__all__ = [
    "CHILD_LABELS",
    "HAS_CHILDREN_CHANCE",
    "DEMO_FOREST",
    "RandomChildSource",
    "build_demo_session",
]
