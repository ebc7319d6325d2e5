"""Tests for pure forest operations.

Covers lookup order, structural sharing on update, has_children bookkeeping
on remove/insert, and index clamping.
"""

from __future__ import annotations

import unittest

from lazytree.tree_model import (
    Node,
    contains,
    find_parent_position,
    insert_at,
    iter_nodes,
    locate,
    move_node,
    node_ids,
    remove_by_id,
    update_by_id,
)


def _sample_forest() -> tuple[Node, ...]:
    return (
        Node(
            "a",
            "A",
            children=(
                Node("b", "B", children=(Node("c", "C"),)),
                Node("d", "D"),
            ),
        ),
        Node("e", "E", children=(Node("f", "F"),)),
        Node("g", "G", has_children=True),
    )


class LocateTests(unittest.TestCase):
    def test_iter_nodes_walks_pre_order(self) -> None:
        self.assertEqual(node_ids(_sample_forest()), ["a", "b", "c", "d", "e", "f", "g"])

    def test_locate_returns_nested_node_with_subtree(self) -> None:
        forest = _sample_forest()
        found = locate(forest, "b")
        self.assertIs(found, forest[0].children[0])
        self.assertEqual([child.id for child in found.children], ["c"])

    def test_locate_returns_first_match_in_pre_order(self) -> None:
        forest = (Node("x", "outer", children=(Node("dup", "first"),)), Node("dup", "second"))
        self.assertEqual(locate(forest, "dup").name, "first")

    def test_locate_missing_id_returns_none(self) -> None:
        self.assertIsNone(locate(_sample_forest(), "missing"))
        self.assertIsNone(locate((), "a"))

    def test_contains_checks_self_and_descendants(self) -> None:
        root = _sample_forest()[0]
        self.assertTrue(contains(root, "a"))
        self.assertTrue(contains(root, "c"))
        self.assertFalse(contains(root, "e"))
        self.assertFalse(contains(Node("leaf", "Leaf"), "other"))

    def test_find_parent_position(self) -> None:
        forest = _sample_forest()
        self.assertEqual(find_parent_position(forest, "e"), (None, 1))
        self.assertEqual(find_parent_position(forest, "d"), ("a", 1))
        self.assertEqual(find_parent_position(forest, "c"), ("b", 0))
        self.assertIsNone(find_parent_position(forest, "missing"))


class UpdateByIdTests(unittest.TestCase):
    def test_unknown_id_returns_same_forest(self) -> None:
        forest = _sample_forest()
        updated = update_by_id(forest, "missing", lambda node: Node(node.id, "changed"))
        self.assertIs(updated, forest)

    def test_identity_transform_returns_same_forest(self) -> None:
        forest = _sample_forest()
        self.assertIs(update_by_id(forest, "c", lambda node: node), forest)

    def test_update_rebuilds_only_the_changed_path(self) -> None:
        forest = _sample_forest()
        updated = update_by_id(forest, "c", lambda node: Node(node.id, "C2"))

        self.assertIsNot(updated, forest)
        self.assertEqual(locate(updated, "c").name, "C2")
        self.assertIsNot(updated[0], forest[0])
        self.assertIsNot(updated[0].children[0], forest[0].children[0])
        self.assertIs(updated[0].children[1], forest[0].children[1])
        self.assertIs(updated[1], forest[1])
        self.assertIs(updated[2], forest[2])

    def test_update_root_node(self) -> None:
        forest = _sample_forest()
        updated = update_by_id(forest, "g", lambda node: Node(node.id, "G2"))
        self.assertEqual(updated[2].name, "G2")
        self.assertIs(updated[0], forest[0])
        self.assertEqual(forest[2].name, "G")


class RemoveByIdTests(unittest.TestCase):
    def test_remove_detaches_subtree(self) -> None:
        forest = _sample_forest()
        result = remove_by_id(forest, "b")

        self.assertIs(result.removed, forest[0].children[0])
        self.assertEqual(node_ids(result.forest), ["a", "d", "e", "f", "g"])
        self.assertTrue(result.forest[0].has_children)
        self.assertIs(result.forest[1], forest[1])

    def test_remove_last_child_clears_has_children(self) -> None:
        forest = _sample_forest()
        result = remove_by_id(forest, "f")

        parent = result.forest[1]
        self.assertEqual(parent.children, ())
        self.assertFalse(parent.has_children)
        self.assertFalse(parent.is_expandable)

    def test_remove_root(self) -> None:
        forest = _sample_forest()
        result = remove_by_id(forest, "e")
        self.assertEqual([node.id for node in result.forest], ["a", "g"])
        self.assertEqual(result.removed.id, "e")

    def test_remove_unknown_id_is_noop(self) -> None:
        forest = _sample_forest()
        result = remove_by_id(forest, "missing")
        self.assertIs(result.forest, forest)
        self.assertIsNone(result.removed)

    def test_remove_then_insert_restores_forest(self) -> None:
        forest = (
            Node(
                "a",
                "A",
                children=(
                    Node("b", "B", children=(Node("c", "C"),), has_children=True),
                    Node("d", "D"),
                ),
                has_children=True,
            ),
            Node("e", "E", children=(Node("f", "F"),), has_children=True),
            Node("g", "G", has_children=True),
        )
        for node_id in ("a", "b", "c", "d", "e", "f", "g"):
            parent_id, index = find_parent_position(forest, node_id)
            result = remove_by_id(forest, node_id)
            restored = insert_at(result.forest, parent_id, index, result.removed)
            self.assertEqual(restored, forest, node_id)


class ListChildrenTests(unittest.TestCase):
    def _forest(self) -> tuple[Node, ...]:
        return (
            Node("a", "A", children=[Node("b", "B", children=[Node("c", "C")])]),
            Node("d", "D", children=[]),
        )

    def test_list_children_are_stored_as_tuples(self) -> None:
        forest = self._forest()
        self.assertIsInstance(forest[0].children, tuple)
        self.assertIsInstance(forest[0].children[0].children, tuple)
        self.assertEqual(forest[1].children, ())
        self.assertEqual(Node("x", "X", children=[Node("y", "Y")]), Node("x", "X", children=(Node("y", "Y"),)))

    def test_remove_insert_and_move_accept_list_children(self) -> None:
        forest = self._forest()

        removed = remove_by_id(forest, "c")
        self.assertEqual(removed.removed, Node("c", "C"))
        self.assertEqual(locate(removed.forest, "b").children, ())

        inserted = insert_at(forest, "b", 0, Node("n", "N"))
        self.assertEqual([child.id for child in locate(inserted, "b").children], ["n", "c"])

        moved = move_node(forest, "c", "d", 0)
        self.assertEqual(locate(moved, "d").children, (Node("c", "C"),))
        self.assertFalse(locate(moved, "b").has_children)


class InsertAtTests(unittest.TestCase):
    def test_insert_root_positions(self) -> None:
        forest = _sample_forest()
        new = Node("n", "N")
        self.assertEqual([node.id for node in insert_at(forest, None, 0, new)], ["n", "a", "e", "g"])
        self.assertEqual([node.id for node in insert_at(forest, None, 1, new)], ["a", "n", "e", "g"])
        self.assertEqual([node.id for node in insert_at(forest, None, 3, new)], ["a", "e", "g", "n"])

    def test_out_of_range_indices_clamp(self) -> None:
        forest = _sample_forest()
        new = Node("n", "N")
        self.assertEqual(insert_at(forest, None, 99, new)[-1], new)
        self.assertEqual(insert_at(forest, None, -5, new)[0], new)
        self.assertEqual(insert_at(forest, "a", 42, new)[0].children[-1], new)

    def test_insert_into_childless_parent_marks_it_expandable(self) -> None:
        forest = (Node("leaf", "Leaf", has_children=False),)
        updated = insert_at(forest, "leaf", 0, Node("n", "N"))

        self.assertEqual(updated[0].children, (Node("n", "N"),))
        self.assertTrue(updated[0].has_children)
        self.assertEqual(forest[0].children, None)

    def test_insert_under_missing_parent_is_noop(self) -> None:
        forest = _sample_forest()
        self.assertIs(insert_at(forest, "missing", 0, Node("n", "N")), forest)

    def test_insert_keeps_unrelated_subtrees_shared(self) -> None:
        forest = _sample_forest()
        updated = insert_at(forest, "b", 1, Node("n", "N"))
        self.assertEqual([child.id for child in updated[0].children[0].children], ["c", "n"])
        self.assertIs(updated[1], forest[1])
        self.assertIs(updated[0].children[1], forest[0].children[1])
        self.assertEqual(len(list(iter_nodes(updated))), 8)


if __name__ == "__main__":
    unittest.main()
