"""Plain-text outline dump of a session's forest."""

from __future__ import annotations

from .session import TreeSession
from .tree_model import Forest, Node

INDENT = "  "


def _marker(node: Node, expanded: bool) -> str:
    if not node.is_expandable:
        return "•"
    return "▾" if expanded else "▸"


def format_outline(session: TreeSession) -> str:
    """Return one line per visible node; children show only under expanded parents."""
    lines: list[str] = []

    def walk(nodes: Forest, depth: int) -> None:
        for node in nodes:
            expanded = session.is_expanded(node.id)
            line = f"{INDENT * depth}{_marker(node, expanded)} {node.name} [{node.id}]"
            if session.is_loading(node.id):
                line += " (loading)"
            lines.append(line)
            if expanded and node.children:
                walk(node.children, depth + 1)

    walk(session.forest, 0)
    return "\n".join(lines)


__all__ = ["format_outline"]
