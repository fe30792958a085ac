"""``perch tree``: print a bound node tree.

One line per node, indented by depth, with its pattern, parameter
names, data source, and resolved auto-render flag.
"""

import argparse
import sys

from perch.cli._resolve import resolve_root
from perch.errors import ConfigurationError
from perch.routing.node import Node


def format_node(node: Node) -> str:
    """Describe a single node on one line."""
    parts = [type(node).__name__, node.matcher.describe()]
    if node.matcher.param_names:
        parts.append("(" + ", ".join(node.matcher.param_names) + ")")
    if node.collection is not None:
        parts.append(f"[{type(node.collection).__name__}]")
    if not node.auto_render:
        parts.append("no-render")
    return " ".join(parts)


def format_tree(root: Node) -> list[str]:
    """Return the indented lines for *root* and its descendants."""
    lines: list[str] = []
    stack: list[tuple[Node, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        lines.append("  " * depth + format_node(node))
        stack.extend((child, depth + 1) for child in reversed(node.children))
    return lines


def run_tree(args: argparse.Namespace) -> None:
    """Print the tree resolved from ``args.root``."""
    try:
        root = resolve_root(args.root)
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    for line in format_tree(root):
        print(line)
