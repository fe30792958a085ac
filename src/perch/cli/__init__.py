"""Perch CLI: inspect and exercise traversal trees.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch, path traversal over a tree of segment-matching nodes.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log traversal details to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch tree -------------------------------------------------------
    tree_parser = subparsers.add_parser("tree", help="Print the node tree")
    tree_parser.add_argument(
        "root",
        help="Import string (e.g. myapp:root)",
    )

    # -- perch visit ------------------------------------------------------
    visit_parser = subparsers.add_parser("visit", help="Traverse a path and print events")
    visit_parser.add_argument(
        "root",
        help="Import string (e.g. myapp:root)",
    )
    visit_parser.add_argument("path", nargs="?", default="", help="Path to visit (e.g. /posts/5)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command == "tree":
        from perch.cli._tree import run_tree

        run_tree(args)
    elif args.command == "visit":
        from perch.cli._visit import run_visit

        run_visit(args)
