"""``perch visit``: traverse a path and print what happened.

Prints one line per event, then the rendered output of the
destination, if any. Exits with code 1 when no destination is reached.
"""

import argparse
import sys

from perch.cli._resolve import resolve_root
from perch.errors import ConfigurationError
from perch.events import DestinationReached, NodeEvent, SegmentMatched, TraversalFailed


def format_event(event: NodeEvent) -> str:
    """Describe a traversal event on one line."""
    step = event.step
    match event:
        case SegmentMatched():
            detail = f"{step.segment!r}"
            if step.kwargs:
                detail += f" kwargs={step.kwargs!r}"
            if step.args:
                detail += f" args={list(step.args)!r}"
            return f"matched      {step.node!r} {detail}"
        case DestinationReached():
            return f"destination  {step.node!r} /{'/'.join(step.full_path[1:])}"
        case TraversalFailed(remaining=remaining):
            return f"failed       {step.node!r} remaining={list(remaining)!r}"


def run_visit(args: argparse.Namespace) -> None:
    """Visit ``args.path`` on the tree resolved from ``args.root``."""
    try:
        root = resolve_root(args.root)
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    unsubscribe = root.subscribe(lambda event: print(format_event(event)))
    try:
        traversal = root.visit(args.path)
    finally:
        unsubscribe()

    if traversal.rendered is not None:
        print()
        print(traversal.rendered)

    if not traversal.reached:
        raise SystemExit(1)
