"""Depth-first, segment-consuming traversal.

A ``Traverser`` walks one path through a bound tree. It owns the cursor
(the deque of unconsumed segments) and records what it finds in a
``Traversal``; the nodes themselves are never written to.

Matching is first-match-wins among siblings, with no backtracking: once
a node's own segment matches, ``visit`` returns ``True`` even if nothing
below it matches the rest of the path. The failure is reported as a
``TraversalFailed`` event instead.
"""

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field

from perch.events import DestinationReached, NodeEvent, SegmentMatched, TraversalFailed
from perch.routing.node import Node, RenderContext, Step
from perch.routing.params import partition_captures, resolve_record

logger = logging.getLogger("perch.traversal")


@dataclass(slots=True)
class Traversal:
    """Outcome of one ``RootNode.visit`` call."""

    path: str
    segments: tuple[str, ...]
    steps: list[Step] = field(default_factory=list)
    destination: Step | None = None
    failure: TraversalFailed | None = None
    rendered: str | None = None

    @property
    def reached(self) -> bool:
        """True when the whole path was consumed."""
        return self.destination is not None


class Traverser:
    """Drives matching for a single traversal.

    Usage::

        traverser = Traverser(segments, relay.emit)
        traverser.visit(root, ())
        traverser.traversal.destination
    """

    __slots__ = ("_emit", "_remaining", "traversal")

    def __init__(
        self,
        segments: tuple[str, ...],
        emit: Callable[[NodeEvent], None],
        *,
        path: str = "",
    ) -> None:
        self._remaining: deque[str] = deque(segments)
        self._emit = emit
        self.traversal = Traversal(path=path, segments=segments)

    def visit(self, node: Node, parent_path: tuple[str, ...]) -> bool:
        """Try to consume the next segment at *node*, then descend.

        Returns ``False`` only when *node*'s matcher rejects the segment.
        """
        if not self._remaining:
            return False

        captures = node.matcher.match(self._remaining[0])
        if captures is None:
            return False

        segment = self._remaining.popleft()
        kwargs, args = partition_captures(captures, node.matcher.param_names)
        source = node.collection
        if source is not None and kwargs:
            record = resolve_record(source, kwargs)
        else:
            record = node.config.model

        step = Step(
            node=node,
            segment=segment,
            parent_path=parent_path,
            remaining=tuple(self._remaining),
            kwargs=kwargs,
            args=args,
            record=record,
        )
        self.traversal.steps.append(step)
        logger.debug("Matched %r at %r (kwargs=%r, args=%r)", segment, node, kwargs, args)

        self._emit(SegmentMatched(step))
        node.traverse(step)

        if self._remaining:
            full_path = step.full_path
            for child in node.children:
                if self.visit(child, full_path):
                    break
            else:
                remaining = tuple(self._remaining)
                logger.debug("No child of %r matched %r", node, remaining[0])
                failure = TraversalFailed(step, remaining)
                self.traversal.failure = failure
                self._emit(failure)
        else:
            self._arrive(step)

        return True

    def _arrive(self, step: Step) -> None:
        node = step.node
        self.traversal.destination = step
        logger.debug("Reached %r at /%s", node, "/".join(step.full_path[1:]))
        self._emit(DestinationReached(step))

        if node.auto_render is not False:
            context = RenderContext(
                record=step.record,
                data_source=node.collection,
                args=step.args,
                kwargs=step.kwargs,
                full_path=step.full_path,
            )
            self.traversal.rendered = node.render(context)
