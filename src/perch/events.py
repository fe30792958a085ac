"""Traversal events and the root-level relay.

Every node in a tree reports through a single ``EventRelay`` owned by
its ``RootNode``. Events are frozen dataclasses, so listeners dispatch
on type rather than on event-name strings::

    def on_event(event: NodeEvent) -> None:
        match event:
            case DestinationReached(step=step):
                print("arrived at", step.full_path)
            case TraversalFailed(remaining=remaining):
                print("no route for", remaining)

    root.subscribe(on_event)

Free-threading safety:
    - Events are frozen dataclasses (immutable, safe to share)
    - EventRelay uses a Lock to protect the listener list
    - ``current`` is a single reference; the last destination wins
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from perch.routing.node import Node, Step


@dataclass(frozen=True, slots=True)
class SegmentMatched:
    """A node's matcher accepted the current segment."""

    step: Step

    @property
    def node(self) -> Node:
        return self.step.node


@dataclass(frozen=True, slots=True)
class DestinationReached:
    """A node matched the last segment of the path."""

    step: Step

    @property
    def node(self) -> Node:
        return self.step.node


@dataclass(frozen=True, slots=True)
class TraversalFailed:
    """A node matched, but none of its children accepted the next segment."""

    step: Step
    remaining: tuple[str, ...]

    @property
    def node(self) -> Node:
        return self.step.node


type NodeEvent = SegmentMatched | DestinationReached | TraversalFailed

type Listener = Callable[[NodeEvent], None]


class EventRelay:
    """Collects every event of a tree and re-delivers it to listeners.

    Also tracks the most recent destination in ``current``. Listener
    exceptions propagate to whoever triggered the traversal.
    """

    __slots__ = ("_listeners", "_lock", "current")

    def __init__(self) -> None:
        self._listeners: list[tuple[Listener, Node | None]] = []
        self._lock = threading.Lock()
        self.current: Step | None = None

    @property
    def current_node(self) -> Node | None:
        """The node of the most recent ``DestinationReached`` event."""
        current = self.current
        return current.node if current is not None else None

    def subscribe(self, listener: Listener, *, node: Node | None = None) -> Callable[[], None]:
        """Register *listener* for all events, or only those of *node*.

        Returns a callable that removes the subscription.
        """
        entry = (listener, node)
        with self._lock:
            self._listeners.append(entry)

        def unsubscribe() -> None:
            with self._lock:
                if entry in self._listeners:
                    self._listeners.remove(entry)

        return unsubscribe

    def emit(self, event: NodeEvent) -> None:
        """Deliver *event* to listeners, in subscription order."""
        if isinstance(event, DestinationReached):
            self.current = event.step
        with self._lock:
            listeners = list(self._listeners)
        for listener, node in listeners:
            if node is None or node is event.node:
                listener(event)
