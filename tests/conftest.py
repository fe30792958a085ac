"""Shared fixtures for perch tests."""

from dataclasses import dataclass

import pytest

from perch.data.collection import Collection
from perch.events import NodeEvent


@dataclass(frozen=True, slots=True)
class Post:
    id: int
    slug: str
    title: str


class EventRecorder:
    """Listener that keeps every event it receives."""

    def __init__(self) -> None:
        self.events: list[NodeEvent] = []

    def __call__(self, event: NodeEvent) -> None:
        self.events.append(event)

    def of_type(self, kind: type) -> list[NodeEvent]:
        return [e for e in self.events if isinstance(e, kind)]

    @property
    def kinds(self) -> list[str]:
        return [type(e).__name__ for e in self.events]


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
def posts() -> Collection[Post]:
    return Collection(
        [
            Post(id=1, slug="hello", title="Hello"),
            Post(id=2, slug="again", title="Again"),
            Post(id=3, slug="hello", title="Hello, the sequel"),
        ]
    )
