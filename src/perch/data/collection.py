"""Record containers that nodes resolve path parameters against.

A node configured with a ``collection`` looks up a record for each
matched segment. The traversal only needs two operations, captured by
the ``DataSource`` protocol: id-indexed ``get`` and an ordered ``find``.

``Collection`` is the in-memory implementation. Records may be mappings
(``{"id": "1", "title": "..."}``) or plain objects such as frozen
dataclasses; fields are read with ``record_value``.
"""

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DataSource(Protocol):
    """A record container supporting id lookup and ordered scans."""

    def get(self, record_id: Any) -> Any | None: ...

    def find(self, predicate: Callable[[Any], bool]) -> Any | None: ...


def record_value(record: Any, key: str) -> Any:
    """Read field *key* from a mapping or an object. Missing fields are ``None``."""
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


class Collection[T]:
    """Ordered in-memory record container.

    Ids are indexed by their string form, so a path segment ``"2"``
    finds a record whose id is the integer ``2``::

        posts = Collection([Post(id=1, slug="hello"), Post(id=2, slug="again")])
        posts.get("2")                              # Post(id=2, ...)
        posts.find(lambda p: p.slug == "hello")     # Post(id=1, ...)
    """

    __slots__ = ("_by_id", "_id_attribute", "_records")

    def __init__(self, records: Iterable[T] = (), *, id_attribute: str = "id") -> None:
        self._id_attribute = id_attribute
        self._records: list[T] = []
        self._by_id: dict[str, T] = {}
        for record in records:
            self.add(record)

    def add(self, record: T) -> None:
        """Append a record. A record with an already-indexed id replaces it in the index."""
        self._records.append(record)
        record_id = record_value(record, self._id_attribute)
        if record_id is not None:
            self._by_id[str(record_id)] = record

    def get(self, record_id: Any) -> T | None:
        """Return the record with *record_id*, or ``None``."""
        if record_id is None:
            return None
        return self._by_id.get(str(record_id))

    def find(self, predicate: Callable[[T], bool]) -> T | None:
        """Return the first record (in insertion order) satisfying *predicate*."""
        for record in self._records:
            if predicate(record):
                return record
        return None

    def __iter__(self) -> Iterator[T]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"Collection({len(self._records)} records)"
