"""Parameter extraction and record resolution for matched segments."""

from collections.abc import Sequence
from typing import Any

from perch.data.collection import DataSource, record_value


def partition_captures(
    captures: Sequence[str | None],
    param_names: Sequence[str],
) -> tuple[dict[str, str | None], tuple[str | None, ...]]:
    """Split matcher captures into named ``kwargs`` and overflow ``args``.

    The first ``len(param_names)`` captures are bound by name; the rest
    keep their order as positional args.
    """
    bound = len(param_names)
    kwargs = dict(zip(param_names, captures[:bound], strict=False))
    args = tuple(captures[bound:])
    return kwargs, args


def _loosely_equal(record_field: Any, captured: Any) -> bool:
    """Compare a record field with a captured string.

    Captures are always strings, so ``2`` on the record equals ``"2"``.
    """
    if record_field == captured:
        return True
    if record_field is None or captured is None:
        return False
    return str(record_field) == str(captured)


def resolve_record(source: DataSource | None, kwargs: dict[str, Any]) -> Any | None:
    """Resolve the record addressed by *kwargs* in *source*.

    - ``"id"`` in kwargs: id-indexed ``source.get``.
    - otherwise: the first record, in source order, whose fields equal
      every kwarg.

    Returns ``None`` when there is no source, no kwargs, or no match.
    """
    if source is None or not kwargs:
        return None
    if "id" in kwargs:
        return source.get(kwargs["id"])
    return source.find(
        lambda record: all(
            _loosely_equal(record_value(record, key), value) for key, value in kwargs.items()
        )
    )
