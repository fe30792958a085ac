"""Locate the tree a CLI command operates on.

``perch tree`` and ``perch visit`` take a ``"module:attribute"`` string.
The attribute defaults to ``root`` and may name either a bound
``RootNode`` or a zero-argument callable that builds one (a ``RootNode``
subclass works as its own factory).
"""

import importlib

from perch.routing.node import Node
from perch.routing.root import RootNode


def resolve_root(import_string: str) -> RootNode:
    """Import *import_string* and return the tree it names.

    Errors from a factory propagate unchanged, so a tree that fails to
    bind surfaces as the ``ConfigurationError`` describing why.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        ConfigurationError: If a factory builds an invalid tree.
        TypeError: If the attribute (or factory result) is not a ``RootNode``.
    """
    module_path, _, attr_name = import_string.partition(":")
    target = getattr(importlib.import_module(module_path), attr_name or "root")

    if not isinstance(target, Node) and callable(target):
        target = target()

    if isinstance(target, RootNode):
        return target

    if isinstance(target, Node):
        msg = (
            f"{import_string!r} is a {type(target).__name__} {target.matcher.describe()}, "
            "not a tree; wrap it as RootNode(children=...)"
        )
    else:
        msg = f"{import_string!r} is a {type(target).__name__}, not a RootNode or a factory for one"
    raise TypeError(msg)
