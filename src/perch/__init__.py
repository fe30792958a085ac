"""Perch: path traversal over a tree of segment-matching nodes.

Resolves a slash-delimited path one segment at a time, extracting
parameters, resolving records, and rendering the destination node.

Basic usage::

    from perch import Node, RootNode
    from perch.data import Collection

    posts = Collection([{"id": "1", "title": "Hello"}])

    root = RootNode(children=[
        Node(url_match="posts", children=Node(
            url_match=":id",
            collection=posts,
            template="<h1>{{ record.title }}</h1>",
        )),
    ])

    traversal = root.visit("/posts/1")
    traversal.rendered  # "<h1>Hello</h1>"
"""

# Declare free-threading support (PEP 703)
_Py_mod_gil = 0

__version__ = "0.1.0-dev"
__all__ = [
    "Collection",
    "ConfigurationError",
    "DestinationReached",
    "EventRelay",
    "Node",
    "NodeConfig",
    "NodeEvent",
    "PerchError",
    "RenderContext",
    "RootNode",
    "SegmentMatched",
    "Step",
    "Traversal",
    "TraversalFailed",
    "TreeConfig",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name in ("Node", "RenderContext", "Step"):
        from perch.routing import node as _node

        return getattr(_node, name)

    if name == "RootNode":
        from perch.routing.root import RootNode

        return RootNode

    if name == "Traversal":
        from perch.routing.traversal import Traversal

        return Traversal

    if name in ("NodeConfig", "TreeConfig"):
        from perch import config as _config

        return getattr(_config, name)

    if name in ("DestinationReached", "EventRelay", "NodeEvent", "SegmentMatched", "TraversalFailed"):
        from perch import events as _events

        return getattr(_events, name)

    if name in ("ConfigurationError", "PerchError"):
        from perch import errors as _errors

        return getattr(_errors, name)

    if name == "Collection":
        from perch.data.collection import Collection

        return Collection

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
