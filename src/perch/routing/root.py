"""Root node: binds a tree and is the entry point for traversals."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from perch.config import NodeConfig, TreeConfig
from perch.errors import ConfigurationError
from perch.events import EventRelay, Listener
from perch.routing.node import Node, Step
from perch.routing.traversal import Traversal, Traverser

if TYPE_CHECKING:
    from collections.abc import Callable

    from kida import Environment

logger = logging.getLogger("perch.tree")


def normalize_path(path: str | None) -> str:
    """Normalize a raw path so that its first segment is the root's.

    ``""``, ``None`` and ``"/"`` become ``""``; anything else gains a
    leading ``/`` if it lacks one.
    """
    if not path or path == "/":
        return ""
    if not path.startswith("/"):
        return "/" + path
    return path


def split_path(path: str | None) -> tuple[str, ...]:
    """Split a raw path into segments. The first segment is always ``""``.

    Examples::

        ""         -> ("",)
        "/"        -> ("",)
        "foo/bar"  -> ("", "foo", "bar")
        "/posts/5" -> ("", "posts", "5")
    """
    return tuple(normalize_path(path).split("/"))


class RootNode(Node):
    """The top of a traversal tree.

    Binding happens once, in the constructor: every descendant gets its
    ``parent``, inherits unset options, and reports events through the
    root's relay.

    Usage::

        root = RootNode(children=[
            Node(url_match="posts", children=Node(url_match=":id", collection=posts)),
        ])
        root.subscribe(print)
        root.visit("/posts/5")
    """

    def __init__(
        self,
        config: NodeConfig | None = None,
        /,
        *,
        tree_config: TreeConfig | None = None,
        environment: Environment | None = None,
        **options: Any,
    ) -> None:
        super().__init__(config, **options)
        self.tree_config = tree_config or TreeConfig()
        self.relay = EventRelay()
        # A caller-supplied environment brings its own loader
        self._has_loader = environment is not None or self.tree_config.template_dir is not None
        if environment is None:
            from perch.templating.integration import create_environment

            environment = create_environment(self.tree_config)
        self._bind(environment)

    def _bind(self, environment: Environment) -> None:
        """Bind every node, or none: a failure unbinds what was bound."""
        bound: list[Node] = [self]
        try:
            self._check_loader(self)
            self._bind_as_root(environment, self.tree_config.auto_render)
            pending: list[Node] = [self]
            while pending:
                node = pending.pop()
                for child in node.children:
                    child._attach(node)
                    bound.append(child)
                    self._check_loader(child)
                    child._inherit(node)
                    pending.append(child)
        except ConfigurationError:
            for node in bound:
                node._unbind()
            raise
        logger.debug("Bound tree %r with %d node(s)", self, len(bound))

    def _check_loader(self, node: Node) -> None:
        if node.config.template_name is not None and not self._has_loader:
            msg = (
                f"{node!r} sets template_name={node.config.template_name!r}, "
                "but the tree has no template_dir; set TreeConfig.template_dir "
                "or pass an environment"
            )
            raise ConfigurationError(msg)

    @property
    def current_node(self) -> Node | None:
        """The destination node of the most recent traversal."""
        return self.relay.current_node

    @property
    def current(self) -> Step | None:
        """The destination step of the most recent traversal."""
        return self.relay.current

    def subscribe(self, listener: Listener, *, node: Node | None = None) -> Callable[[], None]:
        """Listen to every event in the tree, or only to *node*'s."""
        return self.relay.subscribe(listener, node=node)

    def visit(self, path: str | None = "") -> Traversal:
        """Traverse the tree along *path*.

        Effects are reported through events and render hooks; the
        returned ``Traversal`` summarizes them for callers that want it.
        """
        segments = split_path(path)
        traverser = Traverser(segments, self.relay.emit, path=normalize_path(path))
        traverser.visit(self, ())
        return traverser.traversal
