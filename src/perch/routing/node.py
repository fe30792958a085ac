"""Tree nodes and the per-traversal values they produce.

A ``Node`` is static: its configuration, compiled matcher and children
are fixed once the tree is bound by a ``RootNode``. Everything a
traversal learns about a node lives in a ``Step`` instead, so one tree
can serve any number of visits.

Subclass to customize behaviour::

    class PostNode(Node):
        defaults = NodeConfig(url_match=":id", template="<h1>{{ record.title }}</h1>")

        def traverse(self, step: Step) -> None:
            audit.append(step.segment)
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

from perch.config import NodeConfig
from perch.errors import ConfigurationError
from perch.routing.pattern import Matcher, compile_pattern

if TYPE_CHECKING:
    from kida import Environment
    from kida.template import Template

    from perch.data.collection import DataSource


@dataclass(frozen=True, slots=True)
class Step:
    """What one traversal learned at one matched node.

    ``remaining`` holds the segments still unconsumed after this node's
    segment was taken.
    """

    node: Node
    segment: str
    parent_path: tuple[str, ...]
    remaining: tuple[str, ...]
    kwargs: dict[str, str | None] = field(default_factory=dict)
    args: tuple[str | None, ...] = ()
    record: Any = None

    @property
    def full_path(self) -> tuple[str, ...]:
        """Every matched segment from the root down to this node."""
        return (*self.parent_path, self.segment)


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Arguments handed to ``Node.render`` when a destination is reached."""

    record: Any
    data_source: DataSource | None
    args: tuple[str | None, ...]
    kwargs: dict[str, str | None]
    full_path: tuple[str, ...]


class Node:
    """A segment-matching node in a traversal tree.

    Configuration comes from the class-level ``defaults``, then the
    non-default fields of the positional ``NodeConfig``, then keyword
    options (keywords win)::

        Node(url_match=":id", collection=posts, children=[CommentsNode()])

        class PostNode(Node):
            defaults = NodeConfig(url_match=":id", class_name="post")

        PostNode(NodeConfig(tag_name="article"))  # keeps ":id" and "post"
    """

    defaults: ClassVar[NodeConfig | None] = None

    def __init__(self, config: NodeConfig | None = None, /, **options: Any) -> None:
        base = type(self).defaults
        if config is None:
            config = base or NodeConfig()
        elif base is not None and config is not base:
            config = base.merge(**config.explicit_options())
        self.config: NodeConfig = config.merge(**options) if options else config
        self.matcher: Matcher = compile_pattern(self.config.url_match, self.config.kwarg_keys)

        # Set once, when a RootNode binds the tree
        self.parent: Node | None = None
        self.auto_render: bool = self.config.auto_render is not False
        self.el: Any = self.config.el
        self.environment: Environment | None = None
        self._template: Template | None = None
        self._bound = False

    @property
    def children(self) -> tuple[Node, ...]:
        return self.config.children

    @property
    def collection(self) -> DataSource | None:
        return self.config.collection

    # -- Hooks ---------------------------------------------------------------

    def traverse(self, step: Step) -> None:
        """Called every time this node matches a segment. No-op by default."""

    def render(self, context: RenderContext) -> str | None:
        """Render this node as a destination.

        Renders the node's kida template (``template`` or
        ``template_name``) and returns the output. Returns ``None`` when
        the node has no template. Override for custom rendering.
        """
        if self._template is None:
            return None
        from perch.templating.integration import render_node

        return render_node(self._template, self, context)

    # -- Tree helpers --------------------------------------------------------

    def get_ancestors(self) -> list[Node]:
        """Return the chain from the root down to (and including) this node."""
        chain: list[Node] = []
        node: Node | None = self
        while node is not None:
            chain.append(node)
            node = node.parent
        chain.reverse()
        return chain

    def walk(self) -> Iterator[Node]:
        """Yield this node and all descendants, depth-first, in child order."""
        yield self
        for child in self.children:
            yield from child.walk()

    # -- Binding -------------------------------------------------------------

    def _bind_as_root(self, environment: Environment, auto_render: bool) -> None:
        if self._bound:
            msg = f"{self!r} is already bound into a tree"
            raise ConfigurationError(msg)
        self._bound = True
        self.auto_render = self.config.auto_render if self.config.auto_render is not None else auto_render
        self.environment = environment
        self._load_template()

    def _attach(self, parent: Node) -> None:
        """Link this node under *parent*. Raises if it is already in a tree."""
        if self._bound:
            msg = (
                f"{self!r} appears more than once under {parent!r}'s tree; "
                "nodes cannot be shared between parents or form cycles"
            )
            raise ConfigurationError(msg)
        self._bound = True
        self.parent = parent

    def _inherit(self, parent: Node) -> None:
        """Take unset options from the parent and load the template."""
        if self.config.auto_render is None:
            self.auto_render = parent.auto_render
        if self.el is None:
            self.el = parent.el
        self.environment = parent.environment
        self._load_template()

    def _unbind(self) -> None:
        """Return to the unbound state, so the node can join another tree."""
        self._bound = False
        self.parent = None
        self.auto_render = self.config.auto_render is not False
        self.el = self.config.el
        self.environment = None
        self._template = None

    def _load_template(self) -> None:
        if self.environment is None:
            return
        # kida raises its own syntax and not-found error types
        try:
            if self.config.template is not None:
                self._template = self.environment.from_string(self.config.template)
            elif self.config.template_name is not None:
                self._template = self.environment.get_template(self.config.template_name)
        except Exception as exc:
            source = self.config.template_name or "inline template"
            msg = f"Cannot load {source!r} for {self!r}: {type(exc).__name__}: {exc}"
            raise ConfigurationError(msg) from exc

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.matcher.describe()}>"
