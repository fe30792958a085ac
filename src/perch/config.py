"""Node and tree configuration.

NodeConfig and TreeConfig are frozen dataclasses, validated once and
immutable after creation, no string-key dict lookups.
"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from perch.errors import ConfigurationError

if TYPE_CHECKING:
    from perch.data.collection import DataSource
    from perch.routing.node import Node
    from perch.routing.pattern import PatternSpec


@dataclass(frozen=True, slots=True)
class NodeConfig:
    """Configuration for a single node. Immutable after creation.

    Every field has a default, so an empty ``NodeConfig()`` describes a
    leaf that matches any segment::

        config = NodeConfig(url_match=":id", collection=posts)

    The presentation fields (``model``, ``el``, ``id``, ``attributes``,
    ``class_name``, ``tag_name``) are not interpreted by the traversal;
    they are carried through for render hooks.
    """

    # Tree shape
    children: tuple[Node, ...] = ()

    # Matching
    url_match: str | re.Pattern[str] | PatternSpec | None = None
    kwarg_keys: tuple[str, ...] | None = None

    # Data
    collection: DataSource | None = None

    # Rendering (None = inherit from parent)
    auto_render: bool | None = None
    template: str | None = None  # Inline kida source
    template_name: str | None = None  # Loaded from TreeConfig.template_dir

    # Presentation passthrough
    model: Any = None
    el: Any = None
    id: str | None = None
    attributes: Mapping[str, str] = field(default_factory=dict)
    class_name: str | None = None
    tag_name: str | None = None

    def __post_init__(self) -> None:
        from perch.routing.node import Node

        children = self.children
        if isinstance(children, Node):
            children = (children,)
        elif isinstance(children, Sequence):
            children = tuple(children)
        else:
            msg = f"children must be a Node or a sequence of nodes, got {type(children).__name__}"
            raise ConfigurationError(msg)
        for child in children:
            if not isinstance(child, Node):
                msg = f"children must contain only Node instances, got {type(child).__name__}"
                raise ConfigurationError(msg)
        object.__setattr__(self, "children", children)

        if self.kwarg_keys is not None:
            if isinstance(self.kwarg_keys, str):
                msg = f"kwarg_keys must be a sequence of names, not the string {self.kwarg_keys!r}"
                raise ConfigurationError(msg)
            object.__setattr__(self, "kwarg_keys", tuple(self.kwarg_keys))

        if self.auto_render is not None and not isinstance(self.auto_render, bool):
            msg = f"auto_render must be True, False or None, got {self.auto_render!r}"
            raise ConfigurationError(msg)

        if self.template is not None and self.template_name is not None:
            msg = "template and template_name are mutually exclusive"
            raise ConfigurationError(msg)

    def merge(self, **options: Any) -> NodeConfig:
        """Return a copy with *options* applied on top of this config.

        Setting one of ``template`` / ``template_name`` clears the other.
        Raises ``ConfigurationError`` for option names that are not
        configuration fields.
        """
        known = {f.name for f in dataclasses.fields(self)}
        unknown = sorted(set(options) - known)
        if unknown:
            msg = f"Unknown node option(s): {', '.join(unknown)}"
            raise ConfigurationError(msg)
        if "template" in options and "template_name" not in options:
            options["template_name"] = None
        elif "template_name" in options and "template" not in options:
            options["template"] = None
        return dataclasses.replace(self, **options)

    def explicit_options(self) -> dict[str, Any]:
        """Return the fields whose value differs from the field default.

        Used to layer a positional config over a node class's ``defaults``.
        A field explicitly set back to its default is indistinguishable
        from an unset one and is not included.
        """
        explicit: dict[str, Any] = {}
        for f in dataclasses.fields(self):
            if f.default_factory is not dataclasses.MISSING:
                default = f.default_factory()
            else:
                default = f.default
            value = getattr(self, f.name)
            if value is default or value == default:
                continue
            explicit[f.name] = value
        return explicit


@dataclass(frozen=True, slots=True)
class TreeConfig:
    """Tree-wide configuration held by the root node.

    Override what you need::

        config = TreeConfig(template_dir="templates", auto_render=False)
    """

    # Templates
    template_dir: str | Path | None = None
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True
    debug: bool = False  # Reload templates from disk when they change

    # Root default for nodes whose auto_render is unset
    auto_render: bool = True
