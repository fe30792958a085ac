"""Kida environment setup and the default node render hook.

The environment is created once, when a ``RootNode`` binds its tree,
and shared by every node in it. Node templates are compiled at bind
time, so a broken template fails before the first traversal.
"""

from typing import TYPE_CHECKING, Any

from kida import Environment, FileSystemLoader

from perch.config import TreeConfig

if TYPE_CHECKING:
    from kida.template import Template

    from perch.routing.node import Node, RenderContext


def create_environment(config: TreeConfig) -> Environment:
    """Create a kida Environment from tree configuration.

    Without a ``template_dir`` only inline ``template`` sources can be
    rendered.
    """
    options: dict[str, Any] = {
        "autoescape": config.autoescape,
        "auto_reload": config.debug,
        "trim_blocks": config.trim_blocks,
        "lstrip_blocks": config.lstrip_blocks,
    }
    if config.template_dir is not None:
        options["loader"] = FileSystemLoader(str(config.template_dir))
    return Environment(**options)


def template_context(node: Node, context: RenderContext) -> dict[str, Any]:
    """Build the variables a node template sees.

    Path kwargs are also exposed as top-level names (``{{ id }}``); the
    fixed names below take precedence over them.
    """
    return {
        **context.kwargs,
        "record": context.record,
        "data_source": context.data_source,
        "args": context.args,
        "kwargs": context.kwargs,
        "full_path": context.full_path,
        "path": "/".join(context.full_path),
        "node": node,
    }


def render_node(template: Template, node: Node, context: RenderContext) -> str:
    """Render a node's compiled template to a string."""
    return template.render(template_context(node, context))
