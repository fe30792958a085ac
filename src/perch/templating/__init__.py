"""Kida templating for node rendering."""

from perch.templating.integration import create_environment, render_node, template_context

__all__ = ["create_environment", "render_node", "template_context"]
