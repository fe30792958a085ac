"""Tests for perch.config: NodeConfig and TreeConfig frozen dataclasses."""

import re

import pytest

from perch.config import NodeConfig, TreeConfig
from perch.errors import ConfigurationError
from perch.routing.node import Node


class TestNodeConfig:
    def test_defaults(self) -> None:
        cfg = NodeConfig()

        assert cfg.children == ()
        assert cfg.url_match is None
        assert cfg.kwarg_keys is None
        assert cfg.collection is None
        assert cfg.auto_render is None
        assert cfg.template is None
        assert cfg.attributes == {}

    def test_frozen(self) -> None:
        cfg = NodeConfig()

        with pytest.raises(AttributeError):
            cfg.url_match = "x"  # type: ignore[misc]

    def test_single_child_listified(self) -> None:
        child = Node()
        assert NodeConfig(children=child).children == (child,)  # type: ignore[arg-type]

    def test_child_list_becomes_tuple(self) -> None:
        a, b = Node(), Node()
        assert NodeConfig(children=[a, b]).children == (a, b)  # type: ignore[arg-type]

    def test_non_node_child_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="only Node instances"):
            NodeConfig(children=["posts"])  # type: ignore[list-item]

    def test_bad_children_type_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="children must be"):
            NodeConfig(children=42)  # type: ignore[arg-type]

    def test_kwarg_keys_become_tuple(self) -> None:
        cfg = NodeConfig(url_match=re.compile(r"(\d+)"), kwarg_keys=["id"])  # type: ignore[arg-type]
        assert cfg.kwarg_keys == ("id",)

    def test_kwarg_keys_string_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="sequence of names"):
            NodeConfig(kwarg_keys="id")  # type: ignore[arg-type]

    def test_auto_render_must_be_tristate(self) -> None:
        with pytest.raises(ConfigurationError, match="auto_render"):
            NodeConfig(auto_render="yes")  # type: ignore[arg-type]

    def test_template_sources_exclusive(self) -> None:
        with pytest.raises(ConfigurationError, match="mutually exclusive"):
            NodeConfig(template="x", template_name="x.html")

    def test_merge(self) -> None:
        base = NodeConfig(url_match=":id", auto_render=False)
        merged = base.merge(auto_render=True, class_name="post")

        assert merged.url_match == ":id"
        assert merged.auto_render is True
        assert merged.class_name == "post"
        assert base.auto_render is False

    def test_merge_unknown_option(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown node option\\(s\\): colour, urlMatch"):
            NodeConfig().merge(urlMatch=":id", colour="red")

    def test_merge_template_clears_template_name(self) -> None:
        merged = NodeConfig(template_name="a.html").merge(template="inline")
        assert merged.template == "inline"
        assert merged.template_name is None

    def test_merge_both_templates_still_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="mutually exclusive"):
            NodeConfig().merge(template="x", template_name="x.html")

    def test_explicit_options(self) -> None:
        cfg = NodeConfig(url_match=":id", attributes={"role": "main"}, auto_render=False)
        assert cfg.explicit_options() == {
            "url_match": ":id",
            "attributes": {"role": "main"},
            "auto_render": False,
        }

    def test_explicit_options_empty_by_default(self) -> None:
        assert NodeConfig().explicit_options() == {}


class TestTreeConfig:
    def test_defaults(self) -> None:
        cfg = TreeConfig()

        assert cfg.template_dir is None
        assert cfg.autoescape is True
        assert cfg.trim_blocks is True
        assert cfg.lstrip_blocks is True
        assert cfg.debug is False
        assert cfg.auto_render is True

    def test_override(self) -> None:
        cfg = TreeConfig(template_dir="templates", auto_render=False)

        assert cfg.template_dir == "templates"
        assert cfg.auto_render is False

    def test_frozen(self) -> None:
        cfg = TreeConfig()

        with pytest.raises(AttributeError):
            cfg.debug = True  # type: ignore[misc]
