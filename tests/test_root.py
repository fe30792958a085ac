"""Tests for perch.routing.root: path normalization and the entry point."""

import pytest

from perch.events import DestinationReached
from perch.routing.node import Node
from perch.routing.root import RootNode, normalize_path, split_path


class TestNormalizePath:
    @pytest.mark.parametrize("raw", ["", "/", None])
    def test_root_paths_become_empty(self, raw: str | None) -> None:
        assert normalize_path(raw) == ""

    def test_leading_slash_added(self) -> None:
        assert normalize_path("foo/bar") == "/foo/bar"

    def test_leading_slash_kept(self) -> None:
        assert normalize_path("/foo") == "/foo"


class TestSplitPath:
    @pytest.mark.parametrize("raw", ["", "/", None])
    def test_root_paths(self, raw: str | None) -> None:
        segments = split_path(raw)
        assert segments == ("",)
        assert segments[0] == ""

    def test_relative_path(self) -> None:
        assert split_path("foo/bar") == ("", "foo", "bar")

    def test_absolute_path(self) -> None:
        assert split_path("/posts/5") == ("", "posts", "5")

    def test_trailing_slash_yields_empty_segment(self) -> None:
        assert split_path("/posts/") == ("", "posts", "")

    @pytest.mark.parametrize("raw", ["a", "/a", "a/b/c", "//x"])
    def test_first_segment_always_empty(self, raw: str) -> None:
        assert split_path(raw)[0] == ""


class TestVisit:
    def test_returns_traversal(self) -> None:
        root = RootNode(children=Node(url_match="about"))
        traversal = root.visit("about")

        assert traversal.path == "/about"
        assert traversal.segments == ("", "about")
        assert traversal.reached is True

    def test_default_path_is_root(self) -> None:
        root = RootNode()
        traversal = root.visit()

        assert traversal.destination is not None
        assert traversal.destination.node is root

    def test_trailing_slash_needs_empty_matching_child(self) -> None:
        about = Node(url_match="about", children=Node(url_match=""))
        root = RootNode(children=about)

        assert root.visit("/about/").reached is True

    def test_trailing_slash_without_child_fails(self) -> None:
        root = RootNode(children=Node(url_match="about"))
        traversal = root.visit("/about/")

        assert traversal.failure is not None
        assert traversal.failure.remaining == ("",)

    def test_root_with_own_pattern_rejects_everything(self) -> None:
        root = RootNode(url_match="app")
        traversal = root.visit("/app")

        assert traversal.steps == []
        assert traversal.reached is False


class TestCurrentNode:
    def test_none_before_any_visit(self) -> None:
        root = RootNode()
        assert root.current_node is None
        assert root.current is None

    def test_tracks_latest_destination(self) -> None:
        a = Node(url_match="a")
        b = Node(url_match="b")
        root = RootNode(children=[a, b])

        root.visit("/a")
        assert root.current_node is a
        root.visit("/b")
        assert root.current_node is b
        assert root.current is not None
        assert root.current.full_path == ("", "b")

    def test_unchanged_by_failed_traversal(self) -> None:
        a = Node(url_match="a")
        root = RootNode(children=a)

        root.visit("/a")
        root.visit("/nowhere")

        assert root.current_node is a

    def test_updated_before_listeners_run(self) -> None:
        seen: list[object] = []
        leaf = Node(url_match="x")
        root = RootNode(children=leaf)
        root.subscribe(
            lambda event: seen.append(root.current_node) if isinstance(event, DestinationReached) else None
        )

        root.visit("/x")

        assert seen == [leaf]
