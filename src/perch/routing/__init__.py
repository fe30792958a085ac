"""Routing: segment patterns, tree nodes, and depth-first traversal.

Trees are built from nodes, bound once by a ``RootNode``, and then
traversed any number of times without being modified.
"""

from perch.routing.node import Node, RenderContext, Step
from perch.routing.pattern import (
    CompiledMatcher,
    LiteralPattern,
    Matcher,
    NamedPattern,
    PatternSpec,
    compile_pattern,
)
from perch.routing.root import RootNode, normalize_path, split_path
from perch.routing.traversal import Traversal, Traverser

__all__ = [
    "CompiledMatcher",
    "LiteralPattern",
    "Matcher",
    "NamedPattern",
    "Node",
    "PatternSpec",
    "RenderContext",
    "RootNode",
    "Step",
    "Traversal",
    "Traverser",
    "compile_pattern",
    "normalize_path",
    "split_path",
]
