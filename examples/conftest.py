"""Fixtures for the example trees.

Each example directory holds an ``app.py`` that builds a module-level
``root`` and a ``test_app.py`` that exercises it. Binding claims every
node in the tree, so a tree cannot be rebuilt from nodes that are
already bound. ``example_root`` re-runs ``app.py`` for every test, which
gives each test its own nodes, collections and event relay.
"""

import runpy
from pathlib import Path

import pytest

from perch.routing.root import RootNode


@pytest.fixture
def example_root(request: pytest.FixtureRequest) -> RootNode:
    """The ``root`` built by the ``app.py`` next to the requesting test."""
    app_path = Path(request.path).parent / "app.py"
    namespace = runpy.run_path(str(app_path), run_name=f"example_{app_path.parent.name}")
    return namespace["root"]
