"""
Pytest configuration and shared fixtures.

The project uses a flat module layout, so the repository root is put on
``sys.path`` before any test module imports ``graph`` or ``maze``.
"""

import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from graph import Graph


@pytest.fixture
def triangle() -> Graph:
    """A-B weight 1, B-C weight 2, A-C weight 4."""
    return Graph.from_edges([("A", "B", 1), ("B", "C", 2), ("A", "C", 4)])


@pytest.fixture
def two_components() -> Graph:
    return Graph.from_edges([("A", "B", 1), ("C", "D", 1)])


def is_spanning_tree(tree: Graph, names) -> bool:
    """True if ``tree`` covers exactly ``names`` with N-1 edges and is connected."""
    names = set(names)
    if {node.name for node in tree.all_nodes()} != names:
        return False
    if len(tree.edges()) != len(names) - 1:
        return False
    if not names:
        return True
    start = min(names)
    return {start, *tree.traversal_order(start)} == names
