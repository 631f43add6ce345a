from __future__ import annotations

import logging
import re
from typing import List, Tuple

from graph import Graph, Node


logger = logging.getLogger(__name__)

_CELL_PATTERN = re.compile(r"^r(\d+)c(\d+)$")


def cell_name(row: int, col: int) -> str:
    return f"r{row}c{col}"


def parse_cell_name(name: str) -> Tuple[int, int]:
    match = _CELL_PATTERN.match(name)
    if match is None:
        raise ValueError(f"{name!r} is not a grid cell name.")
    return int(match.group(1)), int(match.group(2))


def build_grid_graph(rows: int, cols: int) -> Graph:
    """Create a ``rows`` x ``cols`` lattice with unit-weight edges.

    Each cell ``rRcC`` is linked to the cells directly above, below, left
    and right of it, in that order. Every inner edge is added from both
    endpoints, which is harmless because re-adding keeps the same weight.
    """
    if rows <= 0 or cols <= 0:
        raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}.")

    graph = Graph()
    for r in range(rows):
        for c in range(cols):
            current = graph.get_or_create_node(cell_name(r, c))
            offsets = ((r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1))
            for other_r, other_c in offsets:
                if 0 <= other_r < rows and 0 <= other_c < cols:
                    other = graph.get_or_create_node(cell_name(other_r, other_c))
                    current.add_undirected_edge(other, 1)

    logger.debug("built %dx%d grid graph", rows, cols)
    return graph


def maze_passages(grid: Graph, start: str) -> List[Tuple[str, str]]:
    """Passages ``(from, to)`` in the order a depth-first walk carves them.

    Each newly visited cell is joined to the most recently visited cell it
    borders in ``grid``. The history starts with ``start`` itself because the
    traversal never hands the start node to its visitor.
    """
    history: List[Node] = [grid.node(start)]
    passages: List[Tuple[str, str]] = []

    def visit(node: Node) -> None:
        for previous in reversed(history):
            if node.has_edge(previous):
                passages.append((previous.name, node.name))
                break
        history.append(node)

    grid.depth_first_search(start, visit)
    return passages


def extract_maze(grid: Graph, start: str) -> Graph:
    """Spanning tree of ``grid`` whose passages form a maze rooted at ``start``."""
    passages = maze_passages(grid, start)
    maze = Graph()
    maze.get_or_create_node(start)
    for origin, target in passages:
        maze.get_or_create_node(origin).add_undirected_edge(
            maze.get_or_create_node(target), 1
        )

    logger.debug("extracted maze with %d cells from %s", len(maze), start)
    return maze
