from __future__ import annotations

import logging
from collections import deque
from heapq import heappop, heappush
from typing import Callable, Dict, Iterable, List, Optional, Tuple


logger = logging.getLogger(__name__)

NodeVisitor = Callable[["Node"], None]


class GraphError(Exception):
    """Base class for every failure raised by the graph algorithms."""


class UnknownNodeError(GraphError, ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Node {name!r} is not part of the graph.")
        self.name = name


class NotAdjacentError(GraphError, ValueError):
    def __init__(self, origin: str, target: str) -> None:
        super().__init__(f"Edge {origin}-{target} not present in graph.")
        self.origin = origin
        self.target = target


class NegativeWeightError(GraphError, ValueError):
    pass


class NoPathError(GraphError, ValueError):
    pass


class UnreachableNodesError(GraphError, RuntimeError):
    """Dijkstra ran out of candidates before every node was settled."""

    def __init__(self, start: str, unreachable: List[str], settled: Dict["Node", int]) -> None:
        preview = ", ".join(unreachable[:5])
        if len(unreachable) > 5:
            preview += ", ..."
        super().__init__(
            f"{len(unreachable)} node(s) unreachable from {start!r}: {preview}"
        )
        self.start = start
        self.unreachable = unreachable
        self.settled = settled


class DisconnectedGraphError(GraphError, RuntimeError):
    def __init__(self, spanned: int, total: int) -> None:
        super().__init__(
            f"Graph is not connected: spanning tree stopped at {spanned} of {total} nodes."
        )
        self.spanned = spanned
        self.total = total


class Node:
    """Named vertex with a weighted, symmetric adjacency mapping.

    Nodes are only ever handed out by :meth:`Graph.get_or_create_node`, so
    identity equality is name equality within one graph.
    """

    __slots__ = ("name", "_adjacency")

    def __init__(self, name: str) -> None:
        self.name = name
        self._adjacency: Dict[Node, int] = {}

    def __repr__(self) -> str:
        return f"Node({self.name!r})"

    def add_undirected_edge(self, other: Node, weight: int) -> None:
        if weight < 0:
            raise NegativeWeightError(
                f"Edge {self.name}-{other.name} has negative weight {weight}."
            )
        # Re-adding an edge overwrites the weight but keeps its neighbour position.
        self._adjacency[other] = weight
        other._adjacency[self] = weight

    def neighbors(self) -> List[Node]:
        """Adjacent nodes in the order their edge was first added."""
        return list(self._adjacency)

    def has_edge(self, other: Node) -> bool:
        return other in self._adjacency

    def weight_to(self, other: Node) -> int:
        try:
            return self._adjacency[other]
        except KeyError:
            raise NotAdjacentError(self.name, other.name) from None


class Graph:
    """Undirected weighted graph with BFS, DFS, Dijkstra and Prim-Jarnik support."""

    def __init__(self) -> None:
        self._nodes: Dict[str, Node] = {}

    @classmethod
    def from_edges(cls, edges: Iterable[Tuple[str, str, int]]) -> Graph:
        graph = cls()
        for origin, target, weight in edges:
            graph.get_or_create_node(origin).add_undirected_edge(
                graph.get_or_create_node(target), int(weight)
            )
        return graph

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, name: object) -> bool:
        return name in self._nodes

    def get_or_create_node(self, name: str) -> Node:
        node = self._nodes.get(name)
        if node is None:
            node = Node(name)
            self._nodes[name] = node
        return node

    def contains_node(self, name: str) -> bool:
        return name in self._nodes

    def node(self, name: str) -> Node:
        try:
            return self._nodes[name]
        except KeyError:
            raise UnknownNodeError(name) from None

    def all_nodes(self) -> List[Node]:
        return list(self._nodes.values())

    def edges(self) -> List[Tuple[str, str, int]]:
        """Every undirected edge once, as ``(a, b, weight)`` with ``a < b``."""
        seen: Dict[Tuple[str, str], int] = {}
        for node in self._nodes.values():
            for neighbor in node.neighbors():
                key = tuple(sorted((node.name, neighbor.name)))
                seen[key] = node.weight_to(neighbor)
        return sorted((a, b, weight) for (a, b), weight in seen.items())

    def total_weight(self) -> int:
        return sum(weight for _, _, weight in self.edges())

    # Traversals -----------------------------------------------------------

    def breadth_first_search(self, start_name: str, visitor: NodeVisitor) -> None:
        """Visit every node reachable from ``start_name`` in FIFO order.

        The visitor fires once per node at the moment it is first enqueued;
        the start node itself is never passed to it.
        """
        start = self.node(start_name)
        visited = {start}
        queue = deque([start])

        while queue:
            current = queue.popleft()
            for neighbor in current.neighbors():
                if neighbor in visited:
                    continue
                visited.add(neighbor)
                queue.append(neighbor)
                visitor(neighbor)

    def depth_first_search(self, start_name: str, visitor: NodeVisitor) -> None:
        """Same contract as :meth:`breadth_first_search` with a LIFO frontier.

        Neighbours of a popped node are pushed in ``neighbors()`` order, so
        the last neighbour pushed is the next one expanded.
        """
        start = self.node(start_name)
        visited = {start}
        stack = [start]

        while stack:
            current = stack.pop()
            for neighbor in current.neighbors():
                if neighbor in visited:
                    continue
                visited.add(neighbor)
                stack.append(neighbor)
                visitor(neighbor)

    def traversal_order(self, start_name: str, depth_first: bool = False) -> List[str]:
        order: List[str] = []
        search = self.depth_first_search if depth_first else self.breadth_first_search
        search(start_name, lambda node: order.append(node.name))
        return order

    # Shortest paths -------------------------------------------------------

    def _settle(
        self, start_name: str, target_name: Optional[str] = None
    ) -> Tuple[Dict[Node, int], Dict[Node, Node]]:
        """Lazy-deletion Dijkstra; stops early once ``target_name`` settles."""
        start = self.node(start_name)
        settled: Dict[Node, int] = {}
        predecessors: Dict[Node, Node] = {}
        best: Dict[Node, int] = {start: 0}

        # Entries are (cost, name) so equal costs pop in name order.
        queue: List[Tuple[int, str]] = [(0, start.name)]

        while queue and len(settled) < len(self._nodes):
            cost, name = heappop(queue)
            node = self._nodes[name]
            if node in settled:
                continue
            settled[node] = cost
            if name == target_name:
                break

            for neighbor in node.neighbors():
                if neighbor in settled:
                    continue
                candidate = cost + node.weight_to(neighbor)
                if neighbor not in best or candidate < best[neighbor]:
                    best[neighbor] = candidate
                    predecessors[neighbor] = node
                heappush(queue, (candidate, neighbor.name))

        return settled, predecessors

    def dijkstra(self, start_name: str) -> Dict[Node, int]:
        """Minimum cost from ``start_name`` to every node in the graph.

        Raises :class:`UnreachableNodesError` if some node cannot be reached.
        """
        settled, _ = self._settle(start_name)
        logger.debug("dijkstra from %s settled %d/%d nodes", start_name, len(settled), len(self))

        if len(settled) < len(self._nodes):
            unreachable = sorted(
                name for name, node in self._nodes.items() if node not in settled
            )
            raise UnreachableNodesError(start_name, unreachable, settled)
        return settled

    def shortest_path(self, source: str, target: str) -> Tuple[int, List[str]]:
        """Recover both length and explicit path between source and target."""
        target_node = self.node(target)
        settled, predecessors = self._settle(source, target_name=target)
        if target_node not in settled:
            raise NoPathError(f"No path between {source} and {target}.")

        path: List[str] = [target]
        current = target_node
        while current.name != source:
            current = predecessors[current]
            path.append(current.name)
        path.reverse()
        return settled[target_node], path

    # Minimum spanning tree ------------------------------------------------

    def prim_jarnik(self) -> Graph:
        """Minimum spanning tree as a new :class:`Graph`.

        The tree is grown from the lexicographically smallest node name.
        Raises :class:`DisconnectedGraphError` if the graph is not connected.
        """
        tree = Graph()
        if not self._nodes:
            return tree

        seed = self._nodes[min(self._nodes)]
        tree.get_or_create_node(seed.name)

        # Entries are (weight, outside_name, inside_name).
        queue: List[Tuple[int, str, str]] = []

        def push_edges(inside: Node) -> None:
            for neighbor in inside.neighbors():
                if neighbor.name not in tree:
                    heappush(queue, (inside.weight_to(neighbor), neighbor.name, inside.name))

        push_edges(seed)

        while len(tree) < len(self._nodes):
            if not queue:
                raise DisconnectedGraphError(len(tree), len(self._nodes))

            weight, outside_name, inside_name = heappop(queue)
            if outside_name in tree:
                # Both endpoints already spanned; taking it would close a cycle.
                continue

            outside = tree.get_or_create_node(outside_name)
            tree.node(inside_name).add_undirected_edge(outside, weight)
            push_edges(self._nodes[outside_name])

        logger.debug("prim_jarnik spanned %d nodes, total weight %d", len(tree), tree.total_weight())
        return tree
