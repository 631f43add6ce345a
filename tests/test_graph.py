import itertools
import random

import networkx as nx
import pytest

from conftest import is_spanning_tree
from graph import (
    DisconnectedGraphError,
    Graph,
    GraphError,
    NegativeWeightError,
    NotAdjacentError,
    UnknownNodeError,
    UnreachableNodesError,
)
from maze import build_grid_graph


def random_connected_graph(seed: int, size: int, extra_edges: int) -> Graph:
    rng = random.Random(seed)
    names = [chr(ord("A") + i) for i in range(size)]
    graph = Graph()
    for name in names:
        graph.get_or_create_node(name)
    # A random spanning path keeps the graph connected before extra edges are added.
    order = names[:]
    rng.shuffle(order)
    for origin, target in zip(order[:-1], order[1:]):
        graph.node(origin).add_undirected_edge(graph.node(target), rng.randint(0, 9))
    for _ in range(extra_edges):
        origin, target = rng.sample(names, 2)
        graph.node(origin).add_undirected_edge(graph.node(target), rng.randint(0, 9))
    return graph


def brute_force_mst_weight(graph: Graph) -> int:
    names = [node.name for node in graph.all_nodes()]
    edges = graph.edges()
    best = None
    for subset in itertools.combinations(edges, len(names) - 1):
        candidate = Graph.from_edges(subset)
        if is_spanning_tree(candidate, names):
            weight = sum(weight for _, _, weight in subset)
            if best is None or weight < best:
                best = weight
    return best


def as_nx(graph: Graph) -> nx.Graph:
    g = nx.Graph()
    g.add_nodes_from(node.name for node in graph.all_nodes())
    for origin, target, weight in graph.edges():
        g.add_edge(origin, target, weight=weight)
    return g


class TestNode:
    def test_get_or_create_returns_same_object(self):
        graph = Graph()
        first = graph.get_or_create_node("A")
        assert graph.get_or_create_node("A") is first
        assert len(graph) == 1

    def test_contains_node_has_no_side_effect(self):
        graph = Graph()
        assert not graph.contains_node("A")
        assert "A" not in graph
        assert len(graph) == 0

    def test_edges_are_symmetric(self):
        graph = Graph()
        a, b = graph.get_or_create_node("A"), graph.get_or_create_node("B")
        a.add_undirected_edge(b, 7)
        assert a.has_edge(b) and b.has_edge(a)
        assert a.weight_to(b) == b.weight_to(a) == 7

    def test_readding_edge_overwrites_weight(self):
        graph = Graph()
        a, b, c = (graph.get_or_create_node(name) for name in "ABC")
        a.add_undirected_edge(b, 3)
        a.add_undirected_edge(c, 1)
        b.add_undirected_edge(a, 5)
        assert a.weight_to(b) == 5
        assert [n.name for n in a.neighbors()] == ["B", "C"]
        assert graph.edges() == [("A", "B", 5), ("A", "C", 1)]

    def test_weight_to_non_neighbor_raises(self, triangle):
        lonely = triangle.get_or_create_node("D")
        with pytest.raises(NotAdjacentError):
            triangle.node("A").weight_to(lonely)

    def test_zero_weight_edge_is_distinct_from_missing_edge(self):
        graph = Graph.from_edges([("A", "B", 0)])
        assert graph.node("A").weight_to(graph.node("B")) == 0

    def test_negative_weight_rejected(self):
        graph = Graph()
        with pytest.raises(NegativeWeightError):
            graph.get_or_create_node("A").add_undirected_edge(graph.get_or_create_node("B"), -1)


class TestTraversal:
    def test_start_node_is_never_visited(self, triangle):
        assert "A" not in triangle.traversal_order("A")
        assert "A" not in triangle.traversal_order("A", depth_first=True)

    def test_unknown_start_fails_fast(self, triangle):
        with pytest.raises(UnknownNodeError):
            triangle.breadth_first_search("Z", lambda node: None)
        with pytest.raises(UnknownNodeError):
            triangle.depth_first_search("Z", lambda node: None)
        assert "Z" not in triangle

    def test_isolated_start_visits_nothing(self):
        graph = Graph()
        graph.get_or_create_node("A")
        assert graph.traversal_order("A") == []

    def test_grid_orders_are_deterministic(self):
        grid = build_grid_graph(3, 3)
        assert grid.traversal_order("r0c0") == [
            "r1c0", "r0c1", "r2c0", "r1c1", "r0c2", "r2c1", "r1c2", "r2c2",
        ]
        assert grid.traversal_order("r0c0", depth_first=True) == [
            "r1c0", "r0c1", "r1c1", "r0c2", "r1c2", "r2c2", "r2c1", "r2c0",
        ]

    @pytest.mark.parametrize("seed", range(5))
    def test_each_reachable_node_visited_once(self, seed):
        graph = random_connected_graph(seed, size=6, extra_edges=8)
        graph.get_or_create_node("Z")
        for depth_first in (False, True):
            order = graph.traversal_order("A", depth_first=depth_first)
            assert len(order) == len(set(order))
            assert set(order) == {"B", "C", "D", "E", "F"}

    def test_bfs_and_dfs_cover_the_same_component(self, two_components):
        bfs = set(two_components.traversal_order("C"))
        dfs = set(two_components.traversal_order("C", depth_first=True))
        assert bfs == dfs == {"D"}

    def test_cycles_do_not_cause_revisits(self):
        grid = build_grid_graph(4, 4)
        calls = []
        grid.depth_first_search("r0c0", calls.append)
        assert len(calls) == 15


class TestDijkstra:
    def test_triangle_prefers_cheaper_two_hop_path(self, triangle):
        costs = triangle.dijkstra("A")
        assert {node.name: cost for node, cost in costs.items()} == {"A": 0, "B": 1, "C": 3}

    def test_grid_costs(self):
        costs = build_grid_graph(2, 2).dijkstra("r0c0")
        assert {node.name: cost for node, cost in costs.items()} == {
            "r0c0": 0,
            "r0c1": 1,
            "r1c0": 1,
            "r1c1": 2,
        }

    def test_unit_weights_match_hop_distance(self):
        grid = build_grid_graph(4, 5)
        costs = {node.name: cost for node, cost in grid.dijkstra("r1c2").items()}
        assert costs == nx.single_source_shortest_path_length(as_nx(grid), "r1c2")

    @pytest.mark.parametrize("seed", range(8))
    def test_matches_networkx(self, seed):
        graph = random_connected_graph(seed, size=7, extra_edges=10)
        costs = {node.name: cost for node, cost in graph.dijkstra("A").items()}
        assert costs == nx.single_source_dijkstra_path_length(as_nx(graph), "A")

    def test_unreachable_nodes_raise(self, two_components):
        with pytest.raises(UnreachableNodesError) as excinfo:
            two_components.dijkstra("A")
        assert excinfo.value.unreachable == ["C", "D"]
        assert {node.name for node in excinfo.value.settled} == {"A", "B"}
        assert isinstance(excinfo.value, GraphError)

    def test_unknown_start_raises(self, triangle):
        with pytest.raises(UnknownNodeError):
            triangle.dijkstra("Z")

    def test_shortest_path(self, triangle):
        assert triangle.shortest_path("A", "C") == (3, ["A", "B", "C"])
        assert triangle.shortest_path("B", "B") == (0, ["B"])

    def test_shortest_path_tolerates_other_components(self, two_components):
        assert two_components.shortest_path("C", "D") == (1, ["C", "D"])
        with pytest.raises(ValueError):
            two_components.shortest_path("A", "D")


class TestPrimJarnik:
    def test_triangle(self, triangle):
        tree = triangle.prim_jarnik()
        assert tree.edges() == [("A", "B", 1), ("B", "C", 2)]
        assert tree.total_weight() == 3

    def test_grid(self):
        tree = build_grid_graph(2, 2).prim_jarnik()
        assert len(tree.edges()) == 3
        assert tree.total_weight() == 3
        assert is_spanning_tree(tree, ["r0c0", "r0c1", "r1c0", "r1c1"])

    def test_result_is_a_new_graph(self, triangle):
        tree = triangle.prim_jarnik()
        assert tree is not triangle
        assert tree.node("A") is not triangle.node("A")
        assert len(triangle.edges()) == 3

    def test_single_node_and_empty_graph(self):
        graph = Graph()
        assert len(graph.prim_jarnik()) == 0
        graph.get_or_create_node("only")
        tree = graph.prim_jarnik()
        assert [node.name for node in tree.all_nodes()] == ["only"]
        assert tree.edges() == []

    def test_disconnected_graph_raises(self, two_components):
        with pytest.raises(DisconnectedGraphError) as excinfo:
            two_components.prim_jarnik()
        assert excinfo.value.spanned == 2
        assert excinfo.value.total == 4

    def test_output_is_reproducible(self):
        first = build_grid_graph(4, 4).prim_jarnik().edges()
        second = build_grid_graph(4, 4).prim_jarnik().edges()
        assert first == second

    @pytest.mark.parametrize("seed", range(10))
    def test_matches_brute_force(self, seed):
        graph = random_connected_graph(seed, size=5 + seed % 2, extra_edges=5)
        tree = graph.prim_jarnik()
        assert is_spanning_tree(tree, [node.name for node in graph.all_nodes()])
        assert tree.total_weight() == brute_force_mst_weight(graph)

    @pytest.mark.parametrize("seed", range(5))
    def test_matches_networkx_on_larger_graphs(self, seed):
        graph = random_connected_graph(seed, size=12, extra_edges=30)
        expected = nx.minimum_spanning_tree(as_nx(graph)).size(weight="weight")
        assert graph.prim_jarnik().total_weight() == expected
