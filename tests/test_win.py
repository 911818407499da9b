"""Tests for degree recomputation, reachability, and the solved check."""

import pytest

from hashi.board.win import compute_degrees, degree_mismatches, is_solved, reachable_from
from hashi.puzzle.types import Edge, Node, Point

SQUARE_LOOP = [
    Edge("n_0", "n_1", 1),  # (1,1)-(3,1)
    Edge("n_1", "n_3", 1),  # (3,1)-(3,3)
    Edge("n_3", "n_2", 1),  # (3,3)-(1,3)
    Edge("n_2", "n_0", 1),  # (1,3)-(1,1)
]


@pytest.fixture
def square_nodes():
    return [
        Node("n_0", Point(1, 1), required_degree=2),
        Node("n_1", Point(3, 1), required_degree=2),
        Node("n_2", Point(1, 3), required_degree=2),
        Node("n_3", Point(3, 3), required_degree=2),
    ]


class TestDegrees:
    """Degrees are recomputed from the edge set."""

    def test_compute_degrees_sums_multiplicity(self):
        nodes = [Node("a", Point(0, 0)), Node("b", Point(0, 2)), Node("c", Point(2, 2))]
        edges = [Edge("a", "b", 2), Edge("b", "c", 1)]
        assert compute_degrees(nodes, edges) == {"a": 2, "b": 3, "c": 1}

    def test_mismatches(self, square_nodes: list[Node]):
        assert degree_mismatches(square_nodes, SQUARE_LOOP[:3]) == ["n_0", "n_2"]
        assert degree_mismatches(square_nodes, SQUARE_LOOP) == []


class TestReachability:
    """BFS over the placed bridges."""

    def test_bfs_ignores_multiplicity(self):
        edges = [Edge("a", "b", 2), Edge("b", "c", 1)]
        assert reachable_from("a", edges) == {"a", "b", "c"}

    def test_isolated_start(self):
        assert reachable_from("x", [Edge("a", "b", 1)]) == {"x"}


class TestIsSolved:
    """Degree-exact and connected means solved."""

    def test_full_loop_solves(self, square_nodes: list[Node]):
        assert is_solved(square_nodes, SQUARE_LOOP)

    def test_three_of_four_edges_not_solved(self, square_nodes: list[Node]):
        assert not is_solved(square_nodes, SQUARE_LOOP[:3])

    def test_current_degree_recomputed(self, square_nodes: list[Node]):
        for node in square_nodes:
            node.current_degree = 99
        is_solved(square_nodes, SQUARE_LOOP[:3])
        assert [n.current_degree for n in square_nodes] == [1, 2, 1, 2]

    def test_degrees_match_but_disconnected(self):
        nodes = [
            Node("a", Point(0, 0), 2),
            Node("b", Point(2, 0), 2),
            Node("c", Point(0, 2), 2),
            Node("d", Point(2, 2), 2),
        ]
        edges = [Edge("a", "b", 2), Edge("c", "d", 2)]
        assert not is_solved(nodes, edges)

    def test_empty_board_unsolved(self):
        assert not is_solved([], [])
