"""Tests for bridge legality and the player's edge multiset."""

import itertools

import pytest

from hashi.board.state import GraphState
from hashi.generator.builder import generate_puzzle
from hashi.puzzle.types import Edge, Node, NodeIndex, Point
from hashi.reproducibility.seed import make_rng


def _state(**coords: tuple[int, int]) -> GraphState:
    return GraphState([Node(name, Point(x, y)) for name, (x, y) in coords.items()])


@pytest.fixture
def plus_state():
    """Four nodes around (1,1) forming a plus shape."""
    return _state(w=(0, 1), e=(2, 1), n=(1, 0), s=(1, 2))


@pytest.fixture
def column_state():
    """Three nodes stacked in column x=1."""
    return _state(top=(1, 0), mid=(1, 1), bottom=(1, 2))


class TestLegality:
    """legal() rejects unaligned, blocked, and crossing bridges."""

    def test_unaligned_illegal(self):
        state = _state(a=(0, 0), b=(2, 2))
        assert not state.legal("a", "b")

    def test_same_node_illegal(self):
        state = _state(a=(0, 0), b=(2, 0))
        assert not state.legal("a", "a")

    def test_crossing_existing_edge_illegal(self, plus_state: GraphState):
        assert plus_state.legal("n", "s")
        plus_state.toggle("w", "e")
        assert not plus_state.legal("n", "s")
        assert not plus_state.legal("s", "n")

    def test_intervening_node_blocks(self, column_state: GraphState):
        assert not column_state.legal("top", "bottom")
        assert column_state.legal("top", "mid")
        assert column_state.legal("mid", "bottom")

    def test_existing_pair_can_be_updated(self):
        state = _state(a=(0, 0), b=(3, 0))
        state.toggle("a", "b")
        assert state.legal("a", "b")
        state.toggle("a", "b")
        assert state.legal("b", "a")

    def test_edges_sharing_endpoint_exempt(self):
        state = _state(a=(0, 0), b=(2, 0), c=(2, 2))
        state.toggle("a", "b")
        assert state.legal("b", "c")

    def test_symmetric_on_generated_board(self):
        puzzle = generate_puzzle("hard", rng=make_rng(17))
        state = GraphState(puzzle.index)
        for e in puzzle.solution_edges[: len(puzzle.solution_edges) // 2]:
            state.set_multiplicity(e.node_a, e.node_b, e.multiplicity)
        for a, b in itertools.combinations(puzzle.node_ids, 2):
            assert state.legal(a, b) == state.legal(b, a)

    def test_unknown_node_raises(self, plus_state: GraphState):
        with pytest.raises(KeyError):
            plus_state.legal("w", "nowhere")


class TestMutation:
    """toggle and set_multiplicity keep the edge map canonical."""

    def test_toggle_cycles_back_to_absent(self):
        state = _state(a=(0, 0), b=(0, 4))
        assert [state.toggle("a", "b") for _ in range(3)] == [1, 2, 0]
        assert state.current_edges() == ()

    def test_toggle_ignores_pair_order(self):
        state = _state(a=(0, 0), b=(0, 4))
        state.toggle("a", "b")
        assert state.toggle("b", "a") == 2
        assert len(state) == 1
        assert state.multiplicity("b", "a") == 2

    def test_toggle_does_not_check_legality(self, plus_state: GraphState):
        plus_state.toggle("w", "e")
        assert plus_state.toggle("n", "s") == 1

    def test_set_multiplicity(self):
        state = _state(a=(0, 0), b=(0, 4))
        state.set_multiplicity("a", "b", 2)
        assert state.current_edges() == (Edge("a", "b", 2),)
        state.set_multiplicity("b", "a", 0)
        assert state.current_edges() == ()
        assert state.multiplicity("a", "b") == 0

    def test_set_removing_absent_pair_is_fine(self):
        state = _state(a=(0, 0), b=(0, 4))
        state.set_multiplicity("a", "b", 0)
        assert len(state) == 0

    @pytest.mark.parametrize("bad", [-1, 3])
    def test_set_rejects_bad_multiplicity(self, bad: int):
        state = _state(a=(0, 0), b=(0, 4))
        with pytest.raises(ValueError):
            state.set_multiplicity("a", "b", bad)

    def test_set_rejects_unknown_node(self):
        state = _state(a=(0, 0), b=(0, 4))
        with pytest.raises(KeyError):
            state.set_multiplicity("a", "zzz", 1)

    def test_snapshot_is_detached(self):
        state = _state(a=(0, 0), b=(0, 4))
        state.toggle("a", "b")
        snapshot = state.current_edges()
        state.reset()
        assert len(snapshot) == 1
        assert state.current_edges() == ()

    def test_shares_node_index(self):
        index = NodeIndex([Node("a", Point(0, 0)), Node("b", Point(0, 1))])
        state = GraphState(index)
        assert state.index is index
        assert state.nodes[0] is index.node("a")
