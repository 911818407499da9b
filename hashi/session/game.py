"""Game session: the narrow interface the rendering/input layer drives.

One session holds at most one active puzzle. Every mutating call applies
the edge change and then re-evaluates the win condition before returning,
so callers never observe a half-applied move.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable

import numpy as np

from hashi.board.state import GraphState
from hashi.board.win import degree_mismatches, is_solved
from hashi.config.puzzle import Difficulty, GeneratorConfig
from hashi.generator.builder import generate_puzzle
from hashi.puzzle.types import Edge, Node, Puzzle
from hashi.reproducibility.seed import make_rng

log = logging.getLogger(__name__)


class SessionError(Exception):
    """Raised when the session is used before a puzzle has been loaded."""


class SessionEventType(str, Enum):
    PUZZLE_SOLVED = "PUZZLE_SOLVED"
    HISTORY_UPDATE = "HISTORY_UPDATE"


@dataclass(frozen=True, slots=True)
class SessionEvent:
    type: SessionEventType
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """Undo entry: the pair touched and its multiplicity before the move."""

    node_a: str
    node_b: str
    previous_multiplicity: int


def player_view(puzzle: Puzzle) -> Puzzle:
    """Copy of puzzle with its own nodes and the solution edges stripped."""
    nodes = tuple(Node(n.id, n.position, n.required_degree) for n in puzzle.nodes)
    return replace(puzzle, nodes=nodes, solution_edges=())


class GameSession:
    """Drives one Bridges puzzle at a time.

    Args:
        rng: numpy Generator used for every puzzle this session creates.
        generator_config: Retry budget and edge probabilities.
        on_event: Optional callback receiving SessionEvent notifications.
    """

    def __init__(
        self,
        rng: np.random.Generator | None = None,
        generator_config: GeneratorConfig | None = None,
        on_event: Callable[[SessionEvent], None] | None = None,
    ) -> None:
        self.rng = rng if rng is not None else make_rng()
        self.generator_config = generator_config or GeneratorConfig()
        self.on_event = on_event
        self.puzzle: Puzzle | None = None
        self._state: GraphState | None = None
        self._history: list[MoveRecord] = []
        self._solved = False

    # ── Puzzle lifecycle ───────────────────────────────────────────

    def generate_puzzle(self, difficulty: Difficulty | str) -> Puzzle:
        """Create a fresh puzzle for the tier, replacing any previous one.

        Returns the player view: nodes only, no solution edges.
        """
        puzzle = generate_puzzle(
            difficulty, rng=self.rng, generator_config=self.generator_config
        )
        return self.load_puzzle(puzzle)

    def load_puzzle(self, puzzle: Puzzle) -> Puzzle:
        """Start playing an existing puzzle with an empty board.

        The session plays on a private copy of the nodes, so one cached
        Puzzle can back several sessions.
        """
        puzzle = player_view(puzzle)
        self.puzzle = puzzle
        self._state = GraphState(puzzle.index)
        self._history = []
        self._solved = False
        log.info(
            "Session started %s puzzle with %d nodes",
            puzzle.difficulty.value,
            len(puzzle.nodes),
        )
        self._notify_history()
        return puzzle

    def reset_graph_state(self) -> None:
        """Clear every placed bridge and the undo history; nodes stay."""
        state = self._require_state()
        state.reset()
        self._history = []
        self._solved = False
        self._evaluate()
        self._notify_history()

    # ── Core interface ─────────────────────────────────────────────

    def check_candidate_edge(self, node_a: str, node_b: str) -> bool:
        """Pure legality query for a bridge between node_a and node_b."""
        return self._require_state().legal(node_a, node_b)

    def apply_edge_toggle(self, node_a: str, node_b: str) -> int:
        """Cycle the pair's multiplicity, then re-evaluate the win state."""
        new = self._require_state().toggle(node_a, node_b)
        self._evaluate()
        return new

    def apply_edge_set(self, node_a: str, node_b: str, multiplicity: int) -> None:
        """Set the pair's multiplicity exactly, then re-evaluate the win state."""
        self._require_state().set_multiplicity(node_a, node_b, multiplicity)
        self._evaluate()

    def current_win_state(self) -> bool:
        state = self._require_state()
        return is_solved(state.nodes, state.current_edges())

    def current_edges(self) -> tuple[Edge, ...]:
        return self._require_state().current_edges()

    def multiplicity(self, node_a: str, node_b: str) -> int:
        return self._require_state().multiplicity(node_a, node_b)

    # ── Player moves with history ──────────────────────────────────

    @property
    def solved(self) -> bool:
        return self._solved

    @property
    def can_undo(self) -> bool:
        return bool(self._history) and not self._solved

    @property
    def history(self) -> tuple[MoveRecord, ...]:
        return tuple(self._history)

    def connect(self, node_a: str, node_b: str) -> int | None:
        """Player move: toggle the pair if legal, recording it for undo.

        Returns:
            The new multiplicity, or None when the move was refused
            (illegal bridge, same node twice, or puzzle already solved).
        """
        state = self._require_state()
        if self._solved or node_a == node_b:
            return None
        if not state.legal(node_a, node_b):
            log.debug("Refused illegal bridge %s-%s", node_a, node_b)
            return None

        self._history.append(
            MoveRecord(node_a, node_b, state.multiplicity(node_a, node_b))
        )
        self._notify_history()
        return self.apply_edge_toggle(node_a, node_b)

    def undo(self) -> MoveRecord | None:
        """Revert the last recorded move. No-op when empty or solved."""
        self._require_state()
        if not self.can_undo:
            return None
        move = self._history.pop()
        self._notify_history()
        self.apply_edge_set(move.node_a, move.node_b, move.previous_multiplicity)
        return move

    def unsatisfied_nodes(self) -> list[str]:
        """Ids whose placed degree does not yet match the requirement."""
        state = self._require_state()
        return degree_mismatches(state.nodes, state.current_edges())

    # ── Internals ──────────────────────────────────────────────────

    def _require_state(self) -> GraphState:
        if self._state is None:
            raise SessionError("No puzzle loaded; call generate_puzzle first")
        return self._state

    def _evaluate(self) -> None:
        was_solved = self._solved
        self._solved = self.current_win_state()
        if self._solved and not was_solved:
            log.info("Puzzle solved with %d bridges", len(self._require_state()))
            self._emit(SessionEvent(SessionEventType.PUZZLE_SOLVED))

    def _notify_history(self) -> None:
        self._emit(
            SessionEvent(
                SessionEventType.HISTORY_UPDATE, {"can_undo": self.can_undo}
            )
        )

    def _emit(self, event: SessionEvent) -> None:
        if self.on_event is not None:
            self.on_event(event)
