"""Session layer: puzzle lifecycle, player moves, undo, and notifications."""

from hashi.session.game import (
    GameSession,
    MoveRecord,
    SessionError,
    SessionEvent,
    SessionEventType,
    player_view,
)

__all__ = [
    "GameSession",
    "MoveRecord",
    "SessionError",
    "SessionEvent",
    "SessionEventType",
    "player_view",
]
