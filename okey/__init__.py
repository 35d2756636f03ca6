"""Okey rule engine package."""

from .rules import Ruleset
from .errors import EmptyStock, IllegalMove, InsufficientTiles, InvalidHandSize, OkeyError
from .tiles import Color, Tile, TileValue
from .meld import Meld, MeldKind, detect_melds, find_runs, find_sets
from .hand import arrange, is_winning, score
from .state import GameEvent, RoundOutcome, RoundState, Seat, distribute, new_round
from .move import Move, MoveKind
from .engine import (
    apply_move,
    auto_arrange,
    claim_discard,
    declare_win,
    discard,
    draw_from_stock,
    is_legal_move,
    move_tile,
    replay_event_log,
)
from .bot import play_bot_turn

__all__ = [
    "Ruleset",
    "OkeyError",
    "InsufficientTiles",
    "EmptyStock",
    "InvalidHandSize",
    "IllegalMove",
    "Color",
    "Tile",
    "TileValue",
    "Meld",
    "MeldKind",
    "find_runs",
    "find_sets",
    "detect_melds",
    "arrange",
    "score",
    "is_winning",
    "GameEvent",
    "RoundOutcome",
    "RoundState",
    "Seat",
    "distribute",
    "new_round",
    "Move",
    "MoveKind",
    "apply_move",
    "is_legal_move",
    "draw_from_stock",
    "claim_discard",
    "discard",
    "move_tile",
    "auto_arrange",
    "declare_win",
    "replay_event_log",
    "play_bot_turn",
]
