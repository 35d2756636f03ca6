"""Turn procedure for computer-controlled seats.

A bot claims the discard offered to it only when taking it raises the
arranged score, otherwise it draws. After pulling it arranges its rack,
declares if the hand wins and else throws the tile in the highest column.
Nothing here sleeps or draws random numbers; pacing belongs to the caller.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .engine import apply_move
from .hand import arrange, highest_column_tile, is_winning, score
from .move import Move
from .rules import DEFAULT_RULESET, Ruleset
from .state import RoundState
from .tiles import Tile, TileValue

logger = logging.getLogger(__name__)


def hand_score(tiles: Sequence[Tile], wildcard: Optional[TileValue], ruleset: Ruleset = DEFAULT_RULESET) -> int:
    return score(arrange(tiles, wildcard, ruleset), ruleset)


def choose_pull(state: RoundState) -> Move:
    seat = state.active_player
    hand = state.hand(seat)
    offered = state.top_discard(seat.previous())
    if offered is not None:
        baseline = hand_score(hand, state.wildcard, state.ruleset)
        candidate = hand_score(hand + [offered], state.wildcard, state.ruleset)
        if candidate > baseline:
            logger.debug("seat %d claims %s (%d -> %d)", seat, offered.short(), baseline, candidate)
            return Move.claim()
    return Move.draw()


def choose_discard(state: RoundState) -> Move:
    tile = highest_column_tile(state.hand(state.active_player))
    if tile is None:
        raise ValueError("nothing to discard")
    return Move.discard(tile.tile_id)


def play_bot_turn(state: RoundState) -> RoundState:
    if state.is_over:
        return state
    ruleset = state.ruleset
    seat = state.active_player

    # the dealer opens with a full hand and skips the pull
    if len(state.hand(seat)) == ruleset.hand_size:
        state = apply_move(state, choose_pull(state))
        if state.is_over:
            return state

    state = apply_move(state, Move.arrange(seat))
    if is_winning(state.hand(seat), state.wildcard, ruleset):
        return apply_move(state, Move.declare())
    return apply_move(state, choose_discard(state))
