from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .errors import EmptyStock, IllegalMove
from .hand import arrange, is_winning, move_tile as move_tile_in_hand, place_tile, tile_at
from .move import Move, MoveKind
from .state import GameEvent, RoundOutcome, RoundState, Seat

logger = logging.getLogger(__name__)

_SEATS = {seat.value for seat in Seat}


def _column_in_rack(state: RoundState, column: Optional[int]) -> bool:
    return column is None or 1 <= column <= state.ruleset.last_column


def is_legal_move(state: RoundState, move: Move) -> Tuple[bool, str]:
    if state.is_over:
        return False, "round already finished"

    ruleset = state.ruleset
    seat = state.active_player
    hand = state.hand(seat)

    if move.kind in (MoveKind.MOVE, MoveKind.ARRANGE):
        if move.seat not in _SEATS:
            return False, "unknown seat"
        if move.kind == MoveKind.ARRANGE:
            return True, ""
        if move.from_column is None or move.to_column is None:
            return False, "move needs both columns"
        if tile_at(state.hand(Seat(move.seat)), move.from_column) is None:
            return False, f"no tile at column {move.from_column}"
        if not _column_in_rack(state, move.to_column):
            return False, f"column {move.to_column} is outside the rack"
        return True, ""

    if move.kind in (MoveKind.DRAW, MoveKind.CLAIM):
        if len(hand) != ruleset.hand_size:
            return False, f"hand must hold {ruleset.hand_size} tiles to pull"
        if not _column_in_rack(state, move.column):
            return False, f"column {move.column} is outside the rack"
        if move.kind == MoveKind.CLAIM and state.top_discard(seat.previous()) is None:
            return False, "no discard to claim"
        return True, ""

    if move.kind == MoveKind.DISCARD:
        if len(hand) != ruleset.winning_hand_size():
            return False, f"hand must hold {ruleset.winning_hand_size()} tiles to discard"
        if not any(t.tile_id == move.tile_id for t in hand):
            return False, "cannot discard a tile not in hand"
        return True, ""

    if move.kind == MoveKind.DECLARE:
        if not is_winning(hand, state.wildcard, ruleset):
            return False, "hand is not a winning hand"
        return True, ""

    return False, "unknown move kind"


def _advance_player(state: RoundState) -> None:
    state.active_player = state.active_player.next()
    state.turn_number += 1


def _log_event(state: RoundState, seat: int, move: Move, **extra) -> None:
    payload = move.payload()
    payload.update(extra)
    state.event_log.append(GameEvent(seat=int(seat), move_kind=move.kind.value, payload=payload))


def _apply_draw(state: RoundState, move: Move) -> None:
    seat = state.active_player
    try:
        tile = state.take_from_stock()
    except EmptyStock:
        state.outcome = RoundOutcome.STOCK_EXHAUSTED
        _log_event(state, seat, move)
        logger.info("stock exhausted on seat %d's draw, round ends without a winner", seat)
        return
    state.set_hand(seat, place_tile(state.hand(seat), tile, move.column, state.ruleset))
    _log_event(state, seat, move, tile_id=tile.tile_id)


def _apply_claim(state: RoundState, move: Move) -> None:
    seat = state.active_player
    tile = state.discards_from(seat.previous()).pop()
    state.set_hand(seat, place_tile(state.hand(seat), tile, move.column, state.ruleset))
    _log_event(state, seat, move, tile_id=tile.tile_id)


def _apply_discard(state: RoundState, move: Move) -> None:
    seat = state.active_player
    hand = state.hand(seat)
    tile = next(t for t in hand if t.tile_id == move.tile_id)
    state.set_hand(seat, [t for t in hand if t.tile_id != move.tile_id])
    state.discards_from(seat).append(tile.with_column(None))
    _log_event(state, seat, move)
    _advance_player(state)


def _apply_move_tile(state: RoundState, move: Move) -> None:
    seat = Seat(move.seat)
    state.set_hand(seat, move_tile_in_hand(state.hand(seat), move.from_column, move.to_column, state.ruleset))
    _log_event(state, seat, move)


def _apply_arrange(state: RoundState, move: Move) -> None:
    seat = Seat(move.seat)
    state.set_hand(seat, arrange(state.hand(seat), state.wildcard, state.ruleset))
    _log_event(state, seat, move)


def _apply_declare(state: RoundState, move: Move) -> None:
    state.outcome = RoundOutcome.WON
    state.winner = state.active_player
    _log_event(state, state.active_player, move)
    logger.info("seat %d wins after %d turns", state.winner, state.turn_number)


_HANDLERS = {
    MoveKind.DRAW: _apply_draw,
    MoveKind.CLAIM: _apply_claim,
    MoveKind.DISCARD: _apply_discard,
    MoveKind.MOVE: _apply_move_tile,
    MoveKind.ARRANGE: _apply_arrange,
    MoveKind.DECLARE: _apply_declare,
}


def apply_move(state: RoundState, move: Move) -> RoundState:
    legal, reason = is_legal_move(state, move)
    if not legal:
        raise IllegalMove(f"illegal move: {reason}")

    new_state = state.copy()
    _HANDLERS[move.kind](new_state, move)
    return new_state


def _apply_tolerant(state: RoundState, move: Move) -> RoundState:
    try:
        return apply_move(state, move)
    except IllegalMove as exc:
        logger.debug("ignored %s from seat %d: %s", move.kind.value, state.active_player, exc)
        return state


def draw_from_stock(state: RoundState, column: Optional[int] = None) -> RoundState:
    return _apply_tolerant(state, Move.draw(column))


def claim_discard(state: RoundState, from_seat: Optional[int] = None, column: Optional[int] = None) -> RoundState:
    """Take the newest tile discarded to the active seat.

    Only the previous seat's stack may be claimed; any other ``from_seat`` is
    ignored.
    """
    if from_seat is not None and from_seat != state.active_player.previous():
        logger.debug("ignored CLAIM from seat %s by seat %d", from_seat, state.active_player)
        return state
    return _apply_tolerant(state, Move.claim(column))


def discard(state: RoundState, tile_id: str) -> RoundState:
    return _apply_tolerant(state, Move.discard(tile_id))


def move_tile(state: RoundState, seat: int, from_column: int, to_column: int) -> RoundState:
    return _apply_tolerant(state, Move.move_tile(seat, from_column, to_column))


def auto_arrange(state: RoundState, seat: int) -> RoundState:
    return _apply_tolerant(state, Move.arrange(seat))


def declare_win(state: RoundState) -> RoundState:
    return _apply_tolerant(state, Move.declare())


def replay_event_log(initial_state: RoundState, events: List[GameEvent]) -> RoundState:
    state = initial_state.copy()
    for event in events:
        try:
            kind = MoveKind(event.move_kind)
        except ValueError:
            raise ValueError(f"Unknown event kind {event.move_kind}") from None
        state = apply_move(state, Move(kind, **event.payload))
    return state
