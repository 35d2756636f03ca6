import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from okey.engine import (
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
from okey.errors import EmptyStock, IllegalMove
from okey.hand import score, tile_at
from okey.move import Move
from okey.state import GameEvent, RoundOutcome, Seat, new_round
from okey.tiles import Color, Tile, TileValue, build_pool, tile_id_for


def _fixed_round():
    # indicator is red 1, so red 2 is the wildcard
    return new_round(pool=build_pool())


def _ids(tiles):
    return [t.tile_id for t in tiles]


def test_fixed_round_wildcard():
    state = _fixed_round()
    assert state.indicator.tile_id == "c11-1"
    assert state.wildcard == TileValue(2, Color.RED)
    assert state.active_player == Seat.FIRST


def test_dealer_must_discard_before_drawing():
    state = _fixed_round()
    assert draw_from_stock(state) is state
    legal, reason = is_legal_move(state, Move.draw())
    assert not legal
    assert "14" in reason
    with pytest.raises(IllegalMove):
        apply_move(state, Move.draw())


def test_discard_passes_the_turn():
    state = _fixed_round()
    after = discard(state, "c11-13")
    assert after.active_player == Seat.SECOND
    assert after.turn_number == 1
    assert len(after.hand(Seat.FIRST)) == 14
    assert after.top_discard(Seat.FIRST).tile_id == "c11-13"
    assert after.top_discard(Seat.FIRST).column is None
    assert len(state.hand(Seat.FIRST)) == 15


def test_discard_of_unknown_tile_is_ignored():
    state = _fixed_round()
    assert discard(state, "c41-1") is state


def test_claim_takes_previous_seat_discard():
    state = discard(_fixed_round(), "c11-13")
    assert claim_discard(state, from_seat=Seat.THIRD) is state

    after = claim_discard(state, from_seat=Seat.FIRST)
    assert "c11-13" in _ids(after.hand(Seat.SECOND))
    assert len(after.hand(Seat.SECOND)) == 15
    assert after.discards_from(Seat.FIRST) == []
    assert after.stock_size == state.stock_size


def test_claim_needs_a_discard():
    state = discard(_fixed_round(), "c11-13")
    state.discards_from(Seat.FIRST).clear()
    legal, reason = is_legal_move(state, Move.claim())
    assert not legal
    assert reason == "no discard to claim"


def test_draw_takes_head_of_stock():
    state = discard(_fixed_round(), "c11-13")
    head = state.stock[0]
    assert head.tile_id == "c31-7"

    after = draw_from_stock(state)
    drawn = [t for t in after.hand(Seat.SECOND) if t.tile_id == head.tile_id]
    assert drawn and drawn[0].column == 15
    assert after.stock_size == state.stock_size - 1

    after = draw_from_stock(state, column=20)
    assert tile_at(after.hand(Seat.SECOND), 20).tile_id == head.tile_id


def test_empty_stock_ends_round_without_winner():
    state = discard(_fixed_round(), "c11-13")
    state.stock_index = len(state.stock_order)
    with pytest.raises(EmptyStock):
        state.copy().take_from_stock()

    after = draw_from_stock(state)
    assert after.outcome == RoundOutcome.STOCK_EXHAUSTED
    assert after.winner is None
    assert after.is_over
    assert len(after.hand(Seat.SECOND)) == 14
    assert discard(after, "c12-4") is after


def test_move_tile_on_any_rack():
    state = _fixed_round()
    after = move_tile(state, Seat.THIRD, 1, 20)
    assert tile_at(after.hand(Seat.THIRD), 20).tile_id == "c21-5"
    assert tile_at(after.hand(Seat.THIRD), 1) is None
    assert move_tile(state, Seat.THIRD, 25, 1) is state
    assert move_tile(state, 9, 1, 2) is state


def test_auto_arrange_lays_out_the_rack():
    after = auto_arrange(_fixed_round(), Seat.FIRST)
    hand = after.hand(Seat.FIRST)
    assert len(hand) == 15
    assert tile_at(hand, 1).tile_id == "c11-3"
    assert tile_at(hand, 12).tile_id == "c12-1"
    assert tile_at(hand, 26).tile_id == "c12-3"
    assert {tile_at(hand, 24).tile_id, tile_at(hand, 25).tile_id} == {"c11-2", "c12-2"}
    assert score(hand) == 12


def test_declare_win_ends_the_round():
    state = _fixed_round()
    assert declare_win(state) is state

    winning = (
        [Tile(tile_id_for(Color.BLUE, 1, n), n, Color.BLUE) for n in range(1, 8)]
        + [Tile(tile_id_for(Color.YELLOW, 1, n), n, Color.YELLOW) for n in range(1, 8)]
        + [Tile(tile_id_for(Color.GREEN, 1, 13), 13, Color.GREEN)]
    )
    state.set_hand(Seat.FIRST, winning)
    after = declare_win(state)
    assert after.outcome == RoundOutcome.WON
    assert after.winner == Seat.FIRST
    assert after.event_log[-1].move_kind == "DECLARE"
    legal, reason = is_legal_move(after, Move.discard("c21-1"))
    assert not legal and reason == "round already finished"


def test_replay_reproduces_round():
    base = _fixed_round()
    state = discard(base, "c11-13")
    state = claim_discard(state)
    state = move_tile(state, Seat.SECOND, 1, 22)
    state = discard(state, "c12-4")
    state = draw_from_stock(state)
    state = auto_arrange(state, Seat.THIRD)
    assert [e.move_kind for e in state.event_log] == ["DISCARD", "CLAIM", "MOVE", "DISCARD", "DRAW", "ARRANGE"]

    replayed = replay_event_log(base, state.event_log)
    assert replayed.state_key() == state.state_key()
    assert replayed.stable_hash() == state.stable_hash()


def test_replay_rejects_unknown_event():
    with pytest.raises(ValueError):
        replay_event_log(_fixed_round(), [GameEvent(seat=1, move_kind="SHUFFLE", payload={})])
