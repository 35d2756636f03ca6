import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from okey.bot import choose_discard, choose_pull, hand_score, play_bot_turn
from okey.cli import run_round
from okey.engine import discard
from okey.hand import highest_column_tile
from okey.move import Move
from okey.rules import Ruleset
from okey.state import RoundOutcome, Seat, new_round
from okey.tiles import Color, Tile, build_pool, tile_id_for

R, B, G, Y = Color.RED, Color.BLUE, Color.GREEN, Color.YELLOW


def _t(color, number, copy=1):
    return Tile(tile_id_for(color, copy, number), number, color)


def _scattered_hand():
    return [
        _t(R, 5), _t(R, 6),
        _t(B, 1), _t(B, 4), _t(B, 8), _t(B, 11),
        _t(G, 2), _t(G, 9), _t(G, 12), _t(G, 13),
        _t(Y, 3), _t(Y, 7), _t(Y, 10), _t(Y, 12),
    ]


def _second_seat_offered(tile):
    state = discard(new_round(pool=build_pool()), "c11-13")
    state.set_hand(Seat.SECOND, _scattered_hand())
    state.discards_from(Seat.FIRST)[-1] = tile
    return state


def test_bot_claims_discard_that_improves_score():
    offered = Tile("offered-r7", 7, Color.RED)
    state = _second_seat_offered(offered)
    assert hand_score(state.hand(Seat.SECOND), state.wildcard, state.ruleset) == 0
    assert choose_pull(state) == Move.claim()

    after = play_bot_turn(state)
    assert after.discards_from(Seat.FIRST) == []
    assert "offered-r7" in [t.tile_id for t in after.hand(Seat.SECOND)]
    assert len(after.hand(Seat.SECOND)) == 14
    assert after.stock_size == state.stock_size
    assert after.active_player == Seat.THIRD


def test_bot_draws_when_discard_does_not_help():
    state = _second_seat_offered(Tile("offered-y1", 1, Color.YELLOW))
    assert choose_pull(state) == Move.draw()

    after = play_bot_turn(state)
    assert after.stock_size == state.stock_size - 1
    assert after.top_discard(Seat.FIRST).tile_id == "offered-y1"


def test_bot_draws_without_any_discard():
    state = discard(new_round(pool=build_pool()), "c11-13")
    state.discards_from(Seat.FIRST).clear()
    assert choose_pull(state) == Move.draw()


def test_bot_discards_highest_column():
    state = new_round(pool=build_pool())
    expected = highest_column_tile(state.hand(Seat.FIRST))
    assert choose_discard(state) == Move.discard(expected.tile_id)


def test_dealer_bot_skips_the_pull():
    state = new_round(pool=build_pool())
    after = play_bot_turn(state)
    assert after.stock_size == state.stock_size
    assert len(after.hand(Seat.FIRST)) == 14
    # arranged rack keeps the long red run and throws the loose red 3
    assert after.top_discard(Seat.FIRST).tile_id == "c12-3"
    assert after.active_player == Seat.SECOND


def _play_turns(state, turns):
    seen = []
    for _ in range(turns):
        if state.is_over:
            break
        seen.append(int(state.active_player))
        stock_before = state.stock_size
        state = play_bot_turn(state)
        assert 0 <= state.stock_size <= stock_before
    return state, seen


def test_twenty_bot_turns_cycle_players():
    # a 15-tile rack scores at most 14, so nobody can reach 15 and end the round early
    rules = Ruleset(winning_score=15)
    for state in (new_round(rules, pool=build_pool()), new_round(rules, rng_seed=2024)):
        state, seen = _play_turns(state, 20)
        assert not state.is_over
        assert seen == [1, 2, 3, 4] * 5
        assert all(len(state.hand(seat)) == 14 for seat in Seat)


def test_bot_turns_are_deterministic():
    first, _ = _play_turns(new_round(rng_seed=7), 12)
    second, _ = _play_turns(new_round(rng_seed=7), 12)
    assert first.state_key() == second.state_key()


def test_bot_draw_on_empty_stock_ends_round():
    state = discard(new_round(pool=build_pool()), "c11-13")
    state.discards_from(Seat.FIRST).clear()
    state.stock_index = len(state.stock_order)

    after = play_bot_turn(state)
    assert after.is_over
    assert after.outcome == RoundOutcome.STOCK_EXHAUSTED
    assert after.winner is None
    assert after.stock_size == 0
    assert play_bot_turn(after) is after


def test_simulated_round_terminates():
    state = run_round(seed=11, max_turns=2000)
    assert state.is_over
    if state.outcome == RoundOutcome.WON:
        assert state.winner is not None
        assert len(state.hand(state.winner)) == 15
    else:
        assert state.outcome == RoundOutcome.STOCK_EXHAUSTED
        assert state.winner is None
        assert state.stock_size == 0
