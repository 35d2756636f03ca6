from __future__ import annotations

import argparse
import logging
from typing import Optional

from .bot import hand_score, play_bot_turn
from .rules import Ruleset
from .state import RoundState, Seat, new_round


def run_round(seed: Optional[int] = None, max_turns: int = 500) -> RoundState:
    rules = Ruleset()
    state = new_round(ruleset=rules, rng_seed=seed)
    for _ in range(max_turns):
        if state.is_over:
            break
        state = play_bot_turn(state)
    return state


def main() -> None:
    parser = argparse.ArgumentParser(description="Play a bot-only Okey round.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible tile order.")
    parser.add_argument("--max-turns", type=int, default=500, help="Stop after this many turns.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for the engine.",
    )
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    state = run_round(seed=args.seed, max_turns=args.max_turns)
    print(f"Round finished after {state.turn_number} turns: {state.outcome.value}")
    print(f"Indicator: {state.indicator.short()}, wildcard: {state.wildcard.number}/{state.wildcard.color}")
    if state.winner is not None:
        print(f"Winner: seat {int(state.winner)}")
    else:
        print("No winner")
    print("Stock left:", state.stock_size)
    print("Scores:", [hand_score(state.hand(seat), state.wildcard, state.ruleset) for seat in Seat])


if __name__ == "__main__":
    main()
