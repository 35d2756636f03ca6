from __future__ import annotations

import hashlib
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Optional, Sequence, Tuple

from .errors import EmptyStock, InsufficientTiles
from .rules import Ruleset
from .tiles import (
    Tile,
    TileValue,
    build_pool,
    derive_wildcard_value,
    inject_synthetic_wildcards,
    select_indicator,
)

logger = logging.getLogger(__name__)


class Seat(IntEnum):
    FIRST = 1
    SECOND = 2
    THIRD = 3
    FOURTH = 4

    @property
    def index(self) -> int:
        return self.value - 1

    def next(self) -> "Seat":
        return Seat(self.value % len(Seat) + 1)

    def previous(self) -> "Seat":
        return Seat((self.value - 2) % len(Seat) + 1)


class RoundOutcome(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    WON = "WON"
    STOCK_EXHAUSTED = "STOCK_EXHAUSTED"


@dataclass
class GameEvent:
    seat: int
    move_kind: str
    payload: dict


@dataclass
class RoundState:
    ruleset: Ruleset
    indicator: Tile
    wildcard: TileValue
    hands: List[List[Tile]]
    stock_order: List[Tile]
    stock_index: int
    discards: List[List[Tile]]
    active_player: Seat = Seat.FIRST
    turn_number: int = 0
    outcome: RoundOutcome = RoundOutcome.IN_PROGRESS
    winner: Optional[Seat] = None
    rng_seed: Optional[int] = None
    event_log: List[GameEvent] = field(default_factory=list)

    def hand(self, seat: Seat) -> List[Tile]:
        return self.hands[Seat(seat).index]

    def set_hand(self, seat: Seat, tiles: Sequence[Tile]) -> None:
        self.hands[Seat(seat).index] = list(tiles)

    def discards_from(self, seat: Seat) -> List[Tile]:
        """Outgoing stack of ``seat``, read by the seat after it."""
        return self.discards[Seat(seat).index]

    def top_discard(self, seat: Seat) -> Optional[Tile]:
        stack = self.discards_from(seat)
        return stack[-1] if stack else None

    @property
    def stock(self) -> List[Tile]:
        return self.stock_order[self.stock_index :]

    @property
    def stock_size(self) -> int:
        return len(self.stock_order) - self.stock_index

    @property
    def is_over(self) -> bool:
        return self.outcome != RoundOutcome.IN_PROGRESS

    def take_from_stock(self) -> Tile:
        if self.stock_size <= 0:
            raise EmptyStock("stock is empty")
        tile = self.stock_order[self.stock_index]
        self.stock_index += 1
        return tile

    def copy(self) -> "RoundState":
        return RoundState(
            ruleset=self.ruleset,
            indicator=self.indicator,
            wildcard=self.wildcard,
            hands=[list(h) for h in self.hands],
            stock_order=list(self.stock_order),
            stock_index=self.stock_index,
            discards=[list(d) for d in self.discards],
            active_player=self.active_player,
            turn_number=self.turn_number,
            outcome=self.outcome,
            winner=self.winner,
            rng_seed=self.rng_seed,
            event_log=list(self.event_log),
        )

    def state_key(self) -> Tuple:
        return (
            int(self.active_player),
            self.stock_index,
            self.turn_number,
            tuple(tuple(sorted((t.tile_id, t.column or 0) for t in h)) for h in self.hands),
            tuple(tuple(t.tile_id for t in d) for d in self.discards),
            self.outcome.value,
            None if self.winner is None else int(self.winner),
        )

    def stable_hash(self) -> str:
        return hashlib.sha256(repr(self.state_key()).encode("utf-8")).hexdigest()


def distribute(
    pool: Sequence[Tile], ruleset: Ruleset, rng: Optional[random.Random] = None
) -> Tuple[List[List[Tile]], List[Tile]]:
    """Deal the dealer's hand, then the other hands, and return the stock.

    Every hand is columned 1..N. The pool is shuffled when ``rng`` is given;
    otherwise it is dealt in the given order.

    ``pool`` is everything left to deal: the indicator already removed and the
    synthetic wildcards already added. It must hold at least ``deal_size()``
    tiles (57 under the base rules, i.e. 55 numbered tiles after the
    indicator plus the two jokers).
    """
    needed = ruleset.deal_size()
    if len(pool) < needed:
        raise InsufficientTiles(f"need {needed} tiles to deal, have {len(pool)}")

    order = list(pool)
    if rng is not None:
        rng.shuffle(order)

    hands: List[List[Tile]] = []
    idx = 0
    for seat in Seat:
        size = ruleset.dealer_hand_size if seat == Seat.FIRST else ruleset.hand_size
        dealt = order[idx : idx + size]
        idx += size
        hands.append([tile.with_column(column) for column, tile in enumerate(dealt, start=1)])
    stock = [tile.with_column(None) for tile in order[idx:]]
    return hands, stock


def new_round(
    ruleset: Ruleset | None = None, rng_seed: Optional[int] = None, pool: Optional[Sequence[Tile]] = None
) -> RoundState:
    """Start a round.

    A given ``pool`` is used in its fixed order: its first tile becomes the
    indicator and nothing is shuffled.
    """
    ruleset = ruleset or Ruleset()
    if pool is None:
        rng: Optional[random.Random] = random.Random(rng_seed)
        base = build_pool(ruleset)
    else:
        rng = None
        base = list(pool)

    indicator, remaining = select_indicator(base, rng)
    wildcard = derive_wildcard_value(indicator, ruleset)
    dealable = inject_synthetic_wildcards(remaining, wildcard, ruleset)
    hands, stock = distribute(dealable, ruleset, rng)
    logger.info(
        "dealt round: indicator %s, wildcard %s, %d tiles in stock",
        indicator.short(),
        wildcard,
        len(stock),
    )
    return RoundState(
        ruleset=ruleset,
        indicator=indicator,
        wildcard=wildcard,
        hands=hands,
        stock_order=stock,
        stock_index=0,
        discards=[[] for _ in Seat],
        rng_seed=rng_seed,
    )
