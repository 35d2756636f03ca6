from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import List, NamedTuple, Optional, Sequence, Tuple

from .errors import InsufficientTiles
from .rules import DEFAULT_RULESET, Ruleset


class Color(IntEnum):
    RED = 1
    BLUE = 2
    GREEN = 3
    YELLOW = 4


class TileValue(NamedTuple):
    number: int
    color: int

    def next_value(self, offset: int = 1, values: int = 13) -> "TileValue":
        return TileValue(((self.number - 1 + offset) % values) + 1, self.color)


@dataclass(frozen=True)
class Tile:
    tile_id: str
    number: int
    color: int
    is_wildcard: bool = False
    column: Optional[int] = None

    @property
    def value(self) -> TileValue:
        return TileValue(self.number, self.color)

    def same_value(self, other: "Tile | TileValue") -> bool:
        if isinstance(other, Tile):
            other = other.value
        return self.value == other

    def with_column(self, column: Optional[int]) -> "Tile":
        return replace(self, column=column)

    def short(self) -> str:
        prefix = "J" if self.is_wildcard else Color(self.color).name[0]
        return f"{prefix}{self.number}"


def tile_id_for(color: int, copy: int, number: int) -> str:
    return f"c{color}{copy}-{number}"


def build_pool(ruleset: Ruleset = DEFAULT_RULESET) -> List[Tile]:
    pool: List[Tile] = []
    for color in range(1, ruleset.colors + 1):
        for copy in range(1, ruleset.copies_per_tiletype + 1):
            for number in range(1, ruleset.values + 1):
                pool.append(Tile(tile_id_for(color, copy, number), number, color))
    return pool


def select_indicator(pool: Sequence[Tile], rng: Optional[random.Random] = None) -> Tuple[Tile, List[Tile]]:
    """Pick the indicator tile and return it with the rest of the pool.

    With an rng the pool copy is Fisher-Yates shuffled first, which makes every
    tile equally likely. Without one the head of the given order is used.
    """
    if not pool:
        raise InsufficientTiles("cannot select an indicator from an empty pool")
    remaining = list(pool)
    if rng is not None:
        rng.shuffle(remaining)
    indicator = remaining.pop(0)
    return indicator, remaining


def derive_wildcard_value(indicator: Tile, ruleset: Ruleset = DEFAULT_RULESET) -> TileValue:
    return indicator.value.next_value(ruleset.wildcard_offset, ruleset.values)


def inject_synthetic_wildcards(
    pool: Sequence[Tile], wildcard: TileValue, ruleset: Ruleset = DEFAULT_RULESET
) -> List[Tile]:
    jokers = [
        Tile(f"j{idx}", wildcard.number, wildcard.color, is_wildcard=True)
        for idx in range(ruleset.num_synthetic_wildcards)
    ]
    return list(pool) + jokers


def is_spare_wildcard(tile: Tile, wildcard: Optional[TileValue]) -> bool:
    """True for a numbered tile carrying the round's wildcard value.

    Synthetic jokers are flagged ``is_wildcard`` and take part in melds with
    their printed value instead.
    """
    return wildcard is not None and not tile.is_wildcard and tile.same_value(wildcard)
