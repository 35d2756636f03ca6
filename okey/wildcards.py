from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .meld import Meld
from .rules import DEFAULT_RULESET, Ruleset
from .tiles import Tile, TileValue, is_spare_wildcard


def split_wildcards(tiles: Sequence[Tile], wildcard: Optional[TileValue]) -> Tuple[List[Tile], List[Tile]]:
    available: List[Tile] = []
    rest: List[Tile] = []
    for tile in tiles:
        (available if is_spare_wildcard(tile, wildcard) else rest).append(tile)
    return available, rest


def allocate_wildcards(
    melds: Sequence[Meld], wildcards: Sequence[Tile], ruleset: Ruleset = DEFAULT_RULESET
) -> Tuple[List[Meld], List[Tile]]:
    """Give one spare wildcard to each short meld, in meld order.

    A meld shorter than ``max_wildcard_target`` grows by exactly one tile;
    wildcards left over are returned unused.
    """
    pool = list(wildcards)
    result: List[Meld] = []
    for meld in melds:
        if pool and len(meld) < ruleset.max_wildcard_target:
            meld = meld.with_tile(pool.pop(0))
        result.append(meld)
    return result, pool
