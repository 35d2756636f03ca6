"""Rack layout, column scoring and win detection.

A hand is a plain list of :class:`~okey.tiles.Tile` whose ``column`` fields
place them on a two-row rack of ``last_column`` slots. Melds are never
stored: they are recovered from the columns, where any empty column ends a
group.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .errors import IllegalMove, InvalidHandSize
from .meld import MeldKind, detect_melds
from .rules import DEFAULT_RULESET, Ruleset
from .tiles import Tile, TileValue
from .wildcards import allocate_wildcards, split_wildcards

logger = logging.getLogger(__name__)


def arrange(tiles: Sequence[Tile], wildcard: Optional[TileValue], ruleset: Ruleset = DEFAULT_RULESET) -> List[Tile]:
    """Re-column a hand: longest melds from column 1, leftovers at the far end.

    Each meld is followed by one empty column, except that a meld is never
    started on the last column of a rack row; it moves to the next row.
    Leftover tiles fill ``last_column`` downwards.
    """
    spare, rest = split_wildcards(tiles, wildcard)
    melds, leftovers = detect_melds(rest, ruleset.values)
    # sets ahead of runs: among equal lengths a set gets the wildcard and the earlier columns
    melds = [m for m in melds if m.kind == MeldKind.SET] + [m for m in melds if m.kind == MeldKind.RUN]
    melds = sorted(melds, key=len)
    melds, unused = allocate_wildcards(melds, spare, ruleset)
    melds = sorted(melds, key=len, reverse=True)
    if logger.isEnabledFor(logging.DEBUG):
        complete = sum(1 for m in melds if m.is_valid(wildcard, ruleset.values)[0])
        logger.debug("laid out %d melds, %d complete, %d loose tiles", len(melds), complete, len(leftovers) + len(unused))

    arranged: List[Tile] = []
    start = 1
    for meld in melds:
        for offset, tile in enumerate(meld.tiles):
            arranged.append(tile.with_column(start + offset))
        start += len(meld) + 1
        if start == ruleset.row_width:
            start += 1

    for idx, tile in enumerate(leftovers + unused):
        arranged.append(tile.with_column(ruleset.last_column - idx))
    return arranged


def group_consecutive_columns(tiles: Sequence[Tile]) -> List[List[Tile]]:
    placed = sorted((t for t in tiles if t.column is not None), key=lambda t: t.column)
    groups: List[List[Tile]] = []
    for tile in placed:
        if groups and tile.column == groups[-1][-1].column + 1:
            groups[-1].append(tile)
        else:
            groups.append([tile])
    return groups


def score(tiles: Sequence[Tile], ruleset: Ruleset = DEFAULT_RULESET) -> int:
    groups = group_consecutive_columns(tiles)
    # the last group holds the tile waiting to be discarded and never counts
    return sum(len(group) for group in groups[:-1] if len(group) >= ruleset.min_meld_size)


def require_hand_size(tiles: Sequence[Tile], expected: int) -> None:
    if len(tiles) != expected:
        raise InvalidHandSize(len(tiles), expected)


def is_winning(tiles: Sequence[Tile], wildcard: Optional[TileValue], ruleset: Ruleset = DEFAULT_RULESET) -> bool:
    try:
        require_hand_size(tiles, ruleset.winning_hand_size())
    except InvalidHandSize as exc:
        logger.debug("not a winning candidate: %s", exc)
        return False
    return score(arrange(tiles, wildcard, ruleset), ruleset) == ruleset.winning_score


def tile_at(tiles: Sequence[Tile], column: int) -> Optional[Tile]:
    for tile in tiles:
        if tile.column == column:
            return tile
    return None


def highest_column_tile(tiles: Sequence[Tile]) -> Optional[Tile]:
    placed = [t for t in tiles if t.column is not None]
    if not placed:
        return None
    return max(placed, key=lambda t: t.column)


def move_tile(
    tiles: Sequence[Tile], from_column: int, to_column: int, ruleset: Ruleset = DEFAULT_RULESET
) -> List[Tile]:
    """Move the tile at ``from_column``; a tile already at ``to_column`` swaps back."""
    if not 1 <= to_column <= ruleset.last_column:
        raise IllegalMove(f"column {to_column} is outside the rack")
    dragged = tile_at(tiles, from_column)
    if dragged is None:
        raise IllegalMove(f"no tile at column {from_column}")
    target = tile_at(tiles, to_column)

    result: List[Tile] = []
    for tile in tiles:
        if tile.tile_id == dragged.tile_id:
            result.append(tile.with_column(to_column))
        elif target is not None and tile.tile_id == target.tile_id:
            result.append(tile.with_column(from_column))
        else:
            result.append(tile)
    return result


def place_tile(
    tiles: Sequence[Tile], tile: Tile, column: Optional[int] = None, ruleset: Ruleset = DEFAULT_RULESET
) -> List[Tile]:
    start = 1 if column is None else column
    if not 1 <= start <= ruleset.last_column:
        raise IllegalMove(f"column {start} is outside the rack")
    taken = {t.column for t in tiles}
    order = list(range(start, ruleset.last_column + 1)) + list(range(1, start))
    for candidate in order:
        if candidate not in taken:
            return list(tiles) + [tile.with_column(candidate)]
    raise IllegalMove("rack is full")
