from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .tiles import Tile, TileValue, is_spare_wildcard

logger = logging.getLogger(__name__)


class MeldKind(str, Enum):
    RUN = "RUN"
    SET = "SET"


@dataclass
class Meld:
    kind: MeldKind
    tiles: List[Tile]

    def __len__(self) -> int:
        return len(self.tiles)

    def with_tile(self, tile: Tile) -> "Meld":
        return Meld(self.kind, self.tiles + [tile])

    def is_valid(self, wildcard: Optional[TileValue] = None, values: int = 13) -> Tuple[bool, str]:
        if len(self.tiles) < 3:
            return False, "meld too short"
        natural = [t for t in self.tiles if not is_spare_wildcard(t, wildcard)]
        if not natural:
            return True, ""

        if self.kind == MeldKind.RUN:
            if len(self.tiles) > values:
                return False, "run longer than a color"
            if len({t.color for t in natural}) != 1:
                return False, "run must have same color"
            numbers = [t.number for t in natural]
            if len(set(numbers)) != len(numbers):
                return False, "run must not duplicate number"
            for idx, (prev, nxt) in enumerate(zip(numbers, numbers[1:])):
                wraps = prev == values and nxt == 1 and idx == len(numbers) - 2
                if nxt != prev + 1 and not wraps:
                    return False, "run must be consecutive"
            return True, ""

        if self.kind == MeldKind.SET:
            if len(self.tiles) > 4:
                return False, "set must have length 3 or 4"
            if len({t.number for t in natural}) != 1:
                return False, "set must share number"
            colors = [t.color for t in natural]
            if len(set(colors)) != len(colors):
                return False, "set colors must be distinct"
            return True, ""

        return False, "unknown meld kind"


def _without(tiles: Sequence[Tile], used: Iterable[Tile]) -> List[Tile]:
    used_ids = {t.tile_id for t in used}
    return [t for t in tiles if t.tile_id not in used_ids]


def _runs_in_color(tiles: Sequence[Tile], color: int, values: int) -> List[List[Tile]]:
    by_number: Dict[int, Tile] = {}
    for tile in sorted((t for t in tiles if t.color == color), key=lambda t: t.number):
        by_number.setdefault(tile.number, tile)

    spans: List[List[int]] = []
    streak: List[int] = []
    for number in range(1, values + 1):
        if number in by_number:
            streak.append(number)
        elif streak:
            spans.append(streak)
            streak = []
    if streak:
        spans.append(streak)

    runs: List[List[Tile]] = []
    one_taken = False
    for span in spans:
        run = [by_number[n] for n in span]
        # 13 may be followed by a 1, which then closes the run
        if span[-1] == values and span[0] != 1 and 1 in by_number and not one_taken:
            run.append(by_number[1])
        if len(run) >= 3:
            runs.append(run)
            one_taken = one_taken or any(t.number == 1 for t in run)
    return runs


def find_runs(tiles: Sequence[Tile], values: int = 13) -> Tuple[List[Meld], List[Tile]]:
    """Scan each color once for runs of three or more consecutive numbers.

    Duplicate numbers collapse to the first tile found; the extra copies stay
    in ``remaining`` even when they could line up into a second run.
    """
    remaining = list(tiles)
    runs: List[Meld] = []
    for color in sorted({t.color for t in remaining}):
        for run in _runs_in_color(remaining, color, values):
            runs.append(Meld(MeldKind.RUN, run))
            remaining = _without(remaining, run)
    return runs, remaining


def find_sets(
    tiles: Sequence[Tile], min_distinct_colors: int = 2, values: int = 13
) -> Tuple[List[Meld], List[Tile]]:
    """Collect same-number groups with more than ``min_distinct_colors`` colors.

    Only the first tile of each color joins a set; duplicates stay behind.
    ``min_distinct_colors=1`` picks up two-color pairs that a wildcard may
    later complete. Each number is checked once.
    """
    remaining = list(tiles)
    sets: List[Meld] = []
    for number in range(1, values + 1):
        first_per_color: Dict[int, Tile] = {}
        for tile in remaining:
            if tile.number == number:
                first_per_color.setdefault(tile.color, tile)
        if len(first_per_color) <= min_distinct_colors:
            continue
        group = list(first_per_color.values())
        sets.append(Meld(MeldKind.SET, group))
        remaining = _without(remaining, group)
    return sets, remaining


def detect_melds(tiles: Sequence[Tile], values: int = 13) -> Tuple[List[Meld], List[Tile]]:
    """Greedy partition: runs first, then sets, then pairs.

    The result is not guaranteed to cover the most tiles. Scores and bot
    decisions are defined against this exact order.
    """
    runs, remaining = find_runs(tiles, values)
    sets, remaining = find_sets(remaining, 2, values)
    pairs, remaining = find_sets(remaining, 1, values)
    melds = runs + sets + pairs
    logger.debug(
        "detected %d runs, %d sets, %d pairs, %d leftovers",
        len(runs),
        len(sets),
        len(pairs),
        len(remaining),
    )
    return melds, remaining
