from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Optional


class MoveKind(str, Enum):
    DRAW = "DRAW"
    CLAIM = "CLAIM"
    DISCARD = "DISCARD"
    MOVE = "MOVE"
    ARRANGE = "ARRANGE"
    DECLARE = "DECLARE"


@dataclass(frozen=True)
class Move:
    kind: MoveKind
    seat: Optional[int] = None
    tile_id: Optional[str] = None
    column: Optional[int] = None
    from_column: Optional[int] = None
    to_column: Optional[int] = None

    def payload(self) -> dict:
        data = asdict(self)
        del data["kind"]
        return {key: value for key, value in data.items() if value is not None}

    @staticmethod
    def draw(column: Optional[int] = None) -> "Move":
        return Move(MoveKind.DRAW, column=column)

    @staticmethod
    def claim(column: Optional[int] = None) -> "Move":
        return Move(MoveKind.CLAIM, column=column)

    @staticmethod
    def discard(tile_id: str) -> "Move":
        return Move(MoveKind.DISCARD, tile_id=tile_id)

    @staticmethod
    def move_tile(seat: int, from_column: int, to_column: int) -> "Move":
        return Move(MoveKind.MOVE, seat=int(seat), from_column=from_column, to_column=to_column)

    @staticmethod
    def arrange(seat: int) -> "Move":
        return Move(MoveKind.ARRANGE, seat=int(seat))

    @staticmethod
    def declare() -> "Move":
        return Move(MoveKind.DECLARE)
