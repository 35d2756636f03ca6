class OkeyError(ValueError):
    """Base class for rule engine errors."""


class InsufficientTiles(OkeyError):
    pass


class EmptyStock(OkeyError):
    pass


class InvalidHandSize(OkeyError):
    def __init__(self, actual: int, expected: int) -> None:
        super().__init__(f"hand has {actual} tiles, expected {expected}")
        self.actual = actual
        self.expected = expected


class IllegalMove(OkeyError):
    pass
