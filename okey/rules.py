from dataclasses import dataclass


@dataclass(frozen=True)
class Ruleset:
    num_players: int = 4
    colors: int = 4
    values: int = 13
    copies_per_tiletype: int = 2
    num_synthetic_wildcards: int = 2
    hand_size: int = 14
    dealer_hand_size: int = 15
    winning_score: int = 14
    min_meld_size: int = 3
    max_wildcard_target: int = 4
    row_width: int = 13
    last_column: int = 26
    wildcard_offset: int = 1

    def pool_size(self) -> int:
        return self.colors * self.values * self.copies_per_tiletype

    def round_size(self) -> int:
        return self.pool_size() + self.num_synthetic_wildcards

    def deal_size(self) -> int:
        return self.dealer_hand_size + (self.num_players - 1) * self.hand_size

    def winning_hand_size(self) -> int:
        return self.hand_size + 1


DEFAULT_RULESET = Ruleset()
