"""
poker_types.py

Poker type classes broken out to avoid circular imports
"""
from enum import Enum
from dataclasses import dataclass, field
from typing import List


class HandCategory(Enum):
    HIGH_CARD = 1
    ONE_PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9

    @property
    def label(self) -> str:
        return self.name.replace('_', ' ').title()


@dataclass
class EquityResult:
    """
    Outcome counts of a simulation (or exact enumeration) run.

    A trial with more than one player holding the best hand awards nobody a
    win and counts as a draw instead.
    """
    wins: List[int]
    draws: int
    trials: int
    requested_trials: int
    complete: bool = True
    exact: bool = False
    elapsed: float = field(default=0.0, compare=False)

    @property
    def num_players(self) -> int:
        return len(self.wins)

    def equity(self, player: int) -> float:
        if self.trials == 0:
            return 0.0
        return self.wins[player] / self.trials

    def equities(self) -> List[float]:
        return [self.equity(player) for player in range(self.num_players)]

    def draw_fraction(self) -> float:
        if self.trials == 0:
            return 0.0
        return self.draws / self.trials

    def summary_lines(self) -> List[str]:
        """Human-readable report, one line per fact"""
        kind = "enumerated boards" if self.exact else "runs"
        lines = [f"Out of a total of {self.trials} {kind}"]
        if not self.complete:
            lines.append(f"Stopped early: {self.trials} of {self.requested_trials} requested trials")
        for player, wins in enumerate(self.wins):
            lines.append(f"{wins} wins for player {player + 1}")
        lines.append(f"{self.draws} draws")
        for player in range(self.num_players):
            lines.append(f"Equity for player {player + 1}: {self.equity(player):.4f}")
        lines.append(f"Draw fraction: {self.draw_fraction():.4f}")
        return lines
