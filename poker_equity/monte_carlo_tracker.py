"""
monte_carlo_tracker.py

Track Monte Carlo outcomes per player across trials
"""
from typing import List, Sequence

from .poker_types import EquityResult


class EquityTally:
    """Win counts per player plus a shared draw bucket"""

    def __init__(self, num_players: int):
        self.wins = [0] * num_players
        self.draws = 0
        self.trials = 0

    @property
    def num_players(self) -> int:
        return len(self.wins)

    def record_trial(self, winning_players: Sequence[int]):
        """A single winner gets the win; any shared best hand is a draw"""
        if len(winning_players) == 1:
            self.wins[winning_players[0]] += 1
        else:
            self.draws += 1
        self.trials += 1

    def merge(self, other: "EquityTally") -> "EquityTally":
        if other.num_players != self.num_players:
            raise ValueError(f"Cannot merge tallies for {self.num_players} and {other.num_players} players")
        for player, wins in enumerate(other.wins):
            self.wins[player] += wins
        self.draws += other.draws
        self.trials += other.trials
        return self

    @classmethod
    def combine(cls, num_players: int, tallies: Sequence["EquityTally"]) -> "EquityTally":
        total = cls(num_players)
        for tally in tallies:
            total.merge(tally)
        return total

    def to_result(self, requested_trials: int, exact: bool = False, elapsed: float = 0.0) -> EquityResult:
        return EquityResult(
            wins=list(self.wins),
            draws=self.draws,
            trials=self.trials,
            requested_trials=requested_trials,
            complete=self.trials == requested_trials,
            exact=exact,
            elapsed=elapsed,
        )

    def get_status(self) -> List[str]:
        return [f"Player {i + 1}: {w} wins" for i, w in enumerate(self.wins)] + [f"Draws: {self.draws}"]
