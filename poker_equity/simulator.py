"""
simulator.py

Equity estimation for a partially known hold'em situation.

simulator = EquitySimulator(GameSpec.from_tokens(['Qs', 'Kd', 'Jc', 'Tc'], [['Qh', 'Qd'], ['Ac', 'As']]))
result = simulator.run()
result.equities()
"""
import itertools
import math
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

import numpy as np

from .errors import InvalidSituationError
from .game import BOARD_SIZE, CardPool, Game, GameSpec, winners_from_hands
from .logging_config import get_logger
from .monte_carlo_tracker import EquityTally
from .poker_types import EquityResult

logger = get_logger(__name__)


def split_trials(iterations: int, workers: int) -> List[int]:
    """Spread iterations over workers as evenly as possible, no empty shares"""
    workers = max(1, min(workers, iterations))
    share, extra = divmod(iterations, workers)
    return [share + (1 if i < extra else 0) for i in range(workers)]


class EquitySimulator:
    """
    Setup happens in the constructor: the situation is validated and the pool of
    unassigned cards is built once, so a bad situation fails before any trial runs.
    run() performs the trials and finalizes the counts.
    """

    def __init__(
        self,
        spec: GameSpec,
        iterations: int = 10_000,
        workers: int = 1,
        seed: Optional[int] = None,
        use_numba: bool = False,
        time_limit: Optional[float] = None
    ):
        if iterations < 1:
            raise InvalidSituationError(f"Need at least one trial, got {iterations}")
        if workers < 1:
            raise InvalidSituationError(f"Need at least one worker, got {workers}")

        spec.validate()
        self.spec = spec
        self.iterations = iterations
        self.workers = workers
        self.seed = seed
        self.use_numba = use_numba
        self.time_limit = time_limit
        self.remaining: CardPool = spec.remaining_pool()

        if use_numba:
            from . import scoring_kernels
            self._kernels = scoring_kernels
        else:
            self._kernels = None

        logger.info(
            f"Simulation setup: {spec.num_players} players, "
            f"board [{' '.join(str(c) for c in spec.board)}], "
            f"{len(spec.unknown_players())} unknown hands, "
            f"{iterations} trials on {workers} worker(s)"
        )

    def play_trial(self, rng: np.random.Generator) -> List[int]:
        """Deal one random completion and return the winning player indices"""
        game = Game.from_spec(self.spec, self.remaining, rng)
        if self._kernels is not None:
            keys = self._kernels.player_keys(game.hole_cards, game.board)
            return [player for player, _ in winners_from_hands(keys)]
        return [player for player, _ in game.get_winning_players_and_hands()]

    def _run_worker(
        self,
        worker_id: int,
        trials: int,
        rng: np.random.Generator,
        stop_event: Optional[threading.Event],
        deadline: Optional[float]
    ) -> EquityTally:
        tally = EquityTally(self.spec.num_players)
        for _ in range(trials):
            if stop_event is not None and stop_event.is_set():
                break
            if deadline is not None and time.monotonic() >= deadline:
                break
            tally.record_trial(self.play_trial(rng))
        logger.debug(f"Worker {worker_id} finished {tally.trials}/{trials} trials: {', '.join(tally.get_status())}")
        return tally

    def run(self, stop_event: Optional[threading.Event] = None) -> EquityResult:
        """
        Run all trials and return the merged counts. Setting stop_event (or
        hitting time_limit) ends the run early with complete=False.
        """
        start = time.monotonic()
        deadline = start + self.time_limit if self.time_limit is not None else None
        shares = split_trials(self.iterations, self.workers)
        rngs = [np.random.default_rng(child) for child in np.random.SeedSequence(self.seed).spawn(len(shares))]

        if self._kernels is not None:
            # Compile before the workers start so they do not race on it
            self._kernels.player_keys(*self._warmup_deal())

        if len(shares) == 1:
            tallies = [self._run_worker(0, shares[0], rngs[0], stop_event, deadline)]
        else:
            with ThreadPoolExecutor(max_workers=len(shares)) as executor:
                futures = [
                    executor.submit(self._run_worker, i, share, rng, stop_event, deadline)
                    for i, (share, rng) in enumerate(zip(shares, rngs))
                ]
                tallies = [future.result() for future in futures]

        total = EquityTally.combine(self.spec.num_players, tallies)
        result = total.to_result(self.iterations, elapsed=time.monotonic() - start)
        if not result.complete:
            logger.warning(f"Simulation stopped early after {result.trials} of {self.iterations} trials")
        logger.info(
            f"Simulation finished in {result.elapsed:.2f}s: wins {result.wins}, draws {result.draws}, "
            f"equities {[round(e, 4) for e in result.equities()]}"
        )
        return result

    def _warmup_deal(self):
        game = Game.from_spec(self.spec, self.remaining, np.random.default_rng(0))
        return game.hole_cards, game.board


def simulate_equity(spec: GameSpec, iterations: int = 10_000, **kwargs) -> EquityResult:
    return EquitySimulator(spec, iterations, **kwargs).run()


def enumerate_equity(spec: GameSpec) -> EquityResult:
    """
    Exact equity by dealing every possible completion of the board. Only
    defined when every player's hole cards are known.
    """
    spec.validate()
    if spec.unknown_players():
        raise InvalidSituationError("Exact enumeration needs every player's hole cards")

    start = time.monotonic()
    remaining = spec.remaining_pool()
    missing = BOARD_SIZE - len(spec.board)
    total_boards = math.comb(len(remaining), missing)
    logger.info(f"Enumerating {total_boards} board completions for {spec.num_players} players")

    tally = EquityTally(spec.num_players)
    for completion in itertools.combinations(remaining.cards, missing):
        game = Game.from_board(spec, completion)
        tally.record_trial([player for player, _ in game.get_winning_players_and_hands()])

    result = tally.to_result(total_boards, exact=True, elapsed=time.monotonic() - start)
    logger.info(f"Enumeration finished: wins {result.wins}, draws {result.draws} over {result.trials} boards")
    return result
