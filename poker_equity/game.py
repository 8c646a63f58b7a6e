"""
game.py

The card pool, the situation specification a simulation starts from, and the
single randomly-completed deal (one trial) built from it
"""
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .core_poker_mechanics import Card, Hand, HandEvaluator, full_deck_order, parse_card
from .errors import (
    CardNotFoundError, DealInvariantError, DuplicateCardError, EmptyPoolError, InvalidSituationError
)
from .logging_config import get_logger

logger = get_logger(__name__)

DECK_SIZE = 52
BOARD_SIZE = 5
UNKNOWN_MARKERS = (None, '??', 'unknown')

HoleCards = Tuple[Card, Card]


class CardPool:
    """Cards not yet assigned to a player or the board"""

    def __init__(self, cards: Optional[Iterable[Card]] = None):
        self.cards: List[Card] = list(cards) if cards is not None else []
        if len(set(self.cards)) != len(self.cards):
            raise DuplicateCardError("A card pool cannot hold the same card twice")

    @classmethod
    def full_deck(cls) -> "CardPool":
        return cls(full_deck_order())

    def __len__(self):
        return len(self.cards)

    def __contains__(self, card):
        return card in self.cards

    def __iter__(self):
        return iter(self.cards)

    def copy(self) -> "CardPool":
        pool = CardPool.__new__(CardPool)
        pool.cards = list(self.cards)
        return pool

    def remove(self, card: Card) -> Card:
        try:
            self.cards.remove(card)
        except ValueError:
            raise CardNotFoundError(f"{card} is not in the pool") from None
        return card

    def shuffle(self, rng: Optional[np.random.Generator] = None):
        """Uniform random permutation of the remaining cards"""
        rng = rng if rng is not None else np.random.default_rng()
        order = rng.permutation(len(self.cards))
        self.cards = [self.cards[i] for i in order]

    def draw(self) -> Card:
        if not self.cards:
            raise EmptyPoolError("Cannot draw from an empty pool")
        return self.cards.pop(0)


def _parse_hole_cards(entry) -> Optional[HoleCards]:
    if isinstance(entry, str) and entry.strip() in UNKNOWN_MARKERS:
        return None
    if entry is None:
        return None
    if isinstance(entry, str):
        entry = entry.split()
    cards = [card if isinstance(card, Card) else parse_card(card) for card in entry]
    if len(cards) != 2:
        raise InvalidSituationError(f"Hole cards must be a pair, got {len(cards)} cards")
    return cards[0], cards[1]


@dataclass
class GameSpec:
    """
    Partially known situation: 0-5 board cards and, per player, either a
    known pair of hole cards or None for unknown.
    """
    board: List[Card] = field(default_factory=list)
    hole_cards: List[Optional[HoleCards]] = field(default_factory=list)

    @classmethod
    def from_tokens(cls, board: Sequence[str] = (), players: Sequence = ()) -> "GameSpec":
        """
        GameSpec.from_tokens(['Qs', 'Kd', 'Jc', 'Tc'], [['Qh', 'Qd'], None])

        Unknown hole cards may be given as None, '??' or 'unknown'.
        """
        if isinstance(board, str):
            board = board.split()
        return cls(
            board=[parse_card(token) for token in board],
            hole_cards=[_parse_hole_cards(entry) for entry in players],
        )

    @property
    def num_players(self) -> int:
        return len(self.hole_cards)

    def known_cards(self) -> List[Card]:
        known = list(self.board)
        for pair in self.hole_cards:
            if pair is not None:
                known.extend(pair)
        return known

    def unknown_players(self) -> List[int]:
        return [player for player, pair in enumerate(self.hole_cards) if pair is None]

    def cards_to_deal(self) -> int:
        return 2 * len(self.unknown_players()) + BOARD_SIZE - len(self.board)

    def validate(self):
        if len(self.board) > BOARD_SIZE:
            raise InvalidSituationError(f"Board cannot have more than {BOARD_SIZE} cards, got {len(self.board)}")
        if self.num_players < 1:
            raise InvalidSituationError("At least one player required")
        for pair in self.hole_cards:
            if pair is not None and len(pair) != 2:
                raise InvalidSituationError(f"Hole cards must be a pair, got {len(pair)} cards")

        seen = set()
        for card in self.known_cards():
            if card in seen:
                raise DuplicateCardError(f"{card} appears more than once in the situation")
            seen.add(card)

        available = DECK_SIZE - len(seen)
        if self.cards_to_deal() > available:
            raise InvalidSituationError(
                f"Not enough cards available: need {self.cards_to_deal()}, have {available}"
            )

    def remaining_pool(self) -> CardPool:
        """Full deck minus every card the situation already fixes"""
        pool = CardPool.full_deck()
        for card in self.known_cards():
            pool.remove(card)
        logger.debug(f"Excluded {DECK_SIZE - len(pool)} known cards, {len(pool)} left to deal from")
        return pool

    def __str__(self):
        result = f"Players: {self.num_players}\n"
        for i, pair in enumerate(self.hole_cards):
            if pair is not None:
                result += f"Player {i + 1}: {pair[0]} {pair[1]}\n"
            else:
                result += f"Player {i + 1}: [Unknown]\n"
        board_str = " ".join(str(card) for card in self.board) if self.board else "Empty"
        result += f"Board: {board_str}\n"
        return result


class Game:
    """One completed deal: every hole pair known and a full five-card board"""

    def __init__(self, board: List[Card], hole_cards: List[HoleCards], pool: CardPool):
        self.board = board
        self.hole_cards = hole_cards
        self.pool = pool

    @classmethod
    def from_spec(cls, spec: GameSpec, remaining: CardPool, rng: Optional[np.random.Generator] = None) -> "Game":
        """
        Randomly complete the spec. `remaining` must be the spec's
        remaining pool; it is copied, never consumed.
        """
        pool = remaining.copy()
        pool.shuffle(rng)

        # Unknown hole cards are dealt before the board, in player order
        hole_cards = []
        for pair in spec.hole_cards:
            if pair is None:
                pair = (pool.draw(), pool.draw())
            hole_cards.append(pair)

        board = list(spec.board)
        while len(board) < BOARD_SIZE:
            board.append(pool.draw())

        game = cls(board, hole_cards, pool)
        game.check_deal_invariant(spec)
        return game

    @classmethod
    def from_board(cls, spec: GameSpec, board_completion: Sequence[Card], pool: Optional[CardPool] = None) -> "Game":
        """Complete a spec whose hole cards are all known with the given extra board cards"""
        if spec.unknown_players():
            raise InvalidSituationError("Every player's hole cards must be known to complete the board directly")
        board = list(spec.board) + list(board_completion)
        if len(board) != BOARD_SIZE:
            raise InvalidSituationError(f"Completed board must have {BOARD_SIZE} cards, got {len(board)}")
        return cls(board, list(spec.hole_cards), pool if pool is not None else CardPool())

    def check_deal_invariant(self, spec: GameSpec):
        dealt = BOARD_SIZE - len(spec.board) + 2 * len(spec.unknown_players())
        specified = len(spec.known_cards())
        if specified + dealt + len(self.pool) != DECK_SIZE:
            raise DealInvariantError(
                f"{specified} specified + {dealt} dealt + {len(self.pool)} left != {DECK_SIZE}"
            )

    def get_player_hands(self) -> List[Hand]:
        return [HandEvaluator.best_hand(list(pair) + self.board) for pair in self.hole_cards]

    def get_winning_players_and_hands(self) -> List[Tuple[int, Hand]]:
        return winners_from_hands(self.get_player_hands())

    def __str__(self):
        holes = ", ".join(f"P{i + 1}: {a} {b}" for i, (a, b) in enumerate(self.hole_cards))
        return f"Board: {' '.join(str(card) for card in self.board)} | {holes}"


def winners_from_hands(hands: Sequence) -> List[Tuple[int, object]]:
    """Every (player, hand) whose hand equals the best one"""
    best = max(hands)
    return [(player, hand) for player, hand in enumerate(hands) if hand == best]
