"""
core_poker_mechanics.py

Cards, five-card hand scoring and best-hand selection
"""
import itertools
import functools
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from .errors import IncompleteHandError, InvalidRankError, InvalidSuitError, ParseError
from .poker_types import HandCategory


class Suit(Enum):
    CLUBS = 0
    HEARTS = 1
    DIAMONDS = 2
    SPADES = 3


RANK_TO_CHAR = {
    2: '2', 3: '3', 4: '4', 5: '5', 6: '6', 7: '7', 8: '8', 9: '9',
    10: 'T', 11: 'J', 12: 'Q', 13: 'K', 14: 'A'
}
CHAR_TO_RANK = {char: rank for rank, char in RANK_TO_CHAR.items()}

SUIT_TO_CHAR = {Suit.CLUBS: 'c', Suit.HEARTS: 'h', Suit.DIAMONDS: 'd', Suit.SPADES: 's'}
CHAR_TO_SUIT = {char: suit for suit, char in SUIT_TO_CHAR.items()}

SUIT_SYMBOLS = {Suit.CLUBS: '♣', Suit.HEARTS: '♥', Suit.DIAMONDS: '♦', Suit.SPADES: '♠'}


@functools.total_ordering
@dataclass(frozen=True)
class Card:
    rank: int  # 2-14 (2-10, J=11, Q=12, K=13, A=14)
    suit: Suit

    def __post_init__(self):
        if self.rank not in RANK_TO_CHAR:
            raise InvalidRankError(f"Rank out of range: {self.rank!r}")
        if not isinstance(self.suit, Suit):
            raise InvalidSuitError(f"Not a suit: {self.suit!r}")

    @classmethod
    def from_str(cls, text: str) -> "Card":
        return parse_card(text)

    def __str__(self):
        return format_card(self)

    def __lt__(self, other):
        if not isinstance(other, Card):
            return NotImplemented
        return (self.rank, self.suit.value) < (other.rank, other.suit.value)

    @property
    def rank_char(self) -> str:
        return RANK_TO_CHAR[self.rank]

    @property
    def suit_name(self) -> str:
        return self.suit.name.lower()

    def pretty(self) -> str:
        return f"{self.rank_char}{SUIT_SYMBOLS[self.suit]}"


def parse_card(text: str) -> Card:
    """Parse a two-character token such as 'Kd', 'Th' or '7s'"""
    if not isinstance(text, str) or len(text) != 2:
        raise ParseError(f"Card token must be two characters, got {text!r}")
    rank_char, suit_char = text[0], text[1]
    if rank_char not in CHAR_TO_RANK:
        raise InvalidRankError(f"Invalid rank {rank_char!r} in {text!r}")
    if suit_char not in CHAR_TO_SUIT:
        raise InvalidSuitError(f"Invalid suit {suit_char!r} in {text!r}")
    return Card(CHAR_TO_RANK[rank_char], CHAR_TO_SUIT[suit_char])


def format_card(card: Card) -> str:
    return f"{RANK_TO_CHAR[card.rank]}{SUIT_TO_CHAR[card.suit]}"


def parse_cards(text: str) -> List[Card]:
    """Parse whitespace-separated tokens, e.g. 'Qs Kd Jc Tc'"""
    return [parse_card(token) for token in text.split()]


def full_deck_order() -> Tuple[Card, ...]:
    """The canonical 52-card ordering: clubs, hearts, diamonds, spades, each 2 through A"""
    return tuple(Card(rank, suit) for suit in Suit for rank in range(2, 15))


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Hand:
    """
    Five cards with their category and score.

    Two hands are equal when both category and score match, whatever the
    cards themselves are; that is the split-pot condition.
    """
    cards: Tuple[Card, ...] = field(repr=False)
    category: HandCategory
    score: int

    @property
    def key(self) -> Tuple[int, int]:
        return self.category.value, self.score

    def __eq__(self, other):
        if not isinstance(other, Hand):
            return NotImplemented
        return self.key == other.key

    def __lt__(self, other):
        if not isinstance(other, Hand):
            return NotImplemented
        return self.key < other.key

    def __hash__(self):
        return hash(self.key)

    def __str__(self):
        cards_str = " ".join(str(card) for card in self.sorted_cards())
        return f"{cards_str} ({self.describe()})"

    def sorted_cards(self) -> List[Card]:
        return sorted(self.cards, key=lambda card: card.rank, reverse=True)

    def describe(self) -> str:
        return HandEvaluator.describe(self)


class HandEvaluator:
    SCORE_BASE = 16
    WHEEL_RANKS = [2, 3, 4, 5, 14]

    @staticmethod
    def _rank_groups(cards: Sequence[Card]) -> List[Tuple[int, int]]:
        """
        (group_size, rank) pairs ordered by size then rank, both descending.
        Two pair K-K-4-4-9 gives [(2, 13), (2, 4), (1, 9)].
        """
        ordered_ranks = sorted((card.rank for card in cards), reverse=True)
        groups = [(len(list(group)), rank) for rank, group in itertools.groupby(ordered_ranks)]
        groups.sort(reverse=True)
        return groups

    @staticmethod
    def _group_score(groups: List[Tuple[int, int]]) -> int:
        # First group weighs BASE^4, the next BASE^3 and so on
        base = HandEvaluator.SCORE_BASE
        return sum(rank * base ** (4 - i) for i, (_, rank) in enumerate(groups))

    @staticmethod
    def _same_suit(cards: Sequence[Card]) -> bool:
        first_suit = cards[0].suit
        return all(card.suit == first_suit for card in cards)

    @staticmethod
    def _straight_score(cards: Sequence[Card]) -> Optional[int]:
        """Lowest rank of the straight, 1 for the wheel, None when not a straight"""
        ordered_ranks = sorted(card.rank for card in cards)
        if ordered_ranks == HandEvaluator.WHEEL_RANKS:
            return 1
        lowest = ordered_ranks[0]
        if ordered_ranks == list(range(lowest, lowest + 5)):
            return lowest
        return None

    @staticmethod
    def evaluate_five(cards: Sequence[Card]) -> Tuple[HandCategory, int]:
        """Evaluate exactly 5 cards into (category, score)"""
        if len(cards) != 5:
            raise IncompleteHandError(f"Hand evaluation requires exactly 5 cards, got {len(cards)}")

        is_flush = HandEvaluator._same_suit(cards)
        straight_score = HandEvaluator._straight_score(cards)
        groups = HandEvaluator._rank_groups(cards)
        group_sizes = [size for size, _ in groups]
        group_score = HandEvaluator._group_score(groups)

        if is_flush and straight_score is not None:
            return HandCategory.STRAIGHT_FLUSH, straight_score
        if group_sizes == [4, 1]:
            return HandCategory.FOUR_OF_A_KIND, group_score
        if group_sizes == [3, 2]:
            return HandCategory.FULL_HOUSE, group_score
        if is_flush:
            return HandCategory.FLUSH, group_score
        if straight_score is not None:
            return HandCategory.STRAIGHT, straight_score
        if group_sizes == [3, 1, 1]:
            return HandCategory.THREE_OF_A_KIND, group_score
        if group_sizes == [2, 2, 1]:
            return HandCategory.TWO_PAIR, group_score
        if group_sizes == [2, 1, 1, 1]:
            return HandCategory.ONE_PAIR, group_score
        if group_sizes == [1, 1, 1, 1, 1]:
            return HandCategory.HIGH_CARD, group_score

        # Five of a kind cannot be dealt from a single deck
        raise IncompleteHandError(f"Cards do not form a valid hand: {' '.join(map(str, cards))}")

    @staticmethod
    def evaluate(cards: Sequence[Card]) -> Hand:
        category, score = HandEvaluator.evaluate_five(cards)
        return Hand(tuple(cards), category, score)

    @staticmethod
    def best_hand(cards: Iterable[Card]) -> Hand:
        """
        Strongest five-card hand from a pool of 5 or more cards
        (hole cards + board). Checks all C(n, 5) subsets.
        """
        cards = list(cards)
        if len(cards) < 5:
            raise IncompleteHandError(f"Best hand needs at least 5 cards, got {len(cards)}")

        best = None
        for combo in itertools.combinations(cards, 5):
            category, score = HandEvaluator.evaluate_five(combo)
            if best is None or (category.value, score) > best.key:
                best = Hand(combo, category, score)
        return best

    @staticmethod
    def straight_high(score: int) -> int:
        return 5 if score == 1 else score + 4

    @staticmethod
    def describe(hand: Hand) -> str:
        """Create human-readable hand description"""
        groups = HandEvaluator._rank_groups(hand.cards)
        ranks = [RANK_TO_CHAR[rank] for _, rank in groups]
        category = hand.category

        if category == HandCategory.STRAIGHT_FLUSH:
            high = RANK_TO_CHAR[HandEvaluator.straight_high(hand.score)]
            return f"Straight Flush, {high} high"
        elif category == HandCategory.FOUR_OF_A_KIND:
            return f"Four {ranks[0]}s, {ranks[1]} kicker"
        elif category == HandCategory.FULL_HOUSE:
            return f"Full House, {ranks[0]}s full of {ranks[1]}s"
        elif category == HandCategory.FLUSH:
            return f"Flush: {' '.join(ranks)}"
        elif category == HandCategory.STRAIGHT:
            high = RANK_TO_CHAR[HandEvaluator.straight_high(hand.score)]
            return f"Straight, {high} high"
        elif category == HandCategory.THREE_OF_A_KIND:
            return f"Three {ranks[0]}s, {' '.join(ranks[1:])} kickers"
        elif category == HandCategory.TWO_PAIR:
            return f"Two Pair: {ranks[0]}s and {ranks[1]}s, {ranks[2]} kicker"
        elif category == HandCategory.ONE_PAIR:
            return f"Pair of {ranks[0]}s, {' '.join(ranks[1:])} kickers"
        else:  # HIGH_CARD
            return f"High Card: {' '.join(ranks)}"
