"""
poker_equity

Five-card hand evaluation and Monte Carlo equity for hold'em situations
"""
from .core_poker_mechanics import Card, Hand, HandEvaluator, Suit, format_card, parse_card, parse_cards
from .errors import (
    CardNotFoundError, ConfigError, DealInvariantError, DuplicateCardError, EmptyPoolError,
    IncompleteHandError, InvalidRankError, InvalidSituationError, InvalidSuitError, ParseError,
    PokerEquityError
)
from .game import CardPool, Game, GameSpec
from .poker_types import EquityResult, HandCategory
from .simulator import EquitySimulator, enumerate_equity, simulate_equity

__version__ = "0.1.0"
