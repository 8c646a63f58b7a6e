"""
errors.py

Exception types raised by the card model, the evaluator and the simulator
"""


class PokerEquityError(Exception):
    """Base class for every error raised by poker_equity"""


class ParseError(PokerEquityError, ValueError):
    """A card token could not be parsed"""


class InvalidRankError(ParseError):
    pass


class InvalidSuitError(ParseError):
    pass


class DuplicateCardError(PokerEquityError, ValueError):
    """The same card was assigned to more than one location"""


class CardNotFoundError(DuplicateCardError):
    """A card was removed from a pool that no longer holds it"""


class EmptyPoolError(PokerEquityError):
    """A draw was requested from a pool with no cards left"""


class IncompleteHandError(PokerEquityError, ValueError):
    """Wrong number of cards handed to the evaluator"""


class InvalidSituationError(PokerEquityError, ValueError):
    """A situation specification that can never be dealt"""


class DealInvariantError(PokerEquityError):
    """Cards specified + cards dealt + cards left over no longer add up to a deck"""


class ConfigError(PokerEquityError):
    pass
