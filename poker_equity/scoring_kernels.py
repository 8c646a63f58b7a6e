"""
scoring_kernels.py

numba-compiled hand scoring over plain rank/suit integer arrays. Produces the
same (category level, score) pairs as HandEvaluator so either path can drive
a simulation.
"""
from typing import List, Sequence, Tuple

import numpy as np
from numba import njit

from .core_poker_mechanics import Card


def encode_cards(cards: Sequence[Card]) -> Tuple[np.ndarray, np.ndarray]:
    """Cards -> (ranks, suits) int64 arrays"""
    ranks = np.array([card.rank for card in cards], dtype=np.int64)
    suits = np.array([card.suit.value for card in cards], dtype=np.int64)
    return ranks, suits


@njit(nogil=True)
def score_five(ranks: np.ndarray, suits: np.ndarray) -> tuple:
    """
    Returns (level, score) for exactly five cards, level 9=straight flush
    down to 1=high card.
    """
    counts = np.zeros(15, np.int64)
    for i in range(5):
        counts[ranks[i]] += 1

    is_flush = True
    for i in range(1, 5):
        if suits[i] != suits[0]:
            is_flush = False

    distinct = 0
    lowest = 15
    highest = 0
    for r in range(2, 15):
        if counts[r] > 0:
            distinct += 1
            if r < lowest:
                lowest = r
            if r > highest:
                highest = r

    straight = 0
    if distinct == 5:
        if highest - lowest == 4:
            straight = lowest
        elif counts[14] == 1 and counts[2] == 1 and counts[3] == 1 and counts[4] == 1 and counts[5] == 1:
            straight = 1

    # groups by size then rank, both descending; first group weighs 16^4
    score = 0
    weight = 65536
    first_size = 0
    second_size = 0
    n_groups = 0
    for size in range(4, 0, -1):
        for r in range(14, 1, -1):
            if counts[r] == size:
                score += r * weight
                weight //= 16
                if n_groups == 0:
                    first_size = size
                elif n_groups == 1:
                    second_size = size
                n_groups += 1

    if is_flush and straight > 0:
        return 9, straight
    if first_size == 4:
        return 8, score
    if first_size == 3 and second_size == 2:
        return 7, score
    if is_flush:
        return 6, score
    if straight > 0:
        return 5, straight
    if first_size == 3:
        return 4, score
    if first_size == 2 and second_size == 2:
        return 3, score
    if first_size == 2:
        return 2, score
    return 1, score


@njit(nogil=True)
def best_of_n(ranks: np.ndarray, suits: np.ndarray) -> tuple:
    """Best (level, score) over every five-card subset of n >= 5 cards"""
    n = ranks.shape[0]
    sub_ranks = np.zeros(5, np.int64)
    sub_suits = np.zeros(5, np.int64)
    best_level = 0
    best_score = -1
    for a in range(n - 4):
        for b in range(a + 1, n - 3):
            for c in range(b + 1, n - 2):
                for d in range(c + 1, n - 1):
                    for e in range(d + 1, n):
                        sub_ranks[0] = ranks[a]
                        sub_ranks[1] = ranks[b]
                        sub_ranks[2] = ranks[c]
                        sub_ranks[3] = ranks[d]
                        sub_ranks[4] = ranks[e]
                        sub_suits[0] = suits[a]
                        sub_suits[1] = suits[b]
                        sub_suits[2] = suits[c]
                        sub_suits[3] = suits[d]
                        sub_suits[4] = suits[e]
                        level, score = score_five(sub_ranks, sub_suits)
                        if level > best_level or (level == best_level and score > best_score):
                            best_level = level
                            best_score = score
    return best_level, best_score


@njit(nogil=True)
def score_players(hole_ranks: np.ndarray, hole_suits: np.ndarray,
                  board_ranks: np.ndarray, board_suits: np.ndarray) -> tuple:
    """
    hole_ranks/hole_suits have shape (players, 2). Returns (levels, scores),
    one entry per player.
    """
    num_players = hole_ranks.shape[0]
    n_board = board_ranks.shape[0]
    levels = np.zeros(num_players, np.int64)
    scores = np.zeros(num_players, np.int64)
    ranks = np.zeros(n_board + 2, np.int64)
    suits = np.zeros(n_board + 2, np.int64)
    for i in range(n_board):
        ranks[i + 2] = board_ranks[i]
        suits[i + 2] = board_suits[i]
    for p in range(num_players):
        ranks[0] = hole_ranks[p, 0]
        ranks[1] = hole_ranks[p, 1]
        suits[0] = hole_suits[p, 0]
        suits[1] = hole_suits[p, 1]
        level, score = best_of_n(ranks, suits)
        levels[p] = level
        scores[p] = score
    return levels, scores


def player_keys(hole_cards: Sequence[Tuple[Card, Card]], board: Sequence[Card]) -> List[Tuple[int, int]]:
    """(level, score) per player, comparable the same way Hand objects are"""
    hole_ranks, hole_suits = encode_cards([card for pair in hole_cards for card in pair])
    board_ranks, board_suits = encode_cards(board)
    levels, scores = score_players(
        hole_ranks.reshape(-1, 2), hole_suits.reshape(-1, 2), board_ranks, board_suits
    )
    return [(int(level), int(score)) for level, score in zip(levels, scores)]
