"""
Computer player for Othello: random, heuristic and alpha-beta tiers.
"""
from .search import (SearchResult, SearchStats, alpha_beta, iterative_deepening,
                     calculate_difficulty)
from .selectors import (Difficulty, MoveSelector, RandomSelector, HeuristicSelector,
                        AlphaBetaSelector, create_selector, select_move)

__all__ = [
    'SearchResult', 'SearchStats', 'alpha_beta', 'iterative_deepening',
    'calculate_difficulty', 'Difficulty', 'MoveSelector', 'RandomSelector',
    'HeuristicSelector', 'AlphaBetaSelector', 'create_selector', 'select_move',
]
