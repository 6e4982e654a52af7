"""
Move selection strategies for the computer player.

One class per difficulty tier, all sharing the MoveSelector interface.
"""
import random
import time
import logging
from enum import Enum
from typing import Optional, Union

from ..game.board import Board, Move
from .search import Clock, SearchStats, iterative_deepening

logger = logging.getLogger(__name__)


class Difficulty(str, Enum):
    """AI strength tiers."""
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


def is_corner(row: int, col: int) -> bool:
    return row in (0, Board.SIZE - 1) and col in (0, Board.SIZE - 1)


def is_edge(row: int, col: int) -> bool:
    return row in (0, Board.SIZE - 1) or col in (0, Board.SIZE - 1)


def positional_weight(move: Move) -> int:
    """4 for corners, 2 for the remaining edge squares, 1 elsewhere."""
    if is_corner(move.row, move.col):
        return 4
    if is_edge(move.row, move.col):
        return 2
    return 1


def heuristic_score(board: Board, move: Move) -> int:
    """Number of flipped pieces weighted by the square's position."""
    flipped = board.pieces_to_flip(move.row, move.col, board.current_player)
    return len(flipped) * positional_weight(move)


class MoveSelector:
    """Base class for the strategies. Chooses a move for board.current_player."""

    difficulty: Difficulty

    def select_move(self, board: Board) -> Optional[Move]:
        raise NotImplementedError


class RandomSelector(MoveSelector):
    """Uniformly random legal move."""

    difficulty = Difficulty.EASY

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def select_move(self, board: Board) -> Optional[Move]:
        legal_moves = board.legal_moves(board.current_player)
        return self.rng.choice(legal_moves) if legal_moves else None


class HeuristicSelector(MoveSelector):
    """Greedy single-ply choice by heuristic_score. Ties go to the earliest move."""

    difficulty = Difficulty.MEDIUM

    def select_move(self, board: Board) -> Optional[Move]:
        best_move = None
        best_score = None
        for move in board.legal_moves(board.current_player):
            score = heuristic_score(board, move)
            if best_score is None or score > best_score:
                best_score = score
                best_move = move
        return best_move


class AlphaBetaSelector(MoveSelector):
    """Iterative-deepening alpha-beta search under a per-depth time budget."""

    difficulty = Difficulty.HARD

    def __init__(self, max_depth: int = 4, time_budget: float = 5.0,
                 clock: Clock = time.perf_counter):
        """
        Args:
            max_depth: Deepest iteration of the ladder
            time_budget: Seconds a single depth may take before the ladder stops
            clock: Monotonic time source in seconds
        """
        self.max_depth = max_depth
        self.time_budget = time_budget
        self.clock = clock
        self.last_stats = SearchStats()

    def select_move(self, board: Board) -> Optional[Move]:
        self.last_stats = SearchStats()
        result = iterative_deepening(board, self.max_depth, self.time_budget,
                                     self.clock, self.last_stats)
        logger.info("Alpha-beta chose %s (score=%d, depth=%d, nodes=%d)",
                    result.move, result.score, self.last_stats.depth_reached,
                    self.last_stats.nodes)
        return result.move


def create_selector(difficulty: Union[Difficulty, str], max_depth: int = 4,
                    time_budget: float = 5.0, clock: Clock = time.perf_counter,
                    rng: Optional[random.Random] = None) -> MoveSelector:
    """
    Build the selector for a difficulty tier.

    Args:
        difficulty: Difficulty member or its value ("Easy", "Medium", "Hard")
        max_depth: Search depth for the HARD tier
        time_budget: Per-depth budget for the HARD tier
        clock: Time source for the HARD tier
        rng: Random source for the EASY tier

    Returns:
        A MoveSelector
    """
    difficulty = Difficulty(difficulty)
    if difficulty == Difficulty.EASY:
        return RandomSelector(rng)
    if difficulty == Difficulty.MEDIUM:
        return HeuristicSelector()
    return AlphaBetaSelector(max_depth=max_depth, time_budget=time_budget, clock=clock)


def select_move(board: Board, difficulty: Union[Difficulty, str], **kwargs) -> Optional[Move]:
    """Choose a move for the player to move at the given tier."""
    return create_selector(difficulty, **kwargs).select_move(board)
