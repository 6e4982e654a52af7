"""
Alpha-beta minimax search over Othello boards.

The node counter lives in a SearchStats object that is passed through the
recursion, so the evaluation itself stays free of shared state.
"""
import sys
import time
import logging
from dataclasses import dataclass, field
from typing import Callable, List, NamedTuple, Optional

from ..game.board import Board, Cell, Move

logger = logging.getLogger(__name__)

# Seeds for the alpha-beta window
MAX_SCORE = sys.maxsize
MIN_SCORE = -sys.maxsize - 1

Clock = Callable[[], float]


class SearchResult(NamedTuple):
    """Score of a node and the move that achieves it (None at leaves)."""
    score: int
    move: Optional[Move]


@dataclass
class DepthRecord:
    """Outcome of one iteration of the deepening ladder."""
    depth: int
    score: int
    move: Optional[Move]
    nodes: int
    elapsed: float


@dataclass
class SearchStats:
    """Diagnostic counters for a search. Never consulted for move choice."""
    nodes: int = 0
    elapsed: float = 0.0
    depths: List[DepthRecord] = field(default_factory=list)

    @property
    def depth_reached(self) -> int:
        return self.depths[-1].depth if self.depths else 0

    @property
    def difficulty(self) -> int:
        """Visited nodes per elapsed second."""
        if self.elapsed <= 0:
            return 0
        return int(self.nodes / self.elapsed)


def material_score(board: Board, player: Cell) -> int:
    """Piece difference from the point of view of ``player``."""
    return board.piece_count(player) - board.piece_count(player.opponent())


def alpha_beta(board: Board, depth: int, alpha: int, beta: int, maximizing: bool,
               player: Cell, root_player: Cell, stats: SearchStats) -> SearchResult:
    """
    Minimax with alpha-beta pruning.

    Args:
        board: Position to search from
        depth: Remaining plies; 0 means evaluate
        alpha: Best score the maximizer can guarantee so far
        beta: Best score the minimizer can guarantee so far
        maximizing: Whether ``player`` is the maximizing side at this node
        player: The player to move at this node
        root_player: The player that owns the search; leaves are scored for it
        stats: Shared node counter

    Returns:
        SearchResult with the node's score and best move
    """
    stats.nodes += 1

    # Only depth ends the recursion; a node without moves keeps its seed score
    if depth == 0:
        return SearchResult(material_score(board, root_player), None)

    best_move = None
    best_score = MIN_SCORE if maximizing else MAX_SCORE

    for move in board.legal_moves(player):
        child = board.apply_move(move.row, move.col, player)
        result = alpha_beta(child, depth - 1, alpha, beta, not maximizing,
                            player.opponent(), root_player, stats)

        if maximizing:
            if result.score > best_score:
                best_score = result.score
                best_move = move
            alpha = max(alpha, best_score)
        else:
            if result.score < best_score:
                best_score = result.score
                best_move = move
            beta = min(beta, best_score)

        if alpha >= beta:
            break

    return SearchResult(best_score, best_move)


def iterative_deepening(board: Board, max_depth: int = 4, time_budget: float = 5.0,
                        clock: Clock = time.perf_counter,
                        stats: Optional[SearchStats] = None) -> SearchResult:
    """
    Run alpha-beta at depths 1..max_depth for the player to move.

    The running best only changes when a depth finds a strictly better score
    than every depth before it. The ladder stops after the first depth whose
    own duration exceeded ``time_budget``; that depth still counts.

    Returns:
        SearchResult with the best score and move, move None if no legal move
    """
    if stats is None:
        stats = SearchStats()

    player = board.current_player
    legal_moves = board.legal_moves(player)
    if not legal_moves:
        return SearchResult(MIN_SCORE, None)

    best_move = None
    best_score = MIN_SCORE
    search_start = clock()

    for depth in range(1, max_depth + 1):
        nodes_before = stats.nodes
        start = clock()
        result = alpha_beta(board, depth, MIN_SCORE, MAX_SCORE, True, player, player, stats)
        elapsed = clock() - start

        stats.depths.append(DepthRecord(depth, result.score, result.move,
                                        stats.nodes - nodes_before, elapsed))
        logger.debug("depth %d: score=%d move=%s nodes=%d time=%.3fs",
                     depth, result.score, result.move, stats.nodes - nodes_before, elapsed)

        if result.move is not None and result.score > best_score:
            best_score = result.score
            best_move = result.move

        if elapsed > time_budget:
            logger.info("Search budget of %.2fs exceeded at depth %d", time_budget, depth)
            break

    stats.elapsed = clock() - search_start

    if best_move is None:
        # Every line scored at the floor; any legal move is as good as another
        best_move = legal_moves[0]

    return SearchResult(best_score, best_move)


def calculate_difficulty(board: Board, depth: int = 4, clock: Clock = time.perf_counter) -> int:
    """
    Measure search throughput as visited nodes per second.

    Used for offline calibration of the search parameters only.
    """
    stats = SearchStats()
    player = board.current_player
    start = clock()
    alpha_beta(board, depth, MIN_SCORE, MAX_SCORE, True, player, player, stats)
    stats.elapsed = clock() - start
    return stats.difficulty
