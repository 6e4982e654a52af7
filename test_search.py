"""
Test script for the alpha-beta search.
"""
from othello.ai import search
from othello.ai.search import (MAX_SCORE, MIN_SCORE, SearchResult, SearchStats, alpha_beta,
                               iterative_deepening, calculate_difficulty, material_score)
from othello.game.board import Board, Cell, Move

D, L = Cell.DARK, Cell.LIGHT


class FakeClock:
    """Clock that advances by a fixed step on every reading."""

    def __init__(self, step: float = 0.0):
        self.now = 0.0
        self.step = step

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value


def midgame_board() -> Board:
    board = Board()
    for row, col in [(2, 3), (2, 2), (2, 1), (1, 3)]:
        board = board.apply_move(row, col, board.current_player).switch_turn()
    return board


def test_depth_one_from_start():
    """Every opening gains three pieces; the first one in scan order is kept."""
    stats = SearchStats()
    result = alpha_beta(Board(), 1, MIN_SCORE, MAX_SCORE, True, D, D, stats)

    assert result == SearchResult(3, Move(2, 3))
    assert stats.nodes == 5, "Root plus one leaf per legal move"


def test_leaf_is_scored_for_root_player():
    board = Board().apply_move(2, 3, D).switch_turn()
    stats = SearchStats()

    result = alpha_beta(board, 0, MIN_SCORE, MAX_SCORE, False, L, D, stats)
    assert result == SearchResult(3, None)
    assert material_score(board, L) == -3
    assert stats.nodes == 1


def test_node_without_moves_keeps_seed():
    full = Board([[D if (i + j) % 2 == 0 else L for j in range(8)] for i in range(8)])

    maximizing = alpha_beta(full, 2, MIN_SCORE, MAX_SCORE, True, D, D, SearchStats())
    minimizing = alpha_beta(full, 2, MIN_SCORE, MAX_SCORE, False, D, D, SearchStats())

    assert maximizing == SearchResult(MIN_SCORE, None)
    assert minimizing == SearchResult(MAX_SCORE, None)


def test_no_legal_moves_returns_none():
    grid = [[None] * 8 for _ in range(8)]
    grid[0][0] = D
    result = iterative_deepening(Board(grid), clock=FakeClock())
    assert result.move is None


def test_search_move_is_legal():
    for board in (Board(), midgame_board(), midgame_board().switch_turn()):
        result = iterative_deepening(board, max_depth=3, clock=FakeClock())
        assert result.move in board.legal_moves(board.current_player), \
            f"{result.move} is not legal\n{board}"


def test_full_ladder_runs_without_budget_pressure():
    stats = SearchStats()
    result = iterative_deepening(Board(), max_depth=4, clock=FakeClock(0.0), stats=stats)

    assert [record.depth for record in stats.depths] == [1, 2, 3, 4]
    assert stats.depth_reached == 4
    assert stats.nodes == sum(record.nodes for record in stats.depths)
    assert result.move in Board().legal_moves(D)
    assert result.score >= 3


def test_budget_stops_ladder_after_slow_depth():
    """A depth that overruns the budget still counts, deeper ones never start."""
    stats = SearchStats()
    result = iterative_deepening(Board(), max_depth=4, time_budget=5.0,
                                 clock=FakeClock(10.0), stats=stats)

    assert len(stats.depths) == 1
    assert result == SearchResult(3, Move(2, 3))


def test_best_score_is_monotone_across_depths():
    board = midgame_board()
    scores = [iterative_deepening(board, max_depth=depth, clock=FakeClock()).score
              for depth in range(1, 4)]
    assert scores == sorted(scores), f"Scores decreased with depth: {scores}"


def test_worse_deeper_result_does_not_replace_best():
    scripted = {
        1: SearchResult(5, Move(2, 3)),
        2: SearchResult(3, Move(3, 2)),
        3: SearchResult(7, Move(4, 5)),
        4: SearchResult(7, Move(5, 4)),
    }

    def fake_alpha_beta(board, depth, alpha, beta, maximizing, player, root_player, stats):
        stats.nodes += 1
        return scripted[depth]

    saved = search.alpha_beta
    search.alpha_beta = fake_alpha_beta
    try:
        result = iterative_deepening(Board(), max_depth=4, clock=FakeClock())
    finally:
        search.alpha_beta = saved

    assert result == SearchResult(7, Move(4, 5))


def test_floor_scores_fall_back_to_first_legal_move():
    def floor_alpha_beta(board, depth, alpha, beta, maximizing, player, root_player, stats):
        return SearchResult(MIN_SCORE, None)

    saved = search.alpha_beta
    search.alpha_beta = floor_alpha_beta
    try:
        result = iterative_deepening(Board(), max_depth=2, clock=FakeClock())
    finally:
        search.alpha_beta = saved

    assert result.move == Move(2, 3)


def test_calculate_difficulty():
    # Clock reads 0 before and 2 after a 5-node search
    assert calculate_difficulty(Board(), depth=1, clock=FakeClock(2.0)) == 2
    assert SearchStats(nodes=10, elapsed=0.0).difficulty == 0


if __name__ == "__main__":
    print("Running alpha-beta search tests...\n")

    test_depth_one_from_start()
    test_leaf_is_scored_for_root_player()
    test_node_without_moves_keeps_seed()
    test_no_legal_moves_returns_none()
    test_search_move_is_legal()
    test_full_ladder_runs_without_budget_pressure()
    test_budget_stops_ladder_after_slow_depth()
    test_best_score_is_monotone_across_depths()
    test_worse_deeper_result_does_not_replace_best()
    test_floor_scores_fall_back_to_first_legal_move()
    test_calculate_difficulty()

    print("\nAll tests passed successfully!")
