"""
Othello game module.
Handles game flow and state management for a single session.
"""
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Union

from .board import Board, Cell, Move
from ..ai.selectors import Difficulty, MoveSelector, create_selector
from ..config import GameConfig

logger = logging.getLogger(__name__)


class GameMode(str, Enum):
    PLAYER_VS_PLAYER = "Player vs Player"
    PLAYER_VS_AI = "Player vs AI"


class Alert(str, Enum):
    """User-visible notifications raised by the session."""
    GAME_OVER = "GameOver"
    GAME_RESET = "GameReset"
    ILLEGAL_MOVE = "IllegalMove"


@dataclass(frozen=True)
class AwaitingMove:
    player: Cell


@dataclass(frozen=True)
class Passed:
    count: int


@dataclass(frozen=True)
class GameOver:
    pass


GameState = Union[AwaitingMove, Passed, GameOver]


@dataclass
class GameSettings:
    """Player-facing options for a session."""
    show_legal_moves: bool = True
    game_mode: GameMode = GameMode.PLAYER_VS_PLAYER
    ai_difficulty: Difficulty = Difficulty.EASY
    enable_passing_turns: bool = False

    @classmethod
    def from_config(cls, config: GameConfig) -> 'GameSettings':
        return cls(
            show_legal_moves=config.show_legal_moves,
            game_mode=GameMode(config.game_mode),
            ai_difficulty=Difficulty(config.ai_difficulty),
            enable_passing_turns=config.enable_passing_turns
        )


SelectorFactory = Callable[[Difficulty], MoveSelector]


class OthelloGame:
    """
    Session that owns the live board and sequences the turns.

    The AI always plays Light. While the AI is thinking, taps from the
    human player are rejected.
    """

    AI_PLAYER = Cell.LIGHT

    def __init__(self, settings: Optional[GameSettings] = None,
                 selector_factory: SelectorFactory = create_selector):
        """
        Initialize a new game.

        Args:
            settings: Session options (default: GameSettings())
            selector_factory: Builds the MoveSelector for a difficulty
        """
        self.settings = settings or GameSettings()
        self.selector_factory = selector_factory
        self._lock = threading.Lock()
        self._ai_thread: Optional[threading.Thread] = None
        self.is_ai_thinking = False
        self.active_alert: Optional[Alert] = None
        self._reset_state(Board())

    def _reset_state(self, board: Board) -> None:
        self.board = board
        self.legal_moves: List[Move] = []
        self.consecutive_passes = 0
        self.is_game_over = False
        self.pass_available = False
        self.update_scores()
        self.calculate_legal_moves()

    @property
    def state(self) -> GameState:
        if self.is_game_over:
            return GameOver()
        if self.consecutive_passes > 0:
            return Passed(self.consecutive_passes)
        return AwaitingMove(self.board.current_player)

    @property
    def current_player(self) -> Cell:
        return self.board.current_player

    def load_configuration(self, configuration: Optional[Sequence[Sequence[Optional[int]]]]) -> None:
        """Replace the board with a custom grid (Dark to move), or the start position if None."""
        self._reset_state(Board(configuration) if configuration is not None else Board())
        if not self.board.is_board_full():
            self._record_pass_if_stuck()

    def calculate_legal_moves(self) -> None:
        self.legal_moves = self.board.legal_moves(self.board.current_player)

    def update_scores(self) -> None:
        """Update the number of dark and light pieces on the board."""
        self.dark_score, self.light_score = self.board.get_score()

    def start_new_game(self) -> None:
        """Reset to the starting position with Dark to move."""
        with self._lock:
            self._reset_state(Board())
            self.active_alert = Alert.GAME_RESET
        logger.info("New game started")

    reset = start_new_game

    def switch_to_next_player(self) -> None:
        """Hand the turn to the opponent and record a pass if they cannot move."""
        self.board = self.board.switch_turn()
        self.calculate_legal_moves()

        if self.board.is_board_full():
            self._end_game()
        else:
            self._record_pass_if_stuck()

    def _record_pass_if_stuck(self) -> None:
        if self.legal_moves:
            self.pass_available = False
            return
        self.consecutive_passes += 1
        logger.debug("%s has no legal moves (passes=%d)",
                     self.board.current_player.name, self.consecutive_passes)
        # The AI passes on its own, only a human mover gets the button
        self.pass_available = self.settings.enable_passing_turns and not self._is_ai_turn()

    def check_game_over(self) -> bool:
        """
        Decide whether the game has ended.

        With passing enabled the game ends after two consecutive passes or on
        a full board. Without it, a mover with no legal moves ends the game.
        """
        if self.settings.enable_passing_turns:
            game_over = self.consecutive_passes >= 2 or self.board.is_board_full()
        else:
            game_over = self.board.is_board_full() or not self.board.legal_moves(self.board.current_player)

        if game_over:
            self._end_game()
        else:
            self.is_game_over = False
        return self.is_game_over

    def _end_game(self) -> None:
        if not self.is_game_over:
            logger.info("Game over. Dark: %d, Light: %d", self.dark_score, self.light_score)
        self.is_game_over = True
        self.pass_available = False
        self.active_alert = Alert.GAME_OVER

    def _is_ai_turn(self) -> bool:
        return (self.settings.game_mode == GameMode.PLAYER_VS_AI
                and self.board.current_player == self.AI_PLAYER)

    def _play(self, move: Move) -> None:
        """Apply an already validated move and advance the turn."""
        self.board = self.board.apply_move(move.row, move.col, self.board.current_player)
        self.consecutive_passes = 0
        self.pass_available = False
        self.update_scores()
        self.switch_to_next_player()
        self.check_game_over()

    def user_tapped(self, row: int, col: int, run_ai_in_background: bool = True) -> bool:
        """
        Handle a human move at (row, col).

        Args:
            row: Row of the move (0-based)
            col: Column of the move (0-based)
            run_ai_in_background: Start the AI reply on a worker thread
                instead of computing it before returning

        Returns:
            bool: True if the move was legal and applied
        """
        with self._lock:
            if self.is_ai_thinking or self.is_game_over:
                return False

            if Move(row, col) not in self.legal_moves:
                self.active_alert = Alert.ILLEGAL_MOVE
                return False

            self._play(Move(row, col))
            ai_turn = not self.is_game_over and self._is_ai_turn()
            if ai_turn:
                self.is_ai_thinking = True
            board = self.board

        if ai_turn:
            if run_ai_in_background:
                self._launch_ai()
            else:
                self._run_ai(board)
        return True

    def pass_turn(self) -> bool:
        """
        Pass for a mover that has no legal moves.

        Returns:
            bool: True if the pass was accepted
        """
        with self._lock:
            self.pass_available = False
            if self.is_game_over or self.is_ai_thinking or self._is_ai_turn():
                return False
            if self.legal_moves:
                return False

            if self.consecutive_passes >= 2 or self.board.is_board_full():
                self._end_game()
                return True

            self.switch_to_next_player()
            self.check_game_over()
            ai_turn = not self.is_game_over and self._is_ai_turn()
            if ai_turn:
                self.is_ai_thinking = True

        if ai_turn:
            self._launch_ai()
        return True

    def _select_ai_move(self, board: Board) -> Optional[Move]:
        selector = self.selector_factory(self.settings.ai_difficulty)
        return selector.select_move(board)

    def _apply_ai_move(self, searched: Board, move: Optional[Move]) -> None:
        with self._lock:
            try:
                # The position changed under the search (e.g. a new game)
                if self.is_game_over or self.board is not searched:
                    return
                if move is None:
                    logger.debug("AI has no legal moves and passes")
                    self.switch_to_next_player()
                    self.check_game_over()
                else:
                    self._play(move)
            finally:
                self.is_ai_thinking = False

    def _run_ai(self, board: Board) -> Optional[Move]:
        """Select and apply a move for ``board``; the caller has set is_ai_thinking."""
        try:
            move = self._select_ai_move(board)
        except Exception:
            self.is_ai_thinking = False
            raise
        self._apply_ai_move(board, move)
        return move

    def make_ai_move(self) -> Optional[Move]:
        """
        Compute and apply the AI's move synchronously.

        Returns:
            The move played, or None if the AI had to pass, the game is over
            or another AI search is still running
        """
        with self._lock:
            if self.is_game_over or self.is_ai_thinking:
                return None
            self.is_ai_thinking = True
            board = self.board
        return self._run_ai(board)

    def request_ai_move(self) -> bool:
        """
        Run the AI selection on a worker thread and apply the result when done.

        Returns:
            bool: False if the AI is already thinking
        """
        with self._lock:
            if self.is_ai_thinking:
                return False
            self.is_ai_thinking = True
        self._launch_ai()
        return True

    def _launch_ai(self) -> None:
        # A finished worker may still be unwinding after clearing the flag
        if self._ai_thread is not None:
            self._ai_thread.join()
        board = self.board

        def worker():
            try:
                self._run_ai(board)
            except Exception:
                logger.exception("AI move selection failed")

        self._ai_thread = threading.Thread(target=worker, daemon=True)
        self._ai_thread.start()

    def wait_for_ai(self, timeout: Optional[float] = None) -> bool:
        """
        Block until a background AI move has been applied.

        Returns:
            bool: True if no AI work is pending
        """
        if self._ai_thread is not None:
            self._ai_thread.join(timeout)
            return not self._ai_thread.is_alive()
        return True

    def __str__(self) -> str:
        result = str(self.board)
        if self.is_game_over:
            if self.dark_score == self.light_score:
                result += "\nGame over! It's a draw!"
            else:
                winner = 'Dark' if self.dark_score > self.light_score else 'Light'
                result += f"\nGame over! {winner} wins!"
        return result
