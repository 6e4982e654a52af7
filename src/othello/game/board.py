"""
Board module for Othello.
Handles the board state, move validation and piece flipping.
Boards are immutable values: every operation that changes the position
returns a new Board.
"""
from enum import IntEnum
from typing import List, NamedTuple, Optional, Sequence, Tuple
import numpy as np


class Cell(IntEnum):
    """Occupancy of a single square."""
    EMPTY = 0
    DARK = 1   # Dark moves first
    LIGHT = 2

    def opponent(self) -> 'Cell':
        """Return the other player. EMPTY has no opponent."""
        if self == Cell.EMPTY:
            raise ValueError("EMPTY is not a player")
        return Cell.LIGHT if self == Cell.DARK else Cell.DARK


class Move(NamedTuple):
    """A (row, col) board coordinate, 0-indexed."""
    row: int
    col: int


# Directions for move validation (8 directions)
DIRECTIONS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


class Board:
    """
    Represents the Othello board as an 8x8 numpy grid of Cell values
    plus the player whose turn it is.
    """

    SIZE = 8

    def __init__(self, configuration: Optional[Sequence[Sequence[Optional[int]]]] = None):
        """
        Initialize a board.

        Args:
            configuration: Optional 8x8 grid of cells (None or 0 for empty).
                If omitted the canonical starting position is used.
                Dark is always the first mover.
        """
        if configuration is None:
            grid = np.zeros((self.SIZE, self.SIZE), dtype=np.int8)
            grid[3, 3] = Cell.LIGHT
            grid[3, 4] = Cell.DARK
            grid[4, 3] = Cell.DARK
            grid[4, 4] = Cell.LIGHT
        else:
            grid = self._grid_from_configuration(configuration)

        grid.flags.writeable = False
        self._grid = grid
        self._current_player = Cell.DARK

    @classmethod
    def _grid_from_configuration(cls, configuration) -> np.ndarray:
        if len(configuration) != cls.SIZE or any(len(row) != cls.SIZE for row in configuration):
            raise ValueError("Only 8x8 boards are supported")

        grid = np.zeros((cls.SIZE, cls.SIZE), dtype=np.int8)
        for i, row in enumerate(configuration):
            for j, value in enumerate(row):
                if value is None:
                    continue
                # Raises ValueError for anything outside the tri-state
                grid[i, j] = Cell(value)
        return grid

    @classmethod
    def _from_state(cls, grid: np.ndarray, current_player: Cell) -> 'Board':
        """Build a board around an already validated grid without copying it."""
        board = cls.__new__(cls)
        grid.flags.writeable = False
        board._grid = grid
        board._current_player = current_player
        return board

    @property
    def current_player(self) -> Cell:
        return self._current_player

    @staticmethod
    def is_on_board(row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < Board.SIZE and 0 <= col < Board.SIZE

    def get_cell(self, row: int, col: int) -> Cell:
        return Cell(int(self._grid[row, col]))

    def switch_turn(self) -> 'Board':
        """Return a board with the same grid and the opponent to move."""
        return Board._from_state(self._grid, self._current_player.opponent())

    def legal_moves(self, player: Cell) -> List[Move]:
        """
        Get all legal moves for the given player.

        The scan is row-major, so the order is deterministic.

        Args:
            player: Cell.DARK or Cell.LIGHT

        Returns:
            List of Move tuples
        """
        moves = []
        for row in range(self.SIZE):
            for col in range(self.SIZE):
                if self._grid[row, col] == Cell.EMPTY and self.is_valid_move(player, row, col):
                    moves.append(Move(row, col))
        return moves

    def is_valid_move(self, player: Cell, row: int, col: int) -> bool:
        """Check if placing a piece at (row, col) flips at least one opponent piece."""
        if not self.is_on_board(row, col) or self._grid[row, col] != Cell.EMPTY:
            return False

        opponent = player.opponent()
        for dr, dc in DIRECTIONS:
            r, c = row + dr, col + dc
            found_opponent = False

            while self.is_on_board(r, c) and self._grid[r, c] == opponent:
                found_opponent = True
                r += dr
                c += dc

            if found_opponent and self.is_on_board(r, c) and self._grid[r, c] == player:
                return True

        return False

    def pieces_to_flip(self, row: int, col: int, player: Cell) -> List[Tuple[int, int]]:
        """
        Get the opponent pieces that a move at (row, col) would flip.

        A run is only kept when it is closed by one of the player's pieces;
        runs that reach the edge or an empty square are dropped.
        """
        opponent = player.opponent()
        flipped = []

        for dr, dc in DIRECTIONS:
            run = []
            r, c = row + dr, col + dc

            while self.is_on_board(r, c) and self._grid[r, c] == opponent:
                run.append((r, c))
                r += dr
                c += dc

            if run and self.is_on_board(r, c) and self._grid[r, c] == player:
                flipped.extend(run)

        return flipped

    def apply_move(self, row: int, col: int, player: Cell) -> 'Board':
        """
        Place a piece and flip the captured runs on a copy of this board.

        Legality is not checked here; call is_valid_move first.
        The player to move is left unchanged.
        """
        grid = self._grid.copy()
        grid[row, col] = player
        for r, c in self.pieces_to_flip(row, col, player):
            grid[r, c] = player
        return Board._from_state(grid, self._current_player)

    def is_board_full(self) -> bool:
        return not np.any(self._grid == Cell.EMPTY)

    def piece_count(self, player: Cell) -> int:
        return int(np.count_nonzero(self._grid == player))

    def get_score(self) -> Tuple[int, int]:
        """
        Get the current score (dark, light).

        Returns:
            Tuple of (dark_count, light_count)
        """
        return self.piece_count(Cell.DARK), self.piece_count(Cell.LIGHT)

    def get_board_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            Writable 2D copy of the grid
        """
        return self._grid.copy()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self._current_player == other._current_player
                and np.array_equal(self._grid, other._grid))

    def __hash__(self) -> int:
        return hash((self._grid.tobytes(), int(self._current_player)))

    def __str__(self) -> str:
        """Return a string representation of the board."""
        symbols = {Cell.EMPTY: '.', Cell.DARK: 'D', Cell.LIGHT: 'L'}
        rows = []
        for i in range(self.SIZE):
            rows.append(' '.join(symbols[Cell(int(v))] for v in self._grid[i]))

        dark, light = self.get_score()
        status = ["\n".join(rows)]
        status.append(f"Current player: {'Dark' if self._current_player == Cell.DARK else 'Light'}")
        status.append(f"Score - Dark: {dark}, Light: {light}")
        return "\n".join(status)

    def __repr__(self) -> str:
        return f"Board(current_player={self._current_player.name}, score={self.get_score()})"
