"""
Othello board engine with a three-tier computer player.
"""
from .game import Board, Cell, Move
from .ai import Difficulty, create_selector, select_move
from .game.game import OthelloGame, GameSettings, GameMode, Alert

__version__ = "0.1"

__all__ = [
    'Board', 'Cell', 'Move', 'Difficulty', 'create_selector', 'select_move',
    'OthelloGame', 'GameSettings', 'GameMode', 'Alert',
]
