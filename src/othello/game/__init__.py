"""
Othello game module.
This package contains the board engine and the game session.
"""

from .board import Board, Cell, Move, DIRECTIONS

__all__ = ['Board', 'Cell', 'Move', 'DIRECTIONS']
