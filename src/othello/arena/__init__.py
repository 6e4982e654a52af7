"""
Arena module for running tournaments between AI tiers.
"""
from .arena import Arena, ArenaPlayer, ELORatingSystem

__all__ = ['Arena', 'ArenaPlayer', 'ELORatingSystem']
