"""Render module - tekstowa wizualizacja planszy."""

from .text import render_board, screen_position

__all__ = ["render_board", "screen_position"]
