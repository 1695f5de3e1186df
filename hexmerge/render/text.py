"""
Tekstowy renderer planszy (terminal, debug).

Układ wyświetlania:
    kolumna ekranu = x
    wiersz ekranu  = 2·y + (r - x)

Kolumna x jest przesunięta w pionie o (r - x) pół-pól, więc
sąsiednie kolumny są przesunięte o pół wiersza i plansza wygląda
jak sześciokąt (n = 3):

       .
  .         .
       2
  .         .
       .

Legenda:
    . = puste pole
    liczba = wartość płytki
"""

from __future__ import annotations
from typing import Dict, List, Tuple

from ..core.board import Board
from ..core.coordinate import Coordinate
from ..tiles.registry import TileRegistry

EMPTY_CELL = "."


def screen_position(board: Board, coordinate: Coordinate) -> Tuple[int, int]:
    """
    Pozycja pola na ekranie jako (wiersz, kolumna) w połówkach pola.

    Returns:
        Tuple[int, int]: (2·y + r - x, x)
    """
    return (2 * coordinate.y + board.radius - coordinate.x, coordinate.x)


def render_board(board: Board, registry: TileRegistry, cell_width: int = 5) -> str:
    """
    Zwraca tekstową wizualizację planszy z płytkami.

    Args:
        board: Plansza
        registry: Płytki
        cell_width: Szerokość kolumny w znakach

    Returns:
        str: Wiele linii tekstu
    """
    labels: Dict[Tuple[int, int], str] = {}
    for cell in board.cells:
        tile = registry.get(cell)
        labels[screen_position(board, cell)] = str(tile.value) if tile else EMPTY_CELL

    if not labels:
        return ""

    first_row = min(row for row, _ in labels)
    last_row = max(row for row, _ in labels)

    lines: List[str] = []
    for row in range(first_row, last_row + 1):
        parts = [
            labels.get((row, x), "").center(cell_width)
            for x in range(board.diameter)
        ]
        lines.append("".join(parts).rstrip())
    return "\n".join(lines)
