"""
Rozwiązywanie ruchu - przesuwanie i łączenie płytek wzdłuż osi.

ALGORYTM:
═══════════════════════════════════════════════════════════════════

    1. KOLEJNOŚĆ
       ─────────────────────────────────────────────────────────
       • Posortuj zajęte płytki po pozycji w linii, zaczynając od
         płytki NAJBLIŻSZEJ celu (dla +1: malejąco, dla -1: rosnąco)
       • Remisy między liniami rozstrzyga klucz linii (determinizm)

    2. PRZESUNIĘCIE (dla każdej płytki po kolei)
       ─────────────────────────────────────────────────────────
       • Idź po polach planszy przed płytką, w kierunku ruchu
       • Mapa robocza ma już wyniki wcześniejszych płytek, więc
         płytka z tyłu widzi przeszkodę w jej NOWYM miejscu
       • Wolne pole -> zapamiętaj jako ostatnie wolne, idź dalej
       • Zajęte pole:
           - ta sama wartość i przeszkoda nie łączyła się w tym
             ruchu -> ŁĄCZENIE (płytka wchodzi na pole przeszkody,
             wartość = suma, przeszkoda zniszczona)
           - w przeciwnym razie -> stop na ostatnim wolnym polu
       • Koniec linii -> stop na ostatnim wolnym polu

    3. WYNIK
       ─────────────────────────────────────────────────────────
       • Moved / Merged dla każdej płytki, która się zmieniła
       • Płytki bez zmian nie mają rekordu

NIEZMIENNIKI:
═══════════════════════════════════════════════════════════════════

    • Najwyżej jedna płytka na pole w mapie roboczej, na każdym kroku
    • Płytka łączy się najwyżej raz w ruchu (brak kaskad)
    • Płytka połączona w tym ruchu nie jest celem kolejnego łączenia
    • Suma wartości na planszy się nie zmienia
    • Te same dane wejściowe = te same wyniki
    • Rejestr i płytki NIE są modyfikowane (robi to TileRegistry.apply)

Przykład (linia x=0, kierunek +1):
    przed:   [2] [2] [2] [2]
    po:      [ ] [ ] [4] [4]
"""

from __future__ import annotations
from typing import Dict, List, Optional, Set

from ..core.board import Board
from ..core.coordinate import (
    Axis,
    Coordinate,
    lane_key,
    lane_position,
    validate_direction,
)
from ..tiles.registry import TileRegistry
from ..tiles.tile import Tile
from .outcome import Merged, Moved, Outcome


def processing_order(tiles: List[Tile], axis: Axis, direction: int) -> List[Tile]:
    """
    Sortuje płytki od najbliższej celu do najdalszej.

    Args:
        tiles: Płytki do posortowania
        axis: Oś ruchu
        direction: +1 lub -1

    Returns:
        List[Tile]: Płytki w kolejności przetwarzania
    """
    return sorted(
        tiles,
        key=lambda t: (
            -direction * lane_position(axis, t.coordinate),
            lane_key(axis, t.coordinate),
        ),
    )


def resolve_move(
    registry: TileRegistry,
    board: Board,
    axis: Axis,
    direction: int,
) -> List[Outcome]:
    """
    Oblicza pełny wynik ruchu bez modyfikowania rejestru.

    Args:
        registry: Aktualny rejestr płytek (tylko odczyt)
        board: Plansza
        axis: Oś ruchu
        direction: +1 lub -1

    Returns:
        List[Outcome]: Rekordy Moved / Merged w kolejności przetwarzania

    Raises:
        ValueError: Dla niepoprawnej osi lub kierunku, albo gdy płytka
            leży poza planszą
    """
    if not isinstance(axis, Axis):
        raise ValueError(f"No lane ordering defined for axis {axis!r}")
    validate_direction(direction)

    working: Dict[Coordinate, Tile] = registry.occupancy()
    merged: Set[int] = set()
    outcomes: List[Outcome] = []

    for tile in processing_order(list(working.values()), axis, direction):
        start = tile.coordinate
        if start not in board:
            raise ValueError(f"Tile {tile.id} lies outside the board at {start}")

        last_free: Optional[Coordinate] = None
        target: Optional[Tile] = None

        for cell in board.cells_ahead(axis, direction, start):
            occupant = working.get(cell)
            if occupant is None:
                last_free = cell
                continue
            if occupant.value == tile.value and occupant.id not in merged:
                target = occupant
            break

        if target is not None:
            # `cell` to pozycja przeszkody w mapie roboczej (mogła się już przesunąć)
            destination = cell
            del working[start]
            working[destination] = tile
            merged.add(tile.id)
            outcomes.append(Merged(
                tile=tile,
                from_coordinate=start,
                to_coordinate=destination,
                new_value=tile.value + target.value,
                absorbed=target,
            ))
        elif last_free is not None:
            del working[start]
            working[last_free] = tile
            outcomes.append(Moved(
                tile=tile,
                from_coordinate=start,
                to_coordinate=last_free,
            ))

    return outcomes
