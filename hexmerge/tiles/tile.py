"""
Tile - pojedyncza płytka z liczbą na planszy.

Cykl życia płytki:
═══════════════════════════════════════════════════════════════════

    1. TWORZENIE
       - TileRegistry.place() na wolnym polu
       - Wartość losowana ze zbioru wartości początkowych

    2. RUCH (per move)
       - move_to(): przesunięcie na nowe pole
       - merge_into(): przesunięcie na pole przeszkody + nowa wartość

    3. ZNISZCZENIE
       - Tylko gdy zostanie wchłonięta przez inną płytkę przy łączeniu
       - TileRegistry.remove() / TileRegistry.apply()

Identyfikacja:
    Płytki porównywane są po tożsamości (id), nie po wartości.
    Dwie płytki mogą mieć tę samą wartość, ale nigdy to samo pole.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict

from ..core.coordinate import Coordinate


@dataclass(eq=False)
class Tile:
    """
    Płytka na planszy.

    Attributes:
        id (int): Unikalny identyfikator nadawany przez TileRegistry
        coordinate (Coordinate): Aktualne pole
        value (int): Wartość (dodatnia, potęga podstawy)
        alive (bool): False po wchłonięciu przez inną płytkę
    """
    id: int
    coordinate: Coordinate
    value: int
    alive: bool = field(default=True, repr=False)

    def move_to(self, coordinate: Coordinate) -> None:
        """Przesuwa płytkę bez zmiany wartości."""
        self.coordinate = coordinate

    def merge_into(self, coordinate: Coordinate, value: int) -> None:
        """Przesuwa płytkę na pole wchłoniętej płytki i ustawia sumę wartości."""
        self.coordinate = coordinate
        self.value = value

    def destroy(self) -> None:
        self.alive = False

    def snapshot(self) -> Dict[str, Any]:
        """Zwraca stan płytki do serializacji (JSON)."""
        return {
            "id": self.id,
            "coordinate": self.coordinate.as_list(),
            "value": self.value,
        }
