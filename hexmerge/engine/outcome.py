"""
Wyniki ruchu - rekordy zwracane przez resolve_move().

Ruch na planszy to lista wyników w kolejności przetwarzania płytek:

    Moved(tile, from_coordinate, to_coordinate)
        Płytka przesunęła się bez łączenia.

    Merged(tile, from_coordinate, to_coordinate, new_value, absorbed)
        Płytka (survivor) weszła na pole płytki o tej samej wartości,
        przyjęła sumę wartości, a płytka `absorbed` została zniszczona.

Płytka, która nie ruszyła się i nie połączyła, nie ma rekordu.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from ..core.coordinate import Coordinate
from ..tiles.tile import Tile


@dataclass(frozen=True)
class Moved:
    """Przesunięcie płytki."""
    tile: Tile
    from_coordinate: Coordinate
    to_coordinate: Coordinate

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "moved",
            "tile_id": self.tile.id,
            "from": self.from_coordinate.as_list(),
            "to": self.to_coordinate.as_list(),
        }


@dataclass(frozen=True)
class Merged:
    """
    Połączenie dwóch płytek.

    Attributes:
        tile: Płytka, która przetrwała (survivor)
        from_coordinate: Pole survivora przed ruchem
        to_coordinate: Pole wchłoniętej płytki (nowe pole survivora)
        new_value: Suma wartości obu płytek
        absorbed: Płytka zniszczona przy łączeniu
    """
    tile: Tile
    from_coordinate: Coordinate
    to_coordinate: Coordinate
    new_value: int
    absorbed: Tile

    @property
    def survivor(self) -> Tile:
        return self.tile

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "merged",
            "tile_id": self.tile.id,
            "absorbed_id": self.absorbed.id,
            "from": self.from_coordinate.as_list(),
            "to": self.to_coordinate.as_list(),
            "value": self.new_value,
        }


Outcome = Union[Moved, Merged]


@dataclass(frozen=True)
class MoveReport:
    """
    Wynik GameSession.apply_move() dla zewnętrznego renderera.

    Attributes:
        outcomes: Rekordy ruchu (pusta lista = ruch zablokowany)
        spawned: Nowa płytka lub None
        terminal: Czy sesja się zakończyła
    """
    outcomes: List[Outcome]
    spawned: Optional[Tile]
    terminal: bool

    @property
    def changed(self) -> bool:
        return bool(self.outcomes)

    def merges(self) -> List[Merged]:
        return [o for o in self.outcomes if isinstance(o, Merged)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outcomes": [o.to_dict() for o in self.outcomes],
            "spawned": self.spawned.snapshot() if self.spawned else None,
            "terminal": self.terminal,
        }
