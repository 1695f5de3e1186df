"""
Rejestr płytek (TileRegistry) - mapa zajętych pól.

TileRegistry jest jedynym źródłem prawdy o tym, co leży na planszy:
- Mapuje pole -> płytka (najwyżej jedna płytka na pole)
- Nadaje płytkom unikalne id
- Stosuje wynik ruchu jako jedną transakcję

Transakcja ruchu (apply):
    1. Skopiuj mapę pól
    2. Zastosuj na kopii wszystkie wyniki (przesunięcia, łączenia)
    3. Po każdym kroku sprawdź niezmiennik "jedna płytka na pole"
    4. Dopiero na końcu podmień mapę i zaktualizuj płytki

Dzięki temu obserwator nigdy nie widzi stanu w połowie ruchu,
a błąd w wynikach ruchu zostawia rejestr nietknięty.

Przykład użycia:
    >>> registry = TileRegistry()
    >>> tile = registry.place(Coordinate(0, 0), 2)
    >>> registry.get(Coordinate(0, 0)) is tile
    True
    >>> registry.place(Coordinate(0, 0), 4)
    Traceback (most recent call last):
    ValueError: Coordinate (0, 0) is already occupied by tile 1
"""

from __future__ import annotations
from itertools import count
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Optional, Set, Tuple

from ..core.board import Board
from ..core.coordinate import Coordinate
from .tile import Tile

if TYPE_CHECKING:
    from ..engine.outcome import Outcome


class TileRegistry:
    """
    Mapa zajętych pól na płytki.

    Attributes:
        _occupancy (Dict[Coordinate, Tile]): Mapa pole -> płytka
        _ids (Iterator[int]): Licznik id płytek (od 1)
    """

    def __init__(self) -> None:
        self._occupancy: Dict[Coordinate, Tile] = {}
        self._ids = count(1)

    # ─────────────────────────────────────────────────────────────────────────
    # ZAPYTANIA
    # ─────────────────────────────────────────────────────────────────────────

    def get(self, coordinate: Coordinate) -> Optional[Tile]:
        """Płytka na polu lub None."""
        return self._occupancy.get(coordinate)

    def free_coordinates(self, board: Board) -> Set[Coordinate]:
        """Pola planszy bez płytki."""
        return {c for c in board.cells if c not in self._occupancy}

    def tiles(self) -> List[Tile]:
        """Wszystkie płytki posortowane po id."""
        return sorted(self._occupancy.values(), key=lambda t: t.id)

    def occupancy(self) -> Dict[Coordinate, Tile]:
        """Kopia mapy pole -> płytka (tylko do odczytu dla wywołującego)."""
        return dict(self._occupancy)

    def total_value(self) -> int:
        return sum(t.value for t in self._occupancy.values())

    def __len__(self) -> int:
        return len(self._occupancy)

    def __contains__(self, coordinate: object) -> bool:
        return coordinate in self._occupancy

    def __iter__(self) -> Iterator[Tile]:
        return iter(self.tiles())

    # ─────────────────────────────────────────────────────────────────────────
    # MODYFIKACJE
    # ─────────────────────────────────────────────────────────────────────────

    def place(self, coordinate: Coordinate, value: int) -> Tile:
        """
        Tworzy płytkę na wolnym polu.

        Args:
            coordinate: Docelowe pole
            value: Wartość płytki (dodatnia liczba całkowita)

        Returns:
            Tile: Nowa płytka

        Raises:
            ValueError: Jeśli pole jest zajęte lub wartość niepoprawna
        """
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValueError(f"Tile value must be a positive integer, got {value!r}")

        occupant = self._occupancy.get(coordinate)
        if occupant is not None:
            raise ValueError(
                f"Coordinate {coordinate} is already occupied by tile {occupant.id}"
            )

        tile = Tile(id=next(self._ids), coordinate=coordinate, value=value)
        self._occupancy[coordinate] = tile
        return tile

    def remove(self, tile: Tile) -> None:
        """
        Usuwa płytkę z rejestru i oznacza ją jako zniszczoną.

        Raises:
            ValueError: Jeśli płytka nie jest zarejestrowana na swoim polu
        """
        if self._occupancy.get(tile.coordinate) is not tile:
            raise ValueError(f"Tile {tile.id} is not registered at {tile.coordinate}")
        del self._occupancy[tile.coordinate]
        tile.destroy()

    def clear(self) -> None:
        for tile in self._occupancy.values():
            tile.destroy()
        self._occupancy.clear()

    # ─────────────────────────────────────────────────────────────────────────
    # TRANSAKCJA RUCHU
    # ─────────────────────────────────────────────────────────────────────────

    def apply(self, outcomes: Iterable["Outcome"]) -> None:
        """
        Stosuje wszystkie wyniki ruchu jako jedną transakcję.

        Args:
            outcomes: Lista Moved / Merged z resolve_move()

        Raises:
            ValueError: Jeśli wyniki łamią niepodzielność pola lub odnoszą
                się do płytek spoza rejestru. Rejestr zostaje wtedy bez zmian.
        """
        # import lokalny: engine.outcome importuje Tile z tego pakietu
        from ..engine.outcome import Merged, Moved

        working = dict(self._occupancy)
        positions: Dict[int, Coordinate] = {t.id: t.coordinate for t in working.values()}
        values: Dict[int, int] = {}
        absorbed: List[Tuple[Tile, Coordinate]] = []

        for outcome in outcomes:
            tile = outcome.tile
            current = positions.get(tile.id)
            if current is None or working.get(current) is not tile:
                raise ValueError(f"Tile {tile.id} is not on the board")
            if current != outcome.from_coordinate:
                raise ValueError(
                    f"Tile {tile.id} is at {current}, outcome expects {outcome.from_coordinate}"
                )

            target = outcome.to_coordinate
            occupant = working.get(target)

            if isinstance(outcome, Merged):
                if occupant is not outcome.absorbed:
                    raise ValueError(
                        f"Merge target {target} does not hold tile {outcome.absorbed.id}"
                    )
                del positions[occupant.id]
                absorbed.append((occupant, target))
                values[tile.id] = outcome.new_value
            elif isinstance(outcome, Moved):
                if occupant is not None:
                    raise ValueError(
                        f"Tile {tile.id} cannot move to occupied {target} (tile {occupant.id})"
                    )
            else:
                raise ValueError(f"Unknown outcome type: {type(outcome).__name__}")

            del working[current]
            working[target] = tile
            positions[tile.id] = target

        # Commit - od tego miejsca nic nie może się nie udać
        self._occupancy = working
        for tile in working.values():
            new_value = values.get(tile.id)
            if new_value is not None:
                tile.merge_into(positions[tile.id], new_value)
            elif tile.coordinate != positions[tile.id]:
                tile.move_to(positions[tile.id])
        # wchłonięta płytka znika na polu, na którym nastąpiło łączenie
        for tile, coordinate in absorbed:
            if tile.coordinate != coordinate:
                tile.move_to(coordinate)
            tile.destroy()

    def __repr__(self) -> str:
        return f"TileRegistry(tiles={len(self._occupancy)})"
