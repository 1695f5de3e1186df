"""
Plansza (Board) - niezmienny zbiór poprawnych pól dla danej średnicy.

Board zarządza przestrzenią gry:
- Generuje pola dla średnicy n
- Grupuje pola w linie (lanes) dla każdej osi
- Odpowiada na pytania "jakie pola są przed płytką"

Kształt planszy (n = 5, r = 2):

    x=0  x=1  x=2  x=3  x=4
    (0,0)(1,0)(2,0)
    (0,1)(1,1)(2,1)(3,1)
    (0,2)(1,2)(2,2)(3,2)(4,2)
         (1,3)(2,3)(3,3)(4,3)
              (2,4)(3,4)(4,4)

Liczba pól (wzór zamknięty):
    size = n² - (n - r - 1)(n - r),  r = n // 2

    Dla nieparzystego n to klasyczny sześciokąt: 3r(r + 1) + 1.

Przykład użycia:
    >>> board = Board.generate(3)
    >>> len(board)
    7
    >>> Coordinate(0, 2) in board
    False
    >>> board.cells_ahead(Axis.X, 1, Coordinate(0, 0))
    [Coordinate(x=0, y=1)]
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterator, List, Tuple

from .coordinate import (
    Axis,
    Coordinate,
    lane_key,
    lane_position,
    validate_direction,
)


def generate_coordinates(n: int) -> FrozenSet[Coordinate]:
    """
    Generuje wszystkie pola planszy o średnicy n.

    Args:
        n: Średnica sześciokąta (>= 1)

    Returns:
        FrozenSet[Coordinate]: Pola (x, y), 0 <= x, y < n, |x - y| <= n // 2

    Raises:
        ValueError: Jeśli n < 1
    """
    if not isinstance(n, int) or isinstance(n, bool) or n < 1:
        raise ValueError(f"Board diameter must be a positive integer, got {n!r}")

    radius = n // 2
    return frozenset(
        Coordinate(x, y)
        for x in range(n)
        for y in range(n)
        if abs(x - y) <= radius
    )


@dataclass(frozen=True)
class Board:
    """
    Niezmienna plansza współdzielona przez wszystkie komponenty.

    Attributes:
        diameter (int): Średnica n
        cells (FrozenSet[Coordinate]): Wszystkie poprawne pola
        _lanes (Dict): Cache linii per oś: klucz linii -> pola posortowane
            rosnąco po pozycji w linii
    """
    diameter: int
    cells: FrozenSet[Coordinate]
    _lanes: Dict[Axis, Dict[int, Tuple[Coordinate, ...]]] = field(
        default_factory=dict, repr=False, compare=False
    )

    @classmethod
    def generate(cls, n: int) -> Board:
        """Tworzy planszę o średnicy n z prekomputowanymi liniami."""
        cells = generate_coordinates(n)
        lanes: Dict[Axis, Dict[int, Tuple[Coordinate, ...]]] = {}

        for axis in Axis:
            grouped: Dict[int, List[Coordinate]] = {}
            for cell in cells:
                grouped.setdefault(lane_key(axis, cell), []).append(cell)
            lanes[axis] = {
                key: tuple(sorted(members, key=lambda c: lane_position(axis, c)))
                for key, members in grouped.items()
            }

        return cls(diameter=n, cells=cells, _lanes=lanes)

    @staticmethod
    def expected_size(n: int) -> int:
        """Liczba pól planszy o średnicy n (wzór zamknięty)."""
        radius = n // 2
        return n * n - (n - radius - 1) * (n - radius)

    @property
    def radius(self) -> int:
        return self.diameter // 2

    # ─────────────────────────────────────────────────────────────────────────
    # ZAPYTANIA
    # ─────────────────────────────────────────────────────────────────────────

    def contains(self, coordinate: Coordinate) -> bool:
        return coordinate in self.cells

    def __contains__(self, coordinate: object) -> bool:
        return coordinate in self.cells

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self.sorted_cells())

    def sorted_cells(self) -> List[Coordinate]:
        """Pola w stałej kolejności (x, potem y)."""
        return sorted(self.cells, key=lambda c: (c.x, c.y))

    def lanes(self, axis: Axis) -> Dict[int, Tuple[Coordinate, ...]]:
        """
        Zwraca linie dla osi.

        Returns:
            Dict[int, Tuple[Coordinate, ...]]: klucz linii -> pola
                posortowane rosnąco po pozycji w linii
        """
        return self._lanes[axis]

    def lane_of(self, axis: Axis, coordinate: Coordinate) -> Tuple[Coordinate, ...]:
        """
        Zwraca całą linię zawierającą pole.

        Raises:
            ValueError: Jeśli pole nie należy do planszy
        """
        if coordinate not in self.cells:
            raise ValueError(f"Coordinate {coordinate} is outside the board")
        return self._lanes[axis][lane_key(axis, coordinate)]

    def cells_ahead(
        self,
        axis: Axis,
        direction: int,
        coordinate: Coordinate,
    ) -> List[Coordinate]:
        """
        Pola planszy ściśle przed polem w kierunku ruchu, od najbliższego.

        Args:
            axis: Oś ruchu
            direction: +1 (rosnąco w linii) lub -1 (malejąco)
            coordinate: Pole startowe

        Returns:
            List[Coordinate]: Pusta lista, jeśli pole jest końcem linii
        """
        validate_direction(direction)
        lane = self.lane_of(axis, coordinate)
        index = lane.index(coordinate)
        if direction > 0:
            return list(lane[index + 1:])
        return list(reversed(lane[:index]))
