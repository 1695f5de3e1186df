"""
System współrzędnych planszy hexagonalnej (x, y) i osie przesuwania.

Plansza jest rombem n x n przyciętym do sześciokąta:
pole (x, y) należy do planszy wtedy i tylko wtedy, gdy |x - y| <= n // 2.

Sąsiedzi pola (x, y) leżą na trzech osiach:

    Oś   Krok (dx, dy)   Linia (lane)       Porządek w linii
    ──────────────────────────────────────────────────────────
    X    ( 0, +1)        stałe x            rosnące y
    Y    (+1,  0)        stałe y            rosnące x
    Z    (+1, +1)        stałe (y - x)      rosnące y

Kierunek +1 oznacza ruch zgodnie z porządkiem linii, -1 przeciwnie.
Na osi Z kolejne pola różnią się o (+1, +1), więc pole "przed" płytką
jest ściśle większe w obu współrzędnych (dla -1: ściśle mniejsze).

Przykład użycia:
    >>> c = Coordinate(2, 3)
    >>> lane_key(Axis.Z, c)
    1
    >>> lane_position(Axis.Y, c)
    2
    >>> c.step(Axis.Z, -1)
    Coordinate(x=1, y=2)
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple


class Axis(Enum):
    """Jedna z trzech symetrycznych osi siatki."""

    X = "X"
    Y = "Y"
    Z = "Z"

    @classmethod
    def parse(cls, value: "Axis | str") -> "Axis":
        """
        Zamienia nazwę osi (np. "x", "Z") na Axis.

        Raises:
            ValueError: Jeśli nazwa nie jest osią
        """
        if isinstance(value, Axis):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(
                f"Unknown axis: {value!r}. Available: {[a.value for a in cls]}"
            ) from None


# Krok o jedno pole w kierunku +1 dla każdej osi
AXIS_STEPS: Dict[Axis, Tuple[int, int]] = {
    Axis.X: (0, 1),
    Axis.Y: (1, 0),
    Axis.Z: (1, 1),
}

DIRECTIONS: Tuple[int, int] = (1, -1)


def validate_direction(direction: int) -> int:
    """
    Sprawdza czy kierunek to +1 lub -1.

    Raises:
        ValueError: Dla każdej innej wartości
    """
    if (
        isinstance(direction, bool)
        or not isinstance(direction, int)
        or direction not in DIRECTIONS
    ):
        raise ValueError(f"Direction must be +1 or -1, got {direction!r}")
    return direction


@dataclass(frozen=True)
class Coordinate:
    """
    Współrzędna pola planszy.

    Klasa jest niemutowalna (frozen=True), porównywana po wartości
    i może być kluczem w słowniku lub elementem zbioru.

    Attributes:
        x (int): Kolumna
        y (int): Wiersz w obrębie kolumny
    """
    x: int
    y: int

    # ─────────────────────────────────────────────────────────────────────────
    # SĄSIEDZI
    # ─────────────────────────────────────────────────────────────────────────

    def step(self, axis: Axis, direction: int = 1) -> Coordinate:
        """
        Zwraca sąsiada wzdłuż osi.

        Args:
            axis: Oś ruchu
            direction: +1 lub -1

        Returns:
            Coordinate: Sąsiednie pole (może leżeć poza planszą)
        """
        dx, dy = AXIS_STEPS[axis]
        return Coordinate(self.x + dx * direction, self.y + dy * direction)

    def neighbors(self) -> List[Coordinate]:
        """Sześciu sąsiadów: X+, X-, Y+, Y-, Z+, Z-."""
        return [
            self.step(axis, direction)
            for axis in Axis
            for direction in DIRECTIONS
        ]

    # ─────────────────────────────────────────────────────────────────────────
    # SERIALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def as_list(self) -> List[int]:
        """Para [x, y] do JSON."""
        return [self.x, self.y]

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


# ─────────────────────────────────────────────────────────────────────────────
# LINIE (LANES)
# ─────────────────────────────────────────────────────────────────────────────

def lane_key(axis: Axis, coordinate: Coordinate) -> int:
    """
    Klucz linii: pola o tym samym kluczu leżą na jednej prostej wzdłuż osi.

    Returns:
        int: x dla X, y dla Y, (y - x) dla Z
    """
    if axis is Axis.X:
        return coordinate.x
    if axis is Axis.Y:
        return coordinate.y
    if axis is Axis.Z:
        return coordinate.y - coordinate.x
    raise ValueError(f"No lane ordering defined for axis {axis!r}")


def lane_position(axis: Axis, coordinate: Coordinate) -> int:
    """
    Pozycja pola w obrębie linii (rośnie w kierunku +1).

    Returns:
        int: y dla X, x dla Y, y dla Z
    """
    if axis is Axis.X or axis is Axis.Z:
        return coordinate.y
    if axis is Axis.Y:
        return coordinate.x
    raise ValueError(f"No lane ordering defined for axis {axis!r}")
