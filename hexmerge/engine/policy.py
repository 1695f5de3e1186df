"""
Polityka dokładania płytek i końca gry.

Po rozwiązaniu ruchu:

    Wynik ruchu     Wolne pola    Decyzja
    ───────────────────────────────────────────────────────
    niepusty        są            nowa płytka na losowym wolnym polu
    pusty           są            nic (ruch zablokowany, bez zmian)
    dowolny         brak          koniec gry, bez nowej płytki

Wolne pole i wartość są losowane jednostajnie przez GameRNG.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Sequence

from ..core.board import Board
from ..core.coordinate import Coordinate
from ..core.rng import GameRNG
from ..tiles.registry import TileRegistry
from .outcome import Outcome


@dataclass(frozen=True)
class PolicyDecision:
    """
    Decyzja polityki po ruchu.

    Attributes:
        spawn_coordinate: Pole nowej płytki (None = bez nowej płytki)
        spawn_value: Wartość nowej płytki
        terminal: Czy gra się skończyła
    """
    spawn_coordinate: Optional[Coordinate] = None
    spawn_value: Optional[int] = None
    terminal: bool = False

    @property
    def spawns(self) -> bool:
        return self.spawn_coordinate is not None


class SpawnPolicy:
    """
    Decyduje o nowej płytce albo końcu gry.

    Attributes:
        initial_values: Zbiór wartości dla nowych płytek
        rng: Generator losowości sesji
    """

    def __init__(self, initial_values: Sequence[int], rng: GameRNG):
        if not initial_values:
            raise ValueError("initial_values must not be empty")
        self.initial_values = tuple(initial_values)
        self.rng = rng

    def initial_placement(self, registry: TileRegistry, board: Board) -> PolicyDecision:
        """
        Losuje pole i wartość dla płytki startowej.

        Raises:
            ValueError: Jeśli plansza nie ma wolnych pól
        """
        free = registry.free_coordinates(board)
        if not free:
            raise ValueError("Cannot place an initial tile: the board is full")
        return PolicyDecision(
            spawn_coordinate=self.rng.pick_coordinate(free),
            spawn_value=self.rng.pick_value(self.initial_values),
        )

    def after_move(
        self,
        outcomes: Sequence[Outcome],
        registry: TileRegistry,
        board: Board,
    ) -> PolicyDecision:
        """
        Decyzja po ruchu. Rejestr musi już zawierać wynik ruchu.

        Args:
            outcomes: Wynik ruchu (pusty = ruch zablokowany)
            registry: Rejestr po zastosowaniu ruchu
            board: Plansza

        Returns:
            PolicyDecision: Nowa płytka, koniec gry albo nic
        """
        free = registry.free_coordinates(board)
        if not free:
            return PolicyDecision(terminal=True)
        if not outcomes:
            return PolicyDecision()
        return PolicyDecision(
            spawn_coordinate=self.rng.pick_coordinate(free),
            spawn_value=self.rng.pick_value(self.initial_values),
        )
