"""
Sesja gry - łączy planszę, rejestr płytek, resolver i politykę.

PRZEBIEG RUCHU (apply_move):
═══════════════════════════════════════════════════════════════════

    1. WALIDACJA
       • Sesja musi być wystartowana (inaczej RuntimeError)
       • Oś musi być włączona w konfiguracji, kierunek = ±1
       • Sesja zakończona -> pusty raport terminal=True, nic się nie dzieje

    2. RESOLVE
       • resolve_move() liczy CAŁY wynik ruchu na mapie roboczej

    3. APPLY
       • TileRegistry.apply() - jedna transakcja
       • Dopiero potem powiadomienia dla obserwatorów

    4. POLITYKA
       • SpawnPolicy.after_move(): nowa płytka / koniec gry / nic

Sesja jest jednowątkowa i synchroniczna: każdy ruch kończy się,
zanim zostanie przyjęty następny.

Przykład użycia:
    >>> session = start_session(board_size=5, initial_values=[2, 4], seed=7)
    >>> report = session.apply_move(Axis.X, 1)
    >>> report.terminal
    False
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence

from ..core.board import Board
from ..core.config_loader import GameConfig
from ..core.coordinate import Axis, validate_direction
from ..core.rng import GameRNG
from ..engine.outcome import Merged, MoveReport, Outcome
from ..engine.policy import SpawnPolicy
from ..engine.resolver import resolve_move
from ..tiles.registry import TileRegistry
from ..tiles.tile import Tile
from .listener import GameListener


class GameSession:
    """
    Orkiestruje rejestr, resolver i politykę w kolejnych ruchach.

    Attributes:
        config (GameConfig): Konfiguracja sesji
        rng (GameRNG): Generator losowości
        board (Board): Plansza (niezmienna)
        registry (TileRegistry): Płytki (zmienne między ruchami)
        policy (SpawnPolicy): Polityka nowych płytek i końca gry
        move_number (int): Liczba rozwiązanych ruchów
        is_started (bool): Czy wywołano start()
        is_terminal (bool): Czy gra się skończyła
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[GameRNG] = None,
    ):
        self.config = config or GameConfig()
        self.rng = rng or GameRNG(self.config.seed)
        self.board = Board.generate(self.config.diameter)
        self.registry = TileRegistry()
        self.policy = SpawnPolicy(self.config.initial_values, self.rng)

        self.move_number = 0
        self.is_started = False
        self.is_terminal = False

        self._listeners: List[GameListener] = []

    # ─────────────────────────────────────────────────────────────────────────
    # OBSERWATORZY
    # ─────────────────────────────────────────────────────────────────────────

    def subscribe(self, listener: GameListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: GameListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, method: str, *args: Any) -> None:
        for listener in list(self._listeners):
            getattr(listener, method)(*args)

    # ─────────────────────────────────────────────────────────────────────────
    # START
    # ─────────────────────────────────────────────────────────────────────────

    def start(self) -> List[Tile]:
        """
        Rozpoczyna (lub restartuje) sesję.

        Czyści planszę i kładzie `config.initial_tiles` płytek na różnych,
        losowych wolnych polach z losowymi wartościami początkowymi.
        Przy restarcie obserwatorzy dostają on_tile_removed dla każdej
        płytki z poprzedniej partii, zanim padnie on_session_started.

        Returns:
            List[Tile]: Płytki startowe
        """
        discarded = self.registry.tiles()
        self.registry.clear()
        self.move_number = 0
        self.is_terminal = False
        self.is_started = True

        for tile in discarded:
            self._notify("on_tile_removed", tile)
        self._notify("on_session_started", self)

        placed: List[Tile] = []
        for _ in range(self.config.initial_tiles):
            decision = self.policy.initial_placement(self.registry, self.board)
            tile = self.registry.place(decision.spawn_coordinate, decision.spawn_value)
            placed.append(tile)
            self._notify("on_tile_spawned", tile)

        return placed

    # ─────────────────────────────────────────────────────────────────────────
    # RUCH
    # ─────────────────────────────────────────────────────────────────────────

    def apply_move(self, axis: Axis | str, direction: int) -> MoveReport:
        """
        Wykonuje ruch: resolve + apply + polityka, atomowo.

        Args:
            axis: Oś ruchu (Axis albo nazwa, np. "X")
            direction: +1 lub -1

        Returns:
            MoveReport: Wyniki ruchu, nowa płytka, flaga końca gry

        Raises:
            RuntimeError: Jeśli sesja nie została wystartowana
            ValueError: Dla osi spoza konfiguracji lub złego kierunku
        """
        if not self.is_started:
            raise RuntimeError("Session not started - call start() first")

        axis = Axis.parse(axis)
        validate_direction(direction)
        if axis not in self.config.axes:
            raise ValueError(
                f"Axis {axis.value} is not enabled for this board "
                f"(enabled: {[a.value for a in self.config.axes]})"
            )

        if self.is_terminal:
            return MoveReport(outcomes=[], spawned=None, terminal=True)

        outcomes = resolve_move(self.registry, self.board, axis, direction)
        self.registry.apply(outcomes)
        self.move_number += 1

        self._announce_outcomes(outcomes)
        self._notify("on_move_resolved", axis, direction, outcomes)

        decision = self.policy.after_move(outcomes, self.registry, self.board)

        spawned: Optional[Tile] = None
        if decision.spawns:
            spawned = self.registry.place(decision.spawn_coordinate, decision.spawn_value)
            self._notify("on_tile_spawned", spawned)

        if decision.terminal:
            self.is_terminal = True
            self._notify("on_game_over")

        return MoveReport(outcomes=outcomes, spawned=spawned, terminal=self.is_terminal)

    def _announce_outcomes(self, outcomes: Sequence[Outcome]) -> None:
        for outcome in outcomes:
            self._notify(
                "on_tile_moved",
                outcome.tile,
                outcome.from_coordinate,
                outcome.to_coordinate,
            )
            if isinstance(outcome, Merged):
                self._notify("on_tile_merged", outcome.tile, outcome.new_value, outcome.absorbed)
                self._notify("on_tile_removed", outcome.absorbed)

    # ─────────────────────────────────────────────────────────────────────────
    # STAN
    # ─────────────────────────────────────────────────────────────────────────

    def snapshot(self) -> Dict[str, Any]:
        """Stan sesji do serializacji (API, log zdarzeń)."""
        return {
            "diameter": self.board.diameter,
            "axes": [a.value for a in self.config.axes],
            "seed": self.rng.seed,
            "move_number": self.move_number,
            "terminal": self.is_terminal,
            "tiles": [t.snapshot() for t in self.registry.tiles()],
            "free_cells": len(self.board) - len(self.registry),
        }

    def __repr__(self) -> str:
        return (
            f"GameSession(diameter={self.board.diameter}, tiles={len(self.registry)}, "
            f"move={self.move_number}, terminal={self.is_terminal})"
        )


def start_session(
    board_size: int,
    initial_values: Sequence[int] = (2, 4, 8),
    axes: Sequence[Axis | str] = (Axis.X, Axis.Y, Axis.Z),
    seed: Optional[int] = None,
    listeners: Sequence[GameListener] = (),
    **config: Any,
) -> GameSession:
    """
    Tworzy i startuje sesję (punkt wejścia dla renderera).

    Obserwatorzy są rejestrowani przed start(), więc dostają też
    płytki startowe.

    Args:
        board_size: Średnica planszy
        initial_values: Wartości nowych płytek
        axes: Osie dostępne w sesji
        seed: Ziarno RNG
        listeners: Obserwatorzy do zarejestrowania
        **config: Pozostałe pola GameConfig (value_base, initial_tiles)

    Returns:
        GameSession: Wystartowana sesja
    """
    game_config = GameConfig(
        diameter=board_size,
        initial_values=tuple(initial_values),
        axes=tuple(axes),
        seed=seed,
        **config,
    )
    session = GameSession(game_config)
    for listener in listeners:
        session.subscribe(listener)
    session.start()
    return session
