"""
Interfejs obserwatora sesji gry.

Renderer (albo logger) rejestruje się raz przez GameSession.subscribe()
i dostaje powiadomienia o każdej zmianie. Wszystkie metody domyślnie
nic nie robią - nadpisz tylko te, których potrzebujesz.

KOLEJNOŚĆ POWIADOMIEŃ W RUCHU:
═══════════════════════════════════════════════════════════════════

    Rejestr jest już zaktualizowany, zanim padnie pierwsze powiadomienie.

    Dla każdego rekordu ruchu (w kolejności przetwarzania):
        Moved   -> on_tile_moved
        Merged  -> on_tile_moved (survivor), on_tile_merged, on_tile_removed (absorbed)

    Potem:
        on_move_resolved
        on_tile_spawned     (jeśli dołożono płytkę)
        on_game_over        (jeśli plansza pełna)

RESTART (ponowne start()):

    on_tile_removed     (każda płytka poprzedniej partii)
    on_session_started
    on_tile_spawned     (płytki startowe)

Usunięcie płytki jest "fire-and-forget": silnik nie czeka na animację.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, List

from ..core.coordinate import Axis, Coordinate

if TYPE_CHECKING:
    from ..engine.outcome import Outcome
    from ..tiles.tile import Tile
    from .game import GameSession


class GameListener:
    """Bazowy obserwator - wszystkie metody są no-op."""

    def on_session_started(self, session: "GameSession") -> None:
        pass

    def on_tile_spawned(self, tile: "Tile") -> None:
        pass

    def on_tile_moved(
        self,
        tile: "Tile",
        from_coordinate: Coordinate,
        to_coordinate: Coordinate,
    ) -> None:
        pass

    def on_tile_merged(self, survivor: "Tile", new_value: int, absorbed: "Tile") -> None:
        pass

    def on_tile_removed(self, tile: "Tile") -> None:
        pass

    def on_move_resolved(
        self,
        axis: Axis,
        direction: int,
        outcomes: List["Outcome"],
    ) -> None:
        pass

    def on_game_over(self) -> None:
        pass
