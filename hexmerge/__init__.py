"""
HexMerge - silnik gry 2048 na planszy hexagonalnej.

Pakiety:
- core: współrzędne, plansza, RNG, konfiguracja
- tiles: płytki i rejestr zajętych pól
- engine: rozwiązywanie ruchu i polityka nowych płytek
- session: sesja gry i interfejs obserwatora
- events: log zdarzeń (JSON)
- input: mapy klawiszy
- render: renderer tekstowy
"""

from .core import Axis, Board, Coordinate, GameConfig, ConfigLoader, GameRNG
from .session import GameSession, GameListener, start_session

__version__ = "1.0.0"

__all__ = [
    "Axis", "Board", "Coordinate", "GameConfig", "ConfigLoader", "GameRNG",
    "GameSession", "GameListener", "start_session",
]
