"""
Core module - podstawowe komponenty silnika.

Zawiera:
- Coordinate, Axis: Współrzędne pól i osie ruchu
- Board: Niezmienna plansza hexagonalna z liniami dla każdej osi
- GameRNG: Deterministyczny generator losowości
- ConfigLoader, GameConfig: Wczytywanie konfiguracji z defaults
"""

from .coordinate import Axis, Coordinate, lane_key, lane_position, validate_direction
from .board import Board, generate_coordinates
from .rng import GameRNG
from .config_loader import ConfigLoader, GameConfig

__all__ = [
    "Axis", "Coordinate", "lane_key", "lane_position", "validate_direction",
    "Board", "generate_coordinates", "GameRNG", "ConfigLoader", "GameConfig",
]
