"""
Tiles module - płytki i rejestr zajętych pól.

Zawiera:
- Tile: Pojedyncza płytka (id, pole, wartość)
- TileRegistry: Mapa pole -> płytka z transakcyjnym apply()
"""

from .tile import Tile
from .registry import TileRegistry

__all__ = ["Tile", "TileRegistry"]
