"""Input module - mapy klawiszy (klawisz -> oś, kierunek)."""

from .keymap import Keymap

__all__ = ["Keymap"]
