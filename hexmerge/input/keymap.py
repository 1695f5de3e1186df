"""
Mapa klawiszy - tłumaczy surowe klawisze na (oś, kierunek).

Mapa jest konfiguracją, nie logiką silnika. Presety leżą w
data/defaults.yaml (sekcja `keymaps`):

    three_axis:  q w e / a s d      (osie X, Y, Z)
    two_axis:    strzałki + w a s d (osie X, Y)

Przykład użycia:
    >>> keymap = Keymap.from_config(loader.load_keymap("three_axis"))
    >>> keymap.resolve("s")
    (<Axis.X: 'X'>, 1)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Tuple

from ..core.coordinate import Axis, validate_direction


@dataclass(frozen=True)
class Keymap:
    """
    Niezmienna mapa klawisz -> (Axis, kierunek).

    Attributes:
        bindings (Dict[str, Tuple[Axis, int]]): Klawisze (małe litery)
    """
    bindings: Dict[str, Tuple[Axis, int]]

    @classmethod
    def from_config(cls, raw: Mapping[str, Any]) -> Keymap:
        """
        Tworzy mapę z surowych danych YAML: klawisz -> [oś, kierunek].

        Raises:
            ValueError: Jeśli wpis nie jest parą [oś, ±1]
        """
        bindings: Dict[str, Tuple[Axis, int]] = {}
        for key, binding in raw.items():
            if not isinstance(binding, (list, tuple)) or len(binding) != 2:
                raise ValueError(f"Key {key!r}: binding must be [axis, direction], got {binding!r}")
            axis, direction = binding
            bindings[str(key).lower()] = (Axis.parse(axis), validate_direction(direction))
        return cls(bindings=bindings)

    @property
    def axes(self) -> Tuple[Axis, ...]:
        """Osie używane przez mapę (w kolejności X, Y, Z)."""
        used = {axis for axis, _ in self.bindings.values()}
        return tuple(a for a in Axis if a in used)

    def resolve(self, key: str) -> Tuple[Axis, int]:
        """
        Zwraca (oś, kierunek) dla klawisza.

        Raises:
            KeyError: Dla nieznanego klawisza
        """
        try:
            return self.bindings[key.lower()]
        except KeyError:
            raise KeyError(f"Unbound key: {key!r}") from None

    def check_axes(self, enabled: Iterable[Axis]) -> None:
        """
        Sprawdza czy mapa używa tylko włączonych osi.

        Raises:
            ValueError: Jeśli mapa odwołuje się do wyłączonej osi
        """
        enabled_set = set(enabled)
        missing = [a.value for a in self.axes if a not in enabled_set]
        if missing:
            raise ValueError(f"Keymap uses axes not enabled for this board: {missing}")

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self.bindings

    def to_dict(self) -> Dict[str, list]:
        return {k: [axis.value, direction] for k, (axis, direction) in self.bindings.items()}
