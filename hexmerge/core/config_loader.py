"""
Loader konfiguracji z automatycznym uzupełnianiem wartości domyślnych.

Konfiguracja gry leży w plikach YAML:
- data/defaults.yaml: wartości bazowe (sekcja `game`) i mapy klawiszy
  (sekcja `keymaps`)
- opcjonalny plik użytkownika: nadpisuje wybrane klucze

Logika merge (uzupełniania defaults):
    1. Wczytaj defaults.yaml
    2. Wczytaj plik nadpisujący (jeśli podany)
    3. Połącz rekurencyjnie - plik użytkownika wygrywa
    4. Na końcu nałóż nadpisania z kodu (np. argumenty CLI)

Przykład:
    defaults.yaml:
        game:
            diameter: 11
            initial_values: [2, 4, 8]

    my_game.yaml:
        game:
            diameter: 5     # nadpisuje default
            # initial_values nie podane -> [2, 4, 8] z defaults

Użycie:
    >>> loader = ConfigLoader()
    >>> config = loader.load_game_config(diameter=7)
    >>> config.initial_values
    (2, 4, 8)
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
import copy

import yaml

from .board import Board
from .coordinate import Axis


DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent.parent / "data"


@dataclass(frozen=True)
class GameConfig:
    """
    Niezmienna konfiguracja sesji gry.

    Attributes:
        diameter (int): Średnica planszy
        initial_values (Tuple[int, ...]): Wartości losowane dla nowych płytek
        value_base (int): Podstawa potęg wartości płytek
        initial_tiles (int): Liczba płytek na start
        axes (Tuple[Axis, ...]): Osie dostępne w tej sesji
        seed (Optional[int]): Ziarno RNG (None = losowe)

    Raises:
        ValueError: Przy niepoprawnych wartościach (sprawdzane w __post_init__)
    """
    diameter: int = 11
    initial_values: Tuple[int, ...] = (2, 4, 8)
    value_base: int = 2
    initial_tiles: int = 2
    axes: Tuple[Axis, ...] = (Axis.X, Axis.Y, Axis.Z)
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        # Normalizacja typów z YAML/JSON (listy, stringi osi)
        object.__setattr__(self, "initial_values", tuple(self.initial_values))
        axes = tuple(dict.fromkeys(Axis.parse(a) for a in self.axes))
        object.__setattr__(self, "axes", axes)
        self._validate()

    def _validate(self) -> None:
        if not _is_int(self.diameter) or self.diameter < 1:
            raise ValueError(f"diameter must be a positive integer, got {self.diameter!r}")

        if not _is_int(self.value_base) or self.value_base < 2:
            raise ValueError(f"value_base must be an integer >= 2, got {self.value_base!r}")

        if not self.initial_values:
            raise ValueError("initial_values must not be empty")
        for value in self.initial_values:
            if not _is_int(value) or not _is_power_of(value, self.value_base):
                raise ValueError(
                    f"initial value {value!r} is not a positive power of {self.value_base}"
                )

        if not self.axes:
            raise ValueError("at least one axis must be enabled")

        board_size = Board.expected_size(self.diameter)
        if not _is_int(self.initial_tiles) or not 1 <= self.initial_tiles <= board_size:
            raise ValueError(
                f"initial_tiles must be between 1 and {board_size}, got {self.initial_tiles!r}"
            )

        if self.seed is not None and not _is_int(self.seed):
            raise ValueError(f"seed must be an integer or null, got {self.seed!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> GameConfig:
        """
        Tworzy konfigurację ze słownika (np. sekcji `game` z YAML).

        Nieznane klucze są błędem - literówka w pliku nie może przejść cicho.
        """
        known = set(cls.__dataclass_fields__)
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown game config keys: {sorted(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "diameter": self.diameter,
            "initial_values": list(self.initial_values),
            "value_base": self.value_base,
            "initial_tiles": self.initial_tiles,
            "axes": [a.value for a in self.axes],
            "seed": self.seed,
        }


class ConfigLoader:
    """
    Ładuje konfigurację z plików YAML z automatycznym merge defaults.

    Attributes:
        data_path (Path): Folder z defaults.yaml
        override_path (Optional[Path]): Plik nadpisujący
        _defaults (Dict): Cache wczytanych defaults
        _overrides (Dict): Cache wczytanego pliku nadpisującego

    Example:
        >>> loader = ConfigLoader(override_path="my_game.yaml")
        >>> loader.load_game_config().diameter
        5
    """

    def __init__(
        self,
        data_path: str | Path = DEFAULT_DATA_PATH,
        override_path: Optional[str | Path] = None,
    ):
        self.data_path = Path(data_path)
        self.override_path = Path(override_path) if override_path else None
        self._defaults: Optional[Dict] = None
        self._overrides: Optional[Dict] = None

    # ─────────────────────────────────────────────────────────────────────────
    # WCZYTYWANIE PLIKÓW
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def _load_yaml(filepath: Path) -> Dict:
        """
        Wczytuje plik YAML.

        Raises:
            FileNotFoundError: Jeśli plik nie istnieje
            ValueError: Jeśli główny element pliku nie jest mapą
        """
        with open(filepath, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{filepath}: top-level YAML element must be a mapping")
        return data

    def get_defaults(self) -> Dict:
        """Zawartość defaults.yaml (cache'owana)."""
        if self._defaults is None:
            self._defaults = self._load_yaml(self.data_path / "defaults.yaml")
        return self._defaults

    def get_merged(self) -> Dict:
        """Defaults połączone z plikiem nadpisującym."""
        if self.override_path is None:
            return copy.deepcopy(self.get_defaults())
        if self._overrides is None:
            self._overrides = self._load_yaml(self.override_path)
        return self._deep_merge(self.get_defaults(), self._overrides)

    # ─────────────────────────────────────────────────────────────────────────
    # KONFIGURACJA GRY
    # ─────────────────────────────────────────────────────────────────────────

    def load_game_config(self, **overrides: Any) -> GameConfig:
        """
        Buduje GameConfig z plików i nadpisań z kodu.

        Nadpisania równe None są pomijane, więc można przekazać
        argumenty CLI wprost.

        Args:
            **overrides: Pola GameConfig do nadpisania

        Returns:
            GameConfig: Zwalidowana konfiguracja

        Raises:
            ValueError: Jeśli wynikowa konfiguracja jest niepoprawna
        """
        game = self.get_merged().get("game", {})
        game.update({k: v for k, v in overrides.items() if v is not None})
        return GameConfig.from_dict(game)

    # ─────────────────────────────────────────────────────────────────────────
    # MAPY KLAWISZY
    # ─────────────────────────────────────────────────────────────────────────

    def get_keymap_names(self) -> list[str]:
        return list(self.get_merged().get("keymaps", {}).keys())

    def load_keymap(self, name: str) -> Dict[str, Any]:
        """
        Zwraca surową mapę klawiszy: klawisz -> [oś, kierunek].

        Raises:
            KeyError: Jeśli mapa nie istnieje
        """
        keymaps = self.get_merged().get("keymaps", {})
        if name not in keymaps:
            raise KeyError(f"Keymap '{name}' not found. Available: {sorted(keymaps)}")
        return copy.deepcopy(keymaps[name])

    # ─────────────────────────────────────────────────────────────────────────
    # HELPERY
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def _deep_merge(base: Dict, override: Dict) -> Dict:
        """
        Głęboko łączy dwa słowniki.

        Override nadpisuje wartości w base.
        Nested dicts są merge'owane rekurencyjnie.
        """
        result = copy.deepcopy(base)

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = ConfigLoader._deep_merge(result[key], value)
            else:
                result[key] = copy.deepcopy(value)

        return result


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_power_of(value: int, base: int) -> bool:
    """Czy value == base**k dla k >= 1."""
    if value < base:
        return False
    while value % base == 0:
        value //= base
    return value == 1
