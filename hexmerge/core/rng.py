"""
Deterministyczny generator liczb losowych (RNG).

Jedyne losowe decyzje w grze to:
- wybór wolnego pola dla nowej płytki
- wybór wartości nowej płytki ze zbioru wartości początkowych

Ten sam seed musi zawsze dawać tę samą sekwencję płytek. To pozwala na:
- Replay/odtwarzanie partii z logu
- Debugowanie
- Testy jednostkowe

GameRNG opakowuje Pythonowy random.Random.

Jak używać:
    - Każda sesja gry ma WŁASNĄ instancję GameRNG
    - NIE używaj globalnego random - jest współdzielony
    - seed=None oznacza seed wylosowany z entropii systemu
      (i zapamiętany, więc partię nadal da się odtworzyć)

Przykład użycia:
    >>> rng = GameRNG(seed=12345)
    >>> rng.pick_coordinate({Coordinate(0, 0), Coordinate(1, 1)})
    Coordinate(x=1, y=1)  # zawsze to samo dla seed=12345
"""

from __future__ import annotations
import random
from typing import Iterable, List, Optional, Sequence, TypeVar

from .coordinate import Coordinate

T = TypeVar('T')


class GameRNG:
    """
    Deterministyczny generator losowości dla sesji gry.

    Attributes:
        seed (int): Ziarno użyte do inicjalizacji
        _rng (random.Random): Wewnętrzny generator

    Example:
        >>> rng1 = GameRNG(42)
        >>> rng2 = GameRNG(42)
        >>> rng1.choice([2, 4, 8]) == rng2.choice([2, 4, 8])
        True
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Tworzy nowy generator.

        Args:
            seed: Ziarno losowości. None = losowe ziarno z systemu.
        """
        if seed is None:
            seed = random.SystemRandom().randint(0, 2**31 - 1)
        self.seed = seed
        self._rng = random.Random(seed)

    # ─────────────────────────────────────────────────────────────────────────
    # PODSTAWOWE METODY
    # ─────────────────────────────────────────────────────────────────────────

    def choice(self, seq: Sequence[T]) -> T:
        """
        Wybiera losowy element z sekwencji (rozkład jednostajny).

        Raises:
            IndexError: Jeśli sekwencja jest pusta
        """
        return self._rng.choice(seq)

    def sample(self, seq: Sequence[T], k: int) -> List[T]:
        """
        Wybiera k unikalnych losowych elementów z sekwencji.

        Raises:
            ValueError: Jeśli k > len(seq)
        """
        return self._rng.sample(list(seq), k)

    # ─────────────────────────────────────────────────────────────────────────
    # METODY SPECYFICZNE DLA GRY
    # ─────────────────────────────────────────────────────────────────────────

    def pick_coordinate(self, free: Iterable[Coordinate]) -> Coordinate:
        """
        Wybiera jednostajnie losowe wolne pole.

        Pola są najpierw sortowane, więc wynik nie zależy od kolejności
        iteracji zbioru.

        Raises:
            IndexError: Jeśli nie ma wolnych pól
        """
        ordered = sorted(free, key=lambda c: (c.x, c.y))
        if not ordered:
            raise IndexError("No free coordinates to pick from")
        return self.choice(ordered)

    def pick_value(self, values: Sequence[int]) -> int:
        """Wybiera jednostajnie losową wartość początkową płytki."""
        return self.choice(values)

    def __repr__(self) -> str:
        return f"GameRNG(seed={self.seed})"
