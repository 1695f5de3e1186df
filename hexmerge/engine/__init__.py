"""
Engine module - rozwiązywanie ruchu i polityka po ruchu.

Zawiera:
- resolve_move: Przesuwanie i łączenie płytek wzdłuż osi
- Moved, Merged, MoveReport: Rekordy wyniku ruchu
- SpawnPolicy, PolicyDecision: Nowa płytka albo koniec gry
"""

from .outcome import Moved, Merged, MoveReport, Outcome
from .resolver import resolve_move, processing_order
from .policy import SpawnPolicy, PolicyDecision

__all__ = [
    "Moved", "Merged", "MoveReport", "Outcome",
    "resolve_move", "processing_order", "SpawnPolicy", "PolicyDecision",
]
