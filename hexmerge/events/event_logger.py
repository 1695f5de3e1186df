"""
System logowania zdarzeń gry do formatu JSON dla replay.

EventLogger jest obserwatorem sesji (GameListener). Każda zmiana na
planszy (nowa płytka, ruch, łączenie, usunięcie, koniec gry) jest
zapisywana z pełnym kontekstem. Log może być później użyty do
odtworzenia partii w wizualizacji.

TYPY ZDARZEŃ:
═══════════════════════════════════════════════════════════════════

    SESSION_START
    ─────────────────────────────────────────────────────────────
    Początek sesji.
    Data: diameter, axes, seed

    TILE_SPAWN
    ─────────────────────────────────────────────────────────────
    Nowa płytka na planszy.
    Data: at [x, y], value

    TILE_MOVE
    ─────────────────────────────────────────────────────────────
    Przesunięcie płytki.
    Data: from [x, y], to [x, y]

    TILE_MERGE
    ─────────────────────────────────────────────────────────────
    Łączenie dwóch płytek (target_id = płytka wchłonięta).
    Data: value

    TILE_REMOVE
    ─────────────────────────────────────────────────────────────
    Usunięcie płytki z planszy.

    MOVE_APPLIED / MOVE_BLOCKED
    ─────────────────────────────────────────────────────────────
    Podsumowanie ruchu (zablokowany = brak zmian).
    Data: axis, direction, moved, merged

    GAME_OVER
    ─────────────────────────────────────────────────────────────
    Plansza pełna, koniec sesji.

FORMAT LOGU:
═══════════════════════════════════════════════════════════════════

{
    "metadata": {
        "version": "1.0",
        "seed": 12345,
        "diameter": 11,
        "axes": ["X", "Y", "Z"],
        "timestamp": "2024-01-01T12:00:00"
    },
    "initial_state": {"tiles": [...]},
    "events": [
        {"move": 0, "type": "TILE_SPAWN", "tile_id": 1, "data": {"at": [3, 4], "value": 2}},
        {"move": 1, "type": "TILE_MOVE", "tile_id": 1, "data": {"from": [3, 4], "to": [3, 8]}},
        ...
    ],
    "final_state": {"moves": 57, "tiles": [...]}
}
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional
import json

from ..core.coordinate import Axis, Coordinate
from ..engine.outcome import Merged
from ..session.listener import GameListener

if TYPE_CHECKING:
    from ..engine.outcome import Outcome
    from ..session.game import GameSession
    from ..tiles.tile import Tile


class EventType(Enum):
    """Typ zdarzenia w sesji."""

    # Sesja
    SESSION_START = auto()
    GAME_OVER = auto()

    # Płytki
    TILE_SPAWN = auto()
    TILE_MOVE = auto()
    TILE_MERGE = auto()
    TILE_REMOVE = auto()

    # Ruch
    MOVE_APPLIED = auto()
    MOVE_BLOCKED = auto()


@dataclass
class GameEvent:
    """
    Pojedyncze zdarzenie w sesji.

    Attributes:
        move (int): Numer ruchu (0 = start sesji)
        event_type (EventType): Typ zdarzenia
        tile_id (Optional[int]): ID płytki (jeśli dotyczy)
        target_id (Optional[int]): ID drugiej płytki (łączenie)
        data (Dict): Dodatkowe dane specyficzne dla typu zdarzenia
    """
    move: int
    event_type: EventType
    tile_id: Optional[int] = None
    target_id: Optional[int] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje zdarzenie do słownika."""
        result: Dict[str, Any] = {
            "move": self.move,
            "type": self.event_type.name,
        }

        if self.tile_id is not None:
            result["tile_id"] = self.tile_id
        if self.target_id is not None:
            result["target_id"] = self.target_id
        if self.data:
            result["data"] = self.data

        return result


class EventLogger(GameListener):
    """
    Logger zdarzeń sesji.

    Zbiera wszystkie zdarzenia i może je zapisać do pliku JSON.

    Attributes:
        events (List[GameEvent]): Lista wszystkich zdarzeń
        metadata (Dict): Metadane sesji
        initial_state (Dict): Stan po starcie sesji
        final_state (Dict): Stan końcowy
        move (int): Numer bieżącego ruchu

    Example:
        >>> logger = EventLogger()
        >>> session = start_session(5, listeners=[logger], seed=1)
        >>> session.apply_move(Axis.X, 1)
        >>> logger.save("output/game_1.json")
    """

    def __init__(self) -> None:
        self.events: List[GameEvent] = []
        self.metadata: Dict[str, Any] = {"version": "1.0"}
        self.initial_state: Dict[str, Any] = {}
        self.final_state: Dict[str, Any] = {}
        self.move = 0
        self._move_open = False
        self._session: Optional["GameSession"] = None

    # ─────────────────────────────────────────────────────────────────────────
    # LOGOWANIE OGÓLNE
    # ─────────────────────────────────────────────────────────────────────────

    def log(self, event: GameEvent) -> None:
        """Dodaje zdarzenie do logu."""
        self.events.append(event)

    def log_event(
        self,
        event_type: EventType,
        tile_id: Optional[int] = None,
        target_id: Optional[int] = None,
        **data: Any,
    ) -> GameEvent:
        """
        Tworzy i loguje zdarzenie w bieżącym ruchu.

        Args:
            event_type: Typ zdarzenia
            tile_id: ID płytki
            target_id: ID drugiej płytki
            **data: Dodatkowe dane

        Returns:
            GameEvent: Utworzone zdarzenie
        """
        event = GameEvent(
            move=self.move,
            event_type=event_type,
            tile_id=tile_id,
            target_id=target_id,
            data=dict(data),
        )
        self.log(event)
        return event

    # ─────────────────────────────────────────────────────────────────────────
    # POWIADOMIENIA SESJI
    # ─────────────────────────────────────────────────────────────────────────

    def on_session_started(self, session: "GameSession") -> None:
        self._session = session
        self.events = []
        self.move = 0
        self._move_open = False
        self.final_state = {}
        self.metadata.update({
            "seed": session.rng.seed,
            "diameter": session.board.diameter,
            "axes": [a.value for a in session.config.axes],
            "initial_values": list(session.config.initial_values),
            "timestamp": datetime.now().isoformat(),
        })
        self.log_event(
            EventType.SESSION_START,
            diameter=session.board.diameter,
            axes=self.metadata["axes"],
            seed=session.rng.seed,
        )

    def on_tile_spawned(self, tile: "Tile") -> None:
        self.log_event(
            EventType.TILE_SPAWN,
            tile_id=tile.id,
            at=tile.coordinate.as_list(),
            value=tile.value,
        )
        if self.move == 0 and self._session is not None:
            self.initial_state = {"tiles": [t.snapshot() for t in self._session.registry.tiles()]}

    def on_tile_moved(
        self,
        tile: "Tile",
        from_coordinate: Coordinate,
        to_coordinate: Coordinate,
    ) -> None:
        # numer ruchu rośnie przy pierwszym zdarzeniu nowego ruchu
        self._begin_move()
        self.log_event(
            EventType.TILE_MOVE,
            tile_id=tile.id,
            **{"from": from_coordinate.as_list(), "to": to_coordinate.as_list()},
        )

    def on_tile_merged(self, survivor: "Tile", new_value: int, absorbed: "Tile") -> None:
        self.log_event(
            EventType.TILE_MERGE,
            tile_id=survivor.id,
            target_id=absorbed.id,
            value=new_value,
        )

    def on_tile_removed(self, tile: "Tile") -> None:
        self.log_event(EventType.TILE_REMOVE, tile_id=tile.id)

    def on_move_resolved(
        self,
        axis: Axis,
        direction: int,
        outcomes: List["Outcome"],
    ) -> None:
        self._begin_move()
        merged = sum(1 for o in outcomes if isinstance(o, Merged))
        self.log_event(
            EventType.MOVE_APPLIED if outcomes else EventType.MOVE_BLOCKED,
            axis=axis.value,
            direction=direction,
            moved=len(outcomes) - merged,
            merged=merged,
        )
        self._move_open = False

    def on_game_over(self) -> None:
        self.log_event(EventType.GAME_OVER)
        self.final_state = self._final_snapshot()

    def _begin_move(self) -> None:
        if not self._move_open:
            self.move += 1
            self._move_open = True

    def _final_snapshot(self) -> Dict[str, Any]:
        if self._session is None:
            return {"moves": self.move}
        return {
            "moves": self.move,
            "terminal": self._session.is_terminal,
            "tiles": [t.snapshot() for t in self._session.registry.tiles()],
        }

    # ─────────────────────────────────────────────────────────────────────────
    # SERIALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        """
        Serializuje cały log do słownika.

        Jeśli gra się nie skończyła, final_state to stan bieżący.
        """
        return {
            "metadata": self.metadata,
            "initial_state": self.initial_state,
            "events": [e.to_dict() for e in self.events],
            "final_state": self.final_state or self._final_snapshot(),
        }

    def save(self, filepath: str | Path) -> None:
        """
        Zapisuje log do pliku JSON (tworzy brakujące foldery).
        """
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Zwraca log jako string JSON (indent=None = compact)."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    # ─────────────────────────────────────────────────────────────────────────
    # STATYSTYKI
    # ─────────────────────────────────────────────────────────────────────────

    def get_event_count(self) -> int:
        """Zwraca liczbę zdarzeń."""
        return len(self.events)

    def get_events_by_type(self, event_type: EventType) -> List[GameEvent]:
        """Filtruje zdarzenia po typie."""
        return [e for e in self.events if e.event_type == event_type]

    def get_events_for_tile(self, tile_id: int) -> List[GameEvent]:
        """Filtruje zdarzenia dla płytki."""
        return [e for e in self.events if e.tile_id == tile_id or e.target_id == tile_id]

    def get_events_in_move(self, move: int) -> List[GameEvent]:
        """Filtruje zdarzenia w ruchu."""
        return [e for e in self.events if e.move == move]
