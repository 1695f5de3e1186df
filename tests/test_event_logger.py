"""
Testy dla logu zdarzeń (EventLogger).

Testuje:
- Zdarzenia startu sesji i płytek startowych
- Numerację ruchów
- Zdarzenia ruchu, łączenia i usunięcia
- MOVE_BLOCKED, GAME_OVER i final_state
- Zapis do JSON
"""

import json
import pytest

from hexmerge.core.config_loader import GameConfig
from hexmerge.core.coordinate import Axis, Coordinate
from hexmerge.events.event_logger import EventLogger, EventType, GameEvent
from hexmerge.session.game import GameSession, start_session


@pytest.fixture
def logged_session():
    """Sesja n=3 z dwiema 2 w linii x=0 i podpiętym loggerem."""
    session = GameSession(GameConfig(diameter=3, initial_values=(2,), seed=8))
    logger = EventLogger()
    session.subscribe(logger)
    session.start()
    session.registry.clear()
    session.registry.place(Coordinate(0, 0), 2)
    session.registry.place(Coordinate(0, 1), 2)
    return session, logger


def types(events):
    return [e.event_type for e in events]


# ═══════════════════════════════════════════════════════════════════════════
# TEST: START
# ═══════════════════════════════════════════════════════════════════════════

def test_start_events_and_metadata():
    logger = EventLogger()
    session = start_session(5, initial_values=[2, 4], seed=77, listeners=[logger])

    assert types(logger.events) == [
        EventType.SESSION_START, EventType.TILE_SPAWN, EventType.TILE_SPAWN,
    ]
    assert all(e.move == 0 for e in logger.events)
    assert logger.get_event_count() == 3
    assert logger.metadata["seed"] == 77
    assert logger.metadata["diameter"] == 5
    assert logger.metadata["axes"] == ["X", "Y", "Z"]
    assert logger.metadata["initial_values"] == [2, 4]
    assert len(logger.initial_state["tiles"]) == 2
    assert logger.initial_state["tiles"] == [t.snapshot() for t in session.registry.tiles()]


def test_restart_resets_log():
    logger = EventLogger()
    session = start_session(5, seed=1, listeners=[logger])
    session.apply_move(Axis.X, 1)
    session.start()
    assert logger.move == 0
    assert logger.events[0].event_type == EventType.SESSION_START
    assert all(e.move == 0 for e in logger.events)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: RUCHY
# ═══════════════════════════════════════════════════════════════════════════

def test_merge_move_events(logged_session):
    session, logger = logged_session
    survivor = session.registry.get(Coordinate(0, 0))
    absorbed = session.registry.get(Coordinate(0, 1))

    session.apply_move(Axis.X, 1)

    move_events = logger.get_events_in_move(1)
    assert types(move_events) == [
        EventType.TILE_MOVE,
        EventType.TILE_MERGE,
        EventType.TILE_REMOVE,
        EventType.MOVE_APPLIED,
        EventType.TILE_SPAWN,
    ]

    moved, merged, removed, summary, _ = move_events
    assert moved.tile_id == survivor.id
    assert moved.data == {"from": [0, 0], "to": [0, 1]}
    assert merged.tile_id == survivor.id
    assert merged.target_id == absorbed.id
    assert merged.data == {"value": 4}
    assert removed.tile_id == absorbed.id
    assert summary.data == {"axis": "X", "direction": 1, "moved": 0, "merged": 1}


def test_blocked_move_is_numbered(logged_session):
    session, logger = logged_session
    session.apply_move(Axis.X, -1)  # (0,0) na końcu, (0,1) zjeżdża i łączy
    session.registry.clear()
    session.registry.place(Coordinate(0, 0), 2)

    session.apply_move(Axis.X, -1)

    blocked = logger.get_events_in_move(2)
    assert types(blocked) == [EventType.MOVE_BLOCKED]
    assert blocked[0].data["moved"] == 0
    assert logger.move == 2


def test_moves_are_numbered_consecutively():
    logger = EventLogger()
    session = start_session(5, seed=3, listeners=[logger])
    for axis, direction in [(Axis.X, 1), (Axis.Y, 1), (Axis.Z, -1), (Axis.X, -1)]:
        session.apply_move(axis, direction)

    assert logger.move == session.move_number == 4
    summaries = [
        e for e in logger.events
        if e.event_type in (EventType.MOVE_APPLIED, EventType.MOVE_BLOCKED)
    ]
    assert [e.move for e in summaries] == [1, 2, 3, 4]


def test_events_for_tile(logged_session):
    session, logger = logged_session
    absorbed = session.registry.get(Coordinate(0, 1))
    session.apply_move(Axis.X, 1)
    assert types(logger.get_events_for_tile(absorbed.id)) == [
        EventType.TILE_MERGE, EventType.TILE_REMOVE,
    ]


def test_game_over_sets_final_state():
    session = GameSession(GameConfig(diameter=3, initial_values=(2,), seed=8))
    logger = EventLogger()
    session.subscribe(logger)
    session.start()
    session.registry.clear()
    for (x, y), value in {
        (0, 0): 2, (0, 1): 4, (1, 0): 8, (1, 1): 16,
        (1, 2): 32, (2, 1): 64, (2, 2): 128,
    }.items():
        session.registry.place(Coordinate(x, y), value)

    report = session.apply_move(Axis.X, 1)

    assert report.terminal
    assert logger.events[-1].event_type == EventType.GAME_OVER
    assert logger.final_state["moves"] == 1
    assert logger.final_state["terminal"] is True
    assert len(logger.final_state["tiles"]) == 7


# ═══════════════════════════════════════════════════════════════════════════
# TEST: SERIALIZACJA
# ═══════════════════════════════════════════════════════════════════════════

def test_event_to_dict_skips_empty_fields():
    event = GameEvent(move=3, event_type=EventType.GAME_OVER)
    assert event.to_dict() == {"move": 3, "type": "GAME_OVER"}


def test_save_writes_json(tmp_path, logged_session):
    session, logger = logged_session
    session.apply_move(Axis.X, 1)

    path = tmp_path / "logs" / "game.json"
    logger.save(path)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert set(data) == {"metadata", "initial_state", "events", "final_state"}
    assert data["metadata"]["seed"] == 8
    assert data["events"][0]["type"] == "SESSION_START"
    # gra trwa -> final_state to stan bieżący
    assert data["final_state"]["moves"] == 1
    assert data["final_state"]["terminal"] is False


def test_to_json_matches_to_dict(logged_session):
    _, logger = logged_session
    assert json.loads(logger.to_json(indent=None)) == json.loads(json.dumps(logger.to_dict()))
