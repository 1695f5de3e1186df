"""
Testy dla rozwiązywania ruchu (resolve_move).

Testuje:
- Przesuwanie do końca linii i do przeszkody
- Łączenie płytek o tej samej wartości
- Brak kaskad i brak potrójnych łączeń
- Osie X, Y, Z w obu kierunkach
- Właściwości: zachowanie sumy, brak podwójnego łączenia, determinizm
"""

import pytest
from typing import Dict, List, Tuple

from hexmerge.core.board import Board
from hexmerge.core.coordinate import Axis, Coordinate
from hexmerge.core.rng import GameRNG
from hexmerge.engine.outcome import Merged, Moved
from hexmerge.engine.resolver import processing_order, resolve_move
from hexmerge.tiles.registry import TileRegistry


# ═══════════════════════════════════════════════════════════════════════════
# HELPERY
# ═══════════════════════════════════════════════════════════════════════════

def make_registry(tiles: Dict[Tuple[int, int], int]) -> TileRegistry:
    """Rejestr z płytkami {(x, y): wartość}."""
    registry = TileRegistry()
    for (x, y), value in tiles.items():
        registry.place(Coordinate(x, y), value)
    return registry


def layout(registry: TileRegistry) -> Dict[Tuple[int, int], int]:
    """Stan rejestru jako {(x, y): wartość}."""
    return {(t.coordinate.x, t.coordinate.y): t.value for t in registry.tiles()}


def move(registry: TileRegistry, board: Board, axis: Axis, direction: int):
    outcomes = resolve_move(registry, board, axis, direction)
    registry.apply(outcomes)
    return outcomes


@pytest.fixture
def small_board() -> Board:
    return Board.generate(3)


@pytest.fixture
def board5() -> Board:
    return Board.generate(5)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: SCENARIUSZE Z PLANSZY 7-POLOWEJ
# ═══════════════════════════════════════════════════════════════════════════

def test_two_twos_merge_along_x(small_board):
    """(0,0)=2 i (0,1)=2, oś X, +1 -> jedna płytka 4 na (0,1)."""
    registry = make_registry({(0, 0): 2, (0, 1): 2})
    survivor = registry.get(Coordinate(0, 0))
    absorbed = registry.get(Coordinate(0, 1))

    outcomes = move(registry, small_board, Axis.X, 1)

    assert len(outcomes) == 1
    merged = outcomes[0]
    assert isinstance(merged, Merged)
    assert merged.survivor is survivor
    assert merged.absorbed is absorbed
    assert merged.to_coordinate == Coordinate(0, 1)
    assert merged.new_value == 4
    assert layout(registry) == {(0, 1): 4}


def test_tile_at_lane_end_does_not_move(small_board):
    registry = make_registry({(0, 1): 2})
    assert resolve_move(registry, small_board, Axis.X, 1) == []


def test_blocked_by_different_value(small_board):
    registry = make_registry({(0, 0): 2, (0, 1): 4})
    assert resolve_move(registry, small_board, Axis.X, 1) == []


def test_resolver_does_not_mutate_registry(small_board):
    registry = make_registry({(0, 0): 2, (0, 1): 2})
    before = layout(registry)
    resolve_move(registry, small_board, Axis.X, 1)
    assert layout(registry) == before


# ═══════════════════════════════════════════════════════════════════════════
# TEST: PRZESUWANIE
# ═══════════════════════════════════════════════════════════════════════════

def test_slide_to_lane_end(board5):
    registry = make_registry({(2, 0): 8})
    outcomes = move(registry, board5, Axis.X, 1)
    assert outcomes == [Moved(outcomes[0].tile, Coordinate(2, 0), Coordinate(2, 4))]
    assert layout(registry) == {(2, 4): 8}


def test_slide_negative_direction(board5):
    registry = make_registry({(2, 4): 8})
    move(registry, board5, Axis.X, -1)
    assert layout(registry) == {(2, 0): 8}


def test_slide_stops_before_obstacle(board5):
    registry = make_registry({(2, 0): 2, (2, 4): 4})
    move(registry, board5, Axis.X, 1)
    assert layout(registry) == {(2, 3): 2, (2, 4): 4}


@pytest.mark.parametrize("axis,direction,start,end", [
    (Axis.Y, 1, (0, 2), (4, 2)),
    (Axis.Y, -1, (4, 2), (0, 2)),
    (Axis.Z, 1, (0, 0), (4, 4)),
    (Axis.Z, -1, (4, 4), (0, 0)),
    (Axis.Z, 1, (2, 0), (4, 2)),
    (Axis.X, -1, (4, 4), (4, 2)),
])
def test_slide_on_each_axis(board5, axis, direction, start, end):
    registry = make_registry({start: 2})
    move(registry, board5, axis, direction)
    assert layout(registry) == {end: 2}


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ŁĄCZENIE
# ═══════════════════════════════════════════════════════════════════════════

def test_four_in_a_row_makes_two_pairs(board5):
    """[2 2 2 2 _] -> [_ _ _ 4 4]"""
    registry = make_registry({(2, 0): 2, (2, 1): 2, (2, 2): 2, (2, 3): 2})
    t1, t2, t3, t4 = (registry.get(Coordinate(2, y)) for y in range(4))

    outcomes = move(registry, board5, Axis.X, 1)

    assert layout(registry) == {(2, 3): 4, (2, 4): 4}
    assert outcomes == [
        Moved(t4, Coordinate(2, 3), Coordinate(2, 4)),
        Merged(t3, Coordinate(2, 2), Coordinate(2, 4), 4, t4),
        Moved(t2, Coordinate(2, 1), Coordinate(2, 3)),
        Merged(t1, Coordinate(2, 0), Coordinate(2, 3), 4, t2),
    ]


def test_three_equal_merge_only_front_pair(board5):
    """[_ _ 2 2 2] -> [_ _ _ 2 4]: łączy się para najbliżej celu."""
    registry = make_registry({(2, 2): 2, (2, 3): 2, (2, 4): 2})
    move(registry, board5, Axis.X, 1)
    assert layout(registry) == {(2, 3): 2, (2, 4): 4}


def test_no_cascade_merge(board5):
    """[_ _ 2 2 4] -> [_ _ _ 4 4]: nowa 4 nie łączy się z 4 w tym ruchu."""
    registry = make_registry({(2, 2): 2, (2, 3): 2, (2, 4): 4})
    outcomes = move(registry, board5, Axis.X, 1)
    assert len(outcomes) == 1
    assert layout(registry) == {(2, 3): 4, (2, 4): 4}


def test_merged_tile_is_not_a_target_again(board5):
    """[_ _ 4 2 2] -> [_ _ _ 4 4]: 4 nie łączy się ze świeżo połączoną 4."""
    registry = make_registry({(2, 2): 4, (2, 3): 2, (2, 4): 2})
    outcomes = move(registry, board5, Axis.X, 1)
    assert [type(o) for o in outcomes] == [Merged, Moved]
    assert layout(registry) == {(2, 3): 4, (2, 4): 4}


def test_merge_across_gap(board5):
    registry = make_registry({(0, 2): 16, (3, 2): 16})
    move(registry, board5, Axis.Y, 1)
    assert layout(registry) == {(4, 2): 32}


def test_merge_on_z_axis(board5):
    """Linia y - x = 2: (0,2), (1,3), (2,4)."""
    registry = make_registry({(0, 2): 2, (1, 3): 2})
    move(registry, board5, Axis.Z, 1)
    assert layout(registry) == {(2, 4): 4}


def test_lanes_are_independent(board5):
    registry = make_registry({(1, 0): 2, (2, 0): 2})
    move(registry, board5, Axis.X, 1)
    assert layout(registry) == {(1, 3): 2, (2, 4): 2}


def test_values_grow_without_bound(small_board):
    big = 2 ** 80
    registry = make_registry({(0, 0): big, (0, 1): big})
    move(registry, small_board, Axis.X, 1)
    assert layout(registry) == {(0, 1): 2 ** 81}


# ═══════════════════════════════════════════════════════════════════════════
# TEST: KOLEJNOŚĆ I BŁĘDY
# ═══════════════════════════════════════════════════════════════════════════

def test_processing_order_nearest_to_destination_first():
    registry = make_registry({(2, 0): 2, (2, 3): 2, (2, 1): 2})
    order = processing_order(registry.tiles(), Axis.X, 1)
    assert [t.coordinate.y for t in order] == [3, 1, 0]
    order = processing_order(registry.tiles(), Axis.X, -1)
    assert [t.coordinate.y for t in order] == [0, 1, 3]


def test_invalid_direction_raises(small_board):
    registry = make_registry({(0, 0): 2})
    with pytest.raises(ValueError):
        resolve_move(registry, small_board, Axis.X, 0)


def test_invalid_axis_raises(small_board):
    registry = make_registry({(0, 0): 2})
    with pytest.raises(ValueError):
        resolve_move(registry, small_board, "W", 1)


def test_tile_outside_board_raises(small_board):
    registry = make_registry({(0, 2): 2})
    with pytest.raises(ValueError):
        resolve_move(registry, small_board, Axis.X, 1)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: WŁAŚCIWOŚCI (losowe plansze)
# ═══════════════════════════════════════════════════════════════════════════

def random_registry(board: Board, rng: GameRNG, fill: int) -> TileRegistry:
    registry = TileRegistry()
    for cell in rng.sample(board.sorted_cells(), fill):
        registry.place(cell, rng.choice([2, 2, 4, 4, 8]))
    return registry


MOVES: List[Tuple[Axis, int]] = [(a, d) for a in Axis for d in (1, -1)]


@pytest.mark.parametrize("seed", range(25))
def test_properties_on_random_boards(seed):
    """Zachowanie sumy, jedna płytka na pole, brak podwójnych łączeń."""
    rng = GameRNG(seed)
    board = Board.generate(rng.choice([3, 4, 5, 7]))
    registry = random_registry(board, rng, rng.choice(range(1, len(board) + 1)))

    for _ in range(10):
        axis, direction = rng.choice(MOVES)
        total_before = registry.total_value()
        count_before = len(registry)

        outcomes = resolve_move(registry, board, axis, direction)
        merges = [o for o in outcomes if isinstance(o, Merged)]

        # brak podwójnego łączenia
        absorbed_ids = [m.absorbed.id for m in merges]
        survivor_ids = {m.tile.id for m in merges}
        assert len(absorbed_ids) == len(set(absorbed_ids))
        assert not survivor_ids & set(absorbed_ids)
        targets = [m.to_coordinate for m in merges]
        assert len(targets) == len(set(targets))

        # każda płytka ma najwyżej jeden rekord, nie licząc wchłoniętych po ruchu
        moved_ids = [o.tile.id for o in outcomes]
        assert len(moved_ids) == len(set(moved_ids))

        registry.apply(outcomes)

        assert registry.total_value() == total_before
        assert len(registry) == count_before - len(merges)
        coords = [t.coordinate for t in registry.tiles()]
        assert len(coords) == len(set(coords))
        assert all(c in board for c in coords)


@pytest.mark.parametrize("seed", range(10))
def test_resolver_is_deterministic(seed):
    rng = GameRNG(seed)
    board = Board.generate(5)
    registry = random_registry(board, rng, 10)
    for axis, direction in MOVES:
        first = resolve_move(registry, board, axis, direction)
        second = resolve_move(registry, board, axis, direction)
        assert first == second


@pytest.mark.parametrize("seed", range(10))
def test_second_identical_move_changes_nothing_without_merges(seed):
    """Po ruchu bez łączeń ten sam ruch jest już zablokowany."""
    rng = GameRNG(seed)
    board = Board.generate(5)
    registry = TileRegistry()
    # różne wartości -> brak łączeń
    cells = rng.sample(board.sorted_cells(), 8)
    for i, cell in enumerate(cells):
        registry.place(cell, 2 ** (i + 1))
    axis, direction = rng.choice(MOVES)
    move(registry, board, axis, direction)
    assert resolve_move(registry, board, axis, direction) == []
