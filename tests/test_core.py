import random

import pytest

from core import PREVS_MAX_LENGTH, Board, Game
from utils import PATTERN_LIBRARY, count_alive, place_pattern

T, F = True, False


def reference_step(grid, torus):
    """Straightforward B3/S23 used to cross-check Game.step."""
    rows, cols = len(grid), len(grid[0])
    result = []
    for y in range(rows):
        row = []
        for x in range(cols):
            n = 0
            for dy in (-1, 0, 1):
                for dx in (-1, 0, 1):
                    if dx == dy == 0:
                        continue
                    ny, nx = y + dy, x + dx
                    if 0 <= ny < rows and 0 <= nx < cols:
                        n += grid[ny][nx]
                    elif torus:
                        n += grid[ny % rows][nx % cols]
            row.append(n in (2, 3) if grid[y][x] else n == 3)
        result.append(row)
    return result


# --- Board ---

def test_board_dimensions():
    board = Board([[F, F, F], [T, T, T]])
    assert board.height() == 2
    assert board.width() == 3


def test_board_get_out_of_range_is_none():
    board = Board([[T, F], [F, T]])
    assert board.get(0, 0) is True
    assert board.get(1, 0) is False
    assert board.get(2, 0) is None
    assert board.get(0, 2) is None
    assert board.get(-1, 0) is None
    assert board.get(0, -1) is None


def test_board_set_out_of_range_raises():
    board = Board([[F, F], [F, F]])
    board.set(1, 0, True)
    assert board.get(1, 0) is True
    with pytest.raises(IndexError):
        board.set(2, 0, True)
    with pytest.raises(IndexError):
        board.set(-1, 0, True)


@pytest.mark.parametrize("grid", [[], [[]], [[T, F], [T]]])
def test_board_rejects_malformed_grid(grid):
    with pytest.raises(ValueError):
        Board(grid)


def test_board_equality_and_hash_are_structural():
    a = Board([[T, F], [F, T]])
    b = Board([[T, F], [F, T]])
    c = Board([[T, F], [F, F]])
    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert len({a, b, c}) == 2


def test_board_does_not_alias_input():
    grid = [[F, F], [F, F]]
    board = Board(grid)
    grid[0][0] = True
    assert board.get(0, 0) is False
    board.rows()[1][1] = True
    assert board.get(1, 1) is False


# --- Game construction ---

def test_new_game_round_trip():
    grid = [[F, T, F], [F, T, T], [T, F, F]]
    game = Game(grid)
    assert game.board == grid
    assert game.epochs == 0
    assert game.history_length == 0
    assert game.init_board == Board(grid)


def test_board_property_is_a_copy():
    game = Game([[F, F], [F, F]])
    game.board[0][0] = True
    assert game.board == [[F, F], [F, F]]


def test_history_size_must_be_positive():
    with pytest.raises(ValueError):
        Game([[F]], history_size=0)


def test_new_random_is_reproducible_with_seeded_rng():
    a = Game.new_random(7, 5, rng=random.Random(42))
    b = Game.new_random(7, 5, rng=random.Random(42))
    assert a.board == b.board
    assert (a.width, a.height) == (7, 5)
    assert a.epochs == 0


def test_new_random_density_extremes():
    empty = Game.new_random(4, 3, density=0.0)
    full = Game.new_random(4, 3, density=1.0)
    assert count_alive(empty.board) == 0
    assert count_alive(full.board) == 12


def test_new_random_keeps_topology():
    game = Game.new_random(3, 3, is_torus=True, rng=random.Random(1))
    assert game.is_torus


# --- Neighbor counting ---

def test_count_neighbors_bounded_corner():
    game = Game([[T] * 3 for _ in range(3)])
    assert game.count_neighbors(0, 0) == 3
    assert game.count_neighbors(1, 0) == 5
    assert game.count_neighbors(1, 1) == 8


def test_count_neighbors_torus_wraps():
    game = Game([[T] * 3 for _ in range(3)], is_torus=True)
    assert game.count_neighbors(0, 0) == 8

    grid = [[F] * 4 for _ in range(4)]
    grid[3][3] = True
    game = Game(grid, is_torus=True)
    assert game.count_neighbors(0, 0) == 1
    assert Game(grid).count_neighbors(0, 0) == 0


def test_check_within_range():
    game = Game([[F] * 4 for _ in range(2)])
    assert game.check_within_range(3, 1)
    assert not game.check_within_range(4, 1)
    assert not game.check_within_range(0, 2)
    assert not game.check_within_range(-1, 0)


# --- Transition rule ---

def test_horizontal_blinker_becomes_vertical():
    game = Game([[F, F, F], [T, T, T], [F, F, F]])
    game.step()
    assert game.board == [[F, T, F], [F, T, F], [F, T, F]]
    assert game.epochs == 1


def test_blinker_returns_after_two_steps():
    grid = [[F, F, F], [T, T, T], [F, F, F]]
    game = Game(grid)
    game.step()
    game.step()
    assert game.board == grid
    assert game.epochs == 2


def test_step_leaves_init_board_untouched():
    grid = [[F, F, F], [T, T, T], [F, F, F]]
    game = Game(grid)
    game.step()
    assert game.init_board.rows() == grid


@pytest.mark.parametrize("torus", [False, True])
@pytest.mark.parametrize("seed", range(5))
def test_step_matches_reference_rule(seed, torus):
    game = Game.new_random(9, 7, is_torus=torus, rng=random.Random(seed))
    for _ in range(3):
        expected = reference_step(game.board, torus)
        game.step()
        assert game.board == expected


@pytest.mark.parametrize("seed", range(5))
def test_three_neighbors_live_and_crowding_dies(seed):
    game = Game.new_random(8, 8, rng=random.Random(seed))
    counts = [[game.count_neighbors(x, y) for x in range(8)] for y in range(8)]
    game.step()
    after = game.board
    for y in range(8):
        for x in range(8):
            if counts[y][x] == 3:
                assert after[y][x]
            elif counts[y][x] < 2 or counts[y][x] > 3:
                assert not after[y][x]


@pytest.mark.parametrize("seed", range(5))
def test_interior_cells_ignore_topology(seed):
    grid = Game.new_random(6, 6, rng=random.Random(seed)).board
    bounded = Game(grid)
    torus = Game(grid, is_torus=True)
    bounded.step()
    torus.step()
    for y in range(1, 5):
        for x in range(1, 5):
            assert bounded.board[y][x] == torus.board[y][x]


# --- History and death detection ---

def test_all_dead_board_dies_immediately():
    game = Game([[F] * 3 for _ in range(3)])
    game.step()
    assert game.board == [[F] * 3 for _ in range(3)]

    game = Game([[F] * 3 for _ in range(3)])
    game.step_until_dead()
    assert game.epochs == 1


def test_blinker_is_detected_dead():
    grid = place_pattern(5, 5, PATTERN_LIBRARY["blinker"])
    game = Game(grid)
    game.step_until_dead()
    assert game.epochs == 2
    assert game.board == grid


def test_still_life_is_detected_dead():
    game = Game(place_pattern(4, 4, PATTERN_LIBRARY["block"]))
    game.step_until_dead()
    assert game.epochs == 1


def test_torus_glider_repeats_after_crossing_the_board():
    game = Game(place_pattern(8, 8, PATTERN_LIBRARY["glider"]), is_torus=True)
    game.step_until_dead()
    assert game.epochs == 32
    assert count_alive(game.board) == 5


def test_cycle_longer_than_window_is_not_detected():
    game = Game(place_pattern(5, 5, PATTERN_LIBRARY["blinker"]), history_size=1)
    for _ in range(10):
        assert not game.is_dead()
        game.remember()
        game.step()
    assert game.history_length == 1


def test_is_dead_checks_board_against_history():
    game = Game([[F, F, F], [T, T, T], [F, F, F]])
    assert not game.is_dead()
    game.remember()
    assert game.is_dead()
    game.step()
    assert not game.is_dead()


def test_history_evicts_oldest_first():
    game = Game(place_pattern(8, 8, PATTERN_LIBRARY["glider"]), is_torus=True, history_size=2)
    seen = []
    for _ in range(3):
        seen.append(game.board)
        game.remember()
        game.step()
    assert game.history_length == 2
    assert game.history() == seen[1:]
    assert seen[0] not in game.history()


def test_history_never_exceeds_default_window():
    game = Game([[F]])
    for _ in range(PREVS_MAX_LENGTH + 1):
        game.remember()
    assert game.history_length == PREVS_MAX_LENGTH
    assert game.is_dead()


def test_reset_restores_initial_state():
    grid = place_pattern(5, 5, PATTERN_LIBRARY["glider"])
    game = Game(grid)
    game.step_until_dead()
    game.reset()
    assert game.board == grid
    assert game.epochs == 0
    assert game.history_length == 0
    assert not game.is_dead()
