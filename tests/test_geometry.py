import pytest

from chain_connect.board import PLAYER_O, PLAYER_X
from chain_connect.engine import geometry


def test_gap_cells_examples():
    assert geometry.gap_cells((5, 5), (7, 6)) == [(6, 5), (6, 6)]
    assert geometry.gap_cells((5, 5), (5, 7)) == [(4, 6), (5, 6), (6, 6)]
    assert geometry.gap_cells((5, 5), (7, 7)) == [(6, 6)]


def test_l_vectors_have_two_gap_cells_adjacent_to_both_ends():
    origin = (7, 7)
    for dr, dc in geometry.PATTERN_VECTORS["L"]:
        other = (7 + dr, 7 + dc)
        cells = geometry.gap_cells(origin, other)
        assert len(cells) == 2
        for cell in cells:
            assert geometry.are_adjacent(cell, origin)
            assert geometry.are_adjacent(cell, other)


def test_d_vectors_have_one_gap_cell():
    for dr, dc in geometry.PATTERN_VECTORS["D"]:
        assert len(geometry.gap_cells((7, 7), (7 + dr, 7 + dc))) == 1


def test_i_gap_is_clipped_at_the_edge():
    assert geometry.gap_cells((0, 5), (0, 7)) == [(0, 6), (1, 6)]


def test_pattern_type():
    assert geometry.pattern_type((5, 5), (7, 6)) == "L"
    assert geometry.pattern_type((5, 5), (4, 7)) == "L"
    assert geometry.pattern_type((5, 5), (5, 7)) == "I"
    assert geometry.pattern_type((5, 5), (3, 3)) == "D"
    assert geometry.pattern_type((5, 5), (6, 6)) == "adjacent"
    assert geometry.pattern_type((5, 5), (9, 9)) is None


def test_border_distance_follows_the_player_axis():
    assert geometry.border_distance((3, 7), PLAYER_X, "near") == 3
    assert geometry.border_distance((3, 7), PLAYER_X, "far") == 11
    assert geometry.border_distance((3, 7), PLAYER_O, "near") == 7
    assert geometry.nearest_border_distance((3, 12), PLAYER_O) == 2
    with pytest.raises(ValueError):
        geometry.border_distance((3, 7), PLAYER_X, "middle")


def test_pattern_moves_stay_on_board():
    moves = geometry.pattern_moves((0, 0), ("L",))
    assert sorted(m.position for m in moves) == [(1, 2), (2, 1)]


def test_pattern_moves_prefer_axis_aligned_l_for_player():
    moves = geometry.pattern_moves((7, 7), ("L",), player=PLAYER_X)
    assert len(moves) == 8
    assert moves[0].orientation == "vertical"
    moves = geometry.pattern_moves((7, 7), ("L",), player=PLAYER_O)
    assert moves[0].orientation == "horizontal"


def test_pattern_moves_direction_filter():
    moves = geometry.pattern_moves((7, 7), ("L", "I"), direction="north")
    assert moves
    assert all(m.row < 7 for m in moves)


def test_crossing_corners():
    assert set(geometry.crossing_corners((5, 5), (6, 6))) == {(5, 6), (6, 5)}
