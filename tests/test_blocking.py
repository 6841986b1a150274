from chain_connect.board import PLAYER_O, PLAYER_X
from chain_connect.engine import BlockingDetector, Pattern


def test_open_gap_is_not_blocked(board, place):
    place(board, [(5, 5, PLAYER_X), (7, 6, PLAYER_X)])
    detector = BlockingDetector(board)
    pattern = Pattern.between((5, 5), (7, 6), PLAYER_X)
    assert not detector.is_gap_blocked((6, 5), PLAYER_X, pattern).blocked


def test_l_gap_blocked_by_crossed_sightline(board, place):
    place(board, [(5, 5, PLAYER_X), (6, 6, PLAYER_O), (7, 6, PLAYER_X), (7, 5, PLAYER_O)])
    detector = BlockingDetector(board)
    pattern = Pattern.between((5, 5), (7, 6), PLAYER_X)
    result = detector.is_gap_blocked((6, 5), PLAYER_X, pattern)
    assert result.blocked
    assert result.method == "diagonal"


def test_d_gap_blocked_by_two_diagonal_opponents(board, place):
    place(board, [(5, 5, PLAYER_X), (5, 7, PLAYER_O), (7, 7, PLAYER_X), (7, 5, PLAYER_O)])
    detector = BlockingDetector(board)
    pattern = Pattern.between((5, 5), (7, 7), PLAYER_X)
    assert detector.is_gap_blocked((6, 6), PLAYER_X, pattern).blocked


def test_surrounded_cell_is_blocked(board, place):
    place(board, [(0, 1, PLAYER_O), (1, 0, PLAYER_O)])
    result = BlockingDetector(board).is_gap_blocked((0, 0), PLAYER_X)
    assert result.blocked
    assert result.method == "surrounded"


def test_cache_follows_the_move_count(board, place):
    detector = BlockingDetector(board)
    detector.is_gap_blocked((7, 7), PLAYER_X)
    detector.is_gap_blocked((7, 7), PLAYER_X)
    assert detector.get_stats()["hits"] == 1
    place(board, [(0, 0, PLAYER_X)])
    detector.is_gap_blocked((7, 7), PLAYER_X)
    stats = detector.get_stats()
    assert stats["generation"] == board.move_count
    assert stats["misses"] == 2


def test_crossing_an_opponent_diagonal(board, place):
    place(board, [(5, 5, PLAYER_X), (5, 6, PLAYER_O), (6, 5, PLAYER_O)])
    detector = BlockingDetector(board)
    assert detector.would_cross_opponent_diagonal(6, 6, PLAYER_X)
    assert not detector.would_cross_opponent_diagonal(4, 4, PLAYER_X)


def test_own_diagonal_shields_a_cell(board, place):
    place(board, [(5, 5, PLAYER_X), (6, 5, PLAYER_O), (6, 6, PLAYER_X)])
    detector = BlockingDetector(board)
    assert detector.would_cross_own_diagonal(5, 6, PLAYER_X)
    assert detector.would_cross_opponent_diagonal(5, 6, PLAYER_O)


def test_pattern_cut_after_move(board, place):
    place(board, [(5, 5, PLAYER_X), (6, 6, PLAYER_O), (7, 6, PLAYER_X), (7, 5, PLAYER_O)])
    detector = BlockingDetector(board)
    pattern = Pattern.between((5, 5), (7, 6), PLAYER_X)
    assert detector.check_pattern_blocking_after_move(7, 5, PLAYER_O, [pattern]) == [pattern]
    # a stone that touches no sightline corner cuts nothing
    assert detector.check_pattern_blocking_after_move(0, 0, PLAYER_O, [pattern]) == []
