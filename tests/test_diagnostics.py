import random

from chain_connect.board import PLAYER_O, PLAYER_X
from chain_connect.engine import MoveGenerator, check_gap_system


def test_healthy_engine_passes(board, place):
    place(board, [(5, 5, PLAYER_X), (9, 2, PLAYER_O), (7, 6, PLAYER_X), (11, 3, PLAYER_O)])
    generator = MoveGenerator(board, PLAYER_X, rng=random.Random(0))
    generator.get_next_move()
    report = check_gap_system(generator)
    assert report.ok, report.errors
    assert "2 registrations checked" in report.successes
    assert report.summary().endswith("0 errors")


def test_missing_trackers_are_warnings(board):
    generator = MoveGenerator(board, PLAYER_X, use_trackers=False)
    report = check_gap_system(generator)
    assert report.ok
    assert any("registry" in w for w in report.warnings)
    assert any("fragments" in w for w in report.warnings)
