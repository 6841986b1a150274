import random

from chain_connect.board import PLAYER_O, PLAYER_X
from chain_connect.engine import MoveGenerator, MoveType, ThreatStatus, ThreatTracker


def _attack_position(board, place):
    # X to move with an open O L-pattern (3,2)-(5,3) on the board
    place(board, [(7, 7, PLAYER_X), (3, 2, PLAYER_O), (8, 7, PLAYER_X), (5, 3, PLAYER_O)])
    generator = MoveGenerator(board, PLAYER_X, rng=random.Random(7))
    move = generator.get_next_move()
    assert move.move_type == MoveType.ATTACK
    assert move.position == (4, 2)
    assert move.meta["tier"] == "critical"
    board.make_move(*move.position, PLAYER_X)
    return generator


def test_attack_then_follow_through(board, place):
    generator = _attack_position(board, place)
    record = generator.threats.active
    assert record.fill_cells == ((4, 2), (4, 3))

    board.make_move(12, 12, PLAYER_O)
    move = generator.get_next_move()
    assert move.move_type == MoveType.THREAT_FOLLOW_THROUGH
    assert move.position == (4, 3)
    assert record.status is ThreatStatus.FULFILLED
    assert record.completed_with == (4, 3)
    assert generator.threats.active is None


def test_answered_threat_is_abandoned(board, place):
    generator = _attack_position(board, place)
    record = generator.threats.active

    board.make_move(4, 3, PLAYER_O)
    move = generator.get_next_move()
    assert move.move_type != MoveType.THREAT_FOLLOW_THROUGH
    assert record.status is ThreatStatus.ABANDONED


def test_no_follow_through_before_the_opponent_replied(board, place):
    generator = _attack_position(board, place)
    assert generator.threats.pending_move() is None


def test_only_one_threat_armed_at_a_time(board):
    tracker = ThreatTracker(board, PLAYER_X)
    assert tracker.arm((4, 2), [(4, 2), (4, 3)]) is not None
    assert tracker.arm((9, 9), [(9, 9), (9, 10)]) is None
    assert tracker.get_stats()["armed"] == 1


def test_old_records_are_collected(board):
    tracker = ThreatTracker(board, PLAYER_X)
    record = tracker.arm((4, 2), [(4, 2), (4, 3)])
    for _ in range(4):
        tracker.record_own_move()
    assert tracker.records == [record]
    tracker.record_own_move()
    assert tracker.records == []
    assert record.status is ThreatStatus.ABANDONED


def test_threat_expires_once_its_resolution_turn_passed(board, place):
    tracker = ThreatTracker(board, PLAYER_X)
    record = tracker.arm((4, 2), [(4, 2), (4, 3)])
    place(board, [(4, 2, PLAYER_X), (12, 12, PLAYER_O), (0, 0, PLAYER_X), (12, 14, PLAYER_O)])
    assert tracker.pending_move() is None
    assert record.status is ThreatStatus.ABANDONED


def test_defending_on_the_resolution_turn_drops_the_threat(board, place):
    place(board, [(7, 7, PLAYER_X), (3, 2, PLAYER_O), (9, 8, PLAYER_X), (5, 3, PLAYER_O)])
    generator = MoveGenerator(board, PLAYER_X, rng=random.Random(7))
    attack = generator.get_next_move()
    assert attack.move_type == MoveType.ATTACK
    assert attack.position == (4, 2)
    board.make_move(4, 2, PLAYER_X)
    record = generator.threats.active

    # O ignores the attack and threatens the (7,7)-(9,8) pattern instead
    board.make_move(8, 8, PLAYER_O)
    defence = generator.get_next_move()
    assert defence.move_type == MoveType.THREAT_RESPONSE
    assert defence.position == (8, 7)
    assert record.status is ThreatStatus.ABANDONED

    board.make_move(8, 7, PLAYER_X)
    board.make_move(12, 12, PLAYER_O)
    move = generator.get_next_move()
    assert move.move_type != MoveType.THREAT_FOLLOW_THROUGH
    assert record.completed_with is None
