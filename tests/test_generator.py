import logging
import random

import pytest

from chain_connect.board import GameBoard, PLAYER_O, PLAYER_X
from chain_connect.engine import (
    MoveDescriptor, MoveGenerator, MoveType, get_strategy_counts, reset_strategy_counts,
)
from chain_connect.engine import geometry


@pytest.mark.parametrize("seed", range(8))
def test_opening_lands_in_the_starting_area(seed):
    board = GameBoard(15)
    move = MoveGenerator(board, PLAYER_X, rng=random.Random(seed)).get_next_move()
    assert move.move_type == MoveType.INITIAL
    assert 6 <= move.row <= 8 and 6 <= move.col <= 8


def test_engine_can_play_second(board, place):
    place(board, [(7, 7, PLAYER_X)])
    move = MoveGenerator(board, PLAYER_O, rng=random.Random(3)).get_next_move()
    assert move.move_type == MoveType.INITIAL
    assert move.position != (7, 7)
    assert board.is_valid_move(*move.position)


@pytest.mark.parametrize("seed", range(5))
def test_second_stone_forms_l_or_diagonal(seed):
    board = GameBoard(15)
    generator = MoveGenerator(board, PLAYER_X, rng=random.Random(seed))
    first = generator.get_next_move()
    board.make_move(first.row, first.col, PLAYER_X)
    board.make_move(2, 2, PLAYER_O)
    second = generator.get_next_move()
    assert second.move_type == MoveType.SECOND
    assert geometry.pattern_type(first.position, second.position) == "L" or \
        geometry.are_diagonal(first.position, second.position)


def test_second_stone_dodges_orthogonal_pressure(board, place):
    place(board, [(7, 7, PLAYER_X), (7, 8, PLAYER_O)])
    move = MoveGenerator(board, PLAYER_X, rng=random.Random(0)).get_next_move()
    assert move.position in {(6, 6), (8, 6)}
    assert move.pattern == "diagonal"


def test_self_play_only_produces_legal_moves(board):
    engines = {
        PLAYER_X: MoveGenerator(board, PLAYER_X, rng=random.Random(11)),
        PLAYER_O: MoveGenerator(board, PLAYER_O, rng=random.Random(12)),
    }
    player = PLAYER_X
    played = set()
    for _ in range(40):
        move = engines[player].get_next_move()
        assert move is not None
        assert move.position not in played
        result = board.make_move(move.row, move.col, player)
        assert result.success, result.reason
        played.add(move.position)
        if result.game_over:
            break
        player = -player
    assert board.move_count == len(played)


def test_failing_handler_is_counted_and_skipped(board):
    def explode(ctx):
        raise RuntimeError("boom")

    generator = MoveGenerator(board, PLAYER_X, rng=random.Random(0))
    generator.steps.insert(0, ("explode", explode))
    move = generator.get_next_move()
    assert move.move_type == MoveType.INITIAL
    assert generator.get_stats()["failures"] == {"explode": 1}


def test_malformed_candidates_are_ignored(board):
    generator = MoveGenerator(board, PLAYER_X, rng=random.Random(0))
    generator.steps.insert(0, ("text", lambda ctx: "h8"))
    generator.steps.insert(0, ("float", lambda ctx: MoveDescriptor(7.5, 7, MoveType.INITIAL)))
    move = generator.get_next_move()
    assert move.move_type == MoveType.INITIAL
    assert isinstance(move.row, int)


def test_invalid_candidate_falls_through_to_next_handler(board, place):
    place(board, [(7, 7, PLAYER_O)])
    generator = MoveGenerator(board, PLAYER_X, rng=random.Random(0))
    generator.steps.insert(0, ("occupied", lambda ctx: MoveDescriptor(7, 7, MoveType.ATTACK)))
    move = generator.get_next_move()
    assert move.position != (7, 7)
    assert generator.ctx.validator.get_stats()["rejections"]["empty"] == 1


def test_diagonal_handler_needs_the_flag(board, place):
    place(board, [(7, 7, PLAYER_X)])
    for enabled, expected in ((False, None), (True, MoveType.DIAGONAL_EXTENSION)):
        generator = MoveGenerator(board, PLAYER_X, rng=random.Random(0),
                                  enable_diagonal_extension=enabled)
        generator.steps = [s for s in generator.steps if s[0] == "diagonal-extension"]
        move = generator.get_next_move()
        assert (move.move_type if move else None) == expected


def test_strategy_counts_follow_accepted_moves(board):
    reset_strategy_counts()
    MoveGenerator(board, PLAYER_X, rng=random.Random(0)).get_next_move()
    assert get_strategy_counts() == {"initial": 1}


def test_stats_and_reset(board, place):
    place(board, [(7, 7, PLAYER_X), (3, 3, PLAYER_O)])
    generator = MoveGenerator(board, PLAYER_X, {"name": "tester"}, rng=random.Random(0))
    generator.get_next_move()
    stats = generator.get_stats()
    assert set(stats) == {
        "chain_length", "fragments", "personality", "gap_stats", "last_move_type",
        "turns", "threats", "validator", "failures",
    }
    assert stats["personality"] == "tester"
    assert stats["last_move_type"] == MoveType.SECOND
    assert stats["turns"] == 1

    generator.reset()
    assert generator.get_stats()["turns"] == 0
    assert generator.last_move is None


def test_debug_mode_toggles_package_logging(board):
    generator = MoveGenerator(board, PLAYER_X, debug=True)
    assert logging.getLogger("chain_connect").level == logging.DEBUG
    assert generator.blocking.debug_mode
    generator.set_debug_mode(False)
    assert logging.getLogger("chain_connect").level == logging.INFO
    logging.getLogger("chain_connect").setLevel(logging.NOTSET)


def test_without_trackers_every_stone_is_a_head(board, place):
    place(board, [(7, 7, PLAYER_X), (0, 0, PLAYER_O), (9, 8, PLAYER_X), (0, 14, PLAYER_O)])
    generator = MoveGenerator(board, PLAYER_X, rng=random.Random(0), use_trackers=False)
    move = generator.get_next_move()
    assert move is not None
    assert board.is_valid_move(*move.position)
    assert generator.get_stats()["gap_stats"] == {}


def test_targeted_cells_are_forgotten_once_occupied(board, place):
    place(board, [(3, 3, PLAYER_X), (12, 12, PLAYER_O)])
    generator = MoveGenerator(board, PLAYER_X, rng=random.Random(0))
    generator.ctx.targeted.update({(7, 7), (8, 8)})
    place(board, [(7, 7, PLAYER_O)])
    generator.get_next_move()
    assert (7, 7) not in generator.ctx.targeted
    assert (8, 8) in generator.ctx.targeted
