import random

from chain_connect.board import PLAYER_O, PLAYER_X
from chain_connect.engine import Gap, MoveGenerator, MoveType, Priority
from chain_connect.engine import geometry
from chain_connect.engine.handlers import border, diagonal, gap_filling, threat
from chain_connect.engine.handlers.chain_extension import (
    generate_chain_extension, would_create_threatened_pattern,
)


def make_ctx(board, player=PLAYER_X, seed=0):
    generator = MoveGenerator(board, player, rng=random.Random(seed))
    generator._refresh()
    return generator.ctx


def test_threatened_pattern_detection(board, place):
    place(board, [(7, 7, PLAYER_X)])
    ctx = make_ctx(board)
    assert not would_create_threatened_pattern(ctx, (7, 7), (9, 8))
    assert not would_create_threatened_pattern(ctx, (7, 7), (9, 7))  # not an L

    place(board, [(8, 8, PLAYER_O)])
    assert would_create_threatened_pattern(ctx, (7, 7), (9, 8))


def test_opponent_beside_endpoint_in_line_with_target(board, place):
    place(board, [(7, 7, PLAYER_X), (7, 8, PLAYER_O)])
    ctx = make_ctx(board)
    assert would_create_threatened_pattern(ctx, (7, 7), (9, 8))
    assert not would_create_threatened_pattern(ctx, (7, 7), (9, 6))


def test_border_one_step_away(board, place):
    place(board, [(1, 7, PLAYER_X)])
    move = border.check_border_connection(make_ctx(board))
    assert move.move_type == MoveType.BORDER_CONNECTION
    assert move.row == 0 and move.col in (6, 7, 8)
    assert move.value == border.ADJACENT_VALUE


def test_border_two_steps_away_prefers_straight_pattern(board, place):
    place(board, [(2, 7, PLAYER_X)])
    move = border.check_border_connection(make_ctx(board))
    assert move.position == (0, 7)
    assert move.pattern == "I"


def test_border_for_horizontal_player(board, place):
    place(board, [(7, 13, PLAYER_O)])
    move = border.check_border_connection(make_ctx(board, PLAYER_O))
    assert move.col == 14 and move.row in (6, 7, 8)


def test_threat_response_closes_the_last_cell(board, place):
    place(board, [(5, 5, PLAYER_X), (6, 6, PLAYER_O), (7, 6, PLAYER_X), (0, 0, PLAYER_O)])
    move = threat.respond_to_threats(make_ctx(board))
    assert move.position == (6, 5)
    assert move.priority is Priority.CRITICAL
    assert move.move_type == MoveType.THREAT_RESPONSE


def test_threat_response_waits_for_the_middle_game(board, place):
    place(board, [(5, 5, PLAYER_X), (6, 6, PLAYER_O), (7, 6, PLAYER_X)])
    assert threat.respond_to_threats(make_ctx(board)) is None


def test_safe_gap_fill(board, place):
    place(board, [(5, 5, PLAYER_X), (0, 0, PLAYER_O), (7, 6, PLAYER_X)])
    move = gap_filling.fill_safe_gaps(make_ctx(board))
    assert move.move_type == MoveType.GAP_FILL
    assert move.position in {(6, 5), (6, 6)}


def test_l_gaps_are_filled_before_straight_ones():
    straight = Gap(PLAYER_X, "I", ((5, 5), (7, 5)), ((6, 4), (6, 5)), ((6, 4), (6, 5)), priority=2410)
    bent = Gap(PLAYER_X, "L", ((5, 5), (7, 6)), ((6, 5), (6, 6)), ((6, 5), (6, 6)), priority=2350)
    weaker_bent = Gap(PLAYER_X, "L", ((9, 9), (11, 10)), ((10, 9), (10, 10)), ((10, 9), (10, 10)), priority=2100)
    assert gap_filling.fill_order([straight, weaker_bent, bent]) == [bent, weaker_bent, straight]


def test_straight_gap_fill_hugs_own_stones(board, place):
    place(board, [(5, 5, PLAYER_X), (0, 0, PLAYER_O), (7, 5, PLAYER_X), (0, 1, PLAYER_O), (6, 7, PLAYER_X)])
    ctx = make_ctx(board)
    gap = next(g for g in ctx.registry.get_safe_gaps() if set(g.endpoints) == {(5, 5), (7, 5)})
    assert gap.pattern_type == "I"
    assert gap_filling.choose_fill_cell(ctx, gap) == (6, 6)


def test_diagonal_extension_steps_to_a_free_corner(board, place):
    place(board, [(7, 7, PLAYER_X)])
    move = diagonal.generate_diagonal_extension(make_ctx(board))
    assert move.move_type == MoveType.DIAGONAL_EXTENSION
    assert geometry.are_diagonal((7, 7), move.position)


def test_chain_extension_grows_an_l_from_a_head(board, place):
    place(board, [(7, 7, PLAYER_X), (0, 0, PLAYER_O), (8, 7, PLAYER_X)])
    ctx = make_ctx(board)
    move = generate_chain_extension(ctx)
    assert move.move_type == MoveType.CHAIN_EXTENSION
    assert move.from_head in {(7, 7), (8, 7)}
    assert geometry.pattern_type(move.from_head, move.position) == "L"
    assert geometry.is_toward(move.from_head, move.position, move.direction)
