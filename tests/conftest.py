"""
Shared pytest fixtures for chain_connect tests.

Boards are function-scoped so every test starts from an empty grid.
"""
import random

import pytest

from chain_connect.board import GameBoard


def place_stones(board, stones):
    """Play ``(row, col, player)`` triples in order, failing loudly on a bad move."""
    for row, col, player in stones:
        result = board.make_move(row, col, player)
        assert result.success, result.reason
    return board


@pytest.fixture
def board():
    return GameBoard(15)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def place():
    return place_stones
