from chain_connect.board import PLAYER_O, PLAYER_X, GameBoard


def test_vertical_column_wins_for_x(board, place):
    place(board, [(r, 3, PLAYER_X) for r in range(15)])
    result = board.check_win(PLAYER_X)
    assert result.is_win
    assert result.reached == 15
    assert not board.check_win(PLAYER_O).is_win


def test_horizontal_row_wins_for_o(board, place):
    place(board, [(7, c, PLAYER_O) for c in range(15)])
    assert board.check_win(PLAYER_O).is_win
    assert not board.check_win(PLAYER_X).is_win


def test_diagonal_staircase_connects(board, place):
    place(board, [(r, r, PLAYER_X) for r in range(15)])
    assert board.check_win(PLAYER_X).is_win


def test_first_diagonal_link_wins(board, place):
    place(board, [(5, 5, PLAYER_X), (5, 6, PLAYER_O), (6, 6, PLAYER_X), (6, 5, PLAYER_O)])
    assert not board.is_diagonal_link_blocked((5, 5), (6, 6), PLAYER_X)
    assert board.is_diagonal_link_blocked((5, 6), (6, 5), PLAYER_O)
    assert ((5, 5), (6, 6), 2) in board.diagonal_connections(PLAYER_X)
    assert board.diagonal_connections(PLAYER_O) == []


def test_make_move_rejects_bad_cells(board):
    assert board.make_move(7, 7, PLAYER_X).success
    occupied = board.make_move(7, 7, PLAYER_O)
    assert not occupied.success
    assert "occupied" in occupied.reason
    assert not board.make_move(15, 0, PLAYER_O).success
    assert board.move_count == 1
    assert board.last_move == (7, 7, PLAYER_X)


def test_history_and_last_opponent_move(board, place):
    place(board, [(1, 1, PLAYER_X), (2, 2, PLAYER_O), (3, 3, PLAYER_X)])
    assert board.get_last_opponent_move(PLAYER_X) == (2, 2, PLAYER_O)
    assert board.move_order[3, 3] == 2
    board.reset()
    assert board.move_count == 0
    assert board.history == []


def test_translator():
    assert GameBoard.translator("H8") == (7, 7)
    assert GameBoard.translator("A1") == (0, 0)
    assert GameBoard.translator("??") == (-1, -1)


def test_size_is_clamped():
    assert GameBoard(2).size == 5
    assert GameBoard(40).size == 26


def test_confirm_win_waits_for_open_gaps(board, place):
    place(board, [(r, 7, PLAYER_X) for r in range(15)])
    assert board._confirm_win(PLAYER_X)
    place(board, [(3, 9, PLAYER_X)])
    assert not board._confirm_win(PLAYER_X)


def test_gated_player_win_is_provisional(board, place):
    place(board, [(r, 7, PLAYER_X) for r in range(15)] + [(3, 9, PLAYER_X)])
    board._gated_players = {PLAYER_X}
    board.player = PLAYER_O
    assert board.evaluate() == 0
    board._gated_players = set()
    assert board.evaluate() == PLAYER_X
