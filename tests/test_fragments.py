from chain_connect.board import PLAYER_O, PLAYER_X
from chain_connect.engine import FragmentTracker, GapRegistry


def test_heads_are_axis_extremes():
    from chain_connect.board import GameBoard
    tracker = FragmentTracker(GameBoard(15), PLAYER_X)
    fragment = tracker.describe([(3, 7), (5, 7), (9, 7)])
    assert tracker.heads(fragment) == ((3, 7), (9, 7))


def test_pattern_links_join_a_single_fragment(board, place):
    place(board, [(3, 7, PLAYER_X)] + [(r, 7, PLAYER_X) for r in range(5, 10)])
    registry = GapRegistry(board, PLAYER_X)
    registry.update_registry()
    tracker = FragmentTracker(board, PLAYER_X, registry)
    fragments = tracker.update()
    assert len(fragments) == 1
    assert tracker.heads() == ((3, 7), (9, 7))


def test_without_registry_only_adjacency_counts(board, place):
    place(board, [(3, 7, PLAYER_X), (5, 7, PLAYER_X)])
    tracker = FragmentTracker(board, PLAYER_X)
    assert len(tracker.update()) == 2


def test_single_stone_heads_coincide(board, place):
    place(board, [(7, 7, PLAYER_O)])
    tracker = FragmentTracker(board, PLAYER_O)
    assert tracker.heads() == ((7, 7), (7, 7))
    assert tracker.head_direction("near") == "west"
    assert tracker.head_direction("far") == "east"


def test_can_extend_stops_next_to_the_border(board, place):
    place(board, [(1, 7, PLAYER_X), (2, 7, PLAYER_X), (3, 7, PLAYER_X)])
    tracker = FragmentTracker(board, PLAYER_X)
    assert not tracker.can_extend("near")
    assert tracker.can_extend("far")
    choice = tracker.select_head()
    assert choice.head == (3, 7)
    assert choice.direction == "south"


def test_crossed_diagonal_splits_fragments(board, place):
    place(board, [(5, 6, PLAYER_O), (6, 5, PLAYER_O), (5, 5, PLAYER_X), (6, 6, PLAYER_X)])
    tracker = FragmentTracker(board, PLAYER_X)
    assert len(tracker.update()) == 2
    assert len(FragmentTracker(board, PLAYER_O).update()) == 1


def test_spanning_fragment_scores_highest(board, place):
    place(board, [(r, 7, PLAYER_X) for r in range(15)] + [(5, 2, PLAYER_X)])
    tracker = FragmentTracker(board, PLAYER_X)
    tracker.update()
    active = tracker.get_active_fragment()
    assert active.size == 15
    assert active.connected_to_top_border and active.connected_to_bottom_border
    assert active.score >= 10 * 15 + 200 + 1000


def test_best_connection_move_bridges_two_fragments(board, place):
    place(board, [(5, 5, PLAYER_X), (5, 7, PLAYER_X)])
    tracker = FragmentTracker(board, PLAYER_X)
    first, second = tracker.update()
    move = tracker.best_connection_move(first, second)
    assert move.kind == "adjacent"
    assert (move.row, move.col) in {(4, 6), (5, 6), (6, 6)}
