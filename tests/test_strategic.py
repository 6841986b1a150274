from chain_connect.board import GameBoard, PLAYER_X
from chain_connect.engine import FragmentTracker, StrategicExtensionManager
from chain_connect.engine.strategic import HISTORY_LIMIT, SCORING_WEIGHTS


def test_mid_chain_stone_branches_toward_the_open_border(board, place):
    stones = [(r, 7) for r in range(6)]
    place(board, [(r, c, PLAYER_X) for r, c in stones])
    fragment = FragmentTracker(board, PLAYER_X).describe(stones)
    manager = StrategicExtensionManager(board, PLAYER_X)
    choice = manager.select_strategic_extension(fragment, [fragment])
    assert choice.stone == (4, 7)
    assert choice.direction == "south"
    assert choice.mode == "border-extension"
    assert list(manager.history) == [choice]


def test_bridging_target_between_border_fragments(board, place):
    top = [(r, 7) for r in range(5)]
    bottom = [(r, 7) for r in range(10, 15)]
    place(board, [(r, c, PLAYER_X) for r, c in top + bottom])
    tracker = FragmentTracker(board, PLAYER_X)
    upper, lower = tracker.describe(top), tracker.describe(bottom)
    manager = StrategicExtensionManager(board, PLAYER_X)
    targets = manager.fragment_targets(upper, [upper, lower])
    assert len(targets) == 1
    assert targets[0].priority >= 1000
    assert targets[0].direction == "south"
    assert targets[0].position == 7
    assert targets[0].meta["winning"]


def test_too_small_fragment_has_no_choice(board, place):
    place(board, [(7, 7, PLAYER_X)])
    fragment = FragmentTracker(board, PLAYER_X).describe([(7, 7)])
    assert StrategicExtensionManager(board, PLAYER_X).select_strategic_extension(fragment) is None


def test_far_border_proximity_follows_board_size():
    for size in (9, 15, 21):
        manager = StrategicExtensionManager(GameBoard(size), PLAYER_X)
        assert manager.border_proximity((size - 3, 4), "south") == 8
        assert manager.border_proximity((size - 3, 4), "north") == max(0, 10 - (size - 3))


def test_history_keeps_only_recent_choices(board, place):
    stones = [(r, 7) for r in range(6)]
    place(board, [(r, c, PLAYER_X) for r, c in stones])
    fragment = FragmentTracker(board, PLAYER_X).describe(stones)
    manager = StrategicExtensionManager(board, PLAYER_X)
    for _ in range(HISTORY_LIMIT + 5):
        manager.select_strategic_extension(fragment, [fragment])
    assert len(manager.history) == HISTORY_LIMIT
    manager.reset()
    assert len(manager.history) == 0


def test_every_target_mode_has_weights(board, place):
    top = [(r, 7) for r in range(5)]
    bottom = [(r, 7) for r in range(10, 15)]
    middle = [(r, 3) for r in range(6, 9)]
    place(board, [(r, c, PLAYER_X) for r, c in top + bottom + middle])
    tracker = FragmentTracker(board, PLAYER_X)
    fragments = [tracker.describe(top), tracker.describe(bottom), tracker.describe(middle)]
    manager = StrategicExtensionManager(board, PLAYER_X)
    modes = {t.mode for f in fragments for t in manager.identify_targets(f, fragments)}
    assert modes == set(SCORING_WEIGHTS) == {"fragment-bridging", "border-extension"}
