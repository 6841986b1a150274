import pytest

from chain_connect import cli
from chain_connect.engine import EngineAgent


def test_normalise_agent_list():
    assert cli._normalise_agent_list(None) == ["engine", "engine"]
    assert cli._normalise_agent_list("random") == ["random", "random"]
    assert cli._normalise_agent_list(["random"]) == ["random", "random"]
    assert cli._normalise_agent_list(["engine", "random"]) == ["engine", "random"]
    with pytest.raises(ValueError):
        cli._normalise_agent_list(["a", "b", "c"])


def test_resolve_builtin_agents():
    moves = [(0, 0), (3, 4), (9, 9)]
    agent = cli._resolve_agent("random", seed=5)
    assert agent(None, moves) in moves
    assert isinstance(cli._resolve_agent("engine"), EngineAgent)
    assert isinstance(cli._resolve_agent("Heuristic"), EngineAgent)


def test_each_engine_side_gets_its_own_instance():
    assert cli._resolve_agent("engine") is not cli._resolve_agent("engine")


def test_resolve_module_path():
    from chain_connect.engine import infer_player
    assert cli._resolve_agent("chain_connect.engine:infer_player") is infer_player


@pytest.mark.parametrize("name", ["bogus", "no_such_module_here:agent", "random:not_there", ":x"])
def test_unknown_agents_raise(name):
    with pytest.raises(ValueError):
        cli._resolve_agent(name)


def test_board_size_is_range_checked():
    parser = cli.build_parser()
    assert parser.parse_args(["--board-size", "9"]).board_size == 9
    with pytest.raises(SystemExit):
        parser.parse_args(["--board-size", "3"])


def test_mode_required_without_wizard():
    with pytest.raises(SystemExit):
        cli.main(["--seed", "1"])
