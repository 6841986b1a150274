import pytest
from pydantic import ValidationError

from chain_connect.engine import DEFAULT_PERSONALITY, Personality, load_personality


def test_defaults():
    personality = load_personality()
    assert personality == DEFAULT_PERSONALITY
    assert personality is not DEFAULT_PERSONALITY
    assert personality.strategy.attack_threshold == 3500
    assert personality.starting_area.row_range == (6, 8)


def test_camel_case_and_snake_case_keys():
    data = {
        "name": "aggressive",
        "priorities": {"criticalAttack": 1.5, "border_connection": 0.5},
        "strategy": {"independentPlaying": 0.2},
        "startingArea": {"rowRange": [5, 9]},
    }
    personality = load_personality(data)
    assert personality.name == "aggressive"
    assert personality.priorities.critical_attack == 1.5
    assert personality.priorities.border_connection == 0.5
    assert personality.strategy.independent_playing == 0.2
    assert personality.starting_area.row_range == (5, 9)


def test_summary_uses_saved_file_spelling():
    summary = DEFAULT_PERSONALITY.summary()
    assert summary["startingArea"]["centerWeight"] == 0.8
    assert "gapThreat" in summary["priorities"]


def test_instances_pass_through():
    personality = Personality(name="calm")
    assert load_personality(personality) is personality


@pytest.mark.parametrize("data", [
    {"randomization": {"moveSelection": 1.5}},
    {"priorities": {"gapThreat": -1}},
    {"strategy": {"riskTaking": "lots"}},
])
def test_out_of_range_values_are_rejected(data):
    with pytest.raises(ValidationError):
        load_personality(data)


def test_non_mapping_is_a_type_error():
    with pytest.raises(TypeError):
        load_personality(["balanced"])
