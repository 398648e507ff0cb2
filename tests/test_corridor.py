import logging

import pytest
from pydantic import ValidationError

from config import SCENARIOS
from corridor import ConfigurationError, CorridorConfig, PhaseType, load_corridor, phase_total


@pytest.mark.parametrize("name", sorted(SCENARIOS))
def test_bundled_scenarios_load(name):
    c = load_corridor(SCENARIOS[name])
    assert c.cycle_time == 40
    assert len(c.intersections) == 5
    assert c.phases[0].type == PhaseType.green


@pytest.mark.parametrize("patch, field", [
    ({"cycle_time": 0}, "cycle_time"),
    ({"speed": -5}, "speed"),
    ({"speed": 0}, "speed"),
    ({"phases": []}, "phases"),
])
def test_invalid_values_name_the_field(corridor_data, patch, field):
    corridor_data.update(patch)
    with pytest.raises(ConfigurationError) as exc:
        load_corridor(corridor_data)
    assert exc.value.field == field
    assert exc.value.reason


def test_non_positive_duration(corridor_data):
    corridor_data["phases"][1]["duration"] = 0
    with pytest.raises(ConfigurationError) as exc:
        load_corridor(corridor_data)
    assert exc.value.field == "phases.1.duration"


def test_missing_field(corridor_data):
    del corridor_data["speed"]
    with pytest.raises(ConfigurationError) as exc:
        load_corridor(corridor_data)
    assert exc.value.field == "speed"


def test_distances_must_not_decrease(corridor_data):
    corridor_data["intersections"][1]["distance"] = 500
    with pytest.raises(ConfigurationError) as exc:
        load_corridor(corridor_data)
    assert exc.value.field == "intersections.2.distance"


def test_duplicate_ids(corridor_data):
    corridor_data["intersections"][2]["id"] = 1
    with pytest.raises(ConfigurationError) as exc:
        load_corridor(corridor_data)
    assert exc.value.field == "intersections.2.id"


def test_direct_construction_checks_order(corridor_data):
    corridor_data["intersections"].reverse()
    with pytest.raises(ConfigurationError):
        CorridorConfig(**corridor_data)


def test_short_durations_warn_but_load(corridor_data, caplog):
    corridor_data["phases"][2]["duration"] = 5
    with caplog.at_level(logging.WARNING, logger="corridor"):
        c = load_corridor(corridor_data)
    assert phase_total(c) == 30
    assert "phase durations sum to 30" in caplog.text


def test_corridor_is_immutable(corridor):
    with pytest.raises(ValidationError):
        corridor.speed = 10
    with pytest.raises(ValidationError):
        corridor.intersections[0].offset = 3


def test_intersection_lookup(corridor):
    assert corridor.intersection(2).name == "Int 2"
    with pytest.raises(ValueError):
        corridor.intersection(99)
