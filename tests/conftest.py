import pytest

from corridor import load_corridor


@pytest.fixture
def phases_data():
    return [
        {"type": "green", "duration": 20},
        {"type": "yellow", "duration": 5},
        {"type": "red", "duration": 15},
    ]


@pytest.fixture
def two_stop_corridor(phases_data):
    return load_corridor({
        "intersections": [
            {"id": 1, "name": "Int 1", "distance": 0, "offset": 0},
            {"id": 2, "name": "Int 2", "distance": 200, "offset": 5},
        ],
        "cycle_time": 40,
        "phases": phases_data,
        "speed": 40,
    })


@pytest.fixture
def corridor_data(phases_data):
    return {
        "intersections": [
            {"id": 1, "name": "Int 1", "distance": 0, "offset": 0},
            {"id": 2, "name": "Int 2", "distance": 200, "offset": 20},
            {"id": 3, "name": "Int 3", "distance": 400, "offset": 0},
        ],
        "cycle_time": 40,
        "phases": phases_data,
        "speed": 40,
    }


@pytest.fixture
def corridor(corridor_data):
    return load_corridor(corridor_data)
