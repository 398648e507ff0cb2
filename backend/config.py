import os

TICK_INTERVAL = 0.1          # seconds between phase-colour recomputations
NUM_SEGMENTS = 20            # sub-segments per signal bar
GRID_STEP = 5                # seconds between horizontal grid lines
SERIES_WINDOW = 300          # time-series entries kept in snapshots

LOG_LEVEL = os.environ.get("CORRIDOR_LOG_LEVEL", "INFO")

DEFAULT_SCENARIO = "arterial"

# Corridor literals. Distances in each corridor's distance_unit, offsets and
# durations in seconds, speed in distance units per second.
# Both share one engine; only the data differs.
SCENARIOS = {
    "arterial": {
        "intersections": [
            {"id": 1, "name": "Int 1", "distance": 50, "offset": 0},
            {"id": 2, "name": "Int 2", "distance": 150, "offset": 5},
            {"id": 3, "name": "Int 3", "distance": 400, "offset": 10},
            {"id": 4, "name": "Int 4", "distance": 600, "offset": 15},
            {"id": 5, "name": "Int 5", "distance": 800, "offset": 20},
        ],
        "cycle_time": 40,
        "phases": [
            {"type": "green", "duration": 15},
            {"type": "yellow", "duration": 5},
            {"type": "red", "duration": 20},
        ],
        "speed": 35,
        "distance_unit": "meter",
    },
    "arterial_wide_green": {
        "intersections": [
            {"id": 1, "name": "Int 1", "distance": 0, "offset": 0},
            {"id": 2, "name": "Int 2", "distance": 200, "offset": 5},
            {"id": 3, "name": "Int 3", "distance": 400, "offset": 10},
            {"id": 4, "name": "Int 4", "distance": 600, "offset": 15},
            {"id": 5, "name": "Int 5", "distance": 800, "offset": 20},
        ],
        "cycle_time": 40,
        "phases": [
            {"type": "green", "duration": 20},
            {"type": "yellow", "duration": 5},
            {"type": "red", "duration": 15},
        ],
        "speed": 40,
        "distance_unit": "ft",
    },
}
