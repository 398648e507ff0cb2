from typing import List

from corridor import CorridorConfig, ProgressionSegment, PhaseType
from phase_clock import phase_at, wrap


def travel_time(distance: float, speed: float) -> float:
    return distance / speed


def compute_progression(corridor: CorridorConfig, current_time: float) -> List[ProgressionSegment]:
    """
    Green-band lines for one tick.

    One segment per adjacent pair (A, B), in list order, whose upstream
    intersection A is green at ``current_time``. The line starts at A's
    position in the cycle and ends ``travel_time`` earlier at B, wrapped
    into the previous cycle when needed.
    """
    cycle = corridor.cycle_time
    segments: List[ProgressionSegment] = []

    for a, b in zip(corridor.intersections, corridor.intersections[1:]):
        if phase_at(corridor, current_time, a.offset) != PhaseType.green:
            continue

        start_y = wrap(current_time + a.offset, cycle)
        travel = travel_time(b.distance - a.distance, corridor.speed)
        end_y = wrap(start_y - travel + cycle, cycle)

        segments.append(ProgressionSegment(
            from_intersection_id=a.id,
            to_intersection_id=b.id,
            start_time=current_time,
            from_distance=a.distance,
            from_time=start_y,
            to_distance=b.distance,
            to_time=end_y,
        ))

    return segments
