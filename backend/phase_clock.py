from typing import Sequence

from corridor import CorridorConfig, Phase, PhaseType


def wrap(value: float, period: float) -> float:
    """Floor-modulo into [0, period)."""
    r = value % period
    # tiny negative values can round up to exactly period
    if r >= period:
        return 0.0
    return r


def _locate(cycle_time: float, phases: Sequence[Phase], time: float, offset: float):
    adjusted = wrap(time + offset, cycle_time)
    accumulated = 0.0
    for phase in phases:
        accumulated += phase.duration
        if adjusted < accumulated:
            return phase, accumulated - adjusted
    # durations fall short of the cycle: first phase until the cycle wraps
    return phases[0], cycle_time - adjusted


def active_phase(cycle_time: float, phases: Sequence[Phase], time: float, offset: float) -> PhaseType:
    """
    Phase type showing at ``time`` for a signal shifted by ``offset``.

    ``time`` may be any finite value, including wall-clock epoch seconds or
    negative times.
    """
    phase, _ = _locate(cycle_time, phases, time, offset)
    return phase.type


def phase_remaining(cycle_time: float, phases: Sequence[Phase], time: float, offset: float) -> float:
    """Seconds until the active phase ends."""
    _, remaining = _locate(cycle_time, phases, time, offset)
    return remaining


def phase_at(corridor: CorridorConfig, time: float, offset: float) -> PhaseType:
    return active_phase(corridor.cycle_time, corridor.phases, time, offset)
