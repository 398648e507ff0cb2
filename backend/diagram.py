# diagram.py
from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import numpy as np

from config import GRID_STEP, NUM_SEGMENTS, TICK_INTERVAL
from corridor import CorridorConfig, Intersection, PhaseType
from log import setup_logger
from metrics import TickMetrics
from phase_clock import phase_at, phase_remaining, wrap
from progression import compute_progression

logger = setup_logger(__name__)

PHASE_COLORS = {
    PhaseType.green: "#15803d",
    PhaseType.yellow: "#ffff00",
    PhaseType.red: "#ff0000",
}


@dataclass(frozen=True)
class BarSegment:
    index: int
    y_start: float
    y_end: float
    segment_time: float
    phase: PhaseType

    @property
    def color(self) -> str:
        return PHASE_COLORS[self.phase]

    def to_dict(self) -> Dict:
        return {
            "index": self.index,
            "y_start": self.y_start,
            "y_end": self.y_end,
            "segment_time": self.segment_time,
            "phase": self.phase.value,
            "color": self.color,
        }


@dataclass
class HoverState:
    intersection_id: Optional[int] = None
    segment_index: Optional[int] = None

    @property
    def active(self) -> bool:
        return self.intersection_id is not None


def signal_bar(
    corridor: CorridorConfig,
    intersection: Intersection,
    base_time: float,
    num_segments: int = NUM_SEGMENTS,
) -> List[BarSegment]:
    """
    Colour one intersection's vertical bar.

    Sub-segment ``i`` spans ``[i*C/n, (i+1)*C/n)`` on the time axis and shows
    the phase at ``i*C/n + base_time`` (wrapped into the cycle).
    """
    cycle = corridor.cycle_time
    starts = np.arange(num_segments) * (cycle / num_segments)

    bar = []
    for i, y0 in enumerate(starts):
        segment_time = wrap(float(y0) + base_time, cycle)
        bar.append(BarSegment(
            index=i,
            y_start=float(y0),
            y_end=(i + 1) * cycle / num_segments,
            segment_time=segment_time,
            phase=phase_at(corridor, segment_time, intersection.offset),
        ))
    return bar


def grid(corridor: CorridorConfig, step: float = GRID_STEP) -> Dict[str, List[float]]:
    return {
        "vertical": [inter.distance for inter in corridor.intersections],
        "horizontal": [float(t) for t in np.arange(0, corridor.cycle_time + 1, step)],
    }


def axes(corridor: CorridorConfig) -> Dict:
    max_distance = max((inter.distance for inter in corridor.intersections), default=0.0)
    return {
        "x": {"domain": [0.0, max_distance], "label": f"Distance ({corridor.distance_unit})"},
        "y": {"domain": [0.0, corridor.cycle_time], "label": "Time (seconds)"},
    }


class DiagramDriver:
    """
    Single tick source for one corridor diagram.

    Every tick samples the clock once and recomputes all signal bars and
    progression lines; the previous frame is replaced wholesale.
    """

    def __init__(
        self,
        corridor: CorridorConfig,
        clock: Callable[[], float] = time.time,
        num_segments: int = NUM_SEGMENTS,
    ):
        self.corridor = corridor
        self.clock = clock
        self.num_segments = num_segments
        self.running = False
        self.hover_state = HoverState()
        self.metrics = TickMetrics()
        self._frame = self._render(self.clock())

    def start(self):
        self.running = True

    def stop(self):
        self.running = False

    def hover(self, intersection_id: int, segment_index: int):
        self.corridor.intersection(intersection_id)
        if not 0 <= segment_index < self.num_segments:
            raise ValueError(f"segment index {segment_index} out of range 0..{self.num_segments - 1}")
        self.hover_state = HoverState(intersection_id, segment_index)

    def unhover(self):
        self.hover_state = HoverState()

    def _render(self, now: float) -> Dict:
        current = wrap(now, self.corridor.cycle_time)
        failures = 0

        rows = []
        for inter in self.corridor.intersections:
            row = {
                "id": inter.id,
                "name": inter.name,
                "distance": inter.distance,
                "offset": inter.offset,
                "phase": None,
                "remaining": None,
                "bar": [],
            }
            try:
                row["phase"] = phase_at(self.corridor, current, inter.offset).value
                row["remaining"] = round(phase_remaining(
                    self.corridor.cycle_time, self.corridor.phases, current, inter.offset), 3)
                row["bar"] = [seg.to_dict() for seg in signal_bar(
                    self.corridor, inter, current, self.num_segments)]
            except Exception:
                # keep the rest of the frame drawable
                failures += 1
                logger.error(f"signal bar failed for intersection {inter.id}", exc_info=True)
            rows.append(row)

        try:
            progression = [seg.model_dump() for seg in compute_progression(self.corridor, current)]
        except Exception:
            failures += 1
            progression = []
            logger.error("progression pass failed", exc_info=True)

        return {
            "t": now,
            "cycle_position": current,
            "running": self.running,
            "axes": axes(self.corridor),
            "grid": grid(self.corridor),
            "intersections": rows,
            "progression": progression,
            "failures": failures,
        }

    def _tooltip(self, frame: Dict) -> Optional[Dict]:
        if not self.hover_state.active:
            return None
        for row in frame["intersections"]:
            if row["id"] != self.hover_state.intersection_id:
                continue
            if self.hover_state.segment_index >= len(row["bar"]):
                return None
            seg = row["bar"][self.hover_state.segment_index]
            return {
                "name": row["name"],
                "phase": seg["phase"],
                "time": math.floor(seg["segment_time"]),
            }
        return None

    def tick(self) -> Dict:
        if not self.running:
            return self.frame()

        frame = self._render(self.clock())
        green = sum(1 for row in frame["intersections"] if row["phase"] == PhaseType.green.value)
        self.metrics.record_tick(
            t=frame["t"],
            green_count=green,
            segments=len(frame["progression"]),
            failures=frame["failures"],
        )
        self._frame = frame
        return self.frame()

    def frame(self) -> Dict:
        return {
            **self._frame,
            "running": self.running,
            "tooltip": self._tooltip(self._frame),
            "metrics": self.metrics.snapshot(),
        }

    def run(self, ticks: int, interval: float = TICK_INTERVAL, sleep: Callable[[float], None] = time.sleep) -> Dict:
        self.start()
        try:
            for _ in range(ticks):
                self.tick()
                sleep(interval)
        finally:
            self.stop()
        return self.frame()
