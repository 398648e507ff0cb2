from dataclasses import dataclass, field
from typing import Dict, List

from config import SERIES_WINDOW


@dataclass
class TickMetrics:
    ticks: int = 0
    failed_parts: int = 0
    segments_drawn: int = 0

    # time series for plotting
    t_series: List[float] = field(default_factory=list)
    green_series: List[int] = field(default_factory=list)
    segment_series: List[int] = field(default_factory=list)

    def record_tick(self, t: float, green_count: int, segments: int, failures: int):
        self.ticks += 1
        self.failed_parts += failures
        self.segments_drawn += segments

        # keep it light
        self.t_series.append(t)
        self.green_series.append(green_count)
        self.segment_series.append(segments)
        if len(self.t_series) > SERIES_WINDOW:
            del self.t_series[:-SERIES_WINDOW]
            del self.green_series[:-SERIES_WINDOW]
            del self.segment_series[:-SERIES_WINDOW]

    def avg_segments_per_tick(self) -> float:
        if self.ticks <= 0:
            return 0.0
        return self.segments_drawn / self.ticks

    def snapshot(self) -> Dict:
        return {
            "ticks": self.ticks,
            "failed_parts": self.failed_parts,
            "avg_segments": round(self.avg_segments_per_tick(), 3),
            "series": {
                "t": list(self.t_series),
                "green": list(self.green_series),
                "segments": list(self.segment_series),
            },
        }
