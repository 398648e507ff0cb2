from __future__ import annotations

import math
from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from log import setup_logger

logger = setup_logger(__name__)


class ConfigurationError(Exception):
    """Raised when a corridor literal cannot be used to draw a diagram."""

    def __init__(self, field: str, reason: str):
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class PhaseType(str, Enum):
    green = "green"
    yellow = "yellow"
    red = "red"


class Intersection(BaseModel):
    id: int = Field(..., description="Unique intersection identifier")
    name: str = Field(..., description="Display name")
    distance: float = Field(..., ge=0, description="Position along the corridor")
    offset: float = Field(0.0, ge=0, description="Phase-start shift in seconds")

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)


class Phase(BaseModel):
    type: PhaseType
    duration: float = Field(..., gt=0, description="Seconds")

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)


class CorridorConfig(BaseModel):
    """
    One diagram instance: an ordered corridor sharing a single cycle.

    The intersection list order is the corridor order. Phase durations are
    not required to add up to ``cycle_time``; time past the last boundary
    resolves to the first phase.
    """
    intersections: List[Intersection] = Field(default_factory=list)
    cycle_time: float = Field(..., gt=0)
    phases: List[Phase] = Field(..., min_length=1)
    speed: float = Field(..., gt=0, description="Distance units per second")
    distance_unit: str = Field("meter", min_length=1, description="Label for the distance axis")

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    @model_validator(mode="after")
    def _check_corridor_order(self) -> "CorridorConfig":
        seen = set()
        for idx, inter in enumerate(self.intersections):
            if inter.id in seen:
                raise ConfigurationError(f"intersections.{idx}.id", f"duplicate intersection id {inter.id}")
            seen.add(inter.id)
            if idx > 0 and inter.distance < self.intersections[idx - 1].distance:
                raise ConfigurationError(
                    f"intersections.{idx}.distance",
                    f"distance {inter.distance} is less than the previous intersection's "
                    f"{self.intersections[idx - 1].distance}",
                )
        return self

    def intersection(self, intersection_id: int) -> Intersection:
        for inter in self.intersections:
            if inter.id == intersection_id:
                return inter
        raise ValueError(f"unknown intersection id {intersection_id}")


class ProgressionSegment(BaseModel):
    from_intersection_id: int
    to_intersection_id: int
    start_time: float
    from_distance: float
    from_time: float
    to_distance: float
    to_time: float

    model_config = ConfigDict(frozen=True)


def phase_total(corridor: CorridorConfig) -> float:
    return math.fsum(p.duration for p in corridor.phases)


def load_corridor(data: Dict[str, Any]) -> CorridorConfig:
    """
    Validate a raw corridor literal.

    Any problem is reported as one ConfigurationError naming the first
    offending field, e.g. ``phases.1.duration`` or ``speed``.
    """
    try:
        corridor = CorridorConfig.model_validate(data)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(part) for part in err["loc"]) or "corridor"
        raise ConfigurationError(field, err["msg"]) from e

    total = phase_total(corridor)
    if not math.isclose(total, corridor.cycle_time):
        logger.warning(
            f"phase durations sum to {total}s but cycle_time is {corridor.cycle_time}s; "
            f"time past the last phase resolves to '{corridor.phases[0].type.value}'"
        )

    logger.info(
        f"loaded corridor: {len(corridor.intersections)} intersections, "
        f"cycle={corridor.cycle_time}s, speed={corridor.speed}"
    )
    return corridor
