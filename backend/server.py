import math

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Any, Dict, Optional

from config import DEFAULT_SCENARIO, SCENARIOS
from corridor import ConfigurationError, load_corridor
from diagram import DiagramDriver
from log import setup_logger
from phase_clock import phase_at, phase_remaining

logger = setup_logger(__name__)

app = FastAPI(title="Corridor Time-Space Diagram API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class UnknownScenarioError(KeyError):
    pass


def build_driver(scenario: str) -> DiagramDriver:
    if scenario not in SCENARIOS:
        raise UnknownScenarioError(scenario)
    return DiagramDriver(load_corridor(SCENARIOS[scenario]))


state = {"scenario": DEFAULT_SCENARIO, "driver": build_driver(DEFAULT_SCENARIO)}


class ControlRequest(BaseModel):
    running: Optional[bool] = None
    scenario: Optional[str] = None
    corridor: Optional[Dict[str, Any]] = None


class HoverRequest(BaseModel):
    intersection_id: int
    segment_index: int


def _config_error(e: ConfigurationError) -> HTTPException:
    return HTTPException(status_code=422, detail={"field": e.field, "reason": e.reason})


@app.get("/health")
def health():
    return {"ok": True}


@app.get("/scenarios")
def scenarios():
    return {"scenarios": sorted(SCENARIOS), "active": state["scenario"]}


@app.post("/control")
def control(req: ControlRequest):
    was_running = state["driver"].running

    if req.corridor is not None:
        try:
            state["driver"] = DiagramDriver(load_corridor(req.corridor))
        except ConfigurationError as e:
            logger.warning(f"rejected corridor: {e}")
            raise _config_error(e)
        state["scenario"] = "custom"
    elif req.scenario is not None:
        try:
            state["driver"] = build_driver(req.scenario)
        except UnknownScenarioError:
            raise HTTPException(status_code=404, detail=f"unknown scenario '{req.scenario}'")
        except ConfigurationError as e:
            raise _config_error(e)
        state["scenario"] = req.scenario

    running = req.running if req.running is not None else was_running
    if running:
        state["driver"].start()
    else:
        state["driver"].stop()

    return {"running": state["driver"].running, "scenario": state["scenario"]}


@app.post("/tick")
def tick():
    return state["driver"].tick()


@app.get("/state")
def get_state():
    return state["driver"].frame()


@app.get("/phase")
def phase(intersection_id: int, time: float):
    if not math.isfinite(time):
        raise HTTPException(status_code=422, detail="time must be a finite number of seconds")
    driver = state["driver"]
    try:
        inter = driver.corridor.intersection(intersection_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    corridor = driver.corridor
    return {
        "intersection_id": inter.id,
        "time": time,
        "phase": phase_at(corridor, time, inter.offset).value,
        "remaining": phase_remaining(corridor.cycle_time, corridor.phases, time, inter.offset),
    }


@app.post("/hover")
def hover(req: HoverRequest):
    try:
        state["driver"].hover(req.intersection_id, req.segment_index)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"tooltip": state["driver"].frame()["tooltip"]}


@app.delete("/hover")
def unhover():
    state["driver"].unhover()
    return {"tooltip": None}


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
