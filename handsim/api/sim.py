"""Simulation API endpoints."""

from fastapi import APIRouter, HTTPException

from handsim.core.errors import InvalidDrawConfigError
from handsim.models.deck import expand_deck
from handsim.models.simulation_models import SampleResult, SimulationRequest, SimulationResult
from handsim.services.sampler import draw_single_sample
from handsim.services.simulator import run_simulation

router = APIRouter()


@router.post("/run", response_model=SimulationResult)
def run(request: SimulationRequest) -> SimulationResult:
    """Run a Monte Carlo simulation of the opening hand and early draws."""
    try:
        return run_simulation(expand_deck(request.deck), request.config)
    except InvalidDrawConfigError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/sample", response_model=SampleResult)
def sample(request: SimulationRequest) -> SampleResult:
    """Deal one literal opening hand and the draws after it."""
    try:
        return draw_single_sample(expand_deck(request.deck), request.config)
    except InvalidDrawConfigError as e:
        raise HTTPException(status_code=400, detail=str(e))
