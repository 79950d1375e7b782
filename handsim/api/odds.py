"""Closed-form odds API endpoints."""

from fastapi import APIRouter, HTTPException

from handsim.core.errors import InvalidDrawConfigError
from handsim.models.deck import expand_deck
from handsim.models.odds_models import CategoryRequest, OddsRequest, OddsResult
from handsim.models.simulation_models import CategoryOdds
from handsim.services.category_analyzer import analyze_categories
from handsim.services.odds import calculate_odds

router = APIRouter()


@router.post("/", response_model=OddsResult)
def odds(request: OddsRequest) -> OddsResult:
    """Hypergeometric draw odds with weakness redraws."""
    try:
        return calculate_odds(request)
    except InvalidDrawConfigError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/categories", response_model=list[CategoryOdds])
def categories(request: CategoryRequest) -> list[CategoryOdds]:
    """Odds of seeing each trait or slot within 5, 10 and 15 draws."""
    return analyze_categories(expand_deck(request.deck), request.kind)
