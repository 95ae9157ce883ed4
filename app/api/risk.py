"""API endpoint for the risk calculator."""

from fastapi import APIRouter
from pydantic import BaseModel, Field, StrictInt

from app.core.risk import MAX_FACTOR, MIN_FACTOR, RiskRating, compute_risk

router = APIRouter()


class RiskComputeRequest(BaseModel):
    likelihood: StrictInt = Field(..., ge=MIN_FACTOR, le=MAX_FACTOR)
    consequence: StrictInt = Field(..., ge=MIN_FACTOR, le=MAX_FACTOR)


@router.post("/risk/compute")
async def compute_risk_rating(request: RiskComputeRequest) -> RiskRating:
    """Compute rating = likelihood x consequence and its Low/Medium/High band."""
    return compute_risk(request.likelihood, request.consequence)
