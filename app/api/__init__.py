"""API router for v1 endpoints."""

from fastapi import APIRouter

from app.api import flows, risk, safety_consultant

router = APIRouter()

# Document generation flows
router.include_router(flows.router, tags=["flows"])

# Risk calculator
router.include_router(risk.router, tags=["risk"])

# Safety consultant streaming advice
router.include_router(safety_consultant.router, tags=["safety_consultant"])
