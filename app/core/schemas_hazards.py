"""Pydantic schemas for hazards: caller input, rated projection and AI suggestions."""

from pydantic import Field

from app.core.risk import RiskBand, compute_risk
from app.core.schemas_base import CamelModel, HiraRating, MatrixRating, RequiredText

MAX_SUGGESTED_HAZARDS = 5


class HiraHazardInput(CamelModel):
    """One hazard row as submitted on the HIRA form (ratings 1-5).

    Risk values are never accepted from the caller; they are derived
    from the factors when the document is generated.
    """

    hazard: RequiredText = Field(..., description="Specific hazard description")
    persons_affected: RequiredText = Field(
        ..., description="Who could be affected and potential injuries"
    )
    initial_likelihood: HiraRating = Field(..., description="Initial likelihood rating (1-5)")
    initial_consequence: HiraRating = Field(..., description="Initial consequence rating (1-5)")
    control_measures: RequiredText = Field(
        ..., description="Specific safety measures for this hazard"
    )
    residual_likelihood: HiraRating = Field(..., description="Residual likelihood rating (1-5)")
    residual_consequence: HiraRating = Field(
        ..., description="Residual consequence rating (1-5)"
    )


class MatrixHazardInput(HiraHazardInput):
    """Hazard row for the risk assessment form, which allows 0 ratings."""

    initial_likelihood: MatrixRating = Field(..., description="Initial likelihood rating (0-5)")
    initial_consequence: MatrixRating = Field(
        ..., description="Initial consequence rating (0-5)"
    )
    residual_likelihood: MatrixRating = Field(
        ..., description="Residual likelihood rating (0-5)"
    )
    residual_consequence: MatrixRating = Field(
        ..., description="Residual consequence rating (0-5)"
    )


class RatedHazard(CamelModel):
    """A hazard with its initial and residual risk computed from its factors."""

    model_config = {"frozen": True}

    hazard: str
    persons_affected: str
    initial_likelihood: int
    initial_consequence: int
    initial_risk: int
    initial_band: RiskBand
    control_measures: str
    residual_likelihood: int
    residual_consequence: int
    residual_risk: int
    residual_band: RiskBand

    @classmethod
    def from_input(cls, hazard: HiraHazardInput) -> "RatedHazard":
        initial = compute_risk(hazard.initial_likelihood, hazard.initial_consequence)
        residual = compute_risk(hazard.residual_likelihood, hazard.residual_consequence)
        return cls(
            hazard=hazard.hazard,
            persons_affected=hazard.persons_affected,
            initial_likelihood=hazard.initial_likelihood,
            initial_consequence=hazard.initial_consequence,
            initial_risk=initial.rating,
            initial_band=initial.band,
            control_measures=hazard.control_measures,
            residual_likelihood=hazard.residual_likelihood,
            residual_consequence=hazard.residual_consequence,
            residual_risk=residual.rating,
            residual_band=residual.band,
        )

    @property
    def initial_triple(self) -> str:
        """Initial L-S-R triple as rendered in the hazard table."""
        return f"{self.initial_likelihood} - {self.initial_consequence} - **{self.initial_risk}**"

    @property
    def residual_triple(self) -> str:
        """Residual L-S-R triple as rendered in the hazard table."""
        return (
            f"{self.residual_likelihood} - {self.residual_consequence} - **{self.residual_risk}**"
        )


def rate_hazards(hazards: list[HiraHazardInput]) -> list[RatedHazard]:
    """Rate each hazard, preserving caller order exactly."""
    return [RatedHazard.from_input(h) for h in hazards]


# =======================
# Hazard suggestions
# =======================


class SuggestHazardsInput(CamelModel):
    """Request for AI-suggested hazards for a task."""

    task_title: RequiredText = Field(..., description="The task or project being assessed")


class SuggestedHazard(CamelModel):
    """A suggested hazard stub; ratings are assigned by the caller afterwards."""

    hazard: RequiredText = Field(..., description="A specific, potential hazard for the task")
    persons_affected: RequiredText = Field(
        ..., description="Who could be affected by this hazard and the likely harm"
    )
    control_measures: RequiredText = Field(
        ..., description="Recommended control measures to mitigate this hazard"
    )


class SuggestHazardsOutput(CamelModel):
    """Up to five suggested hazards."""

    suggested_hazards: list[SuggestedHazard] = Field(
        ...,
        max_length=MAX_SUGGESTED_HAZARDS,
        description="A list of up to 5 suggested hazards with details",
    )
