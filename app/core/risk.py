"""Risk rating arithmetic for hazard-bearing documents.

Rating = likelihood x consequence, both on the 0-5 scale used by the
risk matrix. Bands follow the matrix action requirements:

    16-25  High    stop work until the risk is reduced
     6-15  Medium  introduce controls to reduce the risk
     0-5   Low     monitor
"""

from enum import Enum

from pydantic import BaseModel, Field

MIN_FACTOR = 0
MAX_FACTOR = 5

HIGH_THRESHOLD = 16
MEDIUM_THRESHOLD = 6


class RiskBand(str, Enum):
    """Severity band of a numeric risk rating."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class RiskRating(BaseModel):
    """A computed rating and its band."""

    model_config = {"frozen": True}

    rating: int = Field(..., ge=0, le=MAX_FACTOR * MAX_FACTOR)
    band: RiskBand


def classify_rating(rating: int) -> RiskBand:
    """Map a numeric rating to its band."""
    if rating >= HIGH_THRESHOLD:
        return RiskBand.HIGH
    if rating >= MEDIUM_THRESHOLD:
        return RiskBand.MEDIUM
    return RiskBand.LOW


def _check_factor(name: str, value: int) -> None:
    # bool is an int subclass; True/False are not ratings
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if not MIN_FACTOR <= value <= MAX_FACTOR:
        raise ValueError(f"{name} must be between {MIN_FACTOR} and {MAX_FACTOR}, got {value}")


def compute_risk(likelihood: int, consequence: int) -> RiskRating:
    """
    Compute the risk rating for one likelihood/consequence pair.

    A factor of 0 is a valid "no risk" input and yields rating 0 (Low).

    Args:
        likelihood: Likelihood rating, 0-5
        consequence: Consequence/severity rating, 0-5

    Returns:
        RiskRating with rating = likelihood * consequence and its band

    Raises:
        TypeError: If a factor is not an integer
        ValueError: If a factor is outside 0-5
    """
    _check_factor("likelihood", likelihood)
    _check_factor("consequence", consequence)
    rating = likelihood * consequence
    return RiskRating(rating=rating, band=classify_rating(rating))
