"""Shared pydantic building blocks for flow input and output schemas."""

from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    StringConstraints,
)
from pydantic.alias_generators import to_camel


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


# Required free text: a real string with at least one non-space character
RequiredText = Annotated[StrictStr, StringConstraints(strip_whitespace=True, min_length=1)]

# Generated document body; whitespace is preserved, blank is rejected
DocumentText = Annotated[StrictStr, AfterValidator(_not_blank)]

# Hazard rating factors. The HIRA form restricts ratings to 1-5 while the
# general risk vocabulary (and the risk assessment form) allows 0-5.
HiraRating = Annotated[StrictInt, Field(ge=1, le=5)]
MatrixRating = Annotated[StrictInt, Field(ge=0, le=5)]


class CamelModel(BaseModel):
    """Model exchanged with callers using camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )
