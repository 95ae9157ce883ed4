"""Pydantic schemas for the safety consultant and the media analysis flows."""

import base64
import binascii
import re
from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    Field,
    StrictStr,
    model_validator,
)

from app.core.schemas_base import CamelModel, DocumentText, RequiredText

_DATA_URI_RE = re.compile(
    r"^data:(?P<media_type>[\w.+-]+/[\w.+-]+);base64,(?P<data>.+)$", re.DOTALL
)

IMAGE_MEDIA_TYPES = frozenset({"image/jpeg", "image/png", "image/gif", "image/webp"})
DOCUMENT_MEDIA_TYPES = IMAGE_MEDIA_TYPES | {"application/pdf", "text/plain"}


class MediaAttachment(BaseModel):
    """A decoded data-URI payload sent alongside a prompt."""

    model_config = {"frozen": True}

    media_type: str
    data: str  # base64, without the data: prefix

    @property
    def size_bytes(self) -> int:
        return len(self.data) * 3 // 4 - self.data[-2:].count("=")

    def decoded_text(self) -> str:
        return base64.b64decode(self.data).decode("utf-8", errors="replace")


def parse_data_uri(value: str) -> MediaAttachment:
    """
    Split a ``data:<mimetype>;base64,<data>`` URI into a MediaAttachment.

    Raises:
        ValueError: If the value is not a base64 data URI
    """
    match = _DATA_URI_RE.match(value.strip())
    if not match:
        raise ValueError("must be a data URI of the form data:<mimetype>;base64,<data>")
    data = re.sub(r"\s+", "", match.group("data"))
    try:
        base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError("data URI payload is not valid base64") from e
    return MediaAttachment(media_type=match.group("media_type").lower(), data=data)


def _media_type_in(allowed: frozenset[str]):
    def check(value: str) -> str:
        attachment = parse_data_uri(value)
        if attachment.media_type not in allowed:
            raise ValueError(
                f"unsupported media type {attachment.media_type}; expected one of "
                + ", ".join(sorted(allowed))
            )
        return value

    return check


ImageDataUri = Annotated[StrictStr, AfterValidator(_media_type_in(IMAGE_MEDIA_TYPES))]
DocumentDataUri = Annotated[StrictStr, AfterValidator(_media_type_in(DOCUMENT_MEDIA_TYPES))]


# =======================
# Safety consultant
# =======================


class SafetyConsultantInput(CamelModel):
    query: RequiredText = Field(..., description="The user query related to safety matters")


class CoreMemoryEntry(CamelModel):
    """A reference document the consultant treats as its primary source."""

    key: RequiredText
    url: RequiredText


class SafetyConsultantOutput(CamelModel):
    advice: DocumentText = Field(..., description="The safety advice provided by the consultant")


# =======================
# Hazard hunter (image analysis)
# =======================


class HazardHunterInput(CamelModel):
    photo_data_uri: ImageDataUri = Field(
        ..., description="Worksite photo as a base64 data URI (data:<mimetype>;base64,<data>)"
    )


class HazardHunterOutput(CamelModel):
    """Hazards spotted in a photo, one confidence score per hazard."""

    identified_hazards: list[RequiredText] = Field(
        ..., description="Specific potential safety risks identified in the image"
    )
    confidence_scores: list[Annotated[float, Field(ge=0.0, le=1.0, strict=True)]] = Field(
        ..., description="Confidence (0.0-1.0) for each identified hazard, in the same order"
    )
    overall_safety_assessment: RequiredText = Field(
        ..., description="One or two-sentence overall safety assessment of the scene"
    )

    @model_validator(mode="after")
    def _scores_match_hazards(self) -> "HazardHunterOutput":
        if len(self.confidence_scores) != len(self.identified_hazards):
            raise ValueError(
                "confidenceScores must have exactly one entry per identified hazard"
            )
        return self


# =======================
# Document analyzer
# =======================


class AnalyzeDocumentInput(CamelModel):
    document_data_uri: DocumentDataUri = Field(
        ..., description="Document as a base64 data URI (pdf, plain text or image)"
    )


class AnalyzeDocumentOutput(CamelModel):
    summary: DocumentText = Field(
        ..., description="Concise summary of the key information and concepts in the document"
    )
