"""Error taxonomy for the document generation pipeline.

Each failure kind maps to a distinct caller-facing meaning:

- SchemaViolation: the caller's input was malformed. Fix the input and resubmit.
- BindingError: a template referenced a field the validated input lacks.
  Signals a bug in a schema/template pair, never a user error.
- GenerationError: the completion service was unreachable, errored or timed out.
  Retryable by the caller; the pipeline never retries on its own.
- OutputSchemaViolation: the completion service answered, but not in the
  declared shape. Points at prompt/schema drift rather than the network.
"""

from typing import Any


class PipelineError(Exception):
    """Base class for every error a flow can surface to its caller."""

    kind = "pipeline_error"

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.kind, "detail": str(self)}


class SchemaViolation(PipelineError):
    """Raised when caller input fails its named input schema."""

    kind = "schema_violation"

    def __init__(
        self,
        field: str,
        constraint: str,
        schema_name: str | None = None,
        violations: list[dict[str, str]] | None = None,
    ):
        super().__init__(f"{field}: {constraint}")
        self.field = field
        self.constraint = constraint
        self.schema_name = schema_name
        self.violations = violations or [{"field": field, "constraint": constraint}]

    def to_dict(self) -> dict[str, Any]:
        return {
            **super().to_dict(),
            "schema": self.schema_name,
            "field": self.field,
            "constraint": self.constraint,
            "violations": self.violations,
        }


class BindingError(PipelineError):
    """Raised when a template cannot be rendered from validated input."""

    kind = "binding_error"

    def __init__(self, message: str, template_name: str | None = None, field: str | None = None):
        super().__init__(message)
        self.template_name = template_name
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        # Internal contract breach; keep template internals out of the response
        return {"error": self.kind, "detail": "Document template could not be bound"}


class GenerationError(PipelineError):
    """Raised when the completion service cannot produce a response."""

    kind = "generation_error"

    def __init__(self, message: str, provider: str | None = None, retryable: bool = True):
        super().__init__(message)
        self.provider = provider
        self.retryable = retryable

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "provider": self.provider, "retryable": self.retryable}


class ArticleFetchError(GenerationError):
    """Raised when the article page for a scrape request cannot be retrieved."""

    kind = "article_fetch_error"

    def __init__(self, message: str, url: str, status_code: int | None = None):
        super().__init__(message, provider="http", retryable=status_code is None or status_code >= 500)
        self.url = url
        self.status_code = status_code


class OutputSchemaViolation(PipelineError):
    """Raised when the completion service returns an unexpected shape."""

    kind = "output_schema_violation"

    def __init__(self, field: str, constraint: str, schema_name: str | None = None):
        super().__init__(f"{field}: {constraint}")
        self.field = field
        self.constraint = constraint
        self.schema_name = schema_name

    def to_dict(self) -> dict[str, Any]:
        return {
            **super().to_dict(),
            "schema": self.schema_name,
            "field": self.field,
            "constraint": self.constraint,
        }


class UnknownFlowError(LookupError):
    """Raised when a flow or schema name is not registered."""
