"""Bind validated flow input into a document prompt template.

Binding is a pure projection from (validated input, computed fields) to
text: no clock reads, no randomness, no mutation of the input. Anything
time- or id-dependent must arrive as a computed field.
"""

from functools import lru_cache
from typing import Any

from jinja2 import Environment, StrictUndefined, Template, TemplateSyntaxError, UndefinedError
from pydantic import BaseModel

from app.core.errors import BindingError

_env = Environment(
    undefined=StrictUndefined,
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)


def md_cell(value: Any) -> str:
    """Make a value safe to place inside one Markdown table cell."""
    text = str(value).strip()
    return text.replace("|", "\\|").replace("\r\n", "\n").replace("\n", "<br>")


def one_line(value: Any) -> str:
    """Collapse a value onto a single line for numbered list items."""
    return " ".join(str(value).split())


_env.filters["md_cell"] = md_cell
_env.filters["one_line"] = one_line


@lru_cache(maxsize=64)
def _compile(source: str) -> Template:
    return _env.from_string(source)


def _to_context(value: Any) -> Any:
    # Models become camelCase dicts so templates use the external field names
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, mode="json")
    if isinstance(value, list | tuple):
        return [_to_context(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_context(v) for k, v in value.items()}
    return value


def build_context(
    validated_input: BaseModel, computed_fields: dict[str, Any] | None = None
) -> dict[str, Any]:
    """
    Merge validated input and computed fields into a template context.

    Computed fields shadow input fields of the same name (rated hazards
    replace the raw hazard rows, for example).
    """
    context = _to_context(validated_input)
    for key, value in (computed_fields or {}).items():
        context[key] = _to_context(value)
    return context


def bind(
    template_source: str,
    validated_input: BaseModel,
    computed_fields: dict[str, Any] | None = None,
    template_name: str | None = None,
) -> str:
    """
    Render a template against validated input plus computed fields.

    Args:
        template_source: Jinja2 template text
        validated_input: Input model that already passed its schema
        computed_fields: Derived values (risk ratings, dates, document numbers)
        template_name: Name used in error reporting

    Returns:
        Prompt text

    Raises:
        BindingError: If the template references a value the context lacks
    """
    try:
        template = _compile(template_source)
    except TemplateSyntaxError as e:
        raise BindingError(
            f"Template {template_name or '<inline>'} is invalid: {e.message}",
            template_name=template_name,
        ) from e

    context = build_context(validated_input, computed_fields)

    try:
        return template.render(context)
    except UndefinedError as e:
        raise BindingError(
            f"Template {template_name or '<inline>'} could not be bound: {e.message}",
            template_name=template_name,
            field=e.message,
        ) from e
