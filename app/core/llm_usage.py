"""LLM usage logging for token/cost tracking."""

import logging

from app.core.logging import get_logger, log_with_context

logger = get_logger(__name__)

# Pricing per 1M tokens: (input, output)
MODEL_PRICING: dict[str, tuple[float, float]] = {
    # Anthropic
    "claude-opus-4-5-20251101": (15.0, 75.0),
    "claude-sonnet-4-5-20250929": (3.0, 15.0),
    "claude-sonnet-4-20250514": (3.0, 15.0),
    "claude-haiku-4-5-20251001": (0.80, 4.0),
    "claude-3-5-haiku-20241022": (0.80, 4.0),
    # OpenAI
    "gpt-4o": (2.50, 10.0),
    "gpt-4.1-mini": (0.40, 1.60),
    "gpt-4o-mini": (0.15, 0.60),
}


def estimate_cost(model: str, tokens_input: int, tokens_output: int) -> float:
    """Estimate cost in USD based on model pricing."""
    pricing = MODEL_PRICING.get(model)
    if not pricing:
        # Dated variants price as their longest known prefix
        prefixes = [key for key in MODEL_PRICING if model.startswith(key)]
        if prefixes:
            pricing = MODEL_PRICING[max(prefixes, key=len)]
    if not pricing:
        return 0.0

    input_rate, output_rate = pricing
    cost = (tokens_input * input_rate / 1_000_000) + (tokens_output * output_rate / 1_000_000)
    return round(cost, 6)


def log_llm_usage(
    flow: str,
    model: str,
    provider: str,
    tokens_input: int,
    tokens_output: int,
    duration_ms: int = 0,
    run_id: str | None = None,
) -> None:
    """Log one completion call's token usage and estimated cost."""
    context = {"run_id": run_id} if run_id else {}
    log_with_context(
        logger,
        logging.INFO,
        f"LLM usage: {flow} model={model} tokens={tokens_input}+{tokens_output}",
        flow=flow,
        provider=provider,
        model=model,
        tokens_input=tokens_input,
        tokens_output=tokens_output,
        estimated_cost_usd=estimate_cost(model, tokens_input, tokens_output),
        duration_ms=duration_ms,
        **context,
    )
