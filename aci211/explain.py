# aci211/explain.py
"""
Plain-language explanations of individual calculation steps.

The calculator never calls this module; front ends use it on demand. Any
failure degrades to a short static message so the caller never has to
handle an exception.
"""
from __future__ import annotations

import logging
from typing import Optional

import anthropic

from .config import EXPLAIN_API_KEY, EXPLAIN_MAX_TOKENS, EXPLAIN_MODEL, EXPLAIN_TIMEOUT_S
from .models import MixInputs, MixStep

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "Explanation unavailable: no API key is configured for the explanation service."
ERROR_MESSAGE = "Error fetching AI explanation. Please check your connectivity."
EMPTY_MESSAGE = "No explanation available."

PROMPT_TEMPLATE = """
You are a senior Civil Engineering materials expert.
Explain Step {step_id}: "{title}" in an ACI 211.1 Concrete Mix Design.

Current Mix Design context:
- Target Strength: {strength:g} psi
- Concrete Type: {concrete_type}
- Exposure: {exposure}
- Step Result Value: {value}
- Step Calculation: {calculation}

Rules:
1. Reference ACI 211.1 principles clearly.
2. Use professional yet educational language suitable for engineering students.
3. Explain the "why" behind this specific value (e.g., how w/c impacts strength or how FM impacts workability).
4. Keep the explanation concise (max 3-4 sentences).
5. Be precise about terminology.
"""


def build_prompt(step: MixStep, inputs: MixInputs) -> str:
    return PROMPT_TEMPLATE.format(
        step_id=step.id,
        title=step.title,
        strength=inputs.strength,
        concrete_type=inputs.concrete_type.value,
        exposure=inputs.exposure.value,
        value=step.value,
        calculation=step.calculation,
    )


def _init_client() -> Optional[anthropic.Anthropic]:
    if not EXPLAIN_API_KEY:
        return None
    return anthropic.Anthropic(api_key=EXPLAIN_API_KEY, timeout=EXPLAIN_TIMEOUT_S, max_retries=0)


def explain_step(step: MixStep, inputs: MixInputs, client=None, model: str = EXPLAIN_MODEL) -> str:
    """Return a short explanation of `step`, or a fallback message on any failure."""
    if client is None:
        client = _init_client()
    if client is None:
        return UNAVAILABLE_MESSAGE

    try:
        response = client.messages.create(
            model=model,
            max_tokens=EXPLAIN_MAX_TOKENS,
            messages=[{"role": "user", "content": build_prompt(step, inputs)}],
        )
        text = "".join(getattr(block, "text", "") for block in response.content).strip()
    except Exception as e:
        logger.warning("Explanation request for step %d failed: %s", step.id, e)
        return ERROR_MESSAGE

    return text or EMPTY_MESSAGE
