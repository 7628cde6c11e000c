"""
Query handling: validate, escape, pick the model, run the augmentation workflow.

Called by the API; no HTTP types here. Model-path failures arrive as reply text,
so the only exceptions that leave handle_query are InvalidInputError and
failures from the search step.
"""

import logging

from chatgate.agent.graph import run_augmented_query
from chatgate.agent.llm import UNKNOWN_MODEL_REPLY, ModelSelector
from chatgate.core.config import GatewayConfig
from chatgate.services.sanitizer import escape_html, validate_query

logger = logging.getLogger(__name__)


def handle_query(model: str, raw_query: str, config: GatewayConfig) -> str:
    """Return the escaped text to send back for one form submission."""
    selected = validate_query(model, raw_query)
    query = escape_html(raw_query)
    selector = ModelSelector.parse(selected)
    if selector is None:
        logger.info("[query_service] unknown model: %r", selected)
        return escape_html(UNKNOWN_MODEL_REPLY)
    result = run_augmented_query(selector, query, config)
    return escape_html(result["answer"])
