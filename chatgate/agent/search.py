"""
Web search via the Tavily API.

Unlike the model clients this does not catch errors: an HTTP error status, an
undecodable body or a transport failure propagates to the caller.
"""

import logging

import httpx

from chatgate.core.config import (
    SEARCH_API_TIMEOUT,
    SEARCH_DEPTH,
    SEARCH_MAX_RESULTS,
    TAVILY_SEARCH_URL,
    GatewayConfig,
)
from chatgate.core.errors import ServiceUnavailableError

logger = logging.getLogger(__name__)

NO_SEARCH_RESULTS = "No search results"


def format_results(results: list[dict] | None) -> str:
    """One "title: content" line per result, in backend order."""
    if not results:
        return NO_SEARCH_RESULTS
    lines = []
    for r in results[:SEARCH_MAX_RESULTS]:
        lines.append(f"{r.get('title')}: {r.get('content')}")
    return "\n".join(lines)


def web_search(
    query: str,
    config: GatewayConfig,
    transport: httpx.BaseTransport | None = None,
) -> str:
    """Search the web for `query` and return a digest of the top results."""
    logger.info("[search] IN  query_len=%d", len(query or ""))
    if not config.tavily_api_key:
        raise ServiceUnavailableError("TAVILY_API_KEY is not set")
    payload = {
        "api_key": config.tavily_api_key,
        "query": query,
        "search_depth": SEARCH_DEPTH,
        "max_results": SEARCH_MAX_RESULTS,
    }
    with httpx.Client(timeout=SEARCH_API_TIMEOUT, transport=transport) as client:
        response = client.post(TAVILY_SEARCH_URL, json=payload, headers={"Content-Type": "application/json"})
    response.raise_for_status()
    data = response.json()
    results = data.get("results") if isinstance(data, dict) else None
    logger.info("[search] OUT results=%d", len(results or []))
    return format_results(results)
