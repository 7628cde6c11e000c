"""
LangGraph workflow: call model → (web search → re-query) or done.

The first reply is checked against the search trigger phrases. If it admits it
lacks information, the original query is searched once and the same model is
asked again with the results appended. The second reply is never re-checked.
"""

import logging
from typing import Literal, TypedDict

from langgraph.graph import END, StateGraph

from chatgate.agent.llm import ModelSelector, invoke as invoke_model
from chatgate.agent.search import web_search
from chatgate.agent.trigger import should_augment
from chatgate.core.config import GatewayConfig

logger = logging.getLogger(__name__)

SEARCH_RESULTS_HEADER = "\n\nSearch results:\n"
EMPTY_REQUERY_REPLY = "Search completed, but no additional response from model."


class AugmentState(TypedDict):
    selector: ModelSelector
    query: str
    reply: str
    search_results: str
    enriched_query: str
    final_text: str
    augmented: bool


def build_enriched_query(query: str, search_results: str) -> str:
    return f"{query}{SEARCH_RESULTS_HEADER}{search_results}"


def _route_after_model(state: AugmentState) -> Literal["web_search", "__end__"]:
    """Search only when the first reply trips a trigger phrase."""
    reply = state.get("reply")
    if should_augment(reply):
        logger.info("[graph:route_after_model] search triggered by reply_len=%d", len(reply or ""))
        return "web_search"
    return END


def build_graph(config: GatewayConfig):
    """
    Build and compile the augmentation graph for one request.
    call_model → (web_search → requery_model) → END.
    """

    def _call_model(state: AugmentState) -> dict:
        query = state.get("query") or ""
        logger.info("[graph:call_model] IN  model=%s query_len=%d", state["selector"].value, len(query))
        reply = invoke_model(state["selector"], query, config)
        logger.info("[graph:call_model] OUT reply_len=%d", len(reply or ""))
        return {"reply": reply or "", "final_text": reply or ""}

    def _web_search(state: AugmentState) -> dict:
        # Search term is the original query, not the reply.
        query = state.get("query") or ""
        results = web_search(query, config)
        logger.info("[graph:web_search] OUT results_len=%d", len(results))
        return {"search_results": results, "augmented": True}

    def _requery_model(state: AugmentState) -> dict:
        enriched = build_enriched_query(state.get("query") or "", state.get("search_results") or "")
        logger.info("[graph:requery_model] IN  enriched_len=%d", len(enriched))
        reply = invoke_model(state["selector"], enriched, config)
        logger.info("[graph:requery_model] OUT reply_len=%d", len(reply or ""))
        return {"enriched_query": enriched, "final_text": reply or EMPTY_REQUERY_REPLY}

    graph = StateGraph(AugmentState)

    graph.add_node("call_model", _call_model)
    graph.add_node("web_search", _web_search)
    graph.add_node("requery_model", _requery_model)

    graph.set_entry_point("call_model")
    graph.add_conditional_edges(
        "call_model",
        _route_after_model,
        {"web_search": "web_search", END: END},
    )
    graph.add_edge("web_search", "requery_model")
    graph.add_edge("requery_model", END)

    return graph.compile()


def run_augmented_query(selector: ModelSelector, query: str, config: GatewayConfig) -> dict:
    """
    Run the workflow for an already validated, escaped query.
    Returns answer (unescaped final text), augmented, and search_results.
    """
    logger.info("[run_augmented_query] START model=%s query_len=%d", selector.value, len(query))
    initial: AugmentState = {
        "selector": selector,
        "query": query,
        "reply": "",
        "search_results": "",
        "enriched_query": "",
        "final_text": "",
        "augmented": False,
    }
    graph = build_graph(config)
    final = graph.invoke(initial)
    answer = final.get("final_text") or ""
    augmented = bool(final.get("augmented"))
    logger.info("[run_augmented_query] END augmented=%s answer_len=%d", augmented, len(answer))
    return {
        "answer": answer,
        "augmented": augmented,
        "search_results": final.get("search_results") or "",
    }
