"""
Tests for the augmentation workflow and handle_query().

Model and search calls are patched, so no backend is contacted.
"""

from unittest.mock import call, patch

import pytest

from chatgate.agent.graph import EMPTY_REQUERY_REPLY, build_enriched_query, run_augmented_query
from chatgate.agent.llm import ModelSelector
from chatgate.core.config import GatewayConfig
from chatgate.core.errors import InvalidInputError
from chatgate.services.query_service import handle_query

CONFIG = GatewayConfig(claude_api_key="c", deepseek_api_key="d", tavily_api_key="t")


def test_enriched_query_layout() -> None:
    assert build_enriched_query("q", "A: a\nB: b") == "q\n\nSearch results:\nA: a\nB: b"


def test_sufficient_reply_skips_search() -> None:
    with patch("chatgate.agent.graph.invoke_model", return_value="Paris.") as mock_model, \
            patch("chatgate.agent.graph.web_search") as mock_search:
        result = run_augmented_query(ModelSelector.DEEPSEEK, "capital of France?", CONFIG)
    assert result["answer"] == "Paris."
    assert result["augmented"] is False
    mock_model.assert_called_once_with(ModelSelector.DEEPSEEK, "capital of France?", CONFIG)
    mock_search.assert_not_called()


def test_insufficient_reply_searches_and_requeries() -> None:
    replies = ["I don't have access to real-time data", "It is sunny in Paris."]
    with patch("chatgate.agent.graph.invoke_model", side_effect=replies) as mock_model, \
            patch("chatgate.agent.graph.web_search", return_value="Weather: sunny") as mock_search:
        result = run_augmented_query(ModelSelector.CLAUDE, "weather in Paris today", CONFIG)
    mock_search.assert_called_once_with("weather in Paris today", CONFIG)
    assert mock_model.call_args_list == [
        call(ModelSelector.CLAUDE, "weather in Paris today", CONFIG),
        call(ModelSelector.CLAUDE, "weather in Paris today\n\nSearch results:\nWeather: sunny", CONFIG),
    ]
    assert result["answer"] == "It is sunny in Paris."
    assert result["augmented"] is True
    assert result["search_results"] == "Weather: sunny"


def test_no_search_results_still_requeries() -> None:
    replies = ["There is no information on that.", "Still nothing, sorry."]
    with patch("chatgate.agent.graph.invoke_model", side_effect=replies) as mock_model, \
            patch("chatgate.agent.graph.web_search", return_value="No search results"):
        result = run_augmented_query(ModelSelector.DEEPSEEK, "obscure thing", CONFIG)
    assert mock_model.call_count == 2
    assert mock_model.call_args_list[1] == call(
        ModelSelector.DEEPSEEK, "obscure thing\n\nSearch results:\nNo search results", CONFIG
    )
    assert result["answer"] == "Still nothing, sorry."


def test_empty_requery_reply_uses_fallback() -> None:
    with patch("chatgate.agent.graph.invoke_model", side_effect=["I can't find that.", ""]), \
            patch("chatgate.agent.graph.web_search", return_value="A: b"):
        result = run_augmented_query(ModelSelector.DEEPSEEK, "q", CONFIG)
    assert result["answer"] == EMPTY_REQUERY_REPLY == "Search completed, but no additional response from model."


def test_requery_is_not_checked_again() -> None:
    with patch("chatgate.agent.graph.invoke_model", side_effect=["don't know", "still don't know"]) as mock_model, \
            patch("chatgate.agent.graph.web_search", return_value="A: b") as mock_search:
        result = run_augmented_query(ModelSelector.CLAUDE, "q", CONFIG)
    assert mock_model.call_count == 2
    assert mock_search.call_count == 1
    assert result["answer"] == "still don't know"


def test_empty_first_reply_is_empty_answer() -> None:
    with patch("chatgate.agent.graph.invoke_model", return_value=""), \
            patch("chatgate.agent.graph.web_search") as mock_search:
        result = run_augmented_query(ModelSelector.CLAUDE, "q", CONFIG)
    assert result["answer"] == ""
    mock_search.assert_not_called()


def test_diagnostic_reply_is_returned_as_answer() -> None:
    # Missing key: the real client answers with a diagnostic; no search is triggered
    result = run_augmented_query(ModelSelector.CLAUDE, "q", GatewayConfig())
    assert result["answer"] == "Claude API key missing or undefined"


def test_search_failure_propagates() -> None:
    with patch("chatgate.agent.graph.invoke_model", return_value="unable to access the web"), \
            patch("chatgate.agent.graph.web_search", side_effect=RuntimeError("search down")):
        with pytest.raises(RuntimeError, match="search down"):
            run_augmented_query(ModelSelector.CLAUDE, "q", CONFIG)


class TestHandleQuery:
    """Tests for handle_query()."""

    def test_unknown_model_makes_no_calls(self) -> None:
        with patch("chatgate.services.query_service.run_augmented_query") as mock_run:
            assert handle_query("unknown", "hello", CONFIG) == "Unknown model selected"
        mock_run.assert_not_called()

    def test_query_is_escaped_before_model_and_output_escaped_after(self) -> None:
        with patch("chatgate.agent.graph.invoke_model", side_effect=lambda sel, prompt, cfg: f"You said {prompt}") as mock_model:
            out = handle_query("claude", "<script>alert(1)</script>", CONFIG)
        mock_model.assert_called_once_with(
            ModelSelector.CLAUDE, "&lt;script&gt;alert(1)&lt;/script&gt;", CONFIG
        )
        assert "<script>" not in out
        assert out == "You said &amp;lt;script&amp;gt;alert(1)&amp;lt;/script&amp;gt;"

    def test_model_value_is_stripped(self) -> None:
        with patch("chatgate.services.query_service.run_augmented_query", return_value={"answer": "ok"}) as mock_run:
            assert handle_query("  deepseek\n", "hi", CONFIG) == "ok"
        mock_run.assert_called_once_with(ModelSelector.DEEPSEEK, "hi", CONFIG)

    @pytest.mark.parametrize("model, query", [("claude", ""), ("", "hi"), ("claude", "a" * 5001)])
    def test_invalid_input(self, model: str, query: str) -> None:
        with patch("chatgate.services.query_service.run_augmented_query") as mock_run:
            with pytest.raises(InvalidInputError):
                handle_query(model, query, CONFIG)
        mock_run.assert_not_called()
