"""
Model clients: Claude (primary) and DeepSeek (secondary).

Each client sends the prompt as the only user message and returns the reply text.
invoke() never raises: a missing key, an HTTP error status, an undecodable body,
an unexpected payload shape or a transport failure all come back as a readable
diagnostic string in place of the answer.
"""

import json
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

import httpx

from chatgate.core.config import (
    CLAUDE_API_URL,
    CLAUDE_API_VERSION,
    CLAUDE_MODEL,
    DEEPSEEK_API_URL,
    DEEPSEEK_MODEL,
    LLM_API_TIMEOUT,
    MAX_OUTPUT_TOKENS,
    GatewayConfig,
)

logger = logging.getLogger(__name__)

UNKNOWN_MODEL_REPLY = "Unknown model selected"


class ModelSelector(str, Enum):
    """Form values accepted for the `model` field."""

    CLAUDE = "claude"
    DEEPSEEK = "deepseek"

    @classmethod
    def parse(cls, value: str | None) -> "ModelSelector | None":
        """Return the selector for a form value, or None when it is not recognised."""
        try:
            return cls((value or "").strip())
        except ValueError:
            return None


def _error_message(data: Any) -> str:
    """Backend error text: error.message, then message, then the whole body."""
    if isinstance(data, dict):
        err = data.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
        if data.get("message"):
            return str(data["message"])
    return json.dumps(data, separators=(",", ":"))


class ModelClient(ABC):
    """One chat backend. Subclasses set name/url/model and implement headers and parsing."""

    name: str = ""
    url: str = ""

    def __init__(
        self,
        api_key: str,
        model: str,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self._transport = transport

    @property
    def tag(self) -> str:
        return self.name.lower()

    @abstractmethod
    def _headers(self) -> dict[str, str]:
        """Auth and content-type headers for one request."""

    @abstractmethod
    def _extract_text(self, data: Any) -> str:
        """Reply text from a decoded success body, or a "no response" diagnostic."""

    def _payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": MAX_OUTPUT_TOKENS,
        }

    def invoke(self, prompt: str) -> str:
        """Send one prompt, return the reply text or a diagnostic string."""
        logger.info("[llm:%s] IN  prompt_len=%d", self.tag, len(prompt or ""))
        if not self.api_key:
            logger.warning("[llm:%s] no API key configured", self.tag)
            return f"{self.name} API key missing or undefined"
        try:
            with httpx.Client(timeout=LLM_API_TIMEOUT, transport=self._transport) as client:
                response = client.post(self.url, json=self._payload(prompt), headers=self._headers())
            try:
                data = response.json()
            except ValueError as e:
                logger.warning("[llm:%s] JSON parse error: %s", self.tag, e)
                return f"{self.name} response JSON parse error: {e}"
            if not response.is_success:
                logger.warning("[llm:%s] API error %s: %s", self.tag, response.status_code, response.text[:200])
                return f"{self.name} API error {response.status_code}: {_error_message(data)}"
            out = self._extract_text(data)
        except Exception as e:
            logger.warning("[llm:%s] call failed: %s", self.tag, e)
            return f"{self.name} call exception: {e}"
        logger.info("[llm:%s] OUT response_len=%d", self.tag, len(out))
        return out


class ClaudeClient(ModelClient):
    """Anthropic Messages API. Reply is the first text block of `content`."""

    name = "Claude"
    url = CLAUDE_API_URL

    def __init__(self, api_key: str, model: str = CLAUDE_MODEL, transport: httpx.BaseTransport | None = None) -> None:
        super().__init__(api_key, model, transport)

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": CLAUDE_API_VERSION,
        }

    def _extract_text(self, data: Any) -> str:
        content = data.get("content") if isinstance(data, dict) else None
        if not isinstance(content, list) or not content:
            logger.info("[llm:claude] response has no content blocks")
            return "No response from Claude"
        for block in content:
            if isinstance(block, dict) and block.get("type") == "text" and isinstance(block.get("text"), str):
                return block["text"]
        logger.info("[llm:claude] no text block among %d content blocks", len(content))
        return "No response from Claude"


class DeepSeekClient(ModelClient):
    """DeepSeek chat completions. Reply is choices[0].message.content."""

    name = "DeepSeek"
    url = DEEPSEEK_API_URL

    def __init__(self, api_key: str, model: str = DEEPSEEK_MODEL, transport: httpx.BaseTransport | None = None) -> None:
        super().__init__(api_key, model, transport)

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def _extract_text(self, data: Any) -> str:
        choices = data.get("choices") if isinstance(data, dict) else None
        if not isinstance(choices, list) or not choices:
            logger.info("[llm:deepseek] response missing or empty choices")
            return "No response from DeepSeek"
        first = choices[0]
        msg = first.get("message") if isinstance(first, dict) else None
        # Empty {} or [] is a present message; null, absent, "", 0, false are missing.
        if msg is None or (not msg and not isinstance(msg, (dict, list))):
            logger.info("[llm:deepseek] first choice has no message object")
            return "Unexpected DeepSeek response format (missing message)"
        content = msg.get("content") if isinstance(msg, dict) else None
        if not isinstance(content, str):
            logger.info("[llm:deepseek] message content is not a string: %r", content)
            return "Unexpected DeepSeek response format (invalid content)"
        return content


def get_model_client(
    selector: ModelSelector | str | None,
    config: GatewayConfig,
    transport: httpx.BaseTransport | None = None,
) -> ModelClient | None:
    """Build the client for a selector, or None when the selector is not recognised."""
    if not isinstance(selector, ModelSelector):
        selector = ModelSelector.parse(selector)
    if selector is ModelSelector.CLAUDE:
        return ClaudeClient(config.claude_api_key, transport=transport)
    if selector is ModelSelector.DEEPSEEK:
        return DeepSeekClient(config.deepseek_api_key, transport=transport)
    return None


def invoke(selector: ModelSelector | str | None, prompt: str, config: GatewayConfig) -> str:
    """Send a prompt to the selected backend. Unknown selectors get the fixed sentinel reply."""
    client = get_model_client(selector, config)
    if client is None:
        logger.info("[llm] unknown model %r", selector)
        return UNKNOWN_MODEL_REPLY
    logger.info("[llm] selected model: %s", client.name)
    return client.invoke(prompt)
