"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Credentials live on GatewayConfig, which is built once per request
and passed explicitly to each component instead of being read from globals.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

# Input limits
MAX_QUERY_LENGTH: int = 5000

# Generation cap shared by both model backends
MAX_OUTPUT_TOKENS: int = 2000

# API timeouts (seconds). httpx defaults to 5s, too short for model calls.
LLM_API_TIMEOUT: float = 60.0
SEARCH_API_TIMEOUT: float = 30.0

# Anthropic Messages API (primary model)
CLAUDE_API_URL: str = "https://api.anthropic.com/v1/messages"
CLAUDE_API_VERSION: str = "2023-06-01"
CLAUDE_MODEL: str = (
    os.getenv("CLAUDE_MODEL", "claude-opus-4-1-20250805").strip()
    or "claude-opus-4-1-20250805"
)

# DeepSeek chat completions (secondary model)
DEEPSEEK_API_URL: str = "https://api.deepseek.com/v1/chat/completions"
DEEPSEEK_MODEL: str = os.getenv("DEEPSEEK_MODEL", "deepseek-chat").strip() or "deepseek-chat"

# Tavily web search
TAVILY_SEARCH_URL: str = "https://api.tavily.com/search"
SEARCH_DEPTH: str = "basic"
SEARCH_MAX_RESULTS: int = 5


@dataclass(frozen=True)
class GatewayConfig:
    """Secrets and credentials for one gateway process. Empty string means unset."""

    auth_secret: str = ""
    redirect_url: str = ""
    claude_api_key: str = ""
    deepseek_api_key: str = ""
    tavily_api_key: str = ""

    @classmethod
    def from_env(cls) -> "GatewayConfig":
        return cls(
            auth_secret=os.getenv("AUTH_SECRET", "").strip(),
            redirect_url=os.getenv("REDIRECT_URL", "").strip(),
            claude_api_key=os.getenv("CLAUDE_API_KEY", "").strip(),
            deepseek_api_key=os.getenv("DEEPSEEK_API_KEY", "").strip(),
            tavily_api_key=os.getenv("TAVILY_API_KEY", "").strip(),
        )
