"""Centralised configuration for world_intel.

Environment variables are loaded once and all related constants are
grouped by service for easier maintenance. The brief cascade never reads
these directly; they only seed :meth:`BriefConfig.from_env`.
"""

from __future__ import annotations

import os
from typing import Tuple

from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Load environment variables from `.env` (if present)
# ---------------------------------------------------------------------------
load_dotenv()

# ---------------------------------------------------------------------------
# Core credentials (from environment)
# ---------------------------------------------------------------------------
OPENROUTER_API_KEY: str | None = os.getenv("OPENROUTER_API_KEY")

# ---------------------------------------------------------------------------
# OpenRouter request settings
# ---------------------------------------------------------------------------
OPENROUTER_URL: str = "https://openrouter.ai/api/v1/chat/completions"
# Optional attribution headers shown on the OpenRouter dashboard
APP_REFERER: str | None = os.getenv("APP_REFERER")
APP_TITLE: str = os.getenv("APP_TITLE", "world-intel")

# ---------------------------------------------------------------------------
# Brief cascade defaults
# Ordered by preference, smallest reliable free models first.
# ---------------------------------------------------------------------------
MODEL_CASCADE: Tuple[str, ...] = (
    "google/gemma-3-12b-it:free",
    "openai/gpt-oss-20b:free",
    "openai/gpt-oss-120b:free",
    "meta-llama/llama-3.2-3b-instruct:free",
    "meta-llama/llama-3.3-70b-instruct:free",
)
BRIEF_TOP_N: int = 8
BRIEF_DELAY_SECONDS: float = 2.0
BRIEF_MAX_TOKENS: int = 160
BRIEF_TEMPERATURE: float = 0.4
BRIEF_REQUEST_TIMEOUT: float = 30.0

# ---------------------------------------------------------------------------
# Re-exported names
# ---------------------------------------------------------------------------
__all__ = [
    # credentials
    "OPENROUTER_API_KEY",
    # request
    "OPENROUTER_URL",
    "APP_REFERER",
    "APP_TITLE",
    # cascade
    "MODEL_CASCADE",
    "BRIEF_TOP_N",
    "BRIEF_DELAY_SECONDS",
    "BRIEF_MAX_TOKENS",
    "BRIEF_TEMPERATURE",
    "BRIEF_REQUEST_TIMEOUT",
]
