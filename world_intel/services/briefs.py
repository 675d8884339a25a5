"""Situation brief synthesis via an OpenRouter model cascade.

Strategy to stay within free-tier rate limits:

* payload trimmed to the top events (title + severity + location only)
* fixed delay between model attempts, one request per model
* the cascade stops on the first success, on an auth failure, or on an
  empty response
* a deterministic local summary when no model produced a brief

:func:`generate_brief` never raises; every failure path ends in a
:class:`BriefResult` with provenance ``local``.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import requests

from ..config import (
    APP_REFERER,
    APP_TITLE,
    BRIEF_DELAY_SECONDS,
    BRIEF_MAX_TOKENS,
    BRIEF_REQUEST_TIMEOUT,
    BRIEF_TEMPERATURE,
    BRIEF_TOP_N,
    MODEL_CASCADE,
    OPENROUTER_API_KEY,
    OPENROUTER_URL,
)
from ..clients.openrouter_client import get_session
from ..models.brief import BriefResult, BriefSource
from ..models.event import Event, Severity, count_by_domain
from ..utils.datetime_utils import as_utc
from ..utils.text_cleaning import sanitize_llm_text
from .providers import Message, normalize_messages

logger = logging.getLogger(__name__)

NO_KEY_MESSAGE: str = (
    "Add OPENROUTER_API_KEY to your environment to enable AI briefs. "
    "Get a free key at openrouter.ai"
)
NO_EVENTS_MESSAGE: str = "No active events to summarise."

SYSTEM_PROMPT: str = (
    "You are a concise global intelligence analyst. "
    "Summarize current events in 3-4 sentences. "
    "Focus on significant patterns, geographic concentrations, and what warrants monitoring. "
    "Be factual and direct. No bullet points."
)

# local summary names at most this many critical/high events
URGENT_LIMIT: int = 3


@dataclass(frozen=True, slots=True)
class BriefConfig:
    """Call-time configuration of the cascade."""

    models: Tuple[str, ...] = MODEL_CASCADE
    api_key: Optional[str] = None
    delay_seconds: float = BRIEF_DELAY_SECONDS
    top_n: int = BRIEF_TOP_N
    max_tokens: int = BRIEF_MAX_TOKENS
    temperature: float = BRIEF_TEMPERATURE
    url: str = OPENROUTER_URL
    timeout: float = BRIEF_REQUEST_TIMEOUT

    @classmethod
    def from_env(cls) -> "BriefConfig":
        return cls(api_key=OPENROUTER_API_KEY)


class AttemptOutcome(str, Enum):
    SUCCESS = "success"
    RETRYABLE = "retryable"  # try the next model
    FATAL = "fatal"  # stop the cascade


@dataclass(frozen=True, slots=True)
class AttemptResult:
    outcome: AttemptOutcome
    text: str = ""
    status: Optional[int] = None
    message: str = ""


# ---------------------------------------------------------------------------
# Prompt construction
# ---------------------------------------------------------------------------

def select_top_events(events: Sequence[Event], n: int) -> List[Dict[str, str]]:
    """Top *n* events by severity then recency, projected to three fields."""
    ranked = sorted(
        events,
        key=lambda e: (e.severity.rank, as_utc(e.timestamp)),
        reverse=True,
    )
    return [
        {"title": e.title, "severity": e.severity.value, "location": e.location.label}
        for e in ranked[:n]
    ]


def build_messages(
    top_events: Sequence[Dict[str, str]], context_label: str, anomaly_context: str = ""
) -> List[Message]:
    context = context_label
    if anomaly_context:
        context = f"{context_label} Anomaly signals: {anomaly_context}"
    payload = json.dumps(list(top_events), ensure_ascii=False)
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {
            "role": "user",
            "content": f"Summarize these {len(top_events)} active events in {context}: {payload}",
        },
    ]


# ---------------------------------------------------------------------------
# Local fallback summary
# ---------------------------------------------------------------------------

def local_summary(events: Sequence[Event]) -> str:
    """Plain-text summary of *events* computed without any network call."""
    if not events:
        return NO_EVENTS_MESSAGE

    counts = sorted(count_by_domain(events).items(), key=lambda kv: kv[1], reverse=True)
    domain_line = ", ".join(f"{n} {domain.value}" for domain, n in counts)

    urgent = sorted(
        (e for e in events if e.severity in (Severity.CRITICAL, Severity.HIGH)),
        key=lambda e: e.severity.rank,
        reverse=True,
    )[:URGENT_LIMIT]

    lines = [f"{len(events)} active events across {domain_line}."]
    if urgent:
        lines.append(
            "Most significant: "
            + "; ".join(f"{e.title} ({e.location.label})" for e in urgent)
            + "."
        )
    return " ".join(lines)


# ---------------------------------------------------------------------------
# Single-model attempt
# ---------------------------------------------------------------------------

def _error_message(data: Dict[str, Any], status: int) -> str:
    error = data.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if isinstance(error, str) and error:
        return error
    return f"HTTP {status}"


def _message_content(data: Dict[str, Any]) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""
    return content if isinstance(content, str) else ""


def try_model(model: str, messages: Sequence[Message], cfg: BriefConfig) -> AttemptResult:
    """Issue exactly one request to *model* and classify the response.

    * 401 / 403 – bad key, the same key fails everywhere → ``FATAL``
    * 429 – rate-limited / at capacity → ``RETRYABLE``
    * any other bad status, error payload or transport error → ``RETRYABLE``
    * success with empty content → ``FATAL``
    * success with text → ``SUCCESS``
    """
    headers = {
        "Authorization": f"Bearer {cfg.api_key}",
        "X-Title": APP_TITLE,
        "Content-Type": "application/json",
    }
    if APP_REFERER:
        headers["HTTP-Referer"] = APP_REFERER

    body = {
        "model": model,
        "messages": normalize_messages(model, messages),
        "max_tokens": cfg.max_tokens,
        "temperature": cfg.temperature,
    }

    try:
        response = get_session().post(cfg.url, headers=headers, json=body, timeout=cfg.timeout)
    except requests.RequestException as exc:
        logger.warning("%s request failed (%s), trying next model…", model, exc)
        return AttemptResult(AttemptOutcome.RETRYABLE, message=str(exc))

    status = response.status_code
    try:
        data = response.json()
        valid_json = isinstance(data, dict)
    except ValueError:
        valid_json = False
    if not valid_json:
        data = {}

    if status in (401, 403):
        message = _error_message(data, status)
        logger.error("%s auth error (stopping cascade): %s", model, message)
        return AttemptResult(AttemptOutcome.FATAL, status=status, message=message)

    if status == 429:
        logger.warning("%s rate-limited (429), trying next model…", model)
        return AttemptResult(AttemptOutcome.RETRYABLE, status=status, message="rate-limited")

    if not 200 <= status < 300 or data.get("error"):
        message = _error_message(data, status)
        logger.warning("%s failed (%s: %s), trying next model…", model, status, message)
        return AttemptResult(AttemptOutcome.RETRYABLE, status=status, message=message)

    if not valid_json:
        logger.warning("%s returned a non-JSON body (%s), trying next model…", model, status)
        return AttemptResult(AttemptOutcome.RETRYABLE, status=status, message="invalid JSON body")

    text = sanitize_llm_text(_message_content(data))
    if not text:
        logger.error("%s returned empty content", model)
        return AttemptResult(AttemptOutcome.FATAL, status=status, message="empty response")

    return AttemptResult(AttemptOutcome.SUCCESS, text=text, status=status)


# ---------------------------------------------------------------------------
# Cascade
# ---------------------------------------------------------------------------

def _pause(
    seconds: float,
    cancel_event: Optional[threading.Event],
    sleep: Optional[Callable[[float], None]],
) -> None:
    if sleep is not None:
        sleep(seconds)
    elif cancel_event is not None:
        cancel_event.wait(seconds)
    else:
        time.sleep(seconds)


def _cancelled(cancel_event: Optional[threading.Event]) -> bool:
    return cancel_event is not None and cancel_event.is_set()


def generate_brief(
    events: Sequence[Event],
    context_label: str = "Global",
    anomaly_context: str = "",
    *,
    config: Optional[BriefConfig] = None,
    cancel_event: Optional[threading.Event] = None,
    sleep: Optional[Callable[[float], None]] = None,
) -> BriefResult:
    """Generate a brief summarising the top *events*.

    Parameters
    ----------
    events
        Full event snapshot; only the top ``config.top_n`` reach the provider.
    context_label
        Region or scope of the snapshot, e.g. ``"Global"``.
    anomaly_context
        Optional anomaly summary (see :func:`summarize_signals`) appended to
        the prompt context.
    config
        Cascade settings; defaults to :meth:`BriefConfig.from_env`.
    cancel_event
        Checked before each attempt; setting it also cuts the inter-attempt
        delay short. An in-flight request is always allowed to finish.
    sleep
        Replacement for the inter-attempt delay, mainly for tests.
    """
    cfg = config if config is not None else BriefConfig.from_env()

    if not cfg.api_key or not cfg.api_key.strip():
        return BriefResult(NO_KEY_MESSAGE, BriefSource.LOCAL)

    events = list(events)
    messages = build_messages(select_top_events(events, cfg.top_n), context_label, anomaly_context)

    for index, model in enumerate(cfg.models):
        if index > 0:
            _pause(cfg.delay_seconds, cancel_event, sleep)
        if _cancelled(cancel_event):
            logger.info("Brief cascade cancelled before %s, using local summary", model)
            return BriefResult(local_summary(events), BriefSource.LOCAL)

        result = try_model(model, messages, cfg)
        if result.outcome is AttemptOutcome.SUCCESS:
            if index > 0:
                logger.info("Used fallback model: %s", model)
            return BriefResult(result.text, BriefSource.AI)
        if result.outcome is AttemptOutcome.FATAL:
            break

    logger.warning("All AI models unavailable, using local summary")
    return BriefResult(local_summary(events), BriefSource.LOCAL)

__all__ = [
    "BriefConfig",
    "AttemptOutcome",
    "AttemptResult",
    "NO_KEY_MESSAGE",
    "NO_EVENTS_MESSAGE",
    "select_top_events",
    "build_messages",
    "local_summary",
    "try_model",
    "generate_brief",
]
