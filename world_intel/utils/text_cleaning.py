"""Helpers for tidying provider text before it is shown as a brief."""

from __future__ import annotations

import re
from typing import Final

# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------

def strip_think_blocks(text: str) -> str:
    """Return the content after the closing </think> tag of a reasoning model.

    Text without any think tag is returned unchanged (stripped). An opening
    tag that is never closed means the answer was cut off mid-reasoning, so
    nothing usable is left and ``""`` is returned.
    """
    if not text:
        return ""

    marker: Final[str] = "</think>"
    idx: int = text.rfind(marker)

    if idx == -1:
        if "<think>" in text:
            return ""
        return text.strip()

    after: str = text[idx + len(marker) :]
    return after.strip()


def sanitize_llm_text(
    text: str,
    *,
    remove_citations: bool = True,
    remove_markdown: bool = True,
    single_line: bool = True,
) -> str:
    """Standardise generated brief text for display.

    Parameters
    ----------
    text : str
        Raw message content returned by the provider.
    remove_citations : bool, default True
        Remove numeric citations such as ``[1]``.
    remove_markdown : bool, default True
        Strip headings, list markers, horizontal rules and bold markers.
    single_line : bool, default True
        Collapse all whitespace runs (newlines included) to single spaces.
    """
    cleaned: str = strip_think_blocks(text)

    if remove_citations:
        cleaned = re.sub(r"\[\d+\]", "", cleaned)

    if remove_markdown:
        # Headings (# Heading, ## Heading)
        cleaned = re.sub(r"^#{1,6}\s*", "", cleaned, flags=re.MULTILINE)
        # Unordered list bullets (-, *, +)
        cleaned = re.sub(r"^\s*[-*+]\s+", "", cleaned, flags=re.MULTILINE)
        # Numbered list markers (1. 2. etc.)
        cleaned = re.sub(r"^\s*\d+\.\s+", "", cleaned, flags=re.MULTILINE)
        # Horizontal rules (--- or *** lines)
        cleaned = re.sub(r"^(?:-{3,}|\*{3,})$", "", cleaned, flags=re.MULTILINE)
        # Bold markers only; single underscores occur inside identifiers
        cleaned = re.sub(r"(\*\*|__)", "", cleaned)

    if single_line:
        cleaned = " ".join(cleaned.split())

    return cleaned.strip()

__all__ = ["strip_think_blocks", "sanitize_llm_text"]
