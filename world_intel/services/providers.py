"""Per-model message-shape capabilities.

Some upstream providers reject a distinct ``system`` role message (Gemma
on OpenRouter answers 400 "Provider returned error"). Those models are
listed here; for them the system instruction is folded into the first user
message. Adding a model is a one-line change to ``_CAPABILITIES``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

Message = Dict[str, str]


@dataclass(frozen=True, slots=True)
class ProviderCapabilities:
    supports_system_role: bool = True


_DEFAULT = ProviderCapabilities()

_CAPABILITIES: Dict[str, ProviderCapabilities] = {
    "google/gemma-3-12b-it:free": ProviderCapabilities(supports_system_role=False),
    "google/gemma-3-27b-it:free": ProviderCapabilities(supports_system_role=False),
}


def capabilities_for(model: str) -> ProviderCapabilities:
    """Return the capability descriptor for *model* (permissive by default)."""
    return _CAPABILITIES.get(model, _DEFAULT)


def normalize_messages(model: str, messages: Sequence[Message]) -> List[Message]:
    """Return *messages* in a shape *model* accepts.

    The input is never mutated. Message order is kept; only the system
    message is removed and its text prepended to the first user message.
    """
    if capabilities_for(model).supports_system_role:
        return [dict(m) for m in messages]

    system = next((m for m in messages if m["role"] == "system"), None)
    if system is None:
        return [dict(m) for m in messages]

    rest = [dict(m) for m in messages if m is not system]
    for message in rest:
        if message["role"] == "user":
            message["content"] = f"{system['content']}\n\n{message['content']}"
            return rest

    # No user turn to merge into: send the instruction as one
    return [{"role": "user", "content": system["content"]}, *rest]

__all__ = ["Message", "ProviderCapabilities", "capabilities_for", "normalize_messages"]
