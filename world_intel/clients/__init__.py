"""Convenience re-exports for singleton SDK accessors."""

from .openrouter_client import get_session as get_openrouter_session  # noqa: F401

__all__ = ["get_openrouter_session"]
