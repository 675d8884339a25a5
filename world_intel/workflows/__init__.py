"""End-to-end workflows built on top of the service layer."""

from .intel_cycle import IntelSnapshot, run  # noqa: F401

__all__ = ["IntelSnapshot", "run"]
