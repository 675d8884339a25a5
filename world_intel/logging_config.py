"""Centralised logging configuration.

Importing this module sets the default logging format/level. The level can
be raised or lowered with ``WORLD_INTEL_LOG_LEVEL`` (e.g. ``DEBUG`` to see
which domains the detector skipped). Other modules should simply import
`logging` and call `logging.getLogger(__name__)`.
"""

import logging
import os

logging.basicConfig(
    level=os.getenv("WORLD_INTEL_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

__all__ = ["logging"]
