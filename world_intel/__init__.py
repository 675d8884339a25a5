"""Top-level package for the world-intel project.

Exposes the two analytical entry points plus the refresh workflow so callers
can do `from world_intel import detect_anomalies, generate_brief`.
"""

from importlib import metadata as _metadata

try:
    __version__: str = _metadata.version("world-intel")
except _metadata.PackageNotFoundError:  # pragma: no cover – running from source
    __version__ = "0.0.0"

from .services.anomaly import detect_anomalies, summarize_signals  # convenience re-export
from .services.briefs import BriefConfig, generate_brief  # convenience re-export
from .workflows.intel_cycle import run  # convenience re-export

__all__ = [
    "detect_anomalies",
    "summarize_signals",
    "generate_brief",
    "BriefConfig",
    "run",
    "__version__",
]
