"""Automated opponent: capture-biased move policy.

The Qt-paced driver lives in :mod:`callchess.engine.session` and is not
imported here, so the policy stays usable without a Qt event loop.
"""

from callchess.engine.random_policy import (
    CAPTURE_BIAS,
    CaptureBiasedEngine,
    select_automated_move,
)
from callchess.engine.search import IEngine, SearchResult

__all__ = [
    "CAPTURE_BIAS",
    "CaptureBiasedEngine",
    "IEngine",
    "SearchResult",
    "select_automated_move",
]
