"""
Frame data lookup: resolves loosely typed move names to canonical moves.
"""
from .config import FrameDataConfig
from .service import FrameDataService

__all__ = [
    "FrameDataConfig",
    "FrameDataService",
]
