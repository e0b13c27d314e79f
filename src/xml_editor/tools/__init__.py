"""Developer tools for the XML editor."""

from .profiling import OperationProfile, OperationProfiler, ProfileContext

__all__ = [
    "OperationProfile",
    "OperationProfiler",
    "ProfileContext",
]
