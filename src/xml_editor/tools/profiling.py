"""Operation profiling for XML editor runs.

Measures wall time and resident memory around individual operations so the
API can attach :class:`PerformanceMetrics` to every result.
"""

import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import psutil

from xml_editor.shared import PerformanceMetrics, get_logger

MS_PER_SECOND = 1000


@dataclass
class OperationProfile:
    """Timing and memory figures for one profiled operation."""

    operation: str
    start_time: float
    end_time: float = 0.0
    memory_start: int = 0  # bytes
    memory_end: int = 0  # bytes
    input_size: int = 0  # bytes
    output_size: int = 0  # bytes

    @property
    def duration_ms(self) -> float:
        """Processing duration in milliseconds."""
        return (self.end_time - self.start_time) * MS_PER_SECOND

    @property
    def memory_delta(self) -> int:
        """Resident memory change in bytes."""
        return self.memory_end - self.memory_start

    @property
    def throughput_mb_per_s(self) -> float:
        duration_s = self.end_time - self.start_time
        if duration_s <= 0:
            return 0.0
        return (self.input_size / (1024 * 1024)) / duration_s

    def to_metrics(self) -> PerformanceMetrics:
        return PerformanceMetrics(
            processing_time_ms=self.duration_ms,
            memory_used_bytes=max(self.memory_delta, 0),
            input_bytes=self.input_size,
            output_bytes=self.output_size,
        )


class OperationProfiler:
    """Collects :class:`OperationProfile` records for editor operations.

    Examples:
        >>> profiler = OperationProfiler()
        >>> with profiler.profile("format", input_size=12) as profile:
        ...     profile.output_size = 20
        >>> profiler.profiles[0].operation
        'format'
    """

    def __init__(
        self,
        enable_memory_tracking: bool = True,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the profiler.

        Args:
            enable_memory_tracking: Whether to sample process RSS via psutil
            correlation_id: Optional correlation ID for request tracking
        """
        self.enable_memory_tracking = enable_memory_tracking
        self.profiles: List[OperationProfile] = []
        self.logger = get_logger(__name__, correlation_id, "operation_profiler")
        self._process = psutil.Process() if enable_memory_tracking else None

    def current_memory(self) -> int:
        """Resident set size of this process, or 0 when tracking is off."""
        if self._process is None:
            return 0
        return self._process.memory_info().rss

    def profile(self, operation: str, input_size: int = 0) -> "ProfileContext":
        """Context manager measuring one operation."""
        return ProfileContext(self, operation, input_size)

    def record(self, profile: OperationProfile) -> None:
        self.profiles.append(profile)
        self.logger.debug(
            "Operation profiled",
            extra={
                "operation": profile.operation,
                "duration_ms": profile.duration_ms,
                "memory_delta": profile.memory_delta,
                "input_size": profile.input_size,
                "output_size": profile.output_size,
            },
        )

    def summary(self) -> Dict[str, Dict[str, float]]:
        """Call count and average duration per operation name."""
        grouped: Dict[str, List[OperationProfile]] = {}
        for profile in self.profiles:
            grouped.setdefault(profile.operation, []).append(profile)
        return {
            name: {
                "count": len(profiles),
                "average_duration_ms": sum(p.duration_ms for p in profiles) / len(profiles),
                "total_input_bytes": sum(p.input_size for p in profiles),
            }
            for name, profiles in grouped.items()
        }

    def save_report(self, output_path: Path) -> None:
        """Write collected profiles and their summary as JSON."""
        report: Dict[str, Any] = {
            "generation_time": time.time(),
            "summary": self.summary(),
            "profiles": [
                {
                    "operation": profile.operation,
                    "duration_ms": profile.duration_ms,
                    "memory_delta": profile.memory_delta,
                    "input_size": profile.input_size,
                    "output_size": profile.output_size,
                    "throughput_mb_s": profile.throughput_mb_per_s,
                }
                for profile in self.profiles
            ],
        }
        output_path.write_text(json.dumps(report, indent=2))
        self.logger.info(
            "Saved profiling report",
            extra={"output_path": str(output_path), "profile_count": len(self.profiles)},
        )

    def clear(self) -> None:
        """Drop all stored profiles."""
        self.profiles.clear()


class ProfileContext:
    """Context manager filling in an :class:`OperationProfile`."""

    def __init__(self, profiler: OperationProfiler, operation: str, input_size: int):
        self.profiler = profiler
        self.profile = OperationProfile(
            operation=operation,
            start_time=0.0,
            input_size=input_size,
        )

    def __enter__(self) -> OperationProfile:
        self.profile.memory_start = self.profiler.current_memory()
        self.profile.start_time = time.perf_counter()
        return self.profile

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.profile.end_time = time.perf_counter()
        self.profile.memory_end = self.profiler.current_memory()
        self.profiler.record(self.profile)
