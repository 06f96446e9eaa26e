"""Performance profiler for conversion operations."""

import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

import psutil


@dataclass
class ConversionMetrics:
    """Performance metrics for one conversion operation."""
    operation_name: str
    start_time: float
    end_time: float
    duration: float
    memory_start_mb: float
    memory_end_mb: float
    memory_peak_mb: float
    objects_processed: int


class ConversionProfiler:
    """
    Profiler recording duration and process memory of conversion calls.

    Memory figures are resident set sizes read through psutil. The peak of an
    operation covers its start and end, every :meth:`sample_performance` call
    made while it runs, and the peaks of operations nested inside it.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the conversion profiler.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.metrics_history: List[ConversionMetrics] = []
        self._local = threading.local()
        self._process = psutil.Process()

    @contextmanager
    def profile_operation(self, operation_name: str, objects_processed: int = 1) -> Iterator["ConversionProfiler"]:
        """
        Context manager for profiling one operation.

        Metrics are recorded even when the operation raises.

        Args:
            operation_name: Name of the operation being profiled
            objects_processed: Number of root objects the operation handles
        """
        start_time = time.perf_counter()
        start_memory = self._memory_mb()
        peaks = self._active_peaks()
        peaks.append(start_memory)
        try:
            yield self
        finally:
            end_time = time.perf_counter()
            end_memory = self._memory_mb()
            peak_memory = max(peaks.pop(), end_memory)
            if peaks:
                peaks[-1] = max(peaks[-1], peak_memory)
            metrics = ConversionMetrics(
                operation_name=operation_name,
                start_time=start_time,
                end_time=end_time,
                duration=end_time - start_time,
                memory_start_mb=start_memory,
                memory_end_mb=end_memory,
                memory_peak_mb=peak_memory,
                objects_processed=objects_processed
            )
            self.metrics_history.append(metrics)
            self.logger.info(f"Performance Summary - {operation_name}: "
                             f"{metrics.duration * 1000:.2f}ms, "
                             f"memory {start_memory:.1f} -> {end_memory:.1f} MB, "
                             f"{objects_processed} objects")

    def sample_performance(self) -> None:
        """Sample current memory usage into the peak of every active operation."""
        peaks = self._active_peaks()
        if not peaks:
            return
        current_memory = self._memory_mb()
        peaks[:] = [max(peak, current_memory) for peak in peaks]

    def get_performance_summary(self) -> Dict[str, Any]:
        """
        Get summary of all recorded metrics.

        Returns:
            Dictionary with performance summary
        """
        if not self.metrics_history:
            return {"total_operations": 0}

        total_duration = sum(m.duration for m in self.metrics_history)
        return {
            "total_operations": len(self.metrics_history),
            "total_duration": total_duration,
            "total_objects": sum(m.objects_processed for m in self.metrics_history),
            "average_duration": total_duration / len(self.metrics_history),
            "memory_peak_mb": max(m.memory_peak_mb for m in self.metrics_history),
            "operations": [
                {"name": m.operation_name, "duration": m.duration, "objects": m.objects_processed}
                for m in self.metrics_history
            ]
        }

    def _active_peaks(self) -> List[float]:
        # one stack of running peaks per thread, innermost operation last
        if not hasattr(self._local, "peaks"):
            self._local.peaks = []
        return self._local.peaks

    def _memory_mb(self) -> float:
        try:
            return self._process.memory_info().rss / 1024 / 1024
        except psutil.Error as e:
            self.logger.warning(f"Memory sampling failed: {e}")
            return 0.0
