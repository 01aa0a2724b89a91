"""Quote engine metrics: in-process counters exposed at /metrics."""
import threading
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List


class QuoteMetrics:
    """
    Thread-safe in-memory tracker for quote-level metrics.

    Tracks:
    - Quotes produced, and how many were degraded (partial / unavailable catalog)
    - Topology mix of recommendations
    - Average quote duration and per-stage averages (catalog fetch plus each pipeline stage)
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._quotes: int = 0
        self._total_duration_ms: float = 0.0
        self._by_topology: Dict[str, int] = {}
        self._by_catalog_status: Dict[str, int] = {}
        self._stage_durations: Dict[str, List[float]] = {}

    # ------------------------------------------------------------------
    # Public write API
    # ------------------------------------------------------------------

    def record_quote(self, topology: str, duration_ms: float, catalog_status: str) -> None:
        """Call once per quote returned to a caller."""
        with self._lock:
            self._quotes += 1
            self._total_duration_ms += duration_ms
            self._by_topology[topology] = self._by_topology.get(topology, 0) + 1
            self._by_catalog_status[catalog_status] = self._by_catalog_status.get(catalog_status, 0) + 1

    def record_stage_duration(self, stage: str, duration_ms: float) -> None:
        with self._lock:
            self._stage_durations.setdefault(stage, []).append(duration_ms)

    # ------------------------------------------------------------------
    # Public read API
    # ------------------------------------------------------------------

    def get_metrics(self) -> Dict[str, Any]:
        with self._lock:
            avg = round(self._total_duration_ms / self._quotes, 2) if self._quotes else 0.0
            stage_avgs = {
                stage: round(sum(d) / len(d), 2)
                for stage, d in self._stage_durations.items()
                if d
            }
            degraded = sum(
                count for status, count in self._by_catalog_status.items() if status != "ok"
            )
            return {
                "quotes_processed": self._quotes,
                "degraded_quotes": degraded,
                "avg_quote_duration_ms": avg,
                "quotes_by_topology": dict(self._by_topology),
                "quotes_by_catalog_status": dict(self._by_catalog_status),
                "stage_avg_durations_ms": stage_avgs,
            }

    def reset(self) -> None:
        """Reset all counters (useful in tests)."""
        with self._lock:
            self._quotes = 0
            self._total_duration_ms = 0.0
            self._by_topology.clear()
            self._by_catalog_status.clear()
            self._stage_durations.clear()


# Module-level singleton
metrics = QuoteMetrics()


@contextmanager
def stage_timer(stage: str) -> Iterator[None]:
    """
    Record the wall time of the enclosed block as one ``stage`` sample.

    Usage::

        with stage_timer("sizing"):
            sizing = sizing_engine.size(...)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        metrics.record_stage_duration(stage, round((time.perf_counter() - start) * 1000, 2))
