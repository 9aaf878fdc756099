"""In-process metrics for SearchBrief requests, searches and summaries.

Kept dependency-free so the service runs without a Prometheus client.
"""

from __future__ import annotations

from collections import defaultdict, deque
from threading import Lock


def _percentile(sorted_values: list[float], p: float) -> float:
    if not sorted_values:
        return 0.0
    idx = int((len(sorted_values) - 1) * p)
    return round(sorted_values[idx], 2)


class InMemoryMetrics:
    def __init__(self, latency_window: int = 2000) -> None:
        self._lock = Lock()
        self._latency_window = latency_window
        self.reset()

    def reset(self) -> None:
        with self._lock:
            self._requests_total = 0
            self._status_counts: dict[str, int] = defaultdict(int)
            self._path_counts: dict[str, int] = defaultdict(int)
            self._latencies_ms = deque(maxlen=self._latency_window)
            self._searches: dict[str, int] = defaultdict(int)
            self._summaries_total = 0
            self._summaries_truncated = 0
            self._summary_lengths = deque(maxlen=self._latency_window)

    def observe_request(self, path: str, status_code: int, duration_ms: float) -> None:
        bucket = f"{status_code // 100}xx"
        with self._lock:
            self._requests_total += 1
            self._status_counts[bucket] += 1
            self._path_counts[path] += 1
            self._latencies_ms.append(float(duration_ms))

    def observe_search(self, provider: str, ok: bool) -> None:
        outcome = "ok" if ok else "error"
        with self._lock:
            self._searches[f"{provider}:{outcome}"] += 1

    def observe_summary(self, length: int, truncated: bool = False) -> None:
        with self._lock:
            self._summaries_total += 1
            if truncated:
                self._summaries_truncated += 1
            self._summary_lengths.append(length)

    def snapshot(self) -> dict:
        with self._lock:
            latencies = sorted(self._latencies_ms)
            lengths = list(self._summary_lengths)
            return {
                "requests_total": self._requests_total,
                "status_counts": dict(self._status_counts),
                "path_counts": dict(self._path_counts),
                "latency_ms": {
                    "samples": len(latencies),
                    "p50": _percentile(latencies, 0.50),
                    "p95": _percentile(latencies, 0.95),
                    "p99": _percentile(latencies, 0.99),
                },
                "searches": dict(self._searches),
                "summaries": {
                    "total": self._summaries_total,
                    "truncated": self._summaries_truncated,
                    "avg_length": round(sum(lengths) / len(lengths), 1) if lengths else 0.0,
                },
            }


metrics = InMemoryMetrics()
