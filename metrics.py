"""Thread-safe in-memory counters for served connections."""

from __future__ import annotations

import threading
from collections import Counter

LATENCY_BUCKETS_MS = (1, 5, 10, 25, 50, 100, 250, 1000)


class MetricsRegistry:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._connections_opened = 0
        self._connections_closed = 0
        self._total_responses = 0
        self._status_counts: Counter[str] = Counter()
        self._latency_buckets: Counter[str] = Counter()
        self._bytes_sent_total = 0
        self._aborted_responses = 0
        self._socket_errors_by_type: Counter[str] = Counter()

    def connection_opened(self) -> None:
        with self._lock:
            self._connections_opened += 1

    def connection_closed(self) -> None:
        with self._lock:
            self._connections_closed += 1

    def record_response(self, status_code: int, duration_ms: float, bytes_sent: int) -> None:
        with self._lock:
            self._total_responses += 1
            self._status_counts[str(status_code)] += 1
            self._bytes_sent_total += bytes_sent
            self._latency_buckets[self._bucket_label(duration_ms)] += 1

    def record_aborted_response(self) -> None:
        with self._lock:
            self._aborted_responses += 1

    def record_socket_error(self, error_type: str) -> None:
        with self._lock:
            self._socket_errors_by_type[error_type] += 1

    def snapshot(self) -> dict[str, object]:
        with self._lock:
            return {
                "connections_opened": self._connections_opened,
                "connections_closed": self._connections_closed,
                "open_connections": max(0, self._connections_opened - self._connections_closed),
                "total_responses": self._total_responses,
                "status_counts": dict(self._status_counts),
                "latency_buckets_ms": dict(self._latency_buckets),
                "bytes_sent_total": self._bytes_sent_total,
                "aborted_responses": self._aborted_responses,
                "socket_errors_by_type": dict(self._socket_errors_by_type),
            }

    def _bucket_label(self, duration_ms: float) -> str:
        for limit in LATENCY_BUCKETS_MS:
            if duration_ms <= limit:
                return f"<= {limit}ms"
        return f"> {LATENCY_BUCKETS_MS[-1]}ms"
