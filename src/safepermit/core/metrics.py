from __future__ import annotations

import threading
from collections import Counter, deque
from datetime import UTC, datetime
from typing import Any


class SubmissionMetrics:
    """In-process counters for the submission and query paths.

    Constructed by the application and handed to the services that record
    into it. While stopped every call is a no-op, so recording can never
    hold up or break a request.
    """

    def __init__(self, window: int = 500) -> None:
        self._lock = threading.Lock()
        self._counters: Counter[str] = Counter()
        self._durations: dict[str, deque[float]] = {}
        self._window = window
        self._started_at: datetime | None = None

    @property
    def running(self) -> bool:
        return self._started_at is not None

    def start(self) -> None:
        with self._lock:
            if self._started_at is None:
                self._started_at = datetime.now(UTC)

    def stop(self) -> None:
        with self._lock:
            self._started_at = None
            self._counters.clear()
            self._durations.clear()

    def increment(self, name: str, amount: int = 1) -> None:
        if not self.running:
            return
        with self._lock:
            self._counters[name] += amount

    def observe(self, name: str, seconds: float) -> None:
        if not self.running:
            return
        with self._lock:
            bucket = self._durations.setdefault(name, deque(maxlen=self._window))
            bucket.append(seconds)

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            durations = {
                name: {
                    "count": len(values),
                    "avg_ms": round(sum(values) / len(values) * 1000, 2) if values else 0.0,
                    "max_ms": round(max(values) * 1000, 2) if values else 0.0,
                }
                for name, values in self._durations.items()
            }
            return {
                "running": self._started_at is not None,
                "started_at": self._started_at.isoformat() if self._started_at else None,
                "counters": dict(self._counters),
                "durations": durations,
            }
