"""Minimal in-process counters and latency histograms.

No external dependencies. Thread-safe enough for single-process FastAPI usage.
Exported as a JSON snapshot on ``/metrics``.
"""

from typing import Dict, Any, Optional, Tuple, List
import threading

LabelsKey = Tuple[Tuple[str, str], ...]

DEFAULT_BINS_MS: List[int] = [50, 100, 250, 500, 1000, 2500, 5000, 10000, 30000]


def _labels_key(labels: Optional[Dict[str, str]]) -> LabelsKey:
    if not labels:
        return tuple()
    # Stable ordering
    return tuple(sorted((str(k), str(v)) for k, v in labels.items()))


class MetricsRegistry:
    def __init__(self, bins_ms: Optional[List[int]] = None):
        self.bins_ms = list(bins_ms or DEFAULT_BINS_MS)
        self._lock = threading.Lock()
        self._counters: Dict[Tuple[str, LabelsKey], int] = {}
        # (name, labels) -> {"counts": [...], "sum_ms": float}
        self._timings: Dict[Tuple[str, LabelsKey], Dict[str, Any]] = {}

    def inc(self, name: str, labels: Optional[Dict[str, str]] = None, amount: int = 1) -> None:
        key = (name, _labels_key(labels))
        with self._lock:
            self._counters[key] = self._counters.get(key, 0) + amount

    def observe(self, name: str, value_ms: float, labels: Optional[Dict[str, str]] = None) -> None:
        if value_ms is None:
            return
        idx = len(self.bins_ms)
        for i, upper in enumerate(self.bins_ms):
            if value_ms <= upper:
                idx = i
                break
        key = (name, _labels_key(labels))
        with self._lock:
            entry = self._timings.setdefault(
                key, {"counts": [0] * (len(self.bins_ms) + 1), "sum_ms": 0.0}
            )
            entry["counts"][idx] += 1
            entry["sum_ms"] += float(value_ms)

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            counters = [
                {"name": name, "labels": dict(labels), "value": value}
                for (name, labels), value in self._counters.items()
            ]
            histograms = [
                {
                    "name": name,
                    "labels": dict(labels),
                    "bins_ms": list(self.bins_ms),
                    "counts": list(entry["counts"]),
                    "sum_ms": entry["sum_ms"],
                }
                for (name, labels), entry in self._timings.items()
            ]
        return {"counters": counters, "histograms": histograms}

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
            self._timings.clear()


registry = MetricsRegistry()


def inc_counter(metric: str, labels: Optional[Dict[str, str]] = None) -> None:
    registry.inc(metric, labels)


def record_timing(metric: str, value_ms: float, labels: Optional[Dict[str, str]] = None) -> None:
    registry.observe(metric, value_ms, labels)


def get_metrics_snapshot() -> Dict[str, Any]:
    return registry.snapshot()
