from __future__ import annotations
from typing import Dict
from time import perf_counter
from contextlib import contextmanager
from threading import Lock
from collections import deque
import math

# In-memory latency samples per label (e.g. "db.schools.fetch_all").
# Only the last N samples are kept; enough for avg/p95 on /metrics.
_MAX_SAMPLES = 500
_store: Dict[str, deque] = {}
_lock = Lock()


def record_latency(label: str, seconds: float) -> None:
    with _lock:
        dq = _store.setdefault(label, deque(maxlen=_MAX_SAMPLES))
        dq.append(seconds)


def get_stats(label: str) -> Dict[str, float]:
    with _lock:
        samples = list(_store.get(label, ()))
    if not samples:
        return {"count": 0, "avg": 0.0, "p95": 0.0, "min": 0.0, "max": 0.0}
    arr = sorted(samples)
    count = len(arr)
    p95_idx = max(0, math.ceil(0.95 * count) - 1)
    return {
        "count": count,
        "avg": sum(arr) / count,
        "p95": arr[p95_idx],
        "min": arr[0],
        "max": arr[-1],
    }


def snapshot() -> Dict[str, Dict[str, float]]:
    """Stats for every label seen so far."""
    with _lock:
        labels = sorted(_store)
    return {label: get_stats(label) for label in labels}


def reset() -> None:
    with _lock:
        _store.clear()


@contextmanager
def time_block(label: str):
    """
    Usage:
        with time_block("db.schools.fetch_all"):
            run_query()
    """
    start = perf_counter()
    try:
        yield
    finally:
        record_latency(label, perf_counter() - start)
