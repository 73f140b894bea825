# =============================================
# File: daily_concept/utils/metrics.py
# Purpose: In-process counters & histograms for /metrics
# =============================================
from __future__ import annotations
from typing import Dict, Any, List
import threading
import time

_lock = threading.Lock()

_counters: Dict[str, int] = {
    "requests_total": 0,
    "generations_total": 0,
    "generation_failures_total": 0,
    "recommendations_total": 0,
}

# generation source -> count ("provider" | "offline")
_source_usage: Dict[str, int] = {}
_fallbacks: Dict[str, int] = {"true": 0, "false": 0}

# Fixed-bucket latency histogram (ms): <=50,100,200,500,1000,2000,5000,10000,30000, +inf
_latency_buckets: List[int] = [50, 100, 200, 500, 1000, 2000, 5000, 10000, 30000]
_latency_counts: List[int] = [0 for _ in _latency_buckets] + [0]

_MAX_SAMPLES: int = 1000
_endpoint_latency: Dict[str, List[float]] = {}   # "METHOD /path" -> [ms]
_endpoint_counts: Dict[str, int] = {}


def _avg(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _p95(values: List[float]) -> float:
    if not values:
        return 0.0
    xs = sorted(values)
    return xs[int(0.95 * (len(xs) - 1))]


def _observe_latency_ms(ms: int) -> None:
    idx = len(_latency_buckets)
    for i, thr in enumerate(_latency_buckets):
        if ms <= thr:
            idx = i
            break
    _latency_counts[idx] += 1


def record_request(latency_ms: int) -> None:
    with _lock:
        _counters["requests_total"] += 1
        _observe_latency_ms(int(latency_ms))


def record_recommendation() -> None:
    with _lock:
        _counters["recommendations_total"] += 1


def record_generation(source: str | None, fallback: bool = False, failed: bool = False) -> None:
    with _lock:
        _counters["generations_total"] += 1
        if failed:
            _counters["generation_failures_total"] += 1
            return
        if source:
            _source_usage[source] = _source_usage.get(source, 0) + 1
        _fallbacks["true" if fallback else "false"] += 1


def record_endpoint(method: str, path: str, latency_ms: float) -> None:
    key = f"{method.upper()} {path}"
    with _lock:
        _endpoint_counts[key] = _endpoint_counts.get(key, 0) + 1
        buf = _endpoint_latency.setdefault(key, [])
        buf.append(float(latency_ms))
        if len(buf) > _MAX_SAMPLES:
            del buf[: len(buf) - _MAX_SAMPLES]


def snapshot() -> Dict[str, Any]:
    with _lock:
        perf: Dict[str, Dict[str, float]] = {}
        for key, buf in _endpoint_latency.items():
            perf[key] = {
                "count": float(_endpoint_counts.get(key, 0)),
                "avg_latency_ms": _avg(buf),
                "p95_latency_ms": _p95(buf),
            }
        return {
            "counters": dict(_counters),
            "generation_sources": dict(_source_usage),
            "fallbacks": dict(_fallbacks),
            "latency_ms": {
                "buckets": list(_latency_buckets) + ["+Inf"],
                "counts": list(_latency_counts),
            },
            "performance": {
                "endpoints": perf,
                "generated_at": time.time(),
            },
        }


def generation_summary() -> Dict[str, Any]:
    """How generation requests ended: provider share, fallback rate and failure rate (0.0 when idle)."""
    with _lock:
        total = _counters["generations_total"]
        failed = _counters["generation_failures_total"]
        provider = _source_usage.get("provider", 0)
        fell_back = _fallbacks["true"]
    if not total:
        return {"total": 0, "provider_share": 0.0, "fallback_rate": 0.0, "failure_rate": 0.0}
    return {
        "total": total,
        "provider_share": provider / total,
        "fallback_rate": fell_back / total,
        "failure_rate": failed / total,
    }


def reset() -> None:
    with _lock:
        for k in _counters:
            _counters[k] = 0
        _source_usage.clear()
        _fallbacks["true"] = 0
        _fallbacks["false"] = 0
        for i in range(len(_latency_counts)):
            _latency_counts[i] = 0
        _endpoint_latency.clear()
        _endpoint_counts.clear()
