"""Benchmark: dispatch latency (p50/p95/mean).

Measures per-call latency of ``layered.call`` for a single-layer method
and for a deep chain where every layer delegates to its parent.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import layered

_WARMUP: int = 100
_ITERATIONS: int = 3_000
_DEEP_LAYERS: int = 8


def _build_model() -> layered.Model:
    model = layered.ModelRegistry("bench").model("Bench")

    @model.method("flat")
    def flat(rec, n):
        return n

    @model.method("deep")
    def deep_base(rec, n):
        return n

    for _ in range(_DEEP_LAYERS - 1):

        @model.method("deep")
        def deep_layer(rec, n):
            return rec.super().deep(n) + 1

    return model


def _measure(operation: str, method: str, model: layered.Model) -> dict[str, object]:
    rec = model.new_record()
    for _ in range(_WARMUP):
        layered.call(rec, method, 1)

    latencies_ms: list[float] = []
    for _ in range(_ITERATIONS):
        t0 = time.perf_counter()
        layered.call(rec, method, 1)
        latencies_ms.append((time.perf_counter() - t0) * 1000)

    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": operation,
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p50_ms": round(sorted_lats[int(n * 0.50)], 4),
        "p95_ms": round(sorted_lats[min(int(n * 0.95), n - 1)], 4),
    }
    print(
        f"[bench_latency] {result['operation']}: "
        f"p50={result['p50_ms']:.4f}ms  p95={result['p95_ms']:.4f}ms  "
        f"mean={result['avg_latency_ms']:.4f}ms"
    )
    return result


def bench_call_latency() -> list[dict[str, object]]:
    """Benchmark ``layered.call`` on a flat and on a deep chain.

    Returns
    -------
    list of dicts with keys: operation, iterations, total_seconds,
    ops_per_second, avg_latency_ms, p50_ms, p95_ms.
    """
    model = _build_model()
    return [
        _measure("call_latency_flat", "flat", model),
        _measure(f"call_latency_super_x{_DEEP_LAYERS}", "deep", model),
    ]


if __name__ == "__main__":
    results = bench_call_latency()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "latency_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(results, fh, indent=2)
    print(f"Results saved to {output_path}")
