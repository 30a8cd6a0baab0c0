#!/usr/bin/env python3
"""Benchmark document upload: throughput (docs/s, MB/s) and latency.

Usage:
  Against a running server:
    export API_URL=http://localhost:3001
    python scripts/bench_upload.py [--num-docs 50] [--size-kb 1024]
"""
from __future__ import annotations

import argparse
import os
import statistics
import sys
import time

import httpx


def synthetic_pdf(size: int) -> bytes:
    """PDF-looking payload of ``size`` bytes."""
    header = b"%PDF-1.7\n"
    return (header + os.urandom(max(size - len(header), 0)))[:size]


def percentile(values: list[float], fraction: float, minimum: int) -> float | None:
    if len(values) < minimum:
        return None
    return sorted(values)[int(len(values) * fraction) - 1]


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark document upload")
    parser.add_argument("--num-docs", type=int, default=50, help="Number of documents to upload")
    parser.add_argument("--size-kb", type=int, default=1024, help="Size of each document in KiB")
    parser.add_argument("--keep", action="store_true", help="Do not delete uploaded documents")
    parser.add_argument("--output", type=str, default="results/bench_upload.txt", help="Output file path")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:3001").rstrip("/")
    payload = synthetic_pdf(args.size_kb * 1024)
    latencies: list[float] = []
    identifiers: list[str] = []
    errors = 0

    print(f"Uploading {args.num_docs} documents of {args.size_kb} KiB to {api_url}...")
    start_total = time.perf_counter()
    with httpx.Client(timeout=120.0) as client:
        for i in range(args.num_docs):
            t0 = time.perf_counter()
            r = client.post(
                f"{api_url}/v1/documents",
                params={"on_conflict": "overwrite"},
                files={"file": (f"bench_{i:05d}.pdf", payload, "application/pdf")},
            )
            elapsed = time.perf_counter() - t0
            if r.status_code == 200:
                latencies.append(elapsed)
                identifiers.append(r.json()["id"])
            else:
                errors += 1
        total_elapsed = time.perf_counter() - start_total

        if not args.keep:
            for identifier in identifiers:
                client.delete(f"{api_url}/v1/documents/{identifier}")

    n = len(latencies)
    if n == 0:
        print("No successful uploads.")
        return 1

    docs_per_sec = n / total_elapsed
    mb_per_sec = (n * len(payload) / 1_000_000) / total_elapsed if total_elapsed else 0
    p50 = statistics.median(latencies) * 1000
    p95 = (percentile(latencies, 0.95, 20) or statistics.median(latencies)) * 1000
    p99_raw = percentile(latencies, 0.99, 100)
    p99 = p99_raw * 1000 if p99_raw is not None else p95

    summary = (
        f"Upload benchmark (n={n}, errors={errors}, size={args.size_kb} KiB)\n"
        f"  Throughput: {docs_per_sec:.2f} docs/s, {mb_per_sec:.2f} MB/s\n"
        f"  Latency: p50={p50:.1f} ms, p95={p95:.1f} ms, p99={p99:.1f} ms\n"
        f"  Total time: {total_elapsed:.2f} s\n"
    )
    print(summary)

    try:
        os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(summary)
        print(f"Wrote {args.output}")
    except OSError as e:
        print(f"Could not write {args.output}: {e}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
