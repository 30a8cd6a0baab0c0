#!/usr/bin/env python3
"""Benchmark range reads: latency (p50, p95, p99) and requests/s.

Uploads one document, then issues random ``Range: bytes=a-b`` requests the
way an in-browser PDF viewer seeks through a large file.

Usage:
  Against a running server:
    export API_URL=http://localhost:3001
    python scripts/bench_range.py [--size-mb 64] [--num-requests 200] [--range-kb 64]
"""
from __future__ import annotations

import argparse
import os
import random
import statistics
import sys
import time

import httpx


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark range reads")
    parser.add_argument("--size-mb", type=int, default=64, help="Size of the test document in MiB")
    parser.add_argument("--num-requests", type=int, default=200, help="Number of range requests")
    parser.add_argument("--range-kb", type=int, default=64, help="Bytes per range request in KiB")
    parser.add_argument("--seed", type=int, default=0, help="Random seed for range offsets")
    parser.add_argument("--output", type=str, default="results/bench_range.txt", help="Output file path")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:3001").rstrip("/")
    size = args.size_mb * 1024 * 1024
    span = args.range_kb * 1024
    rng = random.Random(args.seed)

    print(f"Uploading {args.size_mb} MiB test document...")
    payload = b"%PDF-1.7\n" + os.urandom(size - 9)
    latencies: list[float] = []
    errors = 0

    with httpx.Client(timeout=300.0) as client:
        r = client.post(
            f"{api_url}/v1/documents",
            files={"file": ("bench_range.pdf", payload, "application/pdf")},
        )
        r.raise_for_status()
        content_url = f"{api_url}{r.json()['content_url']}"
        identifier = r.json()["id"]

        print(f"Issuing {args.num_requests} range requests of {args.range_kb} KiB...")
        start_total = time.perf_counter()
        for _ in range(args.num_requests):
            start = rng.randrange(0, size - span)
            end = start + span - 1
            t0 = time.perf_counter()
            r = client.get(content_url, headers={"Range": f"bytes={start}-{end}"})
            elapsed = time.perf_counter() - t0
            if r.status_code == 206 and r.content == payload[start : end + 1]:
                latencies.append(elapsed)
            else:
                errors += 1
        total_elapsed = time.perf_counter() - start_total

        client.delete(f"{api_url}/v1/documents/{identifier}")

    n = len(latencies)
    if n == 0:
        print("No successful range requests.")
        return 1

    qps = n / total_elapsed if total_elapsed else 0
    p50 = statistics.median(latencies) * 1000
    p95 = sorted(latencies)[int(n * 0.95) - 1] * 1000 if n >= 20 else p50
    p99 = sorted(latencies)[int(n * 0.99) - 1] * 1000 if n >= 100 else p95

    summary = (
        f"Range benchmark (n={n}, errors={errors}, range={args.range_kb} KiB, "
        f"document={args.size_mb} MiB)\n"
        f"  Throughput: {qps:.2f} req/s\n"
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
