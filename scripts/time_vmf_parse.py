#!/usr/bin/env python3
"""Quick perf benchmark for VMF parsing and serialization."""

from __future__ import annotations

import argparse
import cProfile
import io
from pathlib import Path
import pstats
import statistics
import time

from tqdm import tqdm

from vmfforge import VmfSyntaxError, parse, serialize


def _collect_vmf_files(root: Path) -> list[Path]:
    files = sorted(root.rglob("*.vmf"))
    return [path for path in files if path.is_file()]


def _run_once(
    sources: list[str],
    *,
    label: str,
    show_progress: bool,
    serialize_back: bool,
) -> tuple[float, int, int]:
    start = time.perf_counter()
    total_blocks = 0
    failures = 0
    iterator = (
        tqdm(sources, desc=label, unit="file")
        if show_progress
        else sources
    )
    for text in iterator:
        try:
            document = parse(text)
        except VmfSyntaxError:
            failures += 1
            continue
        total_blocks += sum(1 + sum(1 for _ in block.iter_descendants()) for block in document.blocks)
        if serialize_back:
            serialize(document)
    duration = time.perf_counter() - start
    return duration, total_blocks, failures


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark VMF parsing throughput")
    parser.add_argument("map_root", type=Path, help="Directory searched recursively for .vmf files")
    parser.add_argument("--runs", type=int, default=5, help="Measured runs")
    parser.add_argument("--warmups", type=int, default=1, help="Warmup runs")
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable tqdm progress bars (useful for pure timing)",
    )
    parser.add_argument(
        "--serialize",
        action="store_true",
        help="Also serialize every parsed document back to text",
    )
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Run cProfile and print top hotspots",
    )
    parser.add_argument(
        "--profile-top",
        type=int,
        default=30,
        help="Number of cProfile rows to print (default: 30)",
    )
    parser.add_argument(
        "--profile-sort",
        type=str,
        default="tottime",
        help="cProfile sort key (default: tottime, common: cumulative)",
    )
    parser.add_argument(
        "--limit-files",
        type=int,
        default=0,
        help="Optional file limit for quick profiling/smoke tests (0 = all files)",
    )
    args = parser.parse_args()

    map_root: Path = args.map_root
    if not map_root.exists() or not map_root.is_dir():
        raise SystemExit(f"Invalid map_root: {map_root}")

    files = _collect_vmf_files(map_root)
    if not files:
        raise SystemExit(f"No .vmf files found under {map_root}")
    if args.limit_files > 0:
        files = files[: args.limit_files]

    # Read once so the timings measure parsing, not disk I/O.
    sources = [path.read_text(encoding="utf-8", errors="replace") for path in files]
    total_chars = sum(len(text) for text in sources)
    show_progress = not args.no_progress

    def _benchmark() -> tuple[list[float], int, int]:
        for warmup_idx in range(max(args.warmups, 0)):
            _run_once(
                sources,
                label=f"warmup {warmup_idx + 1}/{max(args.warmups, 0)}",
                show_progress=show_progress,
                serialize_back=args.serialize,
            )

        timings: list[float] = []
        blocks_count = 0
        failures_count = 0
        for run_idx in range(max(args.runs, 1)):
            duration, blocks_count, failures_count = _run_once(
                sources,
                label=f"run {run_idx + 1}/{max(args.runs, 1)}",
                show_progress=show_progress,
                serialize_back=args.serialize,
            )
            timings.append(duration)
        return timings, blocks_count, failures_count

    if args.profile:
        profiler = cProfile.Profile()
        profiler.enable()
        timings, blocks_count, failures_count = _benchmark()
        profiler.disable()
        stream = io.StringIO()
        stats = pstats.Stats(profiler, stream=stream)
        stats.sort_stats(args.profile_sort).print_stats(max(args.profile_top, 1))
        print("\n[cProfile top functions]")
        print(stream.getvalue())
    else:
        timings, blocks_count, failures_count = _benchmark()

    best = min(timings)
    worst = max(timings)
    mean = statistics.mean(timings)
    median = statistics.median(timings)

    print(f"Dataset: {map_root}")
    print(f"Files: {len(files)} ({failures_count} failed to parse)")
    print(f"Characters: {total_chars}")
    print(f"Blocks: {blocks_count}")
    print(f"Runs: {len(timings)} (warmups={max(args.warmups, 0)})")
    print(f"Best:   {best:.4f}s")
    print(f"Median: {median:.4f}s")
    print(f"Mean:   {mean:.4f}s")
    print(f"Worst:  {worst:.4f}s")
    print(f"Files/s (mean):  {len(files) / mean:.1f}")
    print(f"MB/s (mean):     {total_chars / mean / 1_000_000:.2f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
