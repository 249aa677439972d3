#!/usr/bin/env python3
"""
Run the engine and renderer benchmarks and check them against frame budgets.

Usage:
    python -m benchmarks.run_benchmarks [--quick | --full] [--json] [--save FILE]
"""

import argparse
import json
import platform
import sys
from datetime import datetime, timezone

from benchmarks.bench_engine import EngineBenchmarks
from benchmarks.bench_renderer import RendererBenchmarks

# Mean latency budgets in µs; one frame at 60 fps has about 16,600 µs in total
BUDGETS_US = {
    "next_frame_80x24_d0.7": 2000,
    "next_frame_200x60_d0.7": 8000,
    "delta_render": 8000,
    "idle_render": 4000,
}


def check_budgets(results) -> bool:
    """Print one line per budgeted benchmark; True when all are within budget."""
    ok = True
    print("\nFrame budgets:")
    for suite in results.values():
        for name, stats in suite.items():
            budget = BUDGETS_US.get(name)
            if budget is None:
                continue
            within = stats["mean_us"] <= budget
            ok = ok and within
            print(f"  {name:<28} {stats['mean_us']:>10.1f} / {budget} µs  [{'PASS' if within else 'FAIL'}]")
    return ok


def main() -> int:
    parser = argparse.ArgumentParser(description="Run Digital Rain performance benchmarks")
    speed = parser.add_mutually_exclusive_group()
    speed.add_argument("--quick", action="store_true", help="Fewer iterations")
    speed.add_argument("--full", action="store_true", help="More iterations")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--save", metavar="FILE", help="Also write JSON results to FILE")
    args = parser.parse_args()

    iterations = 200 if args.quick else 5000 if args.full else 1000

    results = {
        "engine": EngineBenchmarks(iterations=iterations).run_all(),
        # Full 200x60 paints are slow; halve the renderer suite
        "renderer": RendererBenchmarks(iterations=max(50, iterations // 2)).run_all(),
    }
    report = {
        "python_version": platform.python_version(),
        "platform": platform.platform(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "iterations": iterations,
        "results": results,
    }

    if args.json:
        print(json.dumps(report, indent=2))
    if args.save:
        with open(args.save, 'w') as f:
            json.dump(report, f, indent=2)

    return 0 if check_budgets(results) else 1


if __name__ == "__main__":
    sys.exit(main())
