"""
Engine Performance Benchmarks

Measures:
- Simulation tick (next_frame) at common terminal sizes
- Drop grid resize cost
- Frame clear and deep copy
"""

import random
import statistics
import time
from typing import Any, Dict, List

from digital_rain.config import RainConfig
from digital_rain.drops import DropGrid
from digital_rain.engine import Engine
from digital_rain.frame import Frame

SIZES = {
    "80x24": (24, 80),
    "200x60": (60, 200),
}


class EngineBenchmarks:
    """Benchmarks for the Engine and DropGrid components."""

    def __init__(self, iterations: int = 1000):
        self.iterations = iterations
        self.results: Dict[str, Dict[str, Any]] = {}

    def _engine(self, size, density: float = 0.7) -> Engine:
        config = RainConfig(density=density, seed=1)
        engine = Engine(config, lambda: size, random.Random(1))
        engine.resize(*size)
        # Let the rain fill the screen
        for _ in range(size[0] * 2):
            engine.next_frame()
        return engine

    def bench_next_frame(self, label: str, density: float = 0.7) -> Dict[str, Any]:
        """Benchmark one simulation tick."""
        engine = self._engine(SIZES[label], density)

        times = []
        for _ in range(self.iterations):
            start = time.perf_counter_ns()
            engine.next_frame()
            end = time.perf_counter_ns()
            times.append(end - start)

        return self._compute_stats(f"next_frame_{label}_d{density}", times)

    def bench_grid_resize(self) -> Dict[str, Any]:
        """Benchmark alternating grid resizes (drops in surviving columns kept)."""
        grid = DropGrid(RainConfig(density=1.5, seed=2))
        grid.resize(24, 80)

        times = []
        for i in range(self.iterations):
            width = 120 if i % 2 == 0 else 80
            start = time.perf_counter_ns()
            grid.resize(24, width)
            end = time.perf_counter_ns()
            times.append(end - start)

        return self._compute_stats("grid_resize", times)

    def bench_frame_clear(self) -> Dict[str, Any]:
        """Benchmark clearing a 200x60 frame."""
        frame = Frame(60, 200)

        times = []
        for _ in range(self.iterations):
            start = time.perf_counter_ns()
            frame.clear()
            end = time.perf_counter_ns()
            times.append(end - start)

        return self._compute_stats("frame_clear_200x60", times)

    def bench_frame_copy(self) -> Dict[str, Any]:
        """Benchmark the deep copy the renderer performs every frame."""
        src = self._engine(SIZES["200x60"]).frame
        dst = Frame(60, 200)

        times = []
        for _ in range(self.iterations):
            start = time.perf_counter_ns()
            src.copy_into(dst)
            end = time.perf_counter_ns()
            times.append(end - start)

        return self._compute_stats("frame_copy_200x60", times)

    def _compute_stats(self, name: str, times_ns: List[int]) -> Dict[str, Any]:
        """Compute statistics from timing measurements."""
        times_us = [t / 1000 for t in times_ns]  # Convert to microseconds

        stats = {
            "name": name,
            "iterations": len(times_us),
            "mean_us": statistics.mean(times_us),
            "median_us": statistics.median(times_us),
            "stdev_us": statistics.stdev(times_us) if len(times_us) > 1 else 0,
            "min_us": min(times_us),
            "max_us": max(times_us),
            "p95_us": sorted(times_us)[int(len(times_us) * 0.95)],
            "p99_us": sorted(times_us)[int(len(times_us) * 0.99)],
            "ops_per_sec": 1_000_000 / statistics.mean(times_us) if times_us else 0,
        }
        self.results[name] = stats
        return stats

    def run_all(self) -> Dict[str, Dict[str, Any]]:
        """Run all benchmarks and return results."""
        print(f"\nRunning Engine Benchmarks ({self.iterations} iterations each)...")
        print("-" * 60)

        benchmarks = [
            ("Tick 80x24", lambda: self.bench_next_frame("80x24")),
            ("Tick 200x60", lambda: self.bench_next_frame("200x60")),
            ("Tick 200x60 dense", lambda: self.bench_next_frame("200x60", 3.0)),
            ("Grid resize", self.bench_grid_resize),
            ("Frame clear", self.bench_frame_clear),
            ("Frame copy", self.bench_frame_copy),
        ]

        for desc, bench_func in benchmarks:
            print(f"  {desc}...", end=" ", flush=True)
            result = bench_func()
            print(f"{result['mean_us']:.2f} µs (p99: {result['p99_us']:.2f} µs)")

        return self.results


if __name__ == "__main__":
    bench = EngineBenchmarks(iterations=1000)
    bench.run_all()
