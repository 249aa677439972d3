"""
Renderer Performance Benchmarks

Measures:
- Full repaint cost
- Steady-state delta render of a live animation
- Idle delta render (nothing changed)
- Output volume of delta vs full renders
"""

import io
import random
import statistics
import time
from typing import Any, Dict, List

from digital_rain.config import RainConfig
from digital_rain.engine import Engine
from digital_rain.renderer import Renderer


class NullSink:
    """Output stream that only counts characters."""

    def __init__(self):
        self.chars = 0

    def write(self, text: str):
        self.chars += len(text)

    def flush(self):
        pass


class RendererBenchmarks:
    """Benchmarks for the Renderer component."""

    def __init__(self, iterations: int = 1000, size=(60, 200)):
        self.iterations = iterations
        self.size = size
        self.results: Dict[str, Dict[str, Any]] = {}

    def _engine(self) -> Engine:
        config = RainConfig(seed=4)
        engine = Engine(config, lambda: self.size, random.Random(4))
        engine.resize(*self.size)
        for _ in range(self.size[0] * 2):
            engine.next_frame()
        return engine

    def bench_full_render(self) -> Dict[str, Any]:
        """Benchmark a full repaint of a populated frame."""
        frame = self._engine().frame
        sink = NullSink()

        times = []
        for _ in range(self.iterations):
            renderer = Renderer(sink)
            start = time.perf_counter_ns()
            renderer.draw(frame)
            end = time.perf_counter_ns()
            times.append(end - start)

        stats = self._compute_stats("full_render", times)
        stats["chars_per_frame"] = sink.chars / self.iterations
        return stats

    def bench_delta_render(self) -> Dict[str, Any]:
        """Benchmark delta renders of consecutive animation frames."""
        engine = self._engine()
        sink = NullSink()
        renderer = Renderer(sink)
        renderer.draw(engine.next_frame())
        sink.chars = 0

        times = []
        for _ in range(self.iterations):
            frame = engine.next_frame()
            start = time.perf_counter_ns()
            renderer.draw(frame)
            end = time.perf_counter_ns()
            times.append(end - start)

        stats = self._compute_stats("delta_render", times)
        stats["chars_per_frame"] = sink.chars / self.iterations
        return stats

    def bench_idle_render(self) -> Dict[str, Any]:
        """Benchmark a delta pass over an unchanged frame."""
        frame = self._engine().frame
        renderer = Renderer(io.StringIO())
        renderer.draw(frame)

        times = []
        for _ in range(self.iterations):
            start = time.perf_counter_ns()
            renderer.draw(frame)
            end = time.perf_counter_ns()
            times.append(end - start)

        return self._compute_stats("idle_render", times)

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
        height, width = self.size
        print(f"\nRunning Renderer Benchmarks ({self.iterations} iterations each, {width}x{height})...")
        print("-" * 60)

        benchmarks = [
            ("Full render", self.bench_full_render),
            ("Delta render", self.bench_delta_render),
            ("Idle render", self.bench_idle_render),
        ]

        for desc, bench_func in benchmarks:
            print(f"  {desc}...", end=" ", flush=True)
            result = bench_func()
            line = f"{result['mean_us']:.2f} µs (p99: {result['p99_us']:.2f} µs)"
            if "chars_per_frame" in result:
                line += f", {result['chars_per_frame']:.0f} chars/frame"
            print(line)

        return self.results


if __name__ == "__main__":
    bench = RendererBenchmarks(iterations=1000)
    bench.run_all()
