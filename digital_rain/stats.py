"""
Render Statistics - Frame timing and output volume for a rain run.

Collected per tick by the app and summarized on exit (--stats), together
with a resource sample of the running process.
"""

import os
import statistics
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, Optional

import psutil

from .renderer import RenderMode


@dataclass
class ProcessSample:
    """Point-in-time resource measurement of this process."""
    rss_bytes: int
    cpu_percent: float
    num_threads: int

    @classmethod
    def capture(cls, process: Optional[psutil.Process] = None) -> 'ProcessSample':
        process = process or psutil.Process(os.getpid())
        with process.oneshot():
            return cls(
                rss_bytes=process.memory_info().rss,
                cpu_percent=process.cpu_percent(interval=None),
                num_threads=process.num_threads(),
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'rss_bytes': self.rss_bytes,
            'cpu_percent': self.cpu_percent,
            'num_threads': self.num_threads,
        }


@dataclass
class RenderStats:
    """Running totals for rendered frames."""
    max_samples: int = 1000
    frames: int = 0
    chars_written: int = 0
    mode_counts: Dict[str, int] = field(default_factory=lambda: {m.value: 0 for m in RenderMode})
    started_at: float = field(default_factory=time.monotonic)
    _frame_times: Deque[float] = field(init=False, repr=False)

    def __post_init__(self):
        self._frame_times = deque(maxlen=self.max_samples)
        # Prime cpu_percent so the summary reports usage since start
        psutil.Process(os.getpid()).cpu_percent(interval=None)

    def record(self, mode: Optional[RenderMode], chars: int, elapsed: float):
        """Record one tick: render mode, characters written, cycle seconds."""
        self.frames += 1
        self.chars_written += chars
        if mode is not None:
            self.mode_counts[mode.value] += 1
        self._frame_times.append(elapsed)

    def summary(self) -> Dict[str, Any]:
        times_ms = [t * 1000 for t in self._frame_times]
        wall = time.monotonic() - self.started_at
        result: Dict[str, Any] = {
            'frames': self.frames,
            'chars_written': self.chars_written,
            'modes': dict(self.mode_counts),
            'achieved_fps': self.frames / wall if wall > 0 else 0.0,
            'chars_per_frame': self.chars_written / self.frames if self.frames else 0.0,
        }
        if times_ms:
            ordered = sorted(times_ms)
            result.update({
                'mean_ms': statistics.mean(times_ms),
                'median_ms': statistics.median(times_ms),
                'p95_ms': ordered[min(len(ordered) - 1, int(len(ordered) * 0.95))],
                'max_ms': ordered[-1],
            })
        result['process'] = ProcessSample.capture().to_dict()
        return result

    def format_summary(self) -> str:
        s = self.summary()
        lines = [
            "=" * 50,
            "  Render statistics",
            "=" * 50,
            f"  Frames:          {s['frames']} "
            f"(full {s['modes']['full']}, delta {s['modes']['delta']}, idle {s['modes']['idle']})",
            f"  Achieved FPS:    {s['achieved_fps']:.1f}",
            f"  Chars written:   {s['chars_written']:,} ({s['chars_per_frame']:.0f}/frame)",
        ]
        if 'mean_ms' in s:
            lines.append(
                f"  Frame time (ms): mean {s['mean_ms']:.2f}  median {s['median_ms']:.2f}  "
                f"p95 {s['p95_ms']:.2f}  max {s['max_ms']:.2f}"
            )
        proc = s['process']
        lines.append(
            f"  Process:         rss {proc['rss_bytes'] / (1024 * 1024):.1f}MB  "
            f"cpu {proc['cpu_percent']:.1f}%  threads {proc['num_threads']}"
        )
        return '\n'.join(lines)
