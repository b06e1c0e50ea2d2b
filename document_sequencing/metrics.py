import os
import time
from typing import Dict

import psutil


def format_bytes(num_bytes: float) -> str:
    if num_bytes < 1024:
        return f"{int(num_bytes)} B"
    if num_bytes < 1024 ** 2:
        return f"{num_bytes / 1024:.2f} KB"
    if num_bytes < 1024 ** 3:
        return f"{num_bytes / 1024 ** 2:.2f} MB"
    return f"{num_bytes / 1024 ** 3:.2f} GB"


class PerformanceMonitor:
    """
    Wall-clock time per named operation and resident memory of the current process.

    Sample usage:
        monitor = PerformanceMonitor()
        monitor.start_processing()
        monitor.start_operation('Preprocessing')
        ...
        monitor.end_operation('Preprocessing')
        monitor.end_processing()
        monitor.print_report()
    """
    def __init__(self):
        self._process = psutil.Process(os.getpid())
        self._start_times: Dict[str, float] = {}
        self.durations: Dict[str, float] = {}
        self.initial_memory = 0
        self.peak_memory = 0
        self._processing_start = 0.0
        self._processing_end = 0.0

    def _used_memory(self) -> int:
        return self._process.memory_info().rss

    def _update_peak_memory(self):
        self.peak_memory = max(self.peak_memory, self._used_memory())

    def start_processing(self):
        self._processing_start = time.perf_counter()
        self.initial_memory = self._used_memory()
        self.peak_memory = self.initial_memory

    def end_processing(self):
        self._processing_end = time.perf_counter()
        self._update_peak_memory()

    def start_operation(self, name: str):
        self._start_times[name] = time.perf_counter()
        self._update_peak_memory()

    def end_operation(self, name: str):
        start = self._start_times.get(name)
        if start is not None:
            self.durations[name] = time.perf_counter() - start
        self._update_peak_memory()

    @property
    def total_time_ms(self) -> float:
        return max(self._processing_end - self._processing_start, 0.0) * 1000

    @property
    def total_time_sec(self) -> float:
        return self.total_time_ms / 1000

    def operation_ms(self, name: str) -> float:
        return self.durations.get(name, 0.0) * 1000

    @property
    def memory_used(self) -> int:
        return self.peak_memory - self.initial_memory

    @property
    def current_memory(self) -> int:
        return self._used_memory()

    def report(self) -> Dict:
        return {
            'total_time_ms': self.total_time_ms,
            'operations_ms': {name: self.operation_ms(name) for name in self.durations},
            'initial_memory': self.initial_memory,
            'peak_memory': self.peak_memory,
            'memory_used': self.memory_used,
            'cpu_count': psutil.cpu_count(),
            'system_memory_total': psutil.virtual_memory().total,
        }

    def print_report(self):
        total_ms = self.total_time_ms
        print("\n" + "=" * 80)
        print("PERFORMANCE METRICS")
        print("=" * 80)

        print("\nProcessing time:")
        print(f"  Total: {self.total_time_sec:.3f} s ({total_ms:.0f} ms)")
        for name in self.durations:
            ms = self.operation_ms(name)
            share = ms * 100 / total_ms if total_ms > 0 else 0.0
            print(f"    {name}: {ms:.1f} ms ({share:.1f}%)")

        print("\nMemory (RSS):")
        print(f"  Initial: {format_bytes(self.initial_memory)}")
        print(f"  Peak:    {format_bytes(self.peak_memory)}")
        print(f"  Used:    {format_bytes(self.memory_used)}")
        print(f"  Current: {format_bytes(self.current_memory)}")

        print("\nSystem:")
        print(f"  Total memory: {format_bytes(psutil.virtual_memory().total)}")
        print(f"  CPU cores: {psutil.cpu_count()}")
        print("=" * 80, flush=True)

    def summary(self) -> str:
        return (f"Time: {self.total_time_sec:.3f}s | Memory: {format_bytes(self.memory_used)} | "
                f"Peak: {format_bytes(self.peak_memory)}")
