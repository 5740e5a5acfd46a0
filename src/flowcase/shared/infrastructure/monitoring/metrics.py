"""
In-process metrics for flowcase.

Parsing and generation report counts and durations here. Values live in
memory only; ``get_all_metrics()`` returns a snapshot for the CLI or tests.
"""

import threading
import time
from collections import defaultdict, deque
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Deque, Dict, Optional, Tuple

from ...config.settings import get_settings

TagKey = Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class Sample:
    """One recorded value of a metric."""

    value: float
    recorded_at: float = field(default_factory=time.time)
    tags: Dict[str, str] = field(default_factory=dict)


def _tag_key(tags: Optional[Dict[str, str]]) -> TagKey:
    return tuple(sorted((tags or {}).items()))


def _percentile(ordered: list, fraction: float) -> float:
    return ordered[int(fraction * (len(ordered) - 1))]


class MetricsCollector:
    """
    Process-wide collector for parse and generation metrics.

    Counters accumulate, gauges keep their latest value and timers keep a
    bounded window of durations. Recording is a no-op when metrics are
    disabled in settings.
    """

    _instance: Optional["MetricsCollector"] = None
    _lock = threading.RLock()

    def __new__(cls) -> "MetricsCollector":
        with cls._lock:
            if cls._instance is None:
                instance = super().__new__(cls)
                instance._configure()
                cls._instance = instance
        return cls._instance

    def _configure(self) -> None:
        monitoring = get_settings().monitoring_config
        self.enabled: bool = monitoring['enabled']
        self.max_history: int = monitoring['max_history']

        self._counters: Dict[str, Dict[TagKey, int]] = defaultdict(lambda: defaultdict(int))
        self._gauges: Dict[str, Sample] = {}
        self._timers: Dict[str, Deque[Sample]] = defaultdict(self._new_window)

    def _new_window(self) -> Deque[Sample]:
        return deque(maxlen=self.max_history)

    def counter(self, name: str, value: int = 1, tags: Optional[Dict[str, str]] = None) -> None:
        """Add ``value`` to a counter, kept separately per tag set."""
        if self.enabled:
            with self._lock:
                self._counters[name][_tag_key(tags)] += value

    def gauge(self, name: str, value: float, tags: Optional[Dict[str, str]] = None) -> None:
        """Replace the current value of a gauge."""
        if self.enabled:
            with self._lock:
                self._gauges[name] = Sample(value=value, tags=dict(tags or {}))

    def timer(self, name: str, duration_seconds: float, tags: Optional[Dict[str, str]] = None) -> None:
        """Record one duration in seconds."""
        if self.enabled:
            with self._lock:
                self._timers[name].append(Sample(value=duration_seconds, tags=dict(tags or {})))

    def get_counter(self, name: str, tags: Optional[Dict[str, str]] = None) -> int:
        """
        Total of a counter.

        With ``tags``, only increments recorded with all of those tags count.
        """
        wanted = set(_tag_key(tags))
        with self._lock:
            series = dict(self._counters.get(name, {}))
        return sum(count for key, count in series.items() if wanted <= set(key))

    def get_gauge(self, name: str) -> float:
        sample = self._gauges.get(name)
        return sample.value if sample else 0.0

    def get_gauge_tags(self, name: str) -> Dict[str, str]:
        sample = self._gauges.get(name)
        return dict(sample.tags) if sample else {}

    def get_timer_stats(self, name: str) -> Dict[str, float]:
        """Count, mean, min, max and p95 over the recorded window."""
        with self._lock:
            durations = sorted(sample.value for sample in self._timers.get(name, ()))

        if not durations:
            return {'count': 0, 'mean': 0.0, 'min': 0.0, 'max': 0.0, 'p95': 0.0}

        return {
            'count': len(durations),
            'mean': sum(durations) / len(durations),
            'min': durations[0],
            'max': durations[-1],
            'p95': _percentile(durations, 0.95),
        }

    def get_all_metrics(self) -> Dict[str, Any]:
        """Snapshot of every counter, gauge and timer summary."""
        with self._lock:
            timer_names = list(self._timers)
            counter_names = list(self._counters)
            gauges = {name: sample.value for name, sample in self._gauges.items()}
        snapshot = {
            'counters': {name: self.get_counter(name) for name in counter_names},
            'gauges': gauges,
        }
        snapshot['timers'] = {name: self.get_timer_stats(name) for name in timer_names}
        return snapshot

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
            self._gauges.clear()
            self._timers.clear()

    # Domain helpers

    def record_parse(self, duration_seconds: float, node_count: int,
                     edge_count: int, success: bool = True) -> None:
        """Record one flowchart parse; graph size gauges only track successful parses."""
        outcome = {'success': str(success).lower()}
        self.counter('flowcharts_parsed_total', tags=outcome)
        self.timer('flowchart_parse_duration', duration_seconds, tags=outcome)
        if success:
            self.gauge('flowchart_nodes', node_count)
            self.gauge('flowchart_edges', edge_count)

    def record_generation(self, duration_seconds: float, path_count: int,
                          test_case_count: int) -> None:
        """Record one test case generation run."""
        self.counter('test_case_generations_total')
        self.counter('test_cases_generated_total', value=test_case_count)
        self.gauge('flow_paths_explored', path_count)
        self.timer('test_case_generation_duration', duration_seconds)


def timed_operation(metric_name: str, tags: Optional[Dict[str, str]] = None):
    """
    Time every call of the decorated function.

    Failed calls are recorded under ``<metric_name>_error`` with the
    exception class name as an ``error`` tag, and the exception propagates.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                failure_tags = dict(tags or {}, error=type(e).__name__)
                get_metrics().timer(f"{metric_name}_error", time.perf_counter() - started, failure_tags)
                raise
            get_metrics().timer(metric_name, time.perf_counter() - started, tags)
            return result
        return wrapper
    return decorator


def get_metrics() -> MetricsCollector:
    """Return the process-wide collector."""
    return MetricsCollector()
