"""
In-process counters for the post endpoints.

Tracks per-endpoint call counts, failures grouped by error type, a bounded
latency window and rate-limit rejections. Host figures come from psutil.
"""

from asyncio import to_thread
from collections import Counter, defaultdict, deque
from dataclasses import dataclass, field
from logging import getLogger
from threading import Lock
from time import perf_counter
from types import TracebackType
from typing import Any, Self

from psutil import cpu_percent, disk_usage, virtual_memory

from app.configs import file_logger

logger = file_logger(getLogger(__name__))

LATENCY_WINDOW: int = 500
_MB: int = 1024 * 1024
_CPU_INTERVAL: float = 0.1


@dataclass(slots=True)
class LatencyWindow:
    """Last `LATENCY_WINDOW` durations of one endpoint, in seconds."""

    samples: deque[float] = field(default_factory=lambda: deque(maxlen=LATENCY_WINDOW))
    _total: float = field(default=0.0, repr=False)

    def observe(self, seconds: float) -> None:
        if len(self.samples) == self.samples.maxlen:
            self._total -= self.samples[0]
        self.samples.append(seconds)
        self._total += seconds

    @property
    def mean(self) -> float:
        return self._total / len(self.samples) if self.samples else 0.0

    @property
    def peak(self) -> float:
        return max(self.samples, default=0.0)

    def __len__(self) -> int:
        return len(self.samples)


class MetricsManager:
    """Lock-guarded counters shared by every worker thread."""

    __slots__ = ("_lock", "_calls", "_failures", "_latency", "_throttled")

    def __init__(self) -> None:
        self._lock = Lock()
        self._calls: Counter[str] = Counter()
        self._failures: defaultdict[str, Counter[str]] = defaultdict(Counter)
        self._latency: defaultdict[str, LatencyWindow] = defaultdict(LatencyWindow)
        self._throttled: int = 0

    def record_call(self, endpoint: str) -> None:
        with self._lock:
            self._calls[endpoint] += 1

    def record_failure(self, endpoint: str, kind: str) -> None:
        """
        Count a failed call.

        Args:
            endpoint: Metrics key of the handler.
            kind: Exception class name, e.g. ``NotFoundError``.
        """
        with self._lock:
            self._failures[endpoint][kind] += 1

    def observe_latency(self, endpoint: str, seconds: float) -> None:
        with self._lock:
            self._latency[endpoint].observe(seconds)

    def record_throttled(self) -> None:
        with self._lock:
            self._throttled += 1

    def snapshot(self) -> dict[str, Any]:
        """
        Copy the current counters.

        Returns:
            dict[str, Any]: ``calls``, ``failures`` (endpoint to error type
            counts), ``latency`` (endpoint to mean/peak seconds) and
            ``throttled``.
        """
        with self._lock:
            return {
                "calls": dict(self._calls),
                "failures": {
                    endpoint: dict(kinds) for endpoint, kinds in self._failures.items()
                },
                "latency": {
                    endpoint: {"mean": window.mean, "peak": window.peak}
                    for endpoint, window in self._latency.items()
                    if len(window)
                },
                "throttled": self._throttled,
            }

    def reset(self) -> None:
        with self._lock:
            self._calls.clear()
            self._failures.clear()
            self._latency.clear()
            self._throttled = 0
        logger.info("Metrics reset")


metrics_manager = MetricsManager()


class RequestTimer:
    """
    Time one handler call and record it on exit.

    A raised exception is counted under its class name and then propagates.
    """

    __slots__ = ("_endpoint", "_metrics", "_started")

    def __init__(self, endpoint: str, metrics: MetricsManager | None = None) -> None:
        self._endpoint = endpoint
        self._metrics = metrics or metrics_manager
        self._started: float = 0.0

    def __enter__(self) -> Self:
        self._started = perf_counter()
        self._metrics.record_call(self._endpoint)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        self._metrics.observe_latency(self._endpoint, perf_counter() - self._started)
        if exc_type is not None:
            self._metrics.record_failure(self._endpoint, exc_type.__name__)

    async def __aenter__(self) -> Self:
        return self.__enter__()

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.__exit__(exc_type, exc_val, exc_tb)


@dataclass(slots=True, frozen=True)
class HostMetrics:
    cpu_percent: float
    memory_percent: float
    memory_used_mb: float
    memory_total_mb: float
    disk_percent: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "cpu_percent": self.cpu_percent,
            "memory": {
                "percent": self.memory_percent,
                "used_mb": self.memory_used_mb,
                "total_mb": self.memory_total_mb,
            },
            "disk_percent": self.disk_percent,
        }


def _read_host() -> HostMetrics:
    memory = virtual_memory()
    return HostMetrics(
        cpu_percent=cpu_percent(interval=_CPU_INTERVAL),
        memory_percent=memory.percent,
        memory_used_mb=round(memory.used / _MB, 2),
        memory_total_mb=round(memory.total / _MB, 2),
        disk_percent=disk_usage("/").percent,
    )


async def collect_host_metrics() -> dict[str, Any]:
    """
    Read CPU, memory and disk usage off the event loop.

    Returns:
        dict[str, Any]: Host figures, or ``{"error": ...}`` when psutil
        cannot read them.
    """
    try:
        host_metrics = await to_thread(_read_host)
    except OSError as e:
        logger.exception("Host metrics unavailable")
        return {"error": f"Failed to collect host metrics: {e}"}
    return host_metrics.to_dict()
