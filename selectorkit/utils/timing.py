# selectorkit/utils/timing.py
from __future__ import annotations

import functools
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, ParamSpec, TypeVar, Union

from selectorkit.utils.logger import get_logger

P = ParamSpec("P")
T = TypeVar("T")

Label = Union[str, Callable[..., str]]


def now_ms() -> float:
    """Monotonic time in milliseconds, sub-millisecond precision."""
    return time.perf_counter_ns() / 1_000_000


def format_duration(ms: float) -> str:
    if ms < 1:
        return f"{ms * 1000:.0f} µs"
    if ms < 1000:
        return f"{ms:.1f} ms"
    return f"{ms / 1000:.3f} s"


@dataclass
class Stopwatch:
    """Context-manager stopwatch; `laps` records named checkpoints."""
    start_ms: Optional[float] = None
    stop_ms: Optional[float] = None
    laps: List[tuple] = field(default_factory=list)

    def start(self) -> "Stopwatch":
        self.start_ms = now_ms()
        self.stop_ms = None
        self.laps.clear()
        return self

    def lap(self, name: str) -> float:
        elapsed = self.elapsed_ms
        self.laps.append((name, elapsed))
        return elapsed

    def stop(self) -> float:
        self.stop_ms = now_ms()
        return self.elapsed_ms

    @property
    def elapsed_ms(self) -> float:
        if self.start_ms is None:
            return 0.0
        end = self.stop_ms if self.stop_ms is not None else now_ms()
        return max(0.0, end - self.start_ms)

    def __enter__(self) -> "Stopwatch":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()


def measure(label: Label = "", level: str = "DEBUG") -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Log how long each call takes. `label` may be a callable receiving the
    call's arguments, so methods can name what they worked on:

        @measure(lambda q, *a, **k: f"resolve {q.selector.name}")
        def resolve_for(self, backend): ...
    """
    log = get_logger(__name__)
    log_fn = getattr(log, level.lower(), log.debug)

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            sw = Stopwatch().start()
            failed = True
            try:
                result = func(*args, **kwargs)
                failed = False
                return result
            finally:
                took = format_duration(sw.stop())
                name = label(*args, **kwargs) if callable(label) else (label or func.__qualname__)
                log_fn(f"{name} {'failed after' if failed else 'took'} {took}")
        return wrapper
    return decorator
