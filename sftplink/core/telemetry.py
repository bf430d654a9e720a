"""
Telemetry and metrics collection
"""
import threading
import time
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Any, Iterator, Optional

DEFAULT_MAX_RECORDS = 1000


@dataclass
class Metric:
    """Single metric value"""
    name: str
    value: float
    timestamp: float = field(default_factory=time.time)
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass
class Event:
    """Event record"""
    name: str
    timestamp: float = field(default_factory=time.time)
    metadata: Dict[str, Any] = field(default_factory=dict)


class Telemetry:
    """
    Telemetry collector, shared by handlers running on different threads.

    Keeps the most recent ``max_records`` metrics and events each.
    """
    
    def __init__(self, max_records: int = DEFAULT_MAX_RECORDS):
        self._metrics: deque[Metric] = deque(maxlen=max_records)
        self._events: deque[Event] = deque(maxlen=max_records)
        self._lock = threading.Lock()
    
    def record_metric(self, name: str, value: float, tags: Optional[Dict[str, str]] = None) -> None:
        with self._lock:
            self._metrics.append(Metric(name=name, value=value, tags=tags or {}))
    
    def record_event(self, name: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        with self._lock:
            self._events.append(Event(name=name, metadata=metadata or {}))
    
    @contextmanager
    def timer(self, name: str, tags: Optional[Dict[str, str]] = None) -> Iterator[None]:
        """Record the wall time of the block in milliseconds, success or not"""
        started = time.monotonic()
        try:
            yield
        finally:
            self.record_metric(name, (time.monotonic() - started) * 1000, tags)
    
    def get_metrics(self, name: Optional[str] = None) -> list[Metric]:
        with self._lock:
            return [m for m in self._metrics if name is None or m.name == name]
    
    def get_events(self, name: Optional[str] = None) -> list[Event]:
        with self._lock:
            return [e for e in self._events if name is None or e.name == name]
    
    def clear(self) -> None:
        with self._lock:
            self._metrics.clear()
            self._events.clear()


# Global telemetry instance
_telemetry = Telemetry()


def get_telemetry() -> Telemetry:
    """Get global telemetry instance"""
    return _telemetry
