"""Abstract interface for the time-series sink.

The Forwarder depends only on this interface; any store (InfluxDB, a
test double, a no-op) can implement it.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, runtime_checkable

from ..domain.sample import DataPoint


class SinkWriteError(Exception):
    """Write rejected by the sink or failed in transport."""

    def __init__(self, detail: str, status_code: Optional[int] = None):
        self.detail = detail
        self.status_code = status_code
        prefix = f"HTTP {status_code}: " if status_code is not None else ""
        super().__init__(f"{prefix}{detail}")


@runtime_checkable
class TimeSeriesSink(Protocol):
    """Minimal contract for sinks.

    Implementations raise on failure; success returns None.
    """

    async def write(self, bucket: str, points: Sequence[DataPoint]) -> None:
        ...

    async def aclose(self) -> None:
        ...


class NullSink:
    """No-op sink for dry runs."""

    async def write(self, bucket: str, points: Sequence[DataPoint]) -> None:
        return None

    async def aclose(self) -> None:
        return None
