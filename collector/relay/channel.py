"""Canal acotado entre Acquirer y Forwarder.

Backpressure por bloqueo: send() suspende mientras el canal está lleno,
nunca descarta. FIFO, un productor y un consumidor.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Generic, Optional, TypeVar

from .relay_config import ChannelClosedError, RelayConfig, RelayStats

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RelayChannel(Generic[T]):
    """Cola acotada con cierre ordenado.

    Características:
    - Capacidad fija; send() espera mientras está lleno
    - receive() espera mientras está vacío y abierto
    - close(): los pendientes se siguen entregando, luego receive() -> None
    - detach_receiver(): los send() posteriores fallan con ChannelClosedError

    Uso:
        channel = RelayChannel[Batch](RelayConfig(capacity=32))

        # Productor
        await channel.send(batch)
        await channel.close()

        # Consumidor
        while (batch := await channel.receive()) is not None:
            ...
    """

    def __init__(self, config: Optional[RelayConfig] = None):
        self._config = config or RelayConfig()
        self._queue: deque[T] = deque()
        self._cond = asyncio.Condition()
        self._closed = False
        self._receiver_detached = False
        self._stats = RelayStats()

        logger.debug("[RELAY] Channel initialized: capacity=%d", self._config.capacity)

    async def send(self, item: T) -> None:
        """Encola un item, esperando si el canal está lleno.

        Raises:
            ChannelClosedError: si el canal se cerró o el receptor ya no existe
        """
        async with self._cond:
            waited = False
            while True:
                if self._receiver_detached:
                    raise ChannelClosedError("receiver is gone")
                if self._closed:
                    raise ChannelClosedError("channel was closed")
                if len(self._queue) < self._config.capacity:
                    break
                if not waited:
                    self._stats.blocked_sends += 1
                    waited = True
                await self._cond.wait()

            self._queue.append(item)
            self._stats.sent += 1
            self._stats.current_size = len(self._queue)
            self._stats.max_depth = max(self._stats.max_depth, len(self._queue))
            self._cond.notify_all()

    async def receive(self) -> Optional[T]:
        """Obtiene el siguiente item.

        Returns:
            Item, o None cuando el canal está cerrado y vacío
        """
        async with self._cond:
            while not self._queue and not self._closed:
                await self._cond.wait()

            if not self._queue:
                return None

            item = self._queue.popleft()
            self._stats.received += 1
            self._stats.current_size = len(self._queue)
            self._cond.notify_all()
            return item

    async def close(self) -> None:
        """Cierre desde el productor. Idempotente."""
        async with self._cond:
            if not self._closed:
                self._closed = True
                logger.debug("[RELAY] Closed with %d pending", len(self._queue))
            self._cond.notify_all()

    async def detach_receiver(self) -> None:
        """El consumidor terminó; no se aceptan más envíos."""
        async with self._cond:
            self._receiver_detached = True
            self._cond.notify_all()

    @property
    def capacity(self) -> int:
        return self._config.capacity

    @property
    def size(self) -> int:
        return len(self._queue)

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def stats(self) -> dict:
        return {
            "sent": self._stats.sent,
            "received": self._stats.received,
            "blocked_sends": self._stats.blocked_sends,
            "current_size": len(self._queue),
            "max_depth": self._stats.max_depth,
            "capacity": self._config.capacity,
        }
