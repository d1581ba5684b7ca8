"""Configuración y modelos para el canal de relevo.

Extraído de channel.py para mantener el canal centrado en la sincronización.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_CAPACITY = 32


class ChannelClosedError(Exception):
    """Envío sobre un canal cerrado o sin receptor."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Relay channel closed: {reason}")


@dataclass
class RelayConfig:
    """Configuración del canal."""
    capacity: int = DEFAULT_CAPACITY

    def __post_init__(self) -> None:
        if self.capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {self.capacity}")


@dataclass
class RelayStats:
    """Estadísticas del canal."""
    sent: int = 0
    received: int = 0
    blocked_sends: int = 0
    current_size: int = 0
    max_depth: int = 0
