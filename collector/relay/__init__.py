"""Canal de relevo acotado (Acquirer → Forwarder)."""

from .channel import RelayChannel
from .relay_config import ChannelClosedError, RelayConfig, RelayStats

__all__ = ["RelayChannel", "RelayConfig", "RelayStats", "ChannelClosedError"]
