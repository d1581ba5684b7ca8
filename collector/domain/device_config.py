"""Configuración inmutable de la máquina demo."""

from __future__ import annotations

from dataclasses import dataclass

# Comandos de la máquina demo (terminados en CR)
CHECK_COMMAND = b"?K\r"
CHECK_RESPONSE = "55"
SET_MONITOR_COMMAND = b"MWS\r"
MONITOR_READOUT_COMMAND = b"MWR\r"
MONITOR_INTERVAL_MS = 50


@dataclass(frozen=True)
class DeviceConfig:
    """Resuelta una vez al arranque; solo lectura durante todo el pipeline."""

    address: str
    check_command: bytes
    check_response: str
    set_monitor_command: bytes
    monitor_readout_command: bytes
    monitor_interval_ms: int = MONITOR_INTERVAL_MS


def demo_machine_config(address: str, set_monitor_command: bytes = SET_MONITOR_COMMAND) -> DeviceConfig:
    return DeviceConfig(
        address=address,
        check_command=CHECK_COMMAND,
        check_response=CHECK_RESPONSE,
        set_monitor_command=set_monitor_command,
        monitor_readout_command=MONITOR_READOUT_COMMAND,
    )
