"""Driver de la máquina demo sobre TCP (asyncio streams).

Cada comando abre una conexión, envía los bytes del comando y lee una
respuesta terminada en CR. Los comandos/respuestas son opacos para el
pipeline; solo el check compara contra la respuesta esperada.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from ..domain.device_config import DeviceConfig
from .errors import DeviceCheckFailed, DeviceError

logger = logging.getLogger(__name__)

RESPONSE_TERMINATOR = b"\r"


class DeviceDriver(Protocol):
    """Capacidad de acceso al dispositivo."""

    async def check(self, address: str, command: bytes) -> str:
        ...

    async def arm_monitoring(self, address: str, command: bytes) -> str:
        ...

    async def read_samples(self, address: str, command: bytes) -> str:
        ...


class TcpDeviceDriver:
    """Implementación TCP de DeviceDriver.

    Uso:
        driver = TcpDeviceDriver(timeout_seconds=2.0)
        response = await driver.check("192.168.0.10:8501", b"?K\\r")
    """

    def __init__(self, timeout_seconds: float = 2.0):
        self._timeout = timeout_seconds

    async def check(self, address: str, command: bytes) -> str:
        return await self._request(address, command)

    async def arm_monitoring(self, address: str, command: bytes) -> str:
        return await self._request(address, command)

    async def read_samples(self, address: str, command: bytes) -> str:
        return await self._request(address, command)

    async def _request(self, address: str, command: bytes) -> str:
        host, port = _split_address(address, command)
        try:
            return await asyncio.wait_for(
                self._exchange(host, port, command), timeout=self._timeout
            )
        except asyncio.TimeoutError:
            raise DeviceError(address, command, f"timeout after {self._timeout:.1f}s") from None
        except (OSError, asyncio.IncompleteReadError, asyncio.LimitOverrunError) as e:
            raise DeviceError(address, command, str(e) or type(e).__name__) from e

    async def _exchange(self, host: str, port: int, command: bytes) -> str:
        reader, writer = await asyncio.open_connection(host, port)
        try:
            writer.write(command)
            await writer.drain()
            data = await reader.readuntil(RESPONSE_TERMINATOR)
        finally:
            writer.close()
            await writer.wait_closed()
        response = data.decode("ascii", errors="replace").strip()
        logger.debug("[DEVICE] %s:%d %r -> %r", host, port, command, response)
        return response


def _split_address(address: str, command: bytes) -> tuple[str, int]:
    host, sep, port = address.rpartition(":")
    if not sep or not host or not port.isdigit():
        raise DeviceError(address, command, "address must be host:port")
    return host, int(port)


async def check_connection(driver: DeviceDriver, config: DeviceConfig) -> None:
    """Envía el comando de check y valida la respuesta.

    Raises:
        DeviceCheckFailed: respuesta distinta a la esperada
        DeviceError: fallo de comunicación
    """
    response = await driver.check(config.address, config.check_command)
    if response != config.check_response:
        raise DeviceCheckFailed(
            config.address, config.check_command, config.check_response, response
        )
    logger.info("[DEVICE] Check OK: %s", config.address)
