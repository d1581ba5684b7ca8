"""Excepciones de comunicación con el dispositivo."""

from __future__ import annotations


class DeviceError(Exception):
    """Fallo de comunicación o respuesta inesperada del dispositivo."""

    def __init__(self, address: str, command: bytes, detail: str):
        self.address = address
        self.command = command
        self.detail = detail
        super().__init__(f"Device {address} command {command!r}: {detail}")


class DeviceCheckFailed(DeviceError):
    """La respuesta al comando de check no es la esperada."""

    def __init__(self, address: str, command: bytes, expected: str, received: str):
        self.expected = expected
        self.received = received
        super().__init__(
            address,
            command,
            f"unexpected check response {received!r} (expected {expected!r})",
        )
