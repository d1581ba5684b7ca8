"""Acceso a dispositivo.

- driver.py: DeviceDriver (protocolo) + TcpDeviceDriver + check_connection
- readout.py: Validación de la respuesta de lectura
- errors.py: DeviceError, DeviceCheckFailed
"""

from .driver import DeviceDriver, TcpDeviceDriver, check_connection
from .errors import DeviceCheckFailed, DeviceError
from .readout import parse_readout

__all__ = [
    "DeviceDriver",
    "TcpDeviceDriver",
    "check_connection",
    "DeviceError",
    "DeviceCheckFailed",
    "parse_readout",
]
