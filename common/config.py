from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Protocol

from dotenv import load_dotenv

from collector.domain.device_config import DeviceConfig, demo_machine_config


REQUIRED_SINK_KEYS = (
    "INFLUXDB_HOST",
    "INFLUXDB_ORG",
    "INFLUXDB_TOKEN",
    "INFLUXDB_BUCKET",
)
DEVICE_ADDRESS_KEY = "DEMO_MACHINE_ADDRESS"
ARM_COMMAND_KEY = "DEMO_MACHINE_ARM_COMMAND"


class ConfigurationError(Exception):
    """Falta o es inválida una variable de configuración obligatoria."""

    def __init__(self, message: str, missing: Optional[list[str]] = None):
        self.missing = list(missing or [])
        super().__init__(message)


class SettingsSource(Protocol):
    """Origen de valores de configuración.

    El pipeline nunca lee el entorno del proceso directamente; siempre pasa
    por una de estas fuentes.
    """

    def get(self, key: str) -> Optional[str]:
        ...


class EnvSettingsSource:
    """Lee variables de entorno, cargando antes un .env si existe."""

    def __init__(self, env_file: Optional[str] = None):
        self._env_file = env_file or os.getenv("COLLECTOR_ENV_FILE", _default_env_file())
        self._loaded = False

    def _load(self) -> None:
        # Real environment variables still override the .env file.
        if self._env_file and Path(self._env_file).exists():
            load_dotenv(self._env_file, override=False)
        self._loaded = True

    def get(self, key: str) -> Optional[str]:
        if not self._loaded:
            self._load()
        return os.getenv(key)


class MappingSettingsSource:
    """Fuente respaldada por un dict (tests, uso embebido)."""

    def __init__(self, values: Mapping[str, str]):
        self._values = dict(values)

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)


def _default_env_file() -> str:
    return str(Path.cwd() / ".env")


@dataclass(frozen=True)
class Settings:
    influx_host: str
    influx_org: str
    influx_token: str
    influx_bucket: str
    influx_timeout_seconds: float

    device_address: Optional[str]
    device_timeout_seconds: float
    device_arm_command: Optional[str]

    batch_size: int
    batch_count: int
    interval_ms: int
    channel_capacity: int

    measurement: str
    sensor_type: str

    def device_config(self) -> DeviceConfig:
        if not self.device_address:
            raise ConfigurationError(
                f"{DEVICE_ADDRESS_KEY} is required for device access",
                missing=[DEVICE_ADDRESS_KEY],
            )
        if self.device_arm_command:
            command = self.device_arm_command.rstrip("\r") + "\r"
            return demo_machine_config(self.device_address, command.encode("ascii"))
        return demo_machine_config(self.device_address)


def _read_int(source: SettingsSource, key: str, default: int, minimum: int = 1) -> int:
    raw = source.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ConfigurationError(f"{key} must be >= {minimum}, got {value}")
    return value


def _read_float(source: SettingsSource, key: str, default: float) -> float:
    raw = source.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"{key} must be positive, got {value}")
    return value


def _read_str(source: SettingsSource, key: str, default: str) -> str:
    raw = source.get(key)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def resolve_settings(
    source: SettingsSource,
    *,
    require_device: bool = False,
    require_sink: bool = True,
) -> Settings:
    """Resuelve la configuración una sola vez al arranque.

    Args:
        source: Fuente de valores (entorno, dict...)
        require_device: Exigir DEMO_MACHINE_ADDRESS (modo dispositivo)
        require_sink: Exigir las variables INFLUXDB_* (no en dry-run)

    Raises:
        ConfigurationError: con la lista completa de claves ausentes
    """
    required = list(REQUIRED_SINK_KEYS) if require_sink else []
    if require_device:
        required.append(DEVICE_ADDRESS_KEY)

    missing = [key for key in required if not (source.get(key) or "").strip()]

    if missing:
        raise ConfigurationError(
            "Missing required configuration: " + ", ".join(missing),
            missing=missing,
        )

    address = source.get(DEVICE_ADDRESS_KEY)
    arm_command = source.get(ARM_COMMAND_KEY) or None
    if arm_command is not None and not arm_command.isascii():
        raise ConfigurationError(f"{ARM_COMMAND_KEY} must be ASCII, got {arm_command!r}")

    return Settings(
        influx_host=_read_str(source, "INFLUXDB_HOST", ""),
        influx_org=_read_str(source, "INFLUXDB_ORG", ""),
        influx_token=_read_str(source, "INFLUXDB_TOKEN", ""),
        influx_bucket=_read_str(source, "INFLUXDB_BUCKET", ""),
        influx_timeout_seconds=_read_float(source, "INFLUXDB_TIMEOUT_SECONDS", 10.0),
        device_address=address.strip() if address and address.strip() else None,
        device_timeout_seconds=_read_float(source, "DEMO_MACHINE_TIMEOUT_SECONDS", 2.0),
        device_arm_command=arm_command,
        batch_size=_read_int(source, "COLLECTOR_BATCH_SIZE", 10),
        batch_count=_read_int(source, "COLLECTOR_BATCH_COUNT", 20),
        interval_ms=_read_int(source, "COLLECTOR_INTERVAL_MS", 500),
        channel_capacity=_read_int(source, "COLLECTOR_CHANNEL_CAPACITY", 32),
        measurement=_read_str(source, "COLLECTOR_MEASUREMENT", "machine_1"),
        sensor_type=_read_str(source, "COLLECTOR_SENSOR_TYPE", "temperature"),
    )
