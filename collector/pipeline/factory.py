"""Construcción del pipeline a partir de la configuración.

Único punto que resuelve Settings; la configuración se valida antes de
lanzar cualquier tarea.
"""

from __future__ import annotations

import logging
from typing import Optional

from common.config import ConfigurationError, Settings, SettingsSource, resolve_settings

from ..acquisition.sources import DeviceSource, SampleSource, SimulatedSource
from ..device.driver import DeviceDriver, TcpDeviceDriver, check_connection
from ..sink.base import NullSink, TimeSeriesSink
from ..sink.influx import InfluxSink
from .models import PipelineOptions, PipelineResult, PipelineState, SourceMode
from .supervisor import PipelineSupervisor

logger = logging.getLogger(__name__)


def build_options(
    settings: Settings,
    *,
    mode: SourceMode = SourceMode.SIMULATE,
    batch_count: Optional[int] = None,
    batch_size: Optional[int] = None,
    interval_ms: Optional[int] = None,
    channel_capacity: Optional[int] = None,
) -> PipelineOptions:
    """Combina Settings con los overrides de línea de comandos."""
    interval = interval_ms if interval_ms is not None else settings.interval_ms
    if mode == SourceMode.DEVICE:
        # The device cannot be polled faster than its monitor interval.
        interval = max(interval, settings.device_config().monitor_interval_ms)

    return PipelineOptions(
        batch_count=batch_count if batch_count is not None else settings.batch_count,
        batch_size=batch_size if batch_size is not None else settings.batch_size,
        interval_seconds=interval / 1000.0,
        channel_capacity=channel_capacity if channel_capacity is not None else settings.channel_capacity,
        bucket=settings.influx_bucket,
        measurement=settings.measurement,
        sensor_type=settings.sensor_type,
    )


def build_source(
    settings: Settings,
    mode: SourceMode,
    driver: Optional[DeviceDriver] = None,
) -> SampleSource:
    if mode == SourceMode.DEVICE:
        driver = driver or TcpDeviceDriver(timeout_seconds=settings.device_timeout_seconds)
        return DeviceSource(driver, settings.device_config())
    return SimulatedSource()


def build_sink(settings: Settings, dry_run: bool = False) -> TimeSeriesSink:
    if dry_run:
        return NullSink()
    return InfluxSink(
        settings.influx_host,
        settings.influx_org,
        settings.influx_token,
        timeout_seconds=settings.influx_timeout_seconds,
    )


async def run_pipeline(
    settings_source: SettingsSource,
    *,
    mode: SourceMode = SourceMode.SIMULATE,
    dry_run: bool = False,
    driver: Optional[DeviceDriver] = None,
    sink: Optional[TimeSeriesSink] = None,
    batch_count: Optional[int] = None,
    batch_size: Optional[int] = None,
    interval_ms: Optional[int] = None,
    channel_capacity: Optional[int] = None,
) -> PipelineResult:
    """Resuelve configuración, arma el pipeline y lo ejecuta hasta el final.

    Un error de configuración se devuelve como resultado FAILED sin lanzar
    ninguna tarea.
    """
    try:
        settings = resolve_settings(
            settings_source,
            require_device=mode == SourceMode.DEVICE,
            require_sink=sink is None and not dry_run,
        )
        options = build_options(
            settings,
            mode=mode,
            batch_count=batch_count,
            batch_size=batch_size,
            interval_ms=interval_ms,
            channel_capacity=channel_capacity,
        )
    except ConfigurationError as e:
        logger.error("[PIPELINE] Configuration error: %s", e)
        return PipelineResult(PipelineState.FAILED, error=e, failed_task="configuration")

    source = build_source(settings, mode, driver)
    owns_sink = sink is None
    sink = sink or build_sink(settings, dry_run)

    try:
        return await PipelineSupervisor(source, sink, options).run()
    finally:
        if owns_sink:
            await sink.aclose()


async def check_device(
    settings_source: SettingsSource,
    driver: Optional[DeviceDriver] = None,
) -> None:
    """Verificación de interfaz: solo el comando de check.

    Raises:
        ConfigurationError, DeviceError
    """
    settings = resolve_settings(settings_source, require_device=True, require_sink=False)
    config = settings.device_config()
    driver = driver or TcpDeviceDriver(timeout_seconds=settings.device_timeout_seconds)
    await check_connection(driver, config)
