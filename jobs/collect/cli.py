"""CLI entry point for the telemetry collector."""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Optional, Sequence

from common.config import ConfigurationError, EnvSettingsSource, SettingsSource
from common.logging_setup import setup_logging
from collector.device.errors import DeviceError
from collector.pipeline.factory import check_device, run_pipeline
from collector.pipeline.models import SourceMode

from .config import RunnerConfig

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Machine telemetry collector (device/simulation → InfluxDB)")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING... (default COLLECTOR_LOG_LEVEL or INFO)")
    sub = p.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="run the acquisition pipeline to completion")
    run.add_argument("--mode", choices=[m.value for m in SourceMode], default=SourceMode.SIMULATE.value)
    run.add_argument("--batches", type=_positive_int, default=None, help="number of batches (N)")
    run.add_argument("--batch-size", type=_positive_int, default=None, help="samples per batch (M)")
    run.add_argument("--interval-ms", type=_positive_int, default=None, help="sample interval in ms")
    run.add_argument("--capacity", type=_positive_int, default=None, help="relay channel capacity")
    run.add_argument("--dry-run", action="store_true", help="do not write to InfluxDB")

    sub.add_parser("check", help="check the device connection and exit")
    return p


async def _run(cfg: RunnerConfig, settings_source: SettingsSource) -> int:
    result = await run_pipeline(
        settings_source,
        mode=cfg.mode,
        dry_run=cfg.dry_run,
        batch_count=cfg.batch_count,
        batch_size=cfg.batch_size,
        interval_ms=cfg.interval_ms,
        channel_capacity=cfg.channel_capacity,
    )
    if result.ok:
        return EXIT_OK
    if isinstance(result.error, ConfigurationError):
        return EXIT_CONFIG_ERROR
    return EXIT_FAILURE


async def _check(settings_source: SettingsSource) -> int:
    try:
        await check_device(settings_source)
    except ConfigurationError as e:
        logger.error("Configuración inválida: %s", e)
        return EXIT_CONFIG_ERROR
    except DeviceError as e:
        logger.error("Check de dispositivo fallido: %s", e)
        return EXIT_FAILURE
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None, settings_source: Optional[SettingsSource] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    source = settings_source or EnvSettingsSource()

    if args.command == "check":
        return asyncio.run(_check(source))

    cfg = RunnerConfig(
        mode=SourceMode(args.mode),
        batch_count=args.batches,
        batch_size=args.batch_size,
        interval_ms=args.interval_ms,
        channel_capacity=args.capacity,
        dry_run=bool(args.dry_run),
    )
    logger.info("Collector started")
    logger.info(
        "Config: mode=%s batches=%s batch_size=%s interval=%sms capacity=%s dry_run=%s",
        cfg.mode.value, cfg.batch_count, cfg.batch_size, cfg.interval_ms,
        cfg.channel_capacity, cfg.dry_run,
    )
    return asyncio.run(_run(cfg, source))


if __name__ == "__main__":
    raise SystemExit(main())
