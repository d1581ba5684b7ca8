"""Fixtures compartidos."""

from __future__ import annotations

import pytest

from doubles import FakeClock, RecordingSink


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sink_env() -> dict[str, str]:
    return {
        "INFLUXDB_HOST": "http://influx.local:8086",
        "INFLUXDB_ORG": "factory",
        "INFLUXDB_TOKEN": "secret-token",
        "INFLUXDB_BUCKET": "telemetry",
    }
