"""Tests de resolución de configuración."""

import pytest

from collector.domain.device_config import CHECK_COMMAND, CHECK_RESPONSE, MONITOR_READOUT_COMMAND
from common.config import (
    ConfigurationError,
    EnvSettingsSource,
    MappingSettingsSource,
    resolve_settings,
)


class TestResolveSettings:

    def test_defaults_applied(self, sink_env):
        settings = resolve_settings(MappingSettingsSource(sink_env))

        assert settings.influx_host == "http://influx.local:8086"
        assert settings.influx_bucket == "telemetry"
        assert settings.batch_size == 10
        assert settings.batch_count == 20
        assert settings.interval_ms == 500
        assert settings.channel_capacity == 32
        assert settings.measurement == "machine_1"
        assert settings.sensor_type == "temperature"
        assert settings.device_address is None

    def test_all_missing_keys_reported(self):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_settings(MappingSettingsSource({"INFLUXDB_HOST": "http://x"}))

        assert exc_info.value.missing == ["INFLUXDB_ORG", "INFLUXDB_TOKEN", "INFLUXDB_BUCKET"]

    def test_blank_value_counts_as_missing(self, sink_env):
        env = dict(sink_env, INFLUXDB_TOKEN="   ")

        with pytest.raises(ConfigurationError) as exc_info:
            resolve_settings(MappingSettingsSource(env))

        assert exc_info.value.missing == ["INFLUXDB_TOKEN"]

    def test_sink_keys_optional_when_not_required(self):
        settings = resolve_settings(MappingSettingsSource({}), require_sink=False)

        assert settings.influx_bucket == ""

    @pytest.mark.parametrize("key,value", [
        ("COLLECTOR_BATCH_SIZE", "0"),
        ("COLLECTOR_INTERVAL_MS", "fast"),
        ("COLLECTOR_CHANNEL_CAPACITY", "-3"),
        ("INFLUXDB_TIMEOUT_SECONDS", "0"),
    ])
    def test_invalid_numbers_rejected(self, sink_env, key, value):
        with pytest.raises(ConfigurationError, match=key):
            resolve_settings(MappingSettingsSource(dict(sink_env, **{key: value})))

    def test_device_config_built_from_address(self, sink_env):
        env = dict(sink_env, DEMO_MACHINE_ADDRESS="10.0.0.5:8501")

        config = resolve_settings(MappingSettingsSource(env), require_device=True).device_config()

        assert config.address == "10.0.0.5:8501"
        assert config.check_command == CHECK_COMMAND == b"?K\r"
        assert config.check_response == CHECK_RESPONSE == "55"
        assert config.monitor_readout_command == MONITOR_READOUT_COMMAND == b"MWR\r"
        assert config.monitor_interval_ms == 50

    def test_arm_command_override_gets_terminator(self, sink_env):
        env = dict(sink_env, DEMO_MACHINE_ADDRESS="h:1", DEMO_MACHINE_ARM_COMMAND="MWS,1,2")

        config = resolve_settings(MappingSettingsSource(env)).device_config()

        assert config.set_monitor_command == b"MWS,1,2\r"

    def test_sink_keys_read_when_not_required(self, sink_env):
        settings = resolve_settings(MappingSettingsSource(sink_env), require_sink=False)

        assert settings.influx_bucket == "telemetry"
        assert settings.influx_host == "http://influx.local:8086"

    def test_non_ascii_arm_command_rejected(self, sink_env):
        env = dict(sink_env, DEMO_MACHINE_ADDRESS="h:1", DEMO_MACHINE_ARM_COMMAND="MWS\u00e9")

        with pytest.raises(ConfigurationError, match="DEMO_MACHINE_ARM_COMMAND"):
            resolve_settings(MappingSettingsSource(env))

    def test_device_config_without_address_fails(self, sink_env):
        settings = resolve_settings(MappingSettingsSource(sink_env))

        with pytest.raises(ConfigurationError):
            settings.device_config()


class TestEnvSettingsSource:

    def test_reads_env_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("COLLECTOR_TEST_ONLY_KEY=from-file\n")
        # register the key so monkeypatch removes what load_dotenv sets
        monkeypatch.setenv("COLLECTOR_TEST_ONLY_KEY", "placeholder")
        monkeypatch.delenv("COLLECTOR_TEST_ONLY_KEY")

        source = EnvSettingsSource(str(env_file))

        assert source.get("COLLECTOR_TEST_ONLY_KEY") == "from-file"

    def test_real_environment_wins_over_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("COLLECTOR_TEST_ONLY_KEY=from-file\n")
        monkeypatch.setenv("COLLECTOR_TEST_ONLY_KEY", "from-env")

        assert EnvSettingsSource(str(env_file)).get("COLLECTOR_TEST_ONLY_KEY") == "from-env"

    def test_missing_env_file_is_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv("COLLECTOR_TEST_ONLY_KEY", "x")

        source = EnvSettingsSource(str(tmp_path / "absent.env"))

        assert source.get("COLLECTOR_TEST_ONLY_KEY") == "x"
