"""
tests/settings/test_settings.py

Covers:
  - Defaults and environment overrides
  - Weekday names accepted for first_weekday
  - Validation failures
  - Settings caching
  - Timezone resolution (IANA, offsets, local zone with DST)
  - structlog configuration (json rendering, level filtering, default output)
"""

import datetime as dt
import importlib
import json
from importlib import resources
from zoneinfo import ZoneInfo

import pytest
import structlog
from pydantic import ValidationError

from calexplorer.calendar import Calendar
from calexplorer.dateinfo import DateInfo, Granularity
from calexplorer.settings import Settings, configure_logging, get_settings, resolve_tz

settings_module = importlib.import_module("calexplorer.settings.settings")

ENV_VARS = [
    "CALEXPLORER_FIRST_WEEKDAY",
    "CALEXPLORER_MINIMUM_DAYS_IN_FIRST_WEEK",
    "CALEXPLORER_TIMEZONE",
    "CALEXPLORER_LOG_LEVEL",
    "CALEXPLORER_LOG_FORMAT",
]


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)  # no stray .env
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def restore_structlog():
    yield
    structlog.reset_defaults()


# ── Settings ──────────────────────────────────────────────────────────────────

class TestSettings:

    def test_defaults(self):
        s = Settings()
        assert s.first_weekday == 6
        assert s.minimum_days_in_first_week == 1
        assert s.timezone == "local"
        assert s.log_level == "INFO"
        assert s.log_format == "text"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("CALEXPLORER_FIRST_WEEKDAY", "0")
        monkeypatch.setenv("CALEXPLORER_MINIMUM_DAYS_IN_FIRST_WEEK", "4")
        monkeypatch.setenv("CALEXPLORER_TIMEZONE", "Europe/Amsterdam")
        monkeypatch.setenv("CALEXPLORER_LOG_FORMAT", "json")
        s = Settings()
        assert (s.first_weekday, s.minimum_days_in_first_week) == (0, 4)
        assert s.timezone == "Europe/Amsterdam"
        assert s.log_format == "json"

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("CALEXPLORER_FIRST_WEEKDAY=tuesday\n")
        assert Settings().first_weekday == 1

    @pytest.mark.parametrize(
        "value, expected",
        [("monday", 0), ("Sunday", 6), ("sun", 6), ("THU", 3), ("2", 2)],
    )
    def test_weekday_names(self, monkeypatch, value, expected):
        monkeypatch.setenv("CALEXPLORER_FIRST_WEEKDAY", value)
        assert Settings().first_weekday == expected

    @pytest.mark.parametrize("value", ["funday", "t", "7"])
    def test_invalid_first_weekday(self, monkeypatch, value):
        monkeypatch.setenv("CALEXPLORER_FIRST_WEEKDAY", value)
        with pytest.raises(ValidationError):
            Settings()

    @pytest.mark.parametrize("value", ["0", "8"])
    def test_invalid_minimum_days(self, monkeypatch, value):
        monkeypatch.setenv("CALEXPLORER_MINIMUM_DAYS_IN_FIRST_WEEK", value)
        with pytest.raises(ValidationError):
            Settings()

    def test_log_level_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("CALEXPLORER_LOG_LEVEL", "debug")
        assert Settings().log_level == "DEBUG"

    def test_invalid_log_format(self, monkeypatch):
        monkeypatch.setenv("CALEXPLORER_LOG_FORMAT", "xml")
        with pytest.raises(ValidationError):
            Settings()

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


# ── resolve_tz ────────────────────────────────────────────────────────────────

class TestResolveTz:

    @pytest.mark.parametrize("name", ["UTC", "utc", "Z", "GMT"])
    def test_utc_aliases(self, name):
        assert resolve_tz(name) is dt.timezone.utc

    @pytest.mark.parametrize("name", [None, "", "local", "system"])
    def test_local(self, name):
        assert isinstance(resolve_tz(name), dt.tzinfo)

    def test_local_follows_tz_variable(self, monkeypatch):
        monkeypatch.setenv("TZ", "America/New_York")
        assert resolve_tz("local") == ZoneInfo("America/New_York")

    def test_local_applies_dst_of_each_season(self, monkeypatch):
        monkeypatch.setenv("TZ", "America/New_York")
        cal = Calendar(tz=resolve_tz("local"))
        winter = cal.localize(dt.datetime(2024, 1, 15, 4, 30, tzinfo=dt.timezone.utc))
        summer = cal.localize(dt.datetime(2024, 7, 15, 4, 30, tzinfo=dt.timezone.utc))
        assert (winter.day, winter.hour, winter.minute) == (14, 23, 30)
        assert (summer.day, summer.hour, summer.minute) == (15, 0, 30)

    def test_local_reads_zone_file(self, monkeypatch, tmp_path):
        source = resources.files("tzdata.zoneinfo").joinpath("America").joinpath("New_York")
        zone_file = tmp_path / "localtime"
        zone_file.write_bytes(source.read_bytes())
        monkeypatch.delenv("TZ", raising=False)
        monkeypatch.setattr(settings_module, "_LOCALTIME", str(zone_file))
        tz = resolve_tz("local")
        assert dt.datetime(2024, 1, 15, 12, tzinfo=tz).utcoffset() == dt.timedelta(hours=-5)
        assert dt.datetime(2024, 7, 15, 12, tzinfo=tz).utcoffset() == dt.timedelta(hours=-4)

    def test_local_tz_variable_may_be_a_path(self, monkeypatch, tmp_path):
        source = resources.files("tzdata.zoneinfo").joinpath("Europe").joinpath("Amsterdam")
        zone_file = tmp_path / "Amsterdam"
        zone_file.write_bytes(source.read_bytes())
        monkeypatch.setenv("TZ", f":{zone_file}")
        tz = resolve_tz("local")
        assert dt.datetime(2024, 7, 15, 12, tzinfo=tz).utcoffset() == dt.timedelta(hours=2)

    def test_local_falls_back_to_fixed_offset(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TZ", "Nowhere/Special")
        monkeypatch.setattr(settings_module, "_LOCALTIME", str(tmp_path / "missing"))
        assert isinstance(resolve_tz("local"), dt.timezone)

    def test_fixed_offsets(self):
        assert resolve_tz("+02:00") == dt.timezone(dt.timedelta(hours=2))
        assert resolve_tz("-0530") == dt.timezone(-dt.timedelta(hours=5, minutes=30))

    def test_iana_name(self):
        assert resolve_tz("Europe/Amsterdam") == ZoneInfo("Europe/Amsterdam")

    @pytest.mark.parametrize("name", ["Not/AZone", "+25:00", "+02:75"])
    def test_invalid(self, name):
        with pytest.raises(ValueError):
            resolve_tz(name)


# ── configure_logging ─────────────────────────────────────────────────────────

class TestConfigureLogging:

    def test_json_output(self, capsys, restore_structlog):
        configure_logging(Settings(log_format="json"))
        structlog.get_logger().info("calendar_ready", first_weekday=6)
        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["event"] == "calendar_ready"
        assert record["level"] == "info"
        assert record["first_weekday"] == 6
        assert "timestamp" in record

    def test_level_filtering(self, capsys, restore_structlog):
        configure_logging(Settings(log_level="WARNING", log_format="json"))
        log = structlog.get_logger()
        log.info("hidden")
        log.warning("shown")
        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "shown" in out

    def test_defaults_to_cached_settings(self, capsys, monkeypatch, restore_structlog):
        monkeypatch.setenv("CALEXPLORER_LOG_FORMAT", "json")
        configure_logging()
        structlog.get_logger().warning("from_env")
        assert json.loads(capsys.readouterr().out.strip().splitlines()[-1])["event"] == "from_env"

    def test_steps_print_debug_until_configured(self, capsys, restore_structlog):
        structlog.reset_defaults()
        info = DateInfo(dt.datetime(2024, 3, 15, 9), calendar=Calendar(tz=dt.timezone.utc))
        info.move_forward(Granularity.DAY)
        assert "date_moved" in capsys.readouterr().out

        configure_logging(Settings(log_level="INFO"))
        info.move_forward(Granularity.DAY)
        assert "date_moved" not in capsys.readouterr().out
