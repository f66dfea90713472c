"""
Tests for payroll settings.

Covers:
- The packaged defaults
- YAML parsing, with and without the ``payroll`` section
- Rejection of unknown keys and bad values
- The TIMECLOCK_CONFIG_TRACE audit log
"""

from datetime import date

import pytest

from timeclock_config import DEFAULT_SETTINGS_PATH, get_settings
from timeclock_config.loader import compute_checksum, parse_date, parse_settings
from timeclock_config.schema import PayrollSettings
from timeclock_kernel.domain import CarryForwardRounding
from timeclock_kernel.exceptions import InvalidSettingsError


class TestDefaults:

    def test_packaged_defaults(self):
        settings = get_settings()

        assert settings.accounting_start_date == date(2026, 2, 16)
        assert settings.timezone is None
        assert settings.tzinfo is None
        assert settings.double_punch_gap_seconds == 60
        assert settings.carry_forward_rounding == CarryForwardRounding.PER_WEEK
        assert settings.week_starts_on == "monday"

    def test_defaults_file_exists(self):
        assert DEFAULT_SETTINGS_PATH.is_file()

    def test_schema_defaults_match_file(self):
        assert get_settings() == PayrollSettings()

    def test_config_trace_logged(self, captured_logs):
        get_settings()

        traces = [r for r in captured_logs() if r["message"] == "TIMECLOCK_CONFIG_TRACE"]
        assert len(traces) == 1
        assert traces[0]["source"] == str(DEFAULT_SETTINGS_PATH)
        assert len(traces[0]["checksum"]) == 64


class TestParseSettings:

    def test_section_or_bare_mapping(self):
        data = {"accounting_start_date": "2026-03-02", "double_punch_gap_seconds": 90}

        assert parse_settings({"payroll": data}) == parse_settings(data)

    def test_values_parsed(self):
        settings = parse_settings({
            "payroll": {
                "accounting_start_date": date(2026, 1, 5),
                "timezone": "UTC",
                "double_punch_gap_seconds": 30,
                "carry_forward_rounding": "FINAL_ONLY",
            }
        })

        assert settings.accounting_start_date == date(2026, 1, 5)
        assert settings.tzinfo is not None
        assert settings.double_punch_gap_seconds == 30
        assert settings.carry_forward_rounding == CarryForwardRounding.FINAL_ONLY

    def test_empty_document_gives_defaults(self):
        assert parse_settings({}) == PayrollSettings()

    def test_unknown_key_rejected(self):
        with pytest.raises(InvalidSettingsError) as exc_info:
            parse_settings({"payroll": {"overtime_threshold": 40}})

        assert exc_info.value.key == "overtime_threshold"
        assert exc_info.value.code == "INVALID_SETTINGS"

    @pytest.mark.parametrize(
        "key, value",
        [
            ("accounting_start_date", "16/02/2026"),
            ("double_punch_gap_seconds", "sixty"),
            ("double_punch_gap_seconds", True),
            ("double_punch_gap_seconds", -5),
            ("carry_forward_rounding", "per_month"),
            ("week_starts_on", "sunday"),
            ("timezone", "Mars/Olympus_Mons"),
        ],
    )
    def test_bad_values_rejected(self, key, value):
        with pytest.raises(InvalidSettingsError) as exc_info:
            parse_settings({"payroll": {key: value}})

        assert exc_info.value.key == key

    def test_parse_date_rejects_numbers(self):
        with pytest.raises(InvalidSettingsError):
            parse_date(20260216, "accounting_start_date")


class TestYamlFile:

    def test_load_from_path(self, tmp_path):
        path = tmp_path / "payroll.yaml"
        path.write_text(
            "payroll:\n"
            "  accounting_start_date: 2026-03-02\n"
            "  carry_forward_rounding: final_only\n"
        )

        settings = get_settings(path)

        assert settings.accounting_start_date == date(2026, 3, 2)
        assert settings.carry_forward_rounding == CarryForwardRounding.FINAL_ONLY
        assert settings.double_punch_gap_seconds == 60

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            get_settings(tmp_path / "absent.yaml")

    def test_checksum_deterministic(self):
        a = PayrollSettings().as_dict()
        b = dict(reversed(list(a.items())))

        assert compute_checksum(a) == compute_checksum(b)
        assert compute_checksum(a) != compute_checksum({**a, "double_punch_gap_seconds": 61})
