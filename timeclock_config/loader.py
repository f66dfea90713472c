"""
Settings Loader (``timeclock_config.loader``).

Responsibility
--------------
Loads a YAML settings file and parses its ``payroll`` mapping into a frozen
``PayrollSettings``.  Runtime callers go through
``timeclock_config.get_settings()``; this module is the tooling underneath.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown keys or unparseable values  -> ``InvalidSettingsError``.
"""

from __future__ import annotations

import hashlib
import json
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from timeclock_config.schema import PayrollSettings
from timeclock_kernel.domain.values import CarryForwardRounding
from timeclock_kernel.exceptions import InvalidSettingsError

_KNOWN_KEYS = frozenset({
    "accounting_start_date",
    "timezone",
    "week_starts_on",
    "double_punch_gap_seconds",
    "carry_forward_rounding",
})


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_date(value: Any, key: str = "date") -> date:
    """Parse a date from YAML (string or date object)."""
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError as exc:
            raise InvalidSettingsError(key, f"not an ISO date: {value!r}") from exc
    raise InvalidSettingsError(key, f"cannot parse date from {value!r}")


def parse_settings(data: dict[str, Any]) -> PayrollSettings:
    """
    Parse ``PayrollSettings`` from a dict.

    Accepts either the whole document (with a top-level ``payroll`` key) or
    the ``payroll`` mapping itself.  Missing keys take schema defaults.
    """
    section = data.get("payroll", data) or {}
    if not isinstance(section, dict):
        raise InvalidSettingsError("payroll", "must be a mapping")

    unknown = set(section) - _KNOWN_KEYS
    if unknown:
        raise InvalidSettingsError(sorted(unknown)[0], "unknown setting")

    kwargs: dict[str, Any] = {}
    if section.get("accounting_start_date") is not None:
        kwargs["accounting_start_date"] = parse_date(
            section["accounting_start_date"], "accounting_start_date",
        )
    if section.get("timezone"):
        kwargs["timezone"] = str(section["timezone"])
    if section.get("week_starts_on") is not None:
        kwargs["week_starts_on"] = str(section["week_starts_on"]).lower()
    if section.get("double_punch_gap_seconds") is not None:
        gap = section["double_punch_gap_seconds"]
        if isinstance(gap, bool) or not isinstance(gap, int):
            raise InvalidSettingsError("double_punch_gap_seconds", f"not an integer: {gap!r}")
        kwargs["double_punch_gap_seconds"] = gap
    if section.get("carry_forward_rounding") is not None:
        raw = str(section["carry_forward_rounding"]).lower()
        try:
            kwargs["carry_forward_rounding"] = CarryForwardRounding(raw)
        except ValueError as exc:
            raise InvalidSettingsError(
                "carry_forward_rounding",
                f"must be one of {[r.value for r in CarryForwardRounding]}, got '{raw}'",
            ) from exc

    return PayrollSettings(**kwargs)


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON serialization; identical data, identical checksum."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
