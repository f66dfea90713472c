"""
timeclock_config -- single public entrypoint for payroll settings.

Responsibility:
    Provides the one way to obtain ``PayrollSettings`` at runtime through
    ``get_settings()``.  The accounting-start floor date, deployment
    timezone, double-punch gap and carry-forward rounding policy all come
    from here rather than from constants in the engines.

Architecture position:
    Configuration -- sits above ``timeclock_kernel`` and below
    ``timeclock_services``.  The kernel and engines never import it; the
    services pass the settings' values into the engines explicitly.

Audit relevance:
    Every ``get_settings()`` call emits a ``TIMECLOCK_CONFIG_TRACE`` log
    entry with the source path and a checksum of the effective settings.
"""

from __future__ import annotations

from pathlib import Path

from timeclock_config.loader import compute_checksum, load_yaml_file, parse_settings
from timeclock_config.schema import PayrollSettings
from timeclock_kernel.logging_config import get_logger

_logger = get_logger("config")

DEFAULT_SETTINGS_PATH = Path(__file__).parent / "defaults.yaml"


def get_settings(path: Path | None = None) -> PayrollSettings:
    """Load payroll settings from ``path`` (default: the packaged defaults.yaml).

    Raises:
        FileNotFoundError: if the file does not exist.
        InvalidSettingsError: if the file holds unknown keys or bad values.
    """
    source = path or DEFAULT_SETTINGS_PATH
    settings = parse_settings(load_yaml_file(source))
    _logger.info(
        "TIMECLOCK_CONFIG_TRACE",
        extra={
            "trace_type": "TIMECLOCK_CONFIG_TRACE",
            "source": str(source),
            "checksum": compute_checksum(settings.as_dict()),
            **settings.as_dict(),
        },
    )
    return settings


__all__ = ["PayrollSettings", "get_settings", "DEFAULT_SETTINGS_PATH"]
