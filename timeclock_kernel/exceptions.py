"""
Typed Exception Hierarchy for the Timeclock Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers of the payroll core (web handlers, batch jobs, reports) need to tell
"you handed me inconsistent data" apart from "this worker does not exist" or
"the settings file is broken" without parsing message strings.

Every exception:
  1. Has a TYPED class (catch by type, not message)
  2. Has a CODE class attribute (machine-readable, API-safe)
  3. Carries structured DATA as attributes (not just a message string)

Example:
    try:
        stubs = PaystubService(settings).build_paystubs(snapshot, week_of)
    except WorkerNotFoundError as e:
        api_response(status=404, code=e.code, worker_id=e.worker_id)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    TimeclockError (base)
    |
    +-- InputError
    |   +-- WorkerMismatchError
    |   +-- InvalidPayPeriodError
    |
    +-- WorkerError
    |   +-- WorkerNotFoundError
    |   +-- InvalidPayRateError
    |
    +-- ConfigurationError
        +-- InvalidSettingsError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                 | When Raised
----------------|----------------------|------------------------------------------
Input           | WORKER_MISMATCH      | Events/payouts of another worker passed in
                | INVALID_PAY_PERIOD   | Week start is not a Monday / empty range
----------------|----------------------|------------------------------------------
Worker          | WORKER_NOT_FOUND     | Worker ID not present in snapshot/storage
                | INVALID_PAY_RATE     | Negative or non-numeric pay rate
----------------|----------------------|------------------------------------------
Configuration   | INVALID_SETTINGS     | Settings file has unknown keys/bad values

Odd punch counts and missing rate history are NOT errors: they surface as
``DayResult.has_issue`` and as a ``None`` rate respectively.
"""


class TimeclockError(Exception):
    """
    Base exception for all timeclock kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "TIMECLOCK_ERROR"


# Input-consistency exceptions


class InputError(TimeclockError):
    """Base exception for caller-supplied inconsistent input."""

    code: str = "INPUT_ERROR"


class WorkerMismatchError(InputError):
    """A record belonging to one worker was passed in for another worker."""

    code: str = "WORKER_MISMATCH"

    def __init__(self, expected_worker_id: str, record_type: str, record_worker_id: str):
        self.expected_worker_id = expected_worker_id
        self.record_type = record_type
        self.record_worker_id = record_worker_id
        super().__init__(
            f"{record_type} for worker {record_worker_id} passed to a "
            f"computation for worker {expected_worker_id}"
        )


class InvalidPayPeriodError(InputError):
    """Pay period boundaries are malformed."""

    code: str = "INVALID_PAY_PERIOD"

    def __init__(self, start: str, end: str, reason: str):
        self.start = start
        self.end = end
        self.reason = reason
        super().__init__(f"Invalid pay period {start}..{end}: {reason}")


# Worker-related exceptions


class WorkerError(TimeclockError):
    """Base exception for worker-related errors."""

    code: str = "WORKER_ERROR"


class WorkerNotFoundError(WorkerError):
    """Worker with given ID was not found."""

    code: str = "WORKER_NOT_FOUND"

    def __init__(self, worker_id: str):
        self.worker_id = worker_id
        super().__init__(f"Worker not found: {worker_id}")


class InvalidPayRateError(WorkerError):
    """Pay rate is negative or not a number."""

    code: str = "INVALID_PAY_RATE"

    def __init__(self, worker_id: str, rate: str):
        self.worker_id = worker_id
        self.rate = rate
        super().__init__(
            f"Pay rate must be a valid non-negative number for worker "
            f"{worker_id}, got {rate}"
        )


# Configuration exceptions


class ConfigurationError(TimeclockError):
    """Base exception for configuration errors."""

    code: str = "CONFIGURATION_ERROR"


class InvalidSettingsError(ConfigurationError):
    """Payroll settings failed validation."""

    code: str = "INVALID_SETTINGS"

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid payroll setting '{key}': {reason}")
