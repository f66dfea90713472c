"""ORM models for the timeclock storage boundary."""

from timeclock_kernel.models.pay_rate_history import PayRateHistoryModel
from timeclock_kernel.models.payout import PayoutModel
from timeclock_kernel.models.punch import PunchModel
from timeclock_kernel.models.worker import WorkerModel

__all__ = [
    "PayRateHistoryModel",
    "PayoutModel",
    "PunchModel",
    "WorkerModel",
]
