"""Read-only selectors for the storage boundary."""

from timeclock_kernel.selectors.base import BaseSelector
from timeclock_kernel.selectors.payroll_selector import PayrollSelector

__all__ = ["BaseSelector", "PayrollSelector"]
