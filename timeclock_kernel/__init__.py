"""
Timeclock Kernel

Pure time-accounting core for hourly payroll:
- Punch pairing into worked intervals
- Weekly overtime
- Effective-dated pay-rate history
- Weekly pay summaries with carried-forward unpaid balances
"""

__version__ = "0.1.0"
