"""
Gigboard - a freelance marketplace.

Employers post jobs, freelancers apply, employers decide.
"""

from .marketplace import JobService, PaymentLedger, ProfileService

try:
    from importlib.metadata import version

    __version__ = version("gigboard")
except Exception:
    __version__ = "0.0.0"

__all__ = ["JobService", "PaymentLedger", "ProfileService"]
