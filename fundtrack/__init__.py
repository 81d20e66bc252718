"""Mini README: Core package initializer for the fund tracking ledger.

The package tracks fund movements across the BDO, GCash and Cash accounts and
a separately budgeted diesel sub-ledger. ``records`` holds the data and the
store, ``ledger`` the read-only projections, ``storage`` and ``export`` the
file boundaries, ``insights`` the optional AI features and ``interface`` the
web API.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
