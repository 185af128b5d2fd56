"""Bookkeeping operations and financial reports."""

from nexus_manager.accounting import reports
from nexus_manager.accounting.service import AccountingService

__all__ = [
    "AccountingService",
    "reports",
]
