"""
Data Models Package

This package contains all Pydantic models used in Nexus Manager.
All data flowing through the system must conform to these schemas.
"""

from nexus_manager.models.accounting import (
    Account,
    AccountType,
    Asset,
    AssetType,
    Bill,
    BillStatus,
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    Liability,
    LiabilityType,
    Transaction,
    TransactionType,
    to_money,
)
from nexus_manager.models.hr import (
    Candidate,
    CandidateStage,
    Employee,
    EmployeeStatus,
    JobProforma,
)
from nexus_manager.models.business import BusinessData
from nexus_manager.models.reports import (
    AgingBucket,
    AgingEntry,
    AgingReport,
    BalanceSheet,
    BalanceSheetLine,
    CashFlowBar,
    DashboardStats,
    FinancialSummary,
    IncomeStatement,
    PayablesSummary,
    ProfitAndLoss,
    ReceivablesSummary,
)
from nexus_manager.models.validation import ValidationIssue, ValidationResult
from nexus_manager.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Bookkeeping models
    "Account",
    "AccountType",
    "Asset",
    "AssetType",
    "Bill",
    "BillStatus",
    "Invoice",
    "InvoiceItem",
    "InvoiceStatus",
    "Liability",
    "LiabilityType",
    "Transaction",
    "TransactionType",
    "to_money",
    # HR models
    "Candidate",
    "CandidateStage",
    "Employee",
    "EmployeeStatus",
    "JobProforma",
    # State
    "BusinessData",
    # Reports
    "AgingBucket",
    "AgingEntry",
    "AgingReport",
    "BalanceSheet",
    "BalanceSheetLine",
    "CashFlowBar",
    "DashboardStats",
    "FinancialSummary",
    "IncomeStatement",
    "PayablesSummary",
    "ProfitAndLoss",
    "ReceivablesSummary",
    # Validation
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
