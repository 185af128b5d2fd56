"""
Report Models

Read-only views computed from a BusinessData snapshot: dashboard tiles,
balance sheet, profit & loss, aging, and the financial summary handed
to the AI analyst.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class DashboardStats(BaseModel):
    """Headline numbers shown on the dashboard."""

    total_assets: Decimal
    total_liabilities: Decimal
    net_worth: Decimal
    employee_count: int = Field(ge=0, description="Active employees only")
    total_revenue: Decimal
    total_expenses: Decimal


class CashFlowBar(BaseModel):
    """One bar of the income vs. expenses chart."""

    name: str
    amount: Decimal
    fill: str


class IncomeStatement(BaseModel):
    total_revenue: Decimal
    total_expenses: Decimal
    net_income: Decimal


class ReceivablesSummary(BaseModel):
    total_outstanding: Decimal
    count: int = Field(ge=0)


class PayablesSummary(BaseModel):
    total_unpaid: Decimal
    count: int = Field(ge=0)


class FinancialSummary(BaseModel):
    """
    Condensed financial picture sent to the AI analyst.

    Only aggregates and a handful of recent entries go out;
    the full ledger never leaves the process.
    """

    total_assets: Decimal
    total_liabilities: Decimal
    income_statement: IncomeStatement
    receivables: ReceivablesSummary
    payables: PayablesSummary
    recent_transactions: list[str] = Field(default_factory=list)
    cash_position: Decimal

    def to_prompt_dict(self) -> dict:
        """JSON-serializable form for the prompt; amounts become decimal strings such as "1250.00"."""
        return self.model_dump(mode="json")


class BalanceSheetLine(BaseModel):
    name: str
    type: str
    amount: Decimal


class BalanceSheet(BaseModel):
    assets: list[BalanceSheetLine] = Field(default_factory=list)
    liabilities: list[BalanceSheetLine] = Field(default_factory=list)
    total_assets: Decimal
    total_liabilities: Decimal
    net_worth: Decimal


class ProfitAndLoss(BaseModel):
    revenue_by_category: dict[str, Decimal] = Field(default_factory=dict)
    expenses_by_category: dict[str, Decimal] = Field(default_factory=dict)
    total_revenue: Decimal
    total_expenses: Decimal
    net_income: Decimal


class AgingBucket(str, Enum):
    CURRENT = "Current"
    DAYS_1_30 = "1-30"
    DAYS_31_60 = "31-60"
    DAYS_61_90 = "61-90"
    OVER_90 = "90+"

    @classmethod
    def for_days_past_due(cls, days: int) -> "AgingBucket":
        if days <= 0:
            return cls.CURRENT
        if days <= 30:
            return cls.DAYS_1_30
        if days <= 60:
            return cls.DAYS_31_60
        if days <= 90:
            return cls.DAYS_61_90
        return cls.OVER_90


class AgingEntry(BaseModel):
    """An open invoice or bill with its age."""

    document_id: str
    counterparty: str = Field(description="Client for invoices, vendor for bills")
    due_date: Optional[date] = None
    amount: Decimal
    status: str
    days_past_due: int = 0
    bucket: AgingBucket = AgingBucket.CURRENT


class AgingReport(BaseModel):
    as_of: date
    receivables: list[AgingEntry] = Field(default_factory=list)
    payables: list[AgingEntry] = Field(default_factory=list)

    @staticmethod
    def _totals(entries: list[AgingEntry]) -> dict[str, Decimal]:
        totals = {bucket.value: Decimal("0.00") for bucket in AgingBucket}
        for entry in entries:
            totals[entry.bucket.value] += entry.amount
        return totals

    @property
    def receivables_by_bucket(self) -> dict[str, Decimal]:
        return self._totals(self.receivables)

    @property
    def payables_by_bucket(self) -> dict[str, Decimal]:
        return self._totals(self.payables)
