"""
Financial Reports

Pure functions from a BusinessData snapshot to report models.
Nothing here writes to the store, so reports can be computed from any
snapshot, including one a caller is still holding after an update.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from nexus_manager.models import (
    AgingBucket,
    AgingEntry,
    AgingReport,
    BalanceSheet,
    BalanceSheetLine,
    BusinessData,
    CashFlowBar,
    DashboardStats,
    EmployeeStatus,
    FinancialSummary,
    IncomeStatement,
    PayablesSummary,
    ProfitAndLoss,
    ReceivablesSummary,
    TransactionType,
    to_money,
)


INCOME_BAR_COLOR = "#10b981"
EXPENSE_BAR_COLOR = "#ef4444"


def _total(amounts: Iterable[Decimal]) -> Decimal:
    return to_money(sum(amounts, Decimal("0")))


# =============================================================================
# TOTALS
# =============================================================================

def total_assets(data: BusinessData) -> Decimal:
    return _total(a.value for a in data.assets)


def total_liabilities(data: BusinessData) -> Decimal:
    return _total(l.amount for l in data.liabilities)


def net_worth(data: BusinessData) -> Decimal:
    return total_assets(data) - total_liabilities(data)


def total_revenue(data: BusinessData) -> Decimal:
    return _total(
        t.amount for t in data.transactions if t.type == TransactionType.INCOME
    )


def total_expenses(data: BusinessData) -> Decimal:
    return _total(
        t.amount for t in data.transactions if t.type == TransactionType.EXPENSE
    )


def outstanding_invoices(data: BusinessData) -> list:
    """Invoices still expected to be paid (neither Paid nor Void)."""
    return [i for i in data.invoices if i.is_outstanding]


def unpaid_bills(data: BusinessData) -> list:
    return [b for b in data.bills if b.is_unpaid]


def total_receivables(data: BusinessData) -> Decimal:
    return _total(i.total_amount for i in outstanding_invoices(data))


def total_payables(data: BusinessData) -> Decimal:
    return _total(b.amount for b in unpaid_bills(data))


def active_employee_count(data: BusinessData) -> int:
    return sum(1 for e in data.employees if e.status == EmployeeStatus.ACTIVE)


def cash_position(data: BusinessData) -> Decimal:
    """Value of the first asset whose name mentions cash; zero if none."""
    cash = next((a for a in data.assets if "Cash" in a.name), None)
    return cash.value if cash else Decimal("0.00")


# =============================================================================
# DASHBOARD
# =============================================================================

def dashboard_stats(data: BusinessData) -> DashboardStats:
    return DashboardStats(
        total_assets=total_assets(data),
        total_liabilities=total_liabilities(data),
        net_worth=net_worth(data),
        employee_count=active_employee_count(data),
        total_revenue=total_revenue(data),
        total_expenses=total_expenses(data),
    )


def cash_flow_chart(data: BusinessData) -> list[CashFlowBar]:
    """The two bars of the income vs. expenses chart."""
    return [
        CashFlowBar(name="Income", amount=total_revenue(data), fill=INCOME_BAR_COLOR),
        CashFlowBar(name="Expenses", amount=total_expenses(data), fill=EXPENSE_BAR_COLOR),
    ]


# =============================================================================
# STATEMENTS
# =============================================================================

def balance_sheet(data: BusinessData) -> BalanceSheet:
    return BalanceSheet(
        assets=[
            BalanceSheetLine(name=a.name, type=a.type.value, amount=a.value)
            for a in data.assets
        ],
        liabilities=[
            BalanceSheetLine(name=l.name, type=l.type.value, amount=l.amount)
            for l in data.liabilities
        ],
        total_assets=total_assets(data),
        total_liabilities=total_liabilities(data),
        net_worth=net_worth(data),
    )


def profit_and_loss(data: BusinessData) -> ProfitAndLoss:
    """Income statement with per-category breakdowns (largest first)."""
    revenue: dict[str, Decimal] = {}
    expenses: dict[str, Decimal] = {}
    for t in data.transactions:
        bucket = revenue if t.type == TransactionType.INCOME else expenses
        bucket[t.category] = bucket.get(t.category, Decimal("0.00")) + t.amount

    def _sorted(totals: dict[str, Decimal]) -> dict[str, Decimal]:
        return dict(sorted(totals.items(), key=lambda kv: kv[1], reverse=True))

    revenue_total = total_revenue(data)
    expense_total = total_expenses(data)
    return ProfitAndLoss(
        revenue_by_category=_sorted(revenue),
        expenses_by_category=_sorted(expenses),
        total_revenue=revenue_total,
        total_expenses=expense_total,
        net_income=revenue_total - expense_total,
    )


def aging_report(data: BusinessData, as_of: Optional[date] = None) -> AgingReport:
    """
    Open receivables and payables grouped by how late they are.

    Bills without a due date are treated as current.
    """
    as_of = as_of or date.today()

    def _days_past_due(due: Optional[date]) -> int:
        if due is None:
            return 0
        return max((as_of - due).days, 0)

    receivables = []
    for invoice in outstanding_invoices(data):
        days = _days_past_due(invoice.due_date)
        receivables.append(AgingEntry(
            document_id=invoice.id,
            counterparty=invoice.client_name,
            due_date=invoice.due_date,
            amount=invoice.total_amount,
            status=invoice.status.value,
            days_past_due=days,
            bucket=AgingBucket.for_days_past_due(days),
        ))

    payables = []
    for bill in unpaid_bills(data):
        days = _days_past_due(bill.due_date)
        payables.append(AgingEntry(
            document_id=bill.id,
            counterparty=bill.vendor_name,
            due_date=bill.due_date,
            amount=bill.amount,
            status=bill.status.value,
            days_past_due=days,
            bucket=AgingBucket.for_days_past_due(days),
        ))

    return AgingReport(as_of=as_of, receivables=receivables, payables=payables)


# =============================================================================
# AI ANALYST PAYLOAD
# =============================================================================

def financial_summary(
    data: BusinessData,
    recent_count: int = 5,
    currency_symbol: str = "$",
) -> FinancialSummary:
    """
    Condensed picture of the books for the financial analyst.

    The ledger is newest first, so the leading entries are the recent ones.
    """
    revenue = total_revenue(data)
    expenses = total_expenses(data)
    outstanding = outstanding_invoices(data)
    unpaid = unpaid_bills(data)

    return FinancialSummary(
        total_assets=total_assets(data),
        total_liabilities=total_liabilities(data),
        income_statement=IncomeStatement(
            total_revenue=revenue,
            total_expenses=expenses,
            net_income=revenue - expenses,
        ),
        receivables=ReceivablesSummary(
            total_outstanding=total_receivables(data),
            count=len(outstanding),
        ),
        payables=PayablesSummary(
            total_unpaid=total_payables(data),
            count=len(unpaid),
        ),
        recent_transactions=[
            f"{t.date.isoformat()}: {t.description} ({currency_symbol}{t.amount})"
            for t in data.transactions[:recent_count]
        ],
        cash_position=cash_position(data),
    )
