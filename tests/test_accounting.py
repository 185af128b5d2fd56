"""
Tests for bookkeeping operations.

The payment rules are the heart of the books: every payment books
exactly one ledger transaction, and paying twice never books twice.
"""

from datetime import date
from decimal import Decimal

import pytest

from nexus_manager.models import (
    AccountType,
    AssetType,
    AuditEventType,
    BillStatus,
    InvoiceItem,
    InvoiceStatus,
    LiabilityType,
    TransactionType,
)
from nexus_manager.storage import DuplicateError, NotFoundError
from nexus_manager.validation import InvalidTransitionError, ValidationFailedError

TODAY = date(2024, 1, 15)


class TestGeneralLedger:
    """Tests for manual journal entries and the chart of accounts."""

    def test_add_transaction_prepends_to_ledger(self, accounting, store):
        """New entries go to the top of the ledger."""
        before = len(store.data.transactions)

        transaction = accounting.add_transaction(
            description="Office supplies",
            amount="120.50",
            category="Utilities",
        )

        assert len(store.data.transactions) == before + 1
        assert store.data.transactions[0] == transaction
        assert transaction.amount == Decimal("120.50")

    def test_add_transaction_defaults(self, accounting):
        """Type defaults to Expense and date to today."""
        transaction = accounting.add_transaction("Coffee", 12, "Utilities")

        assert transaction.type == TransactionType.EXPENSE
        assert transaction.date == TODAY
        assert transaction.reference_id is None

    def test_add_transaction_requires_description(self, accounting, store):
        """Blank description is refused and nothing is booked."""
        before = store.data

        with pytest.raises(ValidationFailedError) as exc_info:
            accounting.add_transaction("   ", 100, "Utilities")

        assert exc_info.value.result.missing_fields == ["description"]
        assert store.data is before

    def test_add_transaction_rejects_unreadable_amount(self, accounting):
        """Amounts must be non-negative numbers."""
        with pytest.raises(ValidationFailedError):
            accounting.add_transaction("Refund", "-5", "Utilities")

    def test_validation_failure_is_audited(self, accounting, audit_logger):
        """Refused input shows up in the activity log."""
        with pytest.raises(ValidationFailedError):
            accounting.add_transaction("", "", "")

        events = audit_logger.recent_events(event_type=AuditEventType.VALIDATION_FAILED)
        assert len(events) == 1
        assert events[0].details["operation"] == "add_transaction"

    def test_overlong_description_is_refused(self, accounting, store):
        """Model limits are reported like missing fields, and nothing is booked."""
        before = store.data

        with pytest.raises(ValidationFailedError) as exc_info:
            accounting.add_transaction("x" * 600, "10", "Utilities")

        issue = exc_info.value.result.issues[0]
        assert issue.field == "description"
        assert issue.issue_type == "invalid_value"
        assert store.data is before

    def test_chart_of_accounts_sorted_by_code(self, accounting):
        """Accounts are listed by code."""
        accounting.add_account("0500", "Petty Cash", AccountType.ASSET)

        codes = [a.code for a in accounting.chart_of_accounts()]
        assert codes == sorted(codes)
        assert codes[0] == "0500"

    def test_add_account_rejects_duplicate_code(self, accounting):
        """Account codes are unique."""
        with pytest.raises(DuplicateError):
            accounting.add_account("1000", "Another Cash", AccountType.ASSET)

    def test_expense_accounts(self, accounting):
        """Only Expense accounts are offered for bills."""
        names = [a.name for a in accounting.expense_accounts()]
        assert names == [
            "Cost of Goods Sold",
            "Payroll Expense",
            "Rent Expense",
            "Utilities",
            "Software & IT",
        ]


class TestReceivables:
    """Tests for invoices."""

    def test_create_invoice_computes_totals(self, accounting):
        """Line totals are quantity * unit price; the invoice sums them."""
        invoice = accounting.create_invoice(
            client_name="Initech",
            due_date=date(2024, 2, 15),
            items=[
                {"description": "Design", "quantity": 2, "unit_price": "150.25"},
                InvoiceItem(description="Hosting", quantity=3, unit_price=10),
            ],
        )

        assert [i.total for i in invoice.items] == [Decimal("300.50"), Decimal("30.00")]
        assert invoice.total_amount == Decimal("330.50")
        assert invoice.status == InvoiceStatus.SENT
        assert invoice.date == TODAY

    def test_create_invoice_id_format(self, accounting, store):
        """Invoice numbers are INV- plus six digits, listed first."""
        invoice = accounting.create_invoice("Initech", date(2024, 2, 15), [])

        assert invoice.id.startswith("INV-")
        assert len(invoice.id) == len("INV-") + 6
        assert store.data.invoices[0].id == invoice.id

    def test_create_invoice_drops_empty_rows(self, accounting):
        """Rows with no description and no amount are ignored."""
        invoice = accounting.create_invoice(
            "Initech",
            date(2024, 2, 15),
            [
                {"description": "Audit", "quantity": 1, "unit_price": 900},
                {"description": "", "quantity": 1, "unit_price": 0},
            ],
        )
        assert len(invoice.items) == 1

    def test_create_invoice_requires_client_and_due_date(self, accounting):
        """Client name and due date are required."""
        with pytest.raises(ValidationFailedError) as exc_info:
            accounting.create_invoice("", None, [])

        assert set(exc_info.value.result.missing_fields) == {"client_name", "due_date"}

    def test_create_invoice_rejects_negative_quantity(self, accounting, store, audit_logger):
        before = store.data

        with pytest.raises(ValidationFailedError) as exc_info:
            accounting.create_invoice(
                client_name="Acme",
                due_date=date(2024, 2, 15),
                items=[{"description": "Hours", "quantity": -2, "unit_price": 50}],
            )

        assert [i.field for i in exc_info.value.result.issues] == ["quantity"]
        assert store.data is before
        events = audit_logger.recent_events(event_type=AuditEventType.VALIDATION_FAILED)
        assert events[0].details["operation"] == "create_invoice"

    def test_mark_invoice_paid_books_income(self, accounting, store):
        """Paying an invoice books one Income transaction referencing it."""
        transaction = accounting.mark_invoice_paid("INV-2023-001")

        invoice = store.data.find_invoice("INV-2023-001")
        assert invoice.status == InvoiceStatus.PAID
        assert store.data.transactions[0] == transaction
        assert transaction.description == "Invoice Payment: INV-2023-001 - Acme Corp"
        assert transaction.amount == Decimal("5000.00")
        assert transaction.category == "Sales Revenue"
        assert transaction.type == TransactionType.INCOME
        assert transaction.date == TODAY
        assert transaction.reference_id == "INV-2023-001"

    def test_mark_invoice_paid_twice_is_noop(self, accounting, store):
        """A paid invoice is never paid again."""
        accounting.mark_invoice_paid("INV-2023-001")
        snapshot = store.data

        assert accounting.mark_invoice_paid("INV-2023-001") is None
        assert store.data is snapshot
        assert len(store.data.transactions_for("INV-2023-001")) == 1

    def test_mark_overdue_invoice_paid(self, accounting, store):
        """Overdue invoices can still be paid."""
        accounting.mark_invoice_paid("INV-2023-002")
        assert store.data.find_invoice("INV-2023-002").status == InvoiceStatus.PAID

    def test_mark_unknown_invoice_paid(self, accounting):
        with pytest.raises(NotFoundError):
            accounting.mark_invoice_paid("INV-404")

    def test_void_invoice_cannot_be_paid(self, accounting, store, audit_logger):
        """Voided invoices are out of receivables for good."""
        accounting.void_invoice("INV-2023-001")

        with pytest.raises(InvalidTransitionError):
            accounting.mark_invoice_paid("INV-2023-001")

        assert store.data.transactions_for("INV-2023-001") == []
        rejected = audit_logger.recent_events(event_type=AuditEventType.TRANSITION_REJECTED)
        assert rejected[0].entity_id == "INV-2023-001"

    def test_paid_invoice_cannot_be_voided(self, accounting):
        accounting.mark_invoice_paid("INV-2023-001")

        with pytest.raises(InvalidTransitionError):
            accounting.void_invoice("INV-2023-001")

    def test_payment_events_share_correlation_id(self, accounting, audit_storage):
        """The paid event and its ledger entry can be traced together."""
        transaction = accounting.mark_invoice_paid("INV-2023-001")

        paid_event = audit_storage.get_events_by_entity("invoice", "INV-2023-001")[-1]
        related = audit_storage.get_events_by_correlation_id(paid_event.correlation_id)

        assert [e.event_type for e in related] == [
            AuditEventType.INVOICE_PAID,
            AuditEventType.TRANSACTION_RECORDED,
        ]
        assert related[1].entity_id == transaction.id

    def test_activity_trail_records_every_step(self, accounting, audit_logger):
        """A manual entry and a payment leave three events, newest first."""
        accounting.add_transaction("Coffee beans", "42.50", "Office Supplies")
        accounting.mark_invoice_paid("INV-2023-001")

        assert [e.event_type for e in audit_logger.recent_events()] == [
            AuditEventType.TRANSACTION_RECORDED,
            AuditEventType.INVOICE_PAID,
            AuditEventType.TRANSACTION_RECORDED,
        ]


class TestPayables:
    """Tests for vendor bills."""

    def test_create_bill(self, accounting, store):
        """New bills arrive as Received and are listed first."""
        bill = accounting.create_bill(
            vendor_name="Paper Co",
            amount="75.00",
            category="Utilities",
            invoice_number="PC-1",
            due_date=date(2024, 2, 1),
        )

        assert bill.id.startswith("BILL-")
        assert bill.status == BillStatus.RECEIVED
        assert bill.date == TODAY
        assert store.data.bills[0] == bill

    def test_create_bill_requires_vendor_amount_category(self, accounting):
        with pytest.raises(ValidationFailedError) as exc_info:
            accounting.create_bill("", None, "")

        assert set(exc_info.value.result.missing_fields) == {"vendor_name", "amount", "category"}

    def test_create_bill_rejects_long_vendor_invoice_number(self, accounting, store):
        before = store.data

        with pytest.raises(ValidationFailedError) as exc_info:
            accounting.create_bill("Paper Co", "75.00", "Utilities", invoice_number="N" * 51)

        assert exc_info.value.result.issues[0].field == "invoice_number"
        assert "invoice_number" in str(exc_info.value)
        assert store.data is before

    def test_pay_bill_books_expense(self, accounting, store):
        """Paying a bill books one Expense transaction against its category."""
        transaction = accounting.pay_bill("BILL-001")

        assert store.data.find_bill("BILL-001").status == BillStatus.PAID
        assert transaction.description == "Bill Payment: AWS Services (AWS-8821)"
        assert transaction.amount == Decimal("850.00")
        assert transaction.category == "Software & IT"
        assert transaction.type == TransactionType.EXPENSE
        assert transaction.reference_id == "BILL-001"
        assert store.data.transactions[0] == transaction

    def test_pay_bill_twice_is_noop(self, accounting, store):
        accounting.pay_bill("BILL-002")

        assert accounting.pay_bill("BILL-002") is None
        assert len(store.data.transactions_for("BILL-002")) == 1

    def test_pay_unknown_bill(self, accounting):
        with pytest.raises(NotFoundError):
            accounting.pay_bill("BILL-404")


class TestMarkOverdue:
    """Tests for flagging late documents."""

    def test_marks_late_sent_invoices_and_unpaid_bills(self, accounting, store):
        """Everything in the demo books is past due by 2024."""
        invoice_ids, bill_ids = accounting.mark_overdue(date(2024, 1, 1))

        assert invoice_ids == ["INV-2023-001"]
        assert bill_ids == ["BILL-001", "BILL-002"]
        assert store.data.find_invoice("INV-2023-001").status == InvoiceStatus.OVERDUE
        assert store.data.find_bill("BILL-002").status == BillStatus.OVERDUE

    def test_documents_not_yet_due_are_untouched(self, accounting, store):
        invoice_ids, bill_ids = accounting.mark_overdue(date(2023, 11, 12))

        assert invoice_ids == []
        assert bill_ids == ["BILL-001"]
        assert store.data.find_bill("BILL-002").status == BillStatus.RECEIVED

    def test_paid_documents_are_untouched(self, accounting, store):
        accounting.pay_bill("BILL-001")

        _, bill_ids = accounting.mark_overdue(date(2024, 1, 1))

        assert "BILL-001" not in bill_ids
        assert store.data.find_bill("BILL-001").status == BillStatus.PAID

    def test_nothing_overdue_leaves_store_alone(self, accounting, store):
        snapshot = store.data
        assert accounting.mark_overdue(date(2023, 1, 1)) == ([], [])
        assert store.data is snapshot


class TestAssetsAndLiabilities:
    """Tests for balance-sheet items."""

    def test_add_asset_appends_with_defaults(self, accounting, store):
        asset = accounting.add_asset("Laptop", "2400")

        assert store.data.assets[-1] == asset
        assert asset.type == AssetType.CURRENT
        assert asset.date_acquired == TODAY

    def test_add_asset_requires_name(self, accounting):
        with pytest.raises(ValidationFailedError):
            accounting.add_asset("", 100)

    def test_add_liability_appends_with_defaults(self, accounting, store):
        liability = accounting.add_liability("Credit line", 10000)

        assert store.data.liabilities[-1] == liability
        assert liability.type == LiabilityType.CURRENT
        assert liability.due_date == TODAY

    def test_add_liability_keeps_given_due_date(self, accounting):
        liability = accounting.add_liability(
            "Equipment lease",
            5000,
            LiabilityType.LONG_TERM,
            due_date=date(2027, 6, 30),
        )
        assert liability.due_date == date(2027, 6, 30)


class TestIds:
    """Record ids stay unique under rapid creation."""

    def test_same_millisecond_ids_are_unique(self, store, app_settings):
        from nexus_manager.accounting import AccountingService
        from nexus_manager.storage import IdGenerator

        frozen = IdGenerator(clock_ms=lambda: 1_700_000_000_000)
        service = AccountingService(store, ids=frozen, settings=app_settings)

        first = service.add_transaction("A", 1, "Utilities")
        second = service.add_transaction("B", 1, "Utilities")
        bill_a = service.create_bill("V", 1, "Utilities")
        bill_b = service.create_bill("V", 1, "Utilities")

        assert first.id != second.id
        assert bill_a.id != bill_b.id
