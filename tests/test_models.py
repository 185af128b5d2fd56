"""
Tests for Nexus Manager

Test strategy:
1. Unit tests for individual components (models, validators, reports)
2. Service tests over the demo company (with a fixed clock)
3. No real API calls in tests (use mocks)
"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from pydantic import ValidationError

from nexus_manager.models import (
    Account,
    AccountType,
    Asset,
    AssetType,
    BillStatus,
    BusinessData,
    Candidate,
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    Transaction,
    TransactionType,
    ValidationIssue,
    ValidationResult,
    to_money,
)
from nexus_manager.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestAccountingModels:
    """Tests for bookkeeping Pydantic models."""

    def test_to_money_rounds_half_up(self):
        """Money is kept to the cent."""
        assert to_money("10.005") == Decimal("10.01")
        assert to_money(0.1 + 0.2) == Decimal("0.30")

    def test_account_strips_whitespace(self):
        account = Account(code=" 1000 ", name="  Cash on Hand ", type=AccountType.ASSET)
        assert account.code == "1000"
        assert account.name == "Cash on Hand"

    def test_invoice_item_computes_total(self):
        """Line total is always quantity * unit price."""
        item = InvoiceItem(description="Hours", quantity=Decimal("2.5"), unit_price=Decimal("80"), total=1)
        assert item.total == Decimal("200.00")

    def test_invoice_item_rejects_negative_quantity(self):
        with pytest.raises(ValueError):
            InvoiceItem(description="Hours", quantity=-1, unit_price=10)

    def test_invoice_outstanding(self):
        invoice = Invoice(
            id="INV-1",
            client_name="Acme",
            date=date(2024, 1, 1),
            due_date=date(2024, 1, 31),
            total_amount=Decimal("100"),
        )
        assert invoice.status == InvoiceStatus.SENT
        assert invoice.is_outstanding
        assert not invoice.model_copy(update={"status": InvoiceStatus.VOID}).is_outstanding

    def test_transaction_signed_amount(self):
        expense = Transaction(
            id="1",
            date=date(2024, 1, 1),
            description="Rent",
            category="Rent Expense",
            amount=Decimal("4000"),
            type=TransactionType.EXPENSE,
        )
        assert expense.signed_amount == Decimal("-4000.00")

    def test_transaction_rejects_negative_amount(self):
        with pytest.raises(ValidationError):
            Transaction(
                id="1",
                date=date(2024, 1, 1),
                description="Refund",
                category="Sales Revenue",
                amount=Decimal("-5"),
                type=TransactionType.INCOME,
            )

    def test_asset_parses_enum_values(self):
        asset = Asset.model_validate({
            "id": "9",
            "name": "Van",
            "value": "30000",
            "type": "Fixed Asset",
            "date_acquired": "2022-03-01",
        })
        assert asset.type == AssetType.FIXED
        assert asset.value == Decimal("30000.00")

    def test_bill_status_values(self):
        assert [s.value for s in BillStatus] == ["Received", "Pending", "Paid", "Overdue"]


class TestHRModels:
    """Tests for HR models."""

    def test_candidate_match_score_bounds(self):
        with pytest.raises(ValidationError):
            Candidate(id="1", name="Eve", applying_for="QA Tester", match_score=120)


class TestBusinessData:
    """Tests for the state container."""

    def test_empty_by_default(self):
        data = BusinessData()
        assert data.transactions == []
        assert data.find_invoice("INV-1") is None


class TestAuditModels:
    """Tests for audit event models."""

    def test_audit_event_creation(self):
        """Test AuditEvent creation."""
        event = AuditEvent(
            event_type=AuditEventType.INVOICE_CREATED,
            description="Invoice created",
        )
        assert event.severity == AuditSeverity.INFO
        assert isinstance(event.timestamp, datetime)

    def test_audit_event_to_log_dict(self):
        """Test conversion to a structured log dict."""
        event = AuditEventBuilder.bill_paid("BILL-001", "AWS Services", Decimal("850.00"), "42")
        log_dict = event.to_log_dict()

        assert log_dict["event_type"] == "bill_paid"
        assert log_dict["entity_id"] == "BILL-001"
        assert log_dict["details"]["amount"] == "850.00"

    def test_audit_event_to_table_row(self):
        event = AuditEventBuilder.invoice_voided("INV-1", "Sent")
        row = event.to_table_row()

        assert row["entity"] == "invoice:INV-1"
        assert row["description"] == "Invoice INV-1 voided"

    def test_transaction_from_payment_is_not_user_action(self):
        """Ledger entries booked by a payment are system side effects."""
        event = AuditEventBuilder.transaction_recorded(
            "1", "Invoice Payment", Decimal("5"), "Income", reference_id="INV-1"
        )
        assert event.is_user_action is False

    def test_every_event_type_has_a_builder(self):
        """Each event type the activity log can show is one the app emits."""
        builders = {
            name for name in vars(AuditEventBuilder)
            if not name.startswith("_")
        }
        assert {t.value for t in AuditEventType} == builders

    def test_long_names_are_truncated_in_description(self):
        """Builders never fail on long record names."""
        event = AuditEventBuilder.candidate_added("7", "Eve Adams", "R" * 600)

        assert len(event.description) == 500
        assert event.description.startswith("Candidate Eve Adams applied for RRR")

    def test_transition_rejected_is_warning(self):
        event = AuditEventBuilder.transition_rejected("invoice", "INV-1", "Invoice is void")
        assert event.severity == AuditSeverity.WARNING


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        result = ValidationResult(
            operation="create_bill",
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="vendor_name",
                    issue_type="missing",
                    message="Vendor name is required",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors
        assert result.error_count == 1
        assert result.missing_fields == ["vendor_name"]

    def test_validation_issue_severity_pattern(self):
        with pytest.raises(ValidationError):
            ValidationIssue(field="x", issue_type="missing", message="m", severity="fatal")
