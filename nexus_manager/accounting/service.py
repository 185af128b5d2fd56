"""
Bookkeeping Operations

General ledger, receivables, payables and balance-sheet items.

The two rules that tie the books together:
1. Paying an invoice marks it Paid AND books an Income transaction
2. Paying a bill marks it Paid AND books an Expense transaction

Both halves are applied in a single store update, so no reader ever sees
a paid document without its ledger entry (or the reverse). A document
that is already paid is left alone: paying twice never books twice.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Callable, Iterable, Optional, Union

from nexus_manager.audit import AuditLogger, create_correlation_id
from nexus_manager.config import AppSettings, get_settings
from nexus_manager.models import (
    Account,
    AccountType,
    Asset,
    AssetType,
    AuditEventBuilder,
    Bill,
    BillStatus,
    BusinessData,
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    Liability,
    LiabilityType,
    Transaction,
    TransactionType,
    to_money,
)
from nexus_manager.storage import BusinessStore, DuplicateError, IdGenerator, NotFoundError
from nexus_manager.validation import (
    InvalidTransitionError,
    ModelT,
    RecordValidator,
    ValidationFailedError,
    is_blank,
    parse_amount,
)


def _replace(records: list, record_id: str, new_record) -> list:
    """Copy of `records` with the record carrying `record_id` swapped out."""
    return [new_record if r.id == record_id else r for r in records]


class AccountingService:
    """
    Bookkeeping operations over the business store.

    Every operation validates its input, applies one functional update
    to the store, writes audit events and returns the affected record.
    """

    def __init__(
        self,
        store: BusinessStore,
        audit_logger: Optional[AuditLogger] = None,
        validator: Optional[RecordValidator] = None,
        ids: Optional[IdGenerator] = None,
        today: Optional[Callable[[], date]] = None,
        settings: Optional[AppSettings] = None,
    ):
        self._store = store
        self._audit_logger = audit_logger
        self._validator = validator or RecordValidator()
        self._ids = ids or IdGenerator()
        self._today = today or date.today
        self._settings = settings or get_settings().app

    @property
    def data(self) -> BusinessData:
        return self._store.data

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _audit(self, event) -> None:
        if self._audit_logger:
            self._audit_logger.log(event)

    def _require(
        self,
        operation: str,
        required: Optional[dict[str, Any]] = None,
        amounts: Optional[dict[str, Any]] = None,
    ) -> None:
        result = self._validator.check(operation, required=required, amounts=amounts)
        if not result.is_valid:
            if self._audit_logger:
                self._audit_logger.log_validation_failed(result)
            raise ValidationFailedError(result)

    def _build(self, operation: str, model: type[ModelT], **fields: Any) -> ModelT:
        try:
            return self._validator.build(operation, model, **fields)
        except ValidationFailedError as e:
            if self._audit_logger:
                self._audit_logger.log_validation_failed(e.result)
            raise

    def _reject(self, entity_type: str, entity_id: str, reason: str) -> None:
        if self._audit_logger:
            self._audit_logger.log_transition_rejected(entity_type, entity_id, reason)
        raise InvalidTransitionError(reason)

    def _get_invoice(self, invoice_id: str) -> Invoice:
        invoice = self.data.find_invoice(invoice_id)
        if invoice is None:
            raise NotFoundError(f"Invoice not found: {invoice_id}")
        return invoice

    def _get_bill(self, bill_id: str) -> Bill:
        bill = self.data.find_bill(bill_id)
        if bill is None:
            raise NotFoundError(f"Bill not found: {bill_id}")
        return bill

    # =========================================================================
    # GENERAL LEDGER
    # =========================================================================

    def add_transaction(
        self,
        description: str,
        amount: Union[Decimal, float, str],
        category: str,
        transaction_type: TransactionType = TransactionType.EXPENSE,
        transaction_date: Optional[date] = None,
    ) -> Transaction:
        """
        Book a manual journal entry.

        New entries go to the top of the ledger.
        """
        self._require(
            "add_transaction",
            required={"description": description, "category": category},
            amounts={"amount": amount},
        )

        transaction = self._build(
            "add_transaction",
            Transaction,
            id=self._ids.next_id(),
            date=transaction_date or self._today(),
            description=description,
            amount=parse_amount(amount),
            category=category,
            type=transaction_type,
        )

        self._store.update(
            lambda prev: prev.model_copy(
                update={"transactions": [transaction, *prev.transactions]}
            )
        )

        self._audit(AuditEventBuilder.transaction_recorded(
            transaction_id=transaction.id,
            description=transaction.description,
            amount=transaction.amount,
            transaction_type=transaction.type.value,
        ))
        return transaction

    def add_account(
        self,
        code: str,
        name: str,
        account_type: AccountType,
        description: Optional[str] = None,
    ) -> Account:
        """Add an account to the chart of accounts; codes are unique."""
        self._require(
            "add_account",
            required={"code": code, "name": name, "account_type": account_type},
        )
        if self.data.find_account(code.strip()) is not None:
            raise DuplicateError(f"Account code already in use: {code.strip()}")

        account = self._build(
            "add_account",
            Account,
            code=code,
            name=name,
            type=account_type,
            description=description or None,
        )
        self._store.update(
            lambda prev: prev.model_copy(
                update={"chart_of_accounts": [*prev.chart_of_accounts, account]}
            )
        )
        self._audit(AuditEventBuilder.account_added(
            account.code, account.name, account.type.value
        ))
        return account

    def chart_of_accounts(self) -> list[Account]:
        """Accounts ordered by code."""
        return sorted(self.data.chart_of_accounts, key=lambda a: a.code)

    def expense_accounts(self) -> list[Account]:
        """Accounts a bill can be booked against."""
        return self.data.accounts_of_type(AccountType.EXPENSE)

    def account_names(self) -> list[str]:
        return [a.name for a in self.chart_of_accounts()]

    # =========================================================================
    # RECEIVABLES
    # =========================================================================

    def create_invoice(
        self,
        client_name: str,
        due_date: Optional[date],
        items: Iterable[Union[InvoiceItem, dict]],
        invoice_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> Invoice:
        """
        Issue an invoice to a client.

        Line totals are quantity * unit price; the invoice total is their sum.
        Rows with neither a description nor an amount are dropped.
        New invoices are issued as Sent and listed first.
        """
        self._require(
            "create_invoice",
            required={"client_name": client_name, "due_date": due_date},
        )

        line_items = [
            item if isinstance(item, InvoiceItem)
            else self._build("create_invoice", InvoiceItem, **item)
            for item in items
        ]
        line_items = [
            item for item in line_items
            if not (is_blank(item.description) and item.total == 0)
        ]
        total = to_money(sum((item.total for item in line_items), Decimal("0")))

        invoice = self._build(
            "create_invoice",
            Invoice,
            id=self._ids.next_document_id(
                "INV", taken={i.id for i in self.data.invoices}
            ),
            client_name=client_name,
            date=invoice_date or self._today(),
            due_date=due_date,
            items=line_items,
            total_amount=total,
            status=InvoiceStatus.SENT,
            notes=notes or None,
        )

        self._store.update(
            lambda prev: prev.model_copy(
                update={"invoices": [invoice, *prev.invoices]}
            )
        )

        self._audit(AuditEventBuilder.invoice_created(
            invoice_id=invoice.id,
            client_name=invoice.client_name,
            total=invoice.total_amount,
            item_count=len(invoice.items),
        ))
        return invoice

    def mark_invoice_paid(self, invoice_id: str) -> Optional[Transaction]:
        """
        Record payment of an invoice.

        Marks the invoice Paid and books the matching Income transaction
        against the configured revenue account.

        Returns:
            The new ledger transaction, or None if the invoice was
            already paid (nothing changes in that case).

        Raises:
            NotFoundError: Unknown invoice id
            InvalidTransitionError: The invoice is void
        """
        invoice = self._get_invoice(invoice_id)

        if invoice.status == InvoiceStatus.PAID:
            return None
        if invoice.status == InvoiceStatus.VOID:
            self._reject("invoice", invoice.id, f"Invoice {invoice.id} is void and cannot be paid")

        correlation_id = create_correlation_id()
        paid = invoice.model_copy(update={"status": InvoiceStatus.PAID})
        transaction = self._build(
            "mark_invoice_paid",
            Transaction,
            id=self._ids.next_id(),
            date=self._today(),
            description=f"Invoice Payment: {invoice.id} - {invoice.client_name}",
            amount=invoice.total_amount,
            category=self._settings.invoice_revenue_account,
            type=TransactionType.INCOME,
            reference_id=invoice.id,
        )

        self._store.update(
            lambda prev: prev.model_copy(update={
                "invoices": _replace(prev.invoices, invoice.id, paid),
                "transactions": [transaction, *prev.transactions],
            })
        )

        self._audit(AuditEventBuilder.invoice_paid(
            invoice_id=invoice.id,
            client_name=invoice.client_name,
            amount=invoice.total_amount,
            transaction_id=transaction.id,
            correlation_id=correlation_id,
        ))
        self._audit(AuditEventBuilder.transaction_recorded(
            transaction_id=transaction.id,
            description=transaction.description,
            amount=transaction.amount,
            transaction_type=transaction.type.value,
            reference_id=invoice.id,
            correlation_id=correlation_id,
        ))
        return transaction

    def void_invoice(self, invoice_id: str) -> Invoice:
        """
        Cancel an invoice. It drops out of receivables.

        Raises:
            InvalidTransitionError: The invoice is already paid
        """
        invoice = self._get_invoice(invoice_id)

        if invoice.status == InvoiceStatus.VOID:
            return invoice
        if invoice.status == InvoiceStatus.PAID:
            self._reject("invoice", invoice.id, f"Invoice {invoice.id} is paid and cannot be voided")

        voided = invoice.model_copy(update={"status": InvoiceStatus.VOID})
        self._store.update(
            lambda prev: prev.model_copy(
                update={"invoices": _replace(prev.invoices, invoice.id, voided)}
            )
        )
        self._audit(AuditEventBuilder.invoice_voided(invoice.id, invoice.status.value))
        return voided

    # =========================================================================
    # PAYABLES
    # =========================================================================

    def create_bill(
        self,
        vendor_name: str,
        amount: Union[Decimal, float, str],
        category: str,
        invoice_number: str = "",
        due_date: Optional[date] = None,
        bill_date: Optional[date] = None,
    ) -> Bill:
        """
        Enter a vendor bill. New bills arrive as Received and are listed first.
        """
        self._require(
            "create_bill",
            required={"vendor_name": vendor_name, "category": category},
            amounts={"amount": amount},
        )

        bill = self._build(
            "create_bill",
            Bill,
            id=self._ids.next_document_id(
                "BILL", taken={b.id for b in self.data.bills}
            ),
            vendor_name=vendor_name,
            invoice_number=invoice_number or "",
            date=bill_date or self._today(),
            due_date=due_date,
            amount=parse_amount(amount),
            category=category,
            status=BillStatus.RECEIVED,
        )

        self._store.update(
            lambda prev: prev.model_copy(update={"bills": [bill, *prev.bills]})
        )

        self._audit(AuditEventBuilder.bill_created(
            bill_id=bill.id,
            vendor_name=bill.vendor_name,
            amount=bill.amount,
            category=bill.category,
        ))
        return bill

    def pay_bill(self, bill_id: str) -> Optional[Transaction]:
        """
        Pay a vendor bill.

        Marks the bill Paid and books the matching Expense transaction
        against the bill's own category.

        Returns:
            The new ledger transaction, or None if the bill was
            already paid (nothing changes in that case).
        """
        bill = self._get_bill(bill_id)

        if bill.status == BillStatus.PAID:
            return None

        correlation_id = create_correlation_id()
        paid = bill.model_copy(update={"status": BillStatus.PAID})
        transaction = self._build(
            "pay_bill",
            Transaction,
            id=self._ids.next_id(),
            date=self._today(),
            description=f"Bill Payment: {bill.vendor_name} ({bill.invoice_number})",
            amount=bill.amount,
            category=bill.category,
            type=TransactionType.EXPENSE,
            reference_id=bill.id,
        )

        self._store.update(
            lambda prev: prev.model_copy(update={
                "bills": _replace(prev.bills, bill.id, paid),
                "transactions": [transaction, *prev.transactions],
            })
        )

        self._audit(AuditEventBuilder.bill_paid(
            bill_id=bill.id,
            vendor_name=bill.vendor_name,
            amount=bill.amount,
            transaction_id=transaction.id,
            correlation_id=correlation_id,
        ))
        self._audit(AuditEventBuilder.transaction_recorded(
            transaction_id=transaction.id,
            description=transaction.description,
            amount=transaction.amount,
            transaction_type=transaction.type.value,
            reference_id=bill.id,
            correlation_id=correlation_id,
        ))
        return transaction

    def mark_overdue(self, as_of: Optional[date] = None) -> tuple[list[str], list[str]]:
        """
        Flag documents whose due date has passed.

        Sent invoices and Received/Pending bills due before `as_of`
        become Overdue. Drafts, paid and void documents are untouched.

        Returns:
            (invoice_ids, bill_ids) that changed status
        """
        as_of = as_of or self._today()
        data = self.data

        invoice_ids = [
            i.id for i in data.invoices
            if i.status == InvoiceStatus.SENT and i.due_date < as_of
        ]
        bill_ids = [
            b.id for b in data.bills
            if b.status in (BillStatus.RECEIVED, BillStatus.PENDING)
            and b.due_date is not None
            and b.due_date < as_of
        ]
        if not invoice_ids and not bill_ids:
            return [], []

        overdue_invoices = set(invoice_ids)
        overdue_bills = set(bill_ids)
        self._store.update(
            lambda prev: prev.model_copy(update={
                "invoices": [
                    i.model_copy(update={"status": InvoiceStatus.OVERDUE})
                    if i.id in overdue_invoices else i
                    for i in prev.invoices
                ],
                "bills": [
                    b.model_copy(update={"status": BillStatus.OVERDUE})
                    if b.id in overdue_bills else b
                    for b in prev.bills
                ],
            })
        )

        self._audit(AuditEventBuilder.documents_marked_overdue(
            invoice_ids, bill_ids, as_of.isoformat()
        ))
        return invoice_ids, bill_ids

    # =========================================================================
    # ASSETS & LIABILITIES
    # =========================================================================

    def add_asset(
        self,
        name: str,
        value: Union[Decimal, float, str],
        asset_type: AssetType = AssetType.CURRENT,
        date_acquired: Optional[date] = None,
        depreciation_rate: Optional[float] = None,
    ) -> Asset:
        """Register an asset; acquired today unless a date is given."""
        self._require(
            "add_asset",
            required={"name": name},
            amounts={"value": value},
        )

        asset = self._build(
            "add_asset",
            Asset,
            id=self._ids.next_id(),
            name=name,
            value=parse_amount(value),
            type=asset_type,
            date_acquired=date_acquired or self._today(),
            depreciation_rate=depreciation_rate,
        )
        self._store.update(
            lambda prev: prev.model_copy(update={"assets": [*prev.assets, asset]})
        )
        self._audit(AuditEventBuilder.asset_added(asset.id, asset.name, asset.value))
        return asset

    def add_liability(
        self,
        name: str,
        amount: Union[Decimal, float, str],
        liability_type: LiabilityType = LiabilityType.CURRENT,
        due_date: Optional[date] = None,
        interest_rate: Optional[float] = None,
    ) -> Liability:
        """Register a liability; due today unless a date is given."""
        self._require(
            "add_liability",
            required={"name": name},
            amounts={"amount": amount},
        )

        liability = self._build(
            "add_liability",
            Liability,
            id=self._ids.next_id(),
            name=name,
            amount=parse_amount(amount),
            type=liability_type,
            due_date=due_date or self._today(),
            interest_rate=interest_rate,
        )
        self._store.update(
            lambda prev: prev.model_copy(
                update={"liabilities": [*prev.liabilities, liability]}
            )
        )
        self._audit(AuditEventBuilder.liability_added(
            liability.id, liability.name, liability.amount
        ))
        return liability
