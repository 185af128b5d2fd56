"""
Bookkeeping Data Models

Chart of accounts, general ledger, receivables (invoices), payables (bills),
assets and liabilities.

DESIGN DECISION: Money is always Decimal quantized to two places.
Records are treated as immutable snapshots: services replace them with
updated copies (model_copy) instead of mutating them in place.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


CENTS = Decimal("0.01")


def to_money(value) -> Decimal:
    """Convert a number (or numeric string) to a 2-place Decimal."""
    if isinstance(value, float):
        value = str(value)
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


# =============================================================================
# ENUMS
# =============================================================================

class AccountType(str, Enum):
    """The five classic account classes."""
    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"
    REVENUE = "Revenue"
    EXPENSE = "Expense"


class AssetType(str, Enum):
    CURRENT = "Current Asset"
    FIXED = "Fixed Asset"
    INTANGIBLE = "Intangible Asset"


class LiabilityType(str, Enum):
    CURRENT = "Current Liability"
    LONG_TERM = "Long-Term Liability"


class TransactionType(str, Enum):
    INCOME = "Income"
    EXPENSE = "Expense"


class InvoiceStatus(str, Enum):
    """
    Accounts receivable status.

    Only PAID and VOID take an invoice out of receivables.
    """
    DRAFT = "Draft"
    SENT = "Sent"
    PAID = "Paid"
    OVERDUE = "Overdue"
    VOID = "Void"


class BillStatus(str, Enum):
    """Accounts payable status."""
    RECEIVED = "Received"
    PENDING = "Pending"
    PAID = "Paid"
    OVERDUE = "Overdue"


# =============================================================================
# CHART OF ACCOUNTS
# =============================================================================

class Account(BaseModel):
    """An entry in the chart of accounts."""
    model_config = ConfigDict(str_strip_whitespace=True)

    code: str = Field(
        ...,
        min_length=1,
        max_length=20,
        description="Account code (e.g. 1000)"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Account name, referenced by transaction categories"
    )
    type: AccountType
    description: Optional[str] = None


# =============================================================================
# ASSETS & LIABILITIES
# =============================================================================

class Asset(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str
    name: str = Field(..., min_length=1, max_length=200)
    value: Decimal = Field(..., ge=0)
    type: AssetType
    date_acquired: date
    depreciation_rate: Optional[float] = Field(
        default=None,
        ge=0,
        le=100,
        description="Annual depreciation percentage"
    )

    @field_validator('value')
    @classmethod
    def quantize_value(cls, v: Decimal) -> Decimal:
        return to_money(v)


class Liability(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str
    name: str = Field(..., min_length=1, max_length=200)
    amount: Decimal = Field(..., ge=0)
    type: LiabilityType
    due_date: date
    interest_rate: Optional[float] = Field(
        default=None,
        ge=0,
        le=100,
        description="Annual interest percentage"
    )

    @field_validator('amount')
    @classmethod
    def quantize_amount(cls, v: Decimal) -> Decimal:
        return to_money(v)


# =============================================================================
# GENERAL LEDGER
# =============================================================================

class Transaction(BaseModel):
    """
    A single general-ledger entry.

    Payments of invoices and bills create one of these with
    reference_id pointing back at the paid document.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str
    date: date
    description: str = Field(..., min_length=1, max_length=500)
    category: str = Field(
        ...,
        min_length=1,
        description="Name of the account this entry is booked against"
    )
    amount: Decimal = Field(..., ge=0)
    type: TransactionType
    reference_id: Optional[str] = Field(
        default=None,
        description="Invoice or bill id this entry settles"
    )

    @field_validator('amount')
    @classmethod
    def quantize_amount(cls, v: Decimal) -> Decimal:
        return to_money(v)

    @property
    def signed_amount(self) -> Decimal:
        """Positive for income, negative for expenses."""
        return self.amount if self.type == TransactionType.INCOME else -self.amount


# =============================================================================
# RECEIVABLES & PAYABLES
# =============================================================================

class InvoiceItem(BaseModel):
    """
    Invoice line item.

    The line total is always quantity * unit_price; any total passed in
    is recomputed.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    description: str = Field(default="", max_length=200)
    quantity: Decimal = Field(default=Decimal("1"), ge=0)
    unit_price: Decimal = Field(default=Decimal("0"), ge=0)
    total: Decimal = Field(default=Decimal("0"), ge=0)

    @model_validator(mode='after')
    def compute_total(self) -> 'InvoiceItem':
        self.total = to_money(self.quantity * self.unit_price)
        return self


class Invoice(BaseModel):
    """An accounts-receivable document."""
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str
    client_name: str = Field(..., min_length=1, max_length=200)
    date: date
    due_date: date
    items: list[InvoiceItem] = Field(default_factory=list)
    total_amount: Decimal = Field(..., ge=0)
    status: InvoiceStatus = InvoiceStatus.SENT
    notes: Optional[str] = Field(default=None, max_length=1000)

    @field_validator('total_amount')
    @classmethod
    def quantize_total(cls, v: Decimal) -> Decimal:
        return to_money(v)

    @property
    def is_outstanding(self) -> bool:
        """Still owed to us: neither paid nor voided."""
        return self.status not in (InvoiceStatus.PAID, InvoiceStatus.VOID)


class Bill(BaseModel):
    """An accounts-payable document."""
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str
    vendor_name: str = Field(..., min_length=1, max_length=200)
    invoice_number: str = Field(
        default="",
        max_length=50,
        description="Vendor's own invoice number"
    )
    date: date
    due_date: Optional[date] = None
    amount: Decimal = Field(..., ge=0)
    category: str = Field(
        ...,
        min_length=1,
        description="Expense account this bill is booked against"
    )
    status: BillStatus = BillStatus.RECEIVED

    @field_validator('amount')
    @classmethod
    def quantize_amount(cls, v: Decimal) -> Decimal:
        return to_money(v)

    @property
    def is_unpaid(self) -> bool:
        return self.status != BillStatus.PAID
