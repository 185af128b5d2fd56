"""
Business Data Snapshot

BusinessData is the whole application state: every screen reads from it
and every operation produces a new one from the previous one.
"""

from typing import Optional

from pydantic import BaseModel, Field

from nexus_manager.models.accounting import (
    Account,
    AccountType,
    Asset,
    Bill,
    Invoice,
    Liability,
    Transaction,
)
from nexus_manager.models.hr import Candidate, Employee, JobProforma


class BusinessData(BaseModel):
    """
    All bookkeeping and HR collections of one business.

    Ordering conventions:
    - transactions, invoices and bills are newest first
    - everything else keeps insertion order
    """

    chart_of_accounts: list[Account] = Field(default_factory=list)
    assets: list[Asset] = Field(default_factory=list)
    liabilities: list[Liability] = Field(default_factory=list)
    transactions: list[Transaction] = Field(default_factory=list)
    invoices: list[Invoice] = Field(
        default_factory=list,
        description="Accounts receivable"
    )
    bills: list[Bill] = Field(
        default_factory=list,
        description="Accounts payable"
    )
    employees: list[Employee] = Field(default_factory=list)
    candidates: list[Candidate] = Field(default_factory=list)
    job_proformas: list[JobProforma] = Field(default_factory=list)

    def find_account(self, code: str) -> Optional[Account]:
        return next((a for a in self.chart_of_accounts if a.code == code), None)

    def find_invoice(self, invoice_id: str) -> Optional[Invoice]:
        return next((i for i in self.invoices if i.id == invoice_id), None)

    def find_bill(self, bill_id: str) -> Optional[Bill]:
        return next((b for b in self.bills if b.id == bill_id), None)

    def find_employee(self, employee_id: str) -> Optional[Employee]:
        return next((e for e in self.employees if e.id == employee_id), None)

    def find_candidate(self, candidate_id: str) -> Optional[Candidate]:
        return next((c for c in self.candidates if c.id == candidate_id), None)

    def accounts_of_type(self, account_type: AccountType) -> list[Account]:
        return [a for a in self.chart_of_accounts if a.type == account_type]

    def transactions_for(self, reference_id: str) -> list[Transaction]:
        """Ledger entries that settle the given invoice or bill."""
        return [t for t in self.transactions if t.reference_id == reference_id]
