"""
Audit Models for Nexus Manager

Every state transition in the system is recorded for audit purposes.
This provides:
1. Traceability of who changed what in the books
2. Debugging information when things go wrong
3. A way to see the chain of effects of one action
   (e.g. invoice paid -> ledger transaction created)

DESIGN DECISION: Audit events are never modified once written.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Every bookkeeping and HR operation has its own event type.
    """
    # General ledger
    TRANSACTION_RECORDED = "transaction_recorded"
    ACCOUNT_ADDED = "account_added"

    # Receivables
    INVOICE_CREATED = "invoice_created"
    INVOICE_PAID = "invoice_paid"
    INVOICE_VOIDED = "invoice_voided"

    # Payables
    BILL_CREATED = "bill_created"
    BILL_PAID = "bill_paid"

    # Overdue sweep
    DOCUMENTS_MARKED_OVERDUE = "documents_marked_overdue"

    # Balance sheet items
    ASSET_ADDED = "asset_added"
    LIABILITY_ADDED = "liability_added"

    # HR
    CANDIDATE_ADDED = "candidate_added"
    CANDIDATE_STAGE_CHANGED = "candidate_stage_changed"
    CANDIDATE_HIRED = "candidate_hired"
    CREDENTIAL_ADDED = "credential_added"
    PROFORMA_CREATED = "proforma_created"

    # AI
    INSIGHT_GENERATED = "insight_generated"

    # Rejections
    VALIDATION_FAILED = "validation_failed"
    TRANSITION_REJECTED = "transition_rejected"

    # External services
    EXTERNAL_SERVICE_ERROR = "external_service_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'invoice', 'bill', 'candidate')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., a payment and its ledger entry)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )

    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    @field_validator("description", mode="before")
    @classmethod
    def truncate_description(cls, v):
        """Long record names are cut so the event itself can always be built."""
        if isinstance(v, str):
            return v[:500]
        return v

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }

    def to_table_row(self) -> dict:
        """Flat row for the activity table in the UI."""
        return {
            "time": self.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            "event": self.event_type.value,
            "severity": self.severity.value,
            "entity": f"{self.entity_type}:{self.entity_id}" if self.entity_type else "",
            "description": self.description,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.invoice_paid(invoice_id, client, amount, transaction_id)
        event = AuditEventBuilder.candidate_hired(candidate_id, employee_id, name)
    """

    @staticmethod
    def transaction_recorded(
        transaction_id: str,
        description: str,
        amount: Decimal,
        transaction_type: str,
        reference_id: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_RECORDED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description=f"{transaction_type} recorded: {description}",
            details={
                "amount": str(amount),
                "type": transaction_type,
                "reference_id": reference_id,
            },
            is_user_action=reference_id is None,
        )

    @staticmethod
    def account_added(code: str, name: str, account_type: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNT_ADDED,
            entity_type="account",
            entity_id=code,
            description=f"Account added: {code} {name}",
            details={"type": account_type},
            is_user_action=True,
        )

    @staticmethod
    def invoice_created(
        invoice_id: str,
        client_name: str,
        total: Decimal,
        item_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INVOICE_CREATED,
            entity_type="invoice",
            entity_id=invoice_id,
            description=f"Invoice {invoice_id} created for {client_name}",
            details={
                "client_name": client_name,
                "total_amount": str(total),
                "item_count": item_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def invoice_paid(
        invoice_id: str,
        client_name: str,
        amount: Decimal,
        transaction_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INVOICE_PAID,
            entity_type="invoice",
            entity_id=invoice_id,
            correlation_id=correlation_id,
            description=f"Invoice {invoice_id} from {client_name} marked paid",
            details={
                "amount": str(amount),
                "transaction_id": transaction_id,
            },
            is_user_action=True,
        )

    @staticmethod
    def invoice_voided(invoice_id: str, previous_status: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INVOICE_VOIDED,
            entity_type="invoice",
            entity_id=invoice_id,
            description=f"Invoice {invoice_id} voided",
            details={"previous_status": previous_status},
            is_user_action=True,
        )

    @staticmethod
    def bill_created(
        bill_id: str,
        vendor_name: str,
        amount: Decimal,
        category: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BILL_CREATED,
            entity_type="bill",
            entity_id=bill_id,
            description=f"Bill {bill_id} received from {vendor_name}",
            details={
                "vendor_name": vendor_name,
                "amount": str(amount),
                "category": category,
            },
            is_user_action=True,
        )

    @staticmethod
    def bill_paid(
        bill_id: str,
        vendor_name: str,
        amount: Decimal,
        transaction_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BILL_PAID,
            entity_type="bill",
            entity_id=bill_id,
            correlation_id=correlation_id,
            description=f"Bill {bill_id} to {vendor_name} paid",
            details={
                "amount": str(amount),
                "transaction_id": transaction_id,
            },
            is_user_action=True,
        )

    @staticmethod
    def documents_marked_overdue(
        invoice_ids: list[str],
        bill_ids: list[str],
        as_of: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DOCUMENTS_MARKED_OVERDUE,
            severity=AuditSeverity.WARNING,
            description=(
                f"{len(invoice_ids)} invoice(s) and {len(bill_ids)} bill(s) "
                f"marked overdue as of {as_of}"
            ),
            details={
                "invoice_ids": invoice_ids,
                "bill_ids": bill_ids,
                "as_of": as_of,
            },
        )

    @staticmethod
    def asset_added(asset_id: str, name: str, value: Decimal) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ASSET_ADDED,
            entity_type="asset",
            entity_id=asset_id,
            description=f"Asset added: {name}",
            details={"value": str(value)},
            is_user_action=True,
        )

    @staticmethod
    def liability_added(liability_id: str, name: str, amount: Decimal) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LIABILITY_ADDED,
            entity_type="liability",
            entity_id=liability_id,
            description=f"Liability added: {name}",
            details={"amount": str(amount)},
            is_user_action=True,
        )

    @staticmethod
    def candidate_added(candidate_id: str, name: str, applying_for: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CANDIDATE_ADDED,
            entity_type="candidate",
            entity_id=candidate_id,
            description=f"Candidate {name} applied for {applying_for}",
            details={"applying_for": applying_for},
            is_user_action=True,
        )

    @staticmethod
    def candidate_stage_changed(
        candidate_id: str,
        from_stage: str,
        to_stage: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CANDIDATE_STAGE_CHANGED,
            entity_type="candidate",
            entity_id=candidate_id,
            description=f"Candidate moved from {from_stage} to {to_stage}",
            details={"from": from_stage, "to": to_stage},
            is_user_action=True,
        )

    @staticmethod
    def candidate_hired(
        candidate_id: str,
        employee_id: str,
        name: str,
        role: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CANDIDATE_HIRED,
            entity_type="candidate",
            entity_id=candidate_id,
            correlation_id=correlation_id,
            description=f"{name} hired as {role}",
            details={"employee_id": employee_id, "role": role},
            is_user_action=True,
        )

    @staticmethod
    def credential_added(employee_id: str, credential: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CREDENTIAL_ADDED,
            entity_type="employee",
            entity_id=employee_id,
            description=f"Credential added: {credential}",
            details={"credential": credential},
            is_user_action=True,
        )

    @staticmethod
    def proforma_created(
        proforma_id: str,
        title: str,
        department: str,
        requirement_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROFORMA_CREATED,
            entity_type="job_proforma",
            entity_id=proforma_id,
            description=f"Job proforma created: {title} ({department})",
            details={"requirement_count": requirement_count},
            is_user_action=True,
        )

    @staticmethod
    def insight_generated(length: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INSIGHT_GENERATED,
            entity_type="insight",
            description="AI financial insight generated",
            details={"characters": length},
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(
        operation: str,
        issues: list[dict],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            description=f"{operation} rejected with {len(issues)} issue(s)",
            details={
                "operation": operation,
                "issues": issues,
            },
            is_user_action=True,
        )

    @staticmethod
    def transition_rejected(
        entity_type: str,
        entity_id: str,
        reason: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSITION_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type=entity_type,
            entity_id=entity_id,
            description=reason,
            is_user_action=True,
        )

    @staticmethod
    def external_service_error(
        service: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXTERNAL_SERVICE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"External service error: {service}",
            error_message=error_message,
            details={
                "service": service,
            },
            correlation_id=correlation_id,
        )
