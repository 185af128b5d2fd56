"""
Main Orchestrator for Nexus Manager

This module ties together all the components:
1. One BusinessStore holding the session's books
2. Accounting and HR services working on that store
3. The AI insight flow reading from it

DESIGN DECISION: All services share one store, one id generator and one
audit logger, so ids stay unique across collections and the activity
feed shows every change in order.
"""

from datetime import date
from typing import Callable, MutableMapping, NamedTuple, Optional
from uuid import UUID

from nexus_manager.accounting import AccountingService
from nexus_manager.agents import FinancialInsightAgent, InsightOutcome, JobDescriptionAgent
from nexus_manager.audit import AuditLogger, create_correlation_id
from nexus_manager.data import initial_business_data
from nexus_manager.hr import HRService
from nexus_manager.models import AuditEventBuilder, BusinessData
from nexus_manager.storage import BusinessStore, IdGenerator, InMemoryAuditStorage


class InsightFlow:
    """
    Produces the dashboard's AI financial insight.

    The agent only ever sees the condensed summary of the current
    snapshot. Fallback messages are returned as-is; a failed call is
    also recorded in the audit trail.
    """

    def __init__(
        self,
        store: BusinessStore,
        insight_agent: Optional[FinancialInsightAgent] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._insight_agent = insight_agent or FinancialInsightAgent()
        self._audit_logger = audit_logger

    async def generate(self, correlation_id: Optional[UUID] = None) -> str:
        correlation_id = correlation_id or create_correlation_id()

        insight = await self._insight_agent.analyze(self._store.data)

        if self._audit_logger:
            if insight.outcome == InsightOutcome.FAILED:
                self._audit_logger.log_external_service_error(
                    service="gemini",
                    error_message=insight.error or insight.text,
                    correlation_id=correlation_id,
                )
            elif insight.outcome == InsightOutcome.GENERATED:
                self._audit_logger.log(AuditEventBuilder.insight_generated(len(insight.text)))

        return insight.text


class AppComponents(NamedTuple):
    store: BusinessStore
    accounting: AccountingService
    hr: HRService
    insight_flow: InsightFlow
    audit_logger: AuditLogger


def create_app_components(
    data: Optional[BusinessData] = None,
    insight_agent: Optional[FinancialInsightAgent] = None,
    job_agent: Optional[JobDescriptionAgent] = None,
    today: Optional[Callable[[], date]] = None,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        data: Starting books. Defaults to the demo company.
        insight_agent: Override for tests; defaults to Gemini.
        job_agent: Override for tests; defaults to Gemini.
        today: Clock for default dates.

    Returns:
        AppComponents sharing one store and one audit logger
    """
    store = BusinessStore(data if data is not None else initial_business_data())
    audit_logger = AuditLogger(InMemoryAuditStorage())
    ids = IdGenerator()

    accounting = AccountingService(
        store,
        audit_logger=audit_logger,
        ids=ids,
        today=today,
    )
    hr = HRService(
        store,
        job_agent=job_agent or JobDescriptionAgent(),
        audit_logger=audit_logger,
        ids=ids,
        today=today,
    )
    insight_flow = InsightFlow(
        store,
        insight_agent=insight_agent,
        audit_logger=audit_logger,
    )

    return AppComponents(
        store=store,
        accounting=accounting,
        hr=hr,
        insight_flow=insight_flow,
        audit_logger=audit_logger,
    )


# Widget state keyed by record id; stale values would be re-applied to the
# restored records on the next rerun
RECORD_WIDGET_PREFIXES = ("stage_", "cred_", "add_cred_", "pay_", "void_", "hire_", "invoice_")
SESSION_CACHE_KEYS = ("insight",)


def reset_demo_data(
    components: AppComponents,
    session_state: MutableMapping,
) -> None:
    """Restore the demo company and drop session state tied to the old books."""
    components.store.reset(initial_business_data())
    for key in list(session_state.keys()):
        if key in SESSION_CACHE_KEYS or str(key).startswith(RECORD_WIDGET_PREFIXES):
            del session_state[key]
