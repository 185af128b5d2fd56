"""
Tests for component wiring and the insight flow.
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from nexus_manager.agents import FinancialInsight, InsightOutcome
from nexus_manager.agents.ai_agents import INSIGHT_FAILED, INSIGHT_MISSING_KEY
from nexus_manager.models import AuditEventType, BusinessData, CandidateStage
from nexus_manager.orchestrator import create_app_components, reset_demo_data


def mock_insight_agent(text: str, outcome=InsightOutcome.GENERATED, error=None):
    agent = MagicMock()
    agent.analyze = AsyncMock(
        return_value=FinancialInsight(text=text, outcome=outcome, error=error)
    )
    return agent


class TestCreateAppComponents:
    """Tests for the component factory."""

    def test_starts_from_demo_company(self):
        components = create_app_components(
            insight_agent=mock_insight_agent(""),
            job_agent=MagicMock(),
        )

        assert len(components.store.data.invoices) == 2
        assert len(components.store.data.job_proformas) == 7

    def test_services_share_store_and_audit_trail(self):
        components = create_app_components(
            data=BusinessData(),
            insight_agent=mock_insight_agent(""),
            job_agent=MagicMock(),
            today=lambda: date(2024, 1, 15),
        )

        components.accounting.add_asset("Laptop", 1500)
        components.hr.add_candidate("Eve Adams", "QA Tester")

        assert len(components.store.data.assets) == 1
        assert len(components.store.data.candidates) == 1
        assert [e.event_type for e in components.audit_logger.recent_events()] == [
            AuditEventType.CANDIDATE_ADDED,
            AuditEventType.ASSET_ADDED,
        ]


class TestResetDemoData:
    """Tests for restoring the demo company within a session."""

    def test_restores_seed_and_drops_record_widget_state(self):
        components = create_app_components(
            insight_agent=mock_insight_agent(""),
            job_agent=MagicMock(),
        )
        components.hr.move_candidate("2", CandidateStage.REJECTED)
        session_state = {
            "components": components,
            "insight": "**Healthy margins.**",
            "stage_2": CandidateStage.REJECTED,
            "cred_1": "MBA",
            "invoice_items": [{"description": "Hours"}],
            "aging_as_of": date(2024, 1, 15),
        }

        reset_demo_data(components, session_state)

        assert components.store.data.find_candidate("2").stage != CandidateStage.REJECTED
        assert set(session_state) == {"components", "aging_as_of"}


class TestInsightFlow:
    """Tests for the dashboard insight."""

    @pytest.mark.asyncio
    async def test_insight_is_audited(self):
        agent = mock_insight_agent("**Healthy margins.**")
        components = create_app_components(insight_agent=agent, job_agent=MagicMock())

        insight = await components.insight_flow.generate()

        assert insight == "**Healthy margins.**"
        agent.analyze.assert_awaited_once_with(components.store.data)
        event = components.audit_logger.recent_events(limit=1)[0]
        assert event.event_type == AuditEventType.INSIGHT_GENERATED

    @pytest.mark.asyncio
    async def test_failed_insight_logs_service_error(self):
        components = create_app_components(
            insight_agent=mock_insight_agent(
                INSIGHT_FAILED, InsightOutcome.FAILED, error="quota exceeded"
            ),
            job_agent=MagicMock(),
        )

        assert await components.insight_flow.generate() == INSIGHT_FAILED

        event = components.audit_logger.recent_events(limit=1)[0]
        assert event.event_type == AuditEventType.EXTERNAL_SERVICE_ERROR
        assert event.error_message == "quota exceeded"

    @pytest.mark.asyncio
    async def test_generated_text_matching_a_fallback_is_still_generated(self):
        """The audit follows the call's outcome, not the wording of the reply."""
        components = create_app_components(
            insight_agent=mock_insight_agent(INSIGHT_FAILED),
            job_agent=MagicMock(),
        )

        await components.insight_flow.generate()

        event = components.audit_logger.recent_events(limit=1)[0]
        assert event.event_type == AuditEventType.INSIGHT_GENERATED

    @pytest.mark.asyncio
    async def test_missing_key_is_not_audited(self):
        components = create_app_components(
            insight_agent=mock_insight_agent(INSIGHT_MISSING_KEY, InsightOutcome.MISSING_KEY),
            job_agent=MagicMock(),
        )

        assert await components.insight_flow.generate() == INSIGHT_MISSING_KEY
        assert components.audit_logger.recent_events() == []
