"""Shared fixtures: a fresh demo company, a fixed clock and mocked AI."""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from nexus_manager.accounting import AccountingService
from nexus_manager.agents import JobDescriptionDraft
from nexus_manager.audit import AuditLogger
from nexus_manager.config import AppSettings, GeminiSettings
from nexus_manager.data import initial_business_data
from nexus_manager.hr import HRService
from nexus_manager.storage import BusinessStore, IdGenerator, InMemoryAuditStorage


TODAY = date(2024, 1, 15)


@pytest.fixture
def app_settings():
    return AppSettings(
        invoice_revenue_account="Sales Revenue",
        email_domain="company.com",
        default_department="General",
        default_salary_range="$50,000 - $80,000",
    )


@pytest.fixture
def gemini_settings():
    return GeminiSettings(api_key="test-key", max_retries=1)


@pytest.fixture
def store():
    return BusinessStore(initial_business_data())


@pytest.fixture
def audit_storage():
    return InMemoryAuditStorage()


@pytest.fixture
def audit_logger(audit_storage):
    return AuditLogger(audit_storage)


@pytest.fixture
def ids():
    return IdGenerator()


@pytest.fixture
def accounting(store, audit_logger, ids, app_settings):
    return AccountingService(
        store,
        audit_logger=audit_logger,
        ids=ids,
        today=lambda: TODAY,
        settings=app_settings,
    )


@pytest.fixture
def job_agent():
    agent = MagicMock()
    agent.generate = AsyncMock(return_value=JobDescriptionDraft(
        description="Keeps the books balanced.",
        requirements=["CPA", "Excel", "Attention to detail"],
    ))
    return agent


@pytest.fixture
def hr(store, job_agent, audit_logger, ids, app_settings):
    return HRService(
        store,
        job_agent=job_agent,
        audit_logger=audit_logger,
        ids=ids,
        today=lambda: TODAY,
        settings=app_settings,
    )
