"""
Tests for HR operations.

The job description agent is mocked; no network calls.
"""

from datetime import date

import pytest

from nexus_manager.agents import JobDescriptionDraft
from nexus_manager.hr import work_email
from nexus_manager.models import AuditEventType, CandidateStage, EmployeeStatus
from nexus_manager.storage import NotFoundError
from nexus_manager.validation import InvalidTransitionError, ValidationFailedError


class TestHiringPipeline:
    """Tests for candidates moving through the pipeline."""

    def test_add_candidate_starts_applied(self, hr, store):
        candidate = hr.add_candidate("Eve Adams", "QA Tester")

        assert candidate.stage == CandidateStage.APPLIED
        assert store.data.candidates[-1] == candidate

    def test_add_candidate_requires_role(self, hr):
        with pytest.raises(ValidationFailedError) as exc_info:
            hr.add_candidate("Eve Adams", "")

        assert exc_info.value.result.missing_fields == ["applying_for"]

    def test_add_candidate_with_overlong_role_is_refused(self, hr, store, audit_logger):
        """The role is checked before the candidate is stored."""
        before = list(store.data.candidates)

        with pytest.raises(ValidationFailedError) as exc_info:
            hr.add_candidate("Eve Adams", "Senior " * 70)

        assert exc_info.value.result.issues[0].field == "applying_for"
        assert store.data.candidates == before
        assert audit_logger.recent_events(limit=1)[0].event_type == AuditEventType.VALIDATION_FAILED

    def test_move_candidate(self, hr, store, audit_logger):
        moved = hr.move_candidate("2", CandidateStage.INTERVIEW)

        assert moved.stage == CandidateStage.INTERVIEW
        assert store.data.find_candidate("2").stage == CandidateStage.INTERVIEW
        event = audit_logger.recent_events(limit=1)[0]
        assert event.event_type == AuditEventType.CANDIDATE_STAGE_CHANGED
        assert event.details == {"from": "Applied", "to": "Interview"}

    def test_move_candidate_to_hired_is_refused(self, hr):
        """Hired is only reachable by hiring."""
        with pytest.raises(InvalidTransitionError):
            hr.move_candidate("3", CandidateStage.HIRED)

    def test_hired_candidate_cannot_move(self, hr):
        hr.hire_candidate("3")

        with pytest.raises(InvalidTransitionError):
            hr.move_candidate("3", CandidateStage.INTERVIEW)

    def test_move_unknown_candidate(self, hr):
        with pytest.raises(NotFoundError):
            hr.move_candidate("999", CandidateStage.OFFER)

    def test_open_candidates_excludes_hired(self, hr):
        hr.hire_candidate("1")

        names = [c.name for c in hr.open_candidates()]
        assert "Alice Smith" not in names
        assert len(names) == 3


class TestHireCandidate:
    """Tests for turning a candidate into an employee."""

    def test_hire_creates_active_employee(self, hr, store):
        employee = hr.hire_candidate("3")

        assert store.data.employees[-1] == employee
        assert employee.name == "Charlie Davis"
        assert employee.role == "On-Site Technician"
        assert employee.department == "General"
        assert employee.email == "charlie.davis@company.com"
        assert employee.start_date == date(2024, 1, 15)
        assert employee.credentials == []
        assert employee.status == EmployeeStatus.ACTIVE
        assert store.data.find_candidate("3").stage == CandidateStage.HIRED

    def test_hire_twice_is_refused(self, hr, store):
        hr.hire_candidate("3")
        employee_count = len(store.data.employees)

        with pytest.raises(InvalidTransitionError):
            hr.hire_candidate("3")

        assert len(store.data.employees) == employee_count

    def test_rejected_candidate_cannot_be_hired(self, hr):
        hr.move_candidate("4", CandidateStage.REJECTED)

        with pytest.raises(InvalidTransitionError):
            hr.hire_candidate("4")

    def test_hire_unknown_candidate(self, hr):
        with pytest.raises(NotFoundError):
            hr.hire_candidate("999")


class TestWorkEmail:
    """Tests for generated email addresses."""

    def test_two_part_name(self):
        assert work_email("Sarah Connor", "company.com") == "sarah.connor@company.com"

    def test_every_space_becomes_a_dot(self):
        assert work_email("Mary  Jane Watson", "nexus.io") == "mary.jane.watson@nexus.io"

    def test_single_name(self):
        assert work_email("Cher", "company.com") == "cher@company.com"


class TestCredentials:
    """Tests for the employee directory."""

    def test_add_credential_trims(self, hr, store):
        employee = hr.add_credential("2", "  CMA  ")

        assert employee.credentials == ["CPA", "CMA"]
        assert store.data.find_employee("2").credentials == ["CPA", "CMA"]

    def test_blank_credential_is_refused(self, hr, store):
        with pytest.raises(ValidationFailedError):
            hr.add_credential("2", "   ")

        assert store.data.find_employee("2").credentials == ["CPA"]

    def test_unknown_employee(self, hr):
        with pytest.raises(NotFoundError):
            hr.add_credential("999", "CPA")


class TestJobProformas:
    """Tests for AI-assisted job proformas."""

    @pytest.mark.asyncio
    async def test_create_proforma_uses_agent_draft(self, hr, store, job_agent):
        proforma = await hr.create_proforma("Staff Accountant", "Finance")

        job_agent.generate.assert_awaited_once_with("Staff Accountant", "Finance")
        assert proforma.description == "Keeps the books balanced."
        assert proforma.requirements == ["CPA", "Excel", "Attention to detail"]
        assert proforma.salary_range == "$50,000 - $80,000"
        assert store.data.job_proformas[-1] == proforma
        assert hr.proforma_titles()[-1] == "Staff Accountant"

    @pytest.mark.asyncio
    async def test_create_proforma_keeps_fallback_message(self, hr, job_agent):
        """The proforma is still created when the AI cannot help."""
        job_agent.generate.return_value = JobDescriptionDraft(description="API Key missing")

        proforma = await hr.create_proforma("Staff Accountant", "Finance")

        assert proforma.description == "API Key missing"
        assert proforma.requirements == []

    @pytest.mark.asyncio
    async def test_create_proforma_requires_title(self, hr, job_agent):
        with pytest.raises(ValidationFailedError):
            await hr.create_proforma("", "Finance")

        job_agent.generate.assert_not_awaited()

    def test_proforma_titles(self, hr):
        assert hr.proforma_titles()[:3] == [
            "Senior Frontend Engineer",
            "Frontend Developer",
            "Backend Developer",
        ]
