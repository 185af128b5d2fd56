"""
Human Resources Operations

Employee directory, job proformas and the hiring pipeline.

Hiring is the one operation that spans two collections: the candidate
moves to Hired and a matching employee record is created, in a single
store update.
"""

import re
from datetime import date
from typing import Any, Callable, Optional

from nexus_manager.agents import JobDescriptionAgent
from nexus_manager.audit import AuditLogger, create_correlation_id
from nexus_manager.config import AppSettings, get_settings
from nexus_manager.models import (
    AuditEventBuilder,
    BusinessData,
    Candidate,
    CandidateStage,
    Employee,
    EmployeeStatus,
    JobProforma,
)
from nexus_manager.storage import BusinessStore, IdGenerator, NotFoundError
from nexus_manager.validation import (
    InvalidTransitionError,
    ModelT,
    RecordValidator,
    ValidationFailedError,
)


# Stages a candidate can be moved to by hand; HIRED only via hire_candidate
MOVABLE_STAGES = (
    CandidateStage.APPLIED,
    CandidateStage.INTERVIEW,
    CandidateStage.OFFER,
    CandidateStage.REJECTED,
)


def work_email(name: str, domain: str) -> str:
    """'Sarah Connor' -> 'sarah.connor@<domain>'."""
    local_part = re.sub(r"\s+", ".", name.strip().lower())
    return f"{local_part}@{domain}"


class HRService:
    """HR operations over the business store."""

    def __init__(
        self,
        store: BusinessStore,
        job_agent: Optional[JobDescriptionAgent] = None,
        audit_logger: Optional[AuditLogger] = None,
        validator: Optional[RecordValidator] = None,
        ids: Optional[IdGenerator] = None,
        today: Optional[Callable[[], date]] = None,
        settings: Optional[AppSettings] = None,
    ):
        self._store = store
        self._job_agent = job_agent
        self._audit_logger = audit_logger
        self._validator = validator or RecordValidator()
        self._ids = ids or IdGenerator()
        self._today = today or date.today
        self._settings = settings or get_settings().app

    @property
    def data(self) -> BusinessData:
        return self._store.data

    def _audit(self, event) -> None:
        if self._audit_logger:
            self._audit_logger.log(event)

    def _require(self, operation: str, **required) -> None:
        result = self._validator.check(operation, required=required)
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

    def _get_candidate(self, candidate_id: str) -> Candidate:
        candidate = self.data.find_candidate(candidate_id)
        if candidate is None:
            raise NotFoundError(f"Candidate not found: {candidate_id}")
        return candidate

    # =========================================================================
    # HIRING PIPELINE
    # =========================================================================

    def add_candidate(
        self,
        name: str,
        applying_for: str,
        resume_summary: Optional[str] = None,
        match_score: Optional[float] = None,
    ) -> Candidate:
        """Add an applicant at the Applied stage."""
        self._require("add_candidate", name=name, applying_for=applying_for)

        candidate = self._build(
            "add_candidate",
            Candidate,
            id=self._ids.next_id(),
            name=name,
            applying_for=applying_for,
            stage=CandidateStage.APPLIED,
            resume_summary=resume_summary or None,
            match_score=match_score,
        )
        self._store.update(
            lambda prev: prev.model_copy(
                update={"candidates": [*prev.candidates, candidate]}
            )
        )
        self._audit(AuditEventBuilder.candidate_added(
            candidate.id, candidate.name, candidate.applying_for
        ))
        return candidate

    def move_candidate(self, candidate_id: str, stage: CandidateStage) -> Candidate:
        """
        Move a candidate along the pipeline.

        Raises:
            NotFoundError: Unknown candidate id
            InvalidTransitionError: Target is Hired (use hire_candidate)
                or the candidate has already been hired
        """
        candidate = self._get_candidate(candidate_id)
        stage = CandidateStage(stage)

        if stage not in MOVABLE_STAGES:
            self._reject("candidate", candidate.id, "Candidates are moved to Hired by hiring them")
        if candidate.stage == CandidateStage.HIRED:
            self._reject("candidate", candidate.id, f"{candidate.name} has already been hired")
        if candidate.stage == stage:
            return candidate

        moved = candidate.model_copy(update={"stage": stage})
        self._store.update(
            lambda prev: prev.model_copy(update={
                "candidates": [moved if c.id == candidate.id else c for c in prev.candidates]
            })
        )
        self._audit(AuditEventBuilder.candidate_stage_changed(
            candidate.id, candidate.stage.value, stage.value
        ))
        return moved

    def hire_candidate(self, candidate_id: str) -> Employee:
        """
        Hire a candidate.

        Creates an Active employee in the default department with a
        generated work email, and marks the candidate Hired.

        Raises:
            NotFoundError: Unknown candidate id
            InvalidTransitionError: Candidate already hired or rejected
        """
        candidate = self._get_candidate(candidate_id)

        if candidate.stage in (CandidateStage.HIRED, CandidateStage.REJECTED):
            self._reject(
                "candidate",
                candidate.id,
                f"{candidate.name} cannot be hired from stage {candidate.stage.value}",
            )

        correlation_id = create_correlation_id()
        employee = self._build(
            "hire_candidate",
            Employee,
            id=self._ids.next_id(),
            name=candidate.name,
            role=candidate.applying_for,
            department=self._settings.default_department,
            email=work_email(candidate.name, self._settings.email_domain),
            start_date=self._today(),
            credentials=[],
            status=EmployeeStatus.ACTIVE,
        )
        hired = candidate.model_copy(update={"stage": CandidateStage.HIRED})

        self._store.update(
            lambda prev: prev.model_copy(update={
                "employees": [*prev.employees, employee],
                "candidates": [hired if c.id == candidate.id else c for c in prev.candidates],
            })
        )

        self._audit(AuditEventBuilder.candidate_hired(
            candidate_id=candidate.id,
            employee_id=employee.id,
            name=employee.name,
            role=employee.role,
            correlation_id=correlation_id,
        ))
        return employee

    def open_candidates(self) -> list[Candidate]:
        """Candidates still in the pipeline (not yet hired)."""
        return [c for c in self.data.candidates if c.stage != CandidateStage.HIRED]

    # =========================================================================
    # EMPLOYEE DIRECTORY
    # =========================================================================

    def add_credential(self, employee_id: str, credential: str) -> Employee:
        """Append a degree or certification to an employee's record."""
        self._require("add_credential", credential=credential)

        employee = self.data.find_employee(employee_id)
        if employee is None:
            raise NotFoundError(f"Employee not found: {employee_id}")

        credential = credential.strip()
        updated = employee.model_copy(
            update={"credentials": [*employee.credentials, credential]}
        )
        self._store.update(
            lambda prev: prev.model_copy(update={
                "employees": [updated if e.id == employee.id else e for e in prev.employees]
            })
        )
        self._audit(AuditEventBuilder.credential_added(employee.id, credential))
        return updated

    # =========================================================================
    # JOB PROFORMAS
    # =========================================================================

    async def create_proforma(self, title: str, department: str) -> JobProforma:
        """
        Create a job proforma with an AI-drafted description.

        The agent never raises; when it cannot help, the proforma is
        still created and carries the agent's fallback message.
        """
        self._require("create_proforma", title=title, department=department)

        agent = self._job_agent or JobDescriptionAgent()
        draft = await agent.generate(title.strip(), department.strip())

        proforma = self._build(
            "create_proforma",
            JobProforma,
            id=self._ids.next_id(),
            title=title,
            description=draft.description,
            requirements=draft.requirements,
            department=department,
            salary_range=self._settings.default_salary_range,
        )
        self._store.update(
            lambda prev: prev.model_copy(
                update={"job_proformas": [*prev.job_proformas, proforma]}
            )
        )
        self._audit(AuditEventBuilder.proforma_created(
            proforma.id, proforma.title, proforma.department, len(proforma.requirements)
        ))
        return proforma

    def proforma_titles(self) -> list[str]:
        """Roles a new candidate can apply for."""
        return [p.title for p in self.data.job_proformas]
