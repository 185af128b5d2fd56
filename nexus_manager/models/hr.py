"""
Human Resources Data Models

Employee directory, job requisitions ("proformas") and the candidate
pipeline.
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class EmployeeStatus(str, Enum):
    ACTIVE = "Active"
    ON_LEAVE = "On Leave"
    TERMINATED = "Terminated"


class CandidateStage(str, Enum):
    """
    Hiring pipeline stages.

    HIRED is terminal and is only reached through hiring,
    which also creates the employee record.
    """
    APPLIED = "Applied"
    INTERVIEW = "Interview"
    OFFER = "Offer"
    HIRED = "Hired"
    REJECTED = "Rejected"


class Employee(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str
    name: str = Field(..., min_length=1, max_length=200)
    role: str = Field(..., min_length=1, max_length=200)
    department: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=254)
    start_date: date
    credentials: list[str] = Field(
        default_factory=list,
        description="Degrees, certifications and licences (e.g. CPA, PMP)"
    )
    status: EmployeeStatus = EmployeeStatus.ACTIVE


class Candidate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str
    name: str = Field(..., min_length=1, max_length=200)
    applying_for: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Title of the job proforma applied for"
    )
    stage: CandidateStage = CandidateStage.APPLIED
    resume_summary: Optional[str] = None
    match_score: Optional[float] = Field(default=None, ge=0.0, le=100.0)


class JobProforma(BaseModel):
    """A job requisition: title, description and requirements."""
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    requirements: list[str] = Field(default_factory=list)
    department: str = Field(..., min_length=1, max_length=100)
    salary_range: str = ""
