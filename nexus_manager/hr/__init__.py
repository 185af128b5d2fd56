"""Human resources operations."""

from nexus_manager.hr.service import MOVABLE_STAGES, HRService, work_email

__all__ = [
    "HRService",
    "MOVABLE_STAGES",
    "work_email",
]
