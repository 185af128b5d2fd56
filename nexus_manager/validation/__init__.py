"""Validation package."""

from nexus_manager.validation.validator import (
    BusinessRuleError,
    InvalidTransitionError,
    ModelT,
    RecordValidator,
    ValidationFailedError,
    is_blank,
    parse_amount,
)

__all__ = [
    "BusinessRuleError",
    "InvalidTransitionError",
    "ModelT",
    "RecordValidator",
    "ValidationFailedError",
    "is_blank",
    "parse_amount",
]
