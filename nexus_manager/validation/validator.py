"""
Form Input Validation

DESIGN DECISION: Forms get presence checks first.
A required field that is missing or blank blocks the operation;
amounts must additionally be readable as non-negative numbers,
since nothing else can be booked. Constraints the record models
enforce (lengths, ranges) are reported through the same issue list.

IMPORTANT: Validation NEVER silently fixes issues.
It reports them so the user can correct the form.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from nexus_manager.models.validation import ValidationIssue, ValidationResult


ModelT = TypeVar("ModelT", bound=BaseModel)


class BusinessRuleError(Exception):
    """Base exception for operations refused by a bookkeeping or HR rule."""
    pass


class ValidationFailedError(BusinessRuleError):
    """Input is missing or invalid; carries the full validation result."""

    def __init__(self, result: ValidationResult):
        self.result = result
        fields = ", ".join(i.field for i in result.issues if i.severity == "error")
        super().__init__(f"{result.operation}: invalid or missing {fields}")


class InvalidTransitionError(BusinessRuleError):
    """A status change that the record's current state does not allow."""
    pass


def is_blank(value: Any) -> bool:
    """True for None and for strings that are empty after stripping."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def parse_amount(value: Any) -> Optional[Decimal]:
    """Read a form amount; None when it is not a non-negative number."""
    if is_blank(value):
        return None
    try:
        amount = Decimal(str(value).strip().replace(",", ""))
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite() or amount < 0:
        return None
    return amount


class RecordValidator:
    """
    Presence checks for form-driven operations.

    Usage:
        result = validator.check(
            "create_bill",
            required={"vendor_name": vendor, "category": category},
            amounts={"amount": amount},
        )
    """

    def check(
        self,
        operation: str,
        required: Optional[dict[str, Any]] = None,
        amounts: Optional[dict[str, Any]] = None,
    ) -> ValidationResult:
        """
        Validate the input of one operation.

        Args:
            operation: Name of the operation (used in messages and audit)
            required: Field name -> value that must be present
            amounts: Field name -> value that must be a non-negative number

        Returns:
            ValidationResult with all issues found
        """
        issues = []

        for field, value in (required or {}).items():
            if is_blank(value):
                issues.append(ValidationIssue(
                    field=field,
                    issue_type="missing",
                    message=f"{_label(field)} is required",
                    severity="error",
                ))

        for field, value in (amounts or {}).items():
            if is_blank(value):
                issues.append(ValidationIssue(
                    field=field,
                    issue_type="missing",
                    message=f"{_label(field)} is required",
                    severity="error",
                ))
            elif parse_amount(value) is None:
                issues.append(ValidationIssue(
                    field=field,
                    issue_type="invalid_value",
                    message=f"{_label(field)} must be a non-negative number",
                    severity="error",
                    suggested_fix="Enter digits only, e.g. 1250.00",
                ))

        return ValidationResult(
            operation=operation,
            is_valid=not any(issue.severity == "error" for issue in issues),
            issues=issues,
        )

    def build(self, operation: str, model: type[ModelT], **fields: Any) -> ModelT:
        """
        Construct a record, reporting model constraint violations as issues.

        Raises:
            ValidationFailedError: A field breaks a model constraint
                (too long, negative, out of range)
        """
        try:
            return model(**fields)
        except ValidationError as e:
            raise ValidationFailedError(self.from_model_error(operation, e)) from e

    def from_model_error(
        self,
        operation: str,
        error: ValidationError,
    ) -> ValidationResult:
        """Translate a Pydantic error into the form's issue list."""
        issues = []
        for err in error.errors():
            field = ".".join(str(part) for part in err["loc"]) or "record"
            issues.append(ValidationIssue(
                field=field,
                issue_type="invalid_value",
                message=f"{_label(field)}: {err['msg']}",
                severity="error",
            ))
        return ValidationResult(operation=operation, is_valid=False, issues=issues)

    def get_user_friendly_summary(
        self,
        result: ValidationResult,
    ) -> str:
        """
        Generate a user-friendly summary of validation results.
        """
        if result.is_valid:
            return "All required fields are filled in."

        lines = ["Please fix the following before saving:"]
        for issue in result.issues:
            lines.append(f"   • {issue.message}")
            if issue.suggested_fix:
                lines.append(f"     {issue.suggested_fix}")
        return "\n".join(lines)


def _label(field: str) -> str:
    return field.replace("_", " ").capitalize()
