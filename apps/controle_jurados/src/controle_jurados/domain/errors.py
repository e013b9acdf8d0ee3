"""Domain exceptions used across API, CLI and services."""

from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any


def compose_error_message(*, cause: str, action: str) -> str:
    """Build a user-facing error message with cause and corrective action."""

    return f"Cause: {cause} Action: {action}"


@dataclass(slots=True)
class DomainError(Exception):
    """Base exception for predictable domain failures."""

    code: str
    message: str
    status_code: int
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


class _CatalogError(DomainError):
    """Domain error whose code, status and default message are class-level."""

    error_code = "DOMAIN_ERROR"
    http_status = HTTPStatus.UNPROCESSABLE_ENTITY
    default_cause = "The operation violates a business rule."
    default_action = "Review the request and retry."

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=self.error_code,
            message=message
            or compose_error_message(
                cause=self.default_cause,
                action=self.default_action,
            ),
            status_code=self.http_status,
            details=details or {},
        )


class ValidationError(_CatalogError):
    """Raised when caller-supplied data violates an input contract."""

    error_code = "INVALID_REQUEST"
    http_status = HTTPStatus.BAD_REQUEST
    default_cause = "Request data violates business rules."
    default_action = "Adjust the input fields and try again."


class DuplicateCpfError(ValidationError):
    """Raised when a CPF is already registered for another juror."""

    error_code = "DUPLICATE_CPF"
    http_status = HTTPStatus.CONFLICT
    default_cause = "CPF is already registered in the system."
    default_action = "Search for the existing juror instead of registering again."


class DuplicateAssignmentError(ValidationError):
    """Raised when a juror is already assigned to the draw."""

    error_code = "DUPLICATE_ASSIGNMENT"
    http_status = HTTPStatus.CONFLICT
    default_cause = "This juror is already assigned to the draw."
    default_action = "Toggle the existing assignment role instead of adding it again."


class JurorInUseError(ValidationError):
    """Raised when deleting a juror still referenced by draws."""

    error_code = "JUROR_IN_USE"
    http_status = HTTPStatus.CONFLICT
    default_cause = "Juror is referenced by draw assignments, ballots or marks."
    default_action = "Inactivate the juror instead of deleting the record."


class SoleTitularJudgeError(ValidationError):
    """Raised when an edit would leave the district without a titular judge."""

    error_code = "SOLE_TITULAR_JUDGE"
    http_status = HTTPStatus.UNPROCESSABLE_ENTITY
    default_cause = "At least one judge must remain titular."
    default_action = "Mark another judge as titular before unsetting this one."


class InactiveTitularJudgeError(ValidationError):
    """Raised when an inactive judge is made titular while active judges exist."""

    error_code = "INACTIVE_TITULAR_JUDGE"
    http_status = HTTPStatus.UNPROCESSABLE_ENTITY
    default_cause = "An inactive judge cannot be titular while active judges exist."
    default_action = "Activate the judge or choose an active judge as titular."


class InvalidBallotTransitionError(ValidationError):
    """Raised when a ballot status change is not allowed."""

    error_code = "INVALID_BALLOT_TRANSITION"
    http_status = HTTPStatus.UNPROCESSABLE_ENTITY
    default_cause = "Ballot cannot move to the requested status."
    default_action = "Regenerate ballots or choose a valid status transition."


class NotFoundError(_CatalogError):
    """Raised when a referenced entity does not exist."""

    error_code = "NOT_FOUND"
    http_status = HTTPStatus.NOT_FOUND
    default_cause = "Referenced record was not found."
    default_action = "Check the identifier and retry."


class JurorNotFoundError(NotFoundError):
    error_code = "JUROR_NOT_FOUND"
    default_cause = "Juror was not found."
    default_action = "Check the juror identifier or CPF and retry."


class JudgeNotFoundError(NotFoundError):
    error_code = "JUDGE_NOT_FOUND"
    default_cause = "Judge was not found."
    default_action = "Check the judge identifier and retry."


class DrawNotFoundError(NotFoundError):
    error_code = "DRAW_NOT_FOUND"
    default_cause = "Draw was not found."
    default_action = "Check the draw identifier and retry."


class AssignmentNotFoundError(NotFoundError):
    error_code = "ASSIGNMENT_NOT_FOUND"
    default_cause = "Juror is not assigned to this draw."
    default_action = "Assign the juror to the draw first."


class BallotNotFoundError(NotFoundError):
    error_code = "BALLOT_NOT_FOUND"
    default_cause = "Ballot was not found."
    default_action = "Regenerate the draw ballots and retry."


class InstitutionNotFoundError(NotFoundError):
    error_code = "INSTITUTION_NOT_FOUND"
    default_cause = "Institution was not found."
    default_action = "Use an existing institution identifier or omit it."


class InvariantViolationError(_CatalogError):
    """Raised when an internal consistency check fails after a safe operation."""

    error_code = "INVARIANT_VIOLATION"
    http_status = HTTPStatus.INTERNAL_SERVER_ERROR
    default_cause = "An internal consistency check failed."
    default_action = "Retry the operation and report the problem if it persists."
