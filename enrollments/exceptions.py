"""Errors raised by the enrollment and marks-entry workflow.

Each error carries the HTTP status the API layer responds with; messages
are shown to data-entry staff as-is, so they name the rule that failed.
"""
from __future__ import annotations


class WorkflowError(Exception):
    status_code = 400
    default_message = "Request rejected."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(WorkflowError):
    """Missing, malformed or out-of-range input. Nothing was written."""

    default_message = "Invalid input."


class EnrollmentBlocked(WorkflowError):
    status_code = 409
    default_message = "Student must complete current course before enrolling in another"


class NotEligible(WorkflowError):
    """The student's enrollment state does not allow the operation."""

    default_message = "Student is not eligible for this module."


class EnrollmentMissing(NotEligible):
    default_message = "Student is not enrolled in the course that contains this module."


class ModuleNotRegistered(NotEligible):
    default_message = "Student is enrolled in the course but not registered for this module."


class AlreadyFinalized(WorkflowError):
    default_message = "Marks for this module are already final; retract them before re-entering."


class NotFound(WorkflowError):
    status_code = 404
    default_message = "Record not found"


class StorageError(WorkflowError):
    status_code = 500
    default_message = "The database rejected the operation; no changes were saved."
