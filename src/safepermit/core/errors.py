from __future__ import annotations


class PermitError(Exception):
    """Base class for failures raised by the submission and query services."""


class FormValidationError(PermitError):
    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__(self.summary)

    @property
    def summary(self) -> str:
        messages = list(self.errors.values())
        if len(messages) == 1:
            return messages[0]
        return f"发现 {len(messages)} 个问题需要修正"


class ApplicationNotFoundError(PermitError):
    def __init__(self, application_number: str):
        self.application_number = application_number
        super().__init__(f"application {application_number} not found")


class UserNotFoundError(PermitError):
    def __init__(self, phone: str):
        self.phone = phone
        super().__init__("user not found")


class ApplicationNumberConflictError(PermitError):
    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"application number still colliding after {attempts} attempts")


class TransientStoreError(PermitError):
    """The database was unreachable or timed out; the attempt left no writes behind."""


class SubmissionFailedError(PermitError):
    """Unexpected failure; details go to the log, never to the caller."""
