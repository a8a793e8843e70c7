"""Error taxonomy shared by the service layer.

Services never let storage or identity-service exceptions escape as-is:
they are re-raised as one of these classes (with the original as
__cause__), tagged with the operation that failed. The HTTP layer
translates each class into a status code.
"""


class ServiceError(Exception):
    """Base class for classified service failures."""

    def __init__(self, message: str, *, op: str = ""):
        super().__init__(message)
        self.message = message
        self.op = op

    def __str__(self) -> str:
        return f"{self.op}: {self.message}" if self.op else self.message


class InvalidCredentialError(ServiceError):
    """Verified claims are missing or malformed."""


class InvalidArgumentError(ServiceError):
    """Caller supplied input the operation cannot accept."""


class NotFoundError(ServiceError):
    """Account, record, or identity does not exist (for this caller)."""


class AlreadyExistsError(ServiceError):
    """Identity or account already exists."""


class UnexpectedError(ServiceError):
    """Storage or remote failure the caller cannot act on."""
