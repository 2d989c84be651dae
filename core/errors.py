"""
Error kinds and operation results for FSOps.

Every failure raised by a file operation carries an ErrorKind, so callers can
either catch by class or branch on the kind of an OperationResult.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    """
    Kinds of failure a file operation can report.

    INVALID_USAGE is a precondition the caller could have checked.
    ENVIRONMENT is a host primitive failing despite valid input.
    """
    INVALID_USAGE = "invalid_usage"
    ENVIRONMENT = "environment"


class FileOpsError(Exception):
    """Base class for all file operation failures."""
    kind: ErrorKind = ErrorKind.ENVIRONMENT

    def __init__(self, message: str, target: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.target = target


class InvalidUsageError(FileOpsError, ValueError):
    """Raised before any mutation when a precondition does not hold."""
    kind = ErrorKind.INVALID_USAGE


class EnvironmentFailure(FileOpsError, RuntimeError):
    """Raised when the host filesystem refuses an otherwise valid request."""
    kind = ErrorKind.ENVIRONMENT


@dataclass
class OperationResult:
    """Outcome of an operation run through FileOps.attempt()."""
    success: bool
    status: str
    message: Optional[str] = None
    data: Optional[Any] = None
    error_kind: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, data: Any = None) -> "OperationResult":
        return cls(success=True, status="EXECUTED", data=data)

    @classmethod
    def failed(cls, error: FileOpsError) -> "OperationResult":
        return cls(
            success=False,
            status=error.kind.name,
            message=error.message,
            error_kind=error.kind
        )
