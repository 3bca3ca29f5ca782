"""
Custom exceptions for the import/export pipeline with structured error context.

Every pipeline stage failure is terminal for its request. The API layer
translates each class into a client-visible failure: client errors are
rejected payloads, persistence errors are server-side failures whose unit
of work has been rolled back.

Exception Hierarchy:
    PriceServiceError (base)
    ├── ClientError
    │   ├── FormatError
    │   ├── NotFoundError
    │   ├── EmptyDatasetError
    │   └── PayloadTooLargeError
    └── PersistenceError

Rejected individual rows are not errors and never raise.
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class PriceServiceError(Exception):
    """
    Base exception for all pipeline errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (stage, member name, etc.)
        original_exception: The original exception that was caught (if any)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now(timezone.utc)

        self.context["error_timestamp"] = self.timestamp.isoformat()

        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        """Format error message with context."""
        base_msg = f"{self.__class__.__name__}: {self.message}"

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Client Errors (payload rejected, nothing persisted)
# ============================================================================

class ClientError(PriceServiceError):
    """Base exception for payloads the service refuses to import."""

    status_code = 400


class FormatError(ClientError):
    """
    Raised when the payload is not a readable container or its tabular
    member is not decodable text.

    Context should include:
        - stage: "archive" or "tabular"
        - member: Name of the archive member (if applicable)
        - line_number: Line where parsing stopped (if applicable)
    """
    pass


class NotFoundError(ClientError):
    """
    Raised when the container holds no qualifying top-level tabular member.

    Context should include:
        - suffix: The member suffix that was searched for
        - members: Names found in the container
    """
    pass


class EmptyDatasetError(ClientError):
    """
    Raised when the tabular member holds no data rows beyond its header.

    Context should include:
        - rows_found: Number of non-blank rows (header included)
    """
    pass


class PayloadTooLargeError(ClientError):
    """
    Raised when an upload, or the tabular member it expands to, is over
    the configured size limit.

    Context should include:
        - limit_bytes: The limit that was exceeded
        - size_bytes: Declared or received size
    """

    status_code = 413


# ============================================================================
# Server Errors
# ============================================================================

class PersistenceError(PriceServiceError):
    """
    Raised when any storage operation fails.

    The unit of work that triggered it has been rolled back, so the
    store's visible state is unchanged.

    Context should include:
        - operation: "import_batch" or "fetch_all"
        - batch_size: Number of candidates in the failed batch (imports)
    """

    status_code = 500
