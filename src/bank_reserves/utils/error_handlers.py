"""
Custom exception classes and error formatting utilities.
"""

from typing import Optional, Dict, Any
import structlog

logger = structlog.get_logger(__name__)


class BankReservesError(Exception):
    """Base exception class for the Bank Reserves application."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize base error.

        Args:
            message: Error message
            error_code: Unique error code for identification
            context: Additional context information
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary format."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'error_code': self.error_code,
            'context': self.context
        }

    def get_user_friendly_message(self) -> str:
        """Get user-friendly error message."""
        return self.message


class RemoteRequestError(BankReservesError):
    """Raised when the FDIC API answers with a non-success HTTP status."""

    def __init__(
        self,
        status: int,
        reason: Optional[str] = None,
        body: Optional[str] = None,
        url: Optional[str] = None
    ):
        message = f"FDIC request failed: {status} {reason or ''}".rstrip()
        if body:
            message = f"{message} - {body}"

        super().__init__(
            message=message,
            error_code=f"HTTP_{status}",
            context={
                'status': status,
                'reason': reason,
                'url': url
            }
        )
        self.status = status
        self.reason = reason
        self.body = body


def format_error_for_user(error: BaseException) -> str:
    """
    Format any exception as the plain message shown in the error region.

    Args:
        error: Exception raised by a lookup

    Returns:
        The exception's message, or its type name when the message is empty
    """
    if isinstance(error, BankReservesError):
        return error.get_user_friendly_message()

    message = str(error)
    return message if message else type(error).__name__


def log_handled_error(error: BaseException, operation: str, **context: Any) -> None:
    """
    Log an error that was caught and surfaced to the user.

    Args:
        error: The caught exception
        operation: Name of the failed operation
        **context: Extra structured fields for the log entry
    """
    fields: Dict[str, Any] = {
        'operation': operation,
        'error': format_error_for_user(error),
        'error_type': type(error).__name__,
    }
    if isinstance(error, BankReservesError):
        fields['error_code'] = error.error_code
    fields.update(context)

    logger.error("Lookup failed", **fields)
