"""
CopyCart Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for store and AI-proxy failures.
How:   Each exception carries a user-facing message, an optional diagnostic
       `details` string, a `context` dict that is logged but never returned,
       and the HTTP status code the global handlers respond with.
Who:   Raised by services and the ORM model; caught by handlers in main.py.

Exception Hierarchy:
    CopyCartError (base)
    ├── StoreError          → 500 (query or persistence failure)
    ├── ValidationError     → 500 (required field missing; not split out as 400)
    ├── UpstreamError       → 500 or the upstream HTTP status
    ├── ExtractionError     → 500 (model output is not a JSON object)
    └── EmptyReplyError     → 500 (chat reply empty after marker split)
"""

from typing import Any, Dict, Optional


class CopyCartError(Exception):
    """
    Base exception for all CopyCart application errors.

    Attributes:
        message:      User-facing error description (returned in the response body)
        details:      Optional diagnostic text returned as `details`
        context:      Additional debug info (logged, NOT returned to the client)
        status_code:  HTTP status used by the global exception handler
        error_code:   Machine-readable `error` field of the response body
    """

    status_code: int = 500
    error_code: str = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.details = details
        self.context = context or {}
        super().__init__(self.message)


class StoreError(CopyCartError):
    """
    Raised when the product store cannot be queried or written.

    The message stays generic; the driver error goes to `details` and the
    server log.
    """

    error_code = "store_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, details=details, context=context)


class ValidationError(CopyCartError):
    """
    Raised when a product is missing one of its required fields.

    HTTP: 500. Clients historically could not tell a missing field from an
    unavailable database, and that contract is kept.
    """

    error_code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, details=details, context=ctx)
        self.field = field


class UpstreamError(CopyCartError):
    """
    Raised when the text-generation endpoint is unreachable, answers with a
    non-success status, returns a non-JSON body, or reports an `error` field.

    `status_code` is the upstream status when the failure was a non-success
    HTTP response, so the caller sees the same status the model API returned.
    """

    error_code = "upstream_error"

    def __init__(
        self,
        message: str = "The AI service is currently unavailable.",
        details: Optional[str] = None,
        status_code: int = 500,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, details=details, context=context)
        self.status_code = status_code


class ExtractionError(CopyCartError):
    """Raised when generated text holds no parseable brace-delimited JSON object."""

    error_code = "extraction_error"

    def __init__(
        self,
        message: str = "AI model returned an invalid format. Please try again.",
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, details=details, context=context)


class EmptyReplyError(CopyCartError):
    """Raised when nothing is left of a chat response after stripping the echoed prompt."""

    error_code = "empty_reply"

    def __init__(
        self,
        message: str = "AI model returned an empty reply.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
