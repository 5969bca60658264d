"""
OpenMic Python SDK - Exceptions

This module contains all custom exceptions used by the SDK.

Failures fall into three families. ``ConfigurationError`` is raised before
any network traffic when node parameters or client settings are invalid.
``TransportError`` (and its HTTP-status subclasses) means the API could not
be reached or answered with an error. ``ShapeError`` means the API answered
but the payload does not look like what we expect.
"""

from typing import Any, Dict, Optional


class OpenMicError(Exception):
    """
    Base exception for all OpenMic SDK errors.

    Attributes:
        message: Human-readable error message
        code: Error code if available
        details: Additional error details
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', code='{self.code}')"


class ConfigurationError(OpenMicError):
    """
    Raised when a parameter or client setting is invalid.

    This can occur when:
    - The trigger limit is outside 1..1000
    - A phone number is not in E.164 format
    - A node is asked for an unknown resource or operation

    Attributes:
        field: Name of the offending parameter, if known
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        details = {"field": field} if field else None
        super().__init__(message, code="CONFIGURATION_ERROR", details=details)
        self.field = field


class ShapeError(OpenMicError):
    """
    Raised when an API payload does not have the expected structure.

    Attributes:
        response: The raw payload that failed validation
    """

    def __init__(self, message: str, response: Any = None) -> None:
        super().__init__(message, code="SHAPE_ERROR")
        self.response = response


class TransportError(OpenMicError):
    """
    Raised when the API cannot be reached or returns an error status.

    Attributes:
        status_code: HTTP status code, None for network failures
        body: Parsed (or raw text) response body, if any
    """

    def __init__(
        self,
        message: str = "Request failed",
        status_code: Optional[int] = None,
        body: Any = None,
        code: str = "TRANSPORT_ERROR",
    ) -> None:
        details: Dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        if body is not None:
            details["body"] = body
        super().__init__(message, code=code, details=details)
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        base = super().__str__()
        if self.status_code is not None:
            return f"{base} (HTTP {self.status_code})"
        return base


class AuthenticationError(TransportError):
    """
    Raised when authentication fails.

    This can occur when:
    - API key is missing, invalid or revoked
    - API key lacks access to the requested resource
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        status_code: Optional[int] = None,
        body: Any = None,
    ) -> None:
        super().__init__(message, status_code=status_code, body=body, code="AUTHENTICATION_ERROR")


class NotFoundError(TransportError):
    """Raised when a requested bot, call or phone number does not exist."""

    def __init__(
        self,
        message: str = "Resource not found",
        status_code: Optional[int] = 404,
        body: Any = None,
    ) -> None:
        super().__init__(message, status_code=status_code, body=body, code="NOT_FOUND")


class ValidationError(TransportError):
    """
    Raised when the API rejects a request as invalid.

    Attributes:
        field_errors: Dictionary mapping field names to error messages
    """

    def __init__(
        self,
        message: str = "Validation failed",
        status_code: Optional[int] = 422,
        body: Any = None,
        field_errors: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(message, status_code=status_code, body=body, code="VALIDATION_ERROR")
        self.field_errors = field_errors or {}

    def __str__(self) -> str:
        base = super().__str__()
        if self.field_errors:
            errors = ", ".join(f"{k}: {v}" for k, v in self.field_errors.items())
            return f"{base} ({errors})"
        return base


class RateLimitError(TransportError):
    """
    Raised when the API answers 429.

    Attributes:
        retry_after: Number of seconds the API asked us to wait
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: Optional[str] = None,
        body: Any = None,
    ) -> None:
        super().__init__(message, status_code=429, body=body, code="RATE_LIMIT_ERROR")
        try:
            self.retry_after = int(retry_after) if retry_after else None
        except ValueError:
            self.retry_after = None


class ServerError(TransportError):
    """
    Raised when the API answers with a 5xx status.

    Attributes:
        request_id: Request ID for debugging
    """

    def __init__(
        self,
        message: str = "Server error",
        status_code: Optional[int] = 500,
        body: Any = None,
        request_id: Optional[str] = None,
    ) -> None:
        super().__init__(message, status_code=status_code, body=body, code="SERVER_ERROR")
        self.request_id = request_id

    def __str__(self) -> str:
        base = super().__str__()
        if self.request_id:
            return f"{base} (Request ID: {self.request_id})"
        return base
