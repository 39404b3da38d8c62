"""
MoodLog Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the error classes the API exposes.
Why:   Each endpoint has a fixed JSON error shape. Carrying the status code and
       the envelope on the exception lets services raise, and lets the global
       handlers in main.py render every error the same way.
How:   Each exception class holds a message and an optional context dict.
       `status_code` picks the HTTP status; `to_content()` builds the body.

Exception Hierarchy:
    MoodLogError (base)                → 500 {"error": ...}
    ├── ValidationError                → 400 {"error"|"response": ...}
    ├── NotFoundError                  → 404 {"message": ...}
    ├── RegistrationError              → 400 {"message", "error": <code>}
    ├── AuthenticationError            → 401 {"message", "error": <detail>}
    ├── StoreError                     → 500 {"error": ...}
    └── GenerativeTextError            → 500 {"response": <fallback>}

    IdentityProviderError is raised by identity backends and never reaches the
    handlers directly: AccountService translates it into RegistrationError or
    AuthenticationError.

Context is logged server-side and never returned to the client.
"""

from typing import Any, Dict, Optional


UNKNOWN_ERROR = "Unknown error"


class MoodLogError(Exception):
    """
    Base exception for all MoodLog application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500
    envelope_key = "error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def to_content(self) -> Dict[str, Any]:
        """JSON body returned to the client."""
        return {self.envelope_key: self.message}


class ValidationError(MoodLogError):
    """
    Raised when a required field is missing or unparseable.

    HTTP:  400 Bad Request
    When:  Before any provider call. No store write happens after this is raised.

    `envelope_key` lets the Gemini proxy answer with {"response": ...} while the
    store accessors answer with {"error": ...}.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        envelope_key: str = "error",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field
        self.envelope_key = envelope_key


class NotFoundError(MoodLogError):
    """
    Raised when a requested record does not exist.

    HTTP:  404 Not Found, body {"message": ...}
    """

    status_code = 404
    envelope_key = "message"

    def __init__(
        self,
        message: str = "The requested resource was not found",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class IdentityProviderError(MoodLogError):
    """
    Raised by identity backends when the provider rejects a call.

    Attributes:
        code:    Provider error code (e.g. "auth/email-already-in-use"), may be None
        message: Provider error message, may be empty
    """

    def __init__(
        self,
        code: Optional[str] = None,
        message: str = "",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.code = code


class RegistrationError(MoodLogError):
    """
    Account creation was rejected by the identity provider.

    HTTP:  400 Bad Request, body {"message": "Error creating user", "error": <code>}
    """

    status_code = 400

    def __init__(
        self,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message="Error creating user", context=context)
        self.code = code or UNKNOWN_ERROR

    def to_content(self) -> Dict[str, Any]:
        return {"message": self.message, "error": self.code}


class AuthenticationError(MoodLogError):
    """
    Credential verification failed.

    HTTP:  401 Unauthorized, body {"message": "Invalid token", "error": <detail>}
    """

    status_code = 401

    def __init__(
        self,
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message="Invalid token", context=context)
        self.detail = detail or UNKNOWN_ERROR

    def to_content(self) -> Dict[str, Any]:
        return {"message": self.message, "error": self.detail}


class StoreError(MoodLogError):
    """
    Raised when a document store operation fails.

    HTTP:  500 Internal Server Error
    The message is generic; the underlying store exception is logged only.
    """

    def __init__(
        self,
        message: str = "A storage error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class GenerativeTextError(MoodLogError):
    """
    Raised when the generative-text API call fails (transport, status or body).

    HTTP:  500 Internal Server Error, body {"response": <fixed fallback>}
    """

    envelope_key = "response"

    def __init__(
        self,
        message: str = "Oops! Something went wrong. Check your API key or connection.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
