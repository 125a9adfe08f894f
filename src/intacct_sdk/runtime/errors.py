"""
Intacct Error Model

This module provides the error handling framework for the Intacct Python SDK.
Server-reported failures carry the structured error list parsed from the
``<errormessage>`` block of the response.
"""

from __future__ import annotations
from typing import Optional, Dict, Any, List
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error categories raised by the SDK."""

    OK = 0
    UNKNOWN = 1

    # Caller errors
    INVALID_ARGUMENT = 100

    # Transport errors
    TRANSPORT_ERROR = 200
    HTTP_ERROR = 201

    # Response errors
    RESPONSE_ERROR = 300
    RESPONSE_PARSE_ERROR = 301
    AUTHENTICATION_FAILED = 302

    # Operation result errors
    RESULT_ERROR = 400
    READ_FAILED = 401
    LIMIT_EXCEEDED = 402


class IntacctError(Exception):
    """
    Base class for all Intacct SDK errors.

    Provides a message, an error code, optional details and the underlying
    exception that caused it.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize an Intacct error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result: Dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class InvalidArgumentError(IntacctError, ValueError):
    """A required option is missing or an option value is not valid."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_ARGUMENT, details, cause)


class TransportError(IntacctError):
    """The HTTP request could not be completed or returned a non-200 status."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        code = ErrorCode.HTTP_ERROR if status_code is not None else ErrorCode.TRANSPORT_ERROR
        super().__init__(message, code, details, cause)
        self.status_code = status_code


class ResponseParseError(IntacctError):
    """The response body is not a well-formed Intacct response document."""

    def __init__(self, message: str = "Unable to parse response",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.RESPONSE_PARSE_ERROR, details, cause)


class _ErrorListMixin:
    errors: List[Dict[str, Any]]

    def get_errors(self) -> List[Dict[str, Any]]:
        """Return the server-reported error list."""
        return list(self.errors)

    def _with_errors(self, text: str) -> str:
        if not self.errors:
            return text
        descriptions = [
            " ".join(str(e.get(k)) for k in ("errorno", "description", "description2") if e.get(k))
            for e in self.errors
        ]
        return f"{text} | Errors: {'; '.join(descriptions)}"


class ResponseError(_ErrorListMixin, IntacctError):
    """The request control block or operation authentication failed."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None,
                 code: ErrorCode = ErrorCode.RESPONSE_ERROR):
        super().__init__(message, code)
        self.errors = list(errors or [])

    def __str__(self) -> str:
        return self._with_errors(super().__str__())


class ResultError(_ErrorListMixin, IntacctError):
    """An operation result reported a non-success status."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None,
                 code: ErrorCode = ErrorCode.RESULT_ERROR):
        super().__init__(message, code)
        self.errors = list(errors or [])

    def __str__(self) -> str:
        return self._with_errors(super().__str__())


class ReadError(ResultError):
    """A read function returned a non-success status."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message, errors, ErrorCode.READ_FAILED)


class LimitExceededError(ResultError):
    """A query would return more records than ``max_total_count`` allows."""

    def __init__(self, message: str, limit: int, total_count: int):
        super().__init__(message, code=ErrorCode.LIMIT_EXCEEDED)
        self.limit = limit
        self.total_count = total_count


__all__ = [
    "ErrorCode",
    "IntacctError",
    "InvalidArgumentError",
    "TransportError",
    "ResponseParseError",
    "ResponseError",
    "ResultError",
    "ReadError",
    "LimitExceededError",
]
