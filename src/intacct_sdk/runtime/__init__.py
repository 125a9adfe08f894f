"""Runtime helpers for the Intacct Python SDK"""

from .errors import (
    ErrorCode,
    IntacctError,
    InvalidArgumentError,
    TransportError,
    ResponseParseError,
    ResponseError,
    ResultError,
    ReadError,
    LimitExceededError,
)

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
