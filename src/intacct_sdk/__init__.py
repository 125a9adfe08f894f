"""
Intacct Python SDK

Client for the Intacct XML Web Services API: custom object view reads with
pagination and related-record reads.
"""

from .runtime.errors import *
from .client import IntacctClient, ClientConfig
from .xml import (
    RequestHandler, RequestConfig, HandlerConfig,
    Content, ContentBlock, ReadView, ReadRelated, ReadMore,
    Response, Operation, Result,
)
from .objects import ObjectOperations, CustomObjectReader, MAX_QUERY_TOTAL_COUNT

__version__ = "1.0.0"
__all__ = [
    # Client
    "IntacctClient",
    "ClientConfig",

    # Readers
    "ObjectOperations",
    "CustomObjectReader",
    "MAX_QUERY_TOTAL_COUNT",

    # Request/response
    "RequestHandler",
    "RequestConfig",
    "HandlerConfig",
    "Content",
    "ContentBlock",
    "ReadView",
    "ReadRelated",
    "ReadMore",
    "Response",
    "Operation",
    "Result",

    # Errors
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
