"""XML gateway request writing, dispatch and response parsing."""

from .request_handler import RequestHandler, RequestConfig, HandlerConfig, DEFAULT_ENDPOINT_URL
from .request import Content, ContentBlock, ReadView, ReadRelated, ReadMore
from .response import Response, Operation, Result

__all__ = [
    "RequestHandler",
    "RequestConfig",
    "HandlerConfig",
    "DEFAULT_ENDPOINT_URL",
    "Content",
    "ContentBlock",
    "ReadView",
    "ReadRelated",
    "ReadMore",
    "Response",
    "Operation",
    "Result",
]
