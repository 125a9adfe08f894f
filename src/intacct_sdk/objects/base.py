"""
Operations shared by every object reader.

Readers compose an ``ObjectOperations`` instance rather than inheriting from
it; it owns the handler factory used to dispatch content.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, Mapping, Optional, Protocol
import logging

from ..runtime.errors import ReadError
from ..xml.request.content import Content, ReadMore
from ..xml.request_handler import RequestHandler
from ..xml.response.operation import Operation, Result


logger = logging.getLogger(__name__)

SUCCESS = "success"


class SessionClient(Protocol):
    """Anything that can supply session configuration."""

    def get_session_config(self) -> Dict[str, Any]:
        ...


class ContentExecutor(Protocol):
    def execute_content(self, config: Mapping[str, Any], content: Content) -> Operation:
        ...


HandlerFactory = Callable[[Mapping[str, Any]], ContentExecutor]


def merge_config(client: SessionClient, params: Mapping[str, Any]) -> Dict[str, Any]:
    """Return session configuration overlaid with ``params``; params win."""
    config = dict(client.get_session_config())
    config.update(params)
    return config


def check_result(result: Result, message: str) -> Result:
    """Raise ``ReadError`` with ``message`` unless ``result`` succeeded."""
    if result.get_status() != SUCCESS:
        logger.debug(f"{result.get_function() or 'function'} returned status {result.get_status()!r}")
        raise ReadError(message, result.get_errors())
    return result


class ObjectOperations:
    """
    Dispatches content through a request handler.

    Args:
        handler_factory: Callable building a handler from a config mapping;
            defaults to ``RequestHandler``
    """

    def __init__(self, handler_factory: Optional[HandlerFactory] = None):
        self.handler_factory: HandlerFactory = handler_factory or RequestHandler

    def execute(self, handler_config: Mapping[str, Any], config: Mapping[str, Any],
                content: Content) -> Result:
        """Build a handler from ``handler_config``, send ``content`` with ``config`` and return the first result."""
        handler = self.handler_factory(handler_config)
        operation = handler.execute_content(config, content)
        return operation.get_result()

    def read_more(self, params: Mapping[str, Any], client: SessionClient) -> Result:
        """
        Fetch the next page of a paginated query.

        Accepts the following options:

        - control_id: (string)
        - result_id: (string, required)

        Raises:
            InvalidArgumentError: If result_id is missing
            ReadError: If the result status is not success
        """
        config = merge_config(client, params)
        content = Content([ReadMore.from_params(params)])

        result = self.execute(config, config, content)
        return check_result(result, "An error occurred trying to read more records")
