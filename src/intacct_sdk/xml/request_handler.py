"""
Request handler for the Intacct XML gateway.

Writes the request document around a ``Content`` list, posts it and parses
the response into an ``Operation``. No retries are attempted here.
"""

from __future__ import annotations
from typing import Any, Mapping, Optional, Type, TypeVar
from xml.etree import ElementTree
from xml.etree.ElementTree import Element, SubElement
import logging
import uuid

import requests
from pydantic import BaseModel, Field, ValidationError, model_validator

from ..runtime.errors import InvalidArgumentError, TransportError
from .request.content import Content
from .response.operation import Operation, Response


logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT_URL = "https://api.intacct.com/ia/xml/xmlgw.phtml"
REQUEST_CONTENT_TYPE = "x-intacct-xml-request"
USER_AGENT = "intacct-sdk-python/1.0.0"

_M = TypeVar("_M", bound=BaseModel)


def _validate(model: Type[_M], config: Mapping[str, Any]) -> _M:
    values = {k: v for k, v in config.items() if v is not None}
    try:
        return model.model_validate(values)
    except ValidationError as e:
        raise InvalidArgumentError(
            f"Invalid request configuration: {e.errors()[0].get('msg')}",
            details={"errors": e.errors(include_url=False)},
            cause=e,
        ) from e


class HandlerConfig(BaseModel):
    """Transport settings fixed when the handler is constructed."""

    endpoint_url: str = DEFAULT_ENDPOINT_URL
    timeout: float = Field(default=30.0, gt=0)
    verify_ssl: bool = True

    model_config = {"extra": "ignore"}

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "HandlerConfig":
        return _validate(cls, config)


class RequestConfig(BaseModel):
    """
    Control and authentication settings for one request.

    Built from a merged session + parameter mapping; unknown keys are ignored.
    """

    sender_id: str
    sender_password: str
    session_id: Optional[str] = None
    company_id: Optional[str] = None
    user_id: Optional[str] = None
    user_password: Optional[str] = None
    control_id: Optional[str] = None
    unique_id: bool = False
    dtd_version: str = "3.0"
    include_whitespace: bool = False
    transaction: bool = False

    model_config = {"extra": "ignore"}

    @model_validator(mode="after")
    def validate_credentials(self) -> "RequestConfig":
        if not self.session_id and not (self.company_id and self.user_id and self.user_password):
            raise ValueError(
                "Required session_id or company_id, user_id and user_password not supplied"
            )
        return self

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "RequestConfig":
        return _validate(cls, config)


def _text(parent: Element, tag: str, value: Any) -> Element:
    child = SubElement(parent, tag)
    child.text = value if isinstance(value, str) else str(value).lower()
    return child


class RequestHandler:
    """
    Sends content to the XML gateway and returns the parsed operation.

    The transport settings (endpoint, timeout, SSL verification) come from the
    mapping given to the constructor; control and authentication settings come
    from the mapping given to ``execute_content``.

    Example:
        ```python
        handler = RequestHandler(config)
        operation = handler.execute_content(config, Content([ReadView.from_params(params)]))
        result = operation.get_result()
        ```
    """

    def __init__(self, config: Mapping[str, Any], session: Optional[requests.Session] = None):
        """
        Initialize the handler.

        Args:
            config: Mapping holding endpoint_url, timeout and verify_ssl; other keys are ignored
            session: Optional requests.Session for connection pooling
        """
        self.config = HandlerConfig.from_mapping(config)
        self._session = session

    @property
    def endpoint_url(self) -> str:
        return self.config.endpoint_url

    def build_request(self, config: RequestConfig, content: Content) -> bytes:
        """Write the full request document for ``content``."""
        request = Element("request")

        control = SubElement(request, "control")
        _text(control, "senderid", config.sender_id)
        _text(control, "password", config.sender_password)
        _text(control, "controlid", config.control_id or str(uuid.uuid4()))
        _text(control, "uniqueid", config.unique_id)
        _text(control, "dtdversion", config.dtd_version)
        _text(control, "includewhitespace", config.include_whitespace)

        operation = SubElement(request, "operation", {"transaction": str(config.transaction).lower()})
        authentication = SubElement(operation, "authentication")
        if config.session_id:
            _text(authentication, "sessionid", config.session_id)
        else:
            login = SubElement(authentication, "login")
            _text(login, "userid", config.user_id)
            _text(login, "companyid", config.company_id)
            _text(login, "password", config.user_password)

        content.write_xml(operation)

        return ElementTree.tostring(request, encoding="UTF-8", xml_declaration=True)

    def execute_content(self, config: Mapping[str, Any], content: Content) -> Operation:
        """
        Send ``content`` using ``config`` and return the response operation.

        Args:
            config: Merged session configuration and call parameters
            content: Functions to execute

        Returns:
            Parsed operation block of the response

        Raises:
            InvalidArgumentError: If sender or login credentials are missing
            TransportError: If the HTTP request fails or returns a non-200 status
            ResponseParseError: If the response body cannot be parsed
            ResponseError: If the response control or authentication block failed
        """
        request_config = RequestConfig.from_mapping(config)
        body = self.build_request(request_config, content)

        logger.debug(
            f"Executing {len(content)} function(s) "
            f"[{', '.join(block.function_name for block in content)}] "
            f"against {self.endpoint_url} ({len(body)} bytes)"
        )

        response = self._post(body)
        logger.debug(f"Received response ({len(response.content)} bytes)")

        return Response.from_xml(response.content).get_operation()

    def _post(self, body: bytes) -> requests.Response:
        session = self._session or requests.Session()
        try:
            response = session.post(
                self.config.endpoint_url,
                data=body,
                headers={
                    "Content-Type": REQUEST_CONTENT_TYPE,
                    "Accept-Encoding": "gzip",
                    "User-Agent": USER_AGENT,
                },
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        except requests.exceptions.RequestException as e:
            logger.warning(f"Request to {self.config.endpoint_url} failed: {e}")
            raise TransportError(f"HTTP request failed: {e}", cause=e) from e
        finally:
            if self._session is None:
                session.close()

        if response.status_code != 200:
            logger.warning(f"Request to {self.config.endpoint_url} returned HTTP {response.status_code}")
            raise TransportError(
                f"HTTP {response.status_code}: {response.reason}",
                status_code=response.status_code,
            )
        return response
