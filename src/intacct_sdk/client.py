"""
Intacct client and session configuration.

The client only holds connection and credential settings. Object readers
take it as a plain handle and read ``get_session_config()`` on every call.
"""

from __future__ import annotations
from typing import Any, Dict, Mapping, Optional, Union
import logging
import os

from pydantic import BaseModel, Field, ValidationError, field_validator

from .runtime.errors import InvalidArgumentError
from .xml.request_handler import DEFAULT_ENDPOINT_URL


ENV_PREFIX = "INTACCT_"


class ClientConfig(BaseModel):
    """
    Configuration for the Intacct client.

    Either ``session_id`` or the ``company_id``/``user_id``/``user_password``
    login triple is sent with every request.
    """

    endpoint_url: str = Field(default=DEFAULT_ENDPOINT_URL, description="XML gateway URL")
    sender_id: Optional[str] = Field(default=None, description="Web Services sender ID")
    sender_password: Optional[str] = Field(default=None, description="Web Services sender password")
    session_id: Optional[str] = Field(default=None, description="API session ID")
    company_id: Optional[str] = None
    user_id: Optional[str] = None
    user_password: Optional[str] = None
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    verify_ssl: bool = True
    debug: bool = False

    model_config = {"populate_by_name": True}

    @field_validator("endpoint_url")
    @classmethod
    def validate_endpoint_url(cls, v: str) -> str:
        if not v.startswith(("https://", "http://")):
            raise ValueError("endpoint_url must be an http(s) URL")
        return v

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """
        Load settings from environment variables such as ``INTACCT_SENDER_ID``.

        Args:
            prefix: Variable name prefix
            environ: Mapping to read instead of ``os.environ``
        """
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        for name in cls.model_fields:
            key = f"{prefix}{name.upper()}"
            if key in environ:
                values[name] = environ[key]
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise InvalidArgumentError(
                f"Invalid client configuration: {e.errors()[0].get('msg')}",
                details={"errors": e.errors(include_url=False)},
                cause=e,
            ) from e


class IntacctClient:
    """
    Holds session configuration shared by every request.

    Example:
        ```python
        client = IntacctClient(ClientConfig(
            sender_id="sender",
            sender_password="secret",
            session_id="abc123..",
        ))
        records = CustomObjectReader().get_view_records({"view": "Invoices"}, client)
        ```
    """

    def __init__(self, config: Union[ClientConfig, Mapping[str, Any], None] = None):
        """
        Initialize the client.

        Args:
            config: ClientConfig, plain mapping of settings, or None to load from the environment
        """
        if config is None:
            self.config = ClientConfig.from_env()
        elif isinstance(config, ClientConfig):
            self.config = config
        else:
            try:
                self.config = ClientConfig.model_validate(dict(config))
            except ValidationError as e:
                raise InvalidArgumentError(
                    f"Invalid client configuration: {e.errors()[0].get('msg')}",
                    cause=e,
                ) from e

        if self.config.debug:
            logging.getLogger("intacct_sdk").setLevel(logging.DEBUG)

    def get_session_config(self) -> Dict[str, Any]:
        """
        Return the session settings as a new dict.

        ``debug`` is not included and unset values are left out so they do
        not override request defaults.
        """
        return self.config.model_dump(exclude_none=True, exclude={"debug"})

    def __repr__(self) -> str:
        return f"IntacctClient(endpoint_url={self.config.endpoint_url!r}, sender_id={self.config.sender_id!r})"
