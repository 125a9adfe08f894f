"""
Request content blocks.

Each block represents one API function inside the ``<content>`` element of
an operation. Blocks are pydantic models built from a loose parameter mapping
so that callers can pass the same merged config dict used for dispatch.
"""

from __future__ import annotations
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence
from xml.etree.ElementTree import Element, SubElement
import uuid

from pydantic import BaseModel, Field, ValidationError, field_validator

from ...runtime.errors import InvalidArgumentError


RETURN_FORMATS = ("xml", "json", "csv")
MAX_PAGE_SIZE = 1000


def _text(parent: Element, tag: str, value: Any) -> Element:
    child = SubElement(parent, tag)
    child.text = str(value)
    return child


class ContentBlock(BaseModel):
    """
    Base class for a single API function.

    Subclasses declare ``function_name`` and implement ``write_function``.
    ``from_params`` ignores keys the block does not know about.
    """

    function_name: ClassVar[str] = ""
    required: ClassVar[Dict[str, str]] = {}

    control_id: str = Field(default_factory=lambda: str(uuid.uuid4()))

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @field_validator("control_id", mode="before")
    @classmethod
    def validate_control_id(cls, v: Any) -> Any:
        if v is None or v == "":
            return str(uuid.uuid4())
        if len(str(v)) > 256:
            raise ValueError("control_id must be 256 characters or less")
        return str(v)

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "ContentBlock":
        """
        Build the block from a parameter mapping.

        Raises:
            InvalidArgumentError: If a required option is missing or a value is invalid
        """
        for key, label in cls.required.items():
            if params.get(key) in (None, ""):
                raise InvalidArgumentError(f"Required {label} not supplied")
        values = {k: v for k, v in params.items() if v is not None}
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(p) for p in first.get("loc", ()))
            raise InvalidArgumentError(
                f"{field} is not valid: {first.get('msg')}",
                details={"errors": e.errors(include_url=False)},
                cause=e,
            ) from e

    def write_xml(self, parent: Element) -> Element:
        """Append ``<function controlid="...">`` with this block's body to ``parent``."""
        function = SubElement(parent, "function", {"controlid": self.control_id})
        self.write_function(function)
        return function

    def write_function(self, function: Element) -> None:
        raise NotImplementedError


class ReadView(ContentBlock):
    """
    ``readView`` function.

    Options: view (required), control_id, page_size (default 1000),
    return_format (default "xml").
    """

    function_name: ClassVar[str] = "readView"
    required: ClassVar[Dict[str, str]] = {"view": "view"}

    view: str
    page_size: int = Field(default=MAX_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    return_format: str = "xml"

    @field_validator("return_format")
    @classmethod
    def validate_return_format(cls, v: str) -> str:
        if v not in RETURN_FORMATS:
            raise ValueError(f"return_format must be one of {', '.join(RETURN_FORMATS)}")
        return v

    def write_function(self, function: Element) -> None:
        node = SubElement(function, self.function_name)
        _text(node, "view", self.view)
        _text(node, "pagesize", self.page_size)
        _text(node, "returnFormat", self.return_format)


class ReadRelated(ContentBlock):
    """
    ``readRelated`` function.

    Options: object and relation (required), fields (default all), keys,
    control_id, return_format (default "xml").
    """

    function_name: ClassVar[str] = "readRelated"
    required: ClassVar[Dict[str, str]] = {"object": "object", "relation": "relation"}

    object_name: str = Field(alias="object")
    relation: str
    field_names: List[str] = Field(default_factory=lambda: ["*"], alias="fields")
    keys: List[str] = Field(default_factory=list)
    return_format: str = "xml"

    @field_validator("field_names", "keys", mode="before")
    @classmethod
    def split_list(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        if isinstance(v, Sequence):
            return [str(s) for s in v]
        return v

    @field_validator("return_format")
    @classmethod
    def validate_return_format(cls, v: str) -> str:
        if v not in RETURN_FORMATS:
            raise ValueError(f"return_format must be one of {', '.join(RETURN_FORMATS)}")
        return v

    def write_function(self, function: Element) -> None:
        node = SubElement(function, self.function_name)
        _text(node, "object", self.object_name)
        _text(node, "keys", ",".join(self.keys))
        _text(node, "relation", self.relation)
        _text(node, "fields", ",".join(self.field_names) if self.field_names else "*")
        _text(node, "returnFormat", self.return_format)


class ReadMore(ContentBlock):
    """``readMore`` function, continuing a paginated query by its result id."""

    function_name: ClassVar[str] = "readMore"
    required: ClassVar[Dict[str, str]] = {"result_id": "result_id"}

    result_id: str

    @field_validator("result_id", mode="before")
    @classmethod
    def validate_result_id(cls, v: Any) -> Any:
        return str(v) if v is not None else v

    def write_function(self, function: Element) -> None:
        node = SubElement(function, self.function_name)
        _text(node, "resultId", self.result_id)


class Content:
    """Ordered list of content blocks sent in one operation."""

    def __init__(self, blocks: Optional[Sequence[ContentBlock]] = None):
        self._blocks: List[ContentBlock] = list(blocks or [])

    def append(self, block: ContentBlock) -> None:
        self._blocks.append(block)

    def __iter__(self):
        return iter(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)

    def __getitem__(self, index: int) -> ContentBlock:
        return self._blocks[index]

    def write_xml(self, parent: Element) -> Element:
        """Append ``<content>`` with every block to ``parent``."""
        content = SubElement(parent, "content")
        for block in self._blocks:
            block.write_xml(content)
        return content
