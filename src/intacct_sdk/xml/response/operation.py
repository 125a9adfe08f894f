"""
Parsed response documents.

A response holds a control block and one operation; the operation holds an
authentication block and one result per function sent in the request.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Union
from xml.etree import ElementTree
from xml.etree.ElementTree import Element
import json

from ...runtime.errors import ResponseError, ResponseParseError, ErrorCode


SUCCESS = "success"


def _child_text(element: Optional[Element], tag: str, default: str = "") -> str:
    if element is None:
        return default
    child = element.find(tag)
    if child is None or child.text is None:
        return default
    return child.text.strip()


def parse_errors(element: Optional[Element]) -> List[Dict[str, str]]:
    """
    Read every ``<error>`` under an ``<errormessage>`` element.

    Returns:
        List of dicts with errorno, description, description2 and correction
    """
    if element is None:
        return []
    errors = []
    for error in element.iter("error"):
        errors.append({
            "errorno": _child_text(error, "errorno"),
            "description": _child_text(error, "description"),
            "description2": _child_text(error, "description2"),
            "correction": _child_text(error, "correction"),
        })
    return errors


def element_to_dict(element: Element) -> Union[Dict[str, Any], str]:
    """
    Convert an element to plain Python data.

    Leaf elements become their text, repeated tags become lists and
    attributes are kept under ``"@attributes"``.
    """
    children = list(element)
    if not children:
        text = (element.text or "").strip()
        if element.attrib:
            data: Dict[str, Any] = {"@attributes": dict(element.attrib)}
            if text:
                data["#text"] = text
            return data
        return text

    data = {}
    if element.attrib:
        data["@attributes"] = dict(element.attrib)
    for child in children:
        value = element_to_dict(child)
        if child.tag in data:
            existing = data[child.tag]
            if isinstance(existing, list):
                existing.append(value)
            else:
                data[child.tag] = [existing, value]
        else:
            data[child.tag] = value
    return data


class Result:
    """Result of one function call."""

    def __init__(self, element: Element):
        self._element = element
        self._status = _child_text(element, "status")
        self._function = _child_text(element, "function")
        self._control_id = _child_text(element, "controlid")
        self._data = element.find("data")
        self._errors = parse_errors(element.find("errormessage"))

    def get_status(self) -> str:
        return self._status

    def get_function(self) -> str:
        return self._function

    def get_control_id(self) -> str:
        return self._control_id

    def get_errors(self) -> List[Dict[str, str]]:
        return list(self._errors)

    def get_data(self) -> Optional[Element]:
        """Return the ``<data>`` element, whose attributes carry the pagination counters."""
        return self._data

    def _int_attribute(self, name: str) -> int:
        if self._data is None:
            return 0
        value = self._data.get(name, "")
        try:
            return int(str(value).strip() or 0)
        except ValueError:
            return 0

    def get_total_count(self) -> int:
        return self._int_attribute("totalcount")

    def get_num_remaining(self) -> int:
        return self._int_attribute("numremaining")

    def get_result_id(self) -> Optional[str]:
        if self._data is None:
            return None
        return self._data.get("resultId")

    def get_data_array(self, flatten: bool = False) -> Union[List[Any], Dict[str, List[Any]]]:
        """
        Return the records of the ``<data>`` element.

        XML records and JSON text are decoded; CSV text yields no records.

        Args:
            flatten: Return the records as one ordered list instead of
                grouping them by record tag

        Returns:
            Ordered list of records, or ``{tag: [records]}`` when not flattened
        """
        if self._data is None:
            return [] if flatten else {}

        children = list(self._data)
        if not children:
            text = (self._data.text or "").strip()
            if text.startswith("[") or text.startswith("{"):
                try:
                    decoded = json.loads(text)
                except ValueError as e:
                    raise ResponseParseError("Unable to decode JSON data", cause=e) from e
                records = decoded if isinstance(decoded, list) else [decoded]
                return records if flatten else {"data": records}
            return [] if flatten else {}

        if flatten:
            return [element_to_dict(child) for child in children]

        grouped: Dict[str, List[Any]] = {}
        for child in children:
            grouped.setdefault(child.tag, []).append(element_to_dict(child))
        return grouped


class Operation:
    """Operation block: authentication status plus one result per function."""

    def __init__(self, element: Element):
        authentication = element.find("authentication")
        self.auth_status = _child_text(authentication, "status")
        self.company_id = _child_text(authentication, "companyid")

        if authentication is not None and self.auth_status != SUCCESS:
            raise ResponseError(
                "Response authentication status failure",
                parse_errors(element.find("errormessage")),
                ErrorCode.AUTHENTICATION_FAILED,
            )

        self._results = [Result(r) for r in element.findall("result")]

    def get_results(self) -> List[Result]:
        return list(self._results)

    def get_result(self, index: int = 0) -> Result:
        """Return the result at ``index``; the first one by default."""
        try:
            return self._results[index]
        except IndexError:
            raise ResponseParseError(f"Operation has no result at index {index}") from None


class Response:
    """Top-level response document."""

    def __init__(self, root: Element):
        if root.tag != "response":
            raise ResponseParseError(f"Expected <response> root, got <{root.tag}>")

        control = root.find("control")
        if control is None:
            raise ResponseParseError("Response is missing required control block")

        self.control_status = _child_text(control, "status")
        self.control_id = _child_text(control, "controlid")

        if self.control_status != SUCCESS:
            raise ResponseError(
                "Response control status failure",
                parse_errors(root.find("errormessage")),
            )

        operation = root.find("operation")
        if operation is None:
            raise ResponseParseError("Response is missing operation block")
        self.operation = Operation(operation)

    @classmethod
    def from_xml(cls, body: Union[bytes, str]) -> "Response":
        """
        Parse a response body.

        Raises:
            ResponseParseError: If the body is not well-formed XML
            ResponseError: If the control or authentication block reports failure
        """
        try:
            root = ElementTree.fromstring(body)
        except ElementTree.ParseError as e:
            raise ResponseParseError("Response body is not valid XML", cause=e) from e
        return cls(root)

    def get_operation(self) -> Operation:
        return self.operation
