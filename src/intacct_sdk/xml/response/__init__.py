"""Response parsing for the Intacct XML gateway."""

from .operation import Response, Operation, Result, element_to_dict, parse_errors

__all__ = [
    "Response",
    "Operation",
    "Result",
    "element_to_dict",
    "parse_errors",
]
