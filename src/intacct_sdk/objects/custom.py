"""
Custom object views and relationships.

Reads saved views (``readView``), paginating them into a single record list,
and reads records related to a custom object (``readRelated``).
"""

from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional
import logging
import math

from ..runtime.errors import InvalidArgumentError, LimitExceededError
from ..xml.request.content import Content, ReadRelated, ReadView
from ..xml.response.operation import Result
from .base import HandlerFactory, ObjectOperations, SessionClient, check_result, merge_config


logger = logging.getLogger(__name__)

MAX_QUERY_TOTAL_COUNT = 100000
DEFAULT_PAGE_SIZE = 1000


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"{name} must be an integer", cause=e) from e


class CustomObjectReader:
    """
    Reads custom object views and related records.

    Example:
        ```python
        reader = CustomObjectReader()
        records = reader.get_view_records({"view": "Open Invoices"}, client)
        related = reader.read_related_objects(
            {"object": "invoice", "relation": "Rinvoice_items", "keys": ["1", "2"]},
            client,
        )
        ```
    """

    def __init__(self, operations: Optional[ObjectOperations] = None,
                 handler_factory: Optional[HandlerFactory] = None):
        """
        Initialize the reader.

        Args:
            operations: Shared operations (``read_more``) to delegate to
            handler_factory: Handler factory used when ``operations`` is not given
        """
        self.operations = operations or ObjectOperations(handler_factory)

    def read_view(self, params: Mapping[str, Any], client: SessionClient) -> Result:
        """
        Read the first page of a view.

        Accepts the following options:

        - control_id: (string)
        - page_size: (int, default=1000)
        - return_format: (string, default="xml"; "json" or "csv" also accepted)
        - view: (string, required)

        With return_format="csv" the server returns the rows as CSV text,
        which ``Result.get_data_array`` does not split into records.

        Raises:
            InvalidArgumentError: If view is missing or an option is invalid
            ReadError: If the result status is not success
        """
        config = merge_config(client, params)
        content = Content([ReadView.from_params(params)])

        result = self.operations.execute(config, config, content)
        return check_result(result, "An error occurred trying to read view records")

    def read_more(self, params: Mapping[str, Any], client: SessionClient) -> Result:
        return self.operations.read_more(params, client)

    def get_view_records(self, params: Mapping[str, Any], client: SessionClient) -> List[Any]:
        """
        Read every record of a view, following ``readMore`` pages.

        Accepts the ``read_view`` options plus:

        - max_total_count: (int, default=100000)

        Options passed as None keep their defaults. Only "xml" and "json"
        return formats produce records; "csv" pages yield an empty list.

        Returns:
            Records of every page in server order

        Raises:
            InvalidArgumentError: If max_total_count or page_size is not an integer
            ReadError: If any page reports a non-success status
            LimitExceededError: If the view's totalcount exceeds max_total_count
        """
        config: Dict[str, Any] = {
            "max_total_count": MAX_QUERY_TOTAL_COUNT,
            "page_size": DEFAULT_PAGE_SIZE,
        }
        config.update({k: v for k, v in params.items() if v is not None})
        max_total_count = _as_int(config["max_total_count"], "max_total_count")
        page_size = _as_int(config["page_size"], "page_size")

        result = self.read_view(config, client)
        check_result(result, "An error occurred trying to get view records")

        records: List[Any] = list(result.get_data_array(True))

        total_count = result.get_total_count()
        if total_count > max_total_count:
            raise LimitExceededError(
                f"Query result totalcount exceeds max_total_count parameter of {max_total_count}",
                limit=max_total_count,
                total_count=total_count,
            )

        num_remaining = result.get_num_remaining()
        if num_remaining > 0:
            pages = math.ceil(num_remaining / page_size)
            config["result_id"] = result.get_result_id()
            logger.debug(
                f"View {config.get('view')!r}: {total_count} records, "
                f"fetching {pages} more page(s) for result {config['result_id']}"
            )
            for page in range(1, pages + 1):
                more = self.read_more(config, client)
                page_records = more.get_data_array(True)
                logger.debug(f"Page {page}/{pages}: {len(page_records)} record(s)")
                records.extend(page_records)

        return records

    def read_related_objects(self, params: Mapping[str, Any], client: SessionClient) -> Result:
        """
        Read records related to custom object records.

        Accepts the following options:

        - control_id: (string)
        - fields: (sequence)
        - keys: (sequence)
        - object: (string, required)
        - relation: (string, required)
        - return_format: (string, default="xml")

        The handler is built from ``params`` alone, so transport settings in
        the session configuration (such as ``endpoint_url``) are not applied
        to it; credentials still come from the merged configuration.

        Raises:
            InvalidArgumentError: If object or relation is missing
            ReadError: If the result status is not success
        """
        config = merge_config(client, params)
        content = Content([ReadRelated.from_params(params)])

        result = self.operations.execute(params, config, content)
        return check_result(result, "An error occurred trying to read related records")
