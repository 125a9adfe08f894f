from .mocks import MockClient, MockHandlerFactory
from .factories import mk_session_config, mk_records, mk_result_xml, mk_response_xml, mk_result

__all__ = [
    "MockClient",
    "MockHandlerFactory",
    "mk_session_config",
    "mk_records",
    "mk_result_xml",
    "mk_response_xml",
    "mk_result",
]
