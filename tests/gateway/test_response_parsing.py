"""
Tests for response parsing.

Covers control and authentication failures, result error lists, pagination
counters and record conversion.
"""

import pytest
from xml.etree import ElementTree

from helpers import mk_records, mk_response_xml, mk_result, mk_result_xml

from intacct_sdk.runtime.errors import ErrorCode, ResponseError, ResponseParseError
from intacct_sdk.xml.response import Response, element_to_dict


ERRORS_XML = (
    "<errormessage><error>"
    "<errorno>XL03000006</errorno>"
    "<description>Sign-in information is incorrect</description>"
    "</error></errormessage>"
)


class TestResponse:

    def test_parses_operation_results(self):
        body = mk_response_xml([
            mk_result_xml(function="readView", control_id="one", records=mk_records(1, 2), totalcount=2, numremaining=0),
            mk_result_xml(function="readMore", control_id="two", records=[]),
        ])
        response = Response.from_xml(body)

        assert response.control_status == "success"
        assert response.control_id == "requestControlId"
        operation = response.get_operation()
        assert operation.auth_status == "success"
        assert operation.company_id == "testcompany"
        assert [r.get_control_id() for r in operation.get_results()] == ["one", "two"]
        assert operation.get_result().get_function() == "readView"
        assert operation.get_result(1).get_function() == "readMore"

    def test_control_failure(self):
        body = mk_response_xml([], control_status="failure", errors_xml=ERRORS_XML)

        with pytest.raises(ResponseError) as exc_info:
            Response.from_xml(body)

        assert exc_info.value.code == ErrorCode.RESPONSE_ERROR
        assert exc_info.value.errors[0]["errorno"] == "XL03000006"
        assert "Sign-in information is incorrect" in str(exc_info.value)

    def test_authentication_failure(self):
        body = mk_response_xml([], auth_status="failure", errors_xml=ERRORS_XML)

        with pytest.raises(ResponseError) as exc_info:
            Response.from_xml(body)

        assert exc_info.value.code == ErrorCode.AUTHENTICATION_FAILED
        assert exc_info.value.get_errors()[0]["description"] == "Sign-in information is incorrect"

    def test_not_xml(self):
        with pytest.raises(ResponseParseError):
            Response.from_xml(b"<html><body>Bad gateway")

    def test_wrong_root(self):
        with pytest.raises(ResponseParseError, match="Expected <response>"):
            Response.from_xml(b"<request/>")

    def test_missing_control(self):
        with pytest.raises(ResponseParseError, match="control"):
            Response.from_xml(b"<response><operation/></response>")

    def test_missing_result(self):
        operation = Response.from_xml(mk_response_xml([])).get_operation()
        with pytest.raises(ResponseParseError, match="no result at index 0"):
            operation.get_result()


class TestResult:

    def test_counters(self):
        result = mk_result(records=mk_records(1, 2), totalcount=2500, numremaining=1500, result_id="7765623ac2")
        assert result.get_total_count() == 2500
        assert result.get_num_remaining() == 1500
        assert result.get_result_id() == "7765623ac2"
        assert result.get_data().get("totalcount") == "2500"

    def test_counters_without_data(self):
        result = mk_result(status="failure")
        assert result.get_data() is None
        assert result.get_total_count() == 0
        assert result.get_num_remaining() == 0
        assert result.get_result_id() is None
        assert result.get_data_array(True) == []
        assert result.get_data_array() == {}

    def test_errors(self):
        result = mk_result(status="failure", errors=[
            {"errorno": "BL01001973", "description": "Could not read view", "correction": "Check the view name"},
            {"errorno": "BL01001974", "description2": "Second"},
        ])
        errors = result.get_errors()
        assert len(errors) == 2
        assert errors[0] == {
            "errorno": "BL01001973",
            "description": "Could not read view",
            "description2": "",
            "correction": "Check the view name",
        }
        assert errors[1]["description2"] == "Second"

    def test_flattened_records_keep_order(self):
        result = mk_result(records=mk_records(5, 3))
        assert result.get_data_array(True) == [
            {"RECORDNO": "5", "NAME": "Record 5"},
            {"RECORDNO": "6", "NAME": "Record 6"},
            {"RECORDNO": "7", "NAME": "Record 7"},
        ]

    def test_grouped_records(self):
        records = mk_records(1, 2, tag="invoice") + mk_records(3, 1, tag="bill")
        grouped = mk_result(records=records).get_data_array()
        assert list(grouped) == ["invoice", "bill"]
        assert [r["RECORDNO"] for r in grouped["invoice"]] == ["1", "2"]

    def test_json_data(self):
        result = mk_result(records=['[{"RECORDNO": "1"}, {"RECORDNO": "2"}]'])
        assert result.get_data_array(True) == [{"RECORDNO": "1"}, {"RECORDNO": "2"}]

    def test_invalid_json_data(self):
        result = mk_result(records=["[not json"])
        with pytest.raises(ResponseParseError):
            result.get_data_array(True)


class TestElementToDict:

    def test_nested_and_repeated(self):
        element = ElementTree.fromstring(
            "<record><NAME>Acme</NAME><ADDRESS><CITY>Austin</CITY></ADDRESS>"
            "<TAG>a</TAG><TAG>b</TAG><EMPTY/></record>"
        )
        assert element_to_dict(element) == {
            "NAME": "Acme",
            "ADDRESS": {"CITY": "Austin"},
            "TAG": ["a", "b"],
            "EMPTY": "",
        }

    def test_attributes(self):
        element = ElementTree.fromstring('<record id="9"><AMOUNT currency="USD">10.00</AMOUNT></record>')
        assert element_to_dict(element) == {
            "@attributes": {"id": "9"},
            "AMOUNT": {"@attributes": {"currency": "USD"}, "#text": "10.00"},
        }
