"""
Tests for request content blocks.

Tests option parsing, validation errors and the XML each block writes.
"""

import pytest
from xml.etree import ElementTree
from xml.etree.ElementTree import Element

from intacct_sdk.runtime.errors import InvalidArgumentError
from intacct_sdk.xml.request.content import Content, ReadMore, ReadRelated, ReadView


def write(block):
    parent = Element("content")
    block.write_xml(parent)
    return ElementTree.tostring(parent, encoding="unicode")


class TestReadView:

    def test_defaults(self):
        block = ReadView.from_params({"view": "Open Invoices"})
        assert block.page_size == 1000
        assert block.return_format == "xml"
        assert block.control_id

    def test_generated_control_ids_differ(self):
        a = ReadView.from_params({"view": "v"})
        b = ReadView.from_params({"view": "v"})
        assert a.control_id != b.control_id

    def test_ignores_unrelated_keys(self):
        block = ReadView.from_params({
            "view": "Open Invoices",
            "max_total_count": 5,
            "sender_id": "testsender",
            "session_id": "abc",
        })
        assert block.view == "Open Invoices"

    def test_write_xml(self):
        block = ReadView.from_params({"view": "Open Invoices", "page_size": 10, "control_id": "unittest"})
        assert write(block) == (
            '<content><function controlid="unittest"><readView>'
            "<view>Open Invoices</view><pagesize>10</pagesize><returnFormat>xml</returnFormat>"
            "</readView></function></content>"
        )

    def test_missing_view(self):
        with pytest.raises(InvalidArgumentError, match="Required view not supplied"):
            ReadView.from_params({})

    def test_empty_view(self):
        with pytest.raises(InvalidArgumentError, match="Required view not supplied"):
            ReadView.from_params({"view": ""})

    @pytest.mark.parametrize("page_size", [0, -1, 1001])
    def test_page_size_out_of_range(self, page_size):
        with pytest.raises(InvalidArgumentError, match="page_size"):
            ReadView.from_params({"view": "v", "page_size": page_size})

    def test_invalid_return_format(self):
        with pytest.raises(InvalidArgumentError, match="return_format"):
            ReadView.from_params({"view": "v", "return_format": "yaml"})

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            ReadView.from_params({"view": "v", "page_size": "many"})

    def test_control_id_too_long(self):
        with pytest.raises(InvalidArgumentError, match="control_id"):
            ReadView.from_params({"view": "v", "control_id": "x" * 257})


class TestReadRelated:

    def test_defaults(self):
        block = ReadRelated.from_params({"object": "invoice", "relation": "Rinvoice_items"})
        assert block.field_names == ["*"]
        assert block.keys == []
        assert block.return_format == "xml"

    def test_write_xml(self):
        block = ReadRelated.from_params({
            "object": "invoice",
            "relation": "Rinvoice_items",
            "keys": ["1", "2"],
            "fields": ["NAME", "DESCRIPTION"],
            "control_id": "unittest",
        })
        assert write(block) == (
            '<content><function controlid="unittest"><readRelated>'
            "<object>invoice</object><keys>1,2</keys><relation>Rinvoice_items</relation>"
            "<fields>NAME,DESCRIPTION</fields><returnFormat>xml</returnFormat>"
            "</readRelated></function></content>"
        )

    def test_keys_from_string_and_ints(self):
        block = ReadRelated.from_params({"object": "o", "relation": "r", "keys": "1, 2,3", "fields": ("A", "B")})
        assert block.keys == ["1", "2", "3"]
        assert block.field_names == ["A", "B"]

        block = ReadRelated.from_params({"object": "o", "relation": "r", "keys": [10, 20]})
        assert block.keys == ["10", "20"]

    def test_empty_fields_write_all(self):
        block = ReadRelated.from_params({"object": "o", "relation": "r", "fields": []})
        assert "<fields>*</fields>" in write(block)

    @pytest.mark.parametrize("missing", ["object", "relation"])
    def test_required(self, missing):
        params = {"object": "o", "relation": "r"}
        del params[missing]
        with pytest.raises(InvalidArgumentError, match=f"Required {missing} not supplied"):
            ReadRelated.from_params(params)


class TestReadMore:

    def test_write_xml(self):
        block = ReadMore.from_params({"result_id": "7765623ac2", "control_id": "unittest", "view": "ignored"})
        assert write(block) == (
            '<content><function controlid="unittest"><readMore>'
            "<resultId>7765623ac2</resultId>"
            "</readMore></function></content>"
        )

    def test_missing_result_id(self):
        with pytest.raises(InvalidArgumentError, match="Required result_id not supplied"):
            ReadMore.from_params({"result_id": None})


class TestContent:

    def test_preserves_order(self):
        blocks = [ReadView.from_params({"view": "a"}), ReadMore.from_params({"result_id": "b"})]
        content = Content(blocks)
        content.append(ReadView.from_params({"view": "c"}))

        assert len(content) == 3
        assert [b.function_name for b in content] == ["readView", "readMore", "readView"]

    def test_write_xml(self):
        content = Content([
            ReadView.from_params({"view": "a", "control_id": "one"}),
            ReadMore.from_params({"result_id": "b", "control_id": "two"}),
        ])
        operation = Element("operation")
        content.write_xml(operation)

        functions = operation.findall("content/function")
        assert [f.get("controlid") for f in functions] == ["one", "two"]
        assert functions[0].find("readView/view").text == "a"
        assert functions[1].find("readMore/resultId").text == "b"
