"""Tests for CSV and JSON record codecs."""

import json
from datetime import date

import pytest

from record_anonymizer.codecs import CodecRegistry, CsvCodec, JsonCodec, get_codec_registry
from record_anonymizer.core.exceptions import CodecError, UnsupportedFormatError


class TestCsvCodec:
    """Tests for CsvCodec."""

    def test_parse_header_and_rows(self):
        data = b"name, email\nJohn , john@x.com\nJane,jane@y.com\n"
        assert CsvCodec().parse(data) == [
            {"name": "John", "email": "john@x.com"},
            {"name": "Jane", "email": "jane@y.com"},
        ]

    def test_parse_skips_blank_rows_and_bom(self):
        data = "\ufeffid,city\n1,Paris\n\n2,Rome\n".encode("utf-8")
        assert CsvCodec().parse(data) == [
            {"id": "1", "city": "Paris"},
            {"id": "2", "city": "Rome"},
        ]

    def test_parse_short_rows(self):
        assert CsvCodec().parse(b"a,b,c\n1,2\n") == [{"a": "1", "b": "2"}]

    def test_parse_quoted_commas(self):
        records = CsvCodec().parse(b'name,address\nJohn,"1 Main St, Springfield"\n')
        assert records[0]["address"] == "1 Main St, Springfield"

    def test_parse_header_only(self):
        assert CsvCodec().parse(b"name,email\n") == []

    def test_parse_invalid_encoding(self):
        with pytest.raises(CodecError):
            CsvCodec().parse(b"\xff\xfe\x00bad")

    def test_serialize(self):
        records = [{"name": "John", "age": 3}, {"name": "Jane", "email": None}]
        text = CsvCodec().serialize(records).decode("utf-8")
        assert text == "name,age,email\nJohn,3,\nJane,,\n"

    def test_serialize_nested_values_as_json(self):
        text = CsvCodec().serialize([{"tags": ["a", "b"]}]).decode("utf-8")
        assert text.splitlines()[1] == '"[""a"", ""b""]"'

    def test_serialize_empty(self):
        assert CsvCodec().serialize([]) == b""


class TestJsonCodec:
    """Tests for JsonCodec."""

    def test_parse_array(self):
        assert JsonCodec().parse(b'[{"a": 1}, {"b": {"c": 2}}]') == [{"a": 1}, {"b": {"c": 2}}]

    def test_parse_single_object(self):
        assert JsonCodec().parse(b'{"a": 1}') == [{"a": 1}]

    @pytest.mark.parametrize("payload", [b"not json", b"[1, 2]", b'"text"', b"42"])
    def test_parse_invalid(self, payload):
        with pytest.raises(CodecError, match="Failed to parse JSON file"):
            JsonCodec().parse(payload)

    def test_serialize_single_record_as_object(self):
        assert json.loads(JsonCodec().serialize([{"a": 1}])) == {"a": 1}

    def test_serialize_many_records_as_array(self):
        assert json.loads(JsonCodec().serialize([{"a": 1}, {"a": 2}])) == [{"a": 1}, {"a": 2}]

    def test_serialize_dates_and_unicode(self):
        output = JsonCodec().serialize([{"dob": date(1990, 1, 2), "name": "Zoë"}]).decode("utf-8")
        assert '"1990-01-02"' in output
        assert "Zoë" in output


class TestCodecRegistry:
    def test_lookup_normalizes_extension(self):
        registry = get_codec_registry()
        assert isinstance(registry.get_codec(".JSON"), JsonCodec)
        assert isinstance(registry.get_codec("csv"), CsvCodec)

    def test_supported_extensions(self):
        assert get_codec_registry().supported_extensions == ["csv", "json"]

    def test_is_supported(self):
        registry = get_codec_registry()
        assert registry.is_supported("CSV")
        assert not registry.is_supported("xml")
        assert not registry.is_supported("")
        assert not registry.is_supported(None)

    def test_unsupported(self):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            CodecRegistry([CsvCodec()]).get_codec("xml")
        assert str(exc_info.value) == "Unsupported file type: xml. Supported types: csv"
