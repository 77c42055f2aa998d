"""Tests for the file anonymization service."""

import json
from unittest.mock import patch

from record_anonymizer.core.anonymizer import RecordAnonymizer
from record_anonymizer.files.service import (
    generate_anonymized_file_name,
    get_file_extension,
)

CSV_CONTENT = b"firstName,email,ssn\nJohn,john@x.com,123-45-6789\nJane,jane@y.com,987-65-4321\n"


class TestFileNameHelpers:
    def test_get_file_extension(self):
        assert get_file_extension("data.CSV") == "csv"
        assert get_file_extension("archive.tar.json") == "json"
        assert get_file_extension("README") == ""

    def test_generate_anonymized_file_name(self):
        assert generate_anonymized_file_name("customers.csv", "_anon") == "customers_anon.csv"
        assert generate_anonymized_file_name("data.json", "_masked") == "data_masked.json"
        assert generate_anonymized_file_name("noext", "_anon") == "noext_anon"


class TestAnonymizeFile:
    """Tests for FileAnonymizationService.anonymize_file."""

    def test_csv_redaction(self, file_service):
        result = file_service.anonymize_file("customers.csv", CSV_CONTENT, "REDACTION")

        assert result.success
        assert result.anonymized_file_name == "customers_anon.csv"
        assert result.records_processed == 2
        assert result.fields_processed == 6
        assert result.download_url == "/api/v1/anonymization/download/customers_anon.csv"

        output = file_service.get_output_path("customers_anon.csv")
        assert result.file_path == str(output)
        assert result.file_size == output.stat().st_size
        assert output.read_text(encoding="utf-8").splitlines() == [
            "firstName,email,ssn",
            "***REDACTED***,***REDACTED***,***REDACTED***",
            "***REDACTED***,***REDACTED***,***REDACTED***",
        ]

    def test_json_pseudonymization_keeps_structure(self, file_service):
        content = json.dumps(
            [{"customerId": "CUST001", "contact": {"phone": "555-123-4567"}}]
        ).encode("utf-8")
        result = file_service.anonymize_file(
            "people.json", content, "PSEUDONYMIZATION", seed=3
        )

        assert result.success
        written = json.loads(file_service.get_output_path(result.anonymized_file_name).read_text())
        assert set(written) == {"customerId", "contact"}
        assert len(written["contact"]["phone"]) == 12

    def test_custom_output_name_is_reduced_to_base_name(self, file_service, settings):
        result = file_service.anonymize_file(
            "customers.csv", CSV_CONTENT, "MASKING", output_file_name="../../escape.csv"
        )
        assert result.success
        assert result.anonymized_file_name == "escape.csv"
        assert file_service.output_exists("escape.csv")
        assert file_service.get_output_path("escape.csv").parent == file_service.output_dir

    def test_missing_name(self, file_service):
        result = file_service.anonymize_file(None, CSV_CONTENT, "MASKING")
        assert not result.success
        assert result.message == "File name is missing"

    def test_empty_file(self, file_service):
        result = file_service.anonymize_file("a.csv", b"", "MASKING")
        assert not result.success
        assert result.message == "File is empty"

    def test_unsupported_extension(self, file_service):
        result = file_service.anonymize_file("data.xml", b"<a/>", "MASKING")
        assert not result.success
        assert result.message == (
            "File extension 'xml' is not supported. Supported extensions: csv, json"
        )

    def test_parse_failure(self, file_service):
        result = file_service.anonymize_file("data.json", b"{broken", "MASKING")
        assert not result.success
        assert result.message.startswith("Failed to parse file: Failed to parse JSON file")

    def test_no_records(self, file_service):
        result = file_service.anonymize_file("data.csv", b"name,email\n", "MASKING")
        assert not result.success
        assert result.message == "No data found in file"

    def test_unknown_strategy_reports_record(self, file_service):
        result = file_service.anonymize_file("data.csv", CSV_CONTENT, "SCRAMBLE")
        assert not result.success
        assert result.message == (
            "Failed to anonymize record 1: "
            "Anonymization failed: Unknown anonymization strategy: SCRAMBLE"
        )
        assert file_service.list_output_files() == []

    def test_record_failure_aborts(self, file_service):
        original = RecordAnonymizer.anonymize_map
        calls = {"n": 0}

        def fail_second(self, data, strategy, preserve_format=True, seed=None):
            calls["n"] += 1
            if calls["n"] == 2:
                raise RuntimeError("boom")
            return original(self, data, strategy, preserve_format, seed)

        with patch.object(RecordAnonymizer, "anonymize_map", fail_second):
            result = file_service.anonymize_file("data.csv", CSV_CONTENT, "MASKING")

        assert not result.success
        assert result.message == "Failed to anonymize record 2: Anonymization failed: boom"


class TestOutputFiles:
    def test_list_output_files(self, file_service):
        assert file_service.list_output_files() == []
        file_service.anonymize_file("b.csv", CSV_CONTENT, "REDACTION")
        file_service.anonymize_file("a.csv", CSV_CONTENT, "REDACTION")
        assert file_service.list_output_files() == ["a_anon.csv", "b_anon.csv"]

    def test_output_exists(self, file_service):
        assert not file_service.output_exists("missing.csv")
        assert not file_service.output_exists("")
        file_service.anonymize_file("a.csv", CSV_CONTENT, "REDACTION")
        assert file_service.output_exists("a_anon.csv")

    def test_get_output_path_strips_directories(self, file_service):
        assert file_service.get_output_path("../../etc/passwd") == file_service.output_dir / "passwd"
