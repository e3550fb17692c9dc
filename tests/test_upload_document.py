"""Tests for upload document decoding."""

import json

import pytest

from pocketbook.domain.errors import UploadFormatError
from pocketbook.domain.upload_document import (
    MAX_UPLOAD_BYTES,
    UploadDocument,
    load_upload_file,
    parse_upload_document,
)


class TestParseUploadDocument:
    """Tests for parse_upload_document."""

    def test_object_form_reads_all_sections(self):
        payload = {
            "categories": [{"type": "spend", "name": "Groceries"}],
            "bank_accounts": [{"name": "Main Account"}],
            "tags": [{"name": "essentials"}, {"name": "monthly"}],
            "transactions": [{"date": "2024-01-05", "type": "spend", "amount": 10}],
        }

        document = parse_upload_document(json.dumps(payload))

        assert document.summary() == {
            "categories": 1,
            "bank_accounts": 1,
            "tags": 2,
            "transactions": 1,
        }
        assert document.tags[1] == {"name": "monthly"}

    def test_bare_array_is_transactions(self):
        document = parse_upload_document(b'[{"date": "2024-01-05", "type": "earn", "amount": 5}]')

        assert len(document.transactions) == 1
        assert document.categories == ()

    def test_missing_sections_are_empty(self):
        document = parse_upload_document('{"tags": [{"name": "travel"}]}')

        assert document.summary()["transactions"] == 0
        assert document.describe() == "1 tags"

    def test_rejects_invalid_json(self):
        with pytest.raises(UploadFormatError, match="Failed to parse JSON file"):
            parse_upload_document("{not json")

    def test_rejects_deeply_nested_json(self):
        with pytest.raises(UploadFormatError, match="Failed to parse JSON file"):
            parse_upload_document("[" * 200000 + "]" * 200000)

    def test_rejects_invalid_utf8(self):
        with pytest.raises(UploadFormatError, match="UTF-8"):
            parse_upload_document(b'["\xff\xfe"]')

    def test_rejects_oversized_payload(self):
        raw = b"[" + b" " * MAX_UPLOAD_BYTES + b"]"

        with pytest.raises(UploadFormatError, match="Maximum allowed size is 1MB"):
            parse_upload_document(raw)

    @pytest.mark.parametrize("payload", ['"hello"', "42", "null", "true"])
    def test_rejects_scalar_top_level(self, payload):
        with pytest.raises(UploadFormatError, match="JSON must be an array"):
            parse_upload_document(payload)

    def test_rejects_section_that_is_not_an_array(self):
        with pytest.raises(UploadFormatError, match="'tags' must be an array"):
            parse_upload_document('{"tags": {"name": "essentials"}, "transactions": []}')

    @pytest.mark.parametrize("payload", ["[]", "{}", '{"categories": [], "transactions": []}', '{"other": [1]}'])
    def test_rejects_empty_document(self, payload):
        with pytest.raises(UploadFormatError, match="no rows"):
            parse_upload_document(payload)

    def test_rows_are_not_validated_here(self):
        # Bad rows surface later as row errors, not as a document error
        document = parse_upload_document('[1, "two", {"type": "spend"}]')

        assert document.transactions == (1, "two", {"type": "spend"})


class TestUploadDocument:
    def test_describe_lists_non_empty_sections(self):
        document = UploadDocument(categories=({},), bank_accounts=({}, {}), transactions=({},) * 3)

        assert document.describe() == "1 categories, 2 bank accounts, 3 transactions"

    def test_is_immutable(self):
        document = UploadDocument(tags=({"name": "a"},))

        with pytest.raises(AttributeError):
            document.tags = ()


class TestLoadUploadFile:
    """Tests for load_upload_file."""

    def test_loads_fixture(self, fixtures_dir):
        document = load_upload_file(fixtures_dir / "valid-bulk-upload.json")

        assert document.summary() == {
            "categories": 4,
            "bank_accounts": 2,
            "tags": 2,
            "transactions": 4,
        }

    def test_rejects_invalid_json_fixture(self, fixtures_dir):
        with pytest.raises(UploadFormatError, match="Failed to parse JSON file"):
            load_upload_file(fixtures_dir / "invalid-json.json")

    def test_rejects_non_json_extension(self, tmp_path):
        path = tmp_path / "upload.csv"
        path.write_text("[]")

        with pytest.raises(UploadFormatError, match="Invalid file type"):
            load_upload_file(path)

    def test_rejects_missing_file(self, tmp_path):
        with pytest.raises(UploadFormatError, match="File not found"):
            load_upload_file(tmp_path / "missing.json")

    def test_checks_size_before_reading(self, tmp_path):
        path = tmp_path / "big.json"
        path.write_bytes(b"x" * (MAX_UPLOAD_BYTES + 1))

        # Content is not JSON; the size check must fire first
        with pytest.raises(UploadFormatError, match="too large"):
            load_upload_file(path)
