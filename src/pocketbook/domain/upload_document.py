"""Decoding of bulk upload documents.

An upload document is UTF-8 JSON in one of two forms:

- a bare array, read as the ``transactions`` section (legacy form), or
- an object with optional ``categories``, ``bank_accounts``, ``tags`` and
  ``transactions`` arrays.

Rows are kept raw here; field validation happens per row during the upload so
that one bad row never hides the others.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pocketbook.domain.entities import UPLOAD_SECTIONS
from pocketbook.domain.errors import UploadFormatError

MAX_UPLOAD_BYTES = 1024 * 1024

TOO_LARGE = "File is too large. Maximum allowed size is 1MB."
WRONG_FILE_TYPE = "Invalid file type. Please upload a JSON file."
INVALID_JSON = "Failed to parse JSON file. Please ensure it is valid JSON."
WRONG_SHAPE = (
    "JSON must be an array of transactions or an object with "
    "'categories', 'bank_accounts', 'tags' or 'transactions' arrays."
)
NOTHING_TO_UPLOAD = "The file contains no rows to upload."


@dataclass(frozen=True)
class UploadDocument:
    """Decoded upload document with one tuple of raw rows per section."""

    categories: tuple[Any, ...] = ()
    bank_accounts: tuple[Any, ...] = ()
    tags: tuple[Any, ...] = ()
    transactions: tuple[Any, ...] = ()

    def summary(self) -> dict[str, int]:
        """Row count per section, in upload order."""
        return {section: len(getattr(self, section)) for section in UPLOAD_SECTIONS}

    def describe(self) -> str:
        """One-line human readable summary for previews."""
        parts = [f"{count} {section.replace('_', ' ')}" for section, count in self.summary().items() if count]
        return ", ".join(parts) if parts else "nothing"

    @property
    def is_empty(self) -> bool:
        return not any(self.summary().values())


def parse_upload_document(raw: bytes | str) -> UploadDocument:
    """Decode an upload payload.

    Args:
        raw: JSON document as bytes (must be UTF-8) or str

    Returns:
        UploadDocument

    Raises:
        UploadFormatError: If the payload is too large, not UTF-8, not JSON,
            of the wrong shape, or contains no rows
    """
    if isinstance(raw, str):
        data = raw.encode("utf-8")
    else:
        data = raw
    if len(data) > MAX_UPLOAD_BYTES:
        raise UploadFormatError(TOO_LARGE)

    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise UploadFormatError(f"File is not valid UTF-8 text: {e.reason}") from e

    try:
        payload = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as e:
        # RecursionError: nesting deeper than the decoder can follow
        raise UploadFormatError(INVALID_JSON) from e

    return document_from_payload(payload)


def document_from_payload(payload: Any) -> UploadDocument:
    """Build an UploadDocument from already-decoded JSON.

    Raises:
        UploadFormatError: If the payload has the wrong shape or no rows
    """
    if isinstance(payload, list):
        document = UploadDocument(transactions=tuple(payload))
    elif isinstance(payload, dict):
        sections = {}
        for section in UPLOAD_SECTIONS:
            rows = payload.get(section)
            if rows is None:
                continue
            if not isinstance(rows, list):
                raise UploadFormatError(f"'{section}' must be an array. {WRONG_SHAPE}")
            sections[section] = tuple(rows)
        document = UploadDocument(**sections)
    else:
        raise UploadFormatError(WRONG_SHAPE)

    if document.is_empty:
        raise UploadFormatError(NOTHING_TO_UPLOAD)
    return document


def load_upload_file(path: str | Path) -> UploadDocument:
    """Read and decode an upload file.

    The size limit is checked before the file is read.

    Raises:
        UploadFormatError: If the file is missing, not a .json file, too large,
            or its content is rejected by parse_upload_document
    """
    file_path = Path(path)
    if file_path.suffix.lower() != ".json":
        raise UploadFormatError(WRONG_FILE_TYPE)
    if not file_path.is_file():
        raise UploadFormatError(f"File not found: {file_path}")
    if file_path.stat().st_size > MAX_UPLOAD_BYTES:
        raise UploadFormatError(TOO_LARGE)

    return parse_upload_document(file_path.read_bytes())
