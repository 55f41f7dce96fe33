"""Fake SpreadsheetReader returning preset rows."""

from typing import Any

from domain.model.errors import BadUploadError


class FakeSpreadsheetReader:
    def __init__(self, rows: list[tuple[Any, ...]] | None = None, fail: bool = False):
        self.rows = rows or []
        self.fail = fail
        self.received: list[bytes] = []

    def read_rows(self, data: bytes) -> list[tuple[Any, ...]]:
        self.received.append(data)
        if self.fail:
            raise BadUploadError("Uploaded file is not a readable spreadsheet")
        return list(self.rows)
