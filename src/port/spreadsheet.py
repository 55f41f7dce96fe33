from typing import Any, Protocol


class SpreadsheetReader(Protocol):
    """Port for turning an uploaded workbook into raw cell rows."""
    def read_rows(self, data: bytes) -> list[tuple[Any, ...]]:
        """Return the rows of the first sheet, header included.

        Raises BadUploadError when the bytes are not a readable workbook.
        """
        ...
