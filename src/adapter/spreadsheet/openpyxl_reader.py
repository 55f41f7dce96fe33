"""openpyxl implementation of SpreadsheetReader."""

import io
import zipfile
from logging import getLogger
from typing import Any

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from domain.model.errors import BadUploadError

logger = getLogger(__name__)

# SyntaxError covers both xml.etree ParseError and lxml's XMLSyntaxError
_WORKBOOK_ERRORS = (
    InvalidFileException, zipfile.BadZipFile, SyntaxError,
    KeyError, ValueError, TypeError, EOFError, OSError,
)


class OpenpyxlSpreadsheetReader:
    def read_rows(self, data: bytes) -> list[tuple[Any, ...]]:
        """Read every row of the first worksheet as cell values.

        The workbook is opened read-only, so sheet XML is parsed lazily while
        rows are iterated; errors from either step become BadUploadError.
        """
        try:
            workbook = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
        except _WORKBOOK_ERRORS as e:
            logger.warning("Failed to open uploaded workbook", extra={"error": str(e)[:200]})
            raise BadUploadError("Uploaded file is not a readable spreadsheet") from e

        try:
            if not workbook.worksheets:
                raise BadUploadError("Workbook has no worksheets")
            sheet = workbook.worksheets[0]
            return [tuple(row) for row in sheet.iter_rows(values_only=True)]
        except _WORKBOOK_ERRORS as e:
            logger.warning("Failed to read uploaded worksheet", extra={"error": str(e)[:200]})
            raise BadUploadError("Uploaded file is not a readable spreadsheet") from e
        finally:
            workbook.close()
