"""Excel service — forecast grid spreadsheet ingestion and region lookups.

Workbook parsing is delegated to a SpreadsheetReader; this module only maps
header-named columns into Location rows.
"""

import logging
from typing import Any

from domain.model.errors import BadUploadError
from domain.model.location import Location
from port.location_repository import LocationRepository
from port.spreadsheet import SpreadsheetReader

logger = logging.getLogger(__name__)

# Accepted header names per Location field, normalized (lowercase, no spaces)
HEADER_ALIASES = {
    "deep1": {"1단계", "deep1"},
    "deep2": {"2단계", "deep2"},
    "deep3": {"3단계", "deep3"},
    "grid_x": {"격자x", "x", "grid_x"},
    "grid_y": {"격자y", "y", "grid_y"},
}


def _normalize_header(value: Any) -> str:
    if value is None:
        return ""
    return "".join(str(value).split()).lower()


def _column_map(header: tuple[Any, ...]) -> dict[str, int]:
    normalized = [_normalize_header(cell) for cell in header]
    columns = {}
    for field, aliases in HEADER_ALIASES.items():
        for index, name in enumerate(normalized):
            if name in aliases:
                columns[field] = index
                break
    if "deep1" not in columns:
        raise BadUploadError("Spreadsheet has no level-1 region column")
    return columns


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _grid(value: Any) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError) as e:
        raise BadUploadError(f"Invalid grid coordinate: {value!r}") from e


def _cell(row: tuple[Any, ...], columns: dict[str, int], field: str) -> Any:
    index = columns.get(field)
    if index is None or index >= len(row):
        return None
    return row[index]


def parse_locations(rows: list[tuple[Any, ...]]) -> list[Location]:
    """Map raw sheet rows (header first) into Location objects.

    Rows without a level-1 region are skipped.

    Raises:
        BadUploadError: empty sheet, missing level-1 column or bad grid value
    """
    if not rows:
        raise BadUploadError("Spreadsheet is empty")

    columns = _column_map(rows[0])
    locations = []
    for row_number, row in enumerate(rows[1:], start=1):
        deep1 = _text(_cell(row, columns, "deep1"))
        if not deep1:
            continue
        locations.append(Location(
            deep1=deep1,
            deep2=_text(_cell(row, columns, "deep2")),
            deep3=_text(_cell(row, columns, "deep3")),
            grid_x=_grid(_cell(row, columns, "grid_x")),
            grid_y=_grid(_cell(row, columns, "grid_y")),
            row=row_number,
        ))
    return locations


def ingest(repo: LocationRepository, reader: SpreadsheetReader, data: bytes) -> int:
    """Parse an uploaded workbook and replace the stored location table.

    Returns the number of stored rows.

    Raises:
        BadUploadError: the upload is not a usable forecast grid sheet
    """
    if not data:
        raise BadUploadError("Uploaded file is empty")

    locations = parse_locations(reader.read_rows(data))
    stored = repo.replace_all(locations)
    logger.info("Location table replaced", extra={"rows": stored})
    return stored


def list_deep1(repo: LocationRepository) -> list[str]:
    return repo.list_deep1()


def list_deep2(repo: LocationRepository, location: str) -> list[str | None]:
    return repo.list_deep2(location)
