from dataclasses import dataclass


@dataclass
class Location:
    """One row of the forecast grid table.

    deep1/deep2/deep3 are the administrative levels (province, city, town).
    row keeps the spreadsheet order so lookups return regions as uploaded.
    """
    deep1: str
    deep2: str | None = None
    deep3: str | None = None
    grid_x: int | None = None
    grid_y: int | None = None
    row: int = 0
