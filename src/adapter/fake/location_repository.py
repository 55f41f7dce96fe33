"""In-memory implementation of LocationRepository for testing."""

from domain.model.location import Location


class FakeLocationRepository:
    def __init__(self):
        self.rows: list[Location] = []

    def replace_all(self, locations: list[Location]) -> int:
        self.rows = sorted(locations, key=lambda loc: loc.row)
        return len(self.rows)

    def list_deep1(self) -> list[str]:
        return list(dict.fromkeys(loc.deep1 for loc in self.rows))

    def list_deep2(self, deep1: str) -> list[str | None]:
        return list(dict.fromkeys(loc.deep2 for loc in self.rows if loc.deep1 == deep1))
