from typing import Protocol
from domain.model.location import Location


class LocationRepository(Protocol):
    """Protocol defining the interface for forecast grid locations."""
    def replace_all(self, locations: list[Location]) -> int:
        """Replace the stored table with the given rows. Return rows stored."""
        ...

    def list_deep1(self) -> list[str]:
        """Distinct level-1 regions in upload order."""
        ...

    def list_deep2(self, deep1: str) -> list[str | None]:
        """Distinct level-2 regions under deep1 in upload order."""
        ...
