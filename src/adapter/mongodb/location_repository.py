"""MongoDB implementation of LocationRepository."""

import uuid
from dataclasses import asdict
from logging import getLogger

from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb import LOCATIONS_COLLECTION_NAME
from domain.model.errors import RepositoryError
from domain.model.location import Location

logger = getLogger(__name__)


class MongoLocationRepository:
    def __init__(self, db: Database):
        self.db = db
        self.collection = db[LOCATIONS_COLLECTION_NAME]

    # ── indexes ────────────────────────────────────────────────

    @staticmethod
    def _create_indexes(collection: Collection) -> None:
        from adapter.mongodb.indexes import create_index_safe

        create_index_safe(collection, [('deep1', 1), ('row', 1)], 'idx_locations_deep1_row')
        create_index_safe(collection, [('row', 1)], 'idx_locations_row')

    def ensure_indexes(self) -> bool:
        """Create indexes for locations collection."""
        try:
            self._create_indexes(self.collection)
            return True
        except Exception as e:
            logger.error("Failed to create locations indexes", extra={"error": str(e)})
            return False

    # ── write operations ──────────────────────────────────────

    def replace_all(self, locations: list[Location]) -> int:
        """Swap in a new table.

        Rows are written to a private staging collection which is then renamed
        over the live one, so readers see either the old table or the new one
        and a failed upload leaves the old table untouched.
        """
        if not locations:
            try:
                self.collection.delete_many({})
            except PyMongoError as e:
                logger.error("Failed to clear locations", extra={"error": str(e)})
                raise RepositoryError("Failed to store locations") from e
            return 0

        staging = self.db[f"{LOCATIONS_COLLECTION_NAME}_staging_{uuid.uuid4().hex}"]
        try:
            staging.insert_many([asdict(loc) for loc in locations], ordered=False)
            self._create_indexes(staging)
            staging.rename(LOCATIONS_COLLECTION_NAME, dropTarget=True)
        except PyMongoError as e:
            logger.error("Failed to replace locations", extra={"rows": len(locations), "error": str(e)})
            self._drop_quietly(staging)
            raise RepositoryError("Failed to store locations") from e

        logger.info("Locations stored", extra={"rows": len(locations)})
        return len(locations)

    @staticmethod
    def _drop_quietly(staging: Collection) -> None:
        try:
            staging.drop()
        except PyMongoError as e:
            logger.warning("Failed to drop staging collection", extra={"collection": staging.name, "error": str(e)})

    # ── aggregate queries ─────────────────────────────────────

    def _distinct_in_order(self, field: str, match_filter: dict) -> list:
        pipeline = [
            {'$match': match_filter},
            {'$group': {'_id': f'${field}', 'first_row': {'$min': '$row'}}},
            {'$sort': {'first_row': 1}},
        ]
        try:
            return [doc['_id'] for doc in self.collection.aggregate(pipeline)]
        except PyMongoError as e:
            logger.error("Failed to list locations", extra={"field": field, "error": str(e)})
            raise RepositoryError("Failed to read locations") from e

    def list_deep1(self) -> list[str]:
        return self._distinct_in_order('deep1', {})

    def list_deep2(self, deep1: str) -> list[str | None]:
        return self._distinct_in_order('deep2', {'deep1': deep1})
