"""Tests for MongoLocationRepository against a mocked collection."""

import unittest
from unittest.mock import MagicMock

from pymongo.errors import PyMongoError

from adapter.mongodb import LOCATIONS_COLLECTION_NAME
from adapter.mongodb.location_repository import MongoLocationRepository
from domain.model.errors import RepositoryError
from domain.model.location import Location


def _make_repo():
    """Repository over a mock db that hands out one mock per collection name."""
    collections: dict[str, MagicMock] = {}
    mock_db = MagicMock()
    mock_db.__getitem__.side_effect = lambda name: collections.setdefault(name, MagicMock(name=name))
    repo = MongoLocationRepository(mock_db)
    return repo, collections[LOCATIONS_COLLECTION_NAME], collections


def _staging(collections: dict[str, MagicMock]) -> MagicMock:
    [name] = [n for n in collections if n.startswith(f"{LOCATIONS_COLLECTION_NAME}_staging_")]
    return collections[name]


LOCATIONS = [
    Location(deep1="서울특별시", grid_x=60, grid_y=127, row=1),
    Location(deep1="서울특별시", deep2="종로구", grid_x=60, grid_y=127, row=2),
]


class TestReplaceAll(unittest.TestCase):

    def test_writes_staging_then_renames_over_live(self):
        repo, live, collections = _make_repo()

        self.assertEqual(repo.replace_all(LOCATIONS), 2)

        staging = _staging(collections)
        docs = staging.insert_many.call_args[0][0]
        self.assertEqual(len(docs), 2)
        self.assertEqual(docs[1], {
            'deep1': "서울특별시", 'deep2': "종로구", 'deep3': None,
            'grid_x': 60, 'grid_y': 127, 'row': 2,
        })
        staging.create_index.assert_any_call([('deep1', 1), ('row', 1)], name='idx_locations_deep1_row')
        staging.rename.assert_called_once_with(LOCATIONS_COLLECTION_NAME, dropTarget=True)
        live.delete_many.assert_not_called()
        live.insert_many.assert_not_called()

    def test_each_upload_uses_its_own_staging_collection(self):
        repo, _, collections = _make_repo()
        repo.replace_all(LOCATIONS)
        repo.replace_all(LOCATIONS)
        staging_names = [n for n in collections if n != LOCATIONS_COLLECTION_NAME]
        self.assertEqual(len(staging_names), 2)

    def test_failed_insert_leaves_live_table_untouched(self):
        repo, live, collections = _make_repo()
        real_getitem = repo.db.__getitem__.side_effect

        def getitem(name):
            collection = real_getitem(name)
            if name != LOCATIONS_COLLECTION_NAME:
                collection.insert_many.side_effect = PyMongoError("down")
            return collection
        repo.db.__getitem__.side_effect = getitem

        with self.assertRaises(RepositoryError):
            repo.replace_all(LOCATIONS)

        staging = _staging(collections)
        staging.rename.assert_not_called()
        staging.drop.assert_called_once()
        live.delete_many.assert_not_called()
        live.drop.assert_not_called()

    def test_failed_rename_drops_staging(self):
        repo, live, collections = _make_repo()
        real_getitem = repo.db.__getitem__.side_effect

        def getitem(name):
            collection = real_getitem(name)
            if name != LOCATIONS_COLLECTION_NAME:
                collection.rename.side_effect = PyMongoError("not authorized")
            return collection
        repo.db.__getitem__.side_effect = getitem

        with self.assertRaises(RepositoryError):
            repo.replace_all(LOCATIONS)

        _staging(collections).drop.assert_called_once()
        live.delete_many.assert_not_called()

    def test_empty_table_clears_live_collection(self):
        repo, live, collections = _make_repo()
        self.assertEqual(repo.replace_all([]), 0)
        live.delete_many.assert_called_once_with({})
        self.assertEqual(list(collections), [LOCATIONS_COLLECTION_NAME])

    def test_clear_failure_raises_repository_error(self):
        repo, live, _ = _make_repo()
        live.delete_many.side_effect = PyMongoError("down")
        with self.assertRaises(RepositoryError):
            repo.replace_all([])



class TestLookups(unittest.TestCase):

    def test_list_deep1_groups_by_first_row(self):
        repo, collection, _ = _make_repo()
        collection.aggregate.return_value = [{'_id': "서울특별시", 'first_row': 1}, {'_id': "부산광역시", 'first_row': 5}]

        self.assertEqual(repo.list_deep1(), ["서울특별시", "부산광역시"])

        pipeline = collection.aggregate.call_args[0][0]
        self.assertEqual(pipeline[0], {'$match': {}})
        self.assertEqual(pipeline[1]['$group']['_id'], '$deep1')
        self.assertEqual(pipeline[2], {'$sort': {'first_row': 1}})

    def test_list_deep2_filters_by_deep1_and_keeps_none(self):
        repo, collection, _ = _make_repo()
        collection.aggregate.return_value = [{'_id': None, 'first_row': 1}, {'_id': "종로구", 'first_row': 2}]

        self.assertEqual(repo.list_deep2("서울특별시"), [None, "종로구"])

        pipeline = collection.aggregate.call_args[0][0]
        self.assertEqual(pipeline[0], {'$match': {'deep1': "서울특별시"}})
        self.assertEqual(pipeline[1]['$group']['_id'], '$deep2')

    def test_lookup_failure(self):
        repo, collection, _ = _make_repo()
        collection.aggregate.side_effect = PyMongoError("down")
        with self.assertRaises(RepositoryError):
            repo.list_deep1()


if __name__ == '__main__':
    unittest.main()
