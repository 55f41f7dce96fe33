"""Tests for MongoUserRepository against a mocked collection."""

import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import USERS_COLLECTION_NAME
from adapter.mongodb.user_repository import MongoUserRepository
from domain.model.errors import DuplicateError, RepositoryError
from domain.model.user import User

NOW = datetime(2026, 1, 23, 12, 0, 0, tzinfo=timezone.utc)


def _make_repo():
    mock_collection = MagicMock()
    mock_db = MagicMock()
    mock_db.__getitem__.return_value = mock_collection
    return MongoUserRepository(mock_db), mock_db, mock_collection


def _user_doc(**kwargs) -> dict:
    doc = {
        '_id': 'user-1',
        'email': 'a@x.com',
        'name': 'A',
        'password_hash': '$2b$12$hash',
        'created_at': NOW,
        'updated_at': NOW,
    }
    doc.update(kwargs)
    return doc


class TestCreate(unittest.TestCase):

    @patch('adapter.mongodb.user_repository.uuid')
    @patch('adapter.mongodb.user_repository.datetime')
    def test_create_success(self, mock_datetime, mock_uuid):
        mock_uuid.uuid4.return_value.hex = 'new-user-id'
        mock_datetime.now.return_value = NOW
        repo, mock_db, collection = _make_repo()

        user = repo.create(email='a@x.com', password_hash='$2b$12$hash', name='A')

        mock_db.__getitem__.assert_called_with(USERS_COLLECTION_NAME)
        collection.insert_one.assert_called_once_with(_user_doc(_id='new-user-id'))
        self.assertEqual(user, User(
            id='new-user-id', email='a@x.com', name='A',
            password_hash='$2b$12$hash', created_at=NOW, updated_at=NOW,
        ))

    def test_duplicate_key_raises_duplicate_error(self):
        repo, _, collection = _make_repo()
        collection.insert_one.side_effect = DuplicateKeyError("E11000 duplicate key error")

        with self.assertRaises(DuplicateError):
            repo.create(email='a@x.com', password_hash='h', name='A')

    def test_other_failure_raises_repository_error(self):
        repo, _, collection = _make_repo()
        collection.insert_one.side_effect = PyMongoError("network down")

        with self.assertRaises(RepositoryError):
            repo.create(email='a@x.com', password_hash='h', name='A')


class TestGetByEmail(unittest.TestCase):

    def test_found(self):
        repo, _, collection = _make_repo()
        collection.find_one.return_value = _user_doc()

        user = repo.get_by_email('a@x.com')

        self.assertEqual(user.id, 'user-1')
        self.assertEqual(user.email, 'a@x.com')
        collection.find_one.assert_called_once_with({'email': 'a@x.com'})

    def test_not_found(self):
        repo, _, collection = _make_repo()
        collection.find_one.return_value = None
        self.assertIsNone(repo.get_by_email('nobody@x.com'))

    def test_store_failure_is_not_reported_as_missing_user(self):
        repo, _, collection = _make_repo()
        collection.find_one.side_effect = PyMongoError("timeout")
        with self.assertRaises(RepositoryError):
            repo.get_by_email('a@x.com')


class TestSaveAndDelete(unittest.TestCase):

    def setUp(self):
        self.repo, _, self.collection = _make_repo()
        self.user = User(
            id='user-1', email='a@x.com', name='B',
            password_hash='$2b$12$new', created_at=NOW, updated_at=NOW,
        )

    def test_save_sets_mutable_fields(self):
        self.collection.update_one.return_value.matched_count = 1

        self.assertTrue(self.repo.save(self.user))
        self.collection.update_one.assert_called_once_with(
            {'_id': 'user-1'},
            {'$set': {'name': 'B', 'password_hash': '$2b$12$new', 'updated_at': NOW}},
        )

    def test_save_missing_user(self):
        self.collection.update_one.return_value.matched_count = 0
        self.assertFalse(self.repo.save(self.user))

    def test_save_failure(self):
        self.collection.update_one.side_effect = PyMongoError("down")
        with self.assertRaises(RepositoryError):
            self.repo.save(self.user)

    def test_delete(self):
        self.collection.delete_one.return_value.deleted_count = 1
        self.assertTrue(self.repo.delete(self.user))
        self.collection.delete_one.assert_called_once_with({'_id': 'user-1'})

    def test_delete_missing(self):
        self.collection.delete_one.return_value.deleted_count = 0
        self.assertFalse(self.repo.delete(self.user))

    def test_delete_all(self):
        self.collection.delete_many.return_value.deleted_count = 3
        self.assertEqual(self.repo.delete_all(), 3)
        self.collection.delete_many.assert_called_once_with({})


class TestEnsureIndexes(unittest.TestCase):

    @patch('adapter.mongodb.indexes.create_index_safe')
    def test_unique_email_index(self, mock_create):
        repo, _, collection = _make_repo()

        self.assertTrue(repo.ensure_indexes())

        mock_create.assert_any_call(collection, [('email', 1)], 'idx_users_email', unique=True)

    @patch('adapter.mongodb.indexes.create_index_safe')
    def test_index_failure_returns_false(self, mock_create):
        mock_create.side_effect = PyMongoError("boom")
        repo, _, _ = _make_repo()
        self.assertFalse(repo.ensure_indexes())


if __name__ == '__main__':
    unittest.main()
