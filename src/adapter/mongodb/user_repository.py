"""MongoDB implementation of UserRepository."""

import uuid
from datetime import datetime, timezone
from logging import getLogger
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from adapter.mongodb import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateError, RepositoryError
from domain.model.user import User

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            create_index_safe(self.collection, [('created_at', -1)], 'idx_users_created_at')
            return True
        except Exception as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            email=doc['email'],
            name=doc['name'],
            password_hash=doc['password_hash'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
        )

    def create(self, email: str, password_hash: str, name: str) -> User:
        """Insert a new user. The unique email index rejects duplicates atomically."""
        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)
        user_doc = {
            '_id': user_id,
            'email': email,
            'password_hash': password_hash,
            'name': name,
            'created_at': now,
            'updated_at': now,
        }
        try:
            self.collection.insert_one(user_doc)
        except DuplicateKeyError as e:
            logger.warning("User creation failed: email already exists", extra={"email": email})
            raise DuplicateError("Email already registered") from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": email, "error": str(e)})
            raise RepositoryError("Failed to create user") from e

        logger.info("User created", extra={"userId": user_id, "email": email})
        return self._to_domain(user_doc)

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'email': email})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            raise RepositoryError("Failed to read user") from e
        return self._to_domain(doc) if doc else None

    def save(self, user: User) -> bool:
        """Persist the mutable fields of an existing user."""
        try:
            result = self.collection.update_one(
                {'_id': user.id},
                {'$set': {
                    'name': user.name,
                    'password_hash': user.password_hash,
                    'updated_at': user.updated_at,
                }}
            )
        except PyMongoError as e:
            logger.error("Failed to update user", extra={"userId": user.id, "error": str(e)})
            raise RepositoryError("Failed to update user") from e

        if result.matched_count == 0:
            logger.warning("User not found for update", extra={"userId": user.id})
            return False
        return True

    def delete(self, user: User) -> bool:
        try:
            result = self.collection.delete_one({'_id': user.id})
        except PyMongoError as e:
            logger.error("Failed to delete user", extra={"userId": user.id, "error": str(e)})
            raise RepositoryError("Failed to delete user") from e

        if result.deleted_count == 0:
            logger.warning("User not found for deletion", extra={"userId": user.id})
            return False
        return True

    def delete_all(self) -> int:
        try:
            result = self.collection.delete_many({})
        except PyMongoError as e:
            logger.error("Failed to delete users", extra={"error": str(e)})
            raise RepositoryError("Failed to delete users") from e
        return result.deleted_count
