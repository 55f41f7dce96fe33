"""In-memory implementation of UserRepository for testing."""

import uuid
from dataclasses import replace
from datetime import datetime, timezone

from domain.model.errors import DuplicateError
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    def create(self, email: str, password_hash: str, name: str) -> User:
        if email in self.store:
            raise DuplicateError("Email already registered")

        now = datetime.now(timezone.utc)
        user = User(
            id=uuid.uuid4().hex,
            email=email,
            name=name,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        self.store[email] = user
        return replace(user)

    def save(self, user: User) -> bool:
        if user.email not in self.store:
            return False
        self.store[user.email] = replace(user)
        return True

    def delete(self, user: User) -> bool:
        return self.store.pop(user.email, None) is not None

    def delete_all(self) -> int:
        count = len(self.store)
        self.store.clear()
        return count

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        user = self.store.get(email)
        return replace(user) if user else None
