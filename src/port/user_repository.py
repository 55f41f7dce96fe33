from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access."""
    def create(self, email: str, password_hash: str, name: str) -> User:
        """Create a new user. Raise DuplicateError if the email is taken."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    def save(self, user: User) -> bool:
        """Persist name and password changes. Return True if the user was found."""
        ...

    def delete(self, user: User) -> bool:
        """Remove a user. Return True if a record was deleted."""
        ...

    def delete_all(self) -> int:
        """Remove every user. Return the number of deleted records."""
        ...
