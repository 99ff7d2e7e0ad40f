"""Repository interface for owner accounts and password reset tokens."""

from abc import ABC, abstractmethod


class OwnerRepo(ABC):
    """Contract for owner persistence."""

    @abstractmethod
    def get(self, owner_id):
        """Return the owner with ``owner_id`` or ``None``."""
        raise NotImplementedError

    @abstractmethod
    def get_by_username(self, username):
        """Return the owner registered under ``username`` or ``None``."""
        raise NotImplementedError

    @abstractmethod
    def create(self, username, password_hash, business_name):
        """Insert a new owner and return it."""
        raise NotImplementedError

    @abstractmethod
    def list_all(self):
        """Return every owner ordered by id."""
        raise NotImplementedError

    @abstractmethod
    def update_password(self, owner_id, password_hash):
        """Replace the stored password hash."""
        raise NotImplementedError

    @abstractmethod
    def create_reset_token(self, owner_id, token, expires_at):
        """Store a password reset token and return it."""
        raise NotImplementedError

    @abstractmethod
    def get_reset_token(self, token):
        """Return the reset token record for ``token`` or ``None``."""
        raise NotImplementedError

    @abstractmethod
    def mark_token_used(self, token_id):
        """Flag a reset token as consumed."""
        raise NotImplementedError
