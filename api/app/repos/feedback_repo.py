"""Repository interface for feedback records."""

from abc import ABC, abstractmethod


class FeedbackRepo(ABC):
    """Contract for feedback persistence.

    Records are immutable: the only write operations are a single insert and
    a bulk delete of everything an owner has received.
    """

    @abstractmethod
    def create(self, candidate):
        """Insert a validated submission and return the stored record."""
        raise NotImplementedError

    @abstractmethod
    def list_for_owner(self, owner_id, since=None, until=None):
        """Return the owner's records, newest first.

        ``since`` and ``until`` bound ``created_at`` inclusively when given.
        """
        raise NotImplementedError

    @abstractmethod
    def delete_for_owner(self, owner_id):
        """Delete every record of the owner and return how many were removed."""
        raise NotImplementedError
