"""SQLAlchemy-backed repository implementations.

Each repository is bound to one :class:`~sqlalchemy.orm.Session` supplied by
the caller. Driver errors are rolled back and re-raised as
:class:`~api.app.errors.InternalError`.
"""

from .feedback_repo_sql import FeedbackRepoSQL
from .owner_repo_sql import OwnerRepoSQL

__all__ = ["FeedbackRepoSQL", "OwnerRepoSQL"]
