"""
Repositories for data access.

Each module wraps one table (or a small group of tightly related tables)
behind async query methods. ``bundle.build_sql_repos_from_session`` builds the
full set for one session.
"""

from .base import BaseRepository, QueryBuilder, SQLModelRepository
from .bundle import SqlRepoBundle, build_sql_repos_from_session

__all__ = [
    "BaseRepository",
    "QueryBuilder",
    "SQLModelRepository",
    "SqlRepoBundle",
    "build_sql_repos_from_session",
]
