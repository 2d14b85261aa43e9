#!/usr/bin/env python3
"""
Diarist Database Package
---------------------------
Storage and derived-metrics layer of the journal:
- Core database operations and session scopes
- Entity managers (entries, tags, streaks, settings)
- Query analytics
- Async facade
"""

from .manager import DiaristDB
from diarist.core.exceptions import DatabaseError, ValidationError
from .async_api import AsyncJournal
from .query_analytics import (
    MonthlyStats,
    MoodDistribution,
    QueryAnalytics,
    TagUsage,
    WordCountTrend,
)
from .decorators import (
    handle_db_errors,
    log_database_operation,
    validate_metadata,
)

__all__ = [
    # Main manager
    "DiaristDB",
    "AsyncJournal",
    # Exceptions
    "DatabaseError",
    "ValidationError",
    # Analytics
    "QueryAnalytics",
    "MoodDistribution",
    "TagUsage",
    "WordCountTrend",
    "MonthlyStats",
    # Decorators
    "log_database_operation",
    "handle_db_errors",
    "validate_metadata",
]
