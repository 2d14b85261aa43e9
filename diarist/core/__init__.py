"""
Core utilities shared by every Diarist component: exceptions, logging,
validation, configuration and project paths.
"""
from .exceptions import DatabaseError, ValidationError
from .logging_manager import DiaristLogger, NullLogger, safe_logger
from .validators import DataValidator

__all__ = [
    "DatabaseError",
    "ValidationError",
    "DiaristLogger",
    "NullLogger",
    "safe_logger",
    "DataValidator",
]
