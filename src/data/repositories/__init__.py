"""
Repositories package for the course analytics system.

This package contains the repository classes used for accessing the static
flat learning-event table.
"""

from .base_repository import BaseRepository
from .record_repository import RecordRepository

__all__ = [
    "BaseRepository",
    "RecordRepository",
]
