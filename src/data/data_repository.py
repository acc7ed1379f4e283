"""
Main data repository for the course analytics system.

This module provides the DataRepository class that serves as the primary entry
point for the flat learning-event table and the course hierarchy built from it.
The hierarchy is built once per loaded table and held read-only; loading a new
table discards it.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from config.settings import Settings
from src.data.builders import build_hierarchy
from src.data.models.course_model import Course, NoDataResult
from src.data.repositories.record_repository import RecordRepository


class DataRepository:
    """
    Facade over the record repository and the built hierarchy.
    """

    def __init__(self, config: Optional[Settings] = None):
        """
        Initialize the data repository.

        Args:
            config: Optional settings configuration
        """
        self._logger = logging.getLogger(self.__class__.__name__)
        self._config = config or Settings()
        self._record_repo = RecordRepository(config=self._config)
        self._hierarchy: Optional[Union[Course, NoDataResult]] = None

    @property
    def config(self) -> Settings:
        return self._config

    @property
    def records(self) -> RecordRepository:
        """Get the record repository, loading the configured table if needed."""
        self._ensure_connected()
        return self._record_repo

    def connect(self) -> None:
        """
        Load the configured flat table if nothing was loaded yet.
        """
        try:
            self._record_repo.connect()
            self._logger.info("Successfully connected to the flat table")
        except Exception as e:
            self._logger.error(f"Error connecting to the flat table: {e}")
            raise

    def _ensure_connected(self) -> None:
        if not self._record_repo.is_loaded:
            self.connect()

    def load_file(self, file_path) -> int:
        """
        Load a flat table from a JSON or CSV file.

        Args:
            file_path: Path to the table

        Returns:
            int: Number of rows loaded
        """
        count = self._record_repo.load_file(file_path)
        self._invalidate()
        return count

    def load_rows(self, rows: List[Dict[str, Any]]) -> int:
        """
        Load a flat table that is already in memory (e.g. a parsed JSON array).

        Args:
            rows: Raw row dicts

        Returns:
            int: Number of rows loaded
        """
        count = self._record_repo.load_rows(rows)
        self._invalidate()
        return count

    def get_hierarchy(self) -> Union[Course, NoDataResult]:
        """
        Get the course hierarchy, building it on first access.

        Returns:
            Union[Course, NoDataResult]: The hierarchy or the no-data sentinel
        """
        if self._hierarchy is None:
            records = self.records.get_all()
            self._hierarchy = build_hierarchy(records, self._config)
        return self._hierarchy

    def _invalidate(self) -> None:
        if self._hierarchy is not None:
            self._logger.debug("Input table changed; discarding built hierarchy")
        self._hierarchy = None

    def get_data_summary(self) -> Dict[str, Any]:
        """
        Get a summary of the loaded table.

        Returns:
            Dict[str, Any]: Row, learner, chapter and unit counts
        """
        repo = self.records
        return {
            "rows": repo.count(),
            "learners": len(repo.get_user_ids()),
            "chapters": len(repo.distinct("chapter_id")),
            "units": len(repo.distinct("unit_id")),
        }
