"""
Record repository for the course analytics system.

This module provides data access and query methods for the flat
learning-event table.
"""

import logging
from typing import List, Optional

from config.settings import Settings
from src.data.models.record_model import FlatRecord
from src.data.repositories.base_repository import BaseRepository
from src.utils.safe_ops import safe_id


class RecordRepository(BaseRepository[FlatRecord]):
    """
    Repository for the flat learning-event records.

    Rows are kept in file order, which is the order the hierarchy builder
    relies on for first-seen semantics.
    """

    def __init__(self, config: Optional[Settings] = None):
        """
        Initialize the record repository.

        Args:
            config: Optional configuration object
        """
        super().__init__("records", FlatRecord)
        self._logger = logging.getLogger(self.__class__.__name__)
        self._config = config

    def connect(self) -> None:
        """
        Load the flat table from the configured path.

        Does nothing if data was already loaded.
        """
        if self._data_loaded:
            return

        if self._config and hasattr(self._config, "FLAT_TABLE_PATH"):
            file_path = self._config.FLAT_TABLE_PATH
        else:
            # Default path if not specified in config
            file_path = "input/output.json"

        self.load_file(file_path)

    def find_by_user(self, user_id) -> List[FlatRecord]:
        """
        Find every row of a learner.

        Args:
            user_id: Learner identifier

        Returns:
            List[FlatRecord]: Rows of the learner
        """
        return self.find_by_field("user_id", safe_id(user_id))

    def find_by_chapter(self, chapter_id) -> List[FlatRecord]:
        return self.find_by_field("chapter_id", safe_id(chapter_id))

    def find_by_unit(self, unit_id) -> List[FlatRecord]:
        return self.find_by_field("unit_id", safe_id(unit_id))

    def get_user_ids(self) -> List[str]:
        """
        Get the distinct learner ids of the table.

        Returns:
            List[str]: Learner ids in first-seen order
        """
        return self.distinct("user_id")
