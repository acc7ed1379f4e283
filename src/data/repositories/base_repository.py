"""
Base repository for the course analytics system.

This module provides the BaseRepository abstract class that serves as the
foundation for table-backed repositories. It loads static JSON or CSV
exports into Pydantic models and offers common read operations over them.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar
import json
import logging
from pathlib import Path

import pandas as pd
from pydantic import BaseModel

# Type variable for the model type
T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T], ABC):
    """
    Base repository for data access.

    This abstract class provides loading and common read operations for
    working with a static table through Pydantic models.

    Attributes:
        _collection_name (str): Name of the data collection
        _model_class (Type[T]): Pydantic model class for this repository
        _items (List[T]): Loaded model instances, in source order
    """

    def __init__(self, collection_name: str, model_class: Type[T]):
        """
        Initialize the repository.

        Args:
            collection_name: Name of the data collection
            model_class: Pydantic model class to use for this repository
        """
        self._collection_name = collection_name
        self._model_class = model_class
        self._logger = logging.getLogger(f"{self.__class__.__name__}")
        self._items: List[T] = []
        self._data_loaded = False

    @abstractmethod
    def connect(self) -> None:
        """
        Connect to the data source.

        This method must be implemented by subclasses to load their data.
        """
        pass

    @property
    def is_loaded(self) -> bool:
        return self._data_loaded

    def load_file(self, file_path) -> int:
        """
        Load rows from a JSON array file or a CSV file, replacing current data.

        Args:
            file_path: Path to a .json or .csv file

        Returns:
            int: Number of rows loaded

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file type is unsupported or the JSON is not an array
        """
        path = Path(file_path)
        if not path.exists():
            self._logger.error(f"Data file not found: {path}")
            raise FileNotFoundError(f"Data file not found: {path}")

        suffix = path.suffix.lower()
        try:
            if suffix == ".json":
                rows = self._read_json(path)
            elif suffix == ".csv":
                rows = self._read_csv(path)
            else:
                raise ValueError(f"Unsupported data file format: {suffix}")
        except Exception as e:
            self._logger.error(f"Error loading {self._collection_name} from {path}: {e}")
            raise

        count = self.load_rows(rows)
        self._logger.info(f"Loaded {count} {self._collection_name} from {path}")
        return count

    def load_rows(self, rows: List[Dict[str, Any]]) -> int:
        """
        Load already parsed rows, replacing current data.

        Args:
            rows: Raw row dicts

        Returns:
            int: Number of rows loaded
        """
        self._items = [self._to_model(row) for row in rows]
        self._data_loaded = True
        return len(self._items)

    def _read_json(self, path: Path) -> List[Dict[str, Any]]:
        with open(path, "r", encoding="utf-8") as file:
            data = json.load(file)
        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON array of rows in {path}")
        return data

    def _read_csv(self, path: Path) -> List[Dict[str, Any]]:
        frame = pd.read_csv(path)
        # Empty cells come back as NaN; they mean "absent"
        frame = frame.astype(object).where(frame.notna(), None)
        return frame.to_dict(orient="records")

    def _to_model(self, data: Dict) -> T:
        """
        Convert raw data to a Pydantic model.

        Args:
            data: Raw data

        Returns:
            T: Pydantic model instance
        """
        return self._model_class.model_validate(data)

    def get_all(self) -> List[T]:
        """
        Get all loaded items.

        Returns:
            List[T]: All model instances, in source order
        """
        return list(self._items)

    def count(self) -> int:
        return len(self._items)

    def find_many(self, predicate: Callable[[T], bool]) -> List[T]:
        """
        Find all items matching a predicate.

        Args:
            predicate: Function returning True for wanted items

        Returns:
            List[T]: Matching items, in source order
        """
        return [item for item in self._items if predicate(item)]

    def find_by_field(self, field: str, value: Any) -> List[T]:
        """
        Find all items whose field equals a value.

        Args:
            field: Model field name
            value: Value to match

        Returns:
            List[T]: Matching items
        """
        return self.find_many(lambda item: getattr(item, field, None) == value)

    def distinct(self, field: str) -> List[Any]:
        """
        Get distinct non-None values for a field, in first-seen order.

        Args:
            field: Model field name

        Returns:
            List[Any]: Distinct values
        """
        seen: Dict[Any, None] = {}
        for item in self._items:
            value = getattr(item, field, None)
            if value is not None:
                seen.setdefault(value, None)
        return list(seen)
