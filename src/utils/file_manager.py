"""
FileManager for the course analytics system.

This module provides a centralized file management system for saving
analysis reports. It ensures consistent file naming and directory
structures for JSON reports and CSV exports.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd


class FileManager:
    """
    Centralized file management for report output.

    Files are grouped under the base directory into "reports" (JSON) and
    "exports" (CSV tables), each filename stamped with the session id.
    """

    def __init__(self, base_dir, session_id: Optional[str] = None):
        """
        Initialize the FileManager with a base directory.

        Args:
            base_dir: Base directory for all outputs
            session_id: Optional fixed session id (defaults to a timestamp)
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self.base_dir = Path(base_dir)
        self.structure = {"reports": {}, "exports": {}}
        self.session_id = session_id or datetime.now().strftime("%Y%m%d%H%M%S")

    def get_path(self, category: str, filename: Optional[str] = None) -> Path:
        """
        Get a standardized path within the directory structure.

        Args:
            category: Top-level category (reports, exports)
            filename: Optional filename to append to the path

        Returns:
            Path: Constructed path, with its directory created
        """
        if category not in self.structure:
            self.logger.warning(f"Unknown category: {category}, using 'reports' instead")
            category = "reports"

        path = self.base_dir / category
        path.mkdir(parents=True, exist_ok=True)

        if filename:
            path = path / filename
        return path

    def generate_filename(self, base_name: str, extension: str) -> str:
        """
        Generate a standardized filename.

        Args:
            base_name: Core name for the file
            extension: File extension (with or without the dot)

        Returns:
            str: "<sanitized name>_<session id>.<extension>"
        """
        if not extension.startswith("."):
            extension = f".{extension}"
        return f"{self._sanitize_filename(base_name)}_{self.session_id}{extension}"

    def _sanitize_filename(self, filename: str) -> str:
        """
        Sanitize a filename to be safe across different operating systems.

        Args:
            filename: Original filename

        Returns:
            str: Sanitized filename
        """
        filename = filename.replace(" ", "_")
        for char in ["\\", "/", ":", "*", "?", '"', "<", ">", "|", "%"]:
            filename = filename.replace(char, "_")

        # Ensure it doesn't start with a dot (hidden file in Unix)
        if filename.startswith("."):
            filename = "_" + filename[1:]

        return filename

    def save_json(self, data: Any, name: str) -> Path:
        """
        Save a JSON-serializable report.

        Args:
            data: Report data
            name: Base filename

        Returns:
            Path: Path to the saved file
        """
        file_path = self.get_path("reports", self.generate_filename(name, "json"))
        try:
            with open(file_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, default=str)
        except (OSError, TypeError) as e:
            self.logger.error(f"Error saving file {file_path}: {e}")
            raise
        self.logger.info(f"File saved successfully: {file_path}")
        return file_path

    def save_dataframe(self, frame: pd.DataFrame, name: str) -> Path:
        """
        Save a table as CSV.

        Args:
            frame: Table to save
            name: Base filename

        Returns:
            Path: Path to the saved file
        """
        file_path = self.get_path("exports", self.generate_filename(name, "csv"))
        try:
            frame.to_csv(file_path, index=False)
        except OSError as e:
            self.logger.error(f"Error saving file {file_path}: {e}")
            raise
        self.logger.info(f"File saved successfully: {file_path}")
        return file_path

    def save_dataframes(self, frames: Dict[str, pd.DataFrame]) -> Dict[str, Path]:
        """Save several named tables; returns the path of each."""
        return {name: self.save_dataframe(frame, name) for name, frame in frames.items()}
