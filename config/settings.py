"""
Configuration settings for the course analytics system.

This module provides the Settings class that holds all configuration
parameters for the application, including file paths, display precision
and the thresholds behind the diagnostic flags and classifiers.
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

logger = logging.getLogger(__name__)


class Settings:
    """
    Configuration settings for the course analytics system.

    This class provides centralized configuration management for file paths,
    numeric precision and classification thresholds.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize settings with default values or from config file.

        Args:
            config_path: Optional path to configuration file
        """
        # Default base paths
        self.BASE_DIR = Path(__file__).parent.parent  # Project root directory
        self.OUTPUT_DIR = self.BASE_DIR / "output"
        self.LOG_DIR = self.BASE_DIR / "logs"

        # Flat learning-event table
        self.FLAT_TABLE_PATH = self.BASE_DIR / "input" / "output.json"

        # Decimal digits kept when truncating displayed values
        self.DEFAULT_DECIMALS = 2
        self.SUMMARY_DECIMALS = 1  # Chapter and unit summary cards
        self.DIFFICULTY_DECIMALS = 0

        # Unit / learner flags
        self.PROBLEMATIC_ACCURACY_THRESHOLD = 60.0
        self.STRUGGLING_ACCURACY_THRESHOLD = 50.0

        # Student diagnosis
        self.STRUGGLING_CONCEPT_THRESHOLD = 60.0
        self.PERSISTENCE_ATTEMPTS_THRESHOLD = 15.0
        self.PERSISTENCE_ACCURACY_THRESHOLD = 70.0
        self.KNOWLEDGE_GAP_ACCURACY_THRESHOLD = 60.0
        self.EXCELLING_ACCURACY_THRESHOLD = 90.0

        # Concept difficulty index
        self.MIN_DIFFICULTY_ATTEMPTS = 1.1
        self.DIFFICULTY_TIERS = {
            "HIGH": 800.0,  # Index above this is a high-difficulty concept
            "MEDIUM": 400.0,
        }

        # Activity effectiveness
        self.EFFECTIVENESS_THRESHOLDS = {
            "REVIEW_ACCURACY": 70.0,
            "REVIEW_ATTEMPTS": 10.0,
            "MODERATE_ACCURACY": 80.0,
        }

        # Cache settings
        self.CACHE_ENABLED = True

        # Load additional settings from config file if provided
        if config_path:
            self._load_from_file(config_path)

        # Override with environment variables if set
        self._load_from_env()

    def create_directories(self) -> None:
        """Create the output and log directories if they don't exist."""
        self.OUTPUT_DIR.mkdir(exist_ok=True, parents=True)
        self.LOG_DIR.mkdir(exist_ok=True, parents=True)

    def _load_from_file(self, config_path: str) -> None:
        """
        Load settings from a configuration file.

        Args:
            config_path: Path to configuration file
        """
        config_file = Path(config_path)
        if not config_file.exists():
            logger.warning(f"Config file not found: {config_path}")
            return

        # Load based on file extension
        if config_file.suffix.lower() == ".json":
            self._load_from_json(config_file)
        elif config_file.suffix.lower() in [".yml", ".yaml"]:
            self._load_from_yaml(config_file)
        else:
            logger.warning(f"Unsupported config file format: {config_file.suffix}")

    def _load_from_json(self, config_file: Path) -> None:
        """
        Load settings from a JSON file.

        Args:
            config_file: Path to JSON config file
        """
        try:
            with open(config_file, "r") as f:
                config_data = json.load(f)
            self._apply(config_data)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading JSON config: {e}")

    def _load_from_yaml(self, config_file: Path) -> None:
        """
        Load settings from a YAML file.

        Args:
            config_file: Path to YAML config file
        """
        try:
            with open(config_file, "r") as f:
                config_data = yaml.safe_load(f)
            self._apply(config_data)
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Error loading YAML config: {e}")

    def _apply(self, config_data: Optional[Dict[str, Any]]) -> None:
        """Update known settings from a parsed config mapping."""
        if not isinstance(config_data, dict):
            return

        for key, value in config_data.items():
            if key.startswith("_") or key not in self.__dict__:
                logger.debug(f"Ignoring unknown setting: {key}")
                continue
            if isinstance(getattr(self, key), Path):
                value = Path(value)
            setattr(self, key, value)

    def _load_from_env(self) -> None:
        """Load settings from environment variables."""
        # Define mappings from environment variable names to attributes
        env_mappings = {
            "COURSE_ANALYTICS_FLAT_TABLE": "FLAT_TABLE_PATH",
            "COURSE_ANALYTICS_OUTPUT_DIR": "OUTPUT_DIR",
            "COURSE_ANALYTICS_LOG_DIR": "LOG_DIR",
            "COURSE_ANALYTICS_DEFAULT_DECIMALS": "DEFAULT_DECIMALS",
            "COURSE_ANALYTICS_CACHE_ENABLED": "CACHE_ENABLED",
        }

        for env_name, attr_name in env_mappings.items():
            if env_name in os.environ and hasattr(self, attr_name):
                env_value = os.environ[env_name]
                attr_value = getattr(self, attr_name)

                # Convert type based on current attribute type
                if isinstance(attr_value, bool):
                    env_value = env_value.lower() in ["true", "1", "yes"]
                elif isinstance(attr_value, int):
                    env_value = int(env_value)
                elif isinstance(attr_value, float):
                    env_value = float(env_value)
                elif isinstance(attr_value, Path):
                    env_value = Path(env_value)

                setattr(self, attr_name, env_value)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert settings to a dictionary.

        Returns:
            Dict[str, Any]: Dictionary representation of settings
        """
        result = {}
        for key, value in self.__dict__.items():
            if not key.startswith("_"):
                if isinstance(value, Path):
                    result[key] = str(value)
                else:
                    result[key] = value
        return result

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a setting value by key.

        Args:
            key: Setting key
            default: Default value if key not found

        Returns:
            Any: Setting value or default
        """
        return getattr(self, key, default)


# Default settings instance
default_settings = Settings()
