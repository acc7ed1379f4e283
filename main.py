#!/usr/bin/env python3
"""
Course Analytics System

This script provides a command-line interface for building the course
hierarchy from a flat learning-event table and reporting on it: course
overview, student diagnoses, concept difficulty and activity effectiveness.
It coordinates the data repository, the analyzers and the file manager.
"""

import sys
import logging
import argparse
import json
from pathlib import Path
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from config.settings import Settings
from src.data.data_repository import DataRepository
from src.data.models.course_model import Course, is_no_data
from src.analyzers.analyzer_manager import AnalyzerManager
from src.utils.common_utils import calculate_summary_statistics, truncate_to_decimals
from src.utils.export_utils import (
    hierarchy_to_frames,
    concept_ranking_frame,
    activity_effectiveness_frame,
)
from src.utils.file_manager import FileManager


class AnalysisApp:
    """
    Main application class for the course analytics system.

    This class coordinates the entire application workflow, including:
    - Parsing command line arguments
    - Setting up logging
    - Loading the flat table and building the hierarchy
    - Running the requested report and saving its output
    """

    def __init__(self):
        """Initialize the application."""
        self.args = None
        self.settings = None
        self.logger = None
        self.data_repository = None
        self.analyzer_manager = None
        self.file_manager = None

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        Run the application.

        Args:
            argv: Optional argument list (defaults to sys.argv)

        Returns:
            int: Exit code (0 for success, non-zero for errors)
        """
        try:
            self._parse_arguments(argv)
            self._load_configuration()
            self._setup_logging()

            if not self._initialize_components():
                return 1

            return self._execute_requested_operation()

        except Exception as e:
            if self.logger:
                self.logger.exception(f"Unhandled exception: {e}")
            else:
                print(f"ERROR: {e}")
            return 1

    def _parse_arguments(self, argv: Optional[List[str]] = None):
        """Parse command line arguments."""
        parser = argparse.ArgumentParser(
            description="Course Analytics System",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        )

        # Configuration options
        config_group = parser.add_argument_group("Configuration Options")
        config_group.add_argument(
            "--config", type=str, help="Path to configuration file (JSON or YAML)"
        )
        config_group.add_argument(
            "--input", type=str, help="Flat table to analyze (.json or .csv)"
        )
        config_group.add_argument("--log-dir", type=str, help="Directory for log files")
        config_group.add_argument(
            "--output-dir", type=str, help="Output directory for results"
        )

        # Report selection options
        report_group = parser.add_argument_group("Report Selection")
        report_type = report_group.add_mutually_exclusive_group()
        report_type.add_argument(
            "--summary", action="store_true", help="Course overview (default)"
        )
        report_type.add_argument(
            "--student", metavar="ID", help="Diagnose a specific student by user id"
        )
        report_type.add_argument(
            "--students", action="store_true", help="Group students by status"
        )
        report_type.add_argument(
            "--concepts", action="store_true", help="Rank concepts by difficulty"
        )
        report_type.add_argument(
            "--activities", action="store_true", help="Rate activity effectiveness"
        )
        report_type.add_argument(
            "--export", action="store_true", help="Export all tables as CSV"
        )

        # System options
        sys_group = parser.add_argument_group("System Options")
        sys_group.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose logging"
        )
        sys_group.add_argument(
            "--no-cache",
            action="store_true",
            help="Disable caching of student diagnoses",
        )
        sys_group.add_argument(
            "--save", action="store_true", help="Also save the report as JSON"
        )

        self.args = parser.parse_args(argv)

    def _load_configuration(self):
        """
        Load configuration settings and apply command line overrides.

        Runs before logging is configured, so that the log directory can
        come from the configuration file or the environment.
        """
        self.settings = Settings(config_path=self.args.config)

        # Override settings from command line arguments if provided
        if self.args.input:
            self.settings.FLAT_TABLE_PATH = Path(self.args.input)

        if self.args.output_dir:
            self.settings.OUTPUT_DIR = Path(self.args.output_dir)

        if self.args.log_dir:
            self.settings.LOG_DIR = Path(self.args.log_dir)

        if self.args.no_cache:
            self.settings.CACHE_ENABLED = False

    def _setup_logging(self):
        """Configure logging for the application."""
        log_level = logging.DEBUG if self.args.verbose else logging.INFO

        self.settings.create_directories()

        # Create log filename with timestamp
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = self.settings.LOG_DIR / f"course_analytics_{timestamp}.log"

        # Configure file handler
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        file_handler.setFormatter(file_formatter)

        # Configure console handler with a simpler format
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_formatter = logging.Formatter("%(levelname)s: %(message)s")
        console_handler.setFormatter(console_formatter)

        # Configure root logger
        root_logger = logging.getLogger()
        root_logger.setLevel(log_level)
        root_logger.addHandler(file_handler)
        root_logger.addHandler(console_handler)

        self.logger = logging.getLogger(self.__class__.__name__)
        self.logger.info(f"Logging initialized in {self.settings.LOG_DIR}")
        self.logger.info(f"Input table: {self.settings.FLAT_TABLE_PATH}")
        self.logger.info(f"Output directory: {self.settings.OUTPUT_DIR}")

    def _initialize_components(self) -> bool:
        """
        Initialize the core components of the system.

        Returns:
            bool: True if initialization was successful, False otherwise
        """
        try:
            self.logger.info("Initializing data repository")
            self.data_repository = DataRepository(self.settings)
            self.data_repository.connect()

            summary = self.data_repository.get_data_summary()
            self.logger.info(
                f"Loaded {summary['rows']} rows: {summary['learners']} learners, "
                f"{summary['chapters']} chapters, {summary['units']} units"
            )

            self.analyzer_manager = AnalyzerManager(self.data_repository)
            self.file_manager = FileManager(self.settings.OUTPUT_DIR)

            self.logger.info("All components initialized successfully")
            return True

        except Exception as e:
            self.logger.exception(f"Error initializing components: {e}")
            return False

    def _execute_requested_operation(self) -> int:
        """
        Execute the requested report.

        Returns:
            int: Exit code (0 for success, non-zero for errors)
        """
        hierarchy = self.data_repository.get_hierarchy()
        if is_no_data(hierarchy):
            self.logger.error(hierarchy.message)
            return 1

        operation_type, func = self._get_requested_operation()
        self.logger.info(f"Executing {operation_type} operation")

        result = func(hierarchy)
        if result is None:
            self.logger.error(f"{operation_type} operation failed")
            return 1

        print(json.dumps(result, indent=2, default=str))

        if self.args.save:
            self.file_manager.save_json(result, operation_type)

        self.logger.info(f"{operation_type} operation completed successfully")
        return 0

    def _get_requested_operation(self) -> Tuple[str, Callable[[Course], Optional[Dict[str, Any]]]]:
        """
        Determine the requested operation from command line arguments.

        Returns:
            Tuple[str, Callable]: Operation name and the function producing its report
        """
        if self.args.student:
            return "student-diagnosis", self._diagnose_student
        if self.args.students:
            return "student-cohorts", self._group_students
        if self.args.concepts:
            return "concept-difficulty", self._rank_concepts
        if self.args.activities:
            return "activity-effectiveness", self._rate_activities
        if self.args.export:
            return "export", self._export_tables
        return "course-summary", self._summarize_course

    def _summarize_course(self, course: Course) -> Dict[str, Any]:
        """Course overview with chapter and unit summary cards."""
        decimals = self.settings.SUMMARY_DECIMALS
        accuracy_stats = calculate_summary_statistics(
            [user.accuracy for _, user in course.iter_unit_users()]
        )

        return {
            "no_of_learners": course.no_of_learners,
            "avg_accuracy": course.avg_accuracy,
            "completion": course.completion,
            "total_time_spent": course.total_time_spent,
            "learner_accuracy_statistics": accuracy_stats,
            "chapters": [
                {
                    "chapter_no": chapter.chapter_no,
                    "chapter_name": chapter.chapter_name,
                    "avg_accuracy": truncate_to_decimals(chapter.avg_accuracy, decimals),
                    "completion": truncate_to_decimals(chapter.completion, decimals),
                    "units": [
                        {
                            "unit_no": unit.unit_no,
                            "unit_name": unit.unit_name,
                            "avg_accuracy": unit.avg_accuracy,
                            "avg_time_spent": unit.avg_time_spent,
                            "no_of_learners": unit.no_of_learners,
                            "is_problematic": unit.is_problematic,
                        }
                        for unit in chapter.units
                    ],
                }
                for chapter in course.chapters
            ],
        }

    def _diagnose_student(self, course: Course) -> Optional[Dict[str, Any]]:
        diagnosis = self.analyzer_manager.classify_student(self.args.student)
        if diagnosis is None:
            return None
        return diagnosis.model_dump(mode="json")

    def _group_students(self, course: Course) -> Optional[Dict[str, Any]]:
        groups = self.analyzer_manager.summarize_students()
        if groups is None:
            return None
        return {
            status.value: [s.model_dump(mode="json") for s in summaries]
            for status, summaries in groups.items()
        }

    def _rank_concepts(self, course: Course) -> Optional[Dict[str, Any]]:
        concepts = self.analyzer_manager.rank_concepts()
        if concepts is None:
            return None
        frame = concept_ranking_frame(concepts, self.settings.DIFFICULTY_DECIMALS)
        return {"concepts": frame.to_dict(orient="records")}

    def _rate_activities(self, course: Course) -> Optional[Dict[str, Any]]:
        activities = self.analyzer_manager.rate_activities()
        if activities is None:
            return None
        frame = activity_effectiveness_frame(activities)
        return {"activities": frame.to_dict(orient="records")}

    def _export_tables(self, course: Course) -> Optional[Dict[str, Any]]:
        frames = hierarchy_to_frames(course)
        frames["concept_difficulty"] = concept_ranking_frame(
            self.analyzer_manager.rank_concepts(), self.settings.DIFFICULTY_DECIMALS
        )
        frames["activity_effectiveness"] = activity_effectiveness_frame(
            self.analyzer_manager.rate_activities()
        )
        paths = self.file_manager.save_dataframes(frames)
        return {name: str(path) for name, path in paths.items()}


def main():
    """Main function to run the analysis application."""
    app = AnalysisApp()
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
