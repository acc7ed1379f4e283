"""
Analyzer Manager for the course analytics system.

This module provides a centralized management system for analyzer components,
handling their lifecycle against the current course hierarchy and caching
per-student diagnoses.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from src.data.data_repository import DataRepository
from src.data.models.course_model import Course, is_no_data
from src.data.models.enums import StudentStatus
from src.data.models.analysis_model import (
    StudentDiagnosis,
    StudentSummary,
    ConceptDifficulty,
    ActivityEffectivenessSummary,
)
from src.analyzers.student_analyzer import StudentAnalyzer
from src.analyzers.concept_analyzer import ConceptAnalyzer
from src.analyzers.activity_analyzer import ActivityAnalyzer


class AnalyzerManager:
    """
    Manages the lifecycle and coordination of analyzer components.

    Analyzers are bound to one built hierarchy. When the data repository
    hands out a different hierarchy (a new table was loaded) the analyzers
    and the result cache are discarded.
    """

    def __init__(self, data_repository: DataRepository):
        """
        Initialize the analyzer manager.

        Args:
            data_repository: Data repository owning the course hierarchy
        """
        self._logger = logging.getLogger(self.__class__.__name__)
        self._data_repo = data_repository

        self._course: Optional[Course] = None
        self._student_analyzer: Optional[StudentAnalyzer] = None
        self._concept_analyzer: Optional[ConceptAnalyzer] = None
        self._activity_analyzer: Optional[ActivityAnalyzer] = None

        # Cache for analysis results
        self._result_cache: Dict[str, Any] = {}
        self._cache_enabled = data_repository.config.CACHE_ENABLED

    def _ensure_analyzers(self) -> bool:
        """
        Bind analyzers to the current hierarchy.

        Returns:
            bool: False when the table produced no data
        """
        hierarchy = self._data_repo.get_hierarchy()
        if is_no_data(hierarchy):
            self._logger.warning(f"No hierarchy available: {hierarchy.message}")
            return False

        if hierarchy is not self._course:
            self._logger.info("Initializing analyzers...")
            settings = self._data_repo.config
            self._course = hierarchy
            self._student_analyzer = StudentAnalyzer(hierarchy, settings)
            self._concept_analyzer = ConceptAnalyzer(hierarchy, settings)
            self._activity_analyzer = ActivityAnalyzer(hierarchy, settings)
            self.clear_cache()
        return True

    def get_student_analyzer(self) -> Optional[StudentAnalyzer]:
        """
        Get the student analyzer instance.

        Returns:
            StudentAnalyzer: The analyzer or None if there is no data
        """
        if not self._ensure_analyzers():
            return None
        return self._student_analyzer

    def get_concept_analyzer(self) -> Optional[ConceptAnalyzer]:
        if not self._ensure_analyzers():
            return None
        return self._concept_analyzer

    def get_activity_analyzer(self) -> Optional[ActivityAnalyzer]:
        if not self._ensure_analyzers():
            return None
        return self._activity_analyzer

    def enable_cache(self, enabled: bool = True) -> None:
        """
        Enable or disable caching of analysis results.

        Args:
            enabled: Whether caching should be enabled
        """
        self._cache_enabled = enabled
        self._logger.info(
            f"Analysis result caching {'enabled' if enabled else 'disabled'}"
        )

        if not enabled:
            self.clear_cache()

    def clear_cache(self) -> None:
        """Clear the analysis result cache."""
        self._result_cache = {}
        self._logger.debug("Analysis result cache cleared")

    def _get_cache_key(self, analysis_type: str, params: Dict[str, Any]) -> str:
        # Convert params to a stable string representation
        param_str = json.dumps(params, sort_keys=True, default=str)
        return f"{analysis_type}:{param_str}"

    def _cache_result(self, analysis_type: str, params: Dict[str, Any], result: Any) -> None:
        if not self._cache_enabled:
            return

        key = self._get_cache_key(analysis_type, params)
        self._result_cache[key] = result
        self._logger.debug(f"Cached result for {analysis_type}")

    def _get_cached_result(self, analysis_type: str, params: Dict[str, Any]) -> Optional[Any]:
        if not self._cache_enabled:
            return None

        key = self._get_cache_key(analysis_type, params)
        result = self._result_cache.get(key)

        if result is not None:
            self._logger.debug(f"Using cached result for {analysis_type}")

        return result

    def classify_student(self, user_id: str) -> Optional[StudentDiagnosis]:
        """
        Diagnose a student, reusing an earlier diagnosis for the same hierarchy.

        Callers receive their own copy, so mutating the returned
        struggling-concept mapping leaves the cached diagnosis intact.

        Args:
            user_id: Student identifier

        Returns:
            Optional[StudentDiagnosis]: The diagnosis, or None without data
        """
        if not self._ensure_analyzers():
            return None

        params = {"user_id": str(user_id)}
        cached_result = self._get_cached_result("student_diagnosis", params)
        if cached_result is not None:
            return cached_result.model_copy(deep=True)

        self._logger.info(f"Classifying student {user_id}...")
        result = self._student_analyzer.classify_student(user_id)
        self._cache_result("student_diagnosis", params, result)
        return result.model_copy(deep=True)

    def summarize_students(self) -> Optional[Dict[StudentStatus, List[StudentSummary]]]:
        """
        Group every student by cohort status.

        Returns:
            Optional[Dict[StudentStatus, List[StudentSummary]]]: Buckets, or None without data
        """
        if not self._ensure_analyzers():
            return None
        return self._student_analyzer.group_by_status()

    def rank_concepts(self) -> Optional[List[ConceptDifficulty]]:
        """
        Rank concepts by difficulty index.

        Returns:
            Optional[List[ConceptDifficulty]]: Ranking, or None without data
        """
        if not self._ensure_analyzers():
            return None
        return self._concept_analyzer.rank_concepts()

    def rate_activities(self) -> Optional[List[ActivityEffectivenessSummary]]:
        """
        Rate activity types by effectiveness.

        Returns:
            Optional[List[ActivityEffectivenessSummary]]: Ratings, or None without data
        """
        if not self._ensure_analyzers():
            return None
        return self._activity_analyzer.rate_activities()
