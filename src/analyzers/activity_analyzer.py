"""
Activity analyzer for the course analytics system.

This module rates each activity type across the whole cohort so that
teaching methods that do not work for the cohort stand out.
"""

import logging
from typing import Dict, List, Optional

from config.settings import Settings, default_settings
from src.data.models.course_model import Course
from src.data.models.enums import ActivityEffectiveness
from src.data.models.analysis_model import ActivityEffectivenessSummary
from src.utils.common_utils import calculate_average


class ActivityAnalyzer:
    """Analyzer for activity-type effectiveness."""

    def __init__(self, course: Course, settings: Optional[Settings] = None):
        """
        Initialize the activity analyzer.

        Args:
            course: Built course hierarchy
            settings: Optional settings with effectiveness thresholds
        """
        self._logger = logging.getLogger(self.__class__.__name__)
        self._course = course
        self._settings = settings or default_settings

    def rate_activities(self) -> List[ActivityEffectivenessSummary]:
        """
        Rate every distinct activity name across all learners.

        Returns:
            List[ActivityEffectivenessSummary]: One rating per activity name,
            in first-seen order
        """
        accuracies: Dict[Optional[str], List[float]] = {}
        attempts: Dict[Optional[str], List[int]] = {}

        for _, user in self._course.iter_unit_users():
            for activity in user.activities:
                name = activity.activity_name
                accuracies.setdefault(name, []).append(activity.accuracy)
                attempts.setdefault(name, []).append(activity.total_attempts)

        results = []
        for name in accuracies:
            avg_accuracy = calculate_average(accuracies[name])
            avg_attempts = calculate_average(attempts[name])
            results.append(
                ActivityEffectivenessSummary(
                    activity_name=name,
                    avg_accuracy=avg_accuracy,
                    avg_attempts=avg_attempts,
                    effectiveness=self.rate(avg_accuracy, avg_attempts),
                )
            )

        return results

    def rate(self, avg_accuracy: float, avg_attempts: float) -> ActivityEffectiveness:
        thresholds = self._settings.EFFECTIVENESS_THRESHOLDS
        if (
            avg_accuracy < thresholds["REVIEW_ACCURACY"]
            and avg_attempts > thresholds["REVIEW_ATTEMPTS"]
        ):
            return ActivityEffectiveness.NEEDS_REVIEW
        if avg_accuracy < thresholds["MODERATE_ACCURACY"]:
            return ActivityEffectiveness.MODERATE
        return ActivityEffectiveness.EFFECTIVE
