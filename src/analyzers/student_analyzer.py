"""
Student analyzer for the course analytics system.

This module provides the per-student diagnostic classifier (learning pattern
and struggling concepts) and the cohort summaries that group students into
struggling, excelling and on-track buckets. Both read an already built,
immutable Course hierarchy.
"""

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from config.settings import Settings, default_settings
from src.data.models.course_model import Course, UnitUser
from src.data.models.enums import LearningPattern, StudentStatus
from src.data.models.analysis_model import StudentDiagnosis, StudentSummary
from src.utils.common_utils import calculate_average


class StudentAnalyzer:
    """
    Analyzer for individual student performance.

    Diagnoses are computed on demand by scanning every unit of the course
    for the requested student.
    """

    def __init__(self, course: Course, settings: Optional[Settings] = None):
        """
        Initialize the student analyzer.

        Args:
            course: Built course hierarchy
            settings: Optional settings with classification thresholds
        """
        self._logger = logging.getLogger(self.__class__.__name__)
        self._course = course
        self._settings = settings or default_settings

    def find_unit_records(self, user_id: str) -> List[UnitUser]:
        """
        Collect the student's record in every unit they appear in.

        Args:
            user_id: Student identifier

        Returns:
            List[UnitUser]: Records in chapter/unit order
        """
        records = []
        for unit in self._course.iter_units():
            user = unit.find_user(user_id)
            if user is not None:
                records.append(user)
        return records

    def iter_concept_accuracies(self, user_id: str) -> Iterator[Tuple[str, float]]:
        """Yield (concept name, accuracy) for every element the student was assessed on."""
        for user in self.find_unit_records(user_id):
            for activity in user.activities:
                for element in activity.iter_elements():
                    yield element.element_name or element.element_id, element.accuracy

    def classify_student(self, user_id: str) -> StudentDiagnosis:
        """
        Diagnose a student's learning pattern and struggling concepts.

        Args:
            user_id: Student identifier

        Returns:
            StudentDiagnosis: Pattern, struggling concepts and the figures
            the pattern was derived from
        """
        user_id = str(user_id)
        records = self.find_unit_records(user_id)
        if not records:
            self._logger.warning(f"Student {user_id} not found in any unit")

        activities = [activity for user in records for activity in user.activities]
        total_attempts = sum(a.total_attempts for a in activities)
        activity_count = len(activities)
        avg_attempts = total_attempts / max(activity_count, 1)

        avg_accuracy = calculate_average(user.accuracy for user in records)

        # Same concept name seen again: the later accuracy wins
        threshold = self._settings.STRUGGLING_CONCEPT_THRESHOLD
        struggling: Dict[str, float] = dict(
            (name, accuracy)
            for name, accuracy in self.iter_concept_accuracies(user_id)
            if accuracy < threshold
        )

        return StudentDiagnosis(
            user_id=user_id,
            learning_pattern=self.classify_pattern(avg_attempts, avg_accuracy),
            struggling_concepts=struggling,
            avg_accuracy=avg_accuracy,
            avg_attempts_per_activity=avg_attempts,
            total_attempts=total_attempts,
            activity_count=activity_count,
        )

    def classify_pattern(self, avg_attempts: float, avg_accuracy: float) -> LearningPattern:
        """
        Classify a learning pattern; the first matching rule wins.

        Args:
            avg_attempts: Average attempts per activity
            avg_accuracy: Mean of the student's per-unit accuracies

        Returns:
            LearningPattern: The diagnosed pattern
        """
        s = self._settings
        if (
            avg_attempts > s.PERSISTENCE_ATTEMPTS_THRESHOLD
            and avg_accuracy < s.PERSISTENCE_ACCURACY_THRESHOLD
        ):
            return LearningPattern.PERSISTENCE_WITHOUT_MASTERY
        if avg_accuracy < s.KNOWLEDGE_GAP_ACCURACY_THRESHOLD:
            return LearningPattern.KNOWLEDGE_GAP
        return LearningPattern.METHODICAL

    def summarize_students(self) -> List[StudentSummary]:
        """
        Summarize every student across all of their units.

        Returns:
            List[StudentSummary]: One summary per student, in first-seen order
        """
        accuracies: Dict[str, List[float]] = {}
        times: Dict[str, int] = {}
        names: Dict[str, Optional[str]] = {}
        struggling: Dict[str, bool] = {}

        for _, user in self._course.iter_unit_users():
            if user.user_id not in names:
                names[user.user_id] = user.user_name
                accuracies[user.user_id] = []
                times[user.user_id] = 0
                struggling[user.user_id] = False
            if user.accuracy > 0:
                accuracies[user.user_id].append(user.accuracy)
            times[user.user_id] += user.total_time_spent_seconds
            if user.is_struggling:
                struggling[user.user_id] = True

        summaries = []
        for user_id, user_name in names.items():
            avg_accuracy = calculate_average(accuracies[user_id])
            if struggling[user_id]:
                status = StudentStatus.STRUGGLING
            elif avg_accuracy > self._settings.EXCELLING_ACCURACY_THRESHOLD:
                status = StudentStatus.EXCELLING
            else:
                status = StudentStatus.ON_TRACK

            summaries.append(
                StudentSummary(
                    user_id=user_id,
                    user_name=user_name,
                    avg_accuracy=avg_accuracy,
                    total_time_spent_seconds=times[user_id],
                    status=status,
                )
            )

        return summaries

    def group_by_status(self) -> Dict[StudentStatus, List[StudentSummary]]:
        """
        Bucket the student summaries by status.

        Returns:
            Dict[StudentStatus, List[StudentSummary]]: Every status is present,
            possibly with an empty list
        """
        groups: Dict[StudentStatus, List[StudentSummary]] = {
            status: [] for status in StudentStatus
        }
        for summary in self.summarize_students():
            groups[summary.status].append(summary)
        return groups
