"""
Concept analyzer for the course analytics system.

This module ranks concepts across the whole cohort by a difficulty index
that combines low accuracy with high learner effort.
"""

import logging
from typing import Dict, List, Optional

from config.settings import Settings, default_settings
from src.data.models.course_model import Course, UnitUser
from src.data.models.enums import DifficultyTier
from src.data.models.analysis_model import ConceptDifficulty
from src.utils.common_utils import calculate_average


class ConceptAnalyzer:
    """
    Analyzer for concept-level difficulty.

    Attempts are not recorded per concept. The attempts attributed to a
    concept observation are those of the learner's first activity (within
    the same unit record) that references the concept id.
    """

    def __init__(self, course: Course, settings: Optional[Settings] = None):
        """
        Initialize the concept analyzer.

        Args:
            course: Built course hierarchy
            settings: Optional settings with difficulty thresholds
        """
        self._logger = logging.getLogger(self.__class__.__name__)
        self._course = course
        self._settings = settings or default_settings

    def rank_concepts(self) -> List[ConceptDifficulty]:
        """
        Compute the difficulty index of every distinct concept id.

        Returns:
            List[ConceptDifficulty]: Concepts sorted by descending difficulty
        """
        names: Dict[str, Optional[str]] = {}
        accuracies: Dict[str, List[float]] = {}
        attempts: Dict[str, List[int]] = {}

        for _, user in self._course.iter_unit_users():
            for activity in user.activities:
                for element in activity.iter_elements():
                    concept_id = element.element_id
                    if concept_id not in names:
                        names[concept_id] = element.element_name
                        accuracies[concept_id] = []
                        attempts[concept_id] = []
                    if element.accuracy > 0:
                        accuracies[concept_id].append(element.accuracy)
                    first_attempts = self._first_activity_attempts(user, concept_id)
                    if first_attempts is not None:
                        attempts[concept_id].append(first_attempts)

        concepts = []
        for concept_id, name in names.items():
            avg_accuracy = calculate_average(accuracies[concept_id])
            avg_attempts = calculate_average(attempts[concept_id])
            index = self.difficulty_index(avg_accuracy, avg_attempts)
            concepts.append(
                ConceptDifficulty(
                    concept_id=concept_id,
                    name=name,
                    avg_accuracy=avg_accuracy,
                    avg_attempts=avg_attempts,
                    difficulty_index=index,
                    tier=self.difficulty_tier(index),
                )
            )

        concepts.sort(key=lambda c: c.difficulty_index, reverse=True)
        self._logger.debug(f"Ranked {len(concepts)} concepts")
        return concepts

    def difficulty_index(self, avg_accuracy: float, avg_attempts: float) -> float:
        """(100 - accuracy) scaled by effort, with a floor on the effort factor."""
        effort = max(avg_attempts, self._settings.MIN_DIFFICULTY_ATTEMPTS)
        return (100 - avg_accuracy) * effort

    def difficulty_tier(self, index: float) -> DifficultyTier:
        tiers = self._settings.DIFFICULTY_TIERS
        if index > tiers["HIGH"]:
            return DifficultyTier.HIGH
        if index > tiers["MEDIUM"]:
            return DifficultyTier.MEDIUM
        return DifficultyTier.LOW

    @staticmethod
    def _first_activity_attempts(user: UnitUser, concept_id: str) -> Optional[int]:
        for activity in user.activities:
            if activity.has_element(concept_id):
                return activity.total_attempts
        return None
