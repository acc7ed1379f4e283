"""
Analysis result models for the course analytics system.
Contains models for the outputs of the on-demand classifiers: student
diagnoses and cohort summaries, concept difficulty and activity effectiveness.
"""
from typing import Dict, Optional

from pydantic import computed_field

from .base_model import FrozenModel
from .enums import (
    LearningPattern,
    StudentStatus,
    ActivityEffectiveness,
    DifficultyTier,
    Severity,
)
from src.utils.common_utils import format_seconds_to_duration


class StudentDiagnosis(FrozenModel):
    """Learning pattern and struggling concepts of one student."""
    user_id: str
    learning_pattern: LearningPattern
    struggling_concepts: Dict[str, float] = {}  # concept name -> accuracy
    avg_accuracy: float = 0.0
    avg_attempts_per_activity: float = 0.0
    total_attempts: int = 0
    activity_count: int = 0

    @computed_field
    @property
    def description(self) -> str:
        return self.learning_pattern.description

    @computed_field
    @property
    def severity(self) -> Severity:
        return self.learning_pattern.severity


class StudentSummary(FrozenModel):
    """Cohort card of a student across every unit they appear in."""
    user_id: str
    user_name: Optional[str] = None
    avg_accuracy: float = 0.0
    total_time_spent_seconds: int = 0
    status: StudentStatus = StudentStatus.ON_TRACK

    @computed_field
    @property
    def total_time_spent(self) -> str:
        return format_seconds_to_duration(self.total_time_spent_seconds)


class ConceptDifficulty(FrozenModel):
    """Cohort-wide difficulty of a concept."""
    concept_id: str
    name: Optional[str] = None
    avg_accuracy: float = 0.0
    avg_attempts: float = 0.0
    difficulty_index: float = 0.0
    tier: DifficultyTier = DifficultyTier.LOW


class ActivityEffectivenessSummary(FrozenModel):
    """Cohort-wide effectiveness of an activity type."""
    activity_name: Optional[str] = None
    avg_accuracy: float = 0.0
    avg_attempts: float = 0.0
    effectiveness: ActivityEffectiveness = ActivityEffectiveness.EFFECTIVE

    @computed_field
    @property
    def severity(self) -> Severity:
        return self.effectiveness.severity
