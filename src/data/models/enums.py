"""
Enumerations for the course analytics system.

This module defines the categorical outputs of the diagnostic classifiers.
Compatible with Pydantic models.
"""

from enum import Enum


class Severity(str, Enum):
    """How alarming a diagnostic outcome is."""

    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"


class LearningPattern(str, Enum):
    """Per-student diagnosis of the attempt/accuracy profile."""

    PERSISTENCE_WITHOUT_MASTERY = "Persistence without Mastery"
    KNOWLEDGE_GAP = "Knowledge Gap"
    METHODICAL = "Methodical"

    @property
    def description(self) -> str:
        return _PATTERN_DESCRIPTIONS[self]

    @property
    def severity(self) -> Severity:
        return _PATTERN_SEVERITIES[self]


_PATTERN_DESCRIPTIONS = {
    LearningPattern.PERSISTENCE_WITHOUT_MASTERY: (
        "High attempts without accuracy gains suggests guessing "
        "or a core misconception."
    ),
    LearningPattern.KNOWLEDGE_GAP: (
        "Low accuracy suggests a potential gap in foundational knowledge."
    ),
    LearningPattern.METHODICAL: "Student is progressing at a steady pace.",
}

_PATTERN_SEVERITIES = {
    LearningPattern.PERSISTENCE_WITHOUT_MASTERY: Severity.WARNING,
    LearningPattern.KNOWLEDGE_GAP: Severity.DANGER,
    LearningPattern.METHODICAL: Severity.SUCCESS,
}


class StudentStatus(str, Enum):
    """Cohort bucket a student falls into across all of their units."""

    STRUGGLING = "Struggling"
    EXCELLING = "Excelling"
    ON_TRACK = "On-Track"


class ActivityEffectiveness(str, Enum):
    """Effectiveness rating of an activity type across the cohort."""

    NEEDS_REVIEW = "Needs Review"
    MODERATE = "Moderate"
    EFFECTIVE = "Effective"

    @property
    def severity(self) -> Severity:
        if self is ActivityEffectiveness.NEEDS_REVIEW:
            return Severity.DANGER
        if self is ActivityEffectiveness.MODERATE:
            return Severity.WARNING
        return Severity.SUCCESS


class DifficultyTier(str, Enum):
    """Banding of the concept difficulty index."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
