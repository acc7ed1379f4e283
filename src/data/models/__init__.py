"""
Models package for the course analytics system.

This package contains all the data models used for representing the flat
learning-event table, the built course hierarchy and the analysis results.
"""

# Re-export enums
from .enums import (
    Severity,
    LearningPattern,
    StudentStatus,
    ActivityEffectiveness,
    DifficultyTier,
)

# Re-export base models
from .base_model import FrozenModel

# Re-export entity models
from .record_model import FlatRecord
from .course_model import (
    NO_DATA_MESSAGE,
    Course,
    Chapter,
    Unit,
    UnitUser,
    Activity,
    ConceptRef,
    ActivityPerformance,
    CategoryPerformance,
    ComponentPerformance,
    ElementPerformance,
    NoDataResult,
    is_no_data,
)
from .analysis_model import (
    StudentDiagnosis,
    StudentSummary,
    ConceptDifficulty,
    ActivityEffectivenessSummary,
)

# Define all models for easy access
__all__ = [
    # Enums
    "Severity",
    "LearningPattern",
    "StudentStatus",
    "ActivityEffectiveness",
    "DifficultyTier",
    # Base models
    "FrozenModel",
    # Input
    "FlatRecord",
    # Hierarchy
    "NO_DATA_MESSAGE",
    "Course",
    "Chapter",
    "Unit",
    "UnitUser",
    "Activity",
    "ConceptRef",
    "ActivityPerformance",
    "CategoryPerformance",
    "ComponentPerformance",
    "ElementPerformance",
    "NoDataResult",
    "is_no_data",
    # Analysis results
    "StudentDiagnosis",
    "StudentSummary",
    "ConceptDifficulty",
    "ActivityEffectivenessSummary",
]
