"""
Tabular export utilities for the course analytics system.

This module flattens the course hierarchy and the analyzer outputs into
pandas DataFrames, one row per entity, ready to be saved as CSV or handed
to any tabular tool.
"""

import logging
from typing import Dict, List

import pandas as pd

from src.data.models.course_model import Course
from src.data.models.analysis_model import ConceptDifficulty, ActivityEffectivenessSummary
from src.utils.common_utils import truncate_to_decimals

logger = logging.getLogger(__name__)

UNIT_COLUMNS = [
    "chapter_no", "chapter_name", "unit_id", "unit_no", "unit_name",
    "no_of_learners", "avg_accuracy", "avg_time_spent", "is_problematic",
]
LEARNER_COLUMNS = [
    "chapter_no", "unit_id", "unit_no", "user_id", "user_name",
    "completion", "accuracy", "total_time_spent", "is_struggling",
]
ACTIVITY_COLUMNS = [
    "unit_id", "user_id", "activity_id", "activity_name", "accuracy", "total_attempts",
]
ELEMENT_COLUMNS = [
    "unit_id", "user_id", "activity_id", "category",
    "component_id", "component_name", "element_id", "element_name", "accuracy",
]


def units_frame(course: Course) -> pd.DataFrame:
    """
    One row per unit, in chapter/unit order.

    Args:
        course: Built course hierarchy

    Returns:
        pd.DataFrame: Unit rollups
    """
    rows = [
        {
            "chapter_no": chapter.chapter_no,
            "chapter_name": chapter.chapter_name,
            "unit_id": unit.unit_id,
            "unit_no": unit.unit_no,
            "unit_name": unit.unit_name,
            "no_of_learners": unit.no_of_learners,
            "avg_accuracy": unit.avg_accuracy,
            "avg_time_spent": unit.avg_time_spent,
            "is_problematic": unit.is_problematic,
        }
        for chapter in course.chapters
        for unit in chapter.units
    ]
    return pd.DataFrame(rows, columns=UNIT_COLUMNS)


def learners_frame(course: Course) -> pd.DataFrame:
    """One row per learner-in-unit record."""
    rows = [
        {
            "chapter_no": chapter.chapter_no,
            "unit_id": unit.unit_id,
            "unit_no": unit.unit_no,
            "user_id": user.user_id,
            "user_name": user.user_name,
            "completion": user.completion,
            "accuracy": user.accuracy,
            "total_time_spent": user.total_time_spent,
            "is_struggling": user.is_struggling,
        }
        for chapter in course.chapters
        for unit in chapter.units
        for user in unit.users
    ]
    return pd.DataFrame(rows, columns=LEARNER_COLUMNS)


def activities_frame(course: Course) -> pd.DataFrame:
    rows = [
        {
            "unit_id": unit.unit_id,
            "user_id": user.user_id,
            "activity_id": activity.activity_id,
            "activity_name": activity.activity_name,
            "accuracy": activity.accuracy,
            "total_attempts": activity.total_attempts,
        }
        for unit, user in course.iter_unit_users()
        for activity in user.activities
    ]
    return pd.DataFrame(rows, columns=ACTIVITY_COLUMNS)


def elements_frame(course: Course) -> pd.DataFrame:
    """One row per concept element observed in a learner's activity."""
    rows = []
    for unit, user in course.iter_unit_users():
        for activity in user.activities:
            for category in activity.performance_by_category:
                for component in category.components:
                    for element in component.elements:
                        rows.append(
                            {
                                "unit_id": unit.unit_id,
                                "user_id": user.user_id,
                                "activity_id": activity.activity_id,
                                "category": category.category,
                                "component_id": component.component_id,
                                "component_name": component.component_name,
                                "element_id": element.element_id,
                                "element_name": element.element_name,
                                "accuracy": element.accuracy,
                            }
                        )
    return pd.DataFrame(rows, columns=ELEMENT_COLUMNS)


def hierarchy_to_frames(course: Course) -> Dict[str, pd.DataFrame]:
    """
    Flatten the whole hierarchy into named tables.

    Args:
        course: Built course hierarchy

    Returns:
        Dict[str, pd.DataFrame]: "units", "learners", "activities" and "elements"
    """
    frames = {
        "units": units_frame(course),
        "learners": learners_frame(course),
        "activities": activities_frame(course),
        "elements": elements_frame(course),
    }
    logger.debug(
        "Flattened hierarchy: "
        + ", ".join(f"{name}={len(frame)}" for name, frame in frames.items())
    )
    return frames


def concept_ranking_frame(
    concepts: List[ConceptDifficulty], decimals: int = 0
) -> pd.DataFrame:
    """
    Concept ranking as a table, difficulty index truncated for display.

    Args:
        concepts: Output of ConceptAnalyzer.rank_concepts()
        decimals: Digits kept for the difficulty index

    Returns:
        pd.DataFrame: One row per concept, ranking order preserved
    """
    columns = ["concept_id", "name", "avg_accuracy", "avg_attempts", "difficulty_index", "tier"]
    rows = [
        {
            "concept_id": c.concept_id,
            "name": c.name,
            "avg_accuracy": truncate_to_decimals(c.avg_accuracy, 1),
            "avg_attempts": truncate_to_decimals(c.avg_attempts, 1),
            "difficulty_index": truncate_to_decimals(c.difficulty_index, decimals),
            "tier": c.tier.value,
        }
        for c in concepts
    ]
    return pd.DataFrame(rows, columns=columns)


def activity_effectiveness_frame(
    activities: List[ActivityEffectivenessSummary],
) -> pd.DataFrame:
    columns = ["activity_name", "avg_accuracy", "avg_attempts", "effectiveness"]
    rows = [
        {
            "activity_name": a.activity_name,
            "avg_accuracy": truncate_to_decimals(a.avg_accuracy, 1),
            "avg_attempts": truncate_to_decimals(a.avg_attempts, 1),
            "effectiveness": a.effectiveness.value,
        }
        for a in activities
    ]
    return pd.DataFrame(rows, columns=columns)
