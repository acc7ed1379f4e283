"""
Builders package for the course analytics system.

This package turns the flat learning-event table into the immutable course
hierarchy: a grouping pass followed by a bottom-up rollup.
"""

import logging
from typing import Iterable, Optional, Union

from config.settings import Settings, default_settings
from src.data.models.course_model import Course, NoDataResult

from .grouping_builder import GroupingBuilder, GroupingResult, RecordInput, get_or_create
from .rollup_calculator import RollupCalculator

logger = logging.getLogger(__name__)


def build_hierarchy(
    records: Optional[Iterable[RecordInput]], settings: Optional[Settings] = None
) -> Union[Course, NoDataResult]:
    """
    Build the course hierarchy from a flat table.

    The build is pure: the same input always yields an equal hierarchy.

    Args:
        records: Flat records or raw row dicts; None or empty means no data
        settings: Optional settings with thresholds and precision

    Returns:
        Union[Course, NoDataResult]: The hierarchy, or the no-data sentinel
        when the table is empty
    """
    rows = list(records) if records is not None else []
    if not rows:
        logger.warning("No flat records supplied; returning no-data result")
        return NoDataResult()

    settings = settings or default_settings
    grouping = GroupingBuilder(decimals=settings.DEFAULT_DECIMALS).fold(rows)
    course = RollupCalculator(settings).calculate(grouping)

    logger.info(
        f"Built hierarchy from {len(rows)} rows: {len(course.chapters)} chapters, "
        f"{course.no_of_learners} learners"
    )
    return course


__all__ = [
    "build_hierarchy",
    "GroupingBuilder",
    "GroupingResult",
    "RollupCalculator",
    "get_or_create",
]
