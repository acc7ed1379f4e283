"""
Rollup calculator for the course analytics system.

This module turns the grouping accumulators into the frozen Course hierarchy,
filling in every derived statistic bottom-up: learners, then units, then
chapters, then the course.
"""

import logging
from typing import List, Optional

from config.settings import Settings, default_settings
from src.data.builders.grouping_builder import (
    ActivityPerformanceNode,
    ChapterNode,
    GroupingResult,
    UnitNode,
    UserNode,
)
from src.data.models.course_model import (
    Activity,
    ActivityPerformance,
    CategoryPerformance,
    Chapter,
    ComponentPerformance,
    ConceptRef,
    Course,
    ElementPerformance,
    Unit,
    UnitUser,
)
from src.utils.common_utils import calculate_average, truncate_to_decimals


class RollupCalculator:
    """
    Computes averages and diagnostic flags over grouped learning data.

    Unit flags compare against a course-wide average unit time, so the
    calculator first derives that figure from the raw rows.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the rollup calculator.

        Args:
            settings: Optional settings with thresholds and precision
        """
        self._logger = logging.getLogger(self.__class__.__name__)
        self._settings = settings or default_settings

    def calculate(self, grouping: GroupingResult) -> Course:
        """
        Build the final course hierarchy from grouped accumulators.

        Args:
            grouping: Result of the grouping pass

        Returns:
            Course: Immutable hierarchy with all rollups filled in
        """
        decimals = self._settings.DEFAULT_DECIMALS
        course_avg_unit_time = self.course_average_unit_time(grouping)

        chapter_nodes = sorted(grouping.chapters.values(), key=lambda c: c.chapter_no)
        chapters = tuple(
            self._build_chapter(node, course_avg_unit_time) for node in chapter_nodes
        )

        learner_ids = {r.user_id for r in grouping.records if r.user_id is not None}

        unit_accuracies = [
            unit.avg_accuracy
            for chapter in chapters
            for unit in chapter.units
            if unit.avg_accuracy > 0
        ]
        user_records = [user for chapter in chapters for unit in chapter.units for user in unit.users]

        course = Course(
            chapters=chapters,
            no_of_learners=len(learner_ids),
            avg_accuracy=truncate_to_decimals(calculate_average(unit_accuracies), decimals),
            completion=truncate_to_decimals(
                calculate_average(u.completion for u in user_records), decimals
            ),
            total_time_spent_seconds=sum(u.total_time_spent_seconds for u in user_records),
        )

        self._logger.debug(
            f"Rolled up {len(chapters)} chapters, {len(user_records)} learner records"
        )
        return course

    def course_average_unit_time(self, grouping: GroupingResult) -> float:
        """
        Average unit time over every row that has both a user id and a time spent.

        Args:
            grouping: Result of the grouping pass

        Returns:
            float: Average seconds, 0.0 when no row qualifies
        """
        return calculate_average(
            r.time_spent_seconds
            for r in grouping.records
            if r.user_id is not None and r.has_time_spent
        )

    def _build_chapter(self, node: ChapterNode, course_avg_unit_time: float) -> Chapter:
        unit_nodes = sorted(node.units.values(), key=lambda u: u.unit_no)
        units = tuple(self._build_unit(u, course_avg_unit_time) for u in unit_nodes)

        # Every learner-in-unit observation counts once, whatever the unit size
        users = [user for unit in units for user in unit.users]

        return Chapter(
            chapter_id=node.chapter_id,
            chapter_no=node.chapter_no,
            chapter_name=node.chapter_name,
            avg_accuracy=calculate_average(u.accuracy for u in users),
            completion=calculate_average(u.completion for u in users),
            units=units,
        )

    def _build_unit(self, node: UnitNode, course_avg_unit_time: float) -> Unit:
        user_nodes = list(node.users.values())
        avg_time_per_user = (
            sum(u.time_spent_seconds for u in user_nodes) / len(user_nodes)
            if user_nodes
            else 0.0
        )

        users = tuple(self._build_user(u, avg_time_per_user) for u in user_nodes)
        avg_accuracy = calculate_average(u.accuracy for u in users if u.accuracy > 0)

        return Unit(
            unit_id=node.unit_id,
            unit_no=node.unit_no,
            unit_name=node.unit_name,
            no_of_learners=len(users),
            avg_accuracy=truncate_to_decimals(avg_accuracy, self._settings.DEFAULT_DECIMALS),
            avg_time_spent_seconds=avg_time_per_user,
            is_problematic=(
                avg_accuracy < self._settings.PROBLEMATIC_ACCURACY_THRESHOLD
                and avg_time_per_user > course_avg_unit_time
            ),
            activities=tuple(
                Activity(
                    activity_id=a.activity_id,
                    activity_name=a.activity_name,
                    concepts=tuple(
                        ConceptRef(
                            concept_id=concept_id,
                            concept_name=name,
                            concept_category=category,
                        )
                        for concept_id, (name, category) in a.concepts.items()
                    ),
                )
                for a in node.activities.values()
            ),
            users=users,
        )

    def _build_user(self, node: UserNode, avg_time_per_user: float) -> UnitUser:
        return UnitUser(
            user_id=node.user_id,
            user_name=node.user_name,
            completion=node.completion,
            accuracy=node.accuracy,
            total_time_spent_seconds=node.time_spent_seconds,
            is_struggling=(
                node.accuracy < self._settings.STRUGGLING_ACCURACY_THRESHOLD
                and node.time_spent_seconds > avg_time_per_user
            ),
            activities=tuple(
                self._build_activity_performance(p)
                for p in node.activity_performances.values()
            ),
        )

    def _build_activity_performance(self, node: ActivityPerformanceNode) -> ActivityPerformance:
        categories: List[CategoryPerformance] = []
        for category in node.categories.values():
            components = tuple(
                ComponentPerformance(
                    component_id=component.component_id,
                    component_name=component.component_name,
                    elements=tuple(
                        ElementPerformance(
                            element_id=el.element_id,
                            element_name=el.element_name,
                            accuracy=el.accuracy,
                        )
                        for el in component.elements.values()
                    ),
                )
                for component in category.components.values()
            )
            categories.append(
                CategoryPerformance(category=category.category, components=components)
            )

        return ActivityPerformance(
            activity_id=node.activity_id,
            activity_name=node.activity_name,
            accuracy=node.accuracy,
            total_attempts=node.total_attempts,
            performance_by_category=tuple(categories),
        )
