"""
Grouping builder for the course analytics system.

This module folds the flat learning-event table into nested keyed
accumulators (chapter -> unit -> activity, chapter -> unit -> user ->
activity performance -> category -> component -> element) in a single pass.
The accumulators are mutable and private to the build; the rollup calculator
copies them into the frozen hierarchy models.

Every level follows insert-if-absent semantics: an entity is created from
the first row that introduces its id at that nesting path, and later rows
with the same id can only add children to it.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Tuple, TypeVar, Union

from src.data.models.record_model import FlatRecord
from src.utils.common_utils import truncate_to_decimals
from src.utils.safe_ops import safe_float, safe_int

K = TypeVar("K")
V = TypeVar("V")

RecordInput = Union[FlatRecord, Dict]


def get_or_create(mapping: Dict[K, V], key: K, factory: Callable[[], V]) -> V:
    """
    Fetch the node stored under key, creating it first if absent.

    Existing nodes are returned untouched; the factory only runs on first sight.

    Args:
        mapping: Keyed accumulator
        key: Entity id
        factory: Builds the node for a key seen for the first time

    Returns:
        The stored node
    """
    node = mapping.get(key)
    if node is None:
        node = factory()
        mapping[key] = node
    return node


class ElementNode:
    def __init__(self, element_id: str, element_name: Optional[str], accuracy: float):
        self.element_id = element_id
        self.element_name = element_name
        self.accuracy = accuracy


class ComponentNode:
    def __init__(self, component_id: Optional[str], component_name: Optional[str]):
        self.component_id = component_id
        self.component_name = component_name
        self.elements: Dict[str, ElementNode] = {}


class CategoryNode:
    def __init__(self, category: Optional[str]):
        self.category = category
        self.components: Dict[Optional[str], ComponentNode] = {}


class ActivityPerformanceNode:
    """A learner's performance on one activity, with its concept breakdown."""

    def __init__(
        self,
        activity_id: str,
        activity_name: Optional[str],
        accuracy: float,
        total_attempts: int,
    ):
        self.activity_id = activity_id
        self.activity_name = activity_name
        self.accuracy = accuracy
        self.total_attempts = total_attempts
        self.categories: Dict[Optional[str], CategoryNode] = {}


class UserNode:
    """A learner within a unit; unit-level measures come from the first row seen."""

    def __init__(
        self,
        user_id: str,
        user_name: Optional[str],
        completion: float,
        accuracy: float,
        time_spent_seconds: int,
    ):
        self.user_id = user_id
        self.user_name = user_name
        self.completion = completion
        self.accuracy = accuracy
        self.time_spent_seconds = time_spent_seconds
        self.activity_performances: Dict[str, ActivityPerformanceNode] = {}


class ActivityNode:
    def __init__(self, activity_id: str, activity_name: Optional[str]):
        self.activity_id = activity_id
        self.activity_name = activity_name
        # concept id -> (name, category)
        self.concepts: Dict[str, tuple] = {}


class UnitNode:
    def __init__(self, unit_id: str, unit_no, unit_name: Optional[str]):
        self.unit_id = unit_id
        self.unit_no = unit_no
        self.unit_name = unit_name
        self.activities: Dict[Tuple[str, str], ActivityNode] = {}
        self.users: Dict[str, UserNode] = {}


class ChapterNode:
    def __init__(self, chapter_id: str, chapter_no, chapter_name: Optional[str]):
        self.chapter_id = chapter_id
        self.chapter_no = chapter_no
        self.chapter_name = chapter_name
        self.units: Dict[str, UnitNode] = {}


class GroupingResult:
    """
    Output of the grouping pass.

    Attributes:
        chapters: Chapter accumulators keyed by chapter id, in first-seen order
        records: The validated input rows, in input order
    """

    def __init__(self, chapters: Dict[str, ChapterNode], records: List[FlatRecord]):
        self.chapters = chapters
        self.records = records


class GroupingBuilder:
    """
    Folds flat records into keyed accumulators.

    A row descends chapter -> unit -> activity/user -> concept and stops at
    the first level whose id it lacks. One row may introduce entities at
    several levels at once.
    """

    def __init__(self, decimals: int = 2):
        """
        Initialize the grouping builder.

        Args:
            decimals: Digits kept when truncating activity and concept accuracy
        """
        self._logger = logging.getLogger(self.__class__.__name__)
        self._decimals = decimals
        self._chapters: Dict[str, ChapterNode] = {}
        self._records: List[FlatRecord] = []

    def fold(self, records: Iterable[RecordInput]) -> GroupingResult:
        """
        Fold every record, in input order, into the accumulators.

        Args:
            records: Flat records or raw row dicts keyed by column name

        Returns:
            GroupingResult: The populated accumulators
        """
        skipped = 0
        for raw in records:
            record = self._to_record(raw)
            self._records.append(record)
            if not self.add(record):
                skipped += 1

        self._logger.debug(
            f"Grouped {len(self._records)} rows into {len(self._chapters)} chapters "
            f"({skipped} rows stopped above unit level)"
        )
        return GroupingResult(self._chapters, self._records)

    def add(self, record: FlatRecord) -> bool:
        """
        Fold a single record.

        Args:
            record: Validated flat record

        Returns:
            bool: True if the row reached unit level
        """
        if record.chapter_id is None:
            return False

        chapter = get_or_create(
            self._chapters,
            record.chapter_id,
            lambda: ChapterNode(
                record.chapter_id, record.chapter_no, record.chapter_name
            ),
        )

        if record.unit_id is None:
            return False

        unit = get_or_create(
            chapter.units,
            record.unit_id,
            lambda: UnitNode(record.unit_id, record.unit_no, record.unit_name),
        )

        activity = self._add_activity(unit, record)

        if record.user_id is not None:
            user = get_or_create(
                unit.users,
                record.user_id,
                lambda: UserNode(
                    record.user_id,
                    record.user_name,
                    completion=safe_float(record.unit_completion),
                    accuracy=safe_float(record.unit_accuracy),
                    time_spent_seconds=record.time_spent_seconds,
                ),
            )
            if activity is not None:
                self._add_activity_performance(user, activity, record)

        return True

    def _to_record(self, raw: RecordInput) -> FlatRecord:
        if isinstance(raw, FlatRecord):
            return raw
        return FlatRecord.model_validate(raw)

    def _add_activity(self, unit: UnitNode, record: FlatRecord) -> Optional[ActivityNode]:
        """Find or create the unit's activity for this row and attach its concept."""
        key = record.activity_key
        if key is None:
            return None

        activity = unit.activities.get(key)
        if activity is None:
            if record.activity_type_id is None:
                return None
            activity = ActivityNode(
                f"{unit.unit_id}-{record.activity_type_id}-{record.sequence_builder_id}",
                record.activity_type_name,
            )
            unit.activities[key] = activity

        if record.concept_id is not None and record.concept_id not in activity.concepts:
            activity.concepts[record.concept_id] = (
                record.concept_name,
                record.concept_category,
            )

        return activity

    def _add_activity_performance(
        self, user: UserNode, activity: ActivityNode, record: FlatRecord
    ) -> None:
        """Attach the (user, activity) performance and its concept breakdown."""
        performance = get_or_create(
            user.activity_performances,
            activity.activity_id,
            lambda: ActivityPerformanceNode(
                activity.activity_id,
                activity.activity_name,
                accuracy=truncate_to_decimals(record.activity_accuracy, self._decimals),
                total_attempts=safe_int(record.activity_total_attempts),
            ),
        )

        if record.concept_id is None:
            return

        category = get_or_create(
            performance.categories,
            record.concept_category,
            lambda: CategoryNode(record.concept_category),
        )
        component = get_or_create(
            category.components,
            record.concept_parent_id,
            lambda: ComponentNode(record.concept_parent_id, record.concept_parent_name),
        )
        get_or_create(
            component.elements,
            record.concept_id,
            lambda: ElementNode(
                record.concept_id,
                record.concept_name,
                truncate_to_decimals(record.concept_accuracy, self._decimals),
            ),
        )
