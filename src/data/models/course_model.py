"""
Course hierarchy models for the course analytics system.

This module defines the immutable output of the hierarchy builder:
Course -> Chapter -> Unit -> UnitUser -> ActivityPerformance ->
CategoryPerformance -> ComponentPerformance -> ElementPerformance.
Durations are held as seconds and exposed as "HH:MM:SS" computed fields.
"""

from typing import Iterator, Optional, Tuple, Union

from pydantic import computed_field

from src.data.models.base_model import FrozenModel
from src.utils.common_utils import format_seconds_to_duration

NO_DATA_MESSAGE = "No data found for the specified criteria."


class ElementPerformance(FrozenModel):
    """A single concept (element) observed for a learner within an activity."""

    element_id: str
    element_name: Optional[str] = None
    accuracy: float = 0.0


class ComponentPerformance(FrozenModel):
    """Parent concept grouping a set of elements."""

    component_id: Optional[str] = None
    component_name: Optional[str] = None
    elements: Tuple[ElementPerformance, ...] = ()


class CategoryPerformance(FrozenModel):
    """Concept category grouping a set of components."""

    category: Optional[str] = None
    components: Tuple[ComponentPerformance, ...] = ()


class ActivityPerformance(FrozenModel):
    """A learner's result on one activity of a unit."""

    activity_id: str
    activity_name: Optional[str] = None
    accuracy: float = 0.0
    total_attempts: int = 0
    performance_by_category: Tuple[CategoryPerformance, ...] = ()

    def iter_elements(self) -> Iterator[ElementPerformance]:
        """Yield every concept element observed in this activity."""
        for category in self.performance_by_category:
            for component in category.components:
                yield from component.elements

    def has_element(self, element_id: str) -> bool:
        return any(el.element_id == element_id for el in self.iter_elements())


class ConceptRef(FrozenModel):
    """Concept attached to an activity in the unit catalog."""

    concept_id: str
    concept_name: Optional[str] = None
    concept_category: Optional[str] = None


class Activity(FrozenModel):
    """Activity of a unit, independent of any learner."""

    activity_id: str
    activity_name: Optional[str] = None
    concepts: Tuple[ConceptRef, ...] = ()


class UnitUser(FrozenModel):
    """A learner's record within one unit."""

    user_id: str
    user_name: Optional[str] = None
    completion: float = 0.0
    accuracy: float = 0.0
    total_time_spent_seconds: int = 0
    is_struggling: bool = False
    activities: Tuple[ActivityPerformance, ...] = ()

    @computed_field
    @property
    def total_time_spent(self) -> str:
        return format_seconds_to_duration(self.total_time_spent_seconds)


class Unit(FrozenModel):
    """A unit of a chapter with its learners and rollups."""

    unit_id: str
    unit_no: Union[int, float] = 0
    unit_name: Optional[str] = None
    no_of_learners: int = 0
    avg_accuracy: float = 0.0
    avg_time_spent_seconds: float = 0.0
    is_problematic: bool = False
    activities: Tuple[Activity, ...] = ()
    users: Tuple[UnitUser, ...] = ()

    @computed_field
    @property
    def avg_time_spent(self) -> str:
        return format_seconds_to_duration(self.avg_time_spent_seconds)

    def find_user(self, user_id: str) -> Optional[UnitUser]:
        """
        Find a learner of this unit by id.

        Args:
            user_id: Learner identifier

        Returns:
            Optional[UnitUser]: The learner record or None
        """
        for user in self.users:
            if user.user_id == user_id:
                return user
        return None


class Chapter(FrozenModel):
    """A chapter of the course, units sorted by unit number."""

    chapter_id: str
    chapter_no: Union[int, float] = 0
    chapter_name: Optional[str] = None
    avg_accuracy: float = 0.0
    completion: float = 0.0
    units: Tuple[Unit, ...] = ()


class Course(FrozenModel):
    """
    Root of the built hierarchy.

    Chapters are sorted by chapter number; course-level figures aggregate
    every learner record of every unit.
    """

    chapters: Tuple[Chapter, ...] = ()
    no_of_learners: int = 0
    avg_accuracy: float = 0.0
    completion: float = 0.0
    total_time_spent_seconds: int = 0

    @computed_field
    @property
    def total_time_spent(self) -> str:
        return format_seconds_to_duration(self.total_time_spent_seconds)

    def iter_units(self) -> Iterator[Unit]:
        """Yield every unit in chapter order."""
        for chapter in self.chapters:
            yield from chapter.units

    def iter_unit_users(self) -> Iterator[Tuple[Unit, UnitUser]]:
        """Yield (unit, learner) pairs for every learner record in the course."""
        for unit in self.iter_units():
            for user in unit.users:
                yield unit, user


class NoDataResult(FrozenModel):
    """Sentinel returned instead of a Course when the input table is empty."""

    message: str = NO_DATA_MESSAGE


def is_no_data(result: Union[Course, NoDataResult]) -> bool:
    """Check whether a build produced the no-data sentinel."""
    return isinstance(result, NoDataResult)
