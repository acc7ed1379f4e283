"""
Flat record model for the course analytics system.

A FlatRecord is one row of the wide learning-event table. Any column may be
missing; a missing column means the row carries no fact at that granularity.
Identifiers are normalized to strings here, while the numeric measures are
kept raw and parsed leniently by the builders.
"""

from typing import Any, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.utils.common_utils import parse_time_object_to_seconds
from src.utils.safe_ops import safe_id, safe_number, safe_str, is_blank


class FlatRecord(BaseModel):
    """One observed learning event at some chapter/unit/activity/concept/user grain."""

    # Chapter
    chapter_id: Optional[str] = Field(default=None, alias="ChapterId")
    chapter_no: Union[int, float] = Field(default=0, alias="ChapterNo")
    chapter_name: Optional[str] = Field(default=None, alias="ChapterName")

    # Unit
    unit_id: Optional[str] = Field(default=None, alias="UnitId")
    unit_no: Union[int, float] = Field(default=0, alias="UnitNo")
    unit_name: Optional[str] = Field(default=None, alias="UnitName")

    # Activity
    activity_type_id: Optional[str] = Field(default=None, alias="ActivityTypeId")
    activity_type_name: Optional[str] = Field(default=None, alias="ActivityTypeName")
    sequence_builder_id: Optional[str] = Field(default=None, alias="SequenceBuilderID")

    # Concept
    concept_id: Optional[str] = Field(default=None, alias="ConceptId")
    concept_name: Optional[str] = Field(default=None, alias="ConceptName")
    concept_category: Optional[str] = Field(default=None, alias="ConceptCategory")
    concept_parent_id: Optional[str] = Field(default=None, alias="ConceptParentId")
    concept_parent_name: Optional[str] = Field(default=None, alias="ConceptParentName")

    # User
    user_id: Optional[str] = Field(default=None, alias="UserId")
    user_name: Optional[str] = Field(default=None, alias="UserFullName")

    # Measures, parsed leniently downstream
    unit_completion: Any = Field(default=None, alias="UnitCompletionPercentage")
    unit_accuracy: Any = Field(default=None, alias="UnitAccuracyPercentage")
    unit_time_spent: Any = Field(default=None, alias="UnitTimeSpent")
    activity_accuracy: Any = Field(default=None, alias="ActivityTypeAccuracyPercentage")
    activity_total_attempts: Any = Field(default=None, alias="ActivityTotalAttempts")
    concept_accuracy: Any = Field(default=None, alias="ConceptAccuracyPercentage")

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    @field_validator(
        "chapter_id",
        "unit_id",
        "activity_type_id",
        "sequence_builder_id",
        "concept_id",
        "concept_parent_id",
        "user_id",
        mode="before",
    )
    @classmethod
    def _normalize_id(cls, value: Any) -> Optional[str]:
        return safe_id(value)

    @field_validator("chapter_no", "unit_no", mode="before")
    @classmethod
    def _normalize_number(cls, value: Any) -> Union[int, float]:
        return safe_number(value)

    @field_validator(
        "chapter_name",
        "unit_name",
        "activity_type_name",
        "concept_name",
        "concept_category",
        "concept_parent_name",
        "user_name",
        mode="before",
    )
    @classmethod
    def _normalize_text(cls, value: Any) -> Optional[str]:
        if is_blank(value):
            return None
        return safe_str(value)

    @property
    def activity_key(self) -> Optional[Tuple[str, str]]:
        """
        Key of the activity within its unit.

        Sequence-builder ids and activity type ids are separate id spaces, so
        the key is tagged with the kind of id it carries.
        """
        if self.sequence_builder_id is not None:
            return ("seq", self.sequence_builder_id)
        if self.activity_type_id is not None:
            return ("type", self.activity_type_id)
        return None

    @property
    def has_time_spent(self) -> bool:
        """
        Whether the row records a unit time-spent value.

        A structured time object counts even when empty; a zero, blank or
        missing cell does not.
        """
        value = self.unit_time_spent
        if isinstance(value, Mapping):
            return True
        if is_blank(value):
            return False
        return bool(value)

    @property
    def time_spent_seconds(self) -> int:
        return parse_time_object_to_seconds(self.unit_time_spent)
