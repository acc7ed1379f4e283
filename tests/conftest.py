import pytest

from config.settings import Settings


def _row(**fields):
    row = {
        "ChapterId": 1,
        "ChapterNo": 1,
        "ChapterName": "Numbers",
        "UnitId": 10,
        "UnitNo": 1,
        "UnitName": "Counting",
    }
    row.update(fields)
    return row


@pytest.fixture
def make_row():
    """Factory for flat-table rows; defaults to chapter 1 / unit 10."""
    return _row


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def sample_rows():
    """
    Two chapters listed out of order, three units, two learners.

    Unit 11 is problematic and u1 struggles in it; u1 has a second row in
    unit 11 that adds a concept but must not overwrite unit-level fields.
    """
    fractions = dict(ChapterId=2, ChapterNo=2, ChapterName="Fractions")
    adding = dict(UnitId=11, UnitNo=2, UnitName="Adding")
    return [
        _row(
            **fractions,
            UnitId=20, UnitNo=1, UnitName="Halves",
            UserId="u1", UserFullName="Ann",
            UnitCompletionPercentage=100, UnitAccuracyPercentage=90,
            UnitTimeSpent="00:20:00",
            ActivityTypeId=1, ActivityTypeName="Quiz", SequenceBuilderID=100,
            ActivityTypeAccuracyPercentage=90, ActivityTotalAttempts=4,
            ConceptId="c1", ConceptName="Half", ConceptCategory="Number",
            ConceptParentId="p1", ConceptParentName="Fraction basics",
            ConceptAccuracyPercentage=95,
        ),
        _row(
            **adding,
            UserId="u1", UserFullName="Ann",
            UnitCompletionPercentage=50, UnitAccuracyPercentage=40,
            UnitTimeSpent="01:00:00",
            ActivityTypeId=2, ActivityTypeName="Drill", SequenceBuilderID=200,
            ActivityTypeAccuracyPercentage=40, ActivityTotalAttempts=20,
            ConceptId="c2", ConceptName="Carry", ConceptCategory="Number",
            ConceptParentId="p2", ConceptParentName="Addition",
            ConceptAccuracyPercentage=30,
        ),
        _row(
            UserId="u2", UserFullName="Ben",
            UnitCompletionPercentage=80, UnitAccuracyPercentage=70,
            UnitTimeSpent="00:30:00",
            ActivityTypeId=1, ActivityTypeName="Quiz", SequenceBuilderID=101,
            ActivityTypeAccuracyPercentage=70, ActivityTotalAttempts=6,
            ConceptId="c3", ConceptName="Count", ConceptCategory="Number",
            ConceptParentId="p3", ConceptParentName="Counting",
            ConceptAccuracyPercentage=70,
        ),
        _row(
            **adding,
            UserId="u2", UserFullName="Ben",
            UnitCompletionPercentage=100,
            UnitTimeSpent="00:10:00",
            ActivityTypeId=2, ActivityTypeName="Drill", SequenceBuilderID=200,
            ActivityTypeAccuracyPercentage=60, ActivityTotalAttempts=12,
            ConceptId="c2", ConceptName="Carry", ConceptCategory="Number",
            ConceptParentId="p2", ConceptParentName="Addition",
            ConceptAccuracyPercentage=55,
        ),
        _row(
            **adding,
            UserId="u1", UserFullName="Ann",
            UnitCompletionPercentage=10, UnitAccuracyPercentage=99,
            ActivityTypeId=2, ActivityTypeName="Drill", SequenceBuilderID=200,
            ActivityTypeAccuracyPercentage=99, ActivityTotalAttempts=1,
            ConceptId="c4", ConceptName="Borrow", ConceptCategory="Number",
            ConceptParentId="p2", ConceptParentName="Addition",
            ConceptAccuracyPercentage=45,
        ),
    ]
