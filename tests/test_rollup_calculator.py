import pytest

from config.settings import Settings
from src.data.builders import GroupingBuilder, RollupCalculator, build_hierarchy


def test_course_average_unit_time_uses_rows_with_user_and_time(sample_rows, settings):
    grouping = GroupingBuilder().fold(sample_rows)
    # 20 + 60 + 30 + 10 minutes over four timed rows
    assert RollupCalculator(settings).course_average_unit_time(grouping) == 1800


def test_unit_rollups(sample_rows):
    course = build_hierarchy(sample_rows)
    counting, adding = course.chapters[0].units

    assert counting.no_of_learners == 1
    assert counting.avg_accuracy == 70
    assert counting.avg_time_spent == "00:30:00"
    assert not counting.is_problematic

    assert adding.no_of_learners == 2
    # Ben's missing accuracy is left out of the unit average
    assert adding.avg_accuracy == 40
    assert adding.avg_time_spent_seconds == 2100
    assert adding.avg_time_spent == "00:35:00"
    assert adding.is_problematic


def test_struggling_learner_flag(sample_rows):
    adding = build_hierarchy(sample_rows).chapters[0].units[1]
    assert adding.find_user("u1").is_struggling
    # Zero accuracy, but below the unit's average time
    assert not adding.find_user("u2").is_struggling


def test_chapter_rollups_include_every_learner_record(sample_rows):
    numbers, fractions = build_hierarchy(sample_rows).chapters
    assert numbers.avg_accuracy == pytest.approx(110 / 3)
    assert numbers.completion == pytest.approx(230 / 3)
    assert fractions.avg_accuracy == 90
    assert fractions.completion == 100


def test_course_rollups(sample_rows):
    course = build_hierarchy(sample_rows)
    assert course.no_of_learners == 2
    # Mean of unit averages 70, 40 and 90, truncated
    assert course.avg_accuracy == 66.66
    assert course.completion == 82.5
    assert course.total_time_spent_seconds == 7200
    assert course.total_time_spent == "02:00:00"


def test_struggling_against_unit_average(make_row):
    course = build_hierarchy(
        [
            make_row(UserId="u1", UnitAccuracyPercentage=30, UnitTimeSpent="02:00:00"),
            make_row(UserId="u1", UnitAccuracyPercentage=95, UnitTimeSpent="00:01:00"),
            make_row(UserId="u2", UnitAccuracyPercentage=90, UnitTimeSpent="00:30:00"),
        ]
    )
    unit = course.chapters[0].units[0]
    assert unit.avg_time_spent == "01:15:00"
    assert unit.find_user("u1").is_struggling
    assert not unit.find_user("u2").is_struggling


def test_single_learner_is_never_slower_than_their_unit(make_row):
    course = build_hierarchy(
        [make_row(UserId="u1", UnitAccuracyPercentage=30, UnitTimeSpent="02:00:00")]
    )
    assert not course.chapters[0].units[0].users[0].is_struggling


def test_unit_with_no_accuracies_has_zero_average(make_row):
    course = build_hierarchy([make_row(UserId="u1"), make_row(UserId="u2")])
    unit = course.chapters[0].units[0]
    assert unit.avg_accuracy == 0
    # No timed rows: unit time equals the course average, so not problematic
    assert not unit.is_problematic
    assert course.avg_accuracy == 0


def test_thresholds_come_from_settings(make_row):
    rows = [
        make_row(UserId="u1", UnitAccuracyPercentage=65, UnitTimeSpent="01:00:00"),
        make_row(UnitId=11, UnitNo=2, UserId="u2", UnitAccuracyPercentage=65, UnitTimeSpent="00:10:00"),
    ]
    assert not build_hierarchy(rows).chapters[0].units[0].is_problematic

    settings = Settings()
    settings.PROBLEMATIC_ACCURACY_THRESHOLD = 70.0
    assert build_hierarchy(rows, settings).chapters[0].units[0].is_problematic


def test_course_average_unit_time_skips_zero_but_keeps_empty_time_objects(make_row, settings):
    rows = [
        make_row(UserId="u1", UnitTimeSpent="01:00:00"),
        make_row(UserId="u2", UnitTimeSpent=0),
        make_row(UserId="u3", UnitTimeSpent={}),
        make_row(UserId="u4", UnitTimeSpent=""),
    ]
    grouping = GroupingBuilder().fold(rows)
    # One hour spread over the string row and the empty time object
    assert RollupCalculator(settings).course_average_unit_time(grouping) == 1800
