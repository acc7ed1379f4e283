import pytest

from src.analyzers.student_analyzer import StudentAnalyzer
from src.data.builders import build_hierarchy
from src.data.models.enums import LearningPattern, Severity, StudentStatus


@pytest.fixture
def analyzer(sample_rows, settings):
    return StudentAnalyzer(build_hierarchy(sample_rows), settings)


def test_persistence_without_mastery(make_row, settings):
    # 20 activities, 320 attempts in total, unit accuracy 65
    rows = [
        make_row(
            UserId="u1",
            UnitAccuracyPercentage=65,
            ActivityTypeId=1,
            ActivityTypeName="Quiz",
            SequenceBuilderID=seq,
            ActivityTypeAccuracyPercentage=65,
            ActivityTotalAttempts=16,
        )
        for seq in range(20)
    ]
    diagnosis = StudentAnalyzer(build_hierarchy(rows), settings).classify_student("u1")

    assert diagnosis.activity_count == 20
    assert diagnosis.total_attempts == 320
    assert diagnosis.avg_attempts_per_activity == 16
    assert diagnosis.avg_accuracy == 65
    assert diagnosis.learning_pattern is LearningPattern.PERSISTENCE_WITHOUT_MASTERY
    assert diagnosis.severity is Severity.WARNING


def test_methodical_student(analyzer):
    diagnosis = analyzer.classify_student("u1")
    # Units 11 and 20: accuracies 40 and 90; Drill 20 attempts, Quiz 4
    assert diagnosis.avg_accuracy == 65
    assert diagnosis.total_attempts == 24
    assert diagnosis.avg_attempts_per_activity == 12
    assert diagnosis.learning_pattern is LearningPattern.METHODICAL
    assert diagnosis.description == "Student is progressing at a steady pace."
    assert diagnosis.severity is Severity.SUCCESS


def test_struggling_concepts(analyzer):
    diagnosis = analyzer.classify_student("u1")
    assert diagnosis.struggling_concepts == {"Carry": 30, "Borrow": 45}


def test_knowledge_gap_counts_missing_unit_accuracy(analyzer):
    diagnosis = analyzer.classify_student("u2")
    # Units 10 and 11: 70 and a missing (zero) accuracy
    assert diagnosis.avg_accuracy == 35
    assert diagnosis.avg_attempts_per_activity == 9
    assert diagnosis.learning_pattern is LearningPattern.KNOWLEDGE_GAP
    assert diagnosis.severity is Severity.DANGER
    assert diagnosis.struggling_concepts == {"Carry": 55}


def test_user_id_is_normalized(analyzer):
    assert analyzer.classify_student("u1") == analyzer.classify_student("u1")
    assert analyzer.find_unit_records("u1")[0].user_id == "u1"


def test_unknown_student(analyzer, caplog):
    with caplog.at_level("WARNING"):
        diagnosis = analyzer.classify_student("nobody")
    assert diagnosis.activity_count == 0
    assert diagnosis.avg_attempts_per_activity == 0
    assert diagnosis.struggling_concepts == {}
    assert diagnosis.learning_pattern is LearningPattern.KNOWLEDGE_GAP
    assert "nobody" in caplog.text


@pytest.mark.parametrize(
    "avg_attempts, avg_accuracy, expected",
    [
        (16, 69.9, LearningPattern.PERSISTENCE_WITHOUT_MASTERY),
        (16, 30, LearningPattern.PERSISTENCE_WITHOUT_MASTERY),
        (15, 30, LearningPattern.KNOWLEDGE_GAP),
        (16, 70, LearningPattern.METHODICAL),
        (2, 59.9, LearningPattern.KNOWLEDGE_GAP),
        (2, 60, LearningPattern.METHODICAL),
    ],
)
def test_pattern_precedence(analyzer, avg_attempts, avg_accuracy, expected):
    assert analyzer.classify_pattern(avg_attempts, avg_accuracy) is expected


def test_later_concept_accuracy_wins(make_row, settings):
    rows = [
        make_row(UserId="u1", ActivityTypeId=1, SequenceBuilderID=1,
                 ConceptId="a", ConceptName="Shared", ConceptAccuracyPercentage=20),
        make_row(UserId="u1", ActivityTypeId=1, SequenceBuilderID=2,
                 ConceptId="b", ConceptName="Shared", ConceptAccuracyPercentage=50),
    ]
    diagnosis = StudentAnalyzer(build_hierarchy(rows), settings).classify_student("u1")
    assert diagnosis.struggling_concepts == {"Shared": 50}


def test_student_summaries(analyzer):
    summaries = analyzer.summarize_students()
    assert [s.user_id for s in summaries] == ["u2", "u1"]

    ben, ann = summaries
    assert ben.avg_accuracy == 70
    assert ben.total_time_spent == "00:40:00"
    assert ben.status is StudentStatus.ON_TRACK

    assert ann.user_name == "Ann"
    assert ann.avg_accuracy == 65
    assert ann.total_time_spent_seconds == 4800
    assert ann.status is StudentStatus.STRUGGLING


def test_excelling_student(make_row, settings):
    course = build_hierarchy([make_row(UserId="u1", UnitAccuracyPercentage=95)])
    summary = StudentAnalyzer(course, settings).summarize_students()[0]
    assert summary.status is StudentStatus.EXCELLING


def test_group_by_status_has_every_bucket(analyzer):
    groups = analyzer.group_by_status()
    assert set(groups) == set(StudentStatus)
    assert [s.user_id for s in groups[StudentStatus.STRUGGLING]] == ["u1"]
    assert [s.user_id for s in groups[StudentStatus.ON_TRACK]] == ["u2"]
    assert groups[StudentStatus.EXCELLING] == []
