from src.data.models.record_model import FlatRecord


def test_aliases_and_id_normalization():
    record = FlatRecord.model_validate(
        {
            "ChapterId": 1,
            "ChapterNo": "2",
            "UnitId": 10.0,
            "UserId": 5.0,
            "UserFullName": "Ann",
            "UnitTimeSpent": "00:10:00",
            "SomethingElse": "ignored",
        }
    )
    assert record.chapter_id == "1"
    assert record.chapter_no == 2
    assert record.unit_id == "10"
    assert record.user_id == "5"
    assert record.user_name == "Ann"
    assert record.has_time_spent
    assert record.time_spent_seconds == 600


def test_missing_columns_mean_absent():
    record = FlatRecord.model_validate({"ChapterId": "c", "ConceptName": ""})
    assert record.unit_id is None
    assert record.concept_name is None
    assert record.chapter_no == 0
    assert not record.has_time_spent
    assert record.time_spent_seconds == 0
    assert record.activity_key is None


def test_activity_key_prefers_sequence_builder_id():
    assert FlatRecord(ActivityTypeId=1, SequenceBuilderID=200).activity_key == ("seq", "200")
    assert FlatRecord(ActivityTypeId=1).activity_key == ("type", "1")


def test_activity_key_spaces_do_not_overlap():
    by_type = FlatRecord(ActivityTypeId=3).activity_key
    by_sequence = FlatRecord(ActivityTypeId=5, SequenceBuilderID=3).activity_key
    assert by_type != by_sequence


def test_time_spent_presence_follows_cell_truthiness():
    assert FlatRecord(UnitTimeSpent={}).has_time_spent
    assert FlatRecord(UnitTimeSpent={}).time_spent_seconds == 0
    assert FlatRecord(UnitTimeSpent="00:00:00").has_time_spent
    assert not FlatRecord(UnitTimeSpent=0).has_time_spent
    assert not FlatRecord(UnitTimeSpent="").has_time_spent
    assert not FlatRecord(UnitTimeSpent=float("nan")).has_time_spent
    assert not FlatRecord().has_time_spent


def test_structured_time_spent():
    record = FlatRecord(UnitTimeSpent={"hours": 1, "minutes": 0, "seconds": 30})
    assert record.time_spent_seconds == 3630


def test_populate_by_field_name():
    record = FlatRecord(chapter_id=3, user_id="u1")
    assert record.chapter_id == "3"
    assert record.user_id == "u1"
