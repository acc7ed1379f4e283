import json

import pandas as pd
import pytest

from config.settings import Settings
from src.data.repositories import RecordRepository


def _write_json(path, rows):
    path.write_text(json.dumps(rows), encoding="utf-8")
    return path


def test_load_json(tmp_path, sample_rows):
    repo = RecordRepository()
    count = repo.load_file(_write_json(tmp_path / "table.json", sample_rows))
    assert count == 5
    assert repo.is_loaded
    assert repo.count() == 5
    assert repo.get_user_ids() == ["u1", "u2"]
    assert repo.distinct("chapter_id") == ["2", "1"]
    assert len(repo.find_by_user("u1")) == 3
    assert len(repo.find_by_chapter(1)) == 4
    assert len(repo.find_by_unit(11.0)) == 3


def test_load_csv_turns_empty_cells_into_absent_values(tmp_path):
    path = tmp_path / "table.csv"
    pd.DataFrame(
        [
            {"ChapterId": 1, "UnitId": 10, "UserId": "u1", "UnitTimeSpent": "00:10:00"},
            {"ChapterId": 1, "UnitId": 10, "UserId": None, "UnitTimeSpent": None},
        ]
    ).to_csv(path, index=False)

    repo = RecordRepository()
    assert repo.load_file(path) == 2
    first, second = repo.get_all()
    assert first.chapter_id == "1"
    assert first.unit_id == "10"
    assert first.time_spent_seconds == 600
    assert second.user_id is None
    assert not second.has_time_spent


def test_connect_reads_configured_path(tmp_path, sample_rows):
    settings = Settings()
    settings.FLAT_TABLE_PATH = _write_json(tmp_path / "output.json", sample_rows)
    repo = RecordRepository(settings)
    repo.connect()
    assert repo.count() == 5

    # Already loaded: connecting again keeps the data
    settings.FLAT_TABLE_PATH = tmp_path / "missing.json"
    repo.connect()
    assert repo.count() == 5


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        RecordRepository().load_file(tmp_path / "nope.json")


def test_json_must_be_an_array(tmp_path):
    path = tmp_path / "table.json"
    path.write_text(json.dumps({"ChapterId": 1}), encoding="utf-8")
    with pytest.raises(ValueError):
        RecordRepository().load_file(path)


def test_unsupported_format(tmp_path):
    path = tmp_path / "table.txt"
    path.write_text("ChapterId", encoding="utf-8")
    with pytest.raises(ValueError):
        RecordRepository().load_file(path)

