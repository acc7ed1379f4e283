import json
from pathlib import Path

from config.settings import Settings


def test_defaults():
    settings = Settings()
    assert settings.DEFAULT_DECIMALS == 2
    assert settings.PROBLEMATIC_ACCURACY_THRESHOLD == 60.0
    assert settings.MIN_DIFFICULTY_ATTEMPTS == 1.1
    assert settings.DIFFICULTY_TIERS == {"HIGH": 800.0, "MEDIUM": 400.0}
    assert settings.FLAT_TABLE_PATH.name == "output.json"
    assert settings.get("MISSING", "fallback") == "fallback"


def test_json_config(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps(
            {
                "STRUGGLING_ACCURACY_THRESHOLD": 45.0,
                "FLAT_TABLE_PATH": "data/table.csv",
                "NOT_A_SETTING": 1,
                "get": "shadowed",
            }
        ),
        encoding="utf-8",
    )
    settings = Settings(config_path=str(path))
    assert settings.STRUGGLING_ACCURACY_THRESHOLD == 45.0
    assert settings.FLAT_TABLE_PATH == Path("data/table.csv")
    assert not hasattr(settings, "NOT_A_SETTING")
    assert callable(settings.get)


def test_yaml_config(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "DIFFICULTY_TIERS:\n  HIGH: 500\n  MEDIUM: 200\nCACHE_ENABLED: false\n",
        encoding="utf-8",
    )
    settings = Settings(config_path=str(path))
    assert settings.DIFFICULTY_TIERS == {"HIGH": 500, "MEDIUM": 200}
    assert settings.CACHE_ENABLED is False


def test_bad_config_files_keep_defaults(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    assert Settings(config_path=str(broken)).DEFAULT_DECIMALS == 2
    assert Settings(config_path=str(tmp_path / "absent.yaml")).DEFAULT_DECIMALS == 2
    assert Settings(config_path=str(tmp_path / "settings.ini")).DEFAULT_DECIMALS == 2


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("COURSE_ANALYTICS_FLAT_TABLE", str(tmp_path / "rows.json"))
    monkeypatch.setenv("COURSE_ANALYTICS_DEFAULT_DECIMALS", "3")
    monkeypatch.setenv("COURSE_ANALYTICS_CACHE_ENABLED", "no")
    settings = Settings()
    assert settings.FLAT_TABLE_PATH == tmp_path / "rows.json"
    assert settings.DEFAULT_DECIMALS == 3
    assert settings.CACHE_ENABLED is False


def test_to_dict_serializes_paths():
    data = Settings().to_dict()
    assert isinstance(data["OUTPUT_DIR"], str)
    assert data["EXCELLING_ACCURACY_THRESHOLD"] == 90.0
