import json

import pytest

from fractal_explorer.errors import InvalidConfigurationError
from fractal_explorer.settings import Settings, load_settings, parse_settings


def test_bundled_settings_match_defaults():
    assert load_settings() == Settings()


def test_load_from_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({
        "gradient": "Ocean",
        "render": {"threads": 2, "warmup": False},
        "logging": {"level": "debug"},
    }))
    assert load_settings(str(path)) == Settings(
        gradient='Ocean', threads=2, warmup=False, log_level='DEBUG')


def test_missing_file_falls_back_to_defaults(tmp_path, caplog):
    with caplog.at_level("WARNING"):
        settings = load_settings(str(tmp_path / "missing.json"))
    assert settings == Settings()
    assert "Could not load" in caplog.text


def test_broken_json_falls_back_to_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    assert load_settings(str(path)) == Settings()


def test_missing_keys_keep_defaults():
    assert parse_settings({}) == Settings()
    assert parse_settings({"render": {"threads": 4}}).threads == 4


@pytest.mark.parametrize("data", [
    [],
    {"gradient": "Nope"},
    {"render": {"threads": 0}},
    {"render": {"threads": "4"}},
    {"render": {"threads": True}},
    {"render": {"warmup": "yes"}},
    {"logging": {"level": "LOUD"}},
])
def test_invalid_values_rejected(data):
    with pytest.raises(InvalidConfigurationError):
        parse_settings(data)
