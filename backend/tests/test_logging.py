import json
import logging

import pytest

from landly.config import Settings
from landly.utils.logging import JsonFormatter


def _record(msg="Static site rendered", **extra):
    record = logging.LogRecord("landly.test", logging.INFO, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.unit
def test_json_formatter_includes_known_extras():
    line = JsonFormatter().format(_record(project_id="p1", pages=2, fixes=["default_page_added"], ignored="x"))
    payload = json.loads(line)
    assert payload["message"] == "Static site rendered"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "landly.test"
    assert payload["project_id"] == "p1"
    assert payload["pages"] == 2
    assert payload["fixes"] == ["default_page_added"]
    assert "ignored" not in payload


@pytest.mark.unit
def test_json_formatter_keeps_unicode():
    line = JsonFormatter().format(_record("Лендинг опубликован"))
    assert "Лендинг опубликован" in line


@pytest.mark.unit
@pytest.mark.parametrize("name,expected", [
    ("DEBUG", logging.DEBUG),
    ("warning", logging.WARNING),
    ("nonsense", logging.INFO),
])
def test_settings_log_level_value(name, expected):
    assert Settings(LOG_LEVEL=name).log_level_value == expected


@pytest.mark.unit
def test_settings_defaults():
    config = Settings()
    assert config.PAGE_TITLE_MAX_LENGTH >= 1
    assert Settings(S3_BUCKET="b", S3_ACCESS_KEY="a", S3_SECRET_KEY="s").s3_configured is True
    assert Settings(S3_BUCKET=None, S3_ACCESS_KEY=None, S3_SECRET_KEY=None).s3_configured is False
