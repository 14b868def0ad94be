import os
from datetime import datetime
from pathlib import Path

import pytest


@pytest.fixture(scope="session", autouse=True)
def baseline_settings_env():
    """Provide baseline env vars so tests are not affected by local .env.

    Pydantic-settings precedence: init args > env vars > .env > defaults.
    Setting these ensures stable defaults regardless of any .env present.
    """
    os.environ.update({
        # App
        "APP_NAME": "Object Log Analyzer",
        "APP_VERSION": "0.1.0",
        "APP_DEBUG": "false",
        "APP_ENVIRONMENT": "development",
        # API
        "API_HOST": "0.0.0.0",
        "API_PORT": "8000",
        "API_WORKERS": "1",
        "API_RELOAD": "false",
        "API_LOG_LEVEL": "INFO",
        # Analyzer
        "ANALYZER_DEFAULT_DAYS": "7",
        "ANALYZER_ENCODING": "utf-8",
        "ANALYZER_VALIDATE_LOG_DIR": "false",
    })


@pytest.fixture(autouse=True)
def refresh_settings_cache():
    """Clear settings cache so env changes take effect per test.

    Ensures tests using monkeypatch.setenv() get a fresh Settings instance.
    """
    from objectlogs.config.settings import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


XML_LOG = """<?xml version="1.0" encoding="UTF-8"?>
<log>
  <created>
    <object>
      <name>report.pdf</name>
      <owner>alice</owner>
      <creationDate>2024-01-02</creationDate>
    </object>
  </created>
  <deleted>
    <object>
      <name>old.txt</name>
      <owner>bob</owner>
      <creationDate>2023-05-01</creationDate>
      <deletionDate>2024-01-03</deletionDate>
    </object>
  </deleted>
  <modified>
    <object>
      <name>budget.xlsx</name>
      <owner>carol</owner>
      <modificationDate>2024-01-04</modificationDate>
    </object>
    <object>
      <name>notes.md</name>
      <owner>alice</owner>
      <modificationDate>2024-01-05</modificationDate>
    </object>
  </modified>
</log>
"""

JSON_LOG = """{
  "created": [
    {"name": "A", "owner": "bob", "creationDate": "2024-01-01"}
  ],
  "deleted": [
    {"name": "B", "owner": "dave", "creationDate": "2023-12-01", "deletionDate": "2024-01-06"}
  ],
  "modified": []
}
"""


@pytest.fixture
def xml_log() -> str:
    """A well formed XML log with one created, one deleted and two modified objects."""
    return XML_LOG


@pytest.fixture
def json_log() -> str:
    """A well formed JSON log with one created and one deleted object."""
    return JSON_LOG


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for date filtering."""
    return datetime(2024, 1, 10, 12, 0, 0)


@pytest.fixture
def log_dir(tmp_path: Path, now: datetime) -> Path:
    """A log directory with a recent XML log, an old JSON log and a stray file."""
    recent = tmp_path / "recent.xml"
    recent.write_text(XML_LOG, encoding="utf-8")
    stamp = datetime(2024, 1, 9, 8, 0).timestamp()
    os.utime(recent, (stamp, stamp))

    old = tmp_path / "old.json"
    old.write_text(JSON_LOG, encoding="utf-8")
    stamp = datetime(2023, 12, 1, 8, 0).timestamp()
    os.utime(old, (stamp, stamp))

    (tmp_path / "README.txt").write_text("not a log", encoding="utf-8")
    return tmp_path
