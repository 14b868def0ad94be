from collections.abc import Iterator
from datetime import datetime, timezone
from pathlib import Path

import pytest
from litestar import Litestar
from litestar.testing import TestClient

from objectlogs.server.core import create_app
from objectlogs.server.plugins import analysis_service
from objectlogs.services.logparser import parse_log

OLD_MS = str(int(datetime(2000, 1, 1, tzinfo=timezone.utc).timestamp() * 1000))


@pytest.fixture
def app() -> Litestar:
    return create_app()


@pytest.fixture
def client(app: Litestar) -> Iterator[TestClient[Litestar]]:
    with TestClient(app=app) as client:
        yield client


def _files(*items: tuple[str, str]) -> list[tuple[str, tuple[str, bytes, str]]]:
    return [
        ("logFiles", (name, content.encode("utf-8"), "application/octet-stream"))
        for name, content in items
    ]


def test_index_renders_empty_tables(client: TestClient[Litestar]) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert 'id="creationTable"' in response.text
    assert 'id="deletionTable"' in response.text
    assert 'id="modificationTable"' in response.text
    assert '<span id="createdCount">0</span>' in response.text
    assert 'value="7"' in response.text


def test_analyze_page_renders_rows(client: TestClient[Litestar], xml_log: str, json_log: str) -> None:
    response = client.post(
        "/analyze",
        files=_files(("objects.xml", xml_log), ("objects.json", json_log)),
        data={"numDays": "3"},
    )
    assert response.status_code == 200
    assert "<td>report.pdf</td>" in response.text
    assert "<td>objects.json</td>" in response.text
    assert '<span id="createdCount">2</span>' in response.text
    assert '<span id="deletedCount">2</span>' in response.text
    assert '<span id="modifiedCount">2</span>' in response.text


def test_analyze_page_escapes_cells(client: TestClient[Litestar]) -> None:
    log = '{"created":[{"name":"<script>x</script>","owner":"o","creationDate":"d"}]}'
    response = client.post("/analyze", files=_files(("a.json", log)), data={"numDays": "1"})
    assert response.status_code == 200
    assert "<script>x</script>" not in response.text
    assert "&lt;script&gt;x&lt;/script&gt;" in response.text


def test_analyze_page_invalid_days(client: TestClient[Litestar], json_log: str) -> None:
    response = client.post("/analyze", files=_files(("a.json", json_log)), data={"numDays": "0"})
    assert response.status_code == 400
    assert "Error: Enter a valid number of days." in response.text
    assert "<td>" not in response.text


def test_analyze_page_no_files(client: TestClient[Litestar]) -> None:
    response = client.post(
        "/analyze",
        files=[("logFiles", ("", b"", "application/octet-stream"))],
        data={"numDays": "3"},
    )
    assert response.status_code == 400
    assert "Error: Select at least one log file." in response.text


def test_analyze_page_old_files_excluded(client: TestClient[Litestar], json_log: str) -> None:
    response = client.post(
        "/analyze",
        files=_files(("a.json", json_log)),
        data={"numDays": "5", "lastModified": OLD_MS},
    )
    assert response.status_code == 400
    assert "No log files found within the specified date range." in response.text


def test_analyze_page_unsupported_format(client: TestClient[Litestar]) -> None:
    response = client.post("/analyze", files=_files(("notes.txt", "hi")), data={"numDays": "1"})
    assert response.status_code == 400
    assert "Error reading log files: Unsupported file format: notes.txt" in response.text


def test_reset_page(client: TestClient[Litestar]) -> None:
    response = client.post("/reset")
    assert response.status_code == 200
    assert "Log files reset from GUI successfully." in response.text
    assert '<span id="deletedCount">0</span>' in response.text


def test_api_analyze(client: TestClient[Litestar], json_log: str) -> None:
    response = client.post(
        "/api/v1/analysis",
        files=_files(("objects.json", json_log)),
        data={"numDays": "2"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["createdCount"] == 1
    assert body["deletedCount"] == 1
    assert body["modifiedCount"] == 0
    assert body["created"] == [
        {"fileName": "objects.json", "objectName": "A", "owner": "bob", "date": "2024-01-01"}
    ]
    assert body["deleted"][0]["deletionDate"] == "2024-01-06"


def test_api_analyze_error(client: TestClient[Litestar]) -> None:
    response = client.post("/api/v1/analysis", files=_files(("bad.json", "{oops")), data={"numDays": "2"})
    assert response.status_code == 400
    assert response.json()["detail"].startswith("Error reading log files: Malformed log file bad.json")


def test_api_directory(
    client: TestClient[Litestar], log_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(analysis_service, "log_dir", log_dir)
    response = client.get("/api/v1/analysis/directory", params={"numDays": "100000"})
    assert response.status_code == 200
    body = response.json()
    assert body["createdCount"] == 2
    assert body["modifiedCount"] == 2


def test_api_directory_invalid_days(client: TestClient[Litestar]) -> None:
    response = client.get("/api/v1/analysis/directory", params={"numDays": "soon"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Error: Enter a valid number of days."


def test_api_export_xml(client: TestClient[Litestar], xml_log: str, json_log: str) -> None:
    response = client.post(
        "/api/v1/analysis/export",
        params={"format": "xml"},
        files=_files(("objects.xml", xml_log), ("objects.json", json_log)),
        data={"numDays": "1"},
    )
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/xml")
    assert 'filename="merged.xml"' in response.headers["content-disposition"]
    merged = parse_log(response.text, "merged.xml")
    assert [r.object_name for r in merged.created] == ["report.pdf", "A"]
    assert [r.deletion_date for r in merged.deleted] == ["2024-01-03", "2024-01-06"]


def test_api_export_unknown_format(client: TestClient[Litestar], json_log: str) -> None:
    response = client.post(
        "/api/v1/analysis/export",
        params={"format": "yaml"},
        files=_files(("objects.json", json_log)),
        data={"numDays": "1"},
    )
    assert response.status_code == 400


def test_settings_endpoint(client: TestClient[Litestar]) -> None:
    response = client.get("/settings")
    assert response.status_code == 200
    assert response.json()["analyzer"]["default_days"] == 7
