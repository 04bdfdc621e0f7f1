import json
import logging
from datetime import datetime
from pathlib import Path

import pytest

from portal_harness.datasets import case_data, read_csv, read_json, value
from portal_harness.errors import ConfigurationError, InteractionError
from portal_harness.screenshots import capture, capture_failure
from stubs import StubSession

MOMENT = datetime(2024, 1, 2, 3, 4, 5)


def test_capture_writes_timestamped_png(tmp_path: Path) -> None:
    session = StubSession()

    path = capture(session, "login page", tmp_path / "shots", now=MOMENT)

    assert path == tmp_path / "shots" / "login_page_20240102_030405.png"
    assert path.read_bytes().startswith(b"\x89PNG")


def test_capture_failure_prefixes_test_name(tmp_path: Path) -> None:
    path = capture_failure(StubSession(), "test_add_worker[chromium]", tmp_path, now=MOMENT)

    assert path.name == "FAILED_test_add_worker_chromium_20240102_030405.png"


def test_capture_never_raises(tmp_path: Path, caplog) -> None:
    class BrokenSession(StubSession):
        def screenshot(self, path: Path) -> bytes:
            raise InteractionError("page crashed")

    with caplog.at_level(logging.ERROR):
        path = capture(BrokenSession(), "broken", tmp_path)

    assert path is None
    assert "Failed to take screenshot" in caplog.text


def test_read_json_and_case_data(tmp_path: Path) -> None:
    data_file = tmp_path / "workers.json"
    data_file.write_text(
        json.dumps(
            {
                "add_worker": {"name": "Ada Lovelace", "phone": 5550100, "department": None},
                "search": ["Ada"],
            }
        )
    )

    node = case_data(data_file, "add_worker")

    assert read_json(data_file)["search"] == ["Ada"]
    assert value(node, "name") == "Ada Lovelace"
    assert value(node, "phone") == "5550100"
    assert value(node, "department") is None
    assert value(node, "email") is None
    assert case_data(data_file, "missing") is None


def test_case_data_requires_an_object(tmp_path: Path) -> None:
    data_file = tmp_path / "list.json"
    data_file.write_text("[1, 2]")

    with pytest.raises(ConfigurationError):
        case_data(data_file, "anything")


def test_read_json_reports_bad_files(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json")

    with pytest.raises(ConfigurationError):
        read_json(broken)
    with pytest.raises(ConfigurationError):
        read_json(tmp_path / "absent.json")


def test_read_csv_uses_header_row(tmp_path: Path) -> None:
    data_file = tmp_path / "projects.csv"
    data_file.write_text("name,location\nBridge,Riverside\nTower,Downtown\n")

    rows = read_csv(data_file)

    assert rows == [
        {"name": "Bridge", "location": "Riverside"},
        {"name": "Tower", "location": "Downtown"},
    ]


def test_read_csv_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="absent.csv"):
        read_csv(tmp_path / "absent.csv")
