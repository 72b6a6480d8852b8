import logging

import pytest

from app.core.logging_config import REQUEST_LOGGER, build_logging_config, log_request


class _Collect(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture()
def request_records():
    handler = _Collect()
    logger = logging.getLogger(REQUEST_LOGGER)
    logger.addHandler(handler)
    previous = logger.level
    logger.setLevel(logging.INFO)
    yield handler.records
    logger.removeHandler(handler)
    logger.setLevel(previous)


def test_console_only_without_log_dir():
    config = build_logging_config("INFO")
    assert set(config["handlers"]) == {"console"}
    assert config["loggers"][""]["handlers"] == ["console"]
    assert config["loggers"][REQUEST_LOGGER]["propagate"] is False


def test_file_handlers_split_requests(tmp_path):
    config = build_logging_config("DEBUG", tmp_path)
    handlers = config["handlers"]
    assert handlers["app_file"]["filename"] == str(tmp_path / "school.log")
    assert handlers["request_file"]["filename"] == str(tmp_path / "requests.log")
    assert config["loggers"][REQUEST_LOGGER]["handlers"] == ["console", "request_file"]
    assert "request_file" not in config["loggers"][""]["handlers"]


@pytest.mark.parametrize("status_code, level", [
    (200, logging.INFO), (404, logging.WARNING), (500, logging.ERROR),
])
def test_request_line_level_follows_status(request_records, status_code, level):
    log_request("GET", "/api/students/", status_code, 12.345, client_ip="10.0.0.1")
    record = request_records[-1]
    assert record.levelno == level
    assert record.getMessage() == f"GET /api/students/ -> {status_code} (12.35ms) ip=10.0.0.1"


def test_requests_through_the_app_are_logged(client, request_records):
    client.get("/health")
    assert any("GET /health -> 200" in r.getMessage() for r in request_records)
