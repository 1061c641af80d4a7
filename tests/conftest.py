"""Pytest configuration and shared fixtures for all tests."""

import logging
from typing import Any, Optional
from unittest.mock import Mock

import pytest
import requests

# Trimmed copy of the published schedule.json, keys deliberately out of order
SAMPLE_SCHEDULE = {
    "v10": {
        "start": "2018-04-24",
        "lts": "2018-10-30",
        "maintenance": "2020-05-19",
        "end": "2021-04-30",
        "codename": "Dubnium",
    },
    "v0.8": {"start": "2012-06-25", "end": "2016-07-31"},
    "v4": {
        "start": "2015-09-08",
        "lts": "2015-10-12",
        "maintenance": "2017-04-01",
        "end": "2018-04-30",
        "codename": "Argon",
    },
    "v0.12": {"start": "2015-02-06", "end": "2016-12-31"},
    "v5": {"start": "2015-10-29", "maintenance": "2016-04-30", "end": "2016-06-30"},
    "v0.10": {"start": "2013-03-11", "end": "2016-10-31"},
    "v6": {
        "start": "2016-04-26",
        "lts": "2016-10-18",
        "maintenance": "2018-04-30",
        "end": "2019-04-30",
        "codename": "Boron",
    },
}

SAMPLE_IDENTIFIERS = ["0.8", "0.10", "0.12", "4", "5", "6", "10"]


def make_response(payload: Any = None, status_code: int = 200, json_error: Optional[Exception] = None) -> Mock:
    """Create a mock requests.Response."""
    response = Mock()
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status_code} Client Error")
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


def make_session(payload: Any = None, **kwargs: Any) -> Mock:
    """Create a mock requests.Session whose GET returns ``payload`` as JSON."""
    session = Mock()
    session.get.return_value = make_response(payload, **kwargs)
    return session


@pytest.fixture(autouse=True)
def disable_sentry_for_tests(monkeypatch):
    """Disable Sentry telemetry for all tests.

    Tests that specifically need Sentry should set TELEMETRY=true in their own
    fixtures or patches.
    """
    monkeypatch.setenv("TELEMETRY", "false")


@pytest.fixture(autouse=True)
def clear_schedule_env(monkeypatch):
    """Keep configuration environment variables of the host out of the tests."""
    for name in ("NODEJS_SCHEDULE_URL", "NODEJS_SCHEDULE_TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Drop handlers that setup_logging attached during a test.

    CliRunner swaps sys.stderr while a command runs, so a handler left behind
    would keep writing to a closed stream.
    """
    package_logger = logging.getLogger("nodejs_schedule")
    handlers = package_logger.handlers[:]
    level = package_logger.level
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)


@pytest.fixture
def schedule_session():
    """Mock session serving SAMPLE_SCHEDULE."""
    return make_session(SAMPLE_SCHEDULE)
