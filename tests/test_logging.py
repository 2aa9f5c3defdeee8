"""Tests for logging configuration."""

import io
import logging
from collections.abc import Generator

import pytest

from conduit.logging import HTTP_LOGGERS, configure_logging, log_errors


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None, None, None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    http_levels = {name: logging.getLogger(name).level for name in HTTP_LOGGERS}
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, http_level in http_levels.items():
        logging.getLogger(name).setLevel(http_level)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("verbosity", "quiet", "expected"),
    [
        (0, False, logging.INFO),
        (1, False, logging.DEBUG),
        (2, False, logging.DEBUG),
        (2, True, logging.WARNING),
    ],
)
def test_root_level(verbosity: int, quiet: bool, expected: int) -> None:
    configure_logging(verbosity=verbosity, quiet=quiet, stream=io.StringIO())
    assert logging.getLogger().level == expected


@pytest.mark.unit
def test_http_client_held_back_unless_tracing() -> None:
    configure_logging(verbosity=1, stream=io.StringIO())
    assert logging.getLogger("httpx").level == logging.WARNING

    configure_logging(verbosity=2, stream=io.StringIO())
    assert logging.getLogger("httpx").level == logging.NOTSET


@pytest.mark.unit
def test_log_errors(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR):
        log_errors(logging.getLogger("conduit.test"), ["title can't be blank", "Status 500"])
    assert [record.getMessage() for record in caplog.records] == [
        "title can't be blank",
        "Status 500",
    ]
