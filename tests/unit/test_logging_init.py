from __future__ import annotations

import logging
from io import StringIO

from plate_ingest.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    setup_logging,
)


def test_setup_logging_creates_labeled_stdout_logger():
    logger = setup_logging()
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent():
    assert setup_logging() is setup_logging()
    assert get_logger() is setup_logging()
    assert len(get_logger().handlers) == 1


def test_debug_lowers_level():
    logger = setup_logging(debug=True)
    assert logger.level == logging.DEBUG
    assert logger.handlers[0].level == logging.DEBUG


def test_labels():
    stream = StringIO()
    logger = logging.getLogger("test_plate_ingest_labels")
    logger.setLevel(logging.INFO)
    logger.propagate = False
    handler = logging.StreamHandler(stream)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    try:
        logger.info("scanning")
        logger.warning("orphan rows")
        logger.error("bad")
        logger.log(SUMMARY_LEVEL, "plates=1")
    finally:
        logger.removeHandler(handler)
    assert stream.getvalue().splitlines() == [
        "INFO scanning",
        "WARN orphan rows",
        "ERROR bad",
        "SUMMARY plates=1",
    ]


def test_package_loggers_reach_app_handler(capsys):
    setup_logging()
    logging.getLogger("plate_ingest.excel.grouper").warning("from child")
    log_summary("plates=0")
    out = capsys.readouterr().out
    assert "WARN from child" in out
    assert "SUMMARY plates=0" in out
