"""
Tests for logging configuration and the key=value extra formatter.
"""

import logging

import pytest

from pyregress.core.logging import LOG_FORMAT, ExtraFormatter, setup_logging


def make_record(**extra):
    record = logging.LogRecord(
        name="pyregress.test", level=logging.INFO, pathname=__file__, lineno=1,
        msg="Training pass complete", args=(), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestExtraFormatter:

    def test_renders_extras(self):
        text = ExtraFormatter(LOG_FORMAT).format(make_record(rows=5, skipped=1))
        assert text == "INFO pyregress.test: Training pass complete: rows=5 skipped=1"

    def test_no_extras(self):
        text = ExtraFormatter(LOG_FORMAT).format(make_record())
        assert text == "INFO pyregress.test: Training pass complete"

    def test_private_attributes_hidden(self):
        text = ExtraFormatter(LOG_FORMAT).format(make_record(_hidden=1))
        assert "_hidden" not in text


class TestSetupLogging:

    @pytest.fixture(autouse=True)
    def reset(self):
        yield
        logger = logging.getLogger("pyregress")
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)

    def test_installs_single_stderr_handler(self):
        setup_logging(logging.DEBUG)
        logger = logging.getLogger("pyregress")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, ExtraFormatter)

    def test_repeat_calls_do_not_stack_handlers(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger("pyregress").handlers) == 1

    def test_writes_to_stderr(self, capsys):
        setup_logging(logging.INFO)
        logging.getLogger("pyregress.regression.solvers").info(
            "Evaluation pass complete", extra={"predicted": 3}
        )
        err = capsys.readouterr().err
        assert "INFO pyregress.regression.solvers: Evaluation pass complete: predicted=3" in err
