"""Tests for the package logger setup."""

import logging

import pytest

import pyclinstats
from pyclinstats import configure_logging
from pyclinstats.special import regularized_incomplete_beta


@pytest.fixture
def package_logger():
    logger = logging.getLogger("pyclinstats")
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    for h in logger.handlers[:]:
        if h not in handlers:
            logger.removeHandler(h)
    logger.setLevel(level)


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_library_installs_null_handler(self):
        logger = logging.getLogger("pyclinstats")
        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)

    def test_adds_one_stream_handler(self, package_logger):
        configure_logging(level="DEBUG")
        configure_logging(level="DEBUG")
        streams = [h for h in package_logger.handlers if isinstance(h, logging.StreamHandler)]
        assert len(streams) == 1
        assert package_logger.level == logging.DEBUG

    def test_level_updated_on_second_call(self, package_logger):
        configure_logging(level="DEBUG")
        configure_logging(level="WARNING")
        assert package_logger.level == logging.WARNING

    def test_solver_debug_reaches_package_logger(self, package_logger, caplog):
        caplog.set_level(logging.DEBUG, logger="pyclinstats")
        regularized_incomplete_beta(0.5, 1e8, 1e8)
        assert any(r.name.startswith("pyclinstats.") for r in caplog.records)


def test_version():
    assert pyclinstats.__version__ == "0.1.0"
