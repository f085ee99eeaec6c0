"""Tests for logging setup."""

import logging

import pytest

from RasterScopeViewer.logging_config import PACKAGE_LOGGER, resolve_level, setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def test_resolve_level_accepts_names_and_numbers():
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(" Warning ") == logging.WARNING
    assert resolve_level(logging.ERROR) == logging.ERROR


def test_resolve_level_rejects_unknown_names():
    with pytest.raises(ValueError):
        resolve_level("verbose")


def test_setup_replaces_handlers(package_logger):
    setup_logging("INFO")
    setup_logging("DEBUG")
    assert package_logger.level == logging.DEBUG
    assert len(package_logger.handlers) == 1


def test_log_file_receives_records(tmp_path, package_logger):
    path = tmp_path / "viewer.log"
    setup_logging("INFO", path)
    logging.getLogger(f"{PACKAGE_LOGGER}.core.session").info("opened frame")
    for handler in package_logger.handlers:
        handler.flush()
    assert "opened frame" in path.read_text(encoding="utf-8")
