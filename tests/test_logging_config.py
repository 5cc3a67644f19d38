import logging

import pytest

from school_schedule_api.app.core.logging_config import setup_logging


@pytest.fixture
def root_logger():
    logger = logging.getLogger()
    handlers, level = list(logger.handlers), logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)


def _file_handlers(logger):
    return [h for h in logger.handlers if isinstance(h, logging.FileHandler)]


def test_repeated_setup_does_not_stack_handlers(root_logger):
    setup_logging("INFO")
    count = len(root_logger.handlers)

    setup_logging("DEBUG")

    assert len(root_logger.handlers) == count
    assert root_logger.level == logging.DEBUG


def test_log_file_is_swapped_when_it_changes(root_logger, tmp_path):
    first, second = tmp_path / "first.log", tmp_path / "second.log"

    setup_logging("INFO", str(first))
    [old] = _file_handlers(root_logger)
    setup_logging("INFO", str(second))

    [new] = _file_handlers(root_logger)
    assert new.baseFilename == str(second.resolve())
    assert old.stream is None

    setup_logging("INFO")
    assert _file_handlers(root_logger) == []


def test_unknown_level_falls_back_to_info(root_logger):
    setup_logging("chatty")

    assert root_logger.level == logging.INFO
