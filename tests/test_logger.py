import logging
from logging.handlers import RotatingFileHandler

import pytest

from lunch_menus.utils.logger import configure_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger('lunch_menus')
    saved = (logger.level, list(logger.handlers), logger.propagate)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(saved[0])
    logger.propagate = saved[2]
    for handler in saved[1]:
        logger.addHandler(handler)


def test_console_only_by_default(package_logger):
    configure_logging('debug')

    assert package_logger.level == logging.DEBUG
    assert len(package_logger.handlers) == 1
    assert not isinstance(package_logger.handlers[0], RotatingFileHandler)


def test_file_handler_when_configured(package_logger, tmp_path):
    log_file = tmp_path / 'logs' / 'lunch_menus.log'

    configure_logging('INFO', str(log_file))
    logging.getLogger('lunch_menus.worker').info('hello from a run')
    for handler in package_logger.handlers:
        handler.flush()

    assert any(isinstance(h, RotatingFileHandler) for h in package_logger.handlers)
    assert 'INFO: hello from a run' in log_file.read_text()


def test_reconfiguring_does_not_stack_handlers(package_logger):
    configure_logging()
    configure_logging()

    assert len(package_logger.handlers) == 1


def test_unknown_level_falls_back_to_info(package_logger):
    configure_logging('chatty')

    assert package_logger.level == logging.INFO


def test_records_do_not_reach_root_handlers(package_logger, mocker):
    root_handler = logging.Handler()
    root_handler.emit = mocker.Mock()
    logging.getLogger().addHandler(root_handler)
    try:
        configure_logging('INFO')
        logging.getLogger('lunch_menus.worker').info('printed once')
    finally:
        logging.getLogger().removeHandler(root_handler)

    assert package_logger.propagate is False
    root_handler.emit.assert_not_called()
