import logging

import pytest

from utils.logger_config import LoggerConfig, get_logger


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    LoggerConfig.setup_root_logger(level=logging.INFO, force=True)


def test_child_logger_name():
    logger = get_logger("some.module")
    assert logger.name == "region_match_toolkit.some.module"
    assert LoggerConfig.is_configured()


def test_level_by_name():
    LoggerConfig.setup_root_logger(level="DEBUG", force=True)
    assert LoggerConfig.get_configuration_info()['level'] == 'DEBUG'

    LoggerConfig.set_level("WARNING")
    info = LoggerConfig.get_configuration_info()
    assert info['level'] == 'WARNING'
    assert all(handler['level'] == 'WARNING' for handler in info['handlers'])


def test_unknown_level():
    with pytest.raises(ValueError):
        LoggerConfig.setup_root_logger(level="LOUD", force=True)


def test_file_handler(tmp_path):
    log_file = tmp_path / "logs" / "run.log"
    LoggerConfig.setup_root_logger(level="INFO", log_file=log_file, force=True)

    get_logger("test").info("hello file")
    for handler in logging.getLogger("region_match_toolkit").handlers:
        handler.flush()

    assert "hello file" in log_file.read_text(encoding="utf-8")
    assert len(LoggerConfig.get_configuration_info()['handlers']) == 2
