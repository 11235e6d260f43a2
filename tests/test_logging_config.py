"""
Tests for logging setup from configuration.
"""
import logging
import logging.handlers
import pytest

from logging_config import ErrorRaisingHandler, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_file_logging_from_config(test_config_manager, tmp_path):
    setup_logging(cfg=test_config_manager)
    root = logging.getLogger()

    assert root.level == logging.DEBUG
    file_handlers = [h for h in root.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].maxBytes == 1024
    assert (tmp_path / "logs" / "test.log").exists()
    # console disabled in the test config
    assert not any(type(h) is logging.StreamHandler for h in root.handlers)
    assert not any(isinstance(h, ErrorRaisingHandler) for h in root.handlers)


def test_raise_on_error_handler(test_config_manager):
    setup_logging(raise_on_error=True, cfg=test_config_manager)
    with pytest.raises(RuntimeError, match="boom"):
        logging.getLogger("timecontrol.test").error("boom")


def test_console_handler_level(test_config_manager):
    test_config_manager.set_setting("logging", "console", True)
    test_config_manager.set_setting("logging", "consoleLevel", "warning")
    setup_logging(cfg=test_config_manager)
    console = [h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler]
    assert len(console) == 1
    assert console[0].level == logging.WARNING
