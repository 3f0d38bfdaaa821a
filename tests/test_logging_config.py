import logging
import pytest
from logging_config import setup_logging, get_logger


@pytest.fixture
def restore_root():
    root_logger = logging.getLogger()
    saved_handlers = root_logger.handlers[:]
    saved_level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers[:]:
        if handler not in saved_handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in saved_handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(saved_level)


def test_console_only(restore_root):
    setup_logging(logging.INFO)
    assert restore_root.level == logging.INFO
    assert not any(isinstance(h, logging.FileHandler) for h in restore_root.handlers)


def test_file_handler_gets_debug(restore_root, tmp_path):
    log_file = tmp_path / "run.log"
    setup_logging(logging.WARNING, str(log_file))
    get_logger("segCodec").debug("Read block 4: 00")

    for handler in restore_root.handlers:
        handler.flush()
    assert "Read block 4: 00" in log_file.read_text()
