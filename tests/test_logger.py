import logging
import uuid

import pytest

from staking.logger import get_logger, logger_from_config, resolve_log_level


@pytest.fixture()
def logger_name():
    name = f"partnerin-test-{uuid.uuid4().hex}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_handlers_attached_once(logger_name):
    first = get_logger(name=logger_name, level=logging.DEBUG)
    second = get_logger(name=logger_name, level=logging.ERROR)

    assert first is second
    assert len(first.handlers) == 1
    assert first.level == logging.DEBUG
    assert first.propagate is False


def test_file_handler_writes_records(logger_name, tmp_path):
    log_file = tmp_path / "run.log"
    logger = get_logger(name=logger_name, log_file=str(log_file))
    assert len(logger.handlers) == 2

    logger.info("tx=%s", "0xabc")
    for handler in logger.handlers:
        handler.flush()

    line = log_file.read_text().strip()
    assert line.endswith(f"| INFO | {logger_name} | tx=0xabc")


@pytest.mark.parametrize(
    "cfg, expected",
    [
        ({}, logging.INFO),
        ({"logging": None}, logging.INFO),
        ({"logging": {"level": "debug"}}, logging.DEBUG),
        ({"logging": {"level": "nonsense"}}, logging.INFO),
    ],
)
def test_resolve_log_level(cfg, expected):
    assert resolve_log_level(cfg) == expected


def test_logger_from_config(logger_name, tmp_path):
    log_file = tmp_path / "cfg.log"
    cfg = {"logging": {"level": "WARNING", "file": str(log_file)}}
    logger = logger_from_config(cfg, name=logger_name)

    assert logger.level == logging.WARNING
    assert any(isinstance(h, logging.FileHandler) for h in logger.handlers)
