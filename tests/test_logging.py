# tests/test_logging.py
import pytest
from loguru import logger

from config.settings import settings
from order_miner.utils.logging import setup_logging


@pytest.fixture
def log_file(tmp_path, monkeypatch):
    path = tmp_path / "logs" / "order_miner.log"
    monkeypatch.setattr(settings.logging, "file", str(path))
    yield path
    logger.remove()


def test_setup_logging_writes_to_file(log_file):
    assert setup_logging("info") == "INFO"

    logger.debug("not written at INFO")
    logger.info("sync finished")

    content = log_file.read_text()
    assert "sync finished" in content
    assert "not written at INFO" not in content


def test_debug_flag_lowers_level(log_file, monkeypatch):
    monkeypatch.setattr(settings.app, "debug", True)

    assert setup_logging() == "DEBUG"
    logger.debug("order markers checked")

    assert "order markers checked" in log_file.read_text()
