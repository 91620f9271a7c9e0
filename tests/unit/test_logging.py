"""
Unit tests for CLI logging setup.
"""

import io
import logging

import pytest

from firm_research.cli.logging import setup_logging
from firm_research.utils.tqdm_logging import TqdmLoggingHandler


@pytest.fixture
def restore_loggers():
    names = ("firm_research", "test_command")
    saved = {
        name: (logging.getLogger(name).handlers[:], logging.getLogger(name).propagate)
        for name in names
    }
    yield
    for name, (handlers, propagate) in saved.items():
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            if handler not in handlers:
                handler.close()
        logger.handlers = handlers
        logger.propagate = propagate


class TestTqdmLoggingHandler:
    def test_writes_formatted_record(self):
        stream = io.StringIO()
        handler = TqdmLoggingHandler(stream=stream)
        handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
        logger = logging.getLogger("test_tqdm_handler")
        logger.addHandler(handler)
        logger.propagate = False
        try:
            logger.warning("No Team page found")
        finally:
            logger.removeHandler(handler)

        assert stream.getvalue() == "WARNING No Team page found\n"


class TestSetupLogging:
    def test_execute_logs_to_file(self, tmp_path, restore_loggers):
        logger = setup_logging("test_command", execute=True, log_dir=tmp_path)
        logger.info("Researching https://smithlaw.com")
        logging.getLogger("firm_research.pipeline").debug("page detail")

        [log_file] = list(tmp_path.glob("test_command_*.log"))
        content = log_file.read_text(encoding="utf-8")
        assert "Researching https://smithlaw.com" in content
        assert "page detail" in content
        assert not logging.getLogger("firm_research").propagate
