"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from depend_insight.logging_config import get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logger():
    logger = logging.getLogger("depend_insight")
    handlers, level = list(logger.handlers), logger.level
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers = handlers
    logger.setLevel(level)


class TestSetupLogging:
    @pytest.mark.parametrize(
        "verbosity, level",
        [("quiet", logging.ERROR), ("normal", logging.WARNING), ("verbose", logging.DEBUG)],
    )
    def test_levels(self, verbosity, level):
        assert setup_logging(verbosity).level == level

    def test_repeated_setup_replaces_handlers(self):
        setup_logging("verbose")
        logger = setup_logging("quiet")
        rich_handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1
        assert rich_handlers[0].level == logging.ERROR

    def test_unknown_verbosity(self):
        with pytest.raises(ValueError, match="loud"):
            setup_logging("loud")

    def test_log_file(self, tmp_path):
        path = tmp_path / "depend.log"
        setup_logging("normal", log_file=str(path))
        get_logger("metrics.inheritance").warning("[DI301] Inheritance cycle reached from p.X")
        assert "WARNING depend_insight.metrics.inheritance: [DI301]" in path.read_text()


class TestGetLogger:
    def test_namespaced(self):
        assert get_logger("code.registry").name == "depend_insight.code.registry"
        assert get_logger("depend_insight.cli").name == "depend_insight.cli"
        assert get_logger().name == "depend_insight"
