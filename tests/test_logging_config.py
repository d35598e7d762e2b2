"""Tests for pkgrank.logging_config."""

import logging

import pytest
from rich.logging import RichHandler

from pkgrank.logging_config import get_logger, level_for, setup_logging


def _rich_handlers(logger):
    return [h for h in logger.handlers if isinstance(h, RichHandler)]


class TestLevelFor:
    @pytest.mark.parametrize(
        "verbosity,level",
        [("quiet", logging.ERROR), ("normal", logging.WARNING), ("verbose", logging.DEBUG)],
    )
    def test_levels(self, verbosity, level):
        assert level_for(verbosity) == level

    def test_unknown_verbosity(self):
        with pytest.raises(ValueError):
            level_for("loud")


class TestSetupLogging:
    def test_default_level_is_warning(self, package_logger):
        assert setup_logging().level == logging.WARNING

    def test_verbose(self, package_logger):
        assert setup_logging("verbose").level == logging.DEBUG

    def test_quiet(self, package_logger):
        assert setup_logging("quiet").level == logging.ERROR

    def test_returns_package_logger(self, package_logger):
        assert setup_logging() is package_logger

    def test_repeated_calls_replace_handlers(self, package_logger):
        """Running twice leaves a single console handler."""
        before = len(_rich_handlers(package_logger))
        setup_logging()
        setup_logging("verbose")
        assert len(_rich_handlers(package_logger)) == before + 1

    def test_log_file(self, package_logger, tmp_path):
        path = tmp_path / "pkgrank.log"
        setup_logging("verbose", log_file=str(path))
        get_logger("math.pagerank").debug("power iteration finished")
        assert "pkgrank.math.pagerank" in path.read_text()
        assert "power iteration finished" in path.read_text()


class TestGetLogger:
    def test_root(self):
        assert get_logger().name == "pkgrank"

    def test_prefixes_short_names(self):
        assert get_logger("math.pagerank").name == "pkgrank.math.pagerank"

    def test_keeps_qualified_names(self):
        assert get_logger("pkgrank.graph").name == "pkgrank.graph"
