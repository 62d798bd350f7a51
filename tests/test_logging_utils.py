from __future__ import annotations

import logging

import pytest

from pie_filter.config import Settings
from pie_filter.logging_utils import configure_logging, resolve_level


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handler = logging.NullHandler()
    level = root.level
    root.addHandler(handler)
    yield root
    root.removeHandler(handler)
    root.setLevel(level)


@pytest.mark.parametrize(
    "level, expected",
    [
        ("debug", logging.DEBUG),
        (" WARNING ", logging.WARNING),
        (logging.ERROR, logging.ERROR),
        ("chatty", logging.INFO),
    ],
)
def test_resolve_level(level, expected):
    assert resolve_level(level) == expected


def test_level_comes_from_settings(root_logger, tmp_path):
    configure_logging(Settings(downloads_dir=tmp_path, log_level="WARNING"))

    assert root_logger.level == logging.WARNING


def test_verbose_overrides_settings(root_logger, tmp_path):
    configure_logging(Settings(downloads_dir=tmp_path, log_level="ERROR"), verbose=True)

    assert root_logger.level == logging.DEBUG
