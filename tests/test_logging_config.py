"""
Tests for logging setup from the packaged YAML file.
"""

import logging
import pytest

from clip_aggregator.logging_config import CONFIG_PATH, PACKAGE_LOGGER, setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = logger.level
    yield logger
    logger.setLevel(level)


def test_packaged_config_exists():
    assert CONFIG_PATH.is_file()


def test_yaml_config_applied(package_logger):
    setup_logging()

    assert package_logger.level == logging.WARNING
    assert package_logger.propagate is False


def test_level_override(package_logger):
    setup_logging("debug")

    assert package_logger.level == logging.DEBUG


def test_missing_config_falls_back(tmp_path, capsys, package_logger):
    setup_logging(config_path=tmp_path / "missing.yaml")

    assert "not found" in capsys.readouterr().err


def test_empty_config_falls_back(tmp_path, capsys, package_logger):
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")

    setup_logging(config_path=empty)

    assert "is empty" in capsys.readouterr().err


def test_invalid_yaml_falls_back(tmp_path, capsys, package_logger):
    broken = tmp_path / "broken.yaml"
    broken.write_text("version: [1\n", encoding="utf-8")

    setup_logging(config_path=broken)

    assert "Could not parse" in capsys.readouterr().err
