"""Shared fixtures for schema_enforcer tests."""

import logging

import pytest
import structlog

from schema_enforcer.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read settings from the environment for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def restore_logging():
    """Undo configure_logging() so later tests see structlog defaults."""
    package_logger = logging.getLogger("schema_enforcer")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    yield package_logger
    structlog.reset_defaults()
    package_logger.handlers = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate
