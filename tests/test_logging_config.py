"""Tests for two-phase singleton logging configuration."""

from __future__ import annotations

import logging
import os
from unittest.mock import patch

import pytest

from careerlog.logging_config import (
    _SUPPRESSED_LOGGERS,
    LOG_DATEFMT,
    LOG_FORMAT,
    cleanup_third_party_handlers,
    set_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _reset_flags() -> None:
    """Reset singleton flags before each test."""
    import careerlog.logging_config as mod

    mod._phase1_done = False
    mod._phase2_done = False


def test_setup_logging_is_idempotent() -> None:
    with patch("careerlog.logging_config.logging.basicConfig") as mock_bc:
        setup_logging()
        setup_logging()
        mock_bc.assert_called_once()


def test_setup_logging_passes_format() -> None:
    with patch("careerlog.logging_config.logging.basicConfig") as mock_bc:
        setup_logging("debug")
    mock_bc.assert_called_once_with(
        level=logging.DEBUG, format=LOG_FORMAT, datefmt=LOG_DATEFMT
    )


def test_litellm_log_env_var_set() -> None:
    os.environ.pop("LITELLM_LOG", None)
    setup_logging()
    assert os.environ.get("LITELLM_LOG") == "WARNING"


def test_litellm_log_env_var_preserves_existing() -> None:
    os.environ["LITELLM_LOG"] = "ERROR"
    try:
        setup_logging()
        assert os.environ["LITELLM_LOG"] == "ERROR"
    finally:
        os.environ.pop("LITELLM_LOG", None)


def test_suppressed_loggers_at_warning() -> None:
    setup_logging()
    for name in _SUPPRESSED_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


def test_cleanup_clears_litellm_handlers() -> None:
    lg = logging.getLogger("LiteLLM")
    lg.addHandler(logging.StreamHandler())
    lg.propagate = False

    cleanup_third_party_handlers()

    assert lg.handlers == []
    assert lg.propagate is True


def test_cleanup_is_idempotent() -> None:
    cleanup_third_party_handlers()
    lg = logging.getLogger("LiteLLM")
    handler = logging.StreamHandler()
    lg.addHandler(handler)
    try:
        cleanup_third_party_handlers()  # no-op
        assert handler in lg.handlers
    finally:
        lg.removeHandler(handler)


def test_set_level_changes_root() -> None:
    root = logging.getLogger()
    previous = root.level
    try:
        set_level("DEBUG")
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous)
