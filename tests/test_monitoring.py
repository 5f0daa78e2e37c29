"""
Tests for monitoring helpers
"""
import logging

import pytest

from catalog_service.core.monitoring import monitor_performance


@monitor_performance
def double(value):
    return value * 2


@monitor_performance
def explode():
    raise ValueError("boom")


def test_result_returned_and_duration_logged(caplog):
    with caplog.at_level(logging.INFO, logger="catalog_service.core.monitoring"):
        assert double(21) == 42

    assert "double.duration" in caplog.text
    assert "'status': 'success'" in caplog.text


def test_exception_propagates_and_is_tracked(caplog):
    with caplog.at_level(logging.INFO, logger="catalog_service.core.monitoring"):
        with pytest.raises(ValueError):
            explode()

    assert "explode.error" in caplog.text
    assert "'status': 'error'" in caplog.text


def test_wrapper_keeps_function_name():
    assert double.__name__ == "double"
