"""Pytest configuration and shared fixtures for all tests."""

import pytest


@pytest.fixture(autouse=True)
def disable_sentry_for_tests(monkeypatch):
    """Disable Sentry telemetry for all tests.

    This fixture runs automatically for every test to prevent Sentry events
    from being sent during test runs. Tests that exercise Sentry setup
    (like test_sentry_filtering.py) build their Config directly and patch
    sentry_sdk.init.
    """
    monkeypatch.setenv("TELEMETRY", "false")
