"""Test Sentry error filtering for user vs system errors."""

import unittest
from unittest.mock import patch

from depsync.cli.main import initialize_sentry
from depsync.config import Config
from depsync.exceptions import ConfigurationError, ProviderError, StoreError, UnsupportedRepositoryError

DSN = "https://public@o0.ingest.sentry.io/0"


def capture_before_send():
    with patch("depsync.cli.main.sentry_sdk.init") as mock_init:
        initialized = initialize_sentry(Config(sentry_dsn=DSN, telemetry=True))
    assert initialized
    return mock_init.call_args.kwargs["before_send"]


def hint_for(error):
    return {"exc_info": (type(error), error, None)}


class TestSentryFiltering(unittest.TestCase):
    def test_sentry_filters_configuration_errors(self):
        """
        Test that ConfigurationError is filtered from Sentry.
        This represents user configuration errors.
        """
        before_send = capture_before_send()
        event = {"exception": {"values": [{"type": "ConfigurationError"}]}}
        self.assertIsNone(before_send(event, hint_for(ConfigurationError("bad config"))))

    def test_sentry_filters_unsupported_repository(self):
        """Test that an unsupported repository URL is not tracked."""
        before_send = capture_before_send()
        event = {"exception": {"values": [{"type": "UnsupportedRepositoryError"}]}}
        self.assertIsNone(before_send(event, hint_for(UnsupportedRepositoryError("gitlab.com"))))

    def test_sentry_allows_system_errors(self):
        """
        Test that provider and store failures are NOT filtered from Sentry.
        These represent outages or bugs that should be tracked.
        """
        before_send = capture_before_send()
        for error in (ProviderError("GitHub API error 500", status_code=500), StoreError("Neo4j down")):
            event = {"exception": {"values": [{"type": type(error).__name__}]}}
            self.assertEqual(before_send(event, hint_for(error)), event)

    def test_events_without_exception_pass(self):
        """Test that message events are kept."""
        before_send = capture_before_send()
        event = {"message": "hello"}
        self.assertEqual(before_send(event, {}), event)

    def test_not_initialized_without_dsn_or_telemetry(self):
        """Test that Sentry stays off without a DSN or with telemetry disabled."""
        with patch("depsync.cli.main.sentry_sdk.init") as mock_init:
            self.assertFalse(initialize_sentry(Config()))
            self.assertFalse(initialize_sentry(Config(sentry_dsn=DSN, telemetry=False)))
        mock_init.assert_not_called()
