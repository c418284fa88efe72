"""Tests for background enrichment and gap notification."""

from unittest.mock import Mock, patch

import requests

from depsync._enrichment import BackgroundEnricher, EnrichmentGapReport, GapReason, LoggingGapNotifier
from depsync._graph import InMemoryGraphStore
from depsync.config import Config


def fake_pipeline(kind, report=None, error=None):
    pipeline = Mock()
    pipeline.kind = kind
    if error is not None:
        pipeline.run.side_effect = error
    else:
        pipeline.run.return_value = report or EnrichmentGapReport()
    return pipeline


class TestBackgroundEnricher:
    """Tests for BackgroundEnricher."""

    def test_runs_pipelines_in_order_and_notifies(self):
        """Test that each pipeline report reaches the notifier."""
        hash_report = EnrichmentGapReport(total=2, enriched=2)
        license_report = EnrichmentGapReport(total=1)
        license_report.record(GapReason.NOT_FOUND)
        notifier = Mock()

        enricher = BackgroundEnricher(
            [fake_pipeline("hash", hash_report), fake_pipeline("license", license_report)], notifier=notifier
        )
        try:
            reports = enricher.run("web")
        finally:
            enricher.shutdown()

        assert reports == {"hash": hash_report, "license": license_report}
        assert [c.args for c in notifier.notify.call_args_list] == [
            ("web", "hash", hash_report),
            ("web", "license", license_report),
        ]

    @patch("depsync._enrichment.background.sentry_sdk.capture_exception")
    def test_failing_pipeline_isolated(self, mock_capture):
        """Test that one failing pipeline is reported and the next still runs."""
        error = RuntimeError("boom")
        license_pipeline = fake_pipeline("license")
        enricher = BackgroundEnricher([fake_pipeline("hash", error=error), license_pipeline], notifier=Mock())
        try:
            reports = enricher.run("web")
        finally:
            enricher.shutdown()

        assert list(reports) == ["license"]
        license_pipeline.run.assert_called_once_with("web")
        mock_capture.assert_called_once_with(error)

    @patch("depsync._enrichment.background.sentry_sdk.capture_exception")
    def test_failing_notifier_isolated(self, mock_capture):
        """Test that a notifier error does not stop enrichment."""
        notifier = Mock()
        notifier.notify.side_effect = ValueError("webhook down")
        enricher = BackgroundEnricher([fake_pipeline("hash"), fake_pipeline("license")], notifier=notifier)
        try:
            enricher.run("web")
        finally:
            enricher.shutdown()

        assert notifier.notify.call_count == 2
        assert mock_capture.call_count == 2

    def test_submit_returns_future(self):
        """Test that submit runs the pipelines off the calling thread."""
        report = EnrichmentGapReport()
        enricher = BackgroundEnricher([fake_pipeline("hash", report)], notifier=Mock())
        try:
            future = enricher.submit("web")
            assert future.result(timeout=5) == {"hash": report}
        finally:
            enricher.shutdown()

    def test_from_config(self):
        """Test that the default enricher runs hash then license enrichment on one session."""
        session = Mock(spec=requests.Session)
        enricher = BackgroundEnricher.from_config(InMemoryGraphStore(), Config(enrichment_workers=1), session=session)
        try:
            assert [p.kind for p in enricher.pipelines] == ["hash", "license"]
            assert all(p.session is session for p in enricher.pipelines)
            assert isinstance(enricher.notifier, LoggingGapNotifier)
        finally:
            enricher.shutdown()


class TestLoggingGapNotifier:
    """Tests for the default notifier."""

    def test_logs_report(self):
        """Test that a non-empty report is logged at info level."""
        report = EnrichmentGapReport(total=1)
        report.record(GapReason.NO_VERSION)
        with patch("depsync._enrichment.background.logger") as mock_logger:
            LoggingGapNotifier().notify("web", "hash", report)
        message = mock_logger.info.call_args[0][0]
        assert "Hash gaps for product web" in message
        assert "'noVersion': 1" in message

    def test_empty_report_not_logged_at_info(self):
        """Test that an empty pass only logs at debug level."""
        with patch("depsync._enrichment.background.logger") as mock_logger:
            LoggingGapNotifier().notify("web", "license", EnrichmentGapReport())
        mock_logger.info.assert_not_called()
        mock_logger.debug.assert_called_once()
