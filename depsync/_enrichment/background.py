"""Fire-and-forget enrichment after a sync."""

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional, Protocol, Sequence

import requests
import sentry_sdk

from .._graph.protocol import GraphStore
from ..config import Config
from ..http_client import create_session
from ..logging_config import logger
from .models import EnrichmentGapReport
from .pipeline import EnrichmentPipeline, hash_enrichment, license_enrichment


class GapNotifier(Protocol):
    """Receives the gap report of every enrichment pass."""

    def notify(self, product_id: str, kind: str, report: EnrichmentGapReport) -> None:
        ...


class LoggingGapNotifier:
    """Default notifier: logs the report."""

    def notify(self, product_id: str, kind: str, report: EnrichmentGapReport) -> None:
        if report.total == 0:
            logger.debug(f"Nothing to {kind}-enrich for product {product_id}")
            return
        logger.info(f"{kind.capitalize()} gaps for product {product_id}: {report.to_dict()}")


class BackgroundEnricher:
    """
    Runs enrichment pipelines for a product on a worker pool.

    submit() returns immediately with a Future resolving to the reports
    keyed by pipeline kind. Each pipeline runs inside its own error
    boundary, so a failing notifier or pipeline is logged and reported to
    Sentry without stopping the next pipeline or surfacing to the caller.
    """

    def __init__(
        self,
        pipelines: Sequence[EnrichmentPipeline],
        notifier: Optional[GapNotifier] = None,
        max_workers: int = 2,
    ):
        self.pipelines = list(pipelines)
        self.notifier = notifier or LoggingGapNotifier()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="depsync-enrich")

    @classmethod
    def from_config(
        cls,
        store: GraphStore,
        config: Optional[Config] = None,
        notifier: Optional[GapNotifier] = None,
        session: Optional[requests.Session] = None,
    ) -> "BackgroundEnricher":
        """Hash enrichment followed by license enrichment, sharing one HTTP session."""
        config = config or Config()
        session = session or create_session()
        return cls(
            [hash_enrichment(store, config, session=session), license_enrichment(store, config, session=session)],
            notifier=notifier,
            max_workers=config.enrichment_workers,
        )

    def submit(self, product_id: str) -> Future:
        logger.info(f"Queued enrichment for product {product_id}")
        return self._executor.submit(self.run, product_id)

    def run(self, product_id: str) -> dict[str, EnrichmentGapReport]:
        """Run every pipeline in order in the calling thread."""
        reports = {}
        for pipeline in self.pipelines:
            try:
                report = pipeline.run(product_id)
                reports[pipeline.kind] = report
                self.notifier.notify(product_id, pipeline.kind, report)
            except Exception as e:
                logger.error(f"{pipeline.kind.capitalize()} enrichment failed for product {product_id}: {e}")
                sentry_sdk.capture_exception(e)
        return reports

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
