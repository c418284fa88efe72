"""Batched enrichment of graph nodes from package registries."""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Sequence

import requests
from packageurl import PackageURL

from .._graph.models import MISSING_HASH, MISSING_LICENSE, DependencyNode, NodeSelector
from .._graph.protocol import GraphStore
from ..config import Config
from ..http_client import create_session
from ..logging_config import logger
from .lookups import default_hash_lookups, default_license_lookups
from .models import EnrichmentGapReport, GapReason, HashRecord
from .protocol import RegistryLookup


def _hash_attrs(record: HashRecord, lookup: RegistryLookup) -> dict:
    return {
        "hash": record.value,
        "hash_algorithm": record.algorithm.value,
        "download_url": record.download_url,
    }


def _license_attrs(license_id: str, lookup: RegistryLookup) -> dict:
    return {"license": license_id, "license_source": lookup.name}


@dataclass
class EnrichmentTarget:
    """
    What one enrichment pass fills in.

    Attributes:
        kind: Short name used in logs and notifications ("hash", "license")
        selector: Which of a product's nodes still need the value
        lookups: Registry lookups, tried in order for each node
        to_attrs: Turns a fetched value into node attributes
        gap_field: Node attribute holding the gap reason
        enriched_at_field: Node attribute holding the enrichment time
    """

    kind: str
    selector: NodeSelector
    lookups: Sequence[RegistryLookup]
    to_attrs: Callable[[Any, RegistryLookup], dict]
    gap_field: str
    enriched_at_field: str


def hash_target(lookups: Optional[Sequence[RegistryLookup]] = None) -> EnrichmentTarget:
    return EnrichmentTarget(
        kind="hash",
        selector=MISSING_HASH,
        lookups=list(lookups) if lookups is not None else default_hash_lookups(),
        to_attrs=_hash_attrs,
        gap_field="hash_gap_reason",
        enriched_at_field="hash_enriched_at",
    )


def license_target(lookups: Optional[Sequence[RegistryLookup]] = None) -> EnrichmentTarget:
    return EnrichmentTarget(
        kind="license",
        selector=MISSING_LICENSE,
        lookups=list(lookups) if lookups is not None else default_license_lookups(),
        to_attrs=_license_attrs,
        gap_field="license_gap_reason",
        enriched_at_field="license_enriched_at",
    )


@dataclass
class _Item:
    node: DependencyNode
    purl: PackageURL
    lookups: list = field(default_factory=list)


@dataclass
class _Outcome:
    value: Any = None
    lookup: Optional[RegistryLookup] = None
    error: Optional[Exception] = None


class EnrichmentPipeline:
    """
    Fills in one attribute for a product's nodes from package registries.

    A run selects the nodes the target's selector matches, then triages
    them. Nodes without a version, or whose purl no lookup supports, are
    skipped with a gap reason and cost no request. The rest are fetched
    in concurrent batches with a per-request timeout. Results are written
    back sequentially in the calling thread, and the pipeline pauses
    between batches to stay polite to public registries.

    Example:
        pipeline = EnrichmentPipeline(store, hash_target(), config)
        report = pipeline.run("product-1")
        print(report.to_dict())
    """

    def __init__(
        self,
        store: GraphStore,
        target: EnrichmentTarget,
        config: Optional[Config] = None,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        config = config or Config()
        self.store = store
        self.target = target
        self.batch_size = config.batch_size
        self.batch_delay = config.batch_delay
        self.request_timeout = config.request_timeout
        self.session = session or create_session()
        self._sleep = sleep

    @property
    def kind(self) -> str:
        return self.target.kind

    def run(self, product_id: str) -> EnrichmentGapReport:
        """
        Enrich a product's nodes. Never raises.

        Returns:
            EnrichmentGapReport whose counters always add up to total
        """
        started = time.monotonic()
        report = EnrichmentGapReport()
        try:
            nodes = self.store.select_nodes_needing_enrichment(product_id, self.target.selector)
        except Exception as e:
            logger.error(f"Failed to select nodes for {self.kind} enrichment of {product_id}: {e}")
            return report

        pending = {node.purl: node for node in nodes}
        nodes = list(pending.values())
        report.total = len(nodes)
        if not nodes:
            logger.info(f"No nodes need {self.kind} enrichment for product {product_id}")
            return report

        try:
            eligible = self._triage(nodes, report, pending)
            self._process(eligible, report, pending)
        except Exception as e:
            logger.error(f"{self.kind.capitalize()} enrichment of {product_id} aborted: {e}")
            for node in list(pending.values()):
                self._record_gap(node, GapReason.FETCH_ERROR, report, pending)

        report.duration = time.monotonic() - started
        gaps = ", ".join(f"{reason.camel}={count}" for reason, count in report.gaps.items())
        logger.info(
            f"{self.kind.capitalize()} enrichment for {product_id} finished in {report.duration:.1f}s: "
            f"{report.enriched} enriched, {report.skipped} skipped, {report.failed} failed "
            f"of {report.total} ({gaps})"
        )
        return report

    def _triage(self, nodes: list[DependencyNode], report: EnrichmentGapReport, pending: dict) -> list[_Item]:
        eligible = []
        for node in nodes:
            try:
                purl = PackageURL.from_string(node.purl)
            except ValueError:
                purl = None

            version = node.version or (purl.version if purl else None)
            if not version:
                self._record_gap(node, GapReason.NO_VERSION, report, pending)
                continue

            lookups = [lookup for lookup in self.target.lookups if lookup.supports(purl)] if purl else []
            if not lookups:
                self._record_gap(node, GapReason.UNSUPPORTED_ECOSYSTEM, report, pending)
                continue

            if purl.version != version:
                purl = PackageURL(
                    type=purl.type,
                    namespace=purl.namespace,
                    name=purl.name,
                    version=version,
                    qualifiers=purl.qualifiers,
                    subpath=purl.subpath,
                )
            eligible.append(_Item(node=node, purl=purl, lookups=lookups))

        logger.debug(f"{len(eligible)} of {len(nodes)} nodes eligible for {self.kind} lookup")
        return eligible

    def _process(self, items: list[_Item], report: EnrichmentGapReport, pending: dict) -> None:
        batches = [items[i : i + self.batch_size] for i in range(0, len(items), self.batch_size)]
        for index, batch in enumerate(batches):
            with ThreadPoolExecutor(max_workers=len(batch)) as executor:
                outcomes = list(executor.map(self._fetch, batch))

            for item, outcome in zip(batch, outcomes):
                self._write_back(item, outcome, report, pending)

            if index < len(batches) - 1 and self.batch_delay > 0:
                self._sleep(self.batch_delay)

    def _fetch(self, item: _Item) -> _Outcome:
        """Try each supporting lookup in order. Any exception is captured, never raised."""
        error = None
        for lookup in item.lookups:
            try:
                value = lookup.fetch(item.purl, self.session, self.request_timeout)
            except Exception as e:
                logger.warning(f"{lookup.name} {self.kind} lookup failed for {item.node.purl}: {e}")
                error = e
                continue
            if value is not None:
                return _Outcome(value=value, lookup=lookup)
        return _Outcome(error=error)

    def _write_back(self, item: _Item, outcome: _Outcome, report: EnrichmentGapReport, pending: dict) -> None:
        node = item.node
        if outcome.value is None:
            reason = GapReason.FETCH_ERROR if outcome.error is not None else GapReason.NOT_FOUND
            self._record_gap(node, reason, report, pending)
            return

        attrs = self.target.to_attrs(outcome.value, outcome.lookup)
        attrs[self.target.gap_field] = None
        attrs[self.target.enriched_at_field] = datetime.now(timezone.utc)
        try:
            self.store.update_node(node.purl, attrs)
        except Exception as e:
            logger.warning(f"Failed to store {self.kind} for {node.purl}: {e}")
            self._record_gap(node, GapReason.FETCH_ERROR, report, pending)
            return

        pending.pop(node.purl, None)
        report.record_enriched()

    def _record_gap(self, node: DependencyNode, reason: GapReason, report: EnrichmentGapReport, pending: dict) -> None:
        if pending.pop(node.purl, None) is None:
            return
        report.record(reason)
        try:
            self.store.update_node(node.purl, {self.target.gap_field: reason.value})
        except Exception as e:
            logger.warning(f"Failed to record {self.kind} gap '{reason.value}' for {node.purl}: {e}")


def hash_enrichment(store: GraphStore, config: Optional[Config] = None, **kwargs) -> EnrichmentPipeline:
    """Pipeline filling in registry-published artifact hashes."""
    return EnrichmentPipeline(store, hash_target(), config, **kwargs)


def license_enrichment(store: GraphStore, config: Optional[Config] = None, **kwargs) -> EnrichmentPipeline:
    """Pipeline filling in licenses missing from the SBOM."""
    return EnrichmentPipeline(store, license_target(), config, **kwargs)
