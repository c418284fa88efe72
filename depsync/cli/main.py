"""depsync command-line interface."""

import json
import sys
from pathlib import Path
from typing import Optional

import click
import sentry_sdk

from .. import __version__
from .._enrichment import BackgroundEnricher
from .._graph import InMemoryGraphStore, InMemorySnapshotStore
from .._lockfiles import create_default_registry
from ..config import VALID_LOG_LEVELS, Config, load_config
from ..console import (
    console,
    print_final_failure,
    print_formats,
    print_gap_report,
    print_parse_result,
    print_sync_summary,
)
from ..exceptions import ConfigurationError, DepsyncError, UnsupportedRepositoryError
from ..logging_config import logger, setup_logging
from ..service import DependencySyncService

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def initialize_sentry(config: Config) -> bool:
    """
    Initialize Sentry when a DSN is configured and telemetry is enabled.

    Returns:
        True if Sentry was initialized
    """
    if not config.sentry_dsn or not config.telemetry:
        return False

    def before_send(event, hint):
        # user errors are not worth an event
        if "exc_info" in hint:
            _, exc_value, _ = hint["exc_info"]
            if isinstance(exc_value, (ConfigurationError, UnsupportedRepositoryError)):
                return None
        return event

    sentry_sdk.init(dsn=config.sentry_dsn, traces_sample_rate=0.0, before_send=before_send)
    logger.debug("Sentry initialized")
    return True


def _fail(message: str) -> None:
    logger.error(message)
    print_final_failure(message)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, prog_name="depsync")
@click.option(
    "--log-level",
    type=click.Choice(VALID_LOG_LEVELS, case_sensitive=False),
    envvar="DEPSYNC_LOG_LEVEL",
    default="INFO",
    show_default=True,
    help="Logging verbosity.",
)
@click.option(
    "--structured-logs",
    is_flag=True,
    envvar="DEPSYNC_STRUCTURED_LOGS",
    help="Emit JSON log lines.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str, structured_logs: bool) -> None:
    """Discover, canonicalize and enrich repository dependencies."""
    setup_logging(level=log_level.upper(), structured=structured_logs)
    ctx.ensure_object(dict)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--filename", help="Treat the file as this dependency file name (e.g. Cargo.lock).")
@click.option("--json", "as_json", is_flag=True, help="Print dependencies as JSON.")
def parse(file: Path, filename: Optional[str], as_json: bool) -> None:
    """Parse a local lockfile or manifest."""
    name = filename or file.name
    registry = create_default_registry()
    if registry.get_parser_for(name) is None:
        _fail(f"Unsupported dependency file: {name}")

    content = file.read_text(encoding="utf-8", errors="replace")
    result = registry.parse(name, content)

    if as_json:
        payload = {
            "lockfileType": result.lockfile_type,
            "ecosystem": result.ecosystem.value if result.ecosystem else None,
            "dependencies": [
                {
                    "name": dep.name,
                    "version": dep.version,
                    "ecosystem": dep.ecosystem.value,
                    "purl": dep.purl,
                    "isDirect": dep.is_direct,
                }
                for dep in result.dependencies
            ],
        }
        click.echo(json.dumps(payload, indent=2))
    else:
        print_parse_result(result)


@cli.command()
def formats() -> None:
    """List supported dependency files in fallback priority order."""
    print_formats(create_default_registry().supported_files)


@cli.command()
@click.argument("repo_url")
@click.option("--product-id", help="Product identifier; defaults to owner/repo.")
@click.option("--token", help="Access token for the hosting provider.")
@click.option("--no-enrich", is_flag=True, help="Skip hash and license enrichment.")
@click.option("--neo4j-uri", envvar="DEPSYNC_NEO4J_URI", help="Store the graph in Neo4j instead of memory.")
def sync(repo_url: str, product_id: Optional[str], token: Optional[str], no_enrich: bool, neo4j_uri: Optional[str]):
    """Acquire, classify and enrich the dependencies of REPO_URL."""
    try:
        config = load_config()
        if neo4j_uri:
            config.neo4j_uri = neo4j_uri
            config.validate()
        initialize_sentry(config)

        if config.neo4j_uri:
            from .._graph.neo4j_store import Neo4jGraphStore

            graph_store = Neo4jGraphStore(config.neo4j_uri, config.neo4j_user, config.neo4j_password)
            snapshot_store = graph_store
        else:
            graph_store = InMemoryGraphStore()
            snapshot_store = InMemorySnapshotStore()

        service = DependencySyncService(graph_store=graph_store, snapshot_store=snapshot_store, config=config)
        try:
            ref = service.resolve_repository(repo_url)
            product_id = product_id or ref.full_name

            result = service.sync_product(product_id, repo_url, token=token, enrich=False)
            graph = result.graph
            print_sync_summary(
                result.repository,
                result.status,
                source=result.source,
                confidence=result.confidence,
                package_count=result.package_count,
                direct_count=graph.direct_count if graph else 0,
                transitive_count=graph.transitive_count if graph else 0,
                depth_classified=graph.depth_classified if graph else False,
            )
            versions = result.versions
            if versions and versions.total_no_version:
                console.print(
                    f"[info]Resolved {versions.resolved}/{versions.total_no_version} missing versions "
                    f"from package-lock.json[/info]"
                )

            if result.synced and not no_enrich:
                enricher = BackgroundEnricher.from_config(graph_store, config)
                try:
                    reports = enricher.run(product_id)
                finally:
                    enricher.shutdown()
                for kind, report in reports.items():
                    print_gap_report(kind, report)
            elif not result.synced:
                console.print("[warning]No dependency data found in any acquisition tier[/warning]")
        finally:
            if config.neo4j_uri:
                graph_store.close()
    except DepsyncError as e:
        _fail(str(e))


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
