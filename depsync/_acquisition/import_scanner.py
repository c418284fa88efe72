"""Import-statement scanning for repositories without lockfiles."""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional, Sequence

from .._lockfiles.models import DependencyCollector, Ecosystem, ParsedDependency
from .._providers.protocol import RepoProvider
from ..config import DEFAULT_MAX_SOURCE_FILES
from ..logging_config import logger
from .languages import DEFAULT_PLUGINS, DETECTION_THRESHOLD, LanguagePlugin

MAX_FILE_BYTES = 1 * 1024 * 1024
MAX_TOTAL_BYTES = 50 * 1024 * 1024
CONCURRENT_FETCHES = 10
TOTAL_TIMEOUT = 120.0  # seconds
MANY_PACKAGES = 5


@dataclass
class ImportScanResult:
    """Packages inferred from source imports."""

    dependencies: list[ParsedDependency]
    languages_detected: list[str]
    total_imports: int
    files_scanned: int
    files_skipped: int = 0
    confidence: str = "low"

    @property
    def total_packages(self) -> int:
        return len(self.dependencies)


@dataclass
class _FetchOutcome:
    contents: dict[str, str] = field(default_factory=dict)
    skipped: int = 0


class ImportScanner:
    """
    Infers dependencies from import statements in source files.

    The scan lists the repository tree, keeps files with a known source
    extension (capped at max_source_files), fetches them in concurrent
    batches within per-file and total size budgets, assigns each file to
    the best-scoring language plugin and maps non-stdlib imports to
    package references. Versions are unknown, so every package is
    reported without a version.
    """

    def __init__(
        self,
        plugins: Sequence[LanguagePlugin] = DEFAULT_PLUGINS,
        max_source_files: int = DEFAULT_MAX_SOURCE_FILES,
        max_file_bytes: int = MAX_FILE_BYTES,
        max_total_bytes: int = MAX_TOTAL_BYTES,
        concurrency: int = CONCURRENT_FETCHES,
        total_timeout: float = TOTAL_TIMEOUT,
    ):
        self.plugins = list(plugins)
        self.max_source_files = max_source_files
        self.max_file_bytes = max_file_bytes
        self.max_total_bytes = max_total_bytes
        self.concurrency = concurrency
        self.total_timeout = total_timeout

    def is_source_file(self, path: str) -> bool:
        return any(plugin.matches_extension(path) for plugin in self.plugins)

    def scan(self, provider: RepoProvider, owner: str, repo: str, branch: str) -> Optional[ImportScanResult]:
        """
        Scan a repository's source files.

        Returns:
            ImportScanResult, or None when no source files, languages or
            external packages were found.
        """
        started = time.monotonic()
        deadline = started + self.total_timeout

        source_files = [p for p in provider.list_repo_files(owner, repo, branch) if self.is_source_file(p)]
        if not source_files:
            logger.info(f"No source files found in {owner}/{repo}, skipping import scan")
            return None
        if len(source_files) > self.max_source_files:
            logger.info(
                f"Skipping {len(source_files) - self.max_source_files} source files (capped at {self.max_source_files})"
            )
            source_files = source_files[: self.max_source_files]

        logger.info(f"Scanning {len(source_files)} source files in {owner}/{repo}")
        fetched = self._fetch_files(provider, owner, repo, branch, source_files, deadline)
        if fetched.skipped:
            logger.info(f"Skipped {fetched.skipped} files (missing, oversized or over budget)")
        if not fetched.contents:
            logger.info("No file contents fetched, aborting import scan")
            return None

        file_plugins: dict[str, LanguagePlugin] = {}
        for path, content in fetched.contents.items():
            plugin = self.detect_language(path, content)
            if plugin is not None:
                file_plugins[path] = plugin
        languages = list(dict.fromkeys(plugin.id for plugin in file_plugins.values()))
        if not languages:
            logger.info("No languages detected above confidence threshold")
            return None

        imports: dict[str, tuple[LanguagePlugin, str]] = {}
        for path, plugin in file_plugins.items():
            for entry in plugin.extract_imports(fetched.contents[path]):
                imports.setdefault(f"{plugin.id}:{entry.module}", (plugin, entry.module))

        dependencies = self._map_packages(imports.values())
        if not dependencies:
            logger.info("No external packages detected in imports")
            return None

        confidence = "medium" if len(dependencies) >= MANY_PACKAGES else "low"
        logger.info(
            f"Import scan complete in {time.monotonic() - started:.1f}s: {len(languages)} language(s), "
            f"{len(imports)} imports, {len(dependencies)} packages, confidence {confidence}"
        )
        return ImportScanResult(
            dependencies=dependencies,
            languages_detected=languages,
            total_imports=len(imports),
            files_scanned=len(fetched.contents),
            files_skipped=fetched.skipped,
            confidence=confidence,
        )

    def detect_language(self, path: str, content: str) -> Optional[LanguagePlugin]:
        """Pick the plugin with the highest detection score, if above threshold.

        Plugins claiming the file's extension are scored first so they win ties.
        """
        candidates = [p for p in self.plugins if p.matches_extension(path)]
        candidates += [p for p in self.plugins if p not in candidates]

        best, best_score = None, 0
        for plugin in candidates:
            score = plugin.detect(content, path)
            if score > best_score:
                best, best_score = plugin, score
        return best if best_score >= DETECTION_THRESHOLD else None

    def _map_packages(self, imports) -> list[ParsedDependency]:
        collector = DependencyCollector(Ecosystem.SYSTEM)
        for plugin, module in imports:
            if plugin.is_stdlib(module):
                continue
            package = plugin.map_to_package(module)
            if package is None:
                continue
            collector.add(
                package.name,
                "",
                is_direct=True,
                ecosystem=package.ecosystem,
                key=f"{package.ecosystem.value}:{package.name}",
            )
        # distinct import spellings can normalise to the same purl
        seen: set[str] = set()
        unique = []
        for dep in collector.dependencies:
            if dep.purl not in seen:
                seen.add(dep.purl)
                unique.append(dep)
        return unique

    def _fetch_files(
        self,
        provider: RepoProvider,
        owner: str,
        repo: str,
        branch: str,
        paths: list[str],
        deadline: float,
    ) -> _FetchOutcome:
        outcome = _FetchOutcome()
        total_bytes = 0

        with ThreadPoolExecutor(max_workers=self.concurrency) as executor:
            for start in range(0, len(paths), self.concurrency):
                if time.monotonic() > deadline:
                    logger.warning(f"Import scan timed out after {self.total_timeout:.0f}s")
                    outcome.skipped += len(paths) - start
                    break

                batch = paths[start : start + self.concurrency]
                futures = [
                    executor.submit(provider.get_file_content, owner, repo, branch, path) for path in batch
                ]
                for offset, (path, future) in enumerate(zip(batch, futures)):
                    try:
                        content = future.result()
                    except Exception as e:
                        logger.debug(f"Failed to fetch {path}: {e}")
                        outcome.skipped += 1
                        continue
                    if content is None:
                        outcome.skipped += 1
                        continue

                    size = len(content.encode("utf-8"))
                    if size > self.max_file_bytes:
                        outcome.skipped += 1
                        continue
                    if total_bytes + size > self.max_total_bytes:
                        logger.info(f"Content cap reached ({total_bytes / 1024 / 1024:.1f} MB), stopping fetches")
                        outcome.skipped += len(paths) - (start + offset)
                        return outcome
                    total_bytes += size
                    outcome.contents[path] = content

        return outcome
