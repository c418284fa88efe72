"""Registry for lockfile and manifest parsers."""

from ..logging_config import logger
from .models import LockfileParseResult
from .protocol import LockfileParser


class ParserRegistry:
    """Ordered registry of lockfile parsers.

    Registration order is priority order: callers that probe a repository
    for dependency files walk supported_files front to back and stop at
    the first file that yields dependencies, so lockfiles must be
    registered before manifests.

    parse() never raises. An unknown filename or a parser failure
    produces an empty LockfileParseResult tagged with the filename.

    Example:
        registry = ParserRegistry()
        registry.register(PackageLockParser())
        registry.register(RequirementsTxtParser())

        result = registry.parse("package-lock.json", content)
    """

    def __init__(self) -> None:
        self._parsers: list[LockfileParser] = []

    def register(self, parser: LockfileParser) -> None:
        """Register a parser at the lowest priority so far.

        Args:
            parser: Parser instance implementing LockfileParser protocol.
        """
        self._parsers.append(parser)
        logger.debug(f"Registered lockfile parser: {parser.name} for {parser.supported_files}")

    def get_parser_for(self, filename: str) -> LockfileParser | None:
        """Get the parser that supports this filename.

        Args:
            filename: Filename (not full path) to find parser for

        Returns:
            Parser instance if found, None otherwise.
        """
        for parser in self._parsers:
            if parser.supports(filename):
                return parser
        return None

    def parse(self, filename: str, content: str) -> LockfileParseResult:
        """Parse file content with the parser registered for filename.

        Args:
            filename: Filename (not full path) used to select the parser
            content: Raw file content

        Returns:
            LockfileParseResult, empty if no parser matched or parsing failed.
        """
        parser = self.get_parser_for(filename)
        if parser is None:
            logger.debug(f"No lockfile parser found for: {filename}")
            return LockfileParseResult(lockfile_type=filename)

        try:
            dependencies = parser.parse(content)
        except Exception as e:
            logger.warning(f"Failed to parse {filename} with {parser.name}: {e}")
            return LockfileParseResult(lockfile_type=filename, ecosystem=parser.ecosystem)

        logger.debug(f"Extracted {len(dependencies)} dependencies from {filename}")
        return LockfileParseResult(
            lockfile_type=filename,
            ecosystem=parser.ecosystem,
            dependencies=dependencies,
        )

    @property
    def registered_parsers(self) -> list[str]:
        """Get names of all registered parsers in priority order."""
        return [p.name for p in self._parsers]

    @property
    def supported_files(self) -> list[str]:
        """Get all supported filenames in priority order."""
        result: list[str] = []
        for parser in self._parsers:
            result.extend(f for f in parser.supported_files if f not in result)
        return result
