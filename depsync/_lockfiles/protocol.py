"""Protocol definition for lockfile and manifest parsers."""

from typing import Protocol

from .models import Ecosystem, ParsedDependency


class LockfileParser(Protocol):
    """Protocol for lockfile parsing plugins.

    Each parser turns the raw text of one file format into a list of
    ParsedDependency objects. Parsers are pure: no I/O, no shared state.
    They are registered with ParserRegistry in priority order and
    selected by exact filename.

    Example:
        class CargoLockParser:
            name = "cargo-lock"
            supported_files = ("Cargo.lock",)
            ecosystem = Ecosystem.CARGO

            def supports(self, filename: str) -> bool:
                return filename in self.supported_files

            def parse(self, content: str) -> list[ParsedDependency]:
                ...
    """

    @property
    def name(self) -> str:
        """Human-readable name of this parser, used for logging."""
        ...

    @property
    def supported_files(self) -> tuple[str, ...]:
        """Filenames (not paths) this parser handles."""
        ...

    @property
    def ecosystem(self) -> Ecosystem:
        """Primary ecosystem of the dependencies this parser emits."""
        ...

    def supports(self, filename: str) -> bool:
        """Check if this parser can handle the given filename."""
        ...

    def parse(self, content: str) -> list[ParsedDependency]:
        """Parse file content and return its dependencies.

        Implementations may raise on malformed input; the registry
        converts any exception into an empty result.

        Args:
            content: Full text of the file

        Returns:
            Deduplicated list of dependencies. Empty if none found.
        """
        ...
