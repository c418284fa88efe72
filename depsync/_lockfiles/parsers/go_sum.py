"""Parser for go.sum files (Go modules)."""

from ..models import DependencyCollector, Ecosystem, ParsedDependency


class GoSumParser:
    """Parser for go.sum files.

    Each module version appears twice, once for the module zip and once
    for its go.mod:
    github.com/gorilla/mux v1.8.0 h1:i40aqfkR1h2SlN9hojwV5ZA91wcXFOvkdNIeFDP5koI=
    github.com/gorilla/mux v1.8.0/go.mod h1:DVbg23sWSpFRCP0SfiEN6jmj59UnW/n46BH5rLB71So=
    """

    name = "go-sum"
    supported_files = ("go.sum",)
    ecosystem = Ecosystem.GO

    def supports(self, filename: str) -> bool:
        return filename in self.supported_files

    def parse(self, content: str) -> list[ParsedDependency]:
        collector = DependencyCollector(self.ecosystem)

        for line in content.splitlines():
            parts = line.split()
            if len(parts) < 3 or not parts[2].startswith("h1:"):
                continue
            module, raw_version = parts[0], parts[1]
            version = raw_version.removesuffix("/go.mod")
            if not version[:1].isdigit() and not version.startswith("v"):
                continue
            collector.add(module, version.removeprefix("v"), is_direct=False)

        return collector.dependencies
