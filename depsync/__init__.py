"""depsync - dependency discovery, canonicalization and enrichment."""


def _get_version() -> str:
    """Get package version from installed metadata or pyproject.toml."""
    try:
        from importlib.metadata import version

        return version("depsync")
    except Exception:
        pass

    try:
        from pathlib import Path

        import tomllib

        pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                data = tomllib.load(f)
            return data.get("project", {}).get("version", "unknown")
    except Exception:
        pass

    return "unknown"


__version__ = _get_version()
