from pathlib import Path

REPOSITORY_MARKERS = ("pyproject.toml", ".git")


def find_repository_root(start: Path | None = None) -> Path:
    """Walk up from ``start`` until a directory holding a repository marker is found.

    Falls back to the current working directory when no marker exists,
    e.g. when the package is installed into site-packages.
    """
    current = (start or Path(__file__)).resolve()
    for candidate in (current, *current.parents):
        if any((candidate / marker).exists() for marker in REPOSITORY_MARKERS):
            return candidate
    return Path.cwd()
