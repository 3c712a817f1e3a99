from pathlib import Path


def find_repo_root(start: Path | None = None, markers: tuple[str, ...] = ("pyproject.toml", ".git")) -> Path:
    """Walk upwards from ``start`` until a folder containing one of ``markers`` is found.

    Args:
        start: Optional starting path. Defaults to the location of this file.
        markers: Filenames used to identify the repository root.

    Returns:
        The repository root as a :class:`Path`. Falls back to the current
        working directory when no marker is found (e.g. an installed wheel).
    """
    p = (start or Path(__file__).resolve()).parent
    for candidate in [p, *p.parents]:
        if any((candidate / marker).exists() for marker in markers):
            return candidate
    return Path.cwd()
