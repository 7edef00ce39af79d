from pathlib import Path


def find_repo_root(start: Path | None = None, marker: str = "pyproject.toml") -> Path:
    """Walk upwards from ``start`` until a folder containing ``marker`` is found.

    Args:
        start: Optional starting path. Defaults to the location of this file.
        marker: Filename used to identify the repository root.

    Returns:
        The repository root, or the starting folder when no marker exists
        (e.g. when installed into site-packages).
    """
    p = (start or Path(__file__).resolve()).parent
    for candidate in [p, *p.parents]:
        if (candidate / marker).exists():
            return candidate
    return p


def resolve_repo_path(path: str | Path | None, root: Path, default: Path) -> Path:
    """Resolve a user-supplied path against the repository root.

    Empty values give ``default``; relative paths are taken from ``root`` so
    the dashboard finds its files regardless of the working directory that
    ``streamlit run`` was started from.
    """
    if not path:
        return default
    p = Path(path).expanduser()
    return p if p.is_absolute() else root / p
