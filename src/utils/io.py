import json
import os
import stat
import tempfile
from pathlib import Path
from typing import List, Dict, Optional, Any


def maybe_load_yaml(path: Optional[str]) -> Dict[str, Any]:
    """Load YAML config file with fallback to empty dict."""
    if not path:
        return {}
    try:
        import yaml  # type: ignore

        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except Exception:
        return {}


def ensure_dir(path: str | Path) -> Path:
    """Ensure the directory exists and return the Path."""
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def read_lines(path: str | Path) -> List[str]:
    """Return the stripped, non-blank lines of a text file."""
    with open(path, "r", encoding="utf-8") as f:
        return [line.strip() for line in f.read().split("\n") if line.strip()]


def _file_mode(target: Path) -> int:
    """Mode for a rewritten file: keep the existing one, else 0666 minus the umask."""
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def atomic_write_json(path: str | Path, payload: Any, indent: int = 2) -> Path:
    """
    Write ``payload`` as JSON so readers only ever see the old or the new file.

    The document is written to a temporary file in the target directory and
    then renamed over ``path``.

    Args:
        path: Destination file
        payload: JSON-serialisable object
        indent: Pretty-print indentation

    Returns:
        The destination path
    """
    target = Path(path)
    ensure_dir(target.parent)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=indent)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, _file_mode(target))
        # Atomic rename onto the destination
        tmp_path.replace(target)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    return target
