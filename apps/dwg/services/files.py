"""Source file listing and metadata."""
import logging
from datetime import datetime
from pathlib import Path
from typing import Sequence, Union

from .errors import SourceNotFound

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS = ("*.dwg", "*.dxf")


def _timestamp(value: float) -> str:
    return datetime.fromtimestamp(value).isoformat()


def list_source_files(directory: Union[str, Path],
                      patterns: Sequence[str] = DEFAULT_PATTERNS) -> list[dict]:
    """
    List drawings in a directory, creating it when missing.

    Returns:
        [{"name", "size", "modifiedAt"}] sorted by name
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    seen = set()
    files = []
    for pattern in patterns:
        for path in directory.glob(pattern):
            if path.name in seen or not path.is_file():
                continue
            seen.add(path.name)
            stat = path.stat()
            files.append({
                "name": path.name,
                "size": stat.st_size,
                "modifiedAt": _timestamp(stat.st_mtime),
            })

    files.sort(key=lambda f: f["name"])
    return files


def resolve_source(directory: Union[str, Path], file_name: str) -> Path:
    """
    Resolve a file name inside the source directory.

    Raises:
        SourceNotFound: missing file, or a name pointing outside the directory
    """
    directory = Path(directory).resolve()
    try:
        path = (directory / file_name).resolve()
        found = path.parent == directory and path.is_file()
    except ValueError:
        # embedded NUL byte
        found = False
    if not found:
        raise SourceNotFound(
            f"File not found: {file_name}",
            details={"name": file_name},
        )
    return path


def get_file_info(path: Union[str, Path]) -> dict:
    """Name, size, modification and creation time of one source file."""
    path = Path(path)
    try:
        stat = path.stat()
    except FileNotFoundError:
        raise SourceNotFound(f"File not found: {path.name}", details={"path": str(path)})

    created = getattr(stat, "st_birthtime", stat.st_ctime)
    return {
        "name": path.name,
        "size": stat.st_size,
        "modifiedAt": _timestamp(stat.st_mtime),
        "createdAt": _timestamp(created),
    }
