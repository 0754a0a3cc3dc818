"""
Render Cache Service

Keeps one PNG preview per source drawing (and one per section) on disk.
An entry is fresh when its modification time is not older than the
source's; fresh entries are served without decoding anything.

Writes go to a unique temporary file in the cache directory and are moved
into place with os.replace(), so concurrent renders of the same drawing
never expose a truncated PNG and a failed render leaves nothing behind.

Usage:
    cache = RenderCache(cache_dir, scratch_dir)
    png_path = cache.get_or_render(Path("files/rilievo.dwg"))
    section_png = cache.get_or_render(Path("files/rilievo.dwg"), "progetto")
"""
import logging
import os
import shutil
import tempfile
import uuid
from pathlib import Path
from typing import Callable, Optional, Union

from .decoder import CADDocument, open_document
from .errors import (
    CachePersistError,
    DecodeError,
    InvalidSectionError,
    RenderError,
    ScratchCopyError,
    SourceNotFound,
)

logger = logging.getLogger(__name__)

RENDER_WIDTH = 1600
RENDER_HEIGHT = 1600
RENDER_BACKGROUND = "#ffffff"


def filter_section(document: CADDocument, section: Optional[str]) -> CADDocument:
    """
    Restrict a document to the layers of one section.

    Not implemented yet: the document is returned unchanged, so section
    previews currently show the whole drawing.
    """
    if section is not None:
        logger.info(f"Section filtering not implemented, rendering full drawing for '{section}'")
    return document


def cache_file_name(source_name: str, section: Optional[str] = None) -> str:
    """
    ``{name}.png`` for the whole drawing, ``{name}_{section}.png`` per section.

    Keyed on the full file name, extension included.
    """
    base_name = Path(source_name).name
    if section is None:
        return f"{base_name}.png"
    if not section or "/" in section or "\\" in section or section in (".", ".."):
        raise InvalidSectionError(
            f"Invalid section: {section!r}",
            details={"section": section},
        )
    return f"{base_name}_{section}.png"


class RenderCache:
    """Filesystem-backed cache of rendered previews."""

    def __init__(
        self,
        cache_dir: Union[str, Path],
        scratch_dir: Union[str, Path],
        decoder: Callable[[Path], CADDocument] = open_document,
        width: int = RENDER_WIDTH,
        height: int = RENDER_HEIGHT,
        background: str = RENDER_BACKGROUND,
    ):
        self.cache_dir = Path(cache_dir)
        self.scratch_dir = Path(scratch_dir)
        self.decoder = decoder
        self.width = width
        self.height = height
        self.background = background

    def cache_path(self, source_path: Path, section: Optional[str] = None) -> Path:
        return self.cache_dir / cache_file_name(source_path.name, section)

    def lookup(self, source_path: Union[str, Path],
               section: Optional[str] = None) -> Optional[Path]:
        """Return the cached preview if it is fresh, else None."""
        source_path = Path(source_path)
        cache_path = self.cache_path(source_path, section)
        try:
            cached_mtime = cache_path.stat().st_mtime_ns
            source_mtime = source_path.stat().st_mtime_ns
        except OSError:
            return None
        if cached_mtime >= source_mtime:
            return cache_path
        return None

    def get_or_render(self, source_path: Union[str, Path],
                      section: Optional[str] = None) -> Path:
        """
        Return a fresh preview for the source, rendering it when needed.

        Raises:
            SourceNotFound: source file is missing
            RenderError: decoding or rasterising failed
            CachePersistError: the PNG could not be written to the cache
        """
        source_path = Path(source_path)
        try:
            source_mtime = source_path.stat().st_mtime_ns
        except FileNotFoundError:
            raise SourceNotFound(
                f"File not found: {source_path.name}",
                details={"path": str(source_path)},
            )

        cached = self.lookup(source_path, section)
        if cached is not None:
            logger.debug(f"Cache hit for {cached.name}")
            return cached

        cache_path = self.cache_path(source_path, section)
        logger.info(f"Rendering {source_path.name} -> {cache_path.name}")

        scratch_copy = None
        try:
            try:
                scratch_copy = self._make_scratch_copy(source_path)
            except ScratchCopyError as e:
                logger.warning(f"{e.message}, decoding original file")
            png = self._render(scratch_copy or source_path, section)
        finally:
            if scratch_copy is not None:
                self._remove_scratch_copy(scratch_copy)

        self._persist(png, cache_path, source_mtime)
        return cache_path

    # -------------------------------------------------------------------------
    # INTERNALS
    # -------------------------------------------------------------------------

    def _make_scratch_copy(self, source_path: Path) -> Path:
        """Copy the source to a per-request scratch file."""
        scratch_copy = self.scratch_dir / f"{uuid.uuid4().hex}_{source_path.name}"
        try:
            self.scratch_dir.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source_path, scratch_copy)
        except OSError as e:
            if scratch_copy.exists():
                self._remove_scratch_copy(scratch_copy)
            raise ScratchCopyError(
                f"Could not copy {source_path.name} to scratch directory: {e}",
                details={"scratch_dir": str(self.scratch_dir)},
            ) from e
        return scratch_copy

    @staticmethod
    def _remove_scratch_copy(scratch_copy: Path) -> None:
        try:
            scratch_copy.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove scratch copy {scratch_copy}: {e}")

    def _render(self, path: Path, section: Optional[str]) -> bytes:
        try:
            document = self.decoder(path)
        except DecodeError as e:
            raise RenderError(
                f"Failed to decode drawing: {e.message}",
                details=e.details,
            ) from e

        document = filter_section(document, section)
        return document.rasterize(self.width, self.height, self.background)

    def _persist(self, png: bytes, cache_path: Path, source_mtime_ns: int) -> None:
        """
        Atomically place the PNG at cache_path.

        The file is stamped with the source's mtime as read before decoding,
        so a source modified while rendering is still seen as newer.
        """
        temp_path = None
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                dir=self.cache_dir,
                prefix=f".{cache_path.stem}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                temp_path = Path(f.name)
                f.write(png)
                f.flush()
                os.fsync(f.fileno())
            os.utime(temp_path, ns=(source_mtime_ns, source_mtime_ns))
            os.replace(temp_path, cache_path)
        except OSError as e:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            raise CachePersistError(
                f"Could not write preview {cache_path.name}: {e}",
                details={"cache_path": str(cache_path)},
            ) from e
