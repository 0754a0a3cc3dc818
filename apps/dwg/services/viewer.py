"""
DWG Viewer Service - the operations the HTTP layer and tasks call.

Combines:
- files: listing and metadata of the source drawings
- RenderCache: whole-drawing and per-section PNG previews
- FloorPlanAssembler: wall geometry per floor for the 3D viewer

Usage:
    viewer = DWGViewerService.from_settings()
    viewer.list_source_files()
    png_path = viewer.get_preview("rilievo.dwg")
    plan = viewer.get_floor_plan("rilievo.dwg")
"""
import logging
from pathlib import Path
from typing import Callable, Optional

from .decoder import CADDocument, get_decoder_status, open_document
from .files import get_file_info, list_source_files, resolve_source
from .floor_plan import FloorPlanAssembler
from .models import FloorPlan
from .render_cache import RenderCache

logger = logging.getLogger(__name__)


class DWGViewerService:
    """Facade over the viewer services for one source directory."""

    def __init__(self, config, decoder: Callable[[Path], CADDocument] = open_document):
        self.config = config
        self.files_dir = Path(config.files_dir)
        self.render_cache = RenderCache(
            cache_dir=config.cache_dir,
            scratch_dir=config.scratch_dir,
            decoder=decoder,
            width=config.render_width,
            height=config.render_height,
            background=config.render_background,
        )
        self.assembler = FloorPlanAssembler(
            floors=config.floors,
            sections=config.sections,
            default_height=config.default_height,
            decoder=decoder,
        )

    @classmethod
    def from_settings(cls) -> "DWGViewerService":
        from ..conf import get_viewer_config
        return cls(get_viewer_config())

    # -------------------------------------------------------------------------
    # FILES
    # -------------------------------------------------------------------------

    def list_source_files(self) -> list[dict]:
        return list_source_files(self.files_dir, self.config.source_patterns)

    def get_file_info(self, file_name: str) -> dict:
        return get_file_info(resolve_source(self.files_dir, file_name))

    # -------------------------------------------------------------------------
    # PREVIEWS
    # -------------------------------------------------------------------------

    def get_preview(self, file_name: str) -> Path:
        """Path of a fresh PNG preview of the whole drawing."""
        source = resolve_source(self.files_dir, file_name)
        return self.render_cache.get_or_render(source)

    def get_section_preview(self, file_name: str, section: str) -> Path:
        """Path of a fresh PNG preview for one section."""
        source = resolve_source(self.files_dir, file_name)
        return self.render_cache.get_or_render(source, section)

    # -------------------------------------------------------------------------
    # GEOMETRY
    # -------------------------------------------------------------------------

    def get_floor_plan(self, file_name: str) -> FloorPlan:
        """Floor plan of a drawing; only a missing file raises."""
        source = resolve_source(self.files_dir, file_name)
        return self.assembler.from_file(source)

    @staticmethod
    def get_decoder_status() -> dict:
        return get_decoder_status()


def get_viewer(config: Optional[object] = None) -> DWGViewerService:
    """Viewer for the given config, or the one from Django settings."""
    if config is None:
        return DWGViewerService.from_settings()
    return DWGViewerService(config)
