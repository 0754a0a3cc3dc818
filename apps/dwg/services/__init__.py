"""DWG viewer services: decoder, normalizer, floor_plan, render_cache, viewer."""
from .decoder import CADDocument, get_decoder_status, open_document
from .errors import (
    CachePersistError,
    DecodeError,
    DWGViewerError,
    FieldExtractionError,
    InvalidSectionError,
    RenderError,
    ScratchCopyError,
    SourceNotFound,
)
from .floor_classifier import DEFAULT_FLOORS, classify
from .floor_plan import FloorPlanAssembler, get_floor_plan
from .models import Floor, FloorDefinition, FloorPlan, NormalizedEntity, Point2D, WallSegment
from .normalizer import normalize
from .render_cache import RenderCache
from .tessellator import tessellate_arc, tessellate_circle
from .viewer import DWGViewerService, get_viewer
from .wall_builder import build_segments

__all__ = [
    "CADDocument",
    "CachePersistError",
    "DEFAULT_FLOORS",
    "DWGViewerError",
    "DWGViewerService",
    "DecodeError",
    "FieldExtractionError",
    "Floor",
    "FloorDefinition",
    "FloorPlan",
    "FloorPlanAssembler",
    "InvalidSectionError",
    "NormalizedEntity",
    "Point2D",
    "RenderCache",
    "RenderError",
    "ScratchCopyError",
    "SourceNotFound",
    "WallSegment",
    "build_segments",
    "classify",
    "get_decoder_status",
    "get_floor_plan",
    "get_viewer",
    "normalize",
    "open_document",
    "tessellate_arc",
    "tessellate_circle",
]
