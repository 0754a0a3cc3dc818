"""
Typed access to ``settings.DWG_VIEWER``.

Every key is optional; missing keys fall back to the service defaults.
"""
from dataclasses import dataclass
from pathlib import Path

from django.conf import settings

from .services.floor_classifier import DEFAULT_FLOORS
from .services.floor_plan import DEFAULT_HEIGHT, DEFAULT_SECTIONS
from .services.files import DEFAULT_PATTERNS
from .services.models import FloorDefinition, Section
from .services.render_cache import RENDER_BACKGROUND, RENDER_HEIGHT, RENDER_WIDTH


@dataclass(frozen=True)
class ViewerConfig:
    files_dir: Path
    cache_dir: Path
    scratch_dir: Path
    source_patterns: tuple[str, ...] = DEFAULT_PATTERNS
    render_width: int = RENDER_WIDTH
    render_height: int = RENDER_HEIGHT
    render_background: str = RENDER_BACKGROUND
    default_height: float = DEFAULT_HEIGHT
    floors: tuple[FloorDefinition, ...] = DEFAULT_FLOORS
    sections: tuple[Section, ...] = DEFAULT_SECTIONS


def _floor(raw: dict) -> FloorDefinition:
    default_unless = raw.get("default_unless")
    return FloorDefinition(
        name=raw["name"],
        vertical_offset=float(raw.get("vertical_offset", 0.0)),
        height=float(raw.get("height", DEFAULT_HEIGHT)),
        tint_color=tuple(raw.get("tint_color", (128, 128, 128))),
        keywords=tuple(raw.get("keywords", ())),
        default_unless=tuple(default_unless) if default_unless is not None else None,
    )


def get_viewer_config() -> ViewerConfig:
    raw = getattr(settings, "DWG_VIEWER", {})
    base_dir = Path(getattr(settings, "BASE_DIR", Path.cwd()))

    floors = raw.get("FLOORS")
    sections = raw.get("SECTIONS")

    return ViewerConfig(
        files_dir=Path(raw.get("FILES_DIR", base_dir / "wwwroot" / "files")),
        cache_dir=Path(raw.get("CACHE_DIR", base_dir / "wwwroot" / "cache")),
        scratch_dir=Path(raw.get("SCRATCH_DIR", base_dir / "tmp" / "dwg-viewer")),
        source_patterns=tuple(raw.get("SOURCE_PATTERNS", DEFAULT_PATTERNS)),
        render_width=int(raw.get("RENDER_WIDTH", RENDER_WIDTH)),
        render_height=int(raw.get("RENDER_HEIGHT", RENDER_HEIGHT)),
        render_background=raw.get("RENDER_BACKGROUND", RENDER_BACKGROUND),
        default_height=float(raw.get("DEFAULT_HEIGHT", DEFAULT_HEIGHT)),
        floors=tuple(_floor(f) for f in floors) if floors else DEFAULT_FLOORS,
        sections=(
            tuple(
                Section(s["name"], s["label"], tuple(s.get("floors", ())))
                for s in sections
            )
            if sections else DEFAULT_SECTIONS
        ),
    )
