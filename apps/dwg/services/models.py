"""
Data models for floor-plan extraction.

Plain dataclasses shared by the normalizer, the wall builder and the
floor plan assembler. Everything returned to callers is frozen.
"""
from dataclasses import dataclass, field
from typing import Optional

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class Point2D:
    """Point in drawing units."""
    x: float
    y: float

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class NormalizedEntity:
    """One drawing entity reduced to its kind, layer and point sequence."""
    kind: str
    layer: str
    points: tuple[Point2D, ...]


@dataclass(frozen=True)
class WallSegment:
    """Straight wall piece between two points."""
    start: Point2D
    end: Point2D
    source_kind: str
    source_layer: str

    def to_dict(self) -> dict:
        return {
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
            "sourceKind": self.source_kind,
            "sourceLayer": self.source_layer,
        }


@dataclass(frozen=True)
class FloorDefinition:
    """
    Configured floor.

    An entity belongs to the floor when its layer contains one of
    ``keywords``. When ``default_unless`` is set, entities whose layer
    contains none of those words are also assigned here (catch-all floor).
    Matching is case-insensitive.
    """
    name: str
    vertical_offset: float
    height: float
    tint_color: RGB
    keywords: tuple[str, ...] = ()
    default_unless: Optional[tuple[str, ...]] = None


@dataclass(frozen=True)
class Floor:
    name: str
    vertical_offset: float
    height: float
    walls: tuple[WallSegment, ...]
    tint_color: RGB

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "verticalOffset": self.vertical_offset,
            "height": self.height,
            "tintColor": list(self.tint_color),
            "walls": [w.to_dict() for w in self.walls],
        }


@dataclass(frozen=True)
class Section:
    name: str
    label: str
    floors: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {"name": self.name, "label": self.label, "floors": list(self.floors)}


@dataclass(frozen=True)
class FloorPlan:
    """Top-level result of floor plan extraction."""
    sections: tuple[Section, ...]
    floors: tuple[Floor, ...]
    default_height: float
    degraded: bool = field(default=False, compare=False)

    def floor(self, name: str) -> Optional[Floor]:
        for floor in self.floors:
            if floor.name == name:
                return floor
        return None

    def to_dict(self) -> dict:
        return {
            "sections": [s.to_dict() for s in self.sections],
            "floors": [f.to_dict() for f in self.floors],
            "defaultHeight": self.default_height,
        }
