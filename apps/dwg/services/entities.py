"""
Capability adapters over decoder entities.

Each adapter wraps one ezdxf entity and exposes exactly the fields the
normalizer needs for that kind. Reads go through ``_field``/``_point`` so a
missing or malformed value always surfaces as FieldExtractionError, never
as a bare AttributeError from deep inside the decoder.

    adapter = adapt(entity)
    if adapter is not None:
        points = adapter.points()
"""
import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Optional

from .errors import FieldExtractionError
from .models import Point2D
from .tessellator import tessellate_arc, tessellate_circle

logger = logging.getLogger(__name__)

_MISSING = object()


def _to_point(value: Any, field_name: str) -> Point2D:
    """Convert a Vec2/Vec3/tuple into a Point2D."""
    try:
        return Point2D(float(value[0]), float(value[1]))
    except (TypeError, IndexError, ValueError) as e:
        raise FieldExtractionError(
            f"Field '{field_name}' is not a point",
            details={"value": repr(value)},
        ) from e


def _to_float(value: Any, field_name: str) -> float:
    try:
        result = float(value)
    except (TypeError, ValueError) as e:
        raise FieldExtractionError(
            f"Field '{field_name}' is not numeric",
            details={"value": repr(value)},
        ) from e
    if math.isnan(result):
        raise FieldExtractionError(f"Field '{field_name}' is NaN")
    return result


class EntityAdapter(ABC):
    """Base capability: kind name, layer and the entity's point sequence."""

    kind: str = ""

    def __init__(self, entity):
        self.entity = entity

    @property
    def layer(self) -> str:
        dxf = getattr(self.entity, "dxf", None)
        layer = getattr(dxf, "layer", None) if dxf is not None else None
        return layer if isinstance(layer, str) else ""

    def _field(self, name: str) -> Any:
        dxf = getattr(self.entity, "dxf", None)
        value = getattr(dxf, name, _MISSING) if dxf is not None else _MISSING
        if value is _MISSING or value is None:
            raise FieldExtractionError(
                f"{self.kind} entity has no field '{name}'"
            )
        return value

    def _point(self, name: str) -> Point2D:
        return _to_point(self._field(name), name)

    def _float(self, name: str) -> float:
        return _to_float(self._field(name), name)

    @abstractmethod
    def points(self) -> list[Point2D]:
        """Point sequence of the entity; raises FieldExtractionError."""


class LineLike(EntityAdapter):
    kind = "Line"

    def start(self) -> Point2D:
        return self._point("start")

    def end(self) -> Point2D:
        return self._point("end")

    def points(self) -> list[Point2D]:
        return [self.start(), self.end()]


class PolylineLike(EntityAdapter):
    """
    Heavy POLYLINE entity, vertices are sub-entities with a location.

    Polyface meshes also store their faces as VERTEX records located at the
    origin; those are not points of the outline and are skipped.
    """

    kind = "Polyline"

    def vertices(self) -> list[Point2D]:
        vertices = getattr(self.entity, "vertices", None)
        if vertices is None:
            raise FieldExtractionError("Polyline entity has no vertices")
        try:
            return [
                _to_point(vertex.dxf.location, "location")
                for vertex in vertices
                if not getattr(vertex, "is_face_record", False)
            ]
        except AttributeError as e:
            raise FieldExtractionError("Polyline vertex has no location") from e

    def points(self) -> list[Point2D]:
        return self.vertices()


class LwPolylineLike(PolylineLike):
    kind = "LwPolyline"

    def vertices(self) -> list[Point2D]:
        get_points = getattr(self.entity, "get_points", None)
        if get_points is None:
            raise FieldExtractionError("LwPolyline entity has no points")
        return [_to_point(p, "points") for p in get_points("xy")]


class CircleLike(EntityAdapter):
    kind = "Circle"

    def center(self) -> Point2D:
        return self._point("center")

    def radius(self) -> float:
        return self._float("radius")

    def points(self) -> list[Point2D]:
        return tessellate_circle(self.center(), self.radius())


class ArcLike(CircleLike):
    """ARC entity. ezdxf stores angles in degrees."""

    kind = "Arc"

    def start_angle(self) -> float:
        return math.radians(self._float("start_angle"))

    def end_angle(self) -> float:
        return math.radians(self._float("end_angle"))

    def points(self) -> list[Point2D]:
        return tessellate_arc(
            self.center(), self.radius(), self.start_angle(), self.end_angle()
        )


class SplineLike(EntityAdapter):
    kind = "Spline"

    def control_points(self) -> list[Point2D]:
        control = getattr(self.entity, "control_points", None)
        if control is None or len(control) == 0:
            control = getattr(self.entity, "fit_points", None)
        if control is None:
            raise FieldExtractionError("Spline entity has no control points")
        return [_to_point(p, "control_points") for p in control]

    def points(self) -> list[Point2D]:
        return self.control_points()


class GenericPointLike(LineLike):
    """Unrecognised kind that still carries start/end points."""

    def __init__(self, entity, kind: str):
        super().__init__(entity)
        self.kind = kind

    @classmethod
    def supports(cls, entity) -> bool:
        dxf = getattr(entity, "dxf", None)
        if dxf is None:
            return False
        return all(
            getattr(dxf, name, None) is not None for name in ("start", "end")
        )


ADAPTERS: dict[str, type[EntityAdapter]] = {
    "LINE": LineLike,
    "LWPOLYLINE": LwPolylineLike,
    "POLYLINE": PolylineLike,
    "ARC": ArcLike,
    "CIRCLE": CircleLike,
    "SPLINE": SplineLike,
}


def entity_type(entity) -> str:
    dxftype = getattr(entity, "dxftype", None)
    if callable(dxftype):
        return str(dxftype())
    return type(entity).__name__.upper()


def adapt(entity) -> Optional[EntityAdapter]:
    """Wrap an entity in its capability adapter, or None if unsupported."""
    etype = entity_type(entity)
    adapter_cls = ADAPTERS.get(etype)
    if adapter_cls is not None:
        return adapter_cls(entity)
    if GenericPointLike.supports(entity):
        return GenericPointLike(entity, etype)
    logger.debug(f"Skipping unsupported entity type {etype}")
    return None
