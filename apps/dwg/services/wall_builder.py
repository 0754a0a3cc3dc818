"""Wall segment builder: point sequences to consecutive wall segments."""
from typing import Iterable

from .models import NormalizedEntity, WallSegment

CLOSED_KIND_MARKER = "Polyline"


def is_closed_kind(kind: str) -> bool:
    # Case-sensitive: matches "Polyline" and "LwPolyline" only.
    return CLOSED_KIND_MARKER in kind


def segments_for(entity: NormalizedEntity) -> list[WallSegment]:
    points = entity.points
    if len(points) < 2:
        return []

    segments = [
        WallSegment(start, end, entity.kind, entity.layer)
        for start, end in zip(points, points[1:])
    ]
    if len(points) > 2 and is_closed_kind(entity.kind):
        segments.append(
            WallSegment(points[-1], points[0], entity.kind, entity.layer)
        )
    return segments


def build_segments(entities: Iterable[NormalizedEntity]) -> list[WallSegment]:
    """
    Build wall segments for entities in order.

    Every entity with at least two points contributes one segment per
    consecutive point pair. Polyline kinds with more than two points get an
    extra closing segment from the last point back to the first.
    """
    segments: list[WallSegment] = []
    for entity in entities:
        segments.extend(segments_for(entity))
    return segments
