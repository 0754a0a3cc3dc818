"""
Entity normalizer.

Turns decoder entities into NormalizedEntity records. This is a best-effort
reader: an entity whose fields cannot be read is dropped and the rest of
the extraction carries on.
"""
import logging
from typing import Iterable, Iterator, Optional

from .entities import adapt
from .errors import FieldExtractionError
from .models import NormalizedEntity

logger = logging.getLogger(__name__)


def normalize(entity) -> Optional[NormalizedEntity]:
    """
    Normalize one drawing entity.

    Returns:
        NormalizedEntity with at least one point, or None when the entity
        kind is unsupported or none of its points could be read.
    """
    adapter = adapt(entity)
    if adapter is None:
        return None

    try:
        points = adapter.points()
    except FieldExtractionError as e:
        logger.debug(f"Skipping {adapter.kind} on layer '{adapter.layer}': {e}")
        return None

    if not points:
        return None

    return NormalizedEntity(
        kind=adapter.kind,
        layer=adapter.layer,
        points=tuple(points),
    )


def normalize_all(entities: Iterable) -> Iterator[NormalizedEntity]:
    """Normalize entities in order, skipping those that yield no points."""
    for entity in entities:
        normalized = normalize(entity)
        if normalized is not None:
            yield normalized
