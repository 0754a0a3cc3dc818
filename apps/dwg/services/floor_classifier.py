"""
Layer-name based floor classification.

Floors are configured as FloorDefinition records. The default set mirrors
the Italian survey drawings this viewer was built for: walls on the
"PIANO TERZO" (third floor) layers and on the "SOTTOTETTO" (attic) layers.
The third floor also collects every entity whose layer does not mention the
attic. The two rules may overlap; an entity can sit on both floors.
"""
from typing import Iterable, Optional, Sequence

from .models import FloorDefinition, NormalizedEntity

PIANO_TERZO = "PIANO TERZO"
SOTTOTETTO = "SOTTOTETTO"

DEFAULT_FLOORS: tuple[FloorDefinition, ...] = (
    FloorDefinition(
        name=PIANO_TERZO,
        vertical_offset=0.0,
        height=3.0,
        tint_color=(74, 144, 226),
        keywords=("TERZO", "PIANO"),
        default_unless=("SOTTOTETTO", "TETTO"),
    ),
    FloorDefinition(
        name=SOTTOTETTO,
        vertical_offset=3.0,
        height=2.5,
        tint_color=(230, 126, 34),
        keywords=("SOTTOTETTO", "TETTO"),
    ),
)


def matches(definition: FloorDefinition, layer: str) -> bool:
    """Check a layer name against one floor definition."""
    layer_upper = (layer or "").upper()
    if any(word.upper() in layer_upper for word in definition.keywords):
        return True
    if definition.default_unless is not None:
        return not any(
            word.upper() in layer_upper for word in definition.default_unless
        )
    return False


def find_floor(floor_name: str,
               floors: Sequence[FloorDefinition] = DEFAULT_FLOORS
               ) -> Optional[FloorDefinition]:
    for definition in floors:
        if definition.name == floor_name:
            return definition
    return None


def classify(entity: NormalizedEntity, floor_name: str,
             floors: Sequence[FloorDefinition] = DEFAULT_FLOORS) -> bool:
    """True if the entity belongs to the named floor. Unknown floors never match."""
    definition = find_floor(floor_name, floors)
    if definition is None:
        return False
    return matches(definition, entity.layer)


def entities_for_floor(entities: Iterable[NormalizedEntity],
                       definition: FloorDefinition) -> list[NormalizedEntity]:
    return [e for e in entities if matches(definition, e.layer)]
