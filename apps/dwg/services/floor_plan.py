"""
Floor Plan Assembler.

Runs the extraction pipeline over a decoded drawing:

    entities -> normalize -> classify per floor -> build_segments -> FloorPlan

A floor plan request never fails on a broken drawing. If decoding or entity
traversal raises, the configured floors come back with empty wall lists so
the 3D viewer still gets a structurally valid building.

    assembler = FloorPlanAssembler()
    plan = assembler.from_file("rilievo.dwg")
    plan.to_dict()
"""
import logging
from dataclasses import replace
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from .decoder import CADDocument, open_document
from .errors import SourceNotFound
from .floor_classifier import DEFAULT_FLOORS, entities_for_floor
from .models import Floor, FloorDefinition, FloorPlan, Section
from .normalizer import normalize_all
from .wall_builder import build_segments

logger = logging.getLogger(__name__)

DEFAULT_SECTIONS: tuple[Section, ...] = (
    Section(name="stato-di-fatto", label="STATO DI FATTO"),
    Section(name="progetto", label="PROGETTO"),
)

DEFAULT_HEIGHT = 3.0


class FloorPlanAssembler:
    """Builds FloorPlan records from drawings using configured floors."""

    def __init__(
        self,
        floors: Sequence[FloorDefinition] = DEFAULT_FLOORS,
        sections: Sequence[Section] = DEFAULT_SECTIONS,
        default_height: float = DEFAULT_HEIGHT,
        decoder: Callable[[Path], CADDocument] = open_document,
    ):
        self.floors = tuple(floors)
        self.sections = tuple(sections)
        self.default_height = default_height
        self.decoder = decoder

    def assemble(self, document: CADDocument) -> FloorPlan:
        """
        Extract the floor plan of a decoded document.

        Exceptions from entity traversal propagate; from_file() turns them
        into the empty fallback plan.
        """
        normalized = list(normalize_all(document.all_entities()))
        logger.info(f"Normalized {len(normalized)} entities")

        floors = []
        for definition in self.floors:
            walls = build_segments(entities_for_floor(normalized, definition))
            logger.debug(f"{definition.name}: {len(walls)} wall segments")
            floors.append(self._floor(definition, tuple(walls)))

        return FloorPlan(
            sections=self._with_floors(self.sections),
            floors=tuple(floors),
            default_height=self.default_height,
        )

    def empty_plan(self) -> FloorPlan:
        """Configured floors without walls and the fixed section list."""
        return FloorPlan(
            sections=self._with_floors(DEFAULT_SECTIONS),
            floors=tuple(self._floor(d, ()) for d in self.floors),
            default_height=self.default_height,
            degraded=True,
        )

    def from_file(self, filepath: Union[str, Path]) -> FloorPlan:
        """
        Decode a drawing and assemble its floor plan.

        Raises:
            SourceNotFound: the file does not exist
        """
        filepath = Path(filepath)
        if not filepath.is_file():
            raise SourceNotFound(
                f"File not found: {filepath.name}",
                details={"path": str(filepath)},
            )

        try:
            document = self.decoder(filepath)
            return self.assemble(document)
        except Exception:
            logger.exception(
                f"Floor plan extraction failed for {filepath.name}, returning empty floors"
            )
            return self.empty_plan()

    def _with_floors(self, sections: Sequence[Section]) -> tuple[Section, ...]:
        """Sections without an explicit floor list show every configured floor."""
        names = tuple(d.name for d in self.floors)
        return tuple(s if s.floors else replace(s, floors=names) for s in sections)

    @staticmethod
    def _floor(definition: FloorDefinition, walls: tuple) -> Floor:
        return Floor(
            name=definition.name,
            vertical_offset=definition.vertical_offset,
            height=definition.height,
            walls=walls,
            tint_color=definition.tint_color,
        )


def get_floor_plan(filepath: Union[str, Path],
                   floors: Optional[Sequence[FloorDefinition]] = None) -> FloorPlan:
    """Quick extraction with the default configuration."""
    assembler = FloorPlanAssembler(floors=floors or DEFAULT_FLOORS)
    return assembler.from_file(filepath)
