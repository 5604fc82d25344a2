"""Internal geometric models for assembly layout."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict

import cadquery as cq


class PartType(Enum):
    """Types of parts in the clock."""

    BASE_PLATE = "base_plate"
    FRICTION_REDUCER = "friction_reducer"
    BEARING = "bearing"
    MOTOR_GEAR = "motor_gear"
    MIDDLE_GEAR = "middle_gear"
    PENULTIMATE_GEAR = "penultimate_gear"
    FINAL_GEAR = "final_gear"
    CLOCK_FACE = "clock_face"
    HAND = "hand"
    MOTOR_BLOCK = "motor_block"
    ENCLOSURE = "enclosure"


@dataclass
class PartPlacement:
    """Placement of a part in the assembly coordinate frame."""

    part_type: PartType
    part_id: str
    origin: tuple[float, float, float] = (0.0, 0.0, 0.0)
    rotation: tuple[float, float, float] = (0.0, 0.0, 0.0)  # Euler angles (degrees)
    metadata: Optional[Dict[str, float]] = None

    def to_location(self) -> cq.Location:
        """Convert to CadQuery Location for assembly positioning."""
        return cq.Location(
            cq.Vector(*self.origin),
            cq.Vector(1, 0, 0),
            self.rotation[0],
        ) * cq.Location(
            cq.Vector(0, 0, 0),
            cq.Vector(0, 1, 0),
            self.rotation[1],
        ) * cq.Location(
            cq.Vector(0, 0, 0),
            cq.Vector(0, 0, 1),
            self.rotation[2],
        )


@dataclass
class ShaftAxis:
    """A vertical rotation axis shared by coaxial parts."""

    axis_id: str
    direction: tuple[float, float, float]  # Unit vector
    origin: tuple[float, float, float]
    parts: list[str] = field(default_factory=list)


@dataclass
class MatePair:
    """Mating constraint between two parts (gear mesh, shaft in hole...)."""

    part_a: str
    part_b: str
    mate_type: str  # "gear_mesh", "shaft_hole", "key", "press_fit"
    clearance: float = 0.0


@dataclass
class PartMetadata:
    """Metadata for BOM generation."""

    part_id: str
    part_type: PartType
    name: str
    material: str = "PLA"
    count: int = 1
    printed: bool = True
    dimensions: dict[str, float] = field(default_factory=dict)
    notes: Optional[str] = None


@dataclass
class AssemblyModel:
    """Complete assembly model with all parts and constraints."""

    parts: dict[str, PartPlacement] = field(default_factory=dict)
    shafts: list[ShaftAxis] = field(default_factory=list)
    mate_pairs: list[MatePair] = field(default_factory=list)

    def add_part(
        self,
        part_type: PartType,
        part_id: str,
        origin: tuple[float, float, float] = (0.0, 0.0, 0.0),
        rotation: tuple[float, float, float] = (0.0, 0.0, 0.0),
        metadata: Optional[Dict[str, float]] = None,
    ) -> PartPlacement:
        """Add a part to the assembly."""
        placement = PartPlacement(
            part_type=part_type,
            part_id=part_id,
            origin=origin,
            rotation=rotation,
            metadata=metadata,
        )
        self.parts[part_id] = placement
        return placement

    def add_shaft_axis(
        self,
        axis_id: str,
        origin: tuple[float, float, float],
        parts: Optional[list[str]] = None,
        direction: tuple[float, float, float] = (0.0, 0.0, 1.0),
    ) -> ShaftAxis:
        """Define a rotation axis for coaxial parts."""
        shaft = ShaftAxis(
            axis_id=axis_id,
            direction=direction,
            origin=origin,
            parts=parts or [],
        )
        self.shafts.append(shaft)
        return shaft

    def add_mate(
        self,
        part_a: str,
        part_b: str,
        mate_type: str,
        clearance: float = 0.0,
    ) -> MatePair:
        """Add a mating constraint between parts."""
        mate = MatePair(
            part_a=part_a,
            part_b=part_b,
            mate_type=mate_type,
            clearance=clearance,
        )
        self.mate_pairs.append(mate)
        return mate

    def shaft_for(self, part_id: str) -> Optional[ShaftAxis]:
        """Find the axis a part turns on."""
        for shaft in self.shafts:
            if part_id in shaft.parts:
                return shaft
        return None
