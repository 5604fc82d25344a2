"""Assembly builder - composes the clock scene from the specification."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional

import cadquery as cq

from ..models.spec import ClockSpec
from ..models.geometry import AssemblyModel, PartType, PartMetadata
from ..models.kinematic import KinematicModel
from ..generators import (
    PartGenerator,
    SpurGearGenerator,
    CompoundGearGenerator,
    FinalGearGenerator,
    BasePlateGenerator,
    FrictionReducerGenerator,
    BearingGenerator,
    ClockFaceGenerator,
    HandGenerator,
    MotorBlockGenerator,
    EnclosureGenerator,
    ClockHardware,
    LayoutCalculator,
)
from .layout import LayoutSolver, layout_parts

logger = logging.getLogger(__name__)

# Printed upside down so the larger gear sits on the bed
FLIP_FOR_PRINT = {PartType.PENULTIMATE_GEAR, PartType.MIDDLE_GEAR}

# Helix hand per rotating body; meshing gears alternate
HELIX_HAND = {
    PartType.MOTOR_GEAR: 1,
    PartType.MIDDLE_GEAR: -1,
    PartType.PENULTIMATE_GEAR: 1,
    PartType.FINAL_GEAR: -1,
}


class ViewMode(str, Enum):
    """Scene views the builder can compose."""
    modeling = "modeling"
    print_layout = "print"
    animate = "animate"


class AssemblyBuilder:
    """Builds CadQuery assemblies of the clock from a specification."""

    def __init__(self, spec: ClockSpec, hardware: Optional[ClockHardware] = None):
        self.spec = spec
        self.hardware = hardware or ClockHardware()
        self.train_layout = LayoutCalculator.calculate_train_layout(spec, self.hardware)
        self.kinematics = KinematicModel.create_clock(spec.train)
        self.layout: Optional[AssemblyModel] = None
        self.parts: dict[str, cq.Workplane] = {}
        self.metadata: dict[str, PartMetadata] = {}

        self._generators = self._create_generators()

    def _create_generators(self) -> dict[PartType, PartGenerator]:
        spec = self.spec
        train = spec.train
        tol = spec.tolerances
        hw = self.hardware
        layout = self.train_layout

        free_bore = train.axle_diameter + tol.axle_clearance
        motor_bore = hw.motor.shaft_diameter + tol.shaft_clearance

        generators: dict[PartType, PartGenerator] = {
            PartType.BASE_PLATE: BasePlateGenerator(spec, layout, hw),
            PartType.FRICTION_REDUCER: FrictionReducerGenerator(hw.reducer, tol),
            PartType.BEARING: BearingGenerator(hw.bearing),
            PartType.MOTOR_BLOCK: MotorBlockGenerator(layout.motor_block_height, hw.motor_block),
            PartType.MOTOR_GEAR: SpurGearGenerator(
                train.gear(train.motor_teeth, motor_bore, HELIX_HAND[PartType.MOTOR_GEAR]),
                d_flat_depth=hw.motor.shaft_flat_depth,
                part_type=PartType.MOTOR_GEAR,
            ),
            PartType.MIDDLE_GEAR: CompoundGearGenerator(
                train.gear(train.middle_small_teeth, free_bore, HELIX_HAND[PartType.MIDDLE_GEAR]),
                train.gear(train.middle_large_teeth, free_bore, HELIX_HAND[PartType.MIDDLE_GEAR]),
                train.layer_gap,
                part_type=PartType.MIDDLE_GEAR,
            ),
            PartType.PENULTIMATE_GEAR: CompoundGearGenerator(
                train.gear(
                    train.penultimate_small_teeth, free_bore, HELIX_HAND[PartType.PENULTIMATE_GEAR]
                ),
                train.gear(
                    train.penultimate_large_teeth, free_bore, HELIX_HAND[PartType.PENULTIMATE_GEAR]
                ),
                train.layer_gap,
                part_type=PartType.PENULTIMATE_GEAR,
            ),
            PartType.FINAL_GEAR: FinalGearGenerator(
                train.gear(train.final_teeth, train.axle_diameter, HELIX_HAND[PartType.FINAL_GEAR]),
                spindle_height=layout.spindle_height,
                key_height=spec.face.thickness,
                params=hw.spindle,
            ),
            PartType.CLOCK_FACE: ClockFaceGenerator(spec.face, hw.spindle, tol),
        }

        if spec.include_accessories:
            hand_length = LayoutCalculator.calculate_hand_length(spec, layout, hw)
            generators[PartType.HAND] = HandGenerator(hand_length, hw.hand)
            generators[PartType.ENCLOSURE] = EnclosureGenerator(spec, layout, hw)

        return generators

    def generate_parts(self) -> dict[str, cq.Workplane]:
        """Generate every part once, in its own frame."""
        if self.parts:
            return self.parts

        for part_type, generator in self._generators.items():
            part_id = part_type.value
            self.parts[part_id] = generator.generate()
            self.metadata[part_id] = generator.get_metadata()
            logger.info(f"Generated {part_id}")

        return self.parts

    def modeling(self, step: float = 0.0) -> cq.Assembly:
        """Every part in its mounting position, the train advanced to ``step``."""
        parts = self.generate_parts()
        self.layout = LayoutSolver(self.spec, self.hardware, self.kinematics).solve(step)

        assembly = cq.Assembly(name=self.spec.clock.name)
        for part_id, placement in self.layout.parts.items():
            part = parts.get(part_id)
            if part is None:
                logger.warning(f"No generator for part {part_id}")
                continue
            assembly.add(
                part,
                name=part_id,
                loc=placement.to_location(),
                color=self._get_color(placement.part_type),
            )
        return assembly

    def print_layout(self) -> cq.Assembly:
        """Every printed part laid flat on the bed.

        Parts are packed by translation only. The compound gears are first
        turned over once to their print orientation, which does not depend on
        the train step.
        """
        parts = self.generate_parts()
        flat = []
        for part_type in self._generators:
            part_id = part_type.value
            if not self.metadata[part_id].printed:
                continue
            shape = parts[part_id]
            if part_type in FLIP_FOR_PRINT:
                shape = shape.rotate((0, 0, 0), (1, 0, 0), 180)
            flat.append((part_id, shape))
        return layout_parts(flat)

    def animate(self, time: float) -> cq.Assembly:
        """Modeling view at normalized animation time in [0, 1]."""
        return self.modeling(KinematicModel.animation_step(time))

    def build(
        self,
        mode: ViewMode = ViewMode.modeling,
        step: float = 0.0,
        time: float = 0.0,
    ) -> cq.Assembly:
        """Build the requested view."""
        mode = ViewMode(mode)
        if mode == ViewMode.print_layout:
            return self.print_layout()
        if mode == ViewMode.animate:
            return self.animate(time)
        return self.modeling(step)

    def _get_color(self, part_type: PartType) -> cq.Color:
        """Get color for part type (for visualization)."""
        colors = {
            PartType.BASE_PLATE: cq.Color(0.7, 0.7, 0.7, 1.0),  # Gray
            PartType.FRICTION_REDUCER: cq.Color(0.4, 0.4, 0.4, 1.0),
            PartType.BEARING: cq.Color(0.75, 0.75, 0.8, 1.0),  # Steel
            PartType.MOTOR_BLOCK: cq.Color(0.3, 0.3, 0.3, 1.0),
            PartType.MOTOR_GEAR: cq.Color(0.9, 0.2, 0.2, 1.0),  # Red
            PartType.MIDDLE_GEAR: cq.Color(0.9, 0.6, 0.2, 1.0),  # Orange
            PartType.PENULTIMATE_GEAR: cq.Color(0.2, 0.8, 0.2, 1.0),  # Green
            PartType.FINAL_GEAR: cq.Color(0.2, 0.6, 0.9, 1.0),  # Blue
            PartType.CLOCK_FACE: cq.Color(0.95, 0.95, 0.9, 1.0),  # Ivory
            PartType.HAND: cq.Color(0.1, 0.1, 0.1, 1.0),
            PartType.ENCLOSURE: cq.Color(0.6, 0.45, 0.3, 0.8),  # Wood, semi-transparent
        }
        return colors.get(part_type, cq.Color(0.8, 0.8, 0.8, 1.0))

    def get_bom(self) -> list[dict[str, Any]]:
        """Get bill of materials."""
        self.generate_parts()
        bom = []
        for part_id, meta in self.metadata.items():
            bom.append({
                "part_id": part_id,
                "name": meta.name,
                "material": meta.material,
                "count": meta.count,
                "printed": meta.printed,
                "dimensions": meta.dimensions,
                "notes": meta.notes,
            })
        return bom
