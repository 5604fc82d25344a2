"""Base plate generator.

The plate carries every other part:

- axle sockets on standoff bosses for the two compound gears
- the friction reducer (axle clearance hole + flange screw holes)
- the motor block (motor body cutout + two screw holes)
- four corner holes for mounting in the enclosure
"""

from typing import Optional

import cadquery as cq

from ..models.spec import ClockSpec
from ..models.geometry import PartMetadata, PartType
from .friction_reducer import FrictionReducerGenerator
from .layout import LayoutCalculator, TrainLayout
from .params import ClockHardware

# Stage -> gear layer of its lowest gear
BOSS_LAYERS = {"penultimate": 0, "middle": 1}


class BasePlateGenerator:
    """Generator for the base plate, built in assembly coordinates."""

    def __init__(
        self,
        spec: ClockSpec,
        layout: Optional[TrainLayout] = None,
        hardware: Optional[ClockHardware] = None,
    ):
        self.spec = spec
        self.hardware = hardware or ClockHardware()
        self.layout = layout or LayoutCalculator.calculate_train_layout(spec, self.hardware)

    def boss_top(self, stage: str) -> float:
        """Z of the boss top under a compound gear."""
        return self.layout.layer_z[BOSS_LAYERS[stage]] - self.hardware.plate.boss_clearance

    def generate(self) -> cq.Workplane:
        """Generate the base plate."""
        p = self.hardware.plate
        layout = self.layout
        bounds = layout.plate_bounds
        t = p.thickness
        cx, cy = bounds.center

        plate = (
            cq.Workplane("XY")
            .box(bounds.width, bounds.depth, t, centered=(True, True, False))
            .translate((cx, cy, 0))
        )

        # Standoff bosses with axle sockets
        axle_dia = self.spec.train.axle_diameter
        for stage in BOSS_LAYERS:
            x, y = layout.axis(stage)
            top = self.boss_top(stage)
            boss = (
                cq.Workplane("XY")
                .workplane(offset=t)
                .center(x, y)
                .circle(p.boss_diameter / 2)
                .extrude(top - t)
            )
            socket = (
                cq.Workplane("XY")
                .center(x, y)
                .circle(axle_dia / 2)
                .extrude(top)
            )
            plate = plate.union(boss).cut(socket)

        # Friction reducer mount
        reducer = self.hardware.reducer
        fx, fy = layout.axis("final")
        screw_points = [
            (fx + dx, fy + dy)
            for dx, dy in FrictionReducerGenerator(reducer).screw_positions()
        ]
        plate = plate.cut(self._holes([(fx, fy)], reducer.floor_hole_diameter, t))
        plate = plate.cut(self._holes(screw_points, reducer.screw_diameter, t))

        # Motor block mount: the motor body passes through the plate
        block = self.hardware.motor_block
        mx, my = layout.axis("motor")
        motor_cutout = (
            cq.Workplane("XY")
            .center(mx, my)
            .rect(block.pocket_width, block.pocket_depth)
            .extrude(t)
        )
        plate = plate.cut(motor_cutout)
        plate = plate.cut(self._holes(
            [(mx - block.screw_offset, my), (mx + block.screw_offset, my)],
            block.screw_diameter, t,
        ))

        # Corner holes
        inset = p.corner_hole_inset
        corners = [
            (bounds.xmin + inset, bounds.ymin + inset),
            (bounds.xmax - inset, bounds.ymin + inset),
            (bounds.xmin + inset, bounds.ymax - inset),
            (bounds.xmax - inset, bounds.ymax - inset),
        ]
        plate = plate.cut(self._holes(corners, p.corner_hole_diameter, t))

        return plate

    @staticmethod
    def _holes(points, diameter: float, depth: float) -> cq.Workplane:
        return (
            cq.Workplane("XY")
            .pushPoints(points)
            .circle(diameter / 2)
            .extrude(depth)
        )

    def get_metadata(self) -> PartMetadata:
        """Get metadata for BOM."""
        bounds = self.layout.plate_bounds
        return PartMetadata(
            part_id=PartType.BASE_PLATE.value,
            part_type=PartType.BASE_PLATE,
            name="Base Plate",
            dimensions={
                "width": bounds.width,
                "depth": bounds.depth,
                "thickness": self.hardware.plate.thickness,
                "axle_socket_diameter": self.spec.train.axle_diameter,
            },
            notes="Press 8 mm axle pins into the two bosses",
        )
