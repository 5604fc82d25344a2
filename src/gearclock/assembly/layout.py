"""Layout solver for computing part placements."""

from typing import Optional

import cadquery as cq

from ..models.spec import ClockSpec
from ..models.geometry import AssemblyModel, PartType
from ..models.kinematic import KinematicModel
from ..generators.layout import LayoutCalculator, TrainLayout
from ..generators.params import ClockHardware

# Printer plate size
BED_WIDTH = 256.0


class LayoutSolver:
    """Computes part placements for the assembled clock.

    The layout is organized around the final gear axis (Z-axis):
    - Base plate from Z=0, the motor block and friction reducer on top
    - Three gear layers above the reducer
    - The face over the top layer, turning with the final gear
    - Hand and enclosure fixed to the frame
    """

    def __init__(
        self,
        spec: ClockSpec,
        hardware: Optional[ClockHardware] = None,
        kinematics: Optional[KinematicModel] = None,
    ):
        self.spec = spec
        self.hardware = hardware or ClockHardware()
        self.kinematics = kinematics or KinematicModel.create_clock(spec.train)
        self.train_layout: TrainLayout = LayoutCalculator.calculate_train_layout(
            spec, self.hardware
        )

    def solve(self, step: float = 0.0) -> AssemblyModel:
        """Compute all part placements with the gear train advanced to ``step``."""
        model = AssemblyModel()
        layout = self.train_layout
        hw = self.hardware
        rot = self.kinematics.rotations(step)

        fx, fy = layout.axis("final")
        px, py = layout.axis("penultimate")
        mx, my = layout.axis("middle")
        ox, oy = layout.axis("motor")
        plate_top = layout.plate_top

        # Frame
        model.add_part(PartType.BASE_PLATE, "base_plate")
        model.add_part(
            PartType.FRICTION_REDUCER, "friction_reducer",
            origin=(fx, fy, plate_top),
        )
        model.add_part(
            PartType.BEARING, "bearing",
            origin=(fx, fy, plate_top + hw.reducer.floor),
        )
        model.add_part(
            PartType.MOTOR_BLOCK, "motor_block",
            origin=(ox, oy, plate_top),
        )

        # Gear train
        model.add_part(
            PartType.FINAL_GEAR, "final_gear",
            origin=(fx, fy, layout.layer_z[0]),
            rotation=(0.0, 0.0, rot["final"]),
        )
        model.add_part(
            PartType.PENULTIMATE_GEAR, "penultimate_gear",
            origin=(px, py, layout.layer_z[0]),
            rotation=(0.0, 0.0, rot["penultimate"]),
        )
        model.add_part(
            PartType.MIDDLE_GEAR, "middle_gear",
            origin=(mx, my, layout.layer_z[1]),
            rotation=(0.0, 0.0, rot["middle"]),
        )
        model.add_part(
            PartType.MOTOR_GEAR, "motor_gear",
            origin=(ox, oy, layout.layer_z[2]),
            rotation=(0.0, 0.0, rot["motor"]),
        )

        # Face turns with the final gear
        model.add_part(
            PartType.CLOCK_FACE, "clock_face",
            origin=(fx, fy, layout.face_z),
            rotation=(0.0, 0.0, rot["final"]),
        )

        if self.spec.include_accessories:
            hand_xyz = LayoutCalculator.calculate_hand_mount(self.spec, layout, hw)
            model.add_part(PartType.HAND, "hand", origin=hand_xyz)
            model.add_part(PartType.ENCLOSURE, "enclosure")

        # Rotation axes
        model.add_shaft_axis("final", (fx, fy, 0.0), ["bearing", "final_gear", "clock_face"])
        model.add_shaft_axis("penultimate", (px, py, 0.0), ["penultimate_gear"])
        model.add_shaft_axis("middle", (mx, my, 0.0), ["middle_gear"])
        model.add_shaft_axis("motor", (ox, oy, 0.0), ["motor_gear"])

        # Constraints
        tol = self.spec.tolerances
        model.add_mate("final_gear", "penultimate_gear", "gear_mesh")
        model.add_mate("penultimate_gear", "middle_gear", "gear_mesh")
        model.add_mate("middle_gear", "motor_gear", "gear_mesh")
        model.add_mate("final_gear", "clock_face", "key", clearance=tol.key_clearance)
        model.add_mate("bearing", "friction_reducer", "press_fit", clearance=tol.bearing_fit)
        model.add_mate("penultimate_gear", "base_plate", "shaft_hole", clearance=tol.axle_clearance)
        model.add_mate("middle_gear", "base_plate", "shaft_hole", clearance=tol.axle_clearance)

        return model


def layout_parts(
    parts: list[tuple[str, cq.Workplane]],
    spacing: float = 10.0,
    bed_width: float = BED_WIDTH,
) -> cq.Assembly:
    """Arrange parts in rows on the XY plane.

    Each part is placed flat on Z=0, spaced out in X and Y. Parts are
    only translated.
    """
    assy = cq.Assembly(name="print_layout")

    x_cursor = 0.0
    y_cursor = 0.0
    row_height = 0.0

    for name, shape in parts:
        bb = shape.val().BoundingBox()
        part_w = bb.xmax - bb.xmin
        part_d = bb.ymax - bb.ymin

        # Start new row if needed
        if x_cursor > 0 and x_cursor + part_w > bed_width:
            x_cursor = 0.0
            y_cursor += row_height + spacing
            row_height = 0.0

        # Min corner at (x_cursor, y_cursor), sitting flat on Z=0
        offset = cq.Vector(
            x_cursor - bb.xmin,
            y_cursor - bb.ymin,
            -bb.zmin,
        )
        assy.add(shape, name=name, loc=cq.Location(offset),
                 color=cq.Color(0.6, 0.6, 0.6))

        x_cursor += part_w + spacing
        row_height = max(row_height, part_d)

    return assy
