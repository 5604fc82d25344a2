"""Shared layout calculations for the clock.

Centralizes axis positions, layer heights and the base plate outline used
by the part generators and the scene composer.

Coordinate frame: Z up, base plate bottom at Z=0, final gear (and face)
axis through the origin. Gear layers from the bottom:

- layer 0: final gear, penultimate small gear
- layer 1: penultimate large gear, middle small gear
- layer 2: middle large gear, motor pinion
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..involute import center_distance, polar_to_cartesian, tip_diameter
from ..models.spec import ClockSpec
from .params import ClockHardware


@dataclass
class PlateBounds:
    xmin: float
    xmax: float
    ymin: float
    ymax: float

    @property
    def width(self) -> float:
        return self.xmax - self.xmin

    @property
    def depth(self) -> float:
        return self.ymax - self.ymin

    @property
    def center(self) -> Tuple[float, float]:
        return ((self.xmin + self.xmax) / 2, (self.ymin + self.ymax) / 2)


@dataclass
class TrainLayout:
    """Calculated positions for the complete clock."""
    axes: Dict[str, Tuple[float, float]]    # Stage name -> (x, y)
    center_distances: Dict[str, float]      # "a/b" -> axis distance
    plate_thickness: float
    reducer_top: float
    layer_z: Tuple[float, float, float]     # Bottom of each gear layer
    gear_width: float
    face_z: float                           # Bottom of the dial plate
    face_top: float
    spindle_height: float                   # Above the final gear's top face
    hand_z: float                           # Bottom of the hand
    motor_block_height: float
    plate_bounds: PlateBounds

    @property
    def plate_top(self) -> float:
        return self.plate_thickness

    def axis(self, stage: str) -> Tuple[float, float]:
        return self.axes[stage]


class LayoutCalculator:
    """Calculates component positions for the clock."""

    @staticmethod
    def calculate_train_layout(
        spec: ClockSpec, hardware: Optional[ClockHardware] = None
    ) -> TrainLayout:
        """Calculate axis positions, heights and the plate outline.

        Args:
            spec: The clock specification.
            hardware: Fixed part dimensions; defaults to ClockHardware().

        Returns:
            TrainLayout with all position values.
        """
        hw = hardware or ClockHardware()
        train = spec.train
        m = train.module

        cd_final = center_distance(m, train.final_teeth, train.penultimate_small_teeth)
        cd_middle = center_distance(m, train.penultimate_large_teeth, train.middle_small_teeth)
        cd_motor = center_distance(m, train.middle_large_teeth, train.motor_teeth)

        final_xy = (0.0, 0.0)
        dx, dy = polar_to_cartesian(cd_final, train.penultimate_bearing)
        penultimate_xy = (final_xy[0] + dx, final_xy[1] + dy)
        dx, dy = polar_to_cartesian(cd_middle, train.middle_bearing)
        middle_xy = (penultimate_xy[0] + dx, penultimate_xy[1] + dy)
        dx, dy = polar_to_cartesian(cd_motor, train.motor_bearing)
        motor_xy = (middle_xy[0] + dx, middle_xy[1] + dy)

        axes = {
            "final": final_xy,
            "penultimate": penultimate_xy,
            "middle": middle_xy,
            "motor": motor_xy,
        }

        # Heights
        plate_t = hw.plate.thickness
        reducer_top = plate_t + hw.reducer.height
        layer_pitch = train.width + train.layer_gap
        layer0 = reducer_top + hw.gear_clearance
        layer_z = (layer0, layer0 + layer_pitch, layer0 + 2 * layer_pitch)

        top_of_train = layer_z[2] + train.width
        face_z = top_of_train + spec.face.clearance
        face_top = face_z + spec.face.thickness
        # Spindle runs from the final gear up through the dial plate
        spindle_height = face_top - (layer_z[0] + train.width)
        hand_z = face_top + spec.face.numeral_height + hw.hand.clearance
        motor_block_height = layer_z[2] - hw.motor_block.top_clearance - plate_t

        # Plate outline: every footprint projected onto XY
        circles = [
            (final_xy, tip_diameter(m, train.final_teeth) / 2),
            (final_xy, spec.face.radius),
            (final_xy, hw.reducer.flange_diameter / 2),
            (penultimate_xy, tip_diameter(m, train.penultimate_large_teeth) / 2),
            (middle_xy, tip_diameter(m, train.middle_large_teeth) / 2),
            (motor_xy, tip_diameter(m, train.motor_teeth) / 2),
        ]
        xs_min = [c[0] - r for c, r in circles]
        xs_max = [c[0] + r for c, r in circles]
        ys_min = [c[1] - r for c, r in circles]
        ys_max = [c[1] + r for c, r in circles]

        half_w = hw.motor_block.block_width / 2
        half_d = hw.motor_block.block_depth / 2
        xs_min.append(motor_xy[0] - half_w)
        xs_max.append(motor_xy[0] + half_w)
        ys_min.append(motor_xy[1] - half_d)
        ys_max.append(motor_xy[1] + half_d)

        margin = hw.plate.margin
        bounds = PlateBounds(
            xmin=min(xs_min) - margin,
            xmax=max(xs_max) + margin,
            ymin=min(ys_min) - margin,
            ymax=max(ys_max) + margin,
        )

        return TrainLayout(
            axes=axes,
            center_distances={
                "final/penultimate": cd_final,
                "penultimate/middle": cd_middle,
                "middle/motor": cd_motor,
            },
            plate_thickness=plate_t,
            reducer_top=reducer_top,
            layer_z=layer_z,
            gear_width=train.width,
            face_z=face_z,
            face_top=face_top,
            spindle_height=spindle_height,
            hand_z=hand_z,
            motor_block_height=motor_block_height,
            plate_bounds=bounds,
        )

    @staticmethod
    def calculate_hand_mount(
        spec: ClockSpec, layout: TrainLayout, hardware: Optional[ClockHardware] = None
    ) -> Tuple[float, float, float]:
        """Position of the hand's mounting tab centre on the enclosure pad.

        The pad sits on the inside of the +Y enclosure wall, on the face axis.
        """
        hw = hardware or ClockHardware()
        enc = hw.enclosure
        inner_ymax = layout.plate_bounds.ymax + enc.clearance
        pad_y = inner_ymax + (enc.wall - enc.pad_depth) / 2
        x = layout.axes["final"][0]
        return (x, pad_y, layout.hand_z)

    @staticmethod
    def calculate_hand_length(
        spec: ClockSpec, layout: TrainLayout, hardware: Optional[ClockHardware] = None
    ) -> float:
        """Distance from the hand tab centre to its tip over the tick ring."""
        hw = hardware or ClockHardware()
        _, tab_y, _ = LayoutCalculator.calculate_hand_mount(spec, layout, hw)
        tip_y = layout.axes["final"][1] + spec.face.radius - spec.face.tick_inset - spec.face.major_tick_length / 2
        return tab_y - tip_y
