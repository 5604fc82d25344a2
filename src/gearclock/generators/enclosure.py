"""Enclosure generator.

An open-topped frame around the base plate: four walls, an inner ledge
the plate rests on, and a pad on the +Y wall the hand is screwed to.
Built in assembly coordinates, with the plate bottom at Z=0.
"""

from typing import Optional

import cadquery as cq

from ..models.spec import ClockSpec
from ..models.geometry import PartMetadata, PartType
from .layout import LayoutCalculator, TrainLayout
from .params import ClockHardware


class EnclosureGenerator:
    """Generator for the enclosing frame."""

    def __init__(
        self,
        spec: ClockSpec,
        layout: Optional[TrainLayout] = None,
        hardware: Optional[ClockHardware] = None,
    ):
        self.spec = spec
        self.hardware = hardware or ClockHardware()
        self.layout = layout or LayoutCalculator.calculate_train_layout(spec, self.hardware)

    @property
    def inner_size(self) -> tuple[float, float]:
        b = self.layout.plate_bounds
        c = self.hardware.enclosure.clearance
        return (b.width + 2 * c, b.depth + 2 * c)

    @property
    def top_z(self) -> float:
        return self.layout.hand_z

    def generate(self) -> cq.Workplane:
        """Generate the frame."""
        e = self.hardware.enclosure
        b = self.layout.plate_bounds
        cx, cy = b.center
        inner_w, inner_d = self.inner_size
        bottom = -e.floor_gap
        height = self.top_z - bottom

        frame = (
            cq.Workplane("XY")
            .workplane(offset=bottom)
            .center(cx, cy)
            .rect(inner_w + 2 * e.wall, inner_d + 2 * e.wall)
            .rect(inner_w, inner_d)
            .extrude(height)
        )
        ledge = (
            cq.Workplane("XY")
            .workplane(offset=-e.ledge_height)
            .center(cx, cy)
            .rect(inner_w, inner_d)
            .rect(inner_w - 2 * e.ledge_width, inner_d - 2 * e.ledge_width)
            .extrude(e.ledge_height)
        )
        frame = frame.union(ledge)

        # Hand pad grown out of the +Y wall, pad_depth measured from its outer face
        hx, hy, _ = LayoutCalculator.calculate_hand_mount(self.spec, self.layout, self.hardware)
        inner_ymax = cy + inner_d / 2
        pad = (
            cq.Workplane("XY")
            .box(e.pad_size, e.pad_depth, e.pad_height, centered=(True, False, False))
            .translate((hx, inner_ymax + e.wall - e.pad_depth, self.top_z - e.pad_height))
        )
        pilot = (
            cq.Workplane("XY")
            .workplane(offset=self.top_z - e.pad_height)
            .center(hx, hy)
            .circle(e.pilot_hole_diameter / 2)
            .extrude(e.pad_height)
        )
        return frame.union(pad).cut(pilot)

    def get_metadata(self) -> PartMetadata:
        """Get metadata for BOM."""
        e = self.hardware.enclosure
        inner_w, inner_d = self.inner_size
        return PartMetadata(
            part_id=PartType.ENCLOSURE.value,
            part_type=PartType.ENCLOSURE,
            name="Enclosure",
            dimensions={
                "outer_width": inner_w + 2 * e.wall,
                "outer_depth": inner_d + 2 * e.wall,
                "height": self.top_z + e.floor_gap,
            },
        )
