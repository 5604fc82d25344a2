"""Clock hand generator.

The hand is a fixed pointer: a square mounting tab screwed to the
enclosure pad and an arm reaching over the rim of the turning face.
"""

from typing import Optional

import cadquery as cq

from ..models.geometry import PartMetadata, PartType
from .params import HandParams


class HandGenerator:
    """Generator for the pointer.

    Origin at the tab centre on the bottom face; the arm points along -Y.
    """

    def __init__(self, length: float, params: Optional[HandParams] = None):
        """Initialize generator.

        Args:
            length: Distance from the tab centre to the pointer tip.
            params: Hand dimensions.
        """
        self.params = params or HandParams()
        if length <= self.params.tab_size / 2 + self.params.tip_length:
            raise ValueError(
                f"hand length ({length:.1f}) too short for tab and tip"
            )
        self.length = length

    def generate(self) -> cq.Workplane:
        """Generate the hand."""
        p = self.params
        half_w = p.arm_width / 2
        shoulder = self.length - p.tip_length

        tab = cq.Workplane("XY").box(p.tab_size, p.tab_size, p.thickness, centered=(True, True, False))
        arm = (
            cq.Workplane("XY")
            .polyline([
                (-half_w, 0.0),
                (-half_w, -shoulder),
                (0.0, -self.length),
                (half_w, -shoulder),
                (half_w, 0.0),
            ])
            .close()
            .extrude(p.thickness)
        )
        screw = cq.Workplane("XY").circle(p.screw_diameter / 2).extrude(p.thickness)
        return tab.union(arm).cut(screw)

    def get_metadata(self) -> PartMetadata:
        """Get metadata for BOM."""
        p = self.params
        return PartMetadata(
            part_id=PartType.HAND.value,
            part_type=PartType.HAND,
            name="Clock Hand",
            dimensions={
                "length": self.length,
                "arm_width": p.arm_width,
                "thickness": p.thickness,
            },
        )
