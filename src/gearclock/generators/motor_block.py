"""Motor block generator.

Holds an N20 gear motor upright, shaft up, so the pinion on its shaft
lands in the top gear layer. The motor body drops through the block and
the base plate; its wires leave through a slot at the bottom.
"""

from typing import Optional

import cadquery as cq

from ..models.geometry import PartMetadata, PartType
from .params import MotorBlockParams


class MotorBlockGenerator:
    """Generator for the motor block.

    Origin at the bottom centre of the block, on the motor shaft axis.
    """

    def __init__(self, height: float, params: Optional[MotorBlockParams] = None):
        """Initialize generator.

        Args:
            height: Block height above the base plate.
            params: Block and motor dimensions.
        """
        self.params = params or MotorBlockParams()
        if height <= self.params.wire_slot_height:
            raise ValueError(f"motor block height ({height}) leaves no room for the wire slot")
        self.height = height

    def screw_positions(self) -> list[tuple[float, float]]:
        off = self.params.screw_offset
        return [(-off, 0.0), (off, 0.0)]

    def generate(self) -> cq.Workplane:
        """Generate the block."""
        p = self.params

        block = cq.Workplane("XY").box(
            p.block_width, p.block_depth, self.height, centered=(True, True, False)
        )
        pocket = (
            cq.Workplane("XY")
            .rect(p.pocket_width, p.pocket_depth)
            .extrude(self.height)
        )
        screws = (
            cq.Workplane("XY")
            .pushPoints(self.screw_positions())
            .circle(p.screw_diameter / 2)
            .extrude(self.height)
        )
        # Wire slot through the -Y wall at the bottom
        slot = (
            cq.Workplane("XY")
            .box(p.wire_slot_width, p.wall + p.pocket_depth / 2, p.wire_slot_height,
                 centered=(True, False, False))
            .translate((0, -p.block_depth / 2, 0))
        )
        return block.cut(pocket).cut(screws).cut(slot)

    def get_metadata(self) -> PartMetadata:
        """Get metadata for BOM."""
        p = self.params
        return PartMetadata(
            part_id=PartType.MOTOR_BLOCK.value,
            part_type=PartType.MOTOR_BLOCK,
            name="Motor Block (N20)",
            dimensions={
                "width": p.block_width,
                "depth": p.block_depth,
                "height": self.height,
                "pocket_width": p.pocket_width,
                "pocket_depth": p.pocket_depth,
            },
            notes="Secure with 2x M3 screws through the base plate",
        )
