"""Compound gear and final gear generators.

A compound gear is two spur gears of different size turning as one body,
joined by a spacer hub across the layer gap. The final gear carries a
hollow spindle up to the clock face, ending in a square key.
"""

from typing import Optional

import cadquery as cq

from ..models.spec import GearSpec
from ..models.geometry import PartMetadata, PartType
from .gear_spur import SpurGearGenerator, gear_dimension_table
from .params import SpindleParams


class CompoundGearGenerator:
    """Generator for a two-layer compound gear.

    - Lower gear from Z=0 to Z=lower.width
    - Spacer hub across the layer gap
    - Upper gear from Z=lower.width+gap to Z=lower.width+gap+upper.width

    Both gears have their first tooth on +X, so the body rotation applies
    to both meshes.
    """

    def __init__(
        self,
        lower: GearSpec,
        upper: GearSpec,
        gap: float,
        part_type: PartType = PartType.MIDDLE_GEAR,
    ):
        self.lower = lower
        self.upper = upper
        self.gap = gap
        self.part_type = part_type
        self._lower_gen = SpurGearGenerator(lower)
        self._upper_gen = SpurGearGenerator(upper)

    @property
    def height(self) -> float:
        return self.lower.width + self.gap + self.upper.width

    @property
    def spacer_diameter(self) -> float:
        # Stay inside the smaller gear's hub so the spacer never covers teeth
        hub_radius = min(
            self._lower_gen.weight_reduction.hub_radius,
            self._upper_gen.weight_reduction.hub_radius,
        )
        bore = max(self.lower.bore, self.upper.bore)
        return max(2 * hub_radius, bore + 4.0)

    def generate(self) -> cq.Workplane:
        """Generate the compound gear body."""
        lower = self._lower_gen.generate()
        upper = self._upper_gen.generate().translate((0, 0, self.lower.width + self.gap))
        body = lower.union(upper)

        if self.gap > 0:
            bore = max(self.lower.bore, self.upper.bore)
            spacer = (
                cq.Workplane("XY")
                .workplane(offset=self.lower.width)
                .circle(self.spacer_diameter / 2)
                .extrude(self.gap)
            )
            if bore > 0:
                spacer = spacer.cut(
                    cq.Workplane("XY")
                    .workplane(offset=self.lower.width)
                    .circle(bore / 2)
                    .extrude(self.gap)
                )
            body = body.union(spacer)

        return body

    def get_metadata(self) -> PartMetadata:
        """Get metadata for BOM."""
        dims = gear_dimension_table(
            self._lower_gen.dimensions, self.lower.bore,
            self._lower_gen.weight_reduction, prefix="lower_",
        )
        dims.update(gear_dimension_table(
            self._upper_gen.dimensions, self.upper.bore,
            self._upper_gen.weight_reduction, prefix="upper_",
        ))
        dims["total_height"] = self.height
        return PartMetadata(
            part_id=self.part_type.value,
            part_type=self.part_type,
            name=f"Compound Gear {self.lower.tooth_number}T/{self.upper.tooth_number}T",
            dimensions=dims,
            notes="Runs free on a fixed axle pin",
        )


class FinalGearGenerator:
    """Generator for the output gear with its face spindle.

    - Gear from Z=0 to Z=width
    - Round spindle up to the underside of the face
    - Square key through the face thickness
    - Bore through everything for the bearing axle
    """

    def __init__(
        self,
        gear: GearSpec,
        spindle_height: float,
        key_height: float,
        params: Optional[SpindleParams] = None,
    ):
        """Initialize generator.

        Args:
            gear: Final gear parameters (bore = axle diameter, press fit).
            spindle_height: Spindle length above the gear's top face,
                including the key.
            key_height: Length of the square key at the top of the spindle.
            params: Spindle dimensions.
        """
        self.gear = gear
        self.spindle_height = spindle_height
        self.key_height = key_height
        self.params = params or SpindleParams()
        self._gear_gen = SpurGearGenerator(gear, part_type=PartType.FINAL_GEAR)

    @property
    def height(self) -> float:
        return self.gear.width + self.spindle_height

    def generate(self) -> cq.Workplane:
        """Generate the final gear and spindle."""
        p = self.params
        width = self.gear.width
        round_height = self.spindle_height - self.key_height

        body = self._gear_gen.generate()

        spindle = (
            cq.Workplane("XY")
            .workplane(offset=width)
            .circle(p.diameter / 2)
            .extrude(round_height)
        )
        key = (
            cq.Workplane("XY")
            .workplane(offset=width + round_height)
            .rect(p.key_size, p.key_size)
            .extrude(self.key_height)
        )
        body = body.union(spindle).union(key)

        if self.gear.bore > 0:
            body = body.cut(
                cq.Workplane("XY").circle(self.gear.bore / 2).extrude(self.height)
            )
        return body

    def get_metadata(self) -> PartMetadata:
        """Get metadata for BOM."""
        dims = gear_dimension_table(
            self._gear_gen.dimensions, self.gear.bore, self._gear_gen.weight_reduction,
        )
        dims.update({
            "spindle_diameter": self.params.diameter,
            "spindle_height": self.spindle_height,
            "key_size": self.params.key_size,
        })
        return PartMetadata(
            part_id=PartType.FINAL_GEAR.value,
            part_type=PartType.FINAL_GEAR,
            name=f"Final Gear {self.gear.tooth_number}T with Spindle",
            dimensions=dims,
            notes="Press fit on the 8 mm bearing axle",
        )
