"""Friction reducer and bearing generators.

The friction reducer is a cup holding a 608 skate bearing under the final
gear. The output axle is pressed into the bearing, so the weight of the
final gear, spindle and face runs on the bearing instead of rubbing on
printed plastic.
"""

from typing import Optional

import cadquery as cq

from ..involute import polar_to_cartesian
from ..models.spec import ToleranceSpec
from ..models.geometry import PartMetadata, PartType
from .params import BearingParams, FrictionReducerParams


class FrictionReducerGenerator:
    """Generator for the bearing housing.

    Origin at the housing's bottom centre; the bearing pocket opens
    upward from Z=floor to Z=height.
    """

    def __init__(
        self,
        params: Optional[FrictionReducerParams] = None,
        tolerances: Optional[ToleranceSpec] = None,
    ):
        self.params = params or FrictionReducerParams()
        self.tolerances = tolerances or ToleranceSpec()

    @property
    def pocket_diameter(self) -> float:
        return self.params.bearing.outer_diameter + self.tolerances.bearing_fit

    def screw_positions(self) -> list[tuple[float, float]]:
        p = self.params
        return [
            polar_to_cartesian(p.bolt_circle_radius, 90.0 + i * 360.0 / p.screw_count)
            for i in range(p.screw_count)
        ]

    def generate(self) -> cq.Workplane:
        """Generate the bearing housing."""
        p = self.params

        flange = (
            cq.Workplane("XY")
            .circle(p.flange_diameter / 2)
            .extrude(p.flange_thickness)
        )
        housing = (
            cq.Workplane("XY")
            .circle(p.housing_diameter / 2)
            .extrude(p.height)
        )
        body = flange.union(housing)

        pocket = (
            cq.Workplane("XY")
            .workplane(offset=p.floor)
            .circle(self.pocket_diameter / 2)
            .extrude(p.bearing.width)
        )
        floor_hole = (
            cq.Workplane("XY")
            .circle(p.floor_hole_diameter / 2)
            .extrude(p.floor)
        )
        screws = (
            cq.Workplane("XY")
            .pushPoints(self.screw_positions())
            .circle(p.screw_diameter / 2)
            .extrude(p.flange_thickness)
        )
        return body.cut(pocket).cut(floor_hole).cut(screws)

    def get_metadata(self) -> PartMetadata:
        """Get metadata for BOM."""
        p = self.params
        return PartMetadata(
            part_id=PartType.FRICTION_REDUCER.value,
            part_type=PartType.FRICTION_REDUCER,
            name="Friction Reducer (608 Bearing Housing)",
            dimensions={
                "housing_diameter": p.housing_diameter,
                "flange_diameter": p.flange_diameter,
                "height": p.height,
                "pocket_diameter": self.pocket_diameter,
            },
        )


class BearingGenerator:
    """Reference model of a 608 bearing (not printed).

    Origin at the bottom face centre.
    """

    def __init__(self, params: Optional[BearingParams] = None):
        self.params = params or BearingParams()

    def generate(self) -> cq.Workplane:
        """Generate the bearing ring with recessed shields on both faces."""
        p = self.params
        ring = (
            cq.Workplane("XY")
            .circle(p.outer_diameter / 2)
            .circle(p.bore_diameter / 2)
            .extrude(p.width)
        )
        shield = (
            cq.Workplane("XY")
            .circle(p.outer_race_diameter / 2)
            .circle(p.inner_race_diameter / 2)
            .extrude(p.shield_recess)
        )
        return ring.cut(shield).cut(shield.translate((0, 0, p.width - p.shield_recess)))

    def get_metadata(self) -> PartMetadata:
        """Get metadata for BOM."""
        p = self.params
        return PartMetadata(
            part_id=PartType.BEARING.value,
            part_type=PartType.BEARING,
            name="608 Skate Bearing",
            material="Steel",
            printed=False,
            dimensions={
                "outer_diameter": p.outer_diameter,
                "bore_diameter": p.bore_diameter,
                "width": p.width,
            },
            notes="Purchased part",
        )
