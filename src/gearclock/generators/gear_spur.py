"""Involute spur gear generator.

Builds the gear from the tooth outlines in ``gearclock.involute``:

- a root-circle disc with one extruded (or twist-extruded) solid per tooth
- the middle of the toothed ring replaced by a hub, either solid or
  perforated by a ring of weight-reduction holes
- a central bore, optionally with a D-flat for motor shafts
"""

import logging
from typing import Optional

import cadquery as cq

from ..involute import (
    GearDimensions,
    WeightReduction,
    gear_dimensions,
    tooth_polygons,
    weight_reduction,
)
from ..models.spec import GearSpec
from ..models.geometry import PartMetadata, PartType

logger = logging.getLogger(__name__)


def add_d_flat_to_bore(
    part: cq.Workplane,
    bore_dia: float,
    d_flat_depth: float,
    bore_length: float,
) -> cq.Workplane:
    """Fill a segment of a circular bore along Z to make a D-shaped bore.

    The flat lies on the +Y side of the bore, ``d_flat_depth`` in from
    the circle. The bore runs from Z=0 to Z=bore_length.
    """
    radius = bore_dia / 2
    flat_y = radius - d_flat_depth

    segment = (
        cq.Workplane("XY")
        .center(0, flat_y + d_flat_depth / 2)
        .rect(bore_dia, d_flat_depth)
        .extrude(bore_length)
    )
    bore = cq.Workplane("XY").circle(radius).extrude(bore_length)
    return part.union(segment.intersect(bore))


class SpurGearGenerator:
    """Generator for a single involute spur or helical gear.

    The gear spans Z=0 to Z=width with its first tooth centred on +X.
    Helical gears are twist-extruded about the Z axis.
    """

    def __init__(
        self,
        gear: GearSpec,
        d_flat_depth: float = 0.0,
        part_type: PartType = PartType.MOTOR_GEAR,
    ):
        """Initialize generator.

        Args:
            gear: Validated gear parameters.
            d_flat_depth: Depth of a D-flat in the bore (0 for a round bore).
            part_type: Part type reported in the BOM.
        """
        self.gear = gear
        self.d_flat_depth = d_flat_depth
        self.part_type = part_type
        self._dims: Optional[GearDimensions] = None

    @property
    def dimensions(self) -> GearDimensions:
        if self._dims is None:
            g = self.gear
            self._dims = gear_dimensions(
                g.module, g.tooth_number, g.width, g.pressure_angle, g.helix_angle
            )
        return self._dims

    @property
    def weight_reduction(self) -> WeightReduction:
        return weight_reduction(self.dimensions, self.gear.bore, self.gear.optimize)

    def generate(self) -> cq.Workplane:
        """Generate the gear solid."""
        dims = self.dimensions
        holes = self.weight_reduction
        g = self.gear

        if g.optimize and not holes.enabled:
            logger.debug(
                f"Weight reduction skipped for {g.tooth_number}T gear "
                f"(pitch radius {dims.pitch_radius:.2f}, width {g.width}, bore {g.bore})"
            )

        gear = self._toothed_ring(dims, holes).union(self._hub(holes))

        if g.bore > 0:
            bore = cq.Workplane("XY").circle(g.bore / 2).extrude(g.width)
            gear = gear.cut(bore)
            if self.d_flat_depth > 0:
                gear = add_d_flat_to_bore(gear, g.bore, self.d_flat_depth, g.width)

        return gear

    def _extrude(self, sketch: cq.Workplane, twist: float) -> cq.Workplane:
        if twist == 0:
            return sketch.extrude(self.gear.width)
        # Right-hand helix turns clockwise going up
        return sketch.twistExtrude(self.gear.width, -twist)

    def _toothed_ring(self, dims: GearDimensions, holes: WeightReduction) -> cq.Workplane:
        """Root disc plus every tooth, with the hub area removed."""
        ring = cq.Workplane("XY").circle(dims.root_radius).extrude(self.gear.width)

        for outline in tooth_polygons(dims, rotation=dims.centering_rotation):
            tooth = self._extrude(cq.Workplane("XY").polyline(outline).close(), dims.twist)
            ring = ring.union(tooth)

        center = cq.Workplane("XY").circle(holes.clear_radius).extrude(self.gear.width)
        return ring.cut(center)

    def _hub(self, holes: WeightReduction) -> cq.Workplane:
        width = self.gear.width

        if not holes.enabled:
            return cq.Workplane("XY").circle(holes.hub_radius).extrude(width)

        bore_ring = cq.Workplane("XY").circle(holes.bore_ring_radius).extrude(width)
        web = cq.Workplane("XY").circle(holes.hub_radius).extrude(holes.web_height)
        cutters = (
            cq.Workplane("XY")
            .pushPoints(holes.hole_centers())
            .circle(holes.hole_radius)
            .extrude(holes.web_height)
        )
        return web.cut(cutters).union(bore_ring)

    def get_metadata(self) -> PartMetadata:
        """Get metadata for BOM."""
        dims = self.dimensions
        holes = self.weight_reduction
        return PartMetadata(
            part_id=self.part_type.value,
            part_type=self.part_type,
            name=f"Spur Gear {dims.tooth_number}T",
            dimensions=gear_dimension_table(dims, self.gear.bore, holes),
        )


def gear_dimension_table(
    dims: GearDimensions, bore: float, holes: WeightReduction, prefix: str = ""
) -> dict[str, float]:
    """Flat dict of gear dimensions for BOMs and CLI output."""
    table = {
        "module": dims.module,
        "teeth": dims.tooth_number,
        "pitch_diameter": dims.pitch_diameter,
        "base_diameter": dims.base_diameter,
        "tip_diameter": dims.tip_diameter,
        "root_diameter": dims.root_diameter,
        "face_width": dims.width,
        "bore_diameter": bore,
        "twist": dims.twist,
        "weight_holes": holes.hole_count if holes.enabled else 0,
    }
    return {f"{prefix}{key}": value for key, value in table.items()}


def spur_gear(
    module: float,
    tooth_number: int,
    width: float,
    bore: float = 0.0,
    pressure_angle: float = 20.0,
    helix_angle: float = 0.0,
    optimize: bool = True,
) -> cq.Workplane:
    """Validate the parameters and build one spur gear.

    Raises:
        pydantic.ValidationError: If a parameter is out of range.
    """
    gear = GearSpec(
        module=module,
        tooth_number=tooth_number,
        width=width,
        bore=bore,
        pressure_angle=pressure_angle,
        helix_angle=helix_angle,
        optimize=optimize,
    )
    return SpurGearGenerator(gear).generate()
