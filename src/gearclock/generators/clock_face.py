"""Clock face generator.

A round dial plate with:

- a square socket that takes the final gear's spindle key
- 60 tick marks around the rim, every fifth one longer and wider
- the numerals 1-12 embossed on top, tops pointing outward

The face turns with the final gear under a fixed hand, so numerals are
laid out clockwise from 12 at +Y.
"""

import logging
from typing import Optional

import cadquery as cq

from ..involute import polar_to_cartesian
from ..models.spec import FaceSpec, ToleranceSpec
from ..models.geometry import PartMetadata, PartType
from .params import SpindleParams

logger = logging.getLogger(__name__)

TICK_COUNT = 60
MAJOR_TICK_EVERY = 5


def numeral_angle(hour: int) -> float:
    """Direction of an hour numeral in degrees, 12 at +Y going clockwise."""
    return 90.0 - 30.0 * (hour % 12)


class ClockFaceGenerator:
    """Generator for the dial. Origin at the bottom face centre."""

    def __init__(
        self,
        face: Optional[FaceSpec] = None,
        spindle: Optional[SpindleParams] = None,
        tolerances: Optional[ToleranceSpec] = None,
    ):
        self.face = face or FaceSpec()
        self.spindle = spindle or SpindleParams()
        self.tolerances = tolerances or ToleranceSpec()

    @property
    def socket_size(self) -> float:
        return self.spindle.key_size + 2 * self.tolerances.key_clearance

    def tick_locations(self, major: bool) -> list[cq.Location]:
        """Locations of tick centres, X axis pointing radially outward."""
        f = self.face
        length = f.major_tick_length if major else f.tick_length
        radius = f.radius - f.tick_inset - length / 2
        locations = []
        for i in range(TICK_COUNT):
            if (i % MAJOR_TICK_EVERY == 0) != major:
                continue
            angle = 90.0 - i * 360.0 / TICK_COUNT
            x, y = polar_to_cartesian(radius, angle)
            locations.append(cq.Location(cq.Vector(x, y, 0), cq.Vector(0, 0, 1), angle))
        return locations

    def generate(self) -> cq.Workplane:
        """Generate the dial with ticks and numerals."""
        f = self.face

        dial = (
            cq.Workplane("XY")
            .circle(f.radius)
            .rect(self.socket_size, self.socket_size)
            .extrude(f.thickness)
        )

        for major in (False, True):
            length = f.major_tick_length if major else f.tick_length
            width = f.major_tick_width if major else f.tick_width
            ticks = (
                cq.Workplane("XY")
                .workplane(offset=f.thickness)
                .pushPoints(self.tick_locations(major))
                .rect(length, width)
                .extrude(f.tick_height)
            )
            dial = dial.union(ticks)

        for hour in range(1, 13):
            dial = dial.union(self._numeral(hour))

        return dial

    def _numeral(self, hour: int) -> cq.Workplane:
        f = self.face
        angle = numeral_angle(hour)
        x, y = polar_to_cartesian(f.radius - f.numeral_inset, angle)
        numeral = cq.Workplane("XY").text(
            str(hour),
            f.numeral_size,
            f.numeral_height,
            combine=False,
            font=f.font,
            halign="center",
            valign="center",
        )
        logger.debug(f"Numeral {hour} at ({x:.1f}, {y:.1f})")
        return (
            numeral
            .rotate((0, 0, 0), (0, 0, 1), angle - 90.0)
            .translate((x, y, f.thickness))
        )

    def get_metadata(self) -> PartMetadata:
        """Get metadata for BOM."""
        f = self.face
        return PartMetadata(
            part_id=PartType.CLOCK_FACE.value,
            part_type=PartType.CLOCK_FACE,
            name="Clock Face",
            dimensions={
                "diameter": f.diameter,
                "thickness": f.thickness,
                "numeral_size": f.numeral_size,
                "socket_size": self.socket_size,
            },
            notes=f"Numerals in {f.font}; print numerals in a second colour if available",
        )
