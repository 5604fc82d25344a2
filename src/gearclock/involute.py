"""Involute spur gear geometry.

Coordinate helpers plus the closed-form gear dimensions, tooth outline and
weight-reduction hole pattern used by the spur gear generator. Everything
here is plain math on floats; the CadQuery side lives in
``generators.gear_spur``.

Angles are in degrees unless the name says otherwise.
"""

import math
from dataclasses import dataclass
from typing import List, Tuple

Point2D = Tuple[float, float]
Point3D = Tuple[float, float, float]

# Fraction of the tooth pitch left open between flanks as backlash
BACKLASH_CLEARANCE = 0.05

# Number of roll-angle steps along one involute flank
INVOLUTE_SAMPLES = 16


def deg_to_rad(angle: float) -> float:
    return angle * math.pi / 180.0


def rad_to_deg(angle: float) -> float:
    return angle * 180.0 / math.pi


def polar_to_cartesian(radius: float, phi: float) -> Point2D:
    """Convert polar coordinates (radius, angle in degrees) to (x, y)."""
    return (radius * math.cos(deg_to_rad(phi)), radius * math.sin(deg_to_rad(phi)))


def spherical_to_cartesian(radius: float, theta: float, phi: float) -> Point3D:
    """Convert spherical coordinates to (x, y, z).

    Args:
        radius: Distance from the origin.
        theta: Polar angle from +Z in degrees (90 lies in the XY plane).
        phi: Azimuth from +X in degrees.
    """
    t = deg_to_rad(theta)
    p = deg_to_rad(phi)
    return (
        radius * math.sin(t) * math.cos(p),
        radius * math.sin(t) * math.sin(p),
        radius * math.cos(t),
    )


def involute_angle(rho: float) -> float:
    """Polar angle of the involute point at roll angle ``rho`` (tan(rho) - rho)."""
    r = deg_to_rad(rho)
    return rad_to_deg(math.tan(r) - r)


def ev(base_radius: float, rho: float) -> Tuple[float, float]:
    """Sample the involute of a circle.

    Args:
        base_radius: Radius of the base circle the involute unwinds from.
        rho: Roll angle in degrees (0 starts on the base circle).

    Returns:
        (radius, polar angle in degrees) of the involute point.
    """
    return (base_radius / math.cos(deg_to_rad(rho)), involute_angle(rho))


def rotate_point(point: Point2D, angle: float) -> Point2D:
    c = math.cos(deg_to_rad(angle))
    s = math.sin(deg_to_rad(angle))
    x, y = point
    return (x * c - y * s, x * s + y * c)


def tip_diameter(module: float, tooth_number: int) -> float:
    """Tip diameter per DIN 867 (DIN 58400 for fine modules below 1)."""
    pitch = module * tooth_number
    if module < 1:
        return pitch + 2.2 * module
    return pitch + 2.0 * module


def tip_clearance(module: float, tooth_number: int) -> float:
    # Pinions with fewer than 3 teeth get no clearance
    return module / 6.0 if tooth_number >= 3 else 0.0


def root_diameter(module: float, tooth_number: int) -> float:
    return module * tooth_number - 2.0 * (module + tip_clearance(module, tooth_number))


def twist_angle(width: float, pitch_radius: float, helix_angle: float) -> float:
    """Total twist in degrees of a helical gear over its face width.

    A spur gear (helix angle 0) has no twist at all.
    """
    if helix_angle == 0:
        return 0.0
    return rad_to_deg(width / (pitch_radius * math.tan(deg_to_rad(90.0 - helix_angle))))


@dataclass(frozen=True)
class GearDimensions:
    """Derived dimensions of one involute spur or helical gear."""

    module: float
    tooth_number: int
    width: float
    pressure_angle: float
    helix_angle: float
    pitch_diameter: float
    transverse_pressure_angle: float
    base_diameter: float
    tip_diameter: float
    root_diameter: float
    tip_clearance: float
    max_roll_angle: float      # Roll angle where the involute reaches the tip circle
    pitch_roll_angle: float    # Roll angle where the involute crosses the pitch circle
    pitch_involute_angle: float
    pitch_angle: float         # 360 / tooth_number
    twist: float

    @property
    def pitch_radius(self) -> float:
        return self.pitch_diameter / 2

    @property
    def base_radius(self) -> float:
        return self.base_diameter / 2

    @property
    def tip_radius(self) -> float:
        return self.tip_diameter / 2

    @property
    def root_radius(self) -> float:
        return self.root_diameter / 2

    @property
    def tooth_width_angle(self) -> float:
        """Angular width of one tooth measured at the base circle."""
        return 180.0 * (1 - BACKLASH_CLEARANCE) / self.tooth_number + 2 * self.pitch_involute_angle

    @property
    def centering_rotation(self) -> float:
        """Rotation that centres the first tooth on the +X axis."""
        return -self.pitch_involute_angle - 90.0 * (1 - BACKLASH_CLEARANCE) / self.tooth_number

    @property
    def pointed(self) -> bool:
        """True when the two flanks meet below the tip circle."""
        return involute_angle(self.max_roll_angle) > self.tooth_width_angle / 2

    @property
    def flank_roll_angle(self) -> float:
        """Roll angle where a flank ends: the tip circle, or the tooth centreline."""
        if not self.pointed:
            return self.max_roll_angle
        return roll_angle_at(self.tooth_width_angle / 2, self.max_roll_angle)


def roll_angle_at(polar_angle: float, upper: float) -> float:
    """Roll angle in [0, upper] whose involute point lies at ``polar_angle``."""
    lo, hi = 0.0, upper
    for _ in range(60):
        mid = (lo + hi) / 2
        if involute_angle(mid) < polar_angle:
            lo = mid
        else:
            hi = mid
    return (lo + hi) / 2


def gear_dimensions(
    module: float,
    tooth_number: int,
    width: float,
    pressure_angle: float = 20.0,
    helix_angle: float = 0.0,
) -> GearDimensions:
    """Compute the derived dimensions of a gear."""
    d = module * tooth_number
    r = d / 2
    alpha = rad_to_deg(math.atan(
        math.tan(deg_to_rad(pressure_angle)) / math.cos(deg_to_rad(helix_angle))
    ))
    db = d * math.cos(deg_to_rad(alpha))
    rb = db / 2
    da = tip_diameter(module, tooth_number)
    ra = da / 2

    rho_ra = rad_to_deg(math.acos(rb / ra))
    rho_r = rad_to_deg(math.acos(rb / r))

    return GearDimensions(
        module=module,
        tooth_number=tooth_number,
        width=width,
        pressure_angle=pressure_angle,
        helix_angle=helix_angle,
        pitch_diameter=d,
        transverse_pressure_angle=alpha,
        base_diameter=db,
        tip_diameter=da,
        root_diameter=root_diameter(module, tooth_number),
        tip_clearance=tip_clearance(module, tooth_number),
        max_roll_angle=rho_ra,
        pitch_roll_angle=rho_r,
        pitch_involute_angle=involute_angle(rho_r),
        pitch_angle=360.0 / tooth_number,
        twist=twist_angle(width, r, helix_angle),
    )


def tooth_polygon(dims: GearDimensions, samples: int = INVOLUTE_SAMPLES) -> List[Point2D]:
    """Outline of a single tooth, starting and ending at the gear centre.

    The first flank follows the involute from the base circle to the tip
    circle; the second flank is the same curve mirrored about the tooth
    centreline. The tooth is not yet centred on +X.

    On a pointed tooth the flanks stop where they meet on the centreline and
    share that apex point, so the outline has one point fewer.
    """
    step = dims.flank_roll_angle / samples
    flank = [ev(dims.base_radius, i * step) for i in range(samples + 1)]

    first = [polar_to_cartesian(radius, phi) for radius, phi in flank]
    second = [
        polar_to_cartesian(radius, dims.tooth_width_angle - phi)
        for radius, phi in reversed(flank)
    ]
    if dims.pointed:
        second = second[1:]
    return [(0.0, 0.0)] + first + second


def tooth_polygons(
    dims: GearDimensions,
    rotation: float = 0.0,
    samples: int = INVOLUTE_SAMPLES,
) -> List[List[Point2D]]:
    """One tooth outline per tooth, spaced by the pitch angle."""
    tooth = tooth_polygon(dims, samples)
    return [
        [rotate_point(p, rotation + k * dims.pitch_angle) for p in tooth]
        for k in range(dims.tooth_number)
    ]


@dataclass(frozen=True)
class WeightReduction:
    """Ring of lightening holes in the gear web."""

    enabled: bool
    hole_radius: float
    hole_center_radius: float
    hole_count: int
    bore_ring_radius: float    # Full-height ring left around the bore
    hub_radius: float          # Outer radius of the web/hub
    clear_radius: float        # Radius removed from the toothed ring
    web_height: float

    def hole_centers(self) -> List[Point2D]:
        centers = []
        for i in range(self.hole_count):
            x, y, _ = spherical_to_cartesian(
                self.hole_center_radius, 90.0, i * 360.0 / self.hole_count
            )
            centers.append((x, y))
        return centers


def weight_reduction(
    dims: GearDimensions, bore: float, optimize: bool = True
) -> WeightReduction:
    """Work out the hub and lightening-hole layout of a gear.

    The holes are only used when the gear is large enough for them:
    the pitch radius must be at least 1.5 face widths and the pitch
    diameter more than twice the bore. Otherwise the web stays solid.
    """
    width = dims.width
    r_hole = (dims.root_diameter - bore) / 8
    rm = bore / 2 + 2 * r_hole
    count = math.floor(2 * math.pi * rm / (3 * r_hole))

    enabled = (
        optimize
        and dims.pitch_radius >= width * 1.5
        and dims.pitch_diameter > 2 * bore
        and count > 0
    )

    return WeightReduction(
        enabled=enabled,
        hole_radius=r_hole,
        hole_center_radius=rm,
        hole_count=count,
        bore_ring_radius=(bore + r_hole) / 2,
        hub_radius=rm + r_hole * 1.51,
        clear_radius=rm + r_hole * 1.49,
        web_height=max(width - r_hole / 2, width * 2 / 3),
    )


def center_distance(module: float, teeth_a: int, teeth_b: int) -> float:
    """Axis distance of two meshing gears of the same module."""
    return module * (teeth_a + teeth_b) / 2
