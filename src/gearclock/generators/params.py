"""Measured hardware constants and fixed part dimensions."""

from dataclasses import dataclass, field


@dataclass
class BearingParams:
    """608 skate bearing (8 x 22 x 7 mm)."""
    outer_diameter: float = 22.0
    bore_diameter: float = 8.0
    width: float = 7.0
    inner_race_diameter: float = 12.1   # Outside of the inner race
    outer_race_diameter: float = 19.0   # Inside of the outer race
    shield_recess: float = 0.3          # Depth of the shield below the races


@dataclass
class GearMotorParams:
    """N20 micro metal gear motor, mounted shaft up.

    The body is a 12 x 10 mm block (gearbox plus motor can) with a
    3 mm D-shaft leaving the gearbox face.
    """
    body_width: float = 12.0       # X
    body_depth: float = 10.0       # Y
    body_length: float = 24.0      # Gearbox + can, excluding shaft
    shaft_diameter: float = 3.0
    shaft_flat_depth: float = 0.5
    shaft_length: float = 10.0


@dataclass
class BasePlateParams:
    thickness: float = 5.0
    margin: float = 6.0                 # Beyond the largest footprint
    corner_hole_diameter: float = 3.2   # M3 clearance
    corner_hole_inset: float = 6.0
    boss_diameter: float = 16.0         # Standoff under each compound gear
    boss_clearance: float = 0.5         # Gap between boss top and gear


@dataclass
class FrictionReducerParams:
    """Bearing housing under the output spindle."""
    bearing: BearingParams = field(default_factory=BearingParams)
    wall: float = 3.0
    floor: float = 2.0
    floor_hole_diameter: float = 14.0   # Clears the inner race
    flange_thickness: float = 2.0
    flange_width: float = 6.0
    screw_diameter: float = 3.2
    screw_count: int = 3

    @property
    def height(self) -> float:
        return self.floor + self.bearing.width

    @property
    def housing_diameter(self) -> float:
        return self.bearing.outer_diameter + 2 * self.wall

    @property
    def flange_diameter(self) -> float:
        return self.housing_diameter + 2 * self.flange_width

    @property
    def bolt_circle_radius(self) -> float:
        return self.housing_diameter / 2 + self.flange_width / 2


@dataclass
class MotorBlockParams:
    motor: GearMotorParams = field(default_factory=GearMotorParams)
    wall: float = 4.0                   # Around the motor pocket (Y)
    screw_wall: float = 8.0             # Either side of the pocket (X), holds the screws
    pocket_clearance: float = 0.2       # Per side
    screw_diameter: float = 3.2
    wire_slot_width: float = 6.0
    wire_slot_height: float = 3.0
    top_clearance: float = 1.0          # Gap under the motor pinion layer

    @property
    def pocket_width(self) -> float:
        return self.motor.body_width + 2 * self.pocket_clearance

    @property
    def pocket_depth(self) -> float:
        return self.motor.body_depth + 2 * self.pocket_clearance

    @property
    def block_width(self) -> float:
        return self.pocket_width + 2 * self.screw_wall

    @property
    def block_depth(self) -> float:
        return self.pocket_depth + 2 * self.wall

    @property
    def screw_offset(self) -> float:
        return self.pocket_width / 2 + self.screw_wall / 2


@dataclass
class SpindleParams:
    """Hollow spindle carrying the face on the final gear."""
    diameter: float = 14.0
    key_size: float = 11.0   # Square key driving the face


@dataclass
class HandParams:
    thickness: float = 2.5
    tab_size: float = 14.0
    arm_width: float = 5.0
    tip_length: float = 8.0
    screw_diameter: float = 3.2
    clearance: float = 1.0   # Above the numerals


@dataclass
class EnclosureParams:
    wall: float = 4.0
    clearance: float = 0.5          # Between base plate and wall
    floor_gap: float = 10.0         # Room under the plate for motor wires
    ledge_width: float = 4.0
    ledge_height: float = 3.0
    pad_size: float = 14.0          # Hand mounting pad, X
    pad_depth: float = 10.0         # Y, from the outer face of the wall
    pad_height: float = 6.0
    pilot_hole_diameter: float = 2.5


@dataclass
class ClockHardware:
    """All fixed dimensions of the clock in one place."""
    plate: BasePlateParams = field(default_factory=BasePlateParams)
    reducer: FrictionReducerParams = field(default_factory=FrictionReducerParams)
    motor_block: MotorBlockParams = field(default_factory=MotorBlockParams)
    spindle: SpindleParams = field(default_factory=SpindleParams)
    hand: HandParams = field(default_factory=HandParams)
    enclosure: EnclosureParams = field(default_factory=EnclosureParams)
    gear_clearance: float = 1.0     # Between the bearing housing and the lowest gear

    @property
    def bearing(self) -> BearingParams:
        return self.reducer.bearing

    @property
    def motor(self) -> GearMotorParams:
        return self.motor_block.motor
