"""Part generators for the gear clock."""

from .base import PartGenerator
from .gear_spur import SpurGearGenerator, spur_gear
from .gear_compound import CompoundGearGenerator, FinalGearGenerator
from .base_plate import BasePlateGenerator
from .friction_reducer import FrictionReducerGenerator, BearingGenerator
from .clock_face import ClockFaceGenerator
from .hand import HandGenerator
from .motor_block import MotorBlockGenerator
from .enclosure import EnclosureGenerator

# Hardware constants
from .params import (
    BearingParams,
    GearMotorParams,
    BasePlateParams,
    FrictionReducerParams,
    MotorBlockParams,
    SpindleParams,
    HandParams,
    EnclosureParams,
    ClockHardware,
)

# Layout utilities
from .layout import LayoutCalculator, TrainLayout, PlateBounds

__all__ = [
    "PartGenerator",
    # Gears
    "SpurGearGenerator",
    "spur_gear",
    "CompoundGearGenerator",
    "FinalGearGenerator",
    # Fixed parts
    "BasePlateGenerator",
    "FrictionReducerGenerator",
    "BearingGenerator",
    "ClockFaceGenerator",
    "HandGenerator",
    "MotorBlockGenerator",
    "EnclosureGenerator",
    # Hardware constants
    "BearingParams",
    "GearMotorParams",
    "BasePlateParams",
    "FrictionReducerParams",
    "MotorBlockParams",
    "SpindleParams",
    "HandParams",
    "EnclosureParams",
    "ClockHardware",
    # Layout utilities
    "LayoutCalculator",
    "TrainLayout",
    "PlateBounds",
]
