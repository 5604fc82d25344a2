"""Pydantic models for clock configuration parsing and validation."""

from __future__ import annotations

from pathlib import Path
from typing import Union

import yaml
from pydantic import BaseModel, Field, model_validator

from ..involute import root_diameter


class GearSpec(BaseModel):
    """Parameters of a single involute spur (or helical) gear."""

    module: float = Field(gt=0, description="Gear module in mm (pitch diameter / teeth)")
    tooth_number: int = Field(ge=1, description="Number of teeth")
    width: float = Field(gt=0, description="Face width in mm")
    bore: float = Field(default=0.0, ge=0, description="Central bore diameter in mm")
    pressure_angle: float = Field(
        default=20.0, gt=0, le=45, description="Pressure angle in degrees"
    )
    helix_angle: float = Field(
        default=0.0, gt=-90, lt=90, description="Helix angle in degrees (0 = spur gear)"
    )
    optimize: bool = Field(default=True, description="Cut weight-reduction holes when possible")

    @model_validator(mode="after")
    def validate_bore(self) -> "GearSpec":
        df = root_diameter(self.module, self.tooth_number)
        if self.bore >= df:
            raise ValueError(
                f"bore ({self.bore}) must be smaller than root diameter ({df:.3f})"
            )
        return self

    @property
    def pitch_diameter(self) -> float:
        return self.module * self.tooth_number


class TrainSpec(BaseModel):
    """The clock's four-stage gear train.

    Power flows motor pinion -> middle compound -> penultimate compound ->
    final gear. Each compound carries a large gear (driven) and a small gear
    (driving). Bearings give the direction, in degrees, of each axis as seen
    from the axis before it (final -> penultimate -> middle -> motor).
    """

    module: float = Field(default=2.3, gt=0, description="Module shared by all gears in mm")
    width: float = Field(default=4.0, gt=0, description="Face width of each gear layer in mm")
    layer_gap: float = Field(default=1.0, ge=0, description="Gap between gear layers in mm")
    pressure_angle: float = Field(default=20.0, gt=0, le=45)
    helix_angle: float = Field(default=0.0, gt=-90, lt=90)
    optimize: bool = True
    axle_diameter: float = Field(default=8.0, gt=0, description="Axle diameter in mm (608 bore)")

    motor_teeth: int = Field(default=12, ge=1)
    middle_large_teeth: int = Field(default=24, ge=1)
    middle_small_teeth: int = Field(default=12, ge=1)
    penultimate_large_teeth: int = Field(default=24, ge=1)
    penultimate_small_teeth: int = Field(default=12, ge=1)
    final_teeth: int = Field(default=36, ge=1)

    penultimate_bearing: float = Field(default=0.0, description="Penultimate axis direction from final axis")
    middle_bearing: float = Field(default=90.0, description="Middle axis direction from penultimate axis")
    motor_bearing: float = Field(default=90.0, description="Motor axis direction from middle axis")

    @model_validator(mode="after")
    def validate_ratios(self) -> "TrainSpec":
        stages = [
            ("middle_large_teeth", self.middle_large_teeth, "motor_teeth", self.motor_teeth, 2),
            ("penultimate_large_teeth", self.penultimate_large_teeth,
             "middle_small_teeth", self.middle_small_teeth, 2),
            ("final_teeth", self.final_teeth,
             "penultimate_small_teeth", self.penultimate_small_teeth, 3),
        ]
        for driven_name, driven, driver_name, driver, ratio in stages:
            if driven != driver * ratio:
                raise ValueError(
                    f"{driven_name} ({driven}) must be {ratio}x {driver_name} ({driver})"
                )
        return self

    def gear(self, tooth_number: int, bore: float = 0.0, hand: int = 1) -> GearSpec:
        """Build the GearSpec for one gear of this train.

        ``hand`` is +1 or -1 and signs the helix angle. Gears that mesh with
        each other need opposite hands.
        """
        if hand not in (1, -1):
            raise ValueError(f"hand must be 1 or -1, got {hand}")
        return GearSpec(
            module=self.module,
            tooth_number=tooth_number,
            width=self.width,
            bore=bore,
            pressure_angle=self.pressure_angle,
            helix_angle=hand * self.helix_angle,
            optimize=self.optimize,
        )


class FaceSpec(BaseModel):
    """Clock face dial with embossed numerals and tick marks."""

    diameter: float = Field(default=150.0, gt=0, description="Face diameter in mm")
    thickness: float = Field(default=3.0, gt=0, description="Dial plate thickness in mm")
    clearance: float = Field(default=2.0, ge=0, description="Gap above the top gear layer in mm")
    font: str = Field(default="Arial", min_length=1, description="Font for the numerals")
    numeral_size: float = Field(default=10.0, gt=0, description="Numeral font size in mm")
    numeral_height: float = Field(default=1.2, gt=0, description="Emboss height of numerals in mm")
    numeral_inset: float = Field(default=16.0, gt=0, description="Numeral centre distance from rim in mm")
    tick_inset: float = Field(default=2.0, ge=0, description="Tick outer end distance from rim in mm")
    tick_length: float = Field(default=3.0, gt=0)
    major_tick_length: float = Field(default=6.0, gt=0)
    tick_width: float = Field(default=1.0, gt=0)
    major_tick_width: float = Field(default=1.6, gt=0)
    tick_height: float = Field(default=0.8, gt=0)

    @model_validator(mode="after")
    def validate_numerals_fit(self) -> "FaceSpec":
        if self.numeral_inset + self.numeral_size >= self.diameter / 2:
            raise ValueError("numerals do not fit on the face: reduce numeral_inset or numeral_size")
        if self.tick_inset + max(self.tick_length, self.major_tick_length) >= self.numeral_inset:
            raise ValueError("tick marks overlap the numeral ring")
        return self

    @property
    def radius(self) -> float:
        return self.diameter / 2


class ToleranceSpec(BaseModel):
    """Manufacturing tolerances (FDM defaults)."""

    axle_clearance: float = Field(
        default=0.3, ge=0, description="Diametral clearance for gears running free on axles in mm"
    )
    shaft_clearance: float = Field(
        default=0.1, ge=0, description="Diametral clearance on the motor shaft in mm"
    )
    key_clearance: float = Field(
        default=0.15, ge=0, description="Clearance per side around the spindle key in mm"
    )
    bearing_fit: float = Field(
        default=0.1, ge=0, description="Diametral clearance of the bearing pocket in mm"
    )


class RenderSpec(BaseModel):
    """Tessellation settings used when meshing for export."""

    facets: int = Field(default=400, ge=3, description="Facets per full circle")
    linear_tolerance: float = Field(default=0.01, gt=0, description="STL linear deflection in mm")


class ClockInfo(BaseModel):
    name: str = Field(default="desk_clock", min_length=1, description="Clock identifier")


class ClockSpec(BaseModel):
    """Top-level clock specification."""

    clock: ClockInfo = Field(default_factory=ClockInfo)
    train: TrainSpec = Field(default_factory=TrainSpec)
    face: FaceSpec = Field(default_factory=FaceSpec)
    tolerances: ToleranceSpec = Field(default_factory=ToleranceSpec)
    render: RenderSpec = Field(default_factory=RenderSpec)
    include_accessories: bool = Field(default=True, description="Include hand and enclosure")

    @model_validator(mode="after")
    def validate_bores(self) -> "ClockSpec":
        # Building each gear runs the bore < root diameter check
        free_bore = self.train.axle_diameter + self.tolerances.axle_clearance
        self.train.gear(self.train.final_teeth, self.train.axle_diameter)
        for teeth in (
            self.train.middle_large_teeth,
            self.train.middle_small_teeth,
            self.train.penultimate_large_teeth,
            self.train.penultimate_small_teeth,
        ):
            self.train.gear(teeth, free_bore)
        return self

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "ClockSpec":
        """Load and validate a YAML specification file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)
