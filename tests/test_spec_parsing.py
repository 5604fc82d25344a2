"""Tests for specification parsing and validation."""

import pytest
import yaml
from pathlib import Path

from gearclock.models.spec import (
    ClockSpec,
    GearSpec,
    TrainSpec,
    FaceSpec,
    ToleranceSpec,
    RenderSpec,
)

EXAMPLE_SPEC = Path(__file__).parent.parent / "examples" / "desk_clock.yaml"


class TestGearSpec:
    """Tests for GearSpec validation."""

    def test_valid_gear(self):
        gear = GearSpec(module=2.3, tooth_number=12, width=3.0, bore=8.0)
        assert gear.pitch_diameter == pytest.approx(27.6)
        assert gear.pressure_angle == 20.0
        assert gear.helix_angle == 0.0
        assert gear.optimize

    def test_bore_must_clear_root(self):
        with pytest.raises(ValueError, match="must be smaller than root diameter"):
            GearSpec(module=2.3, tooth_number=12, width=3.0, bore=23.0)

    @pytest.mark.parametrize("field,value", [
        ("module", 0.0),
        ("tooth_number", 0),
        ("width", -1.0),
        ("bore", -0.5),
        ("pressure_angle", 0.0),
        ("pressure_angle", 50.0),
        ("helix_angle", 90.0),
        ("helix_angle", -90.0),
    ])
    def test_out_of_range(self, field, value):
        params = {"module": 2.0, "tooth_number": 20, "width": 4.0}
        params[field] = value
        with pytest.raises(ValueError):
            GearSpec(**params)

    def test_fractional_teeth_rejected(self):
        with pytest.raises(ValueError):
            GearSpec(module=2.0, tooth_number=12.5, width=4.0)


class TestTrainSpec:
    """Tests for TrainSpec validation."""

    def test_defaults(self):
        train = TrainSpec()
        assert train.module == 2.3
        assert train.final_teeth == 36

    def test_scaled_train(self):
        train = TrainSpec(
            motor_teeth=10, middle_large_teeth=20, middle_small_teeth=14,
            penultimate_large_teeth=28, penultimate_small_teeth=10, final_teeth=30,
        )
        assert train.final_teeth == 30

    def test_motor_ratio(self):
        with pytest.raises(ValueError, match=r"middle_large_teeth \(24\) must be 2x motor_teeth \(10\)"):
            TrainSpec(motor_teeth=10)

    def test_final_ratio(self):
        with pytest.raises(ValueError, match="final_teeth"):
            TrainSpec(final_teeth=30)

    def test_gear_uses_train_settings(self):
        train = TrainSpec(helix_angle=10.0, optimize=False)
        gear = train.gear(24, 8.3)
        assert gear.module == train.module
        assert gear.width == train.width
        assert gear.helix_angle == 10.0
        assert not gear.optimize
        assert gear.bore == 8.3

    def test_gear_hand_signs_helix(self):
        train = TrainSpec(helix_angle=15.0)
        assert train.gear(12, hand=1).helix_angle == 15.0
        assert train.gear(24, hand=-1).helix_angle == -15.0

    def test_gear_rejects_bad_hand(self):
        with pytest.raises(ValueError, match="hand"):
            TrainSpec().gear(12, hand=0)


class TestFaceSpec:
    """Tests for FaceSpec validation."""

    def test_defaults(self):
        face = FaceSpec()
        assert face.diameter == 150.0
        assert face.radius == 75.0
        assert face.font == "Arial"

    def test_numerals_must_fit(self):
        with pytest.raises(ValueError, match="numerals do not fit"):
            FaceSpec(numeral_inset=70.0)

    def test_ticks_must_clear_numerals(self):
        with pytest.raises(ValueError, match="tick marks overlap"):
            FaceSpec(tick_inset=12.0)

    def test_empty_font_rejected(self):
        with pytest.raises(ValueError):
            FaceSpec(font="")


class TestClockSpec:
    """Tests for full ClockSpec validation."""

    @pytest.fixture
    def valid_spec_data(self):
        return {
            "clock": {"name": "test_clock"},
            "train": {"module": 2.0, "width": 5.0},
            "face": {"diameter": 140.0, "font": "DejaVu Sans"},
            "tolerances": {"axle_clearance": 0.4},
            "render": {"facets": 200},
            "include_accessories": False,
        }

    def test_defaults_are_valid(self):
        spec = ClockSpec()
        assert spec.clock.name == "desk_clock"
        assert spec.include_accessories
        assert isinstance(spec.tolerances, ToleranceSpec)
        assert isinstance(spec.render, RenderSpec)
        assert spec.render.facets == 400

    def test_valid_spec(self, valid_spec_data):
        spec = ClockSpec.model_validate(valid_spec_data)
        assert spec.clock.name == "test_clock"
        assert spec.train.module == 2.0
        assert spec.face.font == "DejaVu Sans"
        assert spec.tolerances.axle_clearance == 0.4
        assert not spec.include_accessories

    def test_too_few_facets(self, valid_spec_data):
        valid_spec_data["render"]["facets"] = 2
        with pytest.raises(ValueError):
            ClockSpec.model_validate(valid_spec_data)

    def test_axle_too_large_for_pinions(self):
        with pytest.raises(ValueError, match="must be smaller than root diameter"):
            ClockSpec.model_validate({"train": {"axle_diameter": 30.0}})

    def test_from_yaml(self, tmp_path, valid_spec_data):
        path = tmp_path / "clock.yaml"
        path.write_text(yaml.safe_dump(valid_spec_data))
        spec = ClockSpec.from_yaml(path)
        assert spec.clock.name == "test_clock"

    def test_empty_yaml_uses_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert ClockSpec.from_yaml(path) == ClockSpec()

    def test_example_file(self):
        spec = ClockSpec.from_yaml(EXAMPLE_SPEC)
        assert spec.clock.name == "desk_clock"
        assert spec.train.motor_teeth == 12
        assert spec.face.diameter == 150.0
