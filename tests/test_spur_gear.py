"""Tests for spur and compound gear generators."""

import pytest

from gearclock.models.spec import GearSpec, TrainSpec
from gearclock.models.geometry import PartType
from gearclock.generators.gear_spur import SpurGearGenerator, spur_gear
from gearclock.generators.gear_compound import CompoundGearGenerator, FinalGearGenerator


def bbox(shape):
    return shape.val().BoundingBox()


class TestSpurGear:
    """Tests for SpurGearGenerator."""

    @pytest.fixture
    def gear(self):
        return GearSpec(module=2.3, tooth_number=12, width=3.0, bore=8.0)

    def test_reference_gear(self):
        gear = spur_gear(2.3, 12, 3.0, 8.0)
        assert gear.val().isValid()

        bb = bbox(gear)
        # First tooth on +X; 12 teeth put another on -X
        assert bb.xmax == pytest.approx(16.1, abs=0.2)
        assert bb.xmin == pytest.approx(-16.1, abs=0.2)
        assert bb.zmin == pytest.approx(0.0, abs=1e-3)
        assert bb.zmax == pytest.approx(3.0, abs=1e-3)

    def test_dimensions(self, gear):
        dims = SpurGearGenerator(gear).dimensions
        assert dims.pitch_diameter == pytest.approx(27.6)
        assert dims.tip_diameter == pytest.approx(32.2)

    def test_invalid_parameters(self):
        with pytest.raises(ValueError):
            spur_gear(2.3, 12, 3.0, bore=25.0)
        with pytest.raises(ValueError):
            spur_gear(0.0, 12, 3.0)

    def test_bore_is_open(self, gear):
        solid = SpurGearGenerator(gear).generate().val()
        assert not solid.isInside((0, 0, 1.5))

    def test_no_bore(self):
        solid = spur_gear(2.3, 12, 3.0, optimize=False).val()
        assert solid.isInside((0, 0, 1.5))

    def test_weight_reduction_removes_material(self):
        light = spur_gear(2.3, 24, 4.0, 8.0, optimize=True).val().Volume()
        solid = spur_gear(2.3, 24, 4.0, 8.0, optimize=False).val().Volume()
        assert light < solid

    def test_optimize_without_room_matches_plain_gear(self):
        # Pitch radius 13.8 is below 1.5 x width 10
        optimized = spur_gear(2.3, 12, 10.0, 8.0, optimize=True).val().Volume()
        plain = spur_gear(2.3, 12, 10.0, 8.0, optimize=False).val().Volume()
        assert optimized == pytest.approx(plain, rel=1e-9)

    @pytest.mark.parametrize("module,teeth", [(0.5, 3), (0.5, 4), (2.0, 3)])
    def test_small_pinions_are_valid(self, module, teeth):
        # Fine-module pinions come out with pointed teeth
        assert spur_gear(module, teeth, 1.0).val().isValid()

    def test_helical_gear(self):
        helical = spur_gear(2.3, 12, 4.0, 3.0, helix_angle=15.0)
        assert helical.val().isValid()
        assert bbox(helical).zmax == pytest.approx(4.0, abs=1e-3)

    def test_d_flat_bore(self):
        gear = GearSpec(module=2.3, tooth_number=12, width=4.0, bore=3.1)
        round_bore = SpurGearGenerator(gear).generate().val()
        d_bore = SpurGearGenerator(gear, d_flat_depth=0.5).generate().val()
        assert d_bore.Volume() > round_bore.Volume()
        # Flat is on +Y
        assert d_bore.isInside((0, 1.4, 2.0))
        assert not d_bore.isInside((0, -1.4, 2.0))

    def test_metadata(self, gear):
        meta = SpurGearGenerator(gear, part_type=PartType.MOTOR_GEAR).get_metadata()
        assert meta.part_type == PartType.MOTOR_GEAR
        assert meta.name == "Spur Gear 12T"
        assert meta.dimensions["teeth"] == 12
        assert meta.dimensions["bore_diameter"] == 8.0
        assert meta.dimensions["weight_holes"] > 0


class TestCompoundGear:
    """Tests for CompoundGearGenerator."""

    @pytest.fixture
    def generator(self):
        train = TrainSpec()
        return CompoundGearGenerator(
            train.gear(12, 8.3), train.gear(24, 8.3), train.layer_gap,
            part_type=PartType.PENULTIMATE_GEAR,
        )

    def test_height(self, generator):
        assert generator.height == pytest.approx(9.0)

    def test_generates_solid(self, generator):
        body = generator.generate()
        assert body.val().isValid()

        bb = bbox(body)
        assert bb.zmax - bb.zmin == pytest.approx(9.0, abs=1e-3)
        # 24T tip diameter 59.8
        assert bb.xmax == pytest.approx(29.9, abs=0.3)

    def test_single_body(self, generator):
        assert len(generator.generate().solids().vals()) == 1

    def test_bore_runs_through(self, generator):
        body = generator.generate().val()
        for z in (2.0, 4.5, 7.0):
            assert not body.isInside((0, 0, z))

    def test_metadata(self, generator):
        meta = generator.get_metadata()
        assert meta.part_id == "penultimate_gear"
        assert meta.name == "Compound Gear 12T/24T"
        assert meta.dimensions["lower_teeth"] == 12
        assert meta.dimensions["upper_teeth"] == 24
        assert meta.dimensions["total_height"] == pytest.approx(9.0)


class TestFinalGear:
    """Tests for FinalGearGenerator."""

    @pytest.fixture
    def generator(self):
        return FinalGearGenerator(TrainSpec().gear(36, 8.0), spindle_height=15.0, key_height=3.0)

    def test_height(self, generator):
        assert generator.height == pytest.approx(19.0)

    def test_generates_solid(self, generator):
        body = generator.generate()
        assert body.val().isValid()
        bb = bbox(body)
        assert bb.zmax == pytest.approx(19.0, abs=1e-3)
        assert bb.xmax == pytest.approx(43.7, abs=0.3)

    def test_square_key(self, generator):
        body = generator.generate().val()
        # Key corners reach past the round spindle radius
        assert body.isInside((5.3, 5.3, 17.5))
        assert not body.isInside((5.3, 5.3, 10.0))

    def test_hollow(self, generator):
        body = generator.generate().val()
        assert not body.isInside((0, 0, 10.0))
        assert not body.isInside((0, 0, 2.0))

    def test_metadata(self, generator):
        meta = generator.get_metadata()
        assert meta.part_type == PartType.FINAL_GEAR
        assert meta.dimensions["spindle_height"] == 15.0
