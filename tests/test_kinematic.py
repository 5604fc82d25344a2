"""Tests for kinematic model."""

import pytest

from gearclock.models.spec import TrainSpec
from gearclock.models.kinematic import (
    ANIMATION_STEPS,
    KinematicModel,
    mesh_phase,
    tooth_phase,
)


class TestToothPhase:
    """Tests for tooth phase helpers."""

    def test_tooth_on_direction(self):
        assert tooth_phase(0.0, 12, 0.0) == pytest.approx(0.0)

    def test_gap_on_direction(self):
        assert tooth_phase(15.0, 12, 0.0) == pytest.approx(0.5)

    def test_wraps_whole_pitches(self):
        assert tooth_phase(30.0 * 7, 12, 0.0) == pytest.approx(0.0, abs=1e-9)

    @pytest.mark.parametrize("rotation,direction", [(0.0, 0.0), (3.7, 90.0), (-20.0, 217.0)])
    def test_mesh_phase_interleaves(self, rotation, direction):
        rot_b = mesh_phase(rotation, 36, 12, direction)
        p_a = tooth_phase(rotation, 36, direction)
        p_b = tooth_phase(rot_b, 12, direction + 180.0)
        assert (p_a + p_b) % 1.0 == pytest.approx(0.5)

    def test_mesh_phase_within_one_pitch(self):
        rot_b = mesh_phase(11.0, 24, 12, 90.0)
        assert 0.0 <= rot_b < 30.0


class TestKinematicModel:
    """Tests for KinematicModel."""

    @pytest.fixture
    def model(self):
        return KinematicModel.create_clock(TrainSpec())

    def test_create_clock(self, model):
        assert set(model.stages) == {"motor", "middle", "penultimate", "final"}
        assert len(model.meshes) == 3

    def test_rotation_factors(self, model):
        factors = model.factors()
        assert factors["motor"] == pytest.approx(-6.0)
        assert factors["middle"] == pytest.approx(3.0)
        assert factors["penultimate"] == pytest.approx(-1.5)
        assert factors["final"] == pytest.approx(0.5)

    def test_final_gear_starts_at_zero(self, model):
        assert model.rotation("final", 0.0) == 0.0

    def test_rotation(self, model):
        motor = model.stages["motor"]
        assert model.rotation("motor", 10.0) == pytest.approx(motor.phase - 60.0)

    def test_output_turns_twice_per_loop(self, model):
        turned = model.rotation("final", ANIMATION_STEPS) - model.rotation("final", 0.0)
        assert turned == pytest.approx(720.0)

    def test_teeth_passed_match_at_each_mesh(self, model):
        for mesh in model.meshes:
            a = model.teeth_passed(mesh.stage_a, mesh.teeth_a, 123.0)
            b = model.teeth_passed(mesh.stage_b, mesh.teeth_b, 123.0)
            assert a == pytest.approx(-b)

    def test_verify_mesh_lock_valid(self, model):
        assert model.verify_mesh_lock() == []

    def test_mesh_lock_at_fractional_steps(self, model):
        assert model.verify_mesh_lock([0.1, 1.7, 33.3, 499.99, 720.0]) == []

    def test_mesh_lock_with_other_bearings(self):
        train = TrainSpec(penultimate_bearing=30.0, middle_bearing=125.0, motor_bearing=45.0)
        assert KinematicModel.create_clock(train).verify_mesh_lock() == []

    def test_mesh_lock_scaled_train(self):
        train = TrainSpec(
            motor_teeth=10, middle_large_teeth=20, middle_small_teeth=14,
            penultimate_large_teeth=28, penultimate_small_teeth=10, final_teeth=30,
        )
        model = KinematicModel.create_clock(train)
        assert model.factors()["final"] == pytest.approx(0.5)
        assert model.verify_mesh_lock() == []

    def test_verify_detects_phase_error(self, model):
        model.stages["motor"].phase += 7.0
        errors = model.verify_mesh_lock()
        assert len(errors) == 1
        assert "out of lock" in errors[0]

    def test_verify_detects_ratio_error(self, model):
        model.stages["middle"].factor = 2.9
        errors = model.verify_mesh_lock()
        assert any("Ratio mismatch" in e for e in errors)


class TestAnimationStep:
    """Tests for normalized animation time."""

    @pytest.mark.parametrize("time,step", [(0.0, 0.0), (0.25, 180.0), (1.0, 720.0)])
    def test_mapping(self, time, step):
        assert KinematicModel.animation_step(time) == pytest.approx(step)

    @pytest.mark.parametrize("time", [-0.1, 1.5, float("nan")])
    def test_out_of_range(self, time):
        with pytest.raises(ValueError, match=r"within \[0, 1\]"):
            KinematicModel.animation_step(time)
