"""Kinematic model of the clock gear train.

Each gear body turns by ``phase + factor * step`` degrees. Factors follow
from the tooth counts, starting from the motor pinion at -6 per step.
Phases are chosen so that a tooth of one gear sits in a gap of its mate
at every mesh point.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .spec import TrainSpec

MOTOR_FACTOR = -6.0

# One animation loop covers this many steps
ANIMATION_STEPS = 720.0

MESH_TOLERANCE = 1e-6


def tooth_phase(rotation: float, teeth: int, direction: float) -> float:
    """Fraction of a tooth pitch between a tooth centre and ``direction``.

    0 means a tooth is centred on ``direction``, 0.5 means a gap is.
    """
    pitch = 360.0 / teeth
    return ((direction - rotation) / pitch) % 1.0


def mesh_phase(rotation_a: float, teeth_a: int, teeth_b: int, direction: float) -> float:
    """Rotation of gear B that interleaves its teeth with gear A.

    Args:
        rotation_a: Current rotation of gear A in degrees.
        teeth_a: Tooth count of gear A.
        teeth_b: Tooth count of gear B.
        direction: Direction of B's axis as seen from A's axis, in degrees.

    Returns:
        Rotation of gear B in [0, 360/teeth_b).
    """
    pitch_b = 360.0 / teeth_b
    p_a = tooth_phase(rotation_a, teeth_a, direction)
    return (direction + 180.0 - pitch_b * (0.5 - p_a)) % pitch_b


@dataclass
class GearStage:
    """One rotating body of the train."""

    name: str
    teeth: tuple[int, ...]  # Tooth counts carried by this body
    factor: float           # Degrees turned per step
    phase: float = 0.0      # Rotation at step 0


@dataclass
class MeshPair:
    """Two meshing gears on neighbouring bodies."""

    stage_a: str
    stage_b: str
    teeth_a: int
    teeth_b: int
    direction: float  # Direction of B's axis seen from A's axis


@dataclass
class KinematicModel:
    """Rotation model for previewing and verifying the gear train."""

    stages: dict[str, GearStage] = field(default_factory=dict)
    meshes: list[MeshPair] = field(default_factory=list)

    @classmethod
    def create_clock(cls, train: TrainSpec) -> "KinematicModel":
        """Build the motor -> middle -> penultimate -> final train."""
        model = cls()

        middle_factor = -MOTOR_FACTOR * train.motor_teeth / train.middle_large_teeth
        penultimate_factor = -middle_factor * train.middle_small_teeth / train.penultimate_large_teeth
        final_factor = -penultimate_factor * train.penultimate_small_teeth / train.final_teeth

        # Phases are fixed from the output end, where the face is keyed
        final_phase = 0.0
        penultimate_phase = mesh_phase(
            final_phase, train.final_teeth, train.penultimate_small_teeth,
            train.penultimate_bearing,
        )
        middle_phase = mesh_phase(
            penultimate_phase, train.penultimate_large_teeth, train.middle_small_teeth,
            train.middle_bearing,
        )
        motor_phase = mesh_phase(
            middle_phase, train.middle_large_teeth, train.motor_teeth,
            train.motor_bearing,
        )

        model.stages["motor"] = GearStage(
            "motor", (train.motor_teeth,), MOTOR_FACTOR, motor_phase,
        )
        model.stages["middle"] = GearStage(
            "middle", (train.middle_large_teeth, train.middle_small_teeth),
            middle_factor, middle_phase,
        )
        model.stages["penultimate"] = GearStage(
            "penultimate", (train.penultimate_large_teeth, train.penultimate_small_teeth),
            penultimate_factor, penultimate_phase,
        )
        model.stages["final"] = GearStage(
            "final", (train.final_teeth,), final_factor, final_phase,
        )

        model.meshes.append(MeshPair(
            "final", "penultimate", train.final_teeth, train.penultimate_small_teeth,
            train.penultimate_bearing,
        ))
        model.meshes.append(MeshPair(
            "penultimate", "middle", train.penultimate_large_teeth, train.middle_small_teeth,
            train.middle_bearing,
        ))
        model.meshes.append(MeshPair(
            "middle", "motor", train.middle_large_teeth, train.motor_teeth,
            train.motor_bearing,
        ))
        return model

    def rotation(self, stage: str, step: float) -> float:
        """Rotation of a stage in degrees at the given step."""
        s = self.stages[stage]
        return s.phase + s.factor * step

    def rotations(self, step: float) -> dict[str, float]:
        return {name: self.rotation(name, step) for name in self.stages}

    def factors(self) -> dict[str, float]:
        return {name: s.factor for name, s in self.stages.items()}

    def teeth_passed(self, stage: str, teeth: int, step: float) -> float:
        """Number of tooth pitches a gear has turned through since step 0."""
        return (self.rotation(stage, step) - self.stages[stage].phase) / (360.0 / teeth)

    def verify_mesh_lock(self, steps: Optional[Iterable[float]] = None) -> list[str]:
        """Check every mesh at the sampled steps. Returns list of errors."""
        errors = []
        if steps is None:
            steps = [i * ANIMATION_STEPS / 96 for i in range(97)]
        steps = list(steps)

        for mesh in self.meshes:
            a = self.stages[mesh.stage_a]
            b = self.stages[mesh.stage_b]

            # Equal arc length at the pitch circles
            balance = mesh.teeth_a * a.factor + mesh.teeth_b * b.factor
            if abs(balance) > MESH_TOLERANCE:
                errors.append(
                    f"Ratio mismatch {mesh.stage_a}/{mesh.stage_b}: "
                    f"{mesh.teeth_a}*{a.factor} + {mesh.teeth_b}*{b.factor} = {balance}"
                )

            for step in steps:
                p_a = tooth_phase(self.rotation(mesh.stage_a, step), mesh.teeth_a, mesh.direction)
                p_b = tooth_phase(
                    self.rotation(mesh.stage_b, step), mesh.teeth_b, mesh.direction + 180.0
                )
                offset = (p_a + p_b) % 1.0
                if abs(offset - 0.5) > MESH_TOLERANCE:
                    errors.append(
                        f"Mesh {mesh.stage_a}/{mesh.stage_b} out of lock at step {step}: "
                        f"tooth phase sum {offset:.6f}"
                    )
                    break

        return errors

    @staticmethod
    def animation_step(time: float) -> float:
        """Map normalized animation time in [0, 1] to a step value."""
        if math.isnan(time) or time < 0.0 or time > 1.0:
            raise ValueError(f"animation time must be within [0, 1], got {time}")
        return time * ANIMATION_STEPS
