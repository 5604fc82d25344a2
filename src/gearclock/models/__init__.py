"""Data models for the clock generator."""

from .spec import ClockSpec, GearSpec, TrainSpec, FaceSpec, ToleranceSpec, RenderSpec
from .geometry import AssemblyModel, PartPlacement, PartType, PartMetadata
from .kinematic import KinematicModel

__all__ = [
    "ClockSpec",
    "GearSpec",
    "TrainSpec",
    "FaceSpec",
    "ToleranceSpec",
    "RenderSpec",
    "AssemblyModel",
    "PartPlacement",
    "PartType",
    "PartMetadata",
    "KinematicModel",
]
