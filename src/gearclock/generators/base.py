"""Base protocol for part generators."""

from typing import Protocol

import cadquery as cq

from ..models.geometry import PartMetadata


class PartGenerator(Protocol):
    """Protocol for part generators.

    Generators are configured at construction; each produces one solid
    in its own frame (or in assembly coordinates for the base plate and
    enclosure).
    """

    def generate(self) -> cq.Workplane:
        """Generate the part geometry.

        Returns:
            CadQuery Workplane containing the part solid
        """
        ...

    def get_metadata(self) -> PartMetadata:
        """Get metadata for BOM generation.

        Returns:
            Part metadata including name, dimensions, material
        """
        ...
