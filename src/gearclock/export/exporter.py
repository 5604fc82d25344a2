"""Export functionality for STL/STEP files."""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Optional, Dict, List

import cadquery as cq

from ..models.geometry import AssemblyModel, PartMetadata

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("stl", "step")


class Exporter:
    """Exports assembly and parts to various formats."""

    def __init__(
        self,
        output_dir: Path,
        formats: Optional[List[str]] = None,
        facets: int = 400,
        linear_tolerance: float = 0.01,
    ):
        """Initialize exporter.

        Args:
            output_dir: Directory to write output files
            formats: List of export formats (stl, step). Defaults to both.
            facets: Facets per full circle when meshing STL.
            linear_tolerance: STL linear deflection in mm.
        """
        self.formats = formats or ["stl", "step"]
        for fmt in self.formats:
            if fmt not in SUPPORTED_FORMATS:
                raise ValueError(f"Unsupported format: {fmt}")
        if facets < 3:
            raise ValueError(f"facets must be at least 3, got {facets}")

        self.output_dir = Path(output_dir)
        self.facets = facets
        self.linear_tolerance = linear_tolerance

        # Create output directories
        self.parts_dir = self.output_dir / "parts"
        self.assembly_dir = self.output_dir / "assembly"
        self.parts_dir.mkdir(parents=True, exist_ok=True)
        self.assembly_dir.mkdir(parents=True, exist_ok=True)

    @property
    def angular_tolerance(self) -> float:
        return 2 * math.pi / self.facets

    def export(
        self,
        assembly: cq.Assembly,
        parts: dict[str, cq.Workplane],
        metadata: Optional[Dict[str, PartMetadata]] = None,
        model: Optional[AssemblyModel] = None,
    ) -> Dict[str, Path]:
        """Export assembly and individual parts.

        Args:
            assembly: CadQuery Assembly to export
            parts: Dict of part_id -> CadQuery Workplane
            metadata: Optional metadata for BOM generation
            model: Optional placements and constraints for the manifest

        Returns:
            Dict mapping output type to file paths
        """
        outputs: dict[str, Path] = {}

        # Export individual parts
        for part_id, part in parts.items():
            for fmt in self.formats:
                path = self._export_part(part_id, part, fmt)
                outputs[f"{part_id}.{fmt}"] = path

        # Export full assembly
        for fmt in self.formats:
            path = self._export_assembly(assembly, fmt)
            outputs[f"assembly.{fmt}"] = path

        # Export GLB for visualization
        glb_path = self._export_assembly_glb(assembly)
        if glb_path:
            outputs["assembly.glb"] = glb_path

        # Export BOM
        if metadata:
            bom_path = self._export_bom(metadata)
            outputs["bom.json"] = bom_path

        # Export assembly manifest
        manifest_path = self._export_manifest(assembly, model)
        outputs["assembly_manifest.json"] = manifest_path

        return outputs

    def _export_part(self, part_id: str, part: cq.Workplane, fmt: str) -> Path:
        """Export a single part."""
        path = self.parts_dir / f"{part_id}.{fmt}"

        if fmt == "stl":
            cq.exporters.export(
                part, str(path), exportType="STL",
                tolerance=self.linear_tolerance,
                angularTolerance=self.angular_tolerance,
            )
        elif fmt == "step":
            cq.exporters.export(part, str(path), exportType="STEP")
        else:
            raise ValueError(f"Unsupported format: {fmt}")

        logger.debug(f"Wrote {path}")
        return path

    def _export_assembly(self, assembly: cq.Assembly, fmt: str) -> Path:
        """Export the full assembly."""
        path = self.assembly_dir / f"full_assembly.{fmt}"

        if fmt == "stl":
            compound = assembly.toCompound()
            cq.exporters.export(
                compound, str(path), exportType="STL",
                tolerance=self.linear_tolerance,
                angularTolerance=self.angular_tolerance,
            )
        elif fmt == "step":
            assembly.save(str(path))
        else:
            raise ValueError(f"Unsupported format: {fmt}")

        logger.info(f"Wrote {path}")
        return path

    def _export_assembly_glb(self, assembly: cq.Assembly) -> Optional[Path]:
        """Export assembly to GLB format for web visualization."""
        path = self.assembly_dir / "full_assembly.glb"

        try:
            assembly.save(str(path), exportType="GLTF")
            return path
        except Exception as e:
            logger.warning(f"GLB export failed: {e}")
            return None

    def _export_bom(self, metadata: dict[str, PartMetadata]) -> Path:
        """Export bill of materials to JSON."""
        path = self.output_dir / "bom.json"

        bom_data = {
            "parts": [
                {
                    "part_id": meta.part_id,
                    "name": meta.name,
                    "material": meta.material,
                    "count": meta.count,
                    "printed": meta.printed,
                    "dimensions": meta.dimensions,
                    "notes": meta.notes,
                }
                for meta in metadata.values()
            ]
        }

        with open(path, "w") as f:
            json.dump(bom_data, f, indent=2)

        return path

    def _export_manifest(
        self,
        assembly: cq.Assembly,
        model: Optional[AssemblyModel],
    ) -> Path:
        """Export assembly manifest with coordinate frames and constraints."""
        path = self.output_dir / "assembly_manifest.json"

        manifest: dict[str, Any] = {
            "name": assembly.name,
            "parts": {},
            "coordinate_frame": {
                "origin": [0, 0, 0],
                "x_axis": [1, 0, 0],
                "y_axis": [0, 1, 0],
                "z_axis": [0, 0, 1],
                "units": "mm",
            },
            "resolution": {
                "facets": self.facets,
                "linear_tolerance": self.linear_tolerance,
            },
        }

        # Add part information from assembly children
        for name in assembly.objects:
            if name == assembly.name:
                continue  # Skip root

            entry: dict[str, Any] = {
                "file": {fmt: f"parts/{name}.{fmt}" for fmt in self.formats},
            }
            if model is not None and name in model.parts:
                placement = model.parts[name]
                entry["origin"] = list(placement.origin)
                entry["rotation"] = list(placement.rotation)
                shaft = model.shaft_for(name)
                if shaft is not None:
                    entry["axis"] = shaft.axis_id
            manifest["parts"][name] = entry

        if model is not None:
            manifest["mates"] = [
                {
                    "part_a": mate.part_a,
                    "part_b": mate.part_b,
                    "type": mate.mate_type,
                    "clearance": mate.clearance,
                }
                for mate in model.mate_pairs
            ]

        with open(path, "w") as f:
            json.dump(manifest, f, indent=2)

        return path
