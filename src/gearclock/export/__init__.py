"""Export of parts, assemblies and the bill of materials."""

from .exporter import Exporter

__all__ = ["Exporter"]
