"""Scene composition for the gear clock."""

from .builder import AssemblyBuilder, ViewMode
from .layout import LayoutSolver, layout_parts

__all__ = ["AssemblyBuilder", "ViewMode", "LayoutSolver", "layout_parts"]
