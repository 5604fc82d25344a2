"""Parametric CAD generator for a gear-driven desk clock."""

__version__ = "0.1.0"
