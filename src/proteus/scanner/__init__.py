"""Filesystem access for the detectors."""

from .context import DetectorContext
from .structure import StructureScanner

__all__ = ["DetectorContext", "StructureScanner"]
