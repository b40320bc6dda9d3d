"""Utility helpers shared across tvdbmeta."""

from .dataclass_serialization import from_dict

__all__ = ["from_dict"]
