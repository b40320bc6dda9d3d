"""
Base Dataclasses for tvdbmeta

This module defines the foundation of the tvdbmeta type system.

Design Decisions:
- Dataclass over Pydantic for records: catalog payloads are parsed once and
  never re-validated, so the plain dataclass is enough
- Unknown wire keys are ignored by from_dict() because the remote catalog
  adds fields over time
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class BaseDataclass:
    """Common base dataclass for all tvdbmeta records and models.

    Lenient by default: suited to external API boundaries where extra fields
    may appear. Instances are built from JSON payloads via from_dict().

    Example:
        >>> @dataclass
        ... class Genre(BaseDataclass):
        ...     id: int
        ...     name: str
        ...
        >>> from tvdbmeta.shared.utils.dataclass_serialization import from_dict
        >>> from_dict(Genre, {"id": 1, "name": "Drama", "slug": "drama"}).name
        'Drama'
    """
