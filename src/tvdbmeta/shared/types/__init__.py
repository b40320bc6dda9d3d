"""Base types for tvdbmeta models."""

from .base import BaseDataclass

__all__ = ["BaseDataclass"]
