"""TheTVDB client and cached facade."""

from .client_manager import TvdbClientManager
from .tvdb_client import TvdbClient

__all__ = ["TvdbClient", "TvdbClientManager"]
