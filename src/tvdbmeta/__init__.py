"""tvdbmeta: TheTVDB metadata client with session and result caching.

Public entry points for hosts:

- MetadataResolver: search, series/episode resolution and image lookups
- TvdbClientManager: cached access to the catalog service
- normalize: name normalization used for matching
"""

from tvdbmeta.services import MetadataResolver, TvdbClientManager, normalize

__version__ = "0.1.0"

__all__ = ["MetadataResolver", "TvdbClientManager", "__version__", "normalize"]
