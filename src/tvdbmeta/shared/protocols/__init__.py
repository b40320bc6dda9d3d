"""Protocol interfaces for tvdbmeta."""

from .services import RemoteCatalogClientProtocol

__all__ = ["RemoteCatalogClientProtocol"]
