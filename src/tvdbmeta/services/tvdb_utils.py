"""TheTVDB helper functions.

Language normalization, artwork category lookup, remote-id lookup and
lenient date parsing shared by the client manager, the ranker and the
resolver.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime

from tvdbmeta.shared.constants import ArtworkCategoryNames, SessionConfig, TvdbConfig
from tvdbmeta.shared.errors import ErrorContext, UnknownArtworkCategoryError
from tvdbmeta.shared.models.metadata import ImageType
from tvdbmeta.shared.models.tvdb import ArtworkTypeRecord, RemoteIdRecord

logger = logging.getLogger(__name__)

# Lower-cased category name -> host image slot
ARTWORK_CATEGORY_IMAGE_TYPES: dict[str, ImageType] = {
    ArtworkCategoryNames.BACKGROUND: ImageType.BACKDROP,
    ArtworkCategoryNames.ICON: ImageType.THUMB,
    ArtworkCategoryNames.POSTER: ImageType.PRIMARY,
    ArtworkCategoryNames.BANNER: ImageType.BANNER,
    ArtworkCategoryNames.CLEARLOGO: ImageType.LOGO,
}

_DATE_FORMATS = ("%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S", "%Y")


def normalize_language(
    language: str | None,
    default: str = SessionConfig.DEFAULT_LANGUAGE,
) -> str:
    """Normalize a language code to the catalog's form.

    ``pt-BR`` is just ``pt`` to the catalog; blank input falls back to
    ``default``.

    Args:
        language: Language code from the host, may be None or blank
        default: Fallback language

    Returns:
        Lower-cased primary subtag
    """
    if language is None or not language.strip():
        return default
    return language.strip().split("-")[0].lower()


def get_artwork_type_from_key_type(
    key_type: int,
    artwork_types: Iterable[ArtworkTypeRecord],
) -> ImageType:
    """Map an artwork category id to the host image slot.

    The category name comparison is case-insensitive.

    Args:
        key_type: Artwork category id from an artwork record
        artwork_types: Category table from the catalog

    Returns:
        The matching ImageType

    Raises:
        UnknownArtworkCategoryError: If the id is absent from the table or
            its name has no image slot
    """
    category = next((t for t in artwork_types if t.id == key_type), None)
    image_type = (
        ARTWORK_CATEGORY_IMAGE_TYPES.get(category.name.lower()) if category else None
    )
    if image_type is None:
        raise UnknownArtworkCategoryError(
            key_type,
            ErrorContext(
                operation="get_artwork_type_from_key_type",
                additional_data={
                    "category_name": category.name if category else "",
                },
            ),
        )
    return image_type


def find_remote_id(remote_ids: Iterable[RemoteIdRecord], source_name: str) -> str | None:
    """Return the first non-empty id reported under ``source_name``."""
    for remote_id in remote_ids:
        if remote_id.source_name == source_name and remote_id.id:
            return remote_id.id
    return None


def parse_date(value: str | None) -> date | None:
    """Parse a catalog date, None when absent or unparseable.

    Dates from tvdb are either EST or local to the primary airing country,
    without an offset, so only the calendar date is kept.
    """
    if not value:
        return None
    text = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        logger.debug("Unparseable date from catalog: %r", value)
        return None


def banner_url(path: str | None) -> str | None:
    """Absolute URL for a banner-relative image path."""
    if not path:
        return None
    if path.startswith(("http://", "https://")):
        return path
    return TvdbConfig.BANNER_URL + path.lstrip("/")


def site_url(path: str | None) -> str | None:
    """Absolute URL for a site-relative image path (search results)."""
    if not path:
        return None
    if path.startswith(("http://", "https://")):
        return path
    return TvdbConfig.SITE_URL + path.lstrip("/")


__all__ = [
    "ARTWORK_CATEGORY_IMAGE_TYPES",
    "banner_url",
    "find_remote_id",
    "get_artwork_type_from_key_type",
    "normalize_language",
    "parse_date",
    "site_url",
]
