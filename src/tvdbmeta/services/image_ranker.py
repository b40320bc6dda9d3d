"""Artwork ranking and mapping.

Images are filtered by season affinity and ordered by a language tier,
then community rating, then score, all descending. The sort is stable, so
exact ties keep the remote order.

Language tiers for a preferred language P:

- 3: image language equals P
- 2: P is not English and the image is English
- 3 / 2: image has no language (3 when P is English, else 2)
- 0: anything else
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from tvdbmeta.services.tvdb_utils import banner_url, get_artwork_type_from_key_type
from tvdbmeta.shared.errors import UnknownArtworkCategoryError
from tvdbmeta.shared.logging import log_operation_error
from tvdbmeta.shared.models.matching import ArtworkItem, RankedResult
from tvdbmeta.shared.models.metadata import RemoteImage
from tvdbmeta.shared.models.tvdb import ArtworkRecord, ArtworkTypeRecord, LanguageRecord

logger = logging.getLogger(__name__)

ENGLISH = "en"

ImageSortKey = tuple[int, float, float]


def language_tier(item_language: str | None, preferred_language: str) -> int:
    """Language preference tier of one image, higher is better."""
    preferred = preferred_language.lower()
    is_english = preferred == ENGLISH
    language = item_language.lower() if item_language else ""

    if language and language == preferred:
        return 3
    if not is_english and language == ENGLISH:
        return 2
    if not language:
        return 3 if is_english else 2
    return 0


def image_sort_key(item: ArtworkItem, preferred_language: str) -> ImageSortKey:
    """(tier, community rating, score), missing values counted as 0."""
    return (
        language_tier(item.language, preferred_language),
        item.community_rating or 0,
        item.score or 0,
    )


def _matches_season(item: ArtworkItem, season_affinity: str | int | None) -> bool:
    if season_affinity is None:
        return True
    return item.season_affinity is not None and item.season_affinity == str(season_affinity)


def rank_with_keys(
    images: Iterable[ArtworkItem],
    season_affinity: str | int | None,
    preferred_language: str,
) -> list[RankedResult[ArtworkItem]]:
    """Filter and rank, keeping the sort key of each result."""
    ranked = [
        RankedResult(item=image, sort_key=image_sort_key(image, preferred_language))
        for image in images
        if _matches_season(image, season_affinity)
    ]
    ranked.sort(key=lambda result: result.sort_key, reverse=True)
    return ranked


def rank(
    images: Iterable[ArtworkItem],
    season_affinity: str | int | None,
    preferred_language: str,
) -> list[ArtworkItem]:
    """Order images best first.

    Args:
        images: Candidate images in remote order
        season_affinity: Keep only images of this season when given
        preferred_language: Language the host prefers

    Returns:
        Filtered images, best first
    """
    return [result.item for result in rank_with_keys(images, season_affinity, preferred_language)]


def resolve_language(code: str | None, languages: Sequence[LanguageRecord]) -> str | None:
    """Keep an image language only if the catalog knows it."""
    if not code:
        return None
    for language in languages:
        if language.id and language.id == code:
            return language.id
    return None


def to_artwork_item(record: ArtworkRecord, languages: Sequence[LanguageRecord]) -> ArtworkItem:
    return ArtworkItem(
        url=record.image,
        thumbnail_url=banner_url(record.thumbnail),
        language=resolve_language(record.language, languages),
        width=record.width,
        height=record.height,
        score=record.score,
        category_id=record.category_id,
        season_affinity=str(record.season_id) if record.season_id is not None else None,
    )


def to_remote_images(
    items: Iterable[ArtworkItem],
    artwork_types: Sequence[ArtworkTypeRecord],
) -> list[RemoteImage]:
    """Map ranked items to host images, preserving order.

    An item whose category is unknown is logged and skipped; the rest of
    the batch is kept.
    """
    images: list[RemoteImage] = []
    for item in items:
        try:
            image_type = get_artwork_type_from_key_type(item.category_id, artwork_types)
        except UnknownArtworkCategoryError as e:
            log_operation_error(
                logger=logger,
                error=e,
                operation="to_remote_images",
                additional_context={"url": item.url},
                level=logging.WARNING,
            )
            continue

        images.append(
            RemoteImage(
                url=item.url,
                type=image_type,
                thumbnail_url=item.thumbnail_url,
                language=item.language,
                width=item.width,
                height=item.height,
                vote_count=item.score,
                community_rating=item.community_rating,
            )
        )
    return images


__all__ = [
    "image_sort_key",
    "language_tier",
    "rank",
    "rank_with_keys",
    "resolve_language",
    "to_artwork_item",
    "to_remote_images",
]
