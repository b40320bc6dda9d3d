"""
API Configuration Constants

Constants for the TheTVDB v4 REST API.
"""

from typing import ClassVar

from .cache import BASE_SECOND


class TvdbConfig:
    """TheTVDB API configuration."""

    BASE_URL = "https://api4.thetvdb.com/v4"

    # Image URLs returned by search results are relative to this host
    SITE_URL = "https://www.thetvdb.com/"
    BANNER_URL = SITE_URL + "banners/"

    REQUEST_TIMEOUT = 30 * BASE_SECOND

    HEADERS: ClassVar[dict[str, str]] = {
        "Accept": "application/json",
        "Content-Type": "application/json",
    }

    # Languages the episode translation endpoint expects in 3-letter form
    TRANSLATION_LANGUAGE_ALIASES: ClassVar[dict[str, str]] = {"en": "eng"}

    # tvdb expects yyyy-mm-dd
    AIR_DATE_FORMAT = "%Y-%m-%d"


class TvdbEndpoints:
    """Endpoint paths, relative to TvdbConfig.BASE_URL."""

    LOGIN = "/login"
    SEARCH = "/search"
    SERIES_EXTENDED = "/series/{series_id}/extended"
    SERIES_EPISODES = "/series/{series_id}/episodes/{season_type}"
    SERIES_ARTWORKS = "/series/{series_id}/artworks"
    EPISODE_EXTENDED = "/episodes/{episode_id}/extended"
    EPISODE_TRANSLATION = "/episodes/{episode_id}/translations/{language}"
    LANGUAGES = "/languages"
    ARTWORK_TYPES = "/artwork/types"


class HTTPStatusCodes:
    """HTTP status code constants."""

    OK = 200
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    TOO_MANY_REQUESTS = 429
    INTERNAL_SERVER_ERROR = 500

    # 0 marks a failure with no HTTP response (connection error, timeout)
    NO_RESPONSE = 0
