"""
Cache Configuration Constants

Time units and defaults for the session cache and the result cache.
"""

# Base time units for TTL calculations
BASE_SECOND = 1
BASE_MINUTE = 60 * BASE_SECOND
BASE_HOUR = 60 * BASE_MINUTE


class CacheConfig:
    """Result cache defaults."""

    DEFAULT_TTL = BASE_HOUR  # 1 hour

    # Terminates every cache key segment
    KEY_SEPARATOR = ";"

    # Key prefixes, one per facade call site
    TYPE_SERIES_SEARCH = "series-search"
    TYPE_SERIES = "series"
    TYPE_SERIES_IMDB = "series-imdb"
    TYPE_SERIES_ZAP2IT = "series-zap2it"
    TYPE_EPISODE = "episode"
    TYPE_EPISODES_PAGE = "episodes-page"
    TYPE_EPISODE_TRANSLATION = "episode-translation"
    TYPE_SERIES_IMAGES = "series-images"
    TYPE_SERIES_ARTWORKS = "series-artworks"
    TYPE_ARTWORK_TYPES = "artwork-types"
    TYPE_LANGUAGES = "languages"


class SessionConfig:
    """Session cache defaults."""

    DEFAULT_LANGUAGE = "en"
    TOKEN_REFRESH_HOURS = 20
    TOKEN_REFRESH_INTERVAL = TOKEN_REFRESH_HOURS * BASE_HOUR
