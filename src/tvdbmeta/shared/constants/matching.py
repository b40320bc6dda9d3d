"""
Matching and Mapping Constants

Constants used by series matching, credits parsing and artwork mapping.
"""

from typing import ClassVar


class MatchingConfig:
    """Series matching configuration."""

    # TVDB returns a lot of unrelated results
    MAX_SEARCH_RESULTS = 10
    YEAR_TOLERANCE = 1


class ProviderNames:
    """Provider id keys used in host provider-id mappings."""

    TVDB = "Tvdb"
    IMDB = "Imdb"
    ZAP2IT = "Zap2It"


class RemoteIdSources:
    """Remote id source names as reported by the catalog."""

    IMDB = "IMDB"
    ZAP2IT = "TMS (Zap2It)"


class PeopleTypes:
    """Credit people types as reported by the catalog."""

    ACTOR = "Actor"
    DIRECTOR = "Director"
    GUEST_STAR = "Guest Star"
    WRITER = "Writer"


class ArtworkCategoryNames:
    """Artwork category names, lower-cased, and record types."""

    BACKGROUND = "background"
    ICON = "icon"
    POSTER = "poster"
    BANNER = "banner"
    CLEARLOGO = "clearlogo"

    RECORD_TYPE_SERIES = "series"
    RECORD_TYPE_SEASON = "season"


class SeasonTypes:
    """Season types accepted by the series episodes endpoint."""

    DEFAULT = "default"
    DVD = "dvd"
    ABSOLUTE = "absolute"
    OFFICIAL = "official"


class DisplayOrder:
    """Host series display orders."""

    DVD = "dvd"
    ABSOLUTE = "absolute"

    SEASON_TYPES: ClassVar[dict[str, str]] = {
        DVD: SeasonTypes.DVD,
        ABSOLUTE: SeasonTypes.ABSOLUTE,
    }


class AirDays:
    """Air day field names in catalog order."""

    ORDER: ClassVar[tuple[str, ...]] = (
        "monday",
        "tuesday",
        "wednesday",
        "thursday",
        "friday",
        "saturday",
        "sunday",
    )
