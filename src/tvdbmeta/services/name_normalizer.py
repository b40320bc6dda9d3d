"""Name normalization for series matching.

``normalize`` builds the comparable form of a title used both as the remote
search query and for containment checks against candidate titles.
``parse_name`` is the default library-name parser that splits a trailing
``(YYYY)`` year off a folder-style name.
"""

from __future__ import annotations

import re
import unicodedata

from tvdbmeta.shared.models.metadata import ParsedName

_COMMA_THE = re.compile(r", the", re.IGNORECASE)
# "the " at the start of the string or after a non-word character
_THE_TOKEN = re.compile(r"\bthe ", re.IGNORECASE)
_NON_WORD_RUN = re.compile(r"\W+")
_TRAILING_YEAR = re.compile(r"^(?P<name>.*?)\s*\((?P<year>\d{4})\)\s*$")

_STRIPPED_CATEGORIES = frozenset({"Mn", "Lm"})


def _normalize_once(name: str) -> str:
    name = name.lower()
    name = unicodedata.normalize("NFC", name)
    name = _COMMA_THE.sub("", name)
    name = _THE_TOKEN.sub(" ", name)
    name = name.replace("&", " and ")
    name = "".join(
        char for char in name if unicodedata.category(char) not in _STRIPPED_CATEGORIES
    )
    name = _NON_WORD_RUN.sub(" ", name)
    return name.strip()


def normalize(raw_name: str) -> str:
    """Return the comparable form of a series name.

    Steps: lowercase, NFC, drop ", the", replace "the " tokens with a space,
    "&" -> " and ", drop Mn/Lm code points, collapse non-word runs, trim.
    A trailing "the" and the bare string "the" are kept.

    The pipeline repeats until the output is stable, so the function is
    idempotent even when a later step exposes a new "the " token
    (``"the&x"`` becomes ``"and x"``).

    Args:
        raw_name: Name as typed by the user or parsed from the library

    Returns:
        Normalized name, empty for empty input

    Example:
        >>> normalize("The Office (US)")
        'office us'
        >>> normalize("Law & Order")
        'law and order'
    """
    if not raw_name:
        return ""

    current = _normalize_once(raw_name)
    while True:
        following = _normalize_once(current)
        if following == current:
            return current
        current = following


def parse_name(name: str) -> ParsedName:
    """Split a trailing parenthesized year off a library name.

    Args:
        name: Library name, e.g. ``"Doctor Who (2005)"``

    Returns:
        ParsedName with the title and the year, or the unchanged name and
        ``year=None`` when there is no trailing year
    """
    match = _TRAILING_YEAR.match(name or "")
    if match and match.group("name").strip():
        return ParsedName(name=match.group("name").strip(), year=int(match.group("year")))
    return ParsedName(name=name or "", year=None)


__all__ = ["normalize", "parse_name"]
