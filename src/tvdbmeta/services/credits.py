"""Credits mapping: actors, directors, writers and guest stars.

Guest stars arrive as a flat list of names in which one person's roles may
be spread over several consecutive entries::

    "Some Actor (Role1"
    "Role2"
    "Role3)"
    "Another Actor (Solo)"

``parse_guest_stars`` rebuilds one person per opening parenthesis by
scanning forward to the entry that closes it.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from tvdbmeta.services.tvdb_utils import banner_url
from tvdbmeta.shared.constants import PeopleTypes
from tvdbmeta.shared.models.metadata import PersonInfo, PersonType
from tvdbmeta.shared.models.tvdb import CharacterRecord

ROLE_SEPARATOR = ", "


def _role_text(fragment: str) -> str:
    return fragment.partition(")")[0].strip()


def parse_guest_stars(entries: Sequence[str]) -> list[PersonInfo]:
    """Rebuild guest stars from flat ``"name (role"`` credit entries.

    Rules:
    - An entry without ``(`` is a person with an empty role.
    - An entry with ``(`` starts a person; its roles run until the entry
      containing ``)``, inclusive. Roles are joined with ``", "``.
    - An entry that opens a new ``(`` before the previous one closed starts
      the next person instead of being taken as a role.
    - A list that ends before the closing ``)`` keeps the roles read so far.

    Args:
        entries: Guest star person names in credit order

    Returns:
        One PersonInfo per person, in order

    Example:
        >>> people = parse_guest_stars(
        ...     ["John Doe (Role1", "Role2", "Role3)", "Jane Roe (Solo)"]
        ... )
        >>> [(p.name, p.role) for p in people]
        [('John Doe', 'Role1, Role2, Role3'), ('Jane Roe', 'Solo')]
    """
    people: list[PersonInfo] = []
    index = 0
    while index < len(entries):
        entry = entries[index]
        index += 1

        name, paren, rest = entry.partition("(")
        if not paren:
            people.append(PersonInfo(name=entry.strip(), type=PersonType.GUEST_STAR, role=""))
            continue

        roles = [_role_text(rest)]
        closed = ")" in rest
        while not closed and index < len(entries):
            following = entries[index]
            if "(" in following:
                break
            roles.append(_role_text(following))
            closed = ")" in following
            index += 1

        people.append(
            PersonInfo(
                name=name.strip(),
                type=PersonType.GUEST_STAR,
                role=ROLE_SEPARATOR.join(role for role in roles if role),
            )
        )
    return people


def _of_type(characters: Iterable[CharacterRecord], people_type: str) -> list[CharacterRecord]:
    return [c for c in characters if c.people_type == people_type]


def actors_to_people(actors: Iterable[CharacterRecord]) -> list[PersonInfo]:
    """Map series actors; entries without a person name are dropped."""
    people: list[PersonInfo] = []
    for actor in actors:
        name = (actor.person_name or "").strip()
        if not name:
            continue
        people.append(
            PersonInfo(
                name=name,
                type=PersonType.ACTOR,
                role=(actor.name or "").strip(),
                sort_order=actor.sort,
                image_url=banner_url(actor.image),
            )
        )
    return people


def episode_people(characters: Sequence[CharacterRecord]) -> list[PersonInfo]:
    """Directors, then guest stars, then writers of one episode."""
    people = [
        PersonInfo(name=(c.person_name or "").strip(), type=PersonType.DIRECTOR)
        for c in _of_type(characters, PeopleTypes.DIRECTOR)
        if c.person_name
    ]
    people.extend(
        parse_guest_stars(
            [c.person_name for c in _of_type(characters, PeopleTypes.GUEST_STAR) if c.person_name]
        )
    )
    people.extend(
        PersonInfo(name=(c.person_name or "").strip(), type=PersonType.WRITER)
        for c in _of_type(characters, PeopleTypes.WRITER)
        if c.person_name
    )
    return people


__all__ = ["actors_to_people", "episode_people", "parse_guest_stars"]
