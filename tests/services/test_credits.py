"""Tests for credits mapping."""

import pytest

from tvdbmeta.services.credits import actors_to_people, episode_people, parse_guest_stars
from tvdbmeta.shared.models.metadata import PersonType
from tvdbmeta.shared.models.tvdb import CharacterRecord


def _names_and_roles(people):
    return [(p.name, p.role) for p in people]


class TestParseGuestStars:
    """Test cases for parse_guest_stars()."""

    def test_multi_entry_roles(self):
        """Test that roles spread over entries are rebuilt for one person."""
        people = parse_guest_stars(
            ["John Doe (Role1", "Role2", "Role3)", "Jane Roe (Solo)"]
        )

        assert _names_and_roles(people) == [
            ("John Doe", "Role1, Role2, Role3"),
            ("Jane Roe", "Solo"),
        ]
        assert {p.type for p in people} == {PersonType.GUEST_STAR}

    def test_entry_without_parenthesis(self):
        """Test that a plain name becomes a person with an empty role."""
        people = parse_guest_stars(["Plain Name", "Other (Role)"])

        assert _names_and_roles(people) == [("Plain Name", ""), ("Other", "Role")]

    def test_does_not_rescan_earlier_entries(self):
        """Test that the closing search starts after the opening entry."""
        people = parse_guest_stars(["First (A)", "Second (B", "C)"])

        assert _names_and_roles(people) == [("First", "A"), ("Second", "B, C")]

    def test_new_opening_stops_scan(self):
        """Test that an entry opening a new parenthesis starts the next person."""
        people = parse_guest_stars(["Unclosed (A", "Next (B)"])

        assert _names_and_roles(people) == [("Unclosed", "A"), ("Next", "B")]

    def test_unclosed_consumes_rest(self):
        """Test that a list ending before the close keeps the roles read."""
        people = parse_guest_stars(["Actor (A", "B"])

        assert _names_and_roles(people) == [("Actor", "A, B")]

    def test_empty_roles_dropped(self):
        """Test that blank role fragments are not joined."""
        people = parse_guest_stars(["Actor (", "  ", "Role)"])

        assert _names_and_roles(people) == [("Actor", "Role")]

    @pytest.mark.parametrize("entries", [[], ()])
    def test_empty_input(self, entries):
        """Test that no entries yield no people."""
        assert parse_guest_stars(entries) == []


class TestActorsToPeople:
    """Test cases for actors_to_people()."""

    def test_mapping(self):
        """Test name, role, sort order and image."""
        actors = [
            CharacterRecord(
                name="Michael Scott",
                person_name="  Steve Carell ",
                people_type="Actor",
                sort=1,
                image="/actors/1.jpg",
            ),
            CharacterRecord(name="Nobody", person_name="   ", people_type="Actor"),
        ]

        people = actors_to_people(actors)

        assert len(people) == 1
        actor = people[0]
        assert actor.name == "Steve Carell"
        assert actor.role == "Michael Scott"
        assert actor.type == PersonType.ACTOR
        assert actor.sort_order == 1
        assert actor.image_url == "https://www.thetvdb.com/banners/actors/1.jpg"


class TestEpisodePeople:
    """Test cases for episode_people()."""

    def test_order_by_type(self):
        """Test directors, then guest stars, then writers."""
        characters = [
            CharacterRecord(person_name="Writer One", people_type="Writer"),
            CharacterRecord(person_name="John Doe (Role1", people_type="Guest Star"),
            CharacterRecord(person_name="Role2)", people_type="Guest Star"),
            CharacterRecord(person_name="Ken Kwapis", people_type="Director"),
            CharacterRecord(person_name="Someone", people_type="Actor"),
        ]

        people = episode_people(characters)

        assert [(p.name, p.type) for p in people] == [
            ("Ken Kwapis", PersonType.DIRECTOR),
            ("John Doe", PersonType.GUEST_STAR),
            ("Writer One", PersonType.WRITER),
        ]
        assert people[1].role == "Role1, Role2"
