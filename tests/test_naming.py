# -*- coding: utf-8 -*-
"""Tests for waypoint name decomposition."""

import re

import pytest

from gpx_merger.naming import NameParts
from gpx_merger.naming import WaypointNameParser
from tests.conftest import make_waypoint

PATTERNS = {
    "default": re.compile(r"^(?P<Prenom>\w+)\s+(?P<Name>.+?)\s+(?P<Ele>\d+)m$"),
    "huts.gpx": re.compile(r"^(?P<Countries>[A-Z]{2}(?:/[A-Z]{2})*)\s+(?P<Name>.+)$"),
    "any.gpx": re.compile(r"^(?P<Name>.+?)\s*\((?P<Ele>[^)]*)\)$"),
}


@pytest.fixture
def parser() -> WaypointNameParser:
    return WaypointNameParser(PATTERNS)


class TestParseName:
    """Tests for WaypointNameParser.parse_name."""

    def test_default_pattern(self, parser):
        """Test decomposition with the fallback pattern."""
        parts = parser.parse_name("unknown.gpx", "Col du Galibier 2642m")
        assert parts == NameParts(name="du Galibier", prenom="Col", elevation=2642.0)
        assert parts.display_name == "Col du Galibier"

    def test_file_specific_pattern(self, parser):
        """Test that a pattern keyed by file name wins over the default."""
        parts = parser.parse_name("huts.gpx", "CH/IT Rifugio Teodulo")
        assert parts.countries == "CH/IT"
        assert parts.name == "Rifugio Teodulo"
        assert parts.elevation is None
        assert parts.display_name == "Rifugio Teodulo"

    def test_no_match(self, parser):
        """Test that a non-matching name yields None."""
        assert parser.parse_name("huts.gpx", "lowercase name") is None

    def test_no_pattern(self):
        """Test that no patterns at all yields None."""
        assert WaypointNameParser().parse_name("a.gpx", "Anything 100m") is None

    def test_non_numeric_elevation(self, parser):
        """Test that an unparseable elevation group counts as absent."""
        parts = parser.parse_name("any.gpx", "Hut (closed)")
        assert parts.name == "Hut"
        assert parts.elevation is None


class TestApply:
    """Tests for WaypointNameParser.apply."""

    def test_name_and_elevation(self, parser):
        """Test that name is normalized and elevation filled in."""
        wp = make_waypoint(45.0, 7.0, "Col du Galibier 2642m")
        assert parser.apply("a.gpx", wp) is True
        assert wp.name == "Col du Galibier"
        assert wp.elevation == 2642.0

    def test_existing_elevation_kept(self, parser):
        """Test that an elevation from the file is not replaced."""
        wp = make_waypoint(45.0, 7.0, "Col du Galibier 2642m", 2645.0)
        parser.apply("a.gpx", wp)
        assert wp.elevation == 2645.0

    def test_zero_elevation_ignored(self, parser):
        """Test that a parsed elevation of zero is not applied."""
        wp = make_waypoint(45.0, 7.0, "Beach Bar 0m")
        parser.apply("a.gpx", wp)
        assert wp.name == "Beach Bar"
        assert wp.elevation is None

    def test_no_match_leaves_waypoint(self, parser):
        """Test that a non-matching waypoint is untouched."""
        wp = make_waypoint(45.0, 7.0, "Hut")
        assert parser.apply("a.gpx", wp) is False
        assert wp.name == "Hut"
        assert wp.elevation is None
