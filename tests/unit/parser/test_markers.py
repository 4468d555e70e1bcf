"""Tests for visual marker and aspect ratio inference."""

import pytest

from scriptpanel.parser.markers import infer_aspect_ratio, infer_visual_marker
from scriptpanel.parser.models import AspectRatio


class TestInferVisualMarker:
    """Test the keyword priority list."""

    @pytest.mark.parametrize(
        ("description", "modifier", "expected"),
        [
            ("A micro-flash of the gun", None, "inset"),
            ("Her reflection begins to fracture", None, "echo"),
            ("The frame stutters", None, "hitch"),
            ("Ink bleeds into a lattice", None, "overflow"),
            ("Two halves of the city", "Split Panel", "split"),
            ("The full page reveal", None, "splash"),
            ("Fragments of glass everywhere", None, "shattered"),
            ("A larger view of the hall", None, "large"),
            ("Full width shot of the bridge", None, "full-width"),
            ("Maya sits at the table", None, "standard"),
        ],
    )
    def test_keywords(self, description, modifier, expected):
        """Test each marker tag."""
        assert infer_visual_marker(description, modifier) == expected

    def test_first_hit_wins(self):
        """Test that an earlier entry beats a later one."""
        assert infer_visual_marker("An inset inside a splash page") == "inset"

    def test_shattered_text_is_claimed_by_echo(self):
        """Test that 'shattered' contains 'shatter' and resolves to echo."""
        assert infer_visual_marker("The window is shattered") == "echo"

    def test_case_insensitive(self):
        """Test that matching ignores case."""
        assert infer_visual_marker("SPLASH") == "splash"


class TestInferAspectRatio:
    """Test aspect ratio inference."""

    @pytest.mark.parametrize(
        ("description", "modifier", "expected"),
        [
            ("Establishing view of the harbor", None, AspectRatio.WIDE),
            ("A tall tower", None, AspectRatio.PORTRAIT),
            ("Close on her eyes", None, AspectRatio.STD),
            ("A square window", None, AspectRatio.SQUARE),
            ("Nothing special", None, AspectRatio.WIDE),
            ("Her face", "vertical", AspectRatio.PORTRAIT),
        ],
    )
    def test_keywords(self, description, modifier, expected):
        """Test each aspect ratio cue."""
        assert infer_aspect_ratio(description, modifier) == expected

    def test_wide_cues_checked_first(self):
        """Test that wide cues beat close cues."""
        assert infer_aspect_ratio("Wide shot, close to the water") == AspectRatio.WIDE
