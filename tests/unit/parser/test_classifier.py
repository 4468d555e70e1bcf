"""Tests for line classification against the comic vocabulary."""

import pytest

from scriptpanel.parser.classifier import classify_line
from scriptpanel.parser.formats import COMIC, ClassifierContext
from scriptpanel.parser.lines import (
    SFX,
    ArtistNote,
    Blank,
    Caption,
    CastDefinition,
    CharacterNameOnly,
    Dialogue,
    Ignored,
    IssueFields,
    PageMarker,
    PanelMarker,
    PlainText,
    ScreenText,
    Section,
    SectionHeader,
)
from scriptpanel.parser.models import DialogueType


def classify(line, **context):
    """Classify a line as comic script with an optional context."""
    return classify_line(line, COMIC, ClassifierContext(**context))


class TestPageMarkers:
    """Test anchored page markers."""

    @pytest.mark.parametrize(
        ("line", "number"),
        [
            ("PAGE 14", 14),
            ("PAGE 14:", 14),
            ("Page 14 - The Chase", 14),
            ("### PAGE ONE", 1),
            ("## Page Twenty-One", 21),
            ("**PAGE 14**", 14),
            ("PG 14", 14),
            ("PAGE FOURTEEN", 14),
        ],
    )
    def test_page_markers(self, line, number):
        """Test the supported page marker spellings."""
        parsed = classify(line)
        assert isinstance(parsed, PageMarker)
        assert parsed.number == number

    def test_page_count_note(self):
        """Test that a parenthetical note after the number becomes the label."""
        parsed = classify("PAGE 14 (5 Panels)")
        assert parsed == PageMarker(number=14, label="5 Panels")

    def test_page_label_after_separator(self):
        """Test that text after a dash is kept as the label."""
        assert classify("PAGE 2 - The Chase").label == "The Chase"

    @pytest.mark.parametrize(
        "line",
        [
            "Page fourteen content goes here",
            "Page 14 content goes here",
            "PAGE 14 was torn out",
        ],
    )
    def test_marker_words_inside_prose(self, line):
        """Test that a number followed by prose is not a page marker."""
        assert isinstance(classify(line), PlainText)


class TestPanelMarkers:
    """Test panel marker variants."""

    @pytest.mark.parametrize(
        ("line", "number", "modifier", "inline_text"),
        [
            ("Panel 1", 1, None, None),
            ("PANEL 3:", 3, None, None),
            ("**Panel 2**", 2, None, None),
            ("**PANEL 4 (Split Panel)**", 4, "Split Panel", None),
            ("**Panel 5** (inset)", 5, "inset", None),
            ("Panel 1: Maya runs.", 1, None, "Maya runs."),
            ("P3 - The car explodes.", 3, None, "The car explodes."),
            ("FRAME 6 [wide]", 6, "wide", None),
            ("Panel Two", 2, None, None),
            ("3. The door opens.", 3, None, "The door opens."),
        ],
    )
    def test_panel_markers(self, line, number, modifier, inline_text):
        """Test the supported panel marker spellings."""
        parsed = classify(line)
        assert parsed == PanelMarker(
            number=number, modifier=modifier, inline_text=inline_text
        )

    def test_panel_number_inside_prose(self):
        """Test that panel words inside prose stay plain text."""
        assert isinstance(classify("Panel 2 shows the same street"), PlainText)


class TestLettering:
    """Test captions, sound effects, screen text and dialogue."""

    @pytest.mark.parametrize(
        "line",
        [
            "CAPTION: Three days later.",
            "> CAPTION: Three days later.",
            "**CAPTION:** Three days later.",
            "> **CAPTION:** Three days later.",
        ],
    )
    def test_caption_forms(self, line):
        """Test caption spellings."""
        assert classify(line) == Caption(text="Three days later.")

    def test_caption_subtype(self):
        """Test that a caption may carry a subtype."""
        assert classify("CAPTION (Maya): I knew.") == Caption(
            text="I knew.", subtype="Maya"
        )

    @pytest.mark.parametrize("line", ["SFX: BOOM", "> SFX: BOOM", "**SFX:** BOOM"])
    def test_sfx_forms(self, line):
        """Test sound effect spellings."""
        assert classify(line) == SFX(text="BOOM")

    def test_screen_text(self):
        """Test that screen text keeps a normalized subtype."""
        assert classify("on  screen: ACCESS DENIED") == ScreenText(
            text="ACCESS DENIED", subtype="ON SCREEN"
        )

    @pytest.mark.parametrize(
        ("line", "character", "modifier"),
        [
            ("ALICE: Hello there", "ALICE", None),
            ("> ALICE: Hello there", "ALICE", None),
            ("**ALICE:** Hello there", "ALICE", None),
            ("**ALICE**: Hello there", "ALICE", None),
            ("ALICE (whisper): Hello there", "ALICE", "whisper"),
            ("ALICE [OFF]: Hello there", "ALICE", "OFF"),
            ("DR. STONE: Hello there", "DR. STONE", None),
        ],
    )
    def test_dialogue_forms(self, line, character, modifier):
        """Test dialogue spellings."""
        parsed = classify(line)
        assert isinstance(parsed, Dialogue)
        assert parsed.character == character
        assert parsed.modifier == modifier
        assert parsed.text == "Hello there"

    def test_lettering_labels_are_not_speakers(self):
        """Test that label words never become character names."""
        assert not isinstance(classify("NOTE: draw this big"), Dialogue)
        assert not isinstance(classify("ON WALL: WANTED"), Dialogue)

    def test_bare_name(self):
        """Test that an all-caps line is a bare character name."""
        assert classify("MAYA") == CharacterNameOnly(name="MAYA")

    def test_thought_modifier(self):
        """Test that thought modifiers map to thought bubbles."""
        assert COMIC.dialogue_type("thought") is DialogueType.THOUGHT
        assert COMIC.dialogue_type("whisper") is DialogueType.SPOKEN
        assert COMIC.dialogue_type(None) is DialogueType.SPOKEN


class TestNotesAndSections:
    """Test artist notes, cast sections and title-page fields."""

    @pytest.mark.parametrize(
        "line",
        [
            "(Keep it dark.)",
            "*(Keep it dark.)*",
            "NOTE: Keep it dark.",
            "REF - Keep it dark.",
        ],
    )
    def test_artist_notes(self, line):
        """Test artist note spellings."""
        assert classify(line) == ArtistNote(text="Keep it dark.")

    def test_cast_definition_needs_cast_section(self):
        """Test that bold names are cast entries only inside the cast list."""
        line = "**MAYA** A courier."
        assert classify(line, in_cast_section=True) == CastDefinition(
            name="MAYA", description="A courier."
        )
        assert not isinstance(classify(line), CastDefinition)

    def test_section_headers(self):
        """Test cast and artist section headers."""
        assert classify("### CAST OF CHARACTERS") == SectionHeader(
            section=Section.CAST
        )
        assert classify("## ARTIST NOTES") == SectionHeader(
            section=Section.ARTIST_NOTES
        )

    def test_title_page_fields(self):
        """Test issue metadata lines."""
        assert classify("# The Long Night") == IssueFields(
            values={"title": "The Long Night"}
        )
        assert classify('## Issue #3: "Ashes"') == IssueFields(
            values={"issue_number": "3", "subtitle": "Ashes"}
        )
        assert classify("**Written by Dana Reyes**") == IssueFields(
            values={"writer": "Dana Reyes"}
        )
        assert classify("28 Pages | Full Color") == IssueFields(
            values={"page_count": "28"}
        )

    def test_horizontal_rule(self):
        """Test that rules carry no content."""
        assert isinstance(classify("---"), Ignored)


class TestClassifierBasics:
    """Test blank handling, indentation and table order."""

    @pytest.mark.parametrize("line", ["", "   ", "\t"])
    def test_blank_lines(self, line):
        """Test whitespace-only lines."""
        assert classify(line) == Blank()

    def test_plain_text_records_indentation(self):
        """Test that indentation is reported for continuation handling."""
        assert classify("  Then we run.") == PlainText(
            text="Then we run.", indented=True
        )
        assert classify("Then we run.") == PlainText(text="Then we run.")

    def test_trailing_emphasis_is_stripped(self):
        """Test that markdown emphasis at line end is removed from text."""
        assert classify("SFX: BOOM**") == SFX(text="BOOM")

    def test_context_defaults(self):
        """Test that the context argument is optional."""
        assert isinstance(classify_line("PAGE 1", COMIC), PageMarker)

    def test_recognizer_order(self):
        """Test that pages come before panels and dialogue comes last."""
        names = COMIC.recognizer_names()
        assert names[0] == "horizontal_rule"
        assert names.index("page_plain") < names.index("panel_plain")
        assert names.index("caption_plain") < names.index("dialogue_standard")
        assert names.index("screen_text") < names.index("dialogue_standard")
        assert names.index("dialogue_standard") < names.index("character_name_only")
        assert names[-1] == "blockquote_text"
