"""Tests for parsing stage plays."""

import pytest

from scriptpanel.parser import DialogueType, parse_script
from scriptpanel.parser.classifier import classify_line
from scriptpanel.parser.formats import STAGE_PLAY
from scriptpanel.parser.formats.stage_play import (
    BLOCKING,
    ENTRANCE,
    EXIT,
    blocking_kind,
    parse_dialogue,
)
from scriptpanel.parser.lines import (
    ActMarker,
    Dialogue,
    Ignored,
    PageMarker,
    PlainText,
    StageDirection,
    TechnicalCue,
)


class TestStagePlayClassification:
    """Test the stage play pattern table."""

    @pytest.mark.parametrize(
        ("line", "number"),
        [("ACT I", 1), ("ACT TWO", 2), ("Act 3", 3), ("ACT IV:", 4)],
    )
    def test_acts(self, line, number):
        """Test act headers with roman, word and decimal numbers."""
        assert classify_line(line, STAGE_PLAY) == ActMarker(
            label=f"ACT {number}", number=number
        )

    def test_scene(self):
        """Test scene headers."""
        assert classify_line("SCENE THREE", STAGE_PLAY) == PageMarker(
            number=3, label="SCENE 3"
        )

    @pytest.mark.parametrize(
        ("line", "label"),
        [
            ("SCENE 2: The Garden", "SCENE 2: The Garden"),
            ("Scene 2 - The Garden", "SCENE 2: The Garden"),
            ("SCENE 2 (Night)", "SCENE 2: Night"),
        ],
    )
    def test_scene_labels(self, line, label):
        """Test that a scene's label is kept in its heading."""
        assert classify_line(line, STAGE_PLAY) == PageMarker(number=2, label=label)

    @pytest.mark.parametrize(
        ("line", "character", "modifier", "text"),
        [
            ("HAMLET: To be.", "HAMLET", None, "To be."),
            ("HAMLET. To be.", "HAMLET", None, "To be."),
            ("MR. SMITH: Good day.", "MR. SMITH", None, "Good day."),
            ("OPHELIA (O.S.): My lord?", "OPHELIA", "O.S.", "My lord?"),
            (
                "Lady Macbeth: Out, damned spot!",
                "LADY MACBETH",
                None,
                "Out, damned spot!",
            ),
        ],
    )
    def test_dialogue(self, line, character, modifier, text):
        """Test upper-case and title-case dialogue."""
        assert classify_line(line, STAGE_PLAY) == Dialogue(
            character=character, text=text, modifier=modifier
        )

    def test_cue_words_are_not_speakers(self):
        """Test that technical cues win over NAME: text."""
        assert classify_line("LIGHTS: Fade to blue.", STAGE_PLAY) == TechnicalCue(
            text="LIGHTS: Fade to blue."
        )
        assert classify_line("[SOUND of rain]", STAGE_PLAY) == TechnicalCue(
            text="SOUND of rain"
        )

    @pytest.mark.parametrize(
        "line", ["END OF ACT ONE", "CURTAIN.", "THE END", "[END OF SCENE]"]
    )
    def test_end_markers(self, line):
        """Test that end markers carry no content."""
        assert isinstance(classify_line(line, STAGE_PLAY), Ignored)

    def test_stage_directions(self):
        """Test bracketed directions and their blocking kind."""
        assert classify_line("(She exits.)", STAGE_PLAY) == StageDirection(
            text="She exits.", blocking=EXIT
        )
        assert classify_line("[The clock ticks.]", STAGE_PLAY) == StageDirection(
            text="The clock ticks."
        )

    def test_inline_direction_with_dialogue(self):
        """Test a direction followed by dialogue on the same line."""
        parsed = classify_line("(Entering) ROMEO: Hello.", STAGE_PLAY)
        assert parsed == StageDirection(
            text="Entering",
            blocking=ENTRANCE,
            rest=Dialogue(character="ROMEO", text="Hello."),
        )

    def test_inline_direction_with_prose(self):
        """Test that a non-dialogue remainder is kept as text."""
        parsed = classify_line("(Slowly) the lights come up.", STAGE_PLAY)
        assert parsed.rest == PlainText(text="the lights come up.")
        assert parsed.blocking is None

    @pytest.mark.parametrize(
        ("direction", "expected"),
        [
            ("Horatio enters.", ENTRANCE),
            ("Exeunt all.", EXIT),
            ("He crosses to the window.", BLOCKING),
            ("A long pause.", None),
        ],
    )
    def test_blocking_kind(self, direction, expected):
        """Test blocking classification."""
        assert blocking_kind(direction) == expected

    def test_blocking_kind_without_verbs(self):
        """Test that verb blocking can be switched off."""
        assert blocking_kind("He sits.", verbs=False) is None
        assert blocking_kind("He exits.", verbs=False) == EXIT

    def test_parse_dialogue_declines_cue_words(self):
        """Test that reserved cue words are not speakers."""
        assert parse_dialogue("CURTAIN: falls") is None
        assert parse_dialogue("just words") is None

    def test_offstage_modifiers(self):
        """Test that offstage speech is voiceover."""
        assert STAGE_PLAY.dialogue_type("O.S.") is DialogueType.VOICEOVER
        assert STAGE_PLAY.dialogue_type("offstage") is DialogueType.VOICEOVER
        assert STAGE_PLAY.dialogue_type("aside") is DialogueType.SPOKEN


class TestStagePlayParsing:
    """Test the sample play end to end."""

    def test_scenes_and_beats(self, stage_play_script):
        """Test scene pages, blocking beats and act labels."""
        result = parse_script(stage_play_script, "stage_play")

        assert result.success
        assert [page.heading for page in result.pages] == ["SCENE 1", "SCENE 2"]
        assert [page.act for page in result.pages] == ["ACT 1", "ACT 1"]

        attic, entrance = result.pages[0].panels
        assert attic.description == "A cluttered attic. Dust hangs in the light."
        assert attic.artist_notes == "LIGHTS UP"
        assert entrance.visual_marker == ENTRANCE
        assert entrance.description == "Horatio enters."
        assert [d.character for d in entrance.dialogue] == ["HORATIO", "HAMLET"]
        assert entrance.dialogue[1].modifier == "aside"

        window = result.pages[1].panels[0]
        assert window.visual_marker == BLOCKING
        assert window.dialogue[0].type is DialogueType.VOICEOVER
        assert window.artist_notes == "LIGHTS: Fade to blue."

    def test_roster_and_markers(self, stage_play_script):
        """Test the roster and the blocking histogram."""
        result = parse_script(stage_play_script, "stage")

        assert result.script_format == "stage_play"
        assert [(c.name, c.count) for c in result.characters] == [
            ("HAMLET", 2),
            ("HORATIO", 1),
            ("OPHELIA", 1),
        ]
        assert result.visual_markers == {
            "BLOCKING": 1,
            "ENTRANCE": 1,
            "standard": 1,
        }
        assert result.issue_metadata.act_breaks == ["ACT 1"]

    def test_content_before_scene_opens_scene_one(self):
        """Test that dialogue without a scene header still parses."""
        result = parse_script("HAMLET: To be, or not to be.", "stage_play")

        assert result.success
        assert [page.page_number for page in result.pages] == [1]
        assert result.characters[0].name == "HAMLET"

    def test_cue_before_first_beat(self):
        """Test that an opening cue is attached to the scene's first beat."""
        result = parse_script(
            "SCENE 1\n[LIGHTS UP]\n(Hamlet enters.)\nHAMLET: Who's there?",
            "stage_play",
        )

        (beat,) = result.pages[0].panels
        assert beat.panel_number == 1
        assert beat.visual_marker == ENTRANCE
        assert beat.artist_notes == "LIGHTS UP"
        assert result.pages[0].notes is None

    def test_cue_then_plain_direction_share_a_beat(self):
        """Test that a plain direction continues the beat a cue opened."""
        result = parse_script("SCENE 1\n[LIGHTS UP]\n(Night.)", "stage_play")

        (beat,) = result.pages[0].panels
        assert beat.description == "Night."
        assert beat.artist_notes == "LIGHTS UP"

    def test_scene_label_becomes_heading(self):
        """Test that a labelled scene keeps its label in the heading."""
        result = parse_script("SCENE 2: The Garden\nHAMLET: Soft.", "stage_play")

        assert result.pages[0].heading == "SCENE 2: The Garden"

    def test_cue_before_first_scene(self):
        """Test that a cue ahead of SCENE 1 neither shifts numbering nor is lost."""
        result = parse_script("[LIGHTS UP]\nSCENE 1\nHAMLET: Hi.", "stage_play")

        (page,) = result.pages
        assert page.page_number == 1
        assert page.heading == "SCENE 1"
        assert page.panels[0].artist_notes == "LIGHTS UP"
