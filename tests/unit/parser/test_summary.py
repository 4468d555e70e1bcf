"""Tests for plain-text summaries of parse results."""

from scriptpanel.parser import CharacterCount, ParseResult, parse_script, summarize
from scriptpanel.parser.models import ParsedPage, ParsedPanel


class TestSummarize:
    """Test summary wording per format."""

    def test_comic_issue(self, comic_script):
        """Test the full summary of the sample issue."""
        summary = summarize(parse_script(comic_script, "comic"))

        assert summary == "\n".join(
            [
                "Title: The Long Night",
                "Issue #3",
                '"Ashes"',
                "Written by: Dana Reyes",
                "Pages: 28",
                "Timeline: Winter 1989",
                "",
                "Comic script: 2 pages, 3 panels",
                "",
                "Characters (2):",
                "  - MAYA: 2 lines (A courier who never sleeps.)",
                "  - OREN: 1 line (Her brother, a mechanic.)",
                "",
                "Visual markers:",
                "  - standard: 3",
            ]
        )

    def test_screenplay_units(self, screenplay_script):
        """Test scenes, shots and the shot histogram."""
        summary = summarize(parse_script(screenplay_script, "screenplay"))

        assert summary.startswith("Screenplay: 2 scenes, 3 shots")
        assert "Shot types:\n  - ESTABLISHING: 2\n  - CLOSE UP: 1" in summary

    def test_stage_play_units(self, stage_play_script):
        """Test act metadata, beats and blocking."""
        summary = summarize(parse_script(stage_play_script, "stage_play"))

        assert summary.startswith("Acts: ACT 1\n\nStage play: 2 scenes, 3 beats")
        assert "Blocking:" in summary

    def test_tv_episode(self, tv_script):
        """Test episode lines at the top of a TV summary."""
        lines = summarize(parse_script(tv_script, "tv")).splitlines()

        assert lines[:3] == [
            "Episode: 1x03",
            'Episode title: "The Signal"',
            "Acts: TEASER, ACT ONE",
        ]
        assert "TV script: 2 scenes, 3 shots" in lines

    def test_failure(self):
        """Test that a failed parse reports its errors."""
        summary = summarize(parse_script("Nothing to see here."))

        assert summary.startswith("Parse failed: No story structure detected.")

    def test_warnings_listed(self):
        """Test that warnings close the summary."""
        summary = summarize(parse_script("INT. ROOM - DAY\n\nBOB\nHi.", "tv"))

        assert summary.endswith(
            "Warnings (2):\n"
            '  - No episode number found (expected "EPISODE 101")\n'
            '  - No act breaks found (expected "TEASER" or "ACT ONE")'
        )

    def test_singular_units_and_long_descriptions(self):
        """Test singular wording and truncated character descriptions."""
        result = ParseResult(
            success=True,
            pages=[
                ParsedPage(
                    page_number=1,
                    panels=[ParsedPanel(panel_number=1, description="A door.")],
                )
            ],
            characters=[CharacterCount(name="VERA", count=1, description="x" * 60)],
        )

        summary = summarize(result)

        assert summary.startswith("Comic script: 1 page, 1 panel")
        assert f"  - VERA: 1 line ({'x' * 50}...)" in summary

    def test_roster_is_capped(self):
        """Test that only the first ten characters are listed."""
        result = ParseResult(
            success=True,
            pages=[
                ParsedPage(
                    page_number=1,
                    panels=[ParsedPanel(panel_number=1, description="Crowd.")],
                )
            ],
            characters=[
                CharacterCount(name=f"EXTRA {index:02d}", count=1)
                for index in range(12)
            ],
        )

        summary = summarize(result)

        assert "Characters (12):" in summary
        assert "EXTRA 09" in summary
        assert "EXTRA 10" not in summary
