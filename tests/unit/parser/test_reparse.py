"""Tests for reconciling an edited script with existing panels."""

import json

import pytest

from scriptpanel.exceptions import ParseError, UnsupportedFormatError, ValidationError
from scriptpanel.parser import (
    DiffType,
    ExistingPanel,
    compute_panel_diffs,
    select_diffs,
)

EDITED = "PAGE 1\nPanel 1\nA man enters quickly"


@pytest.fixture
def existing_panels(fixtures_dir):
    """Panels previously imported from the sample issue."""
    return json.loads((fixtures_dir / "existing_panels.json").read_text())


class TestComputePanelDiffs:
    """Test diff classification."""

    def test_modified_description(self):
        """Test a single panel whose description changed."""
        existing = [
            ExistingPanel(page_number=1, panel_number=1, description="A man enters")
        ]

        diffs = compute_panel_diffs(EDITED, existing)

        assert len(diffs) == 1
        diff = diffs[0]
        assert diff.type is DiffType.MODIFIED
        assert diff.key == (1, 1)
        assert diff.before.description == "A man enters"
        assert diff.after.description == "A man enters quickly"
        assert diff.after.visual_marker == "standard"

    def test_sample_issue(self, comic_script, existing_panels):
        """Test every diff type against the sample issue."""
        diffs = compute_panel_diffs(comic_script, existing_panels, "comic")

        assert [(diff.key, diff.type) for diff in diffs] == [
            ((1, 1), DiffType.UNCHANGED),
            ((1, 2), DiffType.MODIFIED),
            ((2, 1), DiffType.ADDED),
            ((3, 1), DiffType.REMOVED),
        ]
        added, removed = diffs[2], diffs[3]
        assert added.before is None
        assert added.after.description == "Maya leaps across the gap."
        assert removed.after is None
        assert removed.before.description == "A deleted panel."

    def test_changed_only(self, comic_script, existing_panels):
        """Test that unchanged coordinates can be left out."""
        diffs = compute_panel_diffs(
            comic_script, existing_panels, include_unchanged=False
        )

        assert DiffType.UNCHANGED not in {diff.type for diff in diffs}
        assert len(diffs) == 3

    def test_surrounding_whitespace_is_ignored(self):
        """Test that trimmed descriptions are compared."""
        existing = [
            {
                "page_number": 1,
                "panel_number": 1,
                "description": "  A man enters quickly\n",
            }
        ]

        diffs = compute_panel_diffs(EDITED, existing)

        assert [diff.type for diff in diffs] == [DiffType.UNCHANGED]

    def test_later_duplicate_wins(self):
        """Test that the last existing entry for a coordinate is used."""
        existing = [
            {"page_number": 1, "panel_number": 1, "description": "Stale text"},
            {
                "page_number": 1,
                "panel_number": 1,
                "description": "A man enters quickly",
            },
        ]

        diffs = compute_panel_diffs(EDITED, existing)

        assert len(diffs) == 1
        assert diffs[0].type is DiffType.UNCHANGED

    def test_nothing_existing(self):
        """Test that every parsed panel is added when nothing was imported."""
        diffs = compute_panel_diffs(EDITED, [])

        assert [diff.type for diff in diffs] == [DiffType.ADDED]

    @pytest.mark.parametrize(
        "entry",
        [
            {"pageNumber": 1, "panelNumber": 1, "description": "A man enters quickly"},
            {
                "scriptRef": {"pageNumber": 1, "panelNumber": 1},
                "prompt": "A man enters quickly",
            },
            {
                "script_ref": {"page_number": "1", "panel_number": "1"},
                "description": "A man enters quickly",
            },
        ],
    )
    def test_alternative_key_styles(self, entry):
        """Test camelCase keys, nested coordinates and prompt text."""
        diffs = compute_panel_diffs(EDITED, [entry])

        assert [diff.type for diff in diffs] == [DiffType.UNCHANGED]

    @pytest.mark.parametrize(
        "entry",
        [
            {"description": "No coordinate"},
            {"page_number": "one", "panel_number": 1, "description": "x"},
            5,
            ["page 1", "panel 1"],
            {"scriptRef": "p1", "description": "A man enters"},
            {"script_ref": 7, "description": "A man enters"},
        ],
    )
    def test_malformed_existing_entry(self, entry):
        """Test that bad existing entries raise a validation error."""
        with pytest.raises(ValidationError) as exc_info:
            compute_panel_diffs(EDITED, [entry])

        assert exc_info.value.message == "Invalid existing panel entry"
        assert exc_info.value.details["entry"] == repr(entry)

    def test_unparseable_edit(self):
        """Test that an edit without structure raises a parse error."""
        with pytest.raises(ParseError) as exc_info:
            compute_panel_diffs("Just some prose.", [])

        assert "No story structure detected" in exc_info.value.hint

    def test_unknown_format(self):
        """Test that unknown formats are rejected."""
        with pytest.raises(UnsupportedFormatError):
            compute_panel_diffs(EDITED, [], "radio")

    def test_to_dict(self):
        """Test the JSON-ready form of a diff."""
        diff = compute_panel_diffs(EDITED, [])[0]

        assert diff.to_dict() == {
            "type": "added",
            "page_number": 1,
            "panel_number": 1,
            "before": None,
            "after": {
                "description": "A man enters quickly",
                "visual_marker": "standard",
                "aspect_ratio": "wide",
            },
        }


class TestSelectDiffs:
    """Test picking diffs by index."""

    @pytest.fixture
    def diffs(self, comic_script, existing_panels):
        return compute_panel_diffs(comic_script, existing_panels)

    def test_keeps_list_order(self, diffs):
        """Test that selection follows the diff order, not the index order."""
        chosen = select_diffs(diffs, [3, 1, 3])

        assert chosen == [diffs[1], diffs[3]]

    def test_empty_selection(self, diffs):
        """Test that no indices select nothing."""
        assert select_diffs(diffs, []) == []

    @pytest.mark.parametrize("index", [4, -1])
    def test_out_of_range(self, diffs, index):
        """Test that bad indices raise a validation error."""
        with pytest.raises(ValidationError) as exc_info:
            select_diffs(diffs, [index])

        assert exc_info.value.message == f"Diff index {index} is out of range"
        assert exc_info.value.hint == "Choose indices between 0 and 3"

    def test_no_diffs(self):
        """Test the hint when there is nothing to select."""
        with pytest.raises(ValidationError) as exc_info:
            select_diffs([], [0])

        assert exc_info.value.hint == "There are no diffs to choose from"
