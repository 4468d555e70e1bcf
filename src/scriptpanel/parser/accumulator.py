"""Fold classified lines into pages and panels."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from scriptpanel.parser.formats.base import (
    ClassifierContext,
    FormatVocabulary,
    clean_text,
)
from scriptpanel.parser.lines import (
    SFX,
    ActMarker,
    ArtistNote,
    Caption,
    CastDefinition,
    CharacterNameOnly,
    Dialogue,
    EpisodeMarker,
    IssueFields,
    LineKind,
    PageMarker,
    PanelMarker,
    Parenthetical,
    ParsedLine,
    PlainText,
    SceneHeading,
    ScreenText,
    Section,
    SectionHeader,
    ShotDirection,
    StageDirection,
    TechnicalCue,
    Transition,
)
from scriptpanel.parser.markers import infer_aspect_ratio, infer_visual_marker
from scriptpanel.parser.models import (
    DialogueLine,
    DialogueType,
    IssueMetadata,
    ParsedPage,
    ParsedPanel,
)
from scriptpanel.parser.models import ScreenText as ScreenTextEntry

CAPTION_SPEAKER = "CAPTION"
ESTABLISHING = "ESTABLISHING"
_INTEGER_ISSUE_FIELDS = frozenset({"issue_number", "page_count"})
_NON_CONTENT = (LineKind.BLANK, LineKind.IGNORED)


@dataclass
class PanelBuffer:
    """A panel that is still receiving lines."""

    number: int
    start_offset: int
    end_offset: int
    modifier: str | None = None
    marker: str | None = None
    description: list[str] = field(default_factory=list)
    dialogue: list[DialogueLine] = field(default_factory=list)
    characters: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    sound_effects: list[str] = field(default_factory=list)
    screen_text: list[ScreenTextEntry] = field(default_factory=list)
    implicit: bool = False
    provisional: bool = False
    untallied: list[str] = field(default_factory=list)

    def add_character(self, name: str) -> None:
        """Record a speaker once, in order of first appearance."""
        if name not in self.characters:
            self.characters.append(name)

    def has_content(self) -> bool:
        """True once the panel holds description or dialogue."""
        return bool(" ".join(self.description).strip() or self.dialogue)

    def to_panel(self) -> ParsedPanel | None:
        """Build the finished panel, or None when it never got content."""
        if not self.has_content():
            return None
        description = " ".join(part for part in self.description if part).strip()

        cue = " ".join(part for part in (self.modifier, self.marker) if part) or None
        return ParsedPanel(
            panel_number=self.number,
            description=description,
            dialogue=self.dialogue,
            characters=self.characters,
            visual_marker=self.marker
            or infer_visual_marker(description, self.modifier),
            aspect_ratio=infer_aspect_ratio(description, cue),
            artist_notes="; ".join(self.notes) or None,
            panel_modifier=self.modifier,
            sound_effects=self.sound_effects,
            screen_text=self.screen_text,
            start_offset=self.start_offset,
            end_offset=self.end_offset,
        )


@dataclass
class PageBuffer:
    """A page (or scene) that is still receiving panels."""

    number: int
    heading: str | None = None
    act: str | None = None
    panels: list[ParsedPanel] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    panel_numbers: set[int] = field(default_factory=set)

    def to_page(self) -> ParsedPage | None:
        """Build the finished page; pages without panels are dropped."""
        if not self.panels:
            return None
        return ParsedPage(
            page_number=self.number,
            panels=self.panels,
            notes="\n".join(self.notes) or None,
            heading=self.heading,
            act=self.act,
        )


@dataclass
class AccumulatorState:
    """Everything the accumulator knows at a given line."""

    page: PageBuffer | None = None
    panel: PanelBuffer | None = None
    page_counter: int = 0
    panel_counter: int = 0
    act: str | None = None
    pending_character: str | None = None
    pending_modifier: str | None = None
    open_dialogue: DialogueLine | None = None
    pending_notes: list[str] = field(default_factory=list)
    in_cast_section: bool = False
    in_artist_notes_section: bool = False
    pages: list[ParsedPage] = field(default_factory=list)
    cast: dict[str, str] = field(default_factory=dict)
    tally: dict[str, int] = field(default_factory=dict)
    issue: IssueMetadata = field(default_factory=IssueMetadata)
    warnings: list[str] = field(default_factory=list)

    @property
    def in_dialogue_run(self) -> bool:
        """True while continuation lines extend the last dialogue line."""
        return self.open_dialogue is not None


class Accumulator:
    """Apply classified lines, one at a time, to an ``AccumulatorState``.

    The accumulator is generic: everything format specific comes from the
    ``FormatVocabulary`` flags (implicit panels, sequential page numbers,
    indentation rules for dialogue continuation and so on).
    """

    def __init__(self, vocabulary: FormatVocabulary) -> None:
        """Initialize an empty accumulator for one parse.

        Args:
            vocabulary: Pattern table and flags of the script format
        """
        self.vocabulary = vocabulary
        self.state = AccumulatorState()
        self._span = (0, 0)
        self._handlers: dict[LineKind, Callable[[Any], None]] = {
            LineKind.PAGE_MARKER: self._page_marker,
            LineKind.PANEL_MARKER: self._panel_marker,
            LineKind.SCENE_HEADING: self._scene_heading,
            LineKind.SHOT_DIRECTION: self._shot_direction,
            LineKind.TRANSITION: self._transition,
            LineKind.DIALOGUE: self._dialogue,
            LineKind.CAPTION: self._caption,
            LineKind.SFX: self._sfx,
            LineKind.SCREEN_TEXT: self._screen_text,
            LineKind.STAGE_DIRECTION: self._stage_direction,
            LineKind.TECHNICAL_CUE: self._technical_cue,
            LineKind.ARTIST_NOTE: self._artist_note,
            LineKind.CHARACTER_NAME_ONLY: self._character_name_only,
            LineKind.PARENTHETICAL: self._parenthetical,
            LineKind.CAST_DEFINITION: self._cast_definition,
            LineKind.SECTION_HEADER: self._section_header,
            LineKind.ACT_MARKER: self._act_marker,
            LineKind.EPISODE_MARKER: self._episode_marker,
            LineKind.ISSUE_METADATA: self._issue_fields,
            LineKind.IGNORED: self._ignored,
            LineKind.BLANK: self._blank,
            LineKind.PLAIN_TEXT: self._plain_text,
        }

    def context(self) -> ClassifierContext:
        """Snapshot of the state the classifier is allowed to see."""
        state = self.state
        return ClassifierContext(
            in_cast_section=state.in_cast_section,
            pending_character=state.pending_character,
            in_panel=state.panel is not None,
            in_page=state.page is not None,
            in_dialogue_run=state.in_dialogue_run,
        )

    def feed(self, line: ParsedLine, span: tuple[int, int] = (0, 0)) -> None:
        """Apply one classified line.

        Args:
            line: The classified line
            span: Start and end offsets of the line in the source text
        """
        self._span = span
        self._handlers[line.kind](line)
        panel = self.state.panel
        if panel is not None and line.kind not in _NON_CONTENT:
            panel.end_offset = max(panel.end_offset, span[1])

    def finish(self) -> AccumulatorState:
        """Flush the open panel and page and return the final state."""
        self._close_page()
        return self.state

    # Structure

    def _page_marker(self, line: PageMarker) -> None:
        self._close_page()
        sequential = self.vocabulary.sequential_pages
        page = self._open_page(
            self._next_page_number(line.number),
            heading=line.label if sequential else None,
        )
        if line.label and not sequential:
            page.notes.append(line.label)

    def _scene_heading(self, line: SceneHeading) -> None:
        self._close_page()
        self._open_page(self._next_page_number(0), heading=line.heading)
        self._start_panel(marker=ESTABLISHING, description=f"{line.heading}.")

    def _panel_marker(self, line: PanelMarker) -> None:
        self._ensure_page()
        self._start_panel(
            line.number, modifier=line.modifier, description=line.inline_text
        )

    def _shot_direction(self, line: ShotDirection) -> None:
        self._ensure_page()
        self._start_panel(marker=line.marker, description=line.description or None)

    def _stage_direction(self, line: StageDirection) -> None:
        if line.blocking:
            self._ensure_page()
            self._start_panel(marker=line.blocking, description=line.text)
        elif self._ensure_panel():
            self._current_panel().description.append(line.text)
        else:
            self._page_note(line.text)

        if isinstance(line.rest, Dialogue):
            self._dialogue(line.rest)
        elif isinstance(line.rest, PlainText):
            self._plain_text(line.rest)

    def _act_marker(self, line: ActMarker) -> None:
        self._close_dialogue_run()
        self.state.act = line.label
        self.state.issue.act_breaks.append(line.label)
        self.state.in_cast_section = False
        if self.vocabulary.act_breaks_in_notes:
            self.state.pending_notes.append(line.label)

    def _transition(self, line: Transition) -> None:
        self._close_dialogue_run()
        self.state.pending_notes.append(line.label)

    # Speech

    def _dialogue(self, line: Dialogue) -> None:
        self._close_dialogue_run()
        self._add_dialogue(
            DialogueLine(
                character=line.character,
                text=line.text,
                type=self.vocabulary.dialogue_type(line.modifier),
                modifier=line.modifier,
            )
        )

    def _character_name_only(self, line: CharacterNameOnly) -> None:
        self._close_dialogue_run()
        self.state.pending_character = line.name
        self.state.pending_modifier = line.modifier

    def _parenthetical(self, line: Parenthetical) -> None:
        state = self.state
        if state.pending_character is None:
            self._plain_text(PlainText(text=f"({line.text})"))
            return

        modifier = ", ".join(
            part for part in (state.pending_modifier, line.text) if part
        )
        state.pending_modifier = modifier
        if state.open_dialogue is not None:
            state.open_dialogue.modifier = modifier
            state.open_dialogue.type = self.vocabulary.dialogue_type(modifier)

    def _caption(self, line: Caption) -> None:
        self._close_dialogue_run()
        if self.state.panel is None:
            self._page_note(f"{CAPTION_SPEAKER}: {line.text}")
            return
        self.state.panel.dialogue.append(
            DialogueLine(
                character=CAPTION_SPEAKER,
                text=line.text,
                type=DialogueType.CAPTION,
                modifier=line.subtype,
            )
        )

    def _continue_dialogue(self, text: str) -> None:
        state = self.state
        text = clean_text(text)
        if not text:
            return
        if state.open_dialogue is not None:
            state.open_dialogue.text = f"{state.open_dialogue.text} {text}"
            return

        entry = DialogueLine(
            character=state.pending_character or "",
            text=text,
            type=self.vocabulary.dialogue_type(state.pending_modifier),
            modifier=state.pending_modifier,
        )
        if self._add_dialogue(entry):
            state.open_dialogue = entry

    def _add_dialogue(self, entry: DialogueLine) -> bool:
        if not (self._ensure_panel() or self._open_provisional_panel()):
            self._page_note(f"{entry.character}: {entry.text}")
            return False

        panel = self._current_panel()
        panel.dialogue.append(entry)
        panel.add_character(entry.character)
        if panel.provisional:
            panel.untallied.append(entry.character)
        else:
            self._tally(entry.character)
        return True

    def _tally(self, name: str) -> None:
        tally = self.state.tally
        tally[name] = tally.get(name, 0) + 1

    # Lettering and notes

    def _sfx(self, line: SFX) -> None:
        panel = self.state.panel
        if panel is None:
            self._page_note(f"SFX: {line.text}")
            return
        panel.sound_effects.append(line.text)
        if self.vocabulary.sfx_in_notes:
            panel.notes.append(f"SFX: {line.text}")

    def _screen_text(self, line: ScreenText) -> None:
        panel = self.state.panel
        if panel is None:
            self._page_note(f"{line.subtype or 'SCREEN'}: {line.text}")
            return
        panel.screen_text.append(
            ScreenTextEntry(text=line.text, subtype=line.subtype)
        )

    def _technical_cue(self, line: TechnicalCue) -> None:
        if self.vocabulary.implicit_panels:
            self._ensure_panel()
        self._note(line.text)

    def _artist_note(self, line: ArtistNote) -> None:
        self._note(line.text)

    def _note(self, text: str) -> None:
        if self.state.panel is not None:
            self.state.panel.notes.append(text)
        else:
            self._page_note(text)

    def _page_note(self, text: str) -> None:
        page = self.state.page
        if page is None and self.vocabulary.implicit_page:
            page = self._open_page(self._next_page_number(0))
        if page is not None:
            page.notes.append(text)

    # Title page and sections

    def _cast_definition(self, line: CastDefinition) -> None:
        self.state.cast[line.name] = line.description

    def _section_header(self, line: SectionHeader) -> None:
        self._close_dialogue_run()
        self.state.in_cast_section = line.section is Section.CAST
        self.state.in_artist_notes_section = line.section is Section.ARTIST_NOTES

    def _episode_marker(self, line: EpisodeMarker) -> None:
        issue = self.state.issue
        issue.episode_number = issue.episode_number or line.number
        issue.episode_title = issue.episode_title or line.title

    def _issue_fields(self, line: IssueFields) -> None:
        issue = self.state.issue
        for name, value in line.values.items():
            if getattr(issue, name) is not None:
                # A second "# Heading" is an ordinary heading, not the title.
                if name == "title":
                    self._plain_text(PlainText(text=value))
                continue
            if name in _INTEGER_ISSUE_FIELDS:
                setattr(issue, name, int(value))
            else:
                setattr(issue, name, value)

    def _ignored(self, _line: ParsedLine) -> None:
        self._close_dialogue_run()

    def _blank(self, _line: ParsedLine) -> None:
        self._close_dialogue_run()
        self.state.in_artist_notes_section = False

    def _plain_text(self, line: PlainText) -> None:
        state = self.state
        if not line.text:
            return

        if state.pending_character is not None and (
            line.indented or not self.vocabulary.dialogue_requires_indent
        ):
            self._continue_dialogue(line.text)
            return

        if state.in_artist_notes_section and state.panel is None:
            self._page_note(line.text)
        elif state.panel is not None:
            state.panel.description.append(line.text)
        elif self._ensure_panel() or self._open_provisional_panel():
            self._current_panel().description.append(line.text)
        else:
            self._page_note(line.text)

    # Buffers

    def _next_page_number(self, marker_number: int) -> int:
        if not self.vocabulary.sequential_pages:
            return marker_number
        self.state.page_counter += 1
        return self.state.page_counter

    def _open_page(self, number: int, heading: str | None = None) -> PageBuffer:
        state = self.state
        state.page = PageBuffer(number=number, heading=heading, act=state.act)
        state.panel_counter = 0
        state.in_cast_section = False
        state.in_artist_notes_section = False
        return state.page

    def _ensure_page(self) -> PageBuffer:
        """Return the open page, opening one when a panel arrives without it.

        Formats without implicit pages get page 0, which the assembler drops
        with a warning.
        """
        if self.state.page is not None:
            return self.state.page
        if self.vocabulary.implicit_page:
            return self._open_page(self._next_page_number(0))
        return self._open_page(0)

    def _ensure_panel(self) -> bool:
        state = self.state
        if state.panel is not None:
            return True
        if not self.vocabulary.implicit_panels:
            return False
        if state.page is None:
            if not self.vocabulary.implicit_page:
                return False
            self._open_page(self._next_page_number(0))
        self._start_panel(implicit=True)
        return True

    def _open_provisional_panel(self) -> bool:
        """Open a stand-in panel 1 on a page that has no panel marker yet.

        It is kept when the page ends without a marker. A later marker turns
        its content back into page notes.
        """
        page = self.state.page
        if self.vocabulary.implicit_panels or page is None or page.panel_numbers:
            return False
        self._start_panel(provisional=True)
        return True

    def _demote_provisional(self) -> None:
        state = self.state
        panel = state.panel
        state.panel = None
        self._close_dialogue_run()
        if panel is None or state.page is None:
            return
        notes = state.page.notes
        notes.extend(part for part in panel.description if part)
        notes.extend(f"{line.character}: {line.text}" for line in panel.dialogue)
        if not self.vocabulary.sfx_in_notes:
            notes.extend(f"SFX: {text}" for text in panel.sound_effects)
        notes.extend(
            f"{entry.subtype or 'SCREEN'}: {entry.text}" for entry in panel.screen_text
        )
        notes.extend(panel.notes)

    def _current_panel(self) -> PanelBuffer:
        if self.state.panel is None:
            raise RuntimeError("No panel is open")
        return self.state.panel

    def _start_panel(
        self,
        number: int | None = None,
        *,
        modifier: str | None = None,
        marker: str | None = None,
        description: str | None = None,
        implicit: bool = False,
        provisional: bool = False,
    ) -> None:
        state = self.state
        carried: list[str] = []
        current = state.panel
        if current is not None and current.provisional:
            self._demote_provisional()
        elif current is not None and current.implicit and not current.has_content():
            # A beat that only collected cues hands them to the next beat.
            carried = current.notes
            state.panel = None
            state.panel_counter = current.number - 1
            if state.page is not None:
                state.page.panel_numbers.discard(current.number)
        self._close_panel()
        page = self._ensure_page()

        if number is None:
            number = state.panel_counter + 1
        if not provisional:
            state.panel_counter = number
            if number in page.panel_numbers:
                state.warnings.append(
                    f"Duplicate panel number {number} on page {page.number}"
                )
            page.panel_numbers.add(number)

        start, end = self._span
        panel = PanelBuffer(
            number=number,
            start_offset=start,
            end_offset=end,
            modifier=modifier,
            marker=marker,
            implicit=implicit,
            provisional=provisional,
        )
        if description:
            panel.description.append(description)
        panel.notes.extend(carried)
        panel.notes.extend(state.pending_notes)
        state.pending_notes.clear()
        state.panel = panel

    def _close_dialogue_run(self) -> None:
        self.state.open_dialogue = None
        self.state.pending_character = None
        self.state.pending_modifier = None

    def _close_panel(self) -> None:
        state = self.state
        if state.panel is None:
            return
        self._close_dialogue_run()
        buffer = state.panel
        panel = buffer.to_panel()
        state.panel = None
        if state.page is None:
            return
        if panel is not None:
            for name in buffer.untallied:
                self._tally(name)
            state.page.panels.append(panel)
        elif buffer.implicit:
            state.page.notes.extend(buffer.notes)

    def _close_page(self) -> None:
        self._close_dialogue_run()
        self._close_panel()
        state = self.state
        if state.page is None:
            return
        buffer = state.page
        page = buffer.to_page()
        state.page = None
        if page is not None:
            state.pages.append(page)
        elif (
            self.vocabulary.sequential_pages
            and buffer.heading is None
            and buffer.number == state.page_counter
        ):
            # An empty implicit scene gives its number and notes to the next one.
            state.page_counter -= 1
            state.pending_notes.extend(buffer.notes)
