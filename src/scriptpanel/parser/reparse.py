"""Compare a fresh parse of an edited script against previously imported panels."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from scriptpanel.config import get_logger
from scriptpanel.exceptions import ParseError, ValidationError
from scriptpanel.parser.models import (
    DiffType,
    ExistingPanel,
    PanelDiff,
    PanelSnapshot,
    ParsedPanel,
)
from scriptpanel.parser.script_parser import parse_script

logger = get_logger(__name__)

PanelKey = tuple[int, int]


def _invalid_entry(item: object, error: str) -> ValidationError:
    return ValidationError(
        message="Invalid existing panel entry",
        hint="Each entry needs page_number, panel_number and description",
        details={"entry": repr(item), "error": error},
    )


def _coerce(
    existing: Iterable[ExistingPanel | Mapping[str, Any]],
) -> list[ExistingPanel]:
    panels = []
    for item in existing:
        if isinstance(item, ExistingPanel):
            panels.append(item)
            continue
        if not isinstance(item, Mapping):
            raise _invalid_entry(item, f"expected a mapping, got {type(item).__name__}")
        try:
            panels.append(ExistingPanel.from_dict(item))
        except (KeyError, TypeError, ValueError) as e:
            raise _invalid_entry(item, str(e)) from e
    return panels


def diff_panels(
    new_panels: Mapping[PanelKey, ParsedPanel],
    existing: Sequence[ExistingPanel],
    *,
    include_unchanged: bool = True,
) -> list[PanelDiff]:
    """Classify every coordinate present on either side.

    Args:
        new_panels: Freshly parsed panels keyed by (page, panel)
        existing: Previously imported panels; later duplicates win
        include_unchanged: Also report coordinates whose text did not change

    Returns:
        Diffs sorted by page number, then panel number
    """
    old_panels: dict[PanelKey, ExistingPanel] = {
        (panel.page_number, panel.panel_number): panel for panel in existing
    }

    diffs: list[PanelDiff] = []
    for key in sorted(set(new_panels) | set(old_panels)):
        new = new_panels.get(key)
        old = old_panels.get(key)
        before = PanelSnapshot(description=old.description) if old else None
        after = (
            PanelSnapshot(
                description=new.description,
                visual_marker=new.visual_marker,
                aspect_ratio=new.aspect_ratio,
            )
            if new
            else None
        )

        if old is None:
            diff_type = DiffType.ADDED
        elif new is None:
            diff_type = DiffType.REMOVED
        elif old.description.strip() != new.description.strip():
            diff_type = DiffType.MODIFIED
        else:
            diff_type = DiffType.UNCHANGED

        if diff_type is DiffType.UNCHANGED and not include_unchanged:
            continue
        diffs.append(
            PanelDiff(
                type=diff_type,
                page_number=key[0],
                panel_number=key[1],
                before=before,
                after=after,
            )
        )
    return diffs


def compute_panel_diffs(
    text: str,
    existing: Iterable[ExistingPanel | Mapping[str, Any]],
    script_format: str = "comic",
    *,
    include_unchanged: bool = True,
) -> list[PanelDiff]:
    """Re-parse edited script text and reconcile it with existing panels.

    Nothing is applied; callers pick the diffs they want with
    ``select_diffs``.

    Args:
        text: The edited script text
        existing: Prior panels as ``ExistingPanel`` objects or mappings
        script_format: Format of the script
        include_unchanged: Also report unchanged coordinates

    Returns:
        Diffs sorted by (page_number, panel_number)

    Raises:
        ParseError: If the edited text cannot be parsed
        ValidationError: If an existing panel entry is malformed
    """
    previous = _coerce(existing)
    result = parse_script(text, script_format)
    if not result.success:
        raise ParseError(
            message="Cannot compare panels: the edited script did not parse",
            hint="; ".join(result.errors) or None,
            details={"errors": result.errors, "script_format": result.script_format},
        )

    new_panels: dict[PanelKey, ParsedPanel] = {}
    for page in result.pages:
        for panel in page.panels:
            new_panels[(page.page_number, panel.panel_number)] = panel

    diffs = diff_panels(new_panels, previous, include_unchanged=include_unchanged)
    logger.debug(
        "Computed panel diffs",
        total=len(diffs),
        changed=sum(diff.type is not DiffType.UNCHANGED for diff in diffs),
    )
    return diffs


def select_diffs(diffs: Sequence[PanelDiff], indices: Iterable[int]) -> list[PanelDiff]:
    """Pick diffs by index, keeping list order and ignoring repeated indices.

    Args:
        diffs: Diffs returned by ``compute_panel_diffs``
        indices: Positions chosen by the caller

    Returns:
        The chosen diffs in their original order

    Raises:
        ValidationError: If an index is out of range
    """
    chosen = set()
    for index in indices:
        if not 0 <= index < len(diffs):
            raise ValidationError(
                message=f"Diff index {index} is out of range",
                hint=f"Choose indices between 0 and {len(diffs) - 1}"
                if diffs
                else "There are no diffs to choose from",
                details={"index": index, "available": len(diffs)},
            )
        chosen.add(index)
    return [diff for position, diff in enumerate(diffs) if position in chosen]
