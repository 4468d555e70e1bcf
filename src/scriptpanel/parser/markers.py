"""Keyword inference of panel emphasis and aspect ratio."""

from __future__ import annotations

from scriptpanel.parser.models import AspectRatio

STANDARD_MARKER = "standard"

# Checked top to bottom, first hit wins. "shattered" text is claimed by
# "shatter" under echo; only "fragments" reaches the shattered tag.
VISUAL_MARKER_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("inset", ("micro-flash", "inset")),
    ("echo", ("echo", "shatter", "fracture")),
    ("hitch", ("hitch", "stutter", "smear")),
    ("overflow", ("overflow", "bruise", "lattice")),
    ("split", ("split",)),
    ("splash", ("splash", "full-page", "full page")),
    ("shattered", ("shattered", "fragments")),
    ("large", ("large", "larger")),
    ("full-width", ("full-width", "full width")),
)

ASPECT_RATIO_KEYWORDS: tuple[tuple[AspectRatio, tuple[str, ...]], ...] = (
    (
        AspectRatio.WIDE,
        (
            "wide",
            "landscape",
            "double",
            "establishing",
            "panoramic",
            "16:9",
            "exterior",
            "full-width",
        ),
    ),
    (AspectRatio.PORTRAIT, ("tall", "vertical", "9:16", "portrait")),
    (AspectRatio.STD, ("close", "face", "tight", "4:3", "standard")),
    (AspectRatio.SQUARE, ("square", "1:1")),
    (AspectRatio.WIDE, ("large panel", "splash")),
)


def _combined(description: str, modifier: str | None) -> str:
    return f"{description} {modifier or ''}".lower()


def infer_visual_marker(description: str, modifier: str | None = None) -> str:
    """Return the first visual marker whose keywords appear in the text.

    Args:
        description: Panel description
        modifier: Panel modifier such as "Split Panel" or "micro-flash inset"

    Returns:
        A marker tag, ``"standard"`` when nothing matches
    """
    text = _combined(description, modifier)
    for marker, keywords in VISUAL_MARKER_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return marker
    return STANDARD_MARKER


def infer_aspect_ratio(description: str, modifier: str | None = None) -> AspectRatio:
    """Return the aspect ratio suggested by the text, wide by default."""
    text = _combined(description, modifier)
    for ratio, keywords in ASPECT_RATIO_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return ratio
    return AspectRatio.WIDE
