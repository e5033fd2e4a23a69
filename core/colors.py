# core/colors.py
from typing import Dict, Final, Sequence, Tuple
from core.intervals import has_resolved_interval
from model.extraction import Extraction

VISUALIZATION_PALETTE: Final[Tuple[str, ...]] = (
    "#D2E3FC",  # light blue
    "#C8E6C9",  # light green
    "#FEF0C3",  # light yellow
    "#F9DEDC",  # light red
    "#FFDDBE",  # light orange
    "#EADDFF",  # light purple
    "#C4E9E4",  # light teal
    "#FCE4EC",  # light pink
    "#E8EAED",  # very light grey
    "#DDE8E8",  # pale cyan
)

DEFAULT_HIGHLIGHT_COLOR: Final[str] = "#ffff8d"


def assign_colors(
    extractions: Sequence[Extraction],
    palette: Sequence[str] = VISUALIZATION_PALETTE,
) -> Dict[str, str]:
    """
    Map each class that has at least one positioned extraction to a palette color.

    Classes are ordered by code point, not by first appearance, so the mapping only
    depends on the set of class names. The palette wraps when there are more classes
    than colors.
    """
    classes = sorted(
        {e.extraction_class for e in extractions if has_resolved_interval(e)}
    )
    return {cls: palette[i % len(palette)] for i, cls in enumerate(classes)}
