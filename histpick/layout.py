"""Placement of the history overlay relative to the widget that opened it."""

from __future__ import annotations

from .models import Anchor, Geometry

# Rows kept clear at the bottom before the overlay flips above the anchor.
BOTTOM_MARGIN = 6
# The overlay starts this many columns left of the anchor.
LEFT_SHIFT = 2
FRAME_HEIGHT = 2
FRAME_WIDTH = 4


def compute_geometry(
    anchor: Anchor,
    count: int,
    max_width: int,
    rows: int,
    cols: int,
) -> Geometry:
    """Return overlay ``(row, col, height, width)`` for ``count`` entries.

    Vertical placement is decided first: the overlay goes above the anchor
    when its full height does not fit in the rows above it, or when the
    anchor sits within ``BOTTOM_MARGIN`` rows of the bottom. Otherwise it
    opens on the row below the anchor. Horizontally it is shifted left by
    ``LEFT_SHIFT`` and right-aligned to the terminal when it overflows.
    """
    height = count + FRAME_HEIGHT
    above = not height <= anchor.row or anchor.row > rows - BOTTOM_MARGIN
    if above:
        height = max(0, min(height, anchor.row - 1))
        row = anchor.row - height
    else:
        row = anchor.row + 1
        height = min(height, rows - row)

    col = anchor.col - LEFT_SHIFT if anchor.col > LEFT_SHIFT else 0
    width = max_width + FRAME_WIDTH
    if col + width > cols:
        width = min(width, cols)
        col = cols - width

    return Geometry(row=row, col=col, height=height, width=width, above=above)
