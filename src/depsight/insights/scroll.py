"""
Scroll window calculation for panel lists.

The window moves only as far as needed to keep the selection visible;
it is never recentered.
"""

from typing import Optional

from ..config import MIN_VISIBLE_ROWS


def adjust_scroll_offset(
    selected_index: int,
    scroll_offset: int,
    visible_rows: int,
    total_count: int,
) -> int:
    """
    Return the new scroll offset that keeps `selected_index` in view.

    The window never starts past the last full page of `total_count` rows.

    Example:
        >>> adjust_scroll_offset(selected_index=5, scroll_offset=0, visible_rows=3, total_count=10)
        3
        >>> adjust_scroll_offset(selected_index=1, scroll_offset=3, visible_rows=3, total_count=10)
        1
        >>> adjust_scroll_offset(selected_index=4, scroll_offset=3, visible_rows=3, total_count=10)
        3
        >>> adjust_scroll_offset(selected_index=2, scroll_offset=7, visible_rows=5, total_count=3)
        0
    """
    rows = max(visible_rows, MIN_VISIBLE_ROWS)
    offset = max(scroll_offset, 0)
    if selected_index >= offset + rows:
        offset = selected_index - rows + 1
    if selected_index < offset:
        offset = max(selected_index, 0)
    return min(offset, max(total_count - rows, 0))


def visible_range(scroll_offset: int, visible_rows: int, total_count: int) -> range:
    """Indices shown for the window starting at `scroll_offset`."""
    rows = max(visible_rows, MIN_VISIBLE_ROWS)
    start = min(max(scroll_offset, 0), total_count)
    return range(start, min(start + rows, total_count))


def scroll_indicator(selected_index: int, total_count: int, visible_rows: int) -> Optional[str]:
    """
    Position text such as "↕ 3/12", shown only when the list overflows.
    """
    if total_count <= max(visible_rows, MIN_VISIBLE_ROWS):
        return None
    return f"↕ {selected_index + 1}/{total_count}"
