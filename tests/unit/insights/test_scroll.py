"""
Unit tests for the scroll window calculation.
"""

import pytest

from depsight.insights.scroll import adjust_scroll_offset, scroll_indicator, visible_range


class TestAdjustScrollOffset:
    def test_advances_just_enough(self):
        assert adjust_scroll_offset(selected_index=5, scroll_offset=0, visible_rows=3, total_count=10) == 3

    def test_retreats_to_selection(self):
        assert adjust_scroll_offset(selected_index=1, scroll_offset=3, visible_rows=3, total_count=10) == 1

    def test_no_movement_inside_window(self):
        assert adjust_scroll_offset(selected_index=4, scroll_offset=3, visible_rows=3, total_count=10) == 3
        assert adjust_scroll_offset(selected_index=3, scroll_offset=3, visible_rows=3, total_count=10) == 3

    @pytest.mark.parametrize("rows", [1, 2, 3, 7])
    def test_selection_always_visible(self, rows):
        for total in (1, 5, 12):
            for offset in range(12):
                for selected in range(total):
                    new = adjust_scroll_offset(selected, offset, rows, total)
                    assert new <= selected < new + rows
                    assert new <= max(total - rows, 0)

    @pytest.mark.parametrize("rows", [2, 5])
    def test_minimal_movement(self, rows):
        for offset in range(10):
            for selected in range(offset, offset + rows):
                assert adjust_scroll_offset(selected, offset, rows, 20) == offset

    def test_pulled_back_when_list_shrinks(self):
        # Selection 2 of a 3-row list, window previously deep in a longer list
        assert adjust_scroll_offset(selected_index=2, scroll_offset=7, visible_rows=5, total_count=3) == 0
        assert adjust_scroll_offset(selected_index=5, scroll_offset=5, visible_rows=3, total_count=6) == 3

    def test_empty_list(self):
        assert adjust_scroll_offset(selected_index=0, scroll_offset=4, visible_rows=3, total_count=0) == 0


class TestVisibleRange:
    def test_clipped_to_total(self):
        assert visible_range(3, 5, 6) == range(3, 6)

    def test_full_window(self):
        assert list(visible_range(2, 3, 10)) == [2, 3, 4]

    def test_empty(self):
        assert list(visible_range(0, 5, 0)) == []


class TestScrollIndicator:
    def test_hidden_when_everything_fits(self):
        assert scroll_indicator(0, 5, 5) is None

    def test_position(self):
        assert scroll_indicator(2, 12, 5) == "↕ 3/12"
