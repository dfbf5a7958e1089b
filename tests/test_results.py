"""Result index behavior: merge order, filtering, selection and viewport.

The index never touches the filesystem, so candidates are plain path strings
under a fixed fake root.
"""

from __future__ import annotations

import os
import threading
import unittest

from lazyjump.results import HEADER_ROWS, LIST_TEXT_COL, ResultIndex

ROOT = os.path.abspath(os.path.join(os.sep, "srv", "project"))


def _path(label: str) -> str:
    return os.path.join(ROOT, *label.split("/"))


def _index(rows: int = 10, include_root: bool = False) -> ResultIndex:
    return ResultIndex(ROOT, lambda: rows, include_root=include_root)


def _fruit_index(rows: int = 10, include_root: bool = True) -> ResultIndex:
    index = _index(rows, include_root=include_root)
    index.add_batch([_path("apple"), _path("apricot"), _path("banana")])
    index.add_batch([_path("apple/core")])
    return index


class ResultIndexOrderingTests(unittest.TestCase):
    def test_root_is_seeded_as_dot(self) -> None:
        index = ResultIndex(ROOT, lambda: 10)
        self.assertEqual(index.candidates(), [ROOT])
        self.assertEqual(index.labels(), ["."])
        self.assertEqual(index.selected, 0)

    def test_empty_query_lists_by_length_then_lexical(self) -> None:
        index = _fruit_index()
        self.assertEqual(index.labels(), [".", "apple", "banana", "apricot", "apple/core"])

    def test_single_letter_query_filters_without_reordering(self) -> None:
        index = _fruit_index()
        index.set_query("a")
        # "banana" matches too (its "a" is at index 1); "." does not.
        self.assertEqual(index.labels(), ["apple", "banana", "apricot", "apple/core"])
        # apple, apricot and apple/core tie at 1/2; the earliest one wins.
        self.assertEqual(index.selected, 0)
        self.assertEqual(index.selected_path(), _path("apple"))

    def test_narrower_query_drops_non_matching(self) -> None:
        index = _fruit_index()
        index.set_query("ap")
        self.assertEqual(index.labels(), ["apple", "apricot", "apple/core"])
        index.set_query("apc")
        self.assertEqual(index.labels(), ["apricot", "apple/core"])

    def test_clearing_query_restores_merge_order(self) -> None:
        index = _fruit_index()
        initial = index.labels()
        index.set_query("co")
        index.set_query("c")
        index.set_query("")
        self.assertEqual(index.labels(), initial)

    def test_merge_order_uses_query_at_merge_time(self) -> None:
        index = _index()
        index.set_query("c")
        index.add_batch([_path("abc"), _path("cab"), _path("c")])
        self.assertEqual(index.labels(), ["c", "cab", "abc"])
        index.set_query("")
        self.assertEqual(index.labels(), ["c", "cab", "abc"])

    def test_duplicate_paths_are_merged_once(self) -> None:
        index = _fruit_index()
        before = index.candidates()
        self.assertFalse(index.add_batch([_path("apple"), _path("banana")]))
        self.assertEqual(index.candidates(), before)

    def test_recompute_is_idempotent(self) -> None:
        index = _fruit_index()
        index.set_query("ap")
        first = index.matches()
        index.set_query("ap")
        self.assertEqual(index.matches(), first)

    def test_candidate_set_only_grows(self) -> None:
        index = _fruit_index()
        seen = set(index.candidates())
        for query in ("a", "zz", "", "core"):
            index.set_query(query)
            index.add_batch([_path(f"extra-{query or 'empty'}")])
            current = set(index.candidates())
            self.assertTrue(seen <= current)
            seen = current


class ResultIndexSelectionTests(unittest.TestCase):
    def test_no_match_leaves_empty_list_and_no_selection(self) -> None:
        index = _fruit_index()
        index.set_query("zzz")
        self.assertEqual(index.matches(), [])
        self.assertEqual(index.selected, -1)
        self.assertIsNone(index.selected_path())
        self.assertEqual(index.viewport, 0)

    def test_selection_returns_when_matches_reappear(self) -> None:
        index = _fruit_index()
        index.set_query("zzz")
        index.set_query("")
        self.assertEqual(index.selected, 0)

    def test_query_change_selects_highest_score(self) -> None:
        index = _index()
        index.add_batch([_path("xxxxxb"), _path("bxxxxxxx")])
        self.assertEqual(index.labels(), ["xxxxxb", "bxxxxxxx"])
        index.set_query("b")
        self.assertEqual(index.selected, 1)

    def test_candidate_arrival_does_not_move_selection(self) -> None:
        index = _index()
        index.add_batch([_path("xxxxxb"), _path("bxxxxxxx")])
        index.set_query("b")
        index.add_batch([_path("b")])
        # the merge re-ranks candidates for the live query; the index stays put
        self.assertEqual(index.labels(), ["b", "bxxxxxxx", "xxxxxb"])
        self.assertEqual(index.selected, 1)

    def test_late_batch_filtered_out_by_query(self) -> None:
        index = _fruit_index()
        index.set_query("apple")
        selected_before = index.selected
        matches_before = index.matches()
        index.add_batch([_path("banana/split")])
        self.assertIn(_path("banana/split"), index.candidates())
        self.assertEqual(index.matches(), matches_before)
        self.assertEqual(index.selected, selected_before)

    def test_selection_is_clamped_when_matches_shrink(self) -> None:
        index = _fruit_index()
        for _ in range(4):
            index.move_selection_down()
        self.assertEqual(index.selected, 4)
        index.set_query("core")
        self.assertEqual(index.labels(), ["apple/core"])
        self.assertEqual(index.selected, 0)

    def test_move_selection_clamps_at_bounds(self) -> None:
        index = _fruit_index()
        self.assertFalse(index.move_selection_up())
        self.assertEqual(index.selected, 0)
        for _ in range(10):
            index.move_selection_down()
        self.assertEqual(index.selected, 4)
        self.assertFalse(index.move_selection_down())

    def test_viewport_keeps_selection_visible(self) -> None:
        rows = 3
        index = _index(rows=rows)
        index.add_batch([_path(f"dir{n:02d}") for n in range(12)])
        for _ in range(11):
            index.move_selection_down()
            self.assertLessEqual(index.viewport, index.selected)
            self.assertLessEqual(index.selected, index.viewport + rows - 1)
        self.assertEqual(index.viewport, 9)
        # bottom-aligned: selection is the last visible row
        self.assertEqual(index.selected, index.viewport + rows - 1)
        for _ in range(11):
            index.move_selection_up()
            self.assertLessEqual(index.viewport, index.selected)
            self.assertLessEqual(index.selected, index.viewport + rows - 1)
        self.assertEqual(index.viewport, 0)

    def test_view_snapshot_contains_only_visible_rows(self) -> None:
        index = _index(rows=2)
        index.add_batch([_path("a"), _path("bb"), _path("ccc")])
        index.move_selection_down()
        index.move_selection_down()
        view = index.view()
        self.assertEqual([row.label for row in view.rows], ["bb", "ccc"])
        self.assertEqual([row.selected for row in view.rows], [False, True])
        self.assertEqual(view.viewport, 1)
        self.assertEqual(view.match_count, 3)
        self.assertEqual(view.candidate_count, 3)
        self.assertFalse(view.complete)
        index.mark_complete()
        self.assertTrue(index.view().complete)


class ResultIndexMouseTests(unittest.TestCase):
    def setUp(self) -> None:
        self.rows = 3
        self.index = _index(rows=self.rows)
        self.index.add_batch([_path(f"dir{n}") for n in range(6)])

    def test_press_selects_row_under_pointer(self) -> None:
        self.assertTrue(self.index.mouse_press(HEADER_ROWS + 2))
        self.assertEqual(self.index.selected, 2)

    def test_press_accounts_for_viewport(self) -> None:
        self.index.scroll_down()
        self.index.mouse_press(HEADER_ROWS + 1)
        self.assertEqual(self.index.viewport, 1)
        self.assertEqual(self.index.selected, 2)

    def test_press_above_list_scrolls_up(self) -> None:
        self.index.scroll_down()
        self.index.scroll_down()
        self.assertTrue(self.index.mouse_press(1))
        self.assertEqual(self.index.viewport, 1)
        self.assertEqual(self.index.selected, 0)

    def test_press_below_visible_rows_scrolls_down_while_rows_remain(self) -> None:
        below = HEADER_ROWS + self.rows
        self.assertTrue(self.index.mouse_press(below))
        self.assertTrue(self.index.mouse_press(below))
        self.assertTrue(self.index.mouse_press(below))
        self.assertEqual(self.index.viewport, 3)
        self.assertFalse(self.index.mouse_press(below))
        self.assertEqual(self.index.viewport, 3)

    def test_press_past_end_of_short_list_is_noop(self) -> None:
        index = _index(rows=10)
        index.add_batch([_path("one")])
        self.assertFalse(index.mouse_press(HEADER_ROWS + 5))
        self.assertEqual(index.viewport, 0)
        self.assertEqual(index.selected, 0)

    def test_batch_after_wheel_scroll_keeps_viewport(self) -> None:
        index = _index(rows=3)
        index.add_batch([_path(f"dir{n:02d}") for n in range(20)])
        for _ in range(5):
            self.assertTrue(index.scroll_down())
        self.assertEqual(index.viewport, 5)
        self.assertEqual(index.selected, 0)

        index.add_batch([_path("late")])
        self.assertEqual(index.viewport, 5)
        self.assertEqual(index.selected, 0)

    def test_batch_clamps_viewport_when_display_grows(self) -> None:
        rows = [3]
        index = ResultIndex(ROOT, lambda: rows[0], include_root=False)
        index.add_batch([_path(f"dir{n:02d}") for n in range(10)])
        for _ in range(7):
            index.scroll_down()
        self.assertEqual(index.viewport, 7)

        rows[0] = 8
        index.add_batch([_path("late")])
        self.assertEqual(index.viewport, 3)

    def test_scroll_up_stops_at_top(self) -> None:
        self.assertFalse(self.index.scroll_up())
        self.assertEqual(self.index.viewport, 0)

    def test_click_confirms_only_within_selected_label(self) -> None:
        self.index.mouse_press(HEADER_ROWS + 1)
        label = "dir1"
        row = HEADER_ROWS + 1
        self.assertTrue(self.index.mouse_click(LIST_TEXT_COL, row))
        self.assertTrue(self.index.mouse_click(LIST_TEXT_COL + len(label) - 1, row))
        self.assertFalse(self.index.mouse_click(LIST_TEXT_COL + len(label), row))
        self.assertFalse(self.index.mouse_click(LIST_TEXT_COL - 1, row))

    def test_click_on_other_row_does_not_confirm_or_select(self) -> None:
        self.assertFalse(self.index.mouse_click(LIST_TEXT_COL, HEADER_ROWS + 2))
        self.assertEqual(self.index.selected, 0)
        self.assertFalse(self.index.mouse_click(LIST_TEXT_COL, 1))

    def test_click_with_empty_list_is_noop(self) -> None:
        self.index.set_query("zzz")
        self.assertFalse(self.index.mouse_click(LIST_TEXT_COL, HEADER_ROWS))


class ResultIndexLifecycleTests(unittest.TestCase):
    def test_closed_index_discards_late_batches(self) -> None:
        index = _fruit_index()
        index.close()
        self.assertFalse(index.add_batch([_path("late")]))
        self.assertNotIn(_path("late"), index.candidates())
        index.set_query("a")
        self.assertEqual(index.query, "")
        self.assertFalse(index.move_selection_down())

    def test_concurrent_batches_and_navigation_keep_invariants(self) -> None:
        rows = 4
        index = _index(rows=rows)
        batches = [[_path(f"t{t}/d{n}") for n in range(20)] for t in range(8)]

        def producer(batch: list[str]) -> None:
            for path in batch:
                index.add_batch([path])

        threads = [threading.Thread(target=producer, args=(batch,)) for batch in batches]
        for thread in threads:
            thread.start()
        for step in range(200):
            if step % 3 == 0:
                index.move_selection_up()
            else:
                index.move_selection_down()
            view = index.view()
            if view.match_count:
                self.assertTrue(0 <= view.selected < view.match_count)
                self.assertLessEqual(view.viewport, view.selected)
                self.assertLessEqual(view.selected, view.viewport + rows - 1)
            else:
                self.assertEqual(view.selected, -1)
        for thread in threads:
            thread.join(timeout=5.0)

        self.assertEqual(len(index.candidates()), 160)


if __name__ == "__main__":
    unittest.main()
