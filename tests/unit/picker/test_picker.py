"""Tests for the headless symbol picker and its label matcher."""

from __future__ import annotations

import unittest
from pathlib import Path

from symboljump.fuzzy import fuzzy_score, match_labels
from symboljump.picker import PickerEvent, SymbolPickerView
from symboljump.types import Symbol

MAIN = Path("/src/Main.elm")
PAGE = Path("/src/Page.elm")

MAIN_UPDATE = Symbol("Main.update", MAIN)
PAGE_VIEW = Symbol("Page.view", PAGE)
MAIN_VIEW = Symbol("Main.view", MAIN)
PAGE_UPDATE = Symbol("Page.update", PAGE)
ALL_SYMBOLS = (PAGE_VIEW, MAIN_UPDATE, PAGE_UPDATE, MAIN_VIEW)


class SymbolPickerViewTests(unittest.TestCase):
    def setUp(self) -> None:
        self.view = SymbolPickerView()
        self.selected: list[PickerEvent] = []
        self.confirmed: list[PickerEvent] = []
        self.cancelled: list[PickerEvent] = []
        self.view.on_did_select(self.selected.append)
        self.view.on_did_confirm(self.confirmed.append)
        self.view.on_did_cancel(self.cancelled.append)
        self.view.show()

    def test_set_symbols_filters_by_default_identifier_and_selects_it(self) -> None:
        self.view.set_symbols("Page.view", MAIN, ALL_SYMBOLS)

        self.assertEqual(self.view.symbols[:2], [MAIN_UPDATE, MAIN_VIEW])
        self.assertEqual(self.view.query, "view")
        self.assertEqual(self.view.matches, [MAIN_VIEW, PAGE_VIEW])
        self.assertIs(self.view.selected_symbol, PAGE_VIEW)
        self.assertEqual(self.selected, [PickerEvent(PAGE_VIEW)])

    def test_query_and_selection_changes_emit_select(self) -> None:
        self.view.set_symbols(None, None, ALL_SYMBOLS)
        self.selected.clear()

        self.view.set_query("upd")
        self.view.move_selection(1)
        self.view.move_selection(1)

        self.assertEqual(self.view.matches, [MAIN_UPDATE, PAGE_UPDATE])
        self.assertEqual(
            [event.symbol for event in self.selected],
            [MAIN_UPDATE, PAGE_UPDATE, MAIN_UPDATE],
        )

    def test_confirm_hides_and_emits_selected_symbol(self) -> None:
        self.view.set_symbols("Page.view", MAIN, ALL_SYMBOLS)

        self.view.confirm_selection()

        self.assertFalse(self.view.visible)
        self.assertEqual(self.confirmed, [PickerEvent(PAGE_VIEW)])
        self.assertEqual(self.cancelled, [])

    def test_confirm_without_matches_cancels(self) -> None:
        self.view.set_symbols("Nothing.here", MAIN, ALL_SYMBOLS)

        self.view.confirm_selection()

        self.assertEqual(self.confirmed, [])
        self.assertEqual(self.cancelled, [PickerEvent(None)])

    def test_focus_loss_is_ignored_while_cancelling(self) -> None:
        self.view.set_symbols("Page.view", MAIN, ALL_SYMBOLS)
        self.view.cancelling = True

        self.view.focus_lost()
        self.assertTrue(self.view.visible)
        self.assertEqual(self.cancelled, [])

        self.view.cancelling = False
        self.view.focus_lost()
        self.assertFalse(self.view.visible)
        self.assertEqual(len(self.cancelled), 1)

    def test_hidden_view_does_not_emit_select(self) -> None:
        self.view.hide()
        self.view.set_symbols("Page.view", MAIN, ALL_SYMBOLS)
        self.assertEqual(self.selected, [])

    def test_destroy_detaches_listeners(self) -> None:
        self.view.destroy()
        self.view.show()
        self.view.set_symbols("Page.view", MAIN, ALL_SYMBOLS)
        self.view.cancel()

        self.assertFalse(self.view.visible)
        self.assertEqual(self.selected, [])
        self.assertEqual(self.cancelled, [])


class MatchLabelsTests(unittest.TestCase):
    def test_substring_hits_beat_subsequence_matches(self) -> None:
        labels = ["Main.view", "Page.viewHeader", "Very.inert.eventWriter"]
        matched = match_labels("view", labels)
        self.assertEqual([idx for idx, _ in matched], [0, 1])

    def test_subsequence_fallback_scores_word_boundaries(self) -> None:
        labels = ["Main.update", "Page.view"]
        matched = match_labels("mup", labels)
        self.assertEqual([idx for idx, _ in matched], [0])
        self.assertIsNone(fuzzy_score("zz", "Main.update"))
        self.assertGreater(fuzzy_score("mu", "Main.update"), fuzzy_score("mu", "xmxxu"))

    def test_limit_caps_results(self) -> None:
        labels = [f"Mod.value{idx}" for idx in range(10)]
        self.assertEqual(len(match_labels("value", labels, limit=3)), 3)


if __name__ == "__main__":
    unittest.main()
