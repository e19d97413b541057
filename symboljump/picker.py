"""Headless symbol picker: query, filtered matches, selection and events.

Rendering is left to the host; this model owns what the list contains, which
row is selected, and when select/confirm/cancel fire.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from .config import DEFAULT_PICKER_RESULT_LIMIT
from .events import Emitter, Subscription
from .fuzzy import match_labels
from .types import Symbol


@dataclass(frozen=True)
class PickerEvent:
    symbol: Symbol | None


def _same_file(left: Path | str, right: Path) -> bool:
    try:
        return Path(left).resolve() == right
    except OSError:
        return Path(left) == right


class SymbolPickerView:
    """Selectable, filterable list of symbols."""

    def __init__(self, result_limit: int = DEFAULT_PICKER_RESULT_LIMIT) -> None:
        self.result_limit = result_limit
        self.visible = False
        self.destroyed = False
        # Set by the controller while a preview moves focus away from the filter.
        self.cancelling = False
        self.filter_focused = False
        self.query = ""
        self.symbols: list[Symbol] = []
        self.matches: list[Symbol] = []
        self.selected = 0
        self._did_select: Emitter[PickerEvent] = Emitter()
        self._did_confirm: Emitter[PickerEvent] = Emitter()
        self._did_cancel: Emitter[PickerEvent] = Emitter()

    def on_did_select(self, callback: Callable[[PickerEvent], None]) -> Subscription:
        return self._did_select.subscribe(callback)

    def on_did_confirm(self, callback: Callable[[PickerEvent], None]) -> Subscription:
        return self._did_confirm.subscribe(callback)

    def on_did_cancel(self, callback: Callable[[PickerEvent], None]) -> Subscription:
        return self._did_cancel.subscribe(callback)

    def show(self) -> None:
        if self.destroyed:
            return
        self.visible = True
        self.focus_filter_editor()

    def hide(self) -> None:
        self.visible = False
        self.filter_focused = False

    def destroy(self) -> None:
        if self.destroyed:
            return
        self.hide()
        self.destroyed = True
        self.symbols = []
        self.matches = []
        for emitter in (self._did_select, self._did_confirm, self._did_cancel):
            emitter.clear()

    def focus_filter_editor(self) -> None:
        if self.visible:
            self.filter_focused = True

    def set_symbols(
        self,
        default_symbol_name: str | None,
        active_file_path: Path | str | None,
        symbols: Iterable[Symbol],
    ) -> None:
        """Load candidates, active file's symbols first, filtered by the default name."""
        symbols = list(symbols)
        if active_file_path is not None:
            active = Path(active_file_path).resolve()
            symbols.sort(key=lambda symbol: 0 if _same_file(symbol.source_path, active) else 1)
        self.symbols = symbols
        query = default_symbol_name.split(".")[-1] if default_symbol_name else ""
        self._refresh(query)
        if default_symbol_name:
            for idx, symbol in enumerate(self.matches):
                if symbol.full_name == default_symbol_name:
                    self.selected = idx
                    break
        self._emit_selection()

    def set_query(self, query: str) -> None:
        self._refresh(query)
        self._emit_selection()

    def move_selection(self, delta: int) -> None:
        if not self.matches:
            return
        self.selected = (self.selected + delta) % len(self.matches)
        self._emit_selection()

    @property
    def selected_symbol(self) -> Symbol | None:
        if not self.matches:
            return None
        return self.matches[self.selected]

    def confirm_selection(self) -> None:
        symbol = self.selected_symbol
        if symbol is None:
            self.cancel()
            return
        self.hide()
        self._did_confirm.emit(PickerEvent(symbol))

    def cancel(self) -> None:
        if not self.visible:
            return
        symbol = self.selected_symbol
        self.hide()
        self._did_cancel.emit(PickerEvent(symbol))

    def focus_lost(self) -> None:
        """Treat losing focus as a cancel unless a preview is moving focus."""
        self.filter_focused = False
        if self.cancelling or not self.visible:
            return
        self.cancel()

    def _refresh(self, query: str) -> None:
        self.query = query
        labels = [symbol.full_name for symbol in self.symbols]
        matched = match_labels(query, labels, limit=self.result_limit)
        self.matches = [self.symbols[idx] for idx, _ in matched]
        self.selected = 0

    def _emit_selection(self) -> None:
        symbol = self.selected_symbol
        if symbol is not None and self.visible:
            self._did_select.emit(PickerEvent(symbol))
