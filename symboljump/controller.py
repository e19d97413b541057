"""Go-to-symbol session controller.

A session starts when the symbol index asks for the picker and ends on
confirm or cancel. While it is active, highlighted candidates are previewed
after a short quiet period; cancel puts the editor back exactly as it was,
confirm keeps only the chosen file open.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine, Iterable
from pathlib import Path
from typing import Any

from .config import GoToSymbolSettings, load_settings
from .debounce import CallLater, DebounceTimer
from .events import CompositeSubscription, Emitter
from .markers import HighlightMarkerManager
from .navigation import NavigationExecutor, NavigationExecutorDeps
from .picker import PickerEvent, SymbolPickerView
from .platform import EditorPlatform, ScanDefinition
from .reaper import reap_temporary_editors
from .scanner import scan_for_symbol_definition_range
from .snapshot import NavigationSnapshot, capture_snapshot, restore_snapshot
from .types import GoToSymbolCommand, Symbol

logger = logging.getLogger(__name__)


class GoToSymbol:
    """Wires the symbol index and picker events to snapshot/preview/navigate."""

    def __init__(
        self,
        platform: EditorPlatform,
        view: SymbolPickerView,
        command_channel: Emitter[GoToSymbolCommand],
        *,
        settings: GoToSymbolSettings | None = None,
        scan_definition: ScanDefinition = scan_for_symbol_definition_range,
        call_later: CallLater | None = None,
    ) -> None:
        self.platform = platform
        self.view = view
        self.settings = settings if settings is not None else load_settings()
        view.result_limit = self.settings.picker_result_limit
        self.markers = HighlightMarkerManager(self.settings.highlight_class)
        self.executor = NavigationExecutor(
            NavigationExecutorDeps(
                platform=platform,
                markers=self.markers,
                scan_definition=scan_definition,
            )
        )
        self.snapshot: NavigationSnapshot | None = None
        self.session_active = False
        self.package_suspended = False
        self.destroyed = False
        self._generation = 0
        self._previews_in_flight = 0
        self._confirms_in_flight = 0
        self._deferred_show: tuple[str | None, Path | str | None, tuple[Symbol, ...]] | None = None
        self._preview_debouncer = DebounceTimer(self.settings.preview_delay, call_later=call_later)
        self._tasks: set[asyncio.Task[Any]] = set()
        self.subscriptions = CompositeSubscription(
            command_channel.subscribe(self._on_command),
            view.on_did_select(self._on_select),
            view.on_did_confirm(self._on_confirm),
            view.on_did_cancel(self._on_cancel),
        )

    @property
    def pending_tasks(self) -> tuple[asyncio.Task[Any], ...]:
        """Navigations still running in the background."""
        return tuple(self._tasks)

    def _on_command(self, command: GoToSymbolCommand) -> None:
        self.show(command.default_symbol_name, command.active_file_path, command.symbols)

    def show(
        self,
        default_symbol_name: str | None,
        active_file_path: Path | str | None,
        symbols: Iterable[Symbol],
    ) -> None:
        """Start a session: suspend the side package, snapshot, open the picker.

        While a confirm is still opening its file the request waits for it, so
        the new snapshot sees the confirmed editor and none of its temporaries.
        """
        if self._confirms_in_flight:
            logger.debug("deferring go-to-symbol until the pending confirm completes")
            self._deferred_show = (default_symbol_name, active_file_path, tuple(symbols))
            return
        self._preview_debouncer.cancel()
        self._generation += 1
        self._suspend_package()
        editor = self.platform.get_active_text_editor()
        self.snapshot = capture_snapshot(self.platform, editor) if editor is not None else None
        self.session_active = True
        self.view.show()
        if editor is None or not editor.get_path():
            logger.debug("go-to-symbol needs a saved active file, closing picker")
            self.view.hide()
            self._end_session()
            return
        self.view.set_symbols(default_symbol_name, active_file_path, symbols)

    def _on_select(self, event: PickerEvent) -> None:
        if not self.session_active or event.symbol is None:
            return
        self._preview_debouncer.schedule(self._start_preview, event.symbol)

    def _start_preview(self, symbol: Symbol) -> None:
        if not self.session_active:
            return
        self._previews_in_flight += 1
        self.view.cancelling = True
        self._spawn(self._preview(symbol, self.snapshot, self._generation))

    async def _preview(self, symbol: Symbol, snapshot: NavigationSnapshot | None, generation: int) -> None:
        try:
            editor = await self.executor.navigate(
                symbol,
                True,
                snapshot,
                is_current=lambda: generation == self._generation,
            )
        finally:
            self._previews_in_flight -= 1
            self.view.cancelling = self._previews_in_flight > 0
        if editor is not None and generation == self._generation:
            self.view.focus_filter_editor()

    def _on_confirm(self, event: PickerEvent) -> None:
        if not self.session_active or event.symbol is None:
            return
        self._preview_debouncer.cancel()
        self._generation += 1
        self.markers.clear_marker()
        self._restore_package()
        self.session_active = False
        self._confirms_in_flight += 1
        self._spawn(self._confirm(event.symbol, self.snapshot, self._generation))

    async def _confirm(self, symbol: Symbol, snapshot: NavigationSnapshot | None, generation: int) -> None:
        try:
            await self.executor.navigate(
                symbol,
                False,
                snapshot,
                is_current=lambda: generation == self._generation,
            )
        finally:
            self._confirms_in_flight -= 1
            if generation == self._generation:
                self.snapshot = None
            deferred, self._deferred_show = self._deferred_show, None
            if deferred is not None and not self.destroyed:
                self.show(*deferred)

    def _on_cancel(self, _event: PickerEvent) -> None:
        if not self.session_active:
            return
        self._preview_debouncer.cancel()
        self._generation += 1
        snapshot = self.snapshot
        if snapshot is not None:
            restore_snapshot(snapshot)
            reap_temporary_editors(self.platform, snapshot)
        self.markers.clear_marker()
        self._end_session()

    def destroy(self) -> None:
        """Tear down subscriptions and the picker; safe to call repeatedly."""
        if self.destroyed:
            return
        self.destroyed = True
        self._deferred_show = None
        self._preview_debouncer.cancel()
        self._generation += 1
        self.markers.clear_marker()
        self._end_session()
        self.subscriptions.dispose()
        self.view.destroy()

    def _end_session(self) -> None:
        self._restore_package()
        self.snapshot = None
        self.session_active = False

    def _suspend_package(self) -> None:
        name = self.settings.suspended_package
        if name and self.platform.packages.disable_package(name):
            self.package_suspended = True

    def _restore_package(self) -> None:
        name = self.settings.suspended_package
        if self.package_suspended and name:
            self.platform.packages.enable_package(name)
        self.package_suspended = False

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task[None]:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("go-to-symbol navigation failed", exc_info=error)
