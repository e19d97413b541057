"""Opening a symbol's file and moving the editor onto its definition.

Preview navigation opens a pending editor and highlights the definition;
confirm navigation opens a permanent editor and closes every other editor
opened during the session.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .markers import HighlightMarkerManager
from .platform import EditorPlatform, ScanDefinition, TextEditor
from .reaper import reap_temporary_editors
from .snapshot import NavigationSnapshot
from .types import Range, Symbol

logger = logging.getLogger(__name__)


def _always_current() -> bool:
    return True


@dataclass(frozen=True)
class NavigationExecutorDeps:
    """Runtime dependencies required by :class:`NavigationExecutor`."""

    platform: EditorPlatform
    markers: HighlightMarkerManager
    scan_definition: ScanDefinition


class NavigationExecutor:
    def __init__(self, deps: NavigationExecutorDeps) -> None:
        self.platform = deps.platform
        self.markers = deps.markers
        self.scan_definition = deps.scan_definition

    async def navigate(
        self,
        symbol: Symbol,
        is_preview: bool,
        snapshot: NavigationSnapshot | None,
        is_current: Callable[[], bool] = _always_current,
    ) -> TextEditor | None:
        """Open ``symbol``'s file and place the cursor on its definition.

        Returns the opened editor, or ``None`` when ``is_current`` reports the
        session moved on while the file was opening. Open failures propagate.
        """
        editor = await self.platform.open(symbol.source_path, pending=is_preview)
        if not is_current():
            self._discard_stale(editor, snapshot)
            return None

        target = editor.get_selected_buffer_range()

        def on_match(found: Range) -> None:
            nonlocal target
            target = found
            editor.set_cursor_buffer_position(found.start)
            editor.scroll_to_cursor_position(center=True)

        self.scan_definition(editor, symbol.identifier, symbol.case_tipe, on_match)

        if is_preview:
            self.markers.set_marker(editor, target)
        elif snapshot is not None:
            reap_temporary_editors(self.platform, snapshot, except_id=editor.id)
        logger.debug(
            "%s %s at %s:%d:%d",
            "previewed" if is_preview else "opened",
            symbol.full_name,
            editor.get_path(),
            target.start.row + 1,
            target.start.column + 1,
        )
        return editor

    def _discard_stale(self, editor: TextEditor, snapshot: NavigationSnapshot | None) -> None:
        """Close a late preview editor that nothing else has claimed."""
        if snapshot is None or editor.id in snapshot.existing_editor_ids:
            return
        if not editor.is_pending():
            return
        logger.debug("discarding stale preview editor %s", editor.id)
        editor.destroy()
