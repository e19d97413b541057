"""In-memory editor workspace.

Models panes holding text editors, buffer markers with decorations, pending
(preview) editors and a package manager. Files are read off the event loop so
``Workspace.open`` is a real suspension point.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from dataclasses import dataclass, field
from pathlib import Path

from .types import Point, Range

logger = logging.getLogger(__name__)

DEFAULT_VISIBLE_ROWS = 40

_EDITOR_IDS = itertools.count(1)
_MARKER_IDS = itertools.count(1)


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    raw bytes with UTF-8 replacement semantics.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


@dataclass(frozen=True)
class Decoration:
    type: str
    class_name: str


class BufferMarker:
    """Range marker owned by one editor."""

    def __init__(self, editor: TextEditor, buffer_range: Range, invalidate: str, persistent: bool) -> None:
        self.id = next(_MARKER_IDS)
        self.editor = editor
        self.invalidate = invalidate
        self.persistent = persistent
        self.decorations: list[Decoration] = []
        self._range = buffer_range
        self._destroyed = False

    def get_buffer_range(self) -> Range:
        return self._range

    def is_destroyed(self) -> bool:
        return self._destroyed

    def destroy(self) -> None:
        if self._destroyed:
            return
        self._destroyed = True
        self.decorations.clear()
        self.editor._forget_marker(self)


class TextEditor:
    """Buffer view with a single cursor/selection and scroll offsets in rows/columns."""

    def __init__(
        self,
        path: Path | None = None,
        text: str = "",
        *,
        pending: bool = False,
        visible_rows: int = DEFAULT_VISIBLE_ROWS,
    ) -> None:
        self.id = next(_EDITOR_IDS)
        self.path = path
        self.text = text
        self.pending = pending
        self.visible_rows = max(1, visible_rows)
        self.scroll_top = 0
        self.scroll_left = 0
        self.markers: list[BufferMarker] = []
        self.pane: Pane | None = None
        self._selection = Range()
        self._destroyed = False

    def __repr__(self) -> str:
        return f"TextEditor(id={self.id}, path={self.path!r})"

    def get_path(self) -> Path | None:
        return self.path

    def get_text(self) -> str:
        return self.text

    def _clip(self, position: Point) -> Point:
        lines = self.text.split("\n")
        row = max(0, min(position.row, len(lines) - 1))
        column = max(0, min(position.column, len(lines[row])))
        return Point(row, column)

    def get_cursor_buffer_position(self) -> Point:
        return self._selection.end

    def set_cursor_buffer_position(self, position: Point) -> None:
        """Move the cursor, collapsing the selection onto it."""
        clipped = self._clip(position)
        self._selection = Range(clipped, clipped)

    def set_selected_buffer_range(self, buffer_range: Range) -> None:
        self._selection = Range(self._clip(buffer_range.start), self._clip(buffer_range.end))

    def get_selected_buffer_range(self) -> Range:
        return self._selection

    def scroll_to_cursor_position(self, center: bool = False) -> None:
        row = self.get_cursor_buffer_position().row
        if center:
            self.scroll_top = max(0, row - self.visible_rows // 2)
            return
        if row < self.scroll_top:
            self.scroll_top = row
        elif row >= self.scroll_top + self.visible_rows:
            self.scroll_top = row - self.visible_rows + 1

    def mark_buffer_range(self, buffer_range: Range, invalidate: str = "never", persistent: bool = False) -> BufferMarker:
        marker = BufferMarker(self, buffer_range, invalidate, persistent)
        self.markers.append(marker)
        return marker

    def decorate_marker(self, marker: BufferMarker, type: str, class_name: str) -> Decoration:
        if marker.is_destroyed():
            raise ValueError("cannot decorate a destroyed marker")
        decoration = Decoration(type=type, class_name=class_name)
        marker.decorations.append(decoration)
        return decoration

    def _forget_marker(self, marker: BufferMarker) -> None:
        if marker in self.markers:
            self.markers.remove(marker)

    def is_pending(self) -> bool:
        return self.pending

    def terminate_pending_state(self) -> None:
        self.pending = False

    def is_destroyed(self) -> bool:
        return self._destroyed

    def destroy(self) -> None:
        if self._destroyed:
            return
        self._destroyed = True
        for marker in list(self.markers):
            marker.destroy()
        if self.pane is not None:
            self.pane._remove_item(self)
        logger.debug("destroyed editor %s", self.id)


class Pane:
    """Ordered editor tabs with one active item and an activation history."""

    def __init__(self, workspace: Workspace) -> None:
        self.workspace = workspace
        self.items: list[TextEditor] = []
        self.active_item: TextEditor | None = None
        self._history: list[TextEditor] = []

    def activate(self) -> None:
        self.workspace.active_pane = self

    def add_item(self, item: TextEditor) -> None:
        if item in self.items:
            return
        if item.pane is not None and item.pane is not self:
            item.pane._remove_item(item)
        item.pane = self
        self.items.append(item)

    def activate_item(self, item: TextEditor) -> None:
        self.add_item(item)
        self.active_item = item
        if item in self._history:
            self._history.remove(item)
        self._history.append(item)

    def pending_item(self) -> TextEditor | None:
        for item in self.items:
            if item.is_pending():
                return item
        return None

    def item_for_path(self, path: Path) -> TextEditor | None:
        for item in self.items:
            if item.get_path() == path:
                return item
        return None

    def _remove_item(self, item: TextEditor) -> None:
        if item not in self.items:
            return
        self.items.remove(item)
        item.pane = None
        if item in self._history:
            self._history.remove(item)
        if self.active_item is item:
            # Fall back to the most recently active remaining tab.
            self.active_item = self._history[-1] if self._history else (self.items[-1] if self.items else None)


@dataclass
class PackageManager:
    """Tracks which named editor packages are enabled."""

    enabled: set[str] = field(default_factory=set)

    def is_enabled(self, name: str) -> bool:
        return name in self.enabled

    def disable_package(self, name: str) -> bool:
        """Disable ``name``; return whether this call changed its state."""
        if name not in self.enabled:
            return False
        self.enabled.discard(name)
        logger.debug("disabled package %s", name)
        return True

    def enable_package(self, name: str) -> bool:
        """Enable ``name``; return whether this call changed its state."""
        if name in self.enabled:
            return False
        self.enabled.add(name)
        logger.debug("enabled package %s", name)
        return True


class Workspace:
    """Editor platform backed by in-memory panes and on-disk files."""

    def __init__(self, packages: PackageManager | None = None, visible_rows: int = DEFAULT_VISIBLE_ROWS) -> None:
        self.packages = packages if packages is not None else PackageManager()
        self.visible_rows = visible_rows
        self.panes: list[Pane] = [Pane(self)]
        self.active_pane = self.panes[0]

    def add_pane(self) -> Pane:
        pane = Pane(self)
        self.panes.append(pane)
        return pane

    def get_active_pane(self) -> Pane:
        return self.active_pane

    def get_text_editors(self) -> list[TextEditor]:
        return [item for pane in self.panes for item in pane.items]

    def get_active_text_editor(self) -> TextEditor | None:
        return self.active_pane.active_item

    def build_editor(self, path: Path | None = None, text: str = "", *, pane: Pane | None = None) -> TextEditor:
        """Add a permanent editor to ``pane`` (active pane by default) and activate it."""
        if path is not None:
            path = Path(path).resolve()
        editor = TextEditor(path, text, visible_rows=self.visible_rows)
        target = pane if pane is not None else self.active_pane
        target.activate_item(editor)
        return editor

    async def open(self, path: Path | str, pending: bool = False) -> TextEditor:
        """Open ``path`` in the active pane, reusing an editor already showing it.

        A pending open replaces the pane's current pending editor. Opening an
        existing pending editor permanently ends its pending state.
        """
        resolved = Path(path).resolve()
        pane = self.active_pane
        existing = pane.item_for_path(resolved)
        if existing is not None:
            if not pending:
                existing.terminate_pending_state()
            pane.activate_item(existing)
            return existing

        text = await asyncio.to_thread(read_text, resolved)

        # The pane may have opened the same path while the read was in flight.
        existing = pane.item_for_path(resolved)
        if existing is not None:
            if not pending:
                existing.terminate_pending_state()
            pane.activate_item(existing)
            return existing

        if pending:
            previous = pane.pending_item()
            if previous is not None:
                previous.destroy()
        editor = TextEditor(resolved, text, pending=pending, visible_rows=self.visible_rows)
        pane.activate_item(editor)
        logger.debug("opened %s as editor %s (pending=%s)", resolved, editor.id, pending)
        return editor
