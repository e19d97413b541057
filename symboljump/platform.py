"""Editor operations consumed by the navigation core.

Hosts adapt their editor model to these protocols;
``symboljump.workspace`` ships an in-memory implementation.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Protocol

from .types import Point, Range


class Marker(Protocol):
    def get_buffer_range(self) -> Range: ...

    def destroy(self) -> None: ...

    def is_destroyed(self) -> bool: ...


class TextEditor(Protocol):
    id: int
    scroll_top: int
    scroll_left: int

    def get_path(self) -> Path | None: ...

    def get_text(self) -> str: ...

    def get_cursor_buffer_position(self) -> Point: ...

    def set_cursor_buffer_position(self, position: Point) -> None: ...

    def get_selected_buffer_range(self) -> Range: ...

    def scroll_to_cursor_position(self, center: bool = False) -> None: ...

    def mark_buffer_range(self, buffer_range: Range, invalidate: str = "never", persistent: bool = False) -> Marker: ...

    def decorate_marker(self, marker: Marker, type: str, class_name: str) -> None: ...

    def is_pending(self) -> bool: ...

    def destroy(self) -> None: ...


class Pane(Protocol):
    def activate(self) -> None: ...

    def activate_item(self, item: TextEditor) -> None: ...


class PackageManager(Protocol):
    def disable_package(self, name: str) -> bool: ...

    def enable_package(self, name: str) -> bool: ...


class EditorPlatform(Protocol):
    packages: PackageManager

    def get_text_editors(self) -> Sequence[TextEditor]: ...

    def get_active_pane(self) -> Pane: ...

    def get_active_text_editor(self) -> TextEditor | None: ...

    async def open(self, path: Path | str, pending: bool = False) -> TextEditor: ...


ScanDefinition = Callable[[TextEditor, str, str | None, Callable[[Range], None]], None]
