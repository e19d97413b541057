"""Pre-navigation editor state capture and restore."""

from __future__ import annotations

from dataclasses import dataclass

from .platform import EditorPlatform, Pane, TextEditor
from .types import Point


@dataclass(frozen=True)
class NavigationSnapshot:
    """Editor state recorded before a go-to-symbol session starts."""

    existing_editor_ids: frozenset[int]
    pane: Pane
    editor: TextEditor
    cursor_position: Point
    scroll_top: int
    scroll_left: int


def capture_snapshot(platform: EditorPlatform, editor: TextEditor) -> NavigationSnapshot:
    """Record open editor ids plus ``editor``'s pane, cursor and scroll offsets.

    Must run before any preview opens a file, otherwise the preview editor is
    treated as pre-existing and survives a cancel.
    """
    return NavigationSnapshot(
        existing_editor_ids=frozenset(text_editor.id for text_editor in platform.get_text_editors()),
        pane=platform.get_active_pane(),
        editor=editor,
        cursor_position=editor.get_cursor_buffer_position(),
        scroll_top=editor.scroll_top,
        scroll_left=editor.scroll_left,
    )


def restore_snapshot(snapshot: NavigationSnapshot) -> None:
    """Re-activate the recorded pane/editor and reset cursor and scroll."""
    snapshot.pane.activate()
    snapshot.pane.activate_item(snapshot.editor)
    editor = snapshot.editor
    editor.set_cursor_buffer_position(snapshot.cursor_position)
    editor.scroll_top = snapshot.scroll_top
    editor.scroll_left = snapshot.scroll_left
