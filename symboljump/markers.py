"""Owner of the single symbol-highlight marker."""

from __future__ import annotations

from .platform import Marker, TextEditor
from .types import Range


class HighlightMarkerManager:
    """Holds at most one live highlight marker; setting a new one destroys the old."""

    def __init__(self, highlight_class: str) -> None:
        self.highlight_class = highlight_class
        self._marker: Marker | None = None

    @property
    def marker(self) -> Marker | None:
        return self._marker

    def set_marker(self, editor: TextEditor, buffer_range: Range) -> Marker:
        self.clear_marker()
        marker = editor.mark_buffer_range(buffer_range, invalidate="never", persistent=False)
        editor.decorate_marker(marker, type="highlight", class_name=self.highlight_class)
        self._marker = marker
        return marker

    def clear_marker(self) -> None:
        marker, self._marker = self._marker, None
        if marker is not None:
            marker.destroy()
