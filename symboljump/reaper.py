"""Closing editors opened during a navigation session."""

from __future__ import annotations

import logging

from .platform import EditorPlatform, TextEditor
from .snapshot import NavigationSnapshot

logger = logging.getLogger(__name__)


def temporary_editors(
    platform: EditorPlatform,
    snapshot: NavigationSnapshot,
    except_id: int | None = None,
) -> list[TextEditor]:
    """Return open editors absent from ``snapshot``, excluding ``except_id``."""
    return [
        editor
        for editor in platform.get_text_editors()
        if editor.id not in snapshot.existing_editor_ids and (except_id is None or editor.id != except_id)
    ]


def reap_temporary_editors(
    platform: EditorPlatform,
    snapshot: NavigationSnapshot,
    except_id: int | None = None,
) -> int:
    """Destroy temporary editors and return how many were closed."""
    doomed = temporary_editors(platform, snapshot, except_id)
    for editor in doomed:
        editor.destroy()
    if doomed:
        logger.debug("closed %d temporary editor(s), kept %s", len(doomed), except_id)
    return len(doomed)
