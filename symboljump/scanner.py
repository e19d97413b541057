"""Locate a symbol's definition inside an open editor buffer.

Targets Elm-style sources: top-level values, annotations, ports, types and
type aliases start at column 0; union constructors follow ``=`` or ``|``
inside their ``type`` declaration. Pygments tokens blank out comments and
string literals first so mentions in docs or text never match.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path

from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.token import Comment, String
from pygments.util import ClassNotFound

from .platform import TextEditor
from .types import Point, Range

logger = logging.getLogger(__name__)

_TOP_LEVEL_PREFIX = r"^(?:port[ \t]+|type[ \t]+alias[ \t]+|type[ \t]+)?"
_NEXT_TOP_LEVEL_RE = re.compile(r"^\S", re.MULTILINE)


@lru_cache(maxsize=32)
def _lexer_for_suffix(suffix: str) -> Lexer:
    """Return a reusable lexer for a file suffix, plain text when unknown."""
    if not suffix:
        return TextLexer()
    try:
        return get_lexer_for_filename(f"buffer{suffix}", stripnl=False, ensurenl=False)
    except ClassNotFound:
        logger.debug("no lexer for %s, scanning as plain text", suffix)
        return TextLexer()


def mask_comments_and_strings(text: str, path: Path | None = None) -> str:
    """Replace comment and string characters with spaces, keeping offsets and newlines."""
    lexer = _lexer_for_suffix(path.suffix.lower() if path is not None else "")
    chars: list[str] | None = None
    for index, token_type, value in lexer.get_tokens_unprocessed(text):
        if token_type not in Comment and token_type not in String:
            continue
        if chars is None:
            chars = list(text)
        for offset in range(index, min(index + len(value), len(chars))):
            if chars[offset] != "\n":
                chars[offset] = " "
    return text if chars is None else "".join(chars)


def _point_for_offset(text: str, offset: int) -> Point:
    row = text.count("\n", 0, offset)
    line_start = text.rfind("\n", 0, offset) + 1
    return Point(row, offset - line_start)


def _range_for_span(text: str, start: int, end: int) -> Range:
    return Range(_point_for_offset(text, start), _point_for_offset(text, end))


def _find_top_level(masked: str, identifier: str) -> tuple[int, int] | None:
    pattern = re.compile(_TOP_LEVEL_PREFIX + rf"(?P<name>{re.escape(identifier)})\b", re.MULTILINE)
    match = pattern.search(masked)
    if match is None:
        return None
    return match.span("name")


def _find_constructor(masked: str, identifier: str, case_tipe: str) -> tuple[int, int] | None:
    header = re.compile(rf"^type[ \t]+(?!alias\b){re.escape(case_tipe)}\b", re.MULTILINE)
    constructor = re.compile(rf"[=|]\s*(?P<name>{re.escape(identifier)})\b")
    for declaration in header.finditer(masked):
        body_start = declaration.end()
        line_end = masked.find("\n", body_start)
        following = _NEXT_TOP_LEVEL_RE.search(masked, line_end + 1) if line_end >= 0 else None
        body_end = following.start() if following is not None else len(masked)
        match = constructor.search(masked, body_start, body_end)
        if match is not None:
            return match.span("name")
    return None


def find_definition_range(
    text: str,
    identifier: str,
    case_tipe: str | None = None,
    path: Path | None = None,
) -> Range | None:
    """Return the range of ``identifier`` at its definition, or ``None``.

    With ``case_tipe`` the identifier is looked up as a constructor of that
    union type; otherwise as a top-level declaration.
    """
    if not identifier:
        return None
    masked = mask_comments_and_strings(text, path)
    if case_tipe:
        span = _find_constructor(masked, identifier, case_tipe)
    else:
        span = _find_top_level(masked, identifier)
    if span is None:
        return None
    return _range_for_span(text, *span)


def scan_for_symbol_definition_range(
    editor: TextEditor,
    identifier: str,
    case_tipe: str | None,
    on_match: Callable[[Range], None],
) -> None:
    """Call ``on_match`` once with the definition range when one is found."""
    found = find_definition_range(editor.get_text(), identifier, case_tipe, editor.get_path())
    if found is None:
        logger.debug("no definition of %s in %s", identifier, editor.get_path())
        return
    on_match(found)
