"""Persistent JSON config helpers.

Stores the preview debounce delay, the package suspended while the picker is
open, the highlight decoration class, and the picker result limit.
Malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "symboljump"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

DEFAULT_PREVIEW_DELAY_MS = 30
DEFAULT_SUSPENDED_PACKAGE = "linter"
DEFAULT_HIGHLIGHT_CLASS = "symboljump-symbol-highlight"
DEFAULT_PICKER_RESULT_LIMIT = 200
MAX_PREVIEW_DELAY_MS = 5_000


@dataclass(frozen=True)
class GoToSymbolSettings:
    """Resolved runtime settings for one go-to-symbol controller."""

    preview_delay_ms: int = DEFAULT_PREVIEW_DELAY_MS
    suspended_package: str | None = DEFAULT_SUSPENDED_PACKAGE
    highlight_class: str = DEFAULT_HIGHLIGHT_CLASS
    picker_result_limit: int = DEFAULT_PICKER_RESULT_LIMIT

    @property
    def preview_delay(self) -> float:
        """Debounce delay in seconds, as expected by ``loop.call_later``."""
        return self.preview_delay_ms / 1000.0


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.debug("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Write failures are logged and otherwise ignored so a read-only config
    directory never breaks navigation.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def _coerce_int(value: object, default: int, low: int, high: int) -> int:
    """Accept real ints inside ``[low, high]``; booleans and other types fall back."""
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    if value < low or value > high:
        return default
    return value


def _coerce_name(value: object, default: str | None) -> str | None:
    if not isinstance(value, str):
        return default
    stripped = value.strip()
    return stripped if stripped else default


def load_settings() -> GoToSymbolSettings:
    """Build settings from config, falling back per key on invalid values."""
    data = load_config()
    suspended = data.get("suspended_package", DEFAULT_SUSPENDED_PACKAGE)
    return GoToSymbolSettings(
        preview_delay_ms=_coerce_int(
            data.get("preview_delay_ms"), DEFAULT_PREVIEW_DELAY_MS, 0, MAX_PREVIEW_DELAY_MS
        ),
        # An explicit null disables package suspension.
        suspended_package=None if suspended is None else _coerce_name(suspended, DEFAULT_SUSPENDED_PACKAGE),
        highlight_class=_coerce_name(data.get("highlight_class"), DEFAULT_HIGHLIGHT_CLASS) or DEFAULT_HIGHLIGHT_CLASS,
        picker_result_limit=_coerce_int(
            data.get("picker_result_limit"), DEFAULT_PICKER_RESULT_LIMIT, 1, 10_000
        ),
    )


def save_preview_delay_ms(delay_ms: int) -> None:
    """Persist the preview debounce delay, clamped to the supported range."""
    config = load_config()
    config["preview_delay_ms"] = max(0, min(MAX_PREVIEW_DELAY_MS, int(delay_ms)))
    save_config(config)


def save_suspended_package(name: str | None) -> None:
    """Persist the package suspended during a picker session (``None`` disables)."""
    config = load_config()
    config["suspended_package"] = _coerce_name(name, None)
    save_config(config)
