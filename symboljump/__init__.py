"""Public package surface for symboljump.

``GoToSymbol`` drives a go-to-symbol session over any editor platform that
implements ``symboljump.platform``; ``Workspace`` is the bundled in-memory one.
"""

from __future__ import annotations

import logging

from .controller import GoToSymbol
from .events import Emitter
from .picker import PickerEvent, SymbolPickerView
from .types import GoToSymbolCommand, Point, Range, Symbol
from .workspace import Workspace

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Emitter",
    "GoToSymbol",
    "GoToSymbolCommand",
    "PickerEvent",
    "Point",
    "Range",
    "Symbol",
    "SymbolPickerView",
    "Workspace",
]
