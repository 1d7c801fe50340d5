"""
Paint Session - Interaction State Machine

This module contains the PaintSession class, which turns pointer events from
the presentation layer into canvas mutations. It owns the draw mode and the
pointer state for exactly one BitCanvas and notifies the presentation layer
after every change.

Pointer model:
- Global primary down/up toggles engagement for every cell
- A pointer-down on a cell always paints it and starts a drag
- A pointer-over on a cell paints only while engaged
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union

from .bit_canvas import BitCanvas
from .codec import decode, encode
from .validation import OutOfRangeError

logger = logging.getLogger(__name__)


CellChangedCallback = Callable[[int, int, bool], None]
EncodedChangedCallback = Callable[[str], None]
ClearedCallback = Callable[[], None]


class DrawMode(Enum):
    """What painting a cell does."""

    MARK = "mark"
    CLEAR = "clear"

    def __str__(self) -> str:
        return self.value


# Names used by earlier front-ends for the same two modes
_MODE_ALIASES = {
    "mark": DrawMode.MARK,
    "draw": DrawMode.MARK,
    "clear": DrawMode.CLEAR,
    "erase": DrawMode.CLEAR,
}


def parse_draw_mode(mode: Union[DrawMode, str]) -> DrawMode:
    """
    Resolve a DrawMode from an enum member or its name.

    Raises:
        ValueError: If the name is not a known mode
    """
    if isinstance(mode, DrawMode):
        return mode
    resolved = _MODE_ALIASES.get(str(mode).strip().lower())
    if resolved is None:
        raise ValueError(
            f"Unknown draw mode '{mode}'. Expected one of: {sorted(_MODE_ALIASES)}"
        )
    return resolved


@dataclass
class PointerState:
    engaged: bool = False


class PaintSession:
    """
    Event-driven painter for a single canvas.

    Intended for single-threaded use from the presentation layer's event loop.
    Callbacks are optional; any left as None are skipped.
    """

    def __init__(
        self,
        canvas: Optional[BitCanvas] = None,
        mode: Union[DrawMode, str] = DrawMode.MARK,
        on_cell_changed: Optional[CellChangedCallback] = None,
        on_encoded_changed: Optional[EncodedChangedCallback] = None,
        on_cleared: Optional[ClearedCallback] = None,
    ):
        """
        Initialize a paint session.

        Args:
            canvas: Canvas to paint on (default: new 64x64 canvas)
            mode: Initial draw mode
            on_cell_changed: Called with (x, y, value) for every painted cell
            on_encoded_changed: Called with the encoded canvas after every mutation
            on_cleared: Called after the whole canvas was cleared
        """
        self.canvas = canvas if canvas is not None else BitCanvas()
        self._mode = parse_draw_mode(mode)
        self.pointer = PointerState()

        self.on_cell_changed = on_cell_changed
        self.on_encoded_changed = on_encoded_changed
        self.on_cleared = on_cleared

        self._encoded: Optional[str] = None

        # Statistics
        self._stats = {
            "cells_painted": 0,
            "events_ignored": 0,
            "events_rejected": 0,
            "clears": 0,
            "loads": 0,
        }

        logger.info(
            f"Paint session started on {self.canvas.side}x{self.canvas.side} canvas, mode={self._mode}"
        )

    @property
    def mode(self) -> DrawMode:
        return self._mode

    @property
    def engaged(self) -> bool:
        return self.pointer.engaged

    @property
    def encoded(self) -> str:
        """Current canvas as base64, recomputed after any mutation."""
        if self._encoded is None:
            self._encoded = encode(self.canvas.raw_buffer())
        return self._encoded

    # ---- Inbound commands ----

    def pointer_primary_down(self) -> None:
        self.pointer.engaged = True

    def pointer_primary_up(self) -> None:
        self.pointer.engaged = False

    def cell_pointer_down(self, x: int, y: int) -> bool:
        """
        Paint a cell unconditionally and start a drag.

        Returns:
            bool: True if the cell was painted, False if the event was rejected
        """
        if not self._paint(x, y):
            return False
        self.pointer.engaged = True
        return True

    def cell_pointer_over(self, x: int, y: int) -> bool:
        """
        Paint a cell if a drag is in progress.

        Returns:
            bool: True if the cell was painted
        """
        if not self.pointer.engaged:
            self._stats["events_ignored"] += 1
            return False
        return self._paint(x, y)

    def select_mode(self, mode: Union[DrawMode, str]) -> None:
        """Change the draw mode for subsequent paints; existing cells are untouched."""
        self._mode = parse_draw_mode(mode)
        logger.debug(f"Draw mode set to {self._mode}")

    def clear_all(self) -> None:
        """Clear every cell regardless of mode or pointer state."""
        self.canvas.clear_all()
        self._encoded = None
        self._stats["clears"] += 1
        logger.info("Canvas cleared")

        if self.on_cleared:
            self.on_cleared()
        self._notify_encoded()

    def load_from_encoded(self, text: str) -> None:
        """
        Restore the canvas from encoded text.

        Cells whose value changed are reported through on_cell_changed.

        Raises:
            InvalidEncodingError: If the text can't be decoded for this canvas;
                the canvas is left unchanged
        """
        data = decode(text, self.canvas.side)

        before = self.canvas.to_array()
        self.canvas.load_buffer(data)
        self._encoded = None
        self._stats["loads"] += 1

        after = self.canvas.to_array()
        changed = (before != after).nonzero()
        logger.info(f"Canvas loaded, {len(changed[0])} cells changed")

        if self.on_cell_changed:
            for y, x in zip(*changed):
                self.on_cell_changed(int(x), int(y), bool(after[y, x]))
        self._notify_encoded()

    # ---- Internals ----

    def _paint(self, x: int, y: int) -> bool:
        value = self._mode is DrawMode.MARK
        try:
            self.canvas.set_cell(x, y, value)
        except OutOfRangeError as e:
            self._stats["events_rejected"] += 1
            logger.warning(f"Ignoring paint event: {e}")
            return False

        self._encoded = None
        self._stats["cells_painted"] += 1
        logger.debug(f"Painted ({x},{y}) -> {int(value)}")

        if self.on_cell_changed:
            self.on_cell_changed(x, y, value)
        self._notify_encoded()
        return True

    def _notify_encoded(self) -> None:
        if self.on_encoded_changed:
            self.on_encoded_changed(self.encoded)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get session state and counters.

        Returns:
            Dict: Session status information
        """
        return {
            "side": self.canvas.side,
            "mode": str(self._mode),
            "engaged": self.pointer.engaged,
            "cells_marked": self.canvas.count_marked(),
            "stats": self._stats.copy(),
        }
