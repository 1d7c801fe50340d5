"""
Bit-packed pixel canvas package.

This package provides:
- Coordinate to bit addressing for a packed monochrome bitmap (MSB first)
- The canvas buffer with get/set/clear operations
- A paint session that turns pointer events into canvas updates
- A base64 codec for the packed buffer
"""

from .address_mapper import AddressMapper
from .bit_canvas import BitCanvas
from .codec import Codec, decode, encode
from .paint_session import DrawMode, PaintSession, PointerState
from .validation import (
    CanvasError,
    InvalidDimensionError,
    InvalidEncodingError,
    OutOfRangeError,
)

__version__ = "0.1.0"

__all__ = [
    "AddressMapper",
    "BitCanvas",
    "Codec",
    "DrawMode",
    "PaintSession",
    "PointerState",
    "encode",
    "decode",
    "CanvasError",
    "InvalidDimensionError",
    "InvalidEncodingError",
    "OutOfRangeError",
]
