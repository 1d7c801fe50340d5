"""
Pure Codec Logic

This module converts a packed canvas buffer to and from its text form:
standard-alphabet base64 with '=' padding. It's a pure module with no I/O;
the same buffer always yields the same string and decode(encode(b)) == b.

Wire format: exactly ceil(side*side / 8) bytes, MSB-first row-major packing.
"""

import base64
import binascii

from .bit_canvas import DEFAULT_SIDE
from .validation import (
    InvalidEncodingError,
    validate_buffer_size,
    validate_pad_bits,
    validate_side,
)


def encode(buffer: bytes) -> str:
    """
    Encode a packed buffer as padded standard base64.

    Args:
        buffer: Packed canvas bytes (bytes, bytearray or memoryview)

    Returns:
        str: ASCII base64 text
    """
    return base64.b64encode(bytes(buffer)).decode("ascii")


def decode(text: str, side: int = DEFAULT_SIDE) -> bytes:
    """
    Decode base64 text back to a packed buffer for a side x side canvas.

    Surrounding whitespace is ignored; anything else outside the standard
    alphabet, or incorrect padding, is rejected.

    Args:
        text: Encoded canvas
        side: Grid side the buffer must fit

    Returns:
        bytes: Packed canvas buffer

    Raises:
        InvalidEncodingError: If the text is not valid base64, decodes to the
            wrong number of bytes, or sets pad bits past the last cell
    """
    validate_side(side)
    if not isinstance(text, str):
        raise InvalidEncodingError(f"Encoded canvas must be text, got {type(text).__name__}")

    try:
        data = base64.b64decode(text.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidEncodingError(f"Invalid base64 canvas data: {e}") from e

    validate_buffer_size(len(data), side)
    validate_pad_bits(data, side)
    return data


class Codec:
    """Encoder/decoder bound to one grid side."""

    def __init__(self, side: int = DEFAULT_SIDE):
        validate_side(side)
        self.side = side

    def encode(self, buffer: bytes) -> str:
        return encode(buffer)

    def decode(self, text: str) -> bytes:
        return decode(text, self.side)
