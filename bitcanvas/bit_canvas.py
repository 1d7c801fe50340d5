import logging

import numpy as np

from .address_mapper import AddressMapper
from .validation import validate_buffer_size, validate_pad_bits

logger = logging.getLogger(__name__)

DEFAULT_SIDE = 64


class BitCanvas:
    """
    Fixed-size monochrome canvas stored as a packed bitmap.

    Key features:
    - One bit per cell, row-major, MSB first (see AddressMapper)
    - Buffer length is fixed at construction and never changes
    - No per-cell objects; cells are bits
    - No internal locking; callers sharing a canvas across threads must
      guard set_cell/clear_all/load_buffer/raw_buffer themselves
    """

    def __init__(self, side: int = DEFAULT_SIDE):
        self.mapper = AddressMapper(side)
        self.side = side
        self._buffer = bytearray(self.mapper.buffer_size)

        logger.debug(
            f"Canvas initialized: {side}x{side} cells, {len(self._buffer)} bytes"
        )

    def __len__(self) -> int:
        return self.mapper.cell_count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitCanvas):
            return NotImplemented
        return self.side == other.side and self._buffer == other._buffer

    def __repr__(self) -> str:
        return f"BitCanvas(side={self.side}, marked={self.count_marked()})"

    def set_cell(self, x: int, y: int, value: bool) -> None:
        """
        Set or clear a single cell.

        Redundant writes are allowed and leave the buffer unchanged.

        Raises:
            OutOfRangeError: If the coordinate is not an integer or is outside the grid
        """
        byte_index, bit_offset = self.mapper.to_address(x, y)
        mask = self.mapper.mask(bit_offset)
        if value:
            self._buffer[byte_index] |= mask
        else:
            self._buffer[byte_index] &= ~mask & 0xFF

    def get_cell(self, x: int, y: int) -> bool:
        """
        Read a single cell.

        Raises:
            OutOfRangeError: If the coordinate is not an integer or is outside the grid
        """
        byte_index, bit_offset = self.mapper.to_address(x, y)
        return bool(self._buffer[byte_index] & self.mapper.mask(bit_offset))

    def clear_all(self) -> None:
        """Reset every cell to False in a single pass."""
        self._buffer[:] = bytes(len(self._buffer))
        logger.debug("Canvas cleared")

    def raw_buffer(self) -> bytes:
        """Return an immutable copy of the packed buffer."""
        return bytes(self._buffer)

    def load_buffer(self, data: bytes) -> None:
        """
        Replace the whole buffer with packed data.

        All checks run before the buffer is touched, and the copy is a single
        slice assignment, so a failed load leaves the canvas unchanged.

        Raises:
            InvalidEncodingError: If the length or pad bits are wrong
        """
        validate_buffer_size(len(data), self.side)
        validate_pad_bits(data, self.side)
        self._buffer[:] = data
        logger.debug(f"Canvas loaded: {self.count_marked()} cells marked")

    def to_array(self) -> np.ndarray:
        """Boolean (side, side) array indexed [y, x]."""
        return self.mapper.unpack(self._buffer)

    def count_marked(self) -> int:
        return sum(b.bit_count() for b in self._buffer)
