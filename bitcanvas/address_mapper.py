"""
Pure Address Mapping Logic

This module contains the AddressMapper class, the single source of truth for
where a cell lives inside the packed canvas buffer. The canvas is a flat
row-major bitfield (8 cells/byte, MSB first):

    index  = y * side + x
    byte   = index // 8
    offset = index % 8          # offset 0 is the most significant bit
    mask   = 1 << (7 - offset)

Pure class with no side effects - easily testable and reusable.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .validation import (
    OutOfRangeError,
    buffer_size_for,
    validate_buffer_size,
    validate_coordinate,
    validate_side,
)


class AddressMapper:
    """
    Pure coordinate/bit-address conversions for a square canvas.

    Holds only the grid side; every method maps inputs to outputs without
    touching any buffer it is not given.
    """

    def __init__(self, side: int):
        validate_side(side)
        self.side = side

    @property
    def cell_count(self) -> int:
        return self.side * self.side

    @property
    def buffer_size(self) -> int:
        """Bytes needed for the packed buffer (ceil(side*side / 8))."""
        return buffer_size_for(self.side)

    def to_address(self, x: int, y: int) -> Tuple[int, int]:
        """
        Map a cell coordinate to its bit address.

        Args:
            x: Column, 0 <= x < side
            y: Row, 0 <= y < side

        Returns:
            Tuple[int, int]: (byte_index, bit_offset), bit_offset 0 = MSB

        Raises:
            OutOfRangeError: If the coordinate is not an integer or is outside the grid
        """
        x, y = validate_coordinate(x, y, self.side)
        index = y * self.side + x
        return index >> 3, index & 7

    def from_address(self, byte_index: int, bit_offset: int) -> Tuple[int, int]:
        """
        Map a bit address back to its cell coordinate.

        Args:
            byte_index: Index into the packed buffer
            bit_offset: 0..7, 0 = MSB

        Returns:
            Tuple[int, int]: (x, y)

        Raises:
            OutOfRangeError: If the address is outside the buffer or names
                one of the pad bits after the last cell
        """
        if not (0 <= bit_offset < 8):
            raise OutOfRangeError(f"Bit offset must be 0-7, got {bit_offset}")
        if not (0 <= byte_index < self.buffer_size):
            raise OutOfRangeError(
                f"Byte index {byte_index} out of range for {self.buffer_size}-byte buffer"
            )

        index = byte_index * 8 + bit_offset
        if index >= self.cell_count:
            raise OutOfRangeError(
                f"Address ({byte_index},{bit_offset}) is a pad bit past cell {self.cell_count - 1}"
            )
        y, x = divmod(index, self.side)
        return x, y

    @staticmethod
    def mask(bit_offset: int) -> int:
        """Byte mask selecting bit_offset, counted from the MSB."""
        return 1 << (7 - bit_offset)

    def unpack(self, buffer: bytes) -> np.ndarray:
        """
        Convert a packed buffer to a boolean array of shape (side, side).

        The array is indexed [y, x], matching the row-major cell index.

        Raises:
            InvalidEncodingError: If the buffer length doesn't match the grid
        """
        validate_buffer_size(len(buffer), self.side)
        arr = np.frombuffer(bytes(buffer), dtype=np.uint8)
        bits = np.unpackbits(arr, bitorder="big", count=self.cell_count)
        return bits.reshape((self.side, self.side)).astype(bool, copy=False)

    def pack(self, cells: np.ndarray) -> bytes:
        """
        Pack a boolean array of shape (side, side) into buffer bytes.

        Pad bits after the last cell are left zero.

        Raises:
            ValueError: If the array shape doesn't match the grid
        """
        cells = np.asarray(cells, dtype=bool)
        if cells.shape != (self.side, self.side):
            raise ValueError(
                f"Cell array shape {cells.shape} doesn't match {self.side}x{self.side} canvas"
            )
        return np.packbits(cells.reshape(-1), bitorder="big").tobytes()

    def create_test_pattern(self, pattern: str) -> bytes:
        """
        Create a packed test pattern for this grid.

        Args:
            pattern: Pattern type ("checkerboard", "border", "solid", "clear")

        Returns:
            bytes: Packed canvas buffer

        Raises:
            ValueError: If pattern type is unknown
        """
        cells = np.zeros((self.side, self.side), dtype=bool)

        if pattern == "checkerboard":
            yy, xx = np.indices(cells.shape)
            cells[:, :] = (xx + yy) % 2 == 0
        elif pattern == "border":
            cells[0, :] = True  # Top border
            cells[-1, :] = True  # Bottom border
            cells[:, 0] = True  # Left border
            cells[:, -1] = True  # Right border
        elif pattern == "solid":
            cells[:, :] = True
        elif pattern == "clear":
            pass
        else:
            raise ValueError(f"Unknown test pattern: {pattern}")

        return self.pack(cells)


TEST_PATTERNS = ("checkerboard", "border", "solid", "clear")
