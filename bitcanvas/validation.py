"""
Cross-cutting validation logic for the bit canvas.

This module holds the error taxonomy and the checks shared by the address
mapper, the canvas and the codec. Type-local invariants stay in their
dataclass __post_init__ methods (see config.py).

Rules validated here:
- Grid side must be a positive integer
- Cell coordinates must lie inside the grid
- Packed buffer length must match the grid size
"""

import operator
from typing import Tuple


class CanvasError(ValueError):
    """Base exception for canvas errors."""
    pass


class OutOfRangeError(CanvasError):
    """Raised when a coordinate or bit address falls outside the grid."""
    pass


class InvalidDimensionError(CanvasError):
    """Raised when a canvas is constructed with a non-positive side."""
    pass


class InvalidEncodingError(CanvasError):
    """Raised when encoded text cannot be turned back into a canvas buffer."""
    pass


def buffer_size_for(side: int) -> int:
    """Number of bytes needed to hold side*side bits, rounded up."""
    return (side * side + 7) // 8


def validate_side(side: int) -> None:
    """
    Validate the grid side length.

    Args:
        side: Number of cells along each edge

    Raises:
        InvalidDimensionError: If side is not a positive integer
    """
    if isinstance(side, bool) or not isinstance(side, int):
        raise InvalidDimensionError(f"Grid side must be an integer, got {side!r}")
    if side <= 0:
        raise InvalidDimensionError(f"Grid side must be positive, got {side}")


def validate_coordinate(x: int, y: int, side: int) -> Tuple[int, int]:
    """
    Validate that a cell coordinate lies inside a side x side grid.

    Integer-like values (numpy integers included) are accepted; bools,
    floats, strings and anything else operator.index refuses are not.

    Returns:
        Tuple[int, int]: The coordinate as plain ints

    Raises:
        OutOfRangeError: If either component is not an integer or is
            outside [0, side)
    """
    try:
        if isinstance(x, bool) or isinstance(y, bool):
            raise TypeError("bool is not a cell coordinate")
        x, y = operator.index(x), operator.index(y)
    except TypeError as e:
        raise OutOfRangeError(f"Cell ({x!r},{y!r}) is not an integer coordinate") from e

    if not (0 <= x < side and 0 <= y < side):
        raise OutOfRangeError(
            f"Cell ({x},{y}) out of range for {side}x{side} canvas"
        )
    return x, y


def validate_buffer_size(data_length: int, side: int) -> None:
    """
    Validate that packed canvas data has exactly the expected length.

    Args:
        data_length: Length of the packed data in bytes
        side: Grid side the data is meant for

    Raises:
        InvalidEncodingError: If the length doesn't match
    """
    expected_bytes = buffer_size_for(side)

    if data_length != expected_bytes:
        raise InvalidEncodingError(
            f"Canvas data size {data_length} doesn't match expected {expected_bytes} "
            f"for {side}x{side} canvas"
        )


def validate_pad_bits(data: bytes, side: int) -> None:
    """
    Validate that the bits past the last cell are zero.

    Only grids whose cell count is not a multiple of 8 have pad bits; they
    live in the low end of the final byte.

    Raises:
        InvalidEncodingError: If any pad bit is set
    """
    spare = (-(side * side)) % 8
    if spare and data and data[-1] & ((1 << spare) - 1):
        raise InvalidEncodingError(
            f"Canvas data has {spare} trailing pad bits that must be zero"
        )
