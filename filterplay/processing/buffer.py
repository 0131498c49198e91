from __future__ import annotations

from typing import Iterator, NamedTuple, Optional, Tuple

from PIL import Image

from ..errors import EmptyBuffer, OutOfBounds, SizeMismatch

CHANNELS = 4


def to_channel(value: float) -> int:
    """Saturating conversion of a unit float to an 8-bit channel."""
    if value > 1.0:
        return 255
    if value < 0.0:
        return 0
    return int(value * 255.0 + 0.5)


def to_unit(value: int) -> float:
    return value / 255.0


class Pixel(NamedTuple):
    red: int
    green: int
    blue: int
    alpha: int

    @classmethod
    def from_unit(cls, red: float, green: float, blue: float, alpha: float) -> "Pixel":
        return cls(to_channel(red), to_channel(green), to_channel(blue), to_channel(alpha))


class Components(NamedTuple):
    """A pixel rescaled to ``[0.0, 1.0]`` for filter math."""

    red: float
    green: float
    blue: float
    alpha: float

    @classmethod
    def from_pixel(cls, pixel: Pixel) -> "Components":
        return cls(to_unit(pixel[0]), to_unit(pixel[1]), to_unit(pixel[2]), to_unit(pixel[3]))

    def to_pixel(self) -> Pixel:
        return Pixel.from_unit(self.red, self.green, self.blue, self.alpha)

    def median(self) -> float:
        # Arithmetic mean of the color channels, not a statistical median.
        return (self.red + self.green + self.blue) / 3.0

    def at_least(self, threshold: float) -> bool:
        return self.red >= threshold and self.green >= threshold and self.blue >= threshold


class PixelBuffer:
    """Row-major RGBA8 raster with bounds-checked pixel access.

    Row 0 is the top row and ``offset(row, col) == row * width + col``. The
    raster is a single ``bytearray`` of interleaved RGBA bytes, so a buffer
    can be handed to and from Pillow without per-pixel conversion.
    """

    def __init__(self, width: int, height: int, data: Optional[bytes] = None) -> None:
        if width < 0 or height < 0:
            raise SizeMismatch(f"Dimensions must be non-negative, got {width}x{height}")
        expected = width * height * CHANNELS
        if data is None:
            data = bytes(expected)
        elif len(data) != expected:
            raise SizeMismatch(
                f"Expected {expected} bytes for a {width}x{height} RGBA buffer, got {len(data)}"
            )
        self._width = width
        self._height = height
        self._data = bytearray(data)

    @classmethod
    def from_image(cls, img: Image.Image) -> "PixelBuffer":
        rgba = img.convert("RGBA")
        width, height = rgba.size
        return cls(width, height, rgba.tobytes())

    def to_image(self) -> Image.Image:
        if self.is_empty():
            raise EmptyBuffer(f"Cannot build an image from a {self._width}x{self._height} buffer")
        return Image.frombytes("RGBA", (self._width, self._height), bytes(self._data))

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def dimensions(self) -> Tuple[int, int]:
        return self._width, self._height

    def is_empty(self) -> bool:
        return self._width == 0 or self._height == 0

    def offset(self, row: int, col: int) -> int:
        if not (0 <= row < self._height and 0 <= col < self._width):
            raise OutOfBounds(
                f"Pixel ({row}, {col}) outside {self._width}x{self._height} buffer"
            )
        return row * self._width + col

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self._height and 0 <= col < self._width

    def get(self, row: int, col: int) -> Pixel:
        start = self.offset(row, col) * CHANNELS
        data = self._data
        return Pixel(data[start], data[start + 1], data[start + 2], data[start + 3])

    def set(self, row: int, col: int, pixel: Tuple[int, int, int, int]) -> None:
        if len(pixel) != CHANNELS:
            raise SizeMismatch(f"Expected {CHANNELS} channels, got {len(pixel)}")
        start = self.offset(row, col) * CHANNELS
        self._data[start : start + CHANNELS] = bytes(pixel)

    def positions(self) -> Iterator[Tuple[int, int]]:
        """Yield every ``(row, col)`` in raster order."""
        for row in range(self._height):
            for col in range(self._width):
                yield row, col

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self._width, self._height, bytes(self._data))

    def to_bytes(self) -> bytes:
        return bytes(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.dimensions() == other.dimensions() and self._data == other._data

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self._width}, height={self._height})"
