from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple, Union

from ..errors import InvalidParameter
from .buffer import Pixel, PixelBuffer

LOGGER = logging.getLogger(__name__)

Entry = Tuple[int, int, int]


@dataclass(frozen=True)
class DiffusionMatrix:
    """Neighbor offsets ``(row, column, weight)`` sharing one divisor.

    Every offset points at a pixel the raster scan has not reached yet: the
    same row further right, or a later row.
    """

    divisor: int
    entries: Tuple[Entry, ...]

    def __post_init__(self) -> None:
        if self.divisor <= 0:
            raise InvalidParameter(f"Diffusion divisor must be positive, got {self.divisor}")
        for entry in self.entries:
            if len(entry) != 3:
                raise InvalidParameter(f"Diffusion entry {entry!r} is not (row, column, weight)")
            row, column, weight = entry
            if not isinstance(weight, int) or isinstance(weight, bool) or weight < 0:
                raise InvalidParameter(f"Diffusion weight must be a non-negative integer, got {weight!r}")
            if row < 0 or (row == 0 and column <= 0):
                raise InvalidParameter(f"Diffusion offset ({row}, {column}) points behind the scan")


class Dither(str, Enum):
    ATKINSON = "atkinson"
    FLOYD_STEINBERG = "floyd_steinberg"
    BURKES = "burkes"
    SIERRA = "sierra"
    SIERRA_TWO_ROW = "sierra_two_row"
    SIERRA_LITE = "sierra_lite"
    STUCKI = "stucki"
    JARVIS_JUDICE_NINKE = "jarvis_judice_ninke"
    NONE = "none"

    @classmethod
    def diffusing(cls) -> Tuple["Dither", ...]:
        return tuple(method for method in cls if method is not cls.NONE)

    @classmethod
    def parse(cls, name: str) -> "Dither":
        key = name.strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return cls(key)
        except ValueError as exc:
            raise InvalidParameter(f"Unknown dither method: {name!r}") from exc

    @property
    def matrix(self) -> DiffusionMatrix:
        return MATRICES[self]


MATRICES: Mapping[Dither, DiffusionMatrix] = MappingProxyType(
    {
        Dither.ATKINSON: DiffusionMatrix(
            8,
            ((0, 1, 1), (0, 2, 1), (1, -1, 1), (1, 0, 1), (1, 1, 1), (2, 0, 1)),
        ),
        Dither.FLOYD_STEINBERG: DiffusionMatrix(
            16,
            ((0, 1, 7), (1, -1, 3), (1, 0, 5), (1, 1, 1)),
        ),
        Dither.BURKES: DiffusionMatrix(
            32,
            ((0, 1, 8), (0, 2, 4), (1, -2, 2), (1, -1, 4), (1, 0, 8), (1, 1, 4), (1, 2, 2)),
        ),
        Dither.SIERRA: DiffusionMatrix(
            32,
            (
                (0, 1, 5), (0, 2, 3),
                (1, -2, 2), (1, -1, 4), (1, 0, 5), (1, 1, 4), (1, 2, 2),
                (2, -1, 2), (2, 0, 3), (2, 1, 2),
            ),
        ),
        Dither.SIERRA_TWO_ROW: DiffusionMatrix(
            16,
            ((0, 1, 4), (0, 2, 3), (1, -2, 1), (1, -1, 2), (1, 0, 3), (1, 1, 2), (1, 2, 1)),
        ),
        Dither.SIERRA_LITE: DiffusionMatrix(
            4,
            ((0, 1, 2), (1, -1, 1), (1, 0, 1)),
        ),
        Dither.STUCKI: DiffusionMatrix(
            42,
            (
                (0, 1, 8), (0, 2, 4),
                (1, -2, 2), (1, -1, 4), (1, 0, 8), (1, 1, 4), (1, 2, 2),
                (2, -2, 1), (2, -1, 2), (2, 0, 4), (2, 1, 2), (2, 2, 1),
            ),
        ),
        Dither.JARVIS_JUDICE_NINKE: DiffusionMatrix(
            48,
            (
                (0, 1, 7), (0, 2, 5),
                (1, -2, 3), (1, -1, 5), (1, 0, 7), (1, 1, 5), (1, 2, 3),
                (2, -2, 1), (2, -1, 3), (2, 0, 5), (2, 1, 3), (2, 2, 1),
            ),
        ),
        Dither.NONE: DiffusionMatrix(1, ()),
    }
)


def quantize(pixel: Pixel) -> Pixel:
    return Pixel(
        0 if pixel.red < 128 else 255,
        0 if pixel.green < 128 else 255,
        0 if pixel.blue < 128 else 255,
        pixel.alpha,
    )


def quantization_error(current: Pixel, quantized: Pixel) -> Tuple[int, int, int]:
    # Rounding up to 255 never carries error; only rounding down to 0 does.
    return (
        max(0, current.red - quantized.red),
        max(0, current.green - quantized.green),
        max(0, current.blue - quantized.blue),
    )


def _resolve(method: Union[Dither, DiffusionMatrix, str]) -> DiffusionMatrix:
    if isinstance(method, DiffusionMatrix):
        return method
    if isinstance(method, Dither):
        return method.matrix
    return Dither.parse(method).matrix


def apply_dither(
    buffer: PixelBuffer,
    method: Union[Dither, DiffusionMatrix, str] = Dither.JARVIS_JUDICE_NINKE,
) -> PixelBuffer:
    """Error-diffuse ``buffer`` to black and white per channel.

    The scan is strictly row-major. Each pixel is quantized and written
    before its error is pushed into the neighbors the matrix names, so by
    the time the scan reaches a pixel all of its incoming error is settled.
    """

    matrix = _resolve(method)
    out = buffer.copy()
    divisor = matrix.divisor

    for row, col in out.positions():
        current = out.get(row, col)
        dithered = quantize(current)
        out.set(row, col, dithered)

        error_r, error_g, error_b = quantization_error(current, dithered)
        if not (error_r or error_g or error_b):
            continue

        for row_offset, col_offset, weight in matrix.entries:
            target_row = row + row_offset
            target_col = col + col_offset
            if not out.contains(target_row, target_col):
                continue
            neighbor = out.get(target_row, target_col)
            out.set(
                target_row,
                target_col,
                (
                    min(255, neighbor.red + error_r * weight // divisor),
                    min(255, neighbor.green + error_g * weight // divisor),
                    min(255, neighbor.blue + error_b * weight // divisor),
                    neighbor.alpha,
                ),
            )

    LOGGER.debug("Dithered %dx%d buffer with divisor %d", out.width, out.height, divisor)
    return out
