from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Type, get_type_hints

from ..errors import InvalidParameter
from .buffer import Components, Pixel, PixelBuffer

LOGGER = logging.getLogger(__name__)

_TRUE_STRINGS = ("1", "true", "yes", "on")
_FALSE_STRINGS = ("0", "false", "no", "off")


def _within_limits(value: float) -> bool:
    return -1.0 <= value <= 1.0


class GrayTone(str, Enum):
    """Which channel a gray conversion copies into all three channels."""

    BRIGHT = "bright"  # red
    MEDIAN = "median"  # green
    DARK = "dark"  # blue
    LUMINOSITY = "luminosity"  # mean of red, green, blue


@dataclass(frozen=True)
class PixelKernel:
    """Stateless single-pixel transform with a threshold gate.

    Every numeric field is checked against ``[-1.0, 1.0]`` once, when the
    kernel is built. Pixels that fail :meth:`gate` are returned unchanged.
    """

    threshold: float = 0.0

    def __post_init__(self) -> None:
        for field in fields(self):
            value = getattr(self, field.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                continue
            if not _within_limits(value):
                raise InvalidParameter(
                    f"{type(self).__name__}.{field.name}={value} is out of range -1.0 to 1.0"
                )

    def gate(self, components: Components) -> bool:
        return components.at_least(self.threshold)

    def apply(self, components: Components) -> Pixel:
        if not self.gate(components):
            return components.to_pixel()
        return self.transform(components)

    def transform(self, components: Components) -> Pixel:
        raise NotImplementedError


@dataclass(frozen=True)
class Binary(PixelKernel):
    level: float = 0.5
    transparent: bool = False

    def transform(self, components: Components) -> Pixel:
        white = components.median() > self.level
        color = 1.0 if white else 0.0
        alpha = 0.0 if white and self.transparent else components.alpha
        return Pixel.from_unit(color, color, color, alpha)


@dataclass(frozen=True)
class Gray(PixelKernel):
    tone: GrayTone = GrayTone.MEDIAN

    def __post_init__(self) -> None:
        super().__post_init__()
        try:
            object.__setattr__(self, "tone", GrayTone(self.tone))
        except ValueError as exc:
            raise InvalidParameter(f"Unknown gray tone: {self.tone!r}") from exc

    def transform(self, components: Components) -> Pixel:
        if self.tone is GrayTone.BRIGHT:
            tone = components.red
        elif self.tone is GrayTone.MEDIAN:
            tone = components.green
        elif self.tone is GrayTone.DARK:
            tone = components.blue
        else:
            tone = components.median()
        return Pixel.from_unit(tone, tone, tone, components.alpha)


@dataclass(frozen=True)
class Shading(PixelKernel):
    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0

    def transform(self, components: Components) -> Pixel:
        def shade(value: float, factor: float) -> float:
            return value * factor if factor != 0.0 else value

        return Pixel.from_unit(
            shade(components.red, self.red),
            shade(components.green, self.green),
            shade(components.blue, self.blue),
            components.alpha,
        )


@dataclass(frozen=True)
class Tint(PixelKernel):
    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0

    def transform(self, components: Components) -> Pixel:
        def tint(value: float, factor: float) -> float:
            # Positive factors push toward white, negative toward black.
            if factor > 0.0:
                return value + (1.0 - value) * factor
            if factor < 0.0:
                return value + value * factor
            return value

        return Pixel.from_unit(
            tint(components.red, self.red),
            tint(components.green, self.green),
            tint(components.blue, self.blue),
            components.alpha,
        )


@dataclass(frozen=True)
class Solarize(PixelKernel):
    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0

    def gate(self, components: Components) -> bool:
        return components.median() > self.threshold

    def transform(self, components: Components) -> Pixel:
        def solarize(value: float, level: float) -> float:
            if level != 0.0 and value < level:
                return 1.0 - value
            return value

        return Pixel.from_unit(
            solarize(components.red, self.red),
            solarize(components.green, self.green),
            solarize(components.blue, self.blue),
            components.alpha,
        )


@dataclass(frozen=True)
class Invert(PixelKernel):
    def transform(self, components: Components) -> Pixel:
        return Pixel.from_unit(
            1.0 - components.red,
            1.0 - components.green,
            1.0 - components.blue,
            components.alpha,
        )


@dataclass(frozen=True)
class Gamma(PixelKernel):
    level: float = 1.0

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.level <= 0.0:
            raise InvalidParameter(f"Gamma.level must be above 0.0, got {self.level}")

    def transform(self, components: Components) -> Pixel:
        exponent = 1.0 / (self.level * 5.0)
        return Pixel.from_unit(
            components.red**exponent,
            components.green**exponent,
            components.blue**exponent,
            components.alpha,
        )


@dataclass(frozen=True)
class Brightness(PixelKernel):
    level: float = 0.0

    def transform(self, components: Components) -> Pixel:
        return Pixel.from_unit(
            components.red + self.level,
            components.green + self.level,
            components.blue + self.level,
            components.alpha,
        )


@dataclass(frozen=True)
class Contrast(PixelKernel):
    level: float = 0.0

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.level >= 1.0:
            raise InvalidParameter(f"Contrast.level must be below 1.0, got {self.level}")

    def transform(self, components: Components) -> Pixel:
        factor = (self.level + 1.0) / (1.0 - self.level)
        return Pixel.from_unit(
            factor * (components.red - 0.5) + 0.5,
            factor * (components.green - 0.5) + 0.5,
            factor * (components.blue - 0.5) + 0.5,
            components.alpha,
        )


@dataclass(frozen=True)
class Sepia(PixelKernel):
    level: float = 1.0

    def transform(self, components: Components) -> Pixel:
        r, g, b = components.red, components.green, components.blue
        scale = self.level * 5.0
        return Pixel.from_unit(
            (r * 0.393 + g * 0.769 + b * 0.189) * scale,
            (r * 0.349 + g * 0.686 + b * 0.168) * scale,
            (r * 0.272 + g * 0.534 + b * 0.131) * scale,
            components.alpha,
        )


KERNELS: Dict[str, Type[PixelKernel]] = {
    "binary": Binary,
    "gray": Gray,
    "shading": Shading,
    "tint": Tint,
    "solarize": Solarize,
    "invert": Invert,
    "gamma": Gamma,
    "brightness": Brightness,
    "contrast": Contrast,
    "sepia": Sepia,
}


def _coerce(kernel_name: str, name: str, expected: Any, raw: Any) -> Any:
    if not isinstance(raw, str):
        return raw
    text = raw.strip()
    if expected is bool:
        lowered = text.lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        raise InvalidParameter(f"{kernel_name}.{name}: expected a boolean, got {raw!r}")
    if expected is float:
        try:
            return float(text)
        except ValueError as exc:
            raise InvalidParameter(f"{kernel_name}.{name}: expected a number, got {raw!r}") from exc
    if expected is GrayTone:
        return text.lower()
    return raw


def build_kernel(name: str, **params: Any) -> PixelKernel:
    """Build a kernel by name, coercing string parameters such as query args."""

    kernel_name = name.strip().lower()
    try:
        kernel_cls = KERNELS[kernel_name]
    except KeyError as exc:
        raise InvalidParameter(f"Unknown filter: {name!r}") from exc

    hints = get_type_hints(kernel_cls)
    accepted = {field.name for field in fields(kernel_cls)}
    unknown = sorted(set(params) - accepted)
    if unknown:
        raise InvalidParameter(f"{kernel_name} does not accept: {', '.join(unknown)}")

    coerced = {
        key: _coerce(kernel_name, key, hints.get(key), value) for key, value in params.items()
    }
    return kernel_cls(**coerced)


def apply_filter(buffer: PixelBuffer, kernel: PixelKernel) -> PixelBuffer:
    """Run ``kernel`` over every pixel and return the result as a new buffer."""

    out = buffer.copy()
    for row, col in out.positions():
        components = Components.from_pixel(out.get(row, col))
        out.set(row, col, kernel.apply(components))
    LOGGER.debug("Applied %s to %dx%d buffer", kernel, out.width, out.height)
    return out
