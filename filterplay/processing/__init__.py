"""Pixel engines and the presentation helpers built on them."""

from .buffer import Components, Pixel, PixelBuffer
from .decorate import border, gallery
from .dither import MATRICES, DiffusionMatrix, Dither, apply_dither
from .filters import (
    KERNELS,
    Binary,
    Brightness,
    Contrast,
    Gamma,
    Gray,
    GrayTone,
    Invert,
    PixelKernel,
    Sepia,
    Shading,
    Solarize,
    Tint,
    apply_filter,
    build_kernel,
)
from .pipeline import EXAMPLE_PRESETS, Step, parse_steps, render_examples, run_steps

__all__ = [
    "Components",
    "Pixel",
    "PixelBuffer",
    "border",
    "gallery",
    "MATRICES",
    "DiffusionMatrix",
    "Dither",
    "apply_dither",
    "KERNELS",
    "Binary",
    "Brightness",
    "Contrast",
    "Gamma",
    "Gray",
    "GrayTone",
    "Invert",
    "PixelKernel",
    "Sepia",
    "Shading",
    "Solarize",
    "Tint",
    "apply_filter",
    "build_kernel",
    "EXAMPLE_PRESETS",
    "Step",
    "parse_steps",
    "render_examples",
    "run_steps",
]
