from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from PIL import Image

from ..config import SETTINGS, Settings
from ..errors import InvalidParameter
from .buffer import PixelBuffer
from .decorate import border
from .dither import Dither, apply_dither
from .filters import PixelKernel, apply_filter, build_kernel

STEP_SEPARATOR = "|"

EXAMPLE_PRESETS: Tuple[Tuple[str, str], ...] = (
    ("Sepia", "sepia:level=0.34,threshold=0"),
    ("Tint", "tint:red=0.5,blue=0.5,threshold=0.01"),
    ("Shading", "shading:green=-0.8,blue=0.9,threshold=0.01"),
    ("Gamma", "gamma:level=0.8,threshold=0"),
    ("Atkinson Binary", "dither:method=atkinson|binary:level=0.335,transparent=false"),
    ("Solarize", "solarize:red=0.2,green=0.2,blue=0.1,threshold=0.01"),
    (
        "Jarvis Tinted Cutout",
        "dither:method=jarvis_judice_ninke|binary:level=0.98,threshold=0,transparent=true"
        "|tint:red=0.5,blue=0.5",
    ),
)


@dataclass(frozen=True)
class Step:
    """One engine call in a chain: either a dither pass or a filter kernel."""

    name: str
    kernel: PixelKernel | None = None
    method: Dither | None = None

    def run(self, buffer: PixelBuffer) -> PixelBuffer:
        if self.method is not None:
            return apply_dither(buffer, self.method)
        if self.kernel is None:
            raise InvalidParameter(f"Step {self.name!r} has nothing to run")
        return apply_filter(buffer, self.kernel)


def _parse_params(name: str, text: str) -> Dict[str, str]:
    params: Dict[str, str] = {}
    for item in text.split(","):
        item = item.strip()
        if not item:
            continue
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise InvalidParameter(f"{name}: expected key=value, got {item!r}")
        params[key.strip()] = value.strip()
    return params


def parse_step(text: str, default_method: str | None = None) -> Step:
    name, _, raw_params = text.strip().partition(":")
    name = name.strip().lower()
    if not name:
        raise InvalidParameter(f"Empty step in {text!r}")
    params = _parse_params(name, raw_params)

    if name == "dither":
        method_name = params.pop("method", None) or default_method or SETTINGS.dither_method
        if params:
            raise InvalidParameter(f"dither does not accept: {', '.join(sorted(params))}")
        return Step(name=name, method=Dither.parse(method_name))
    return Step(name=name, kernel=build_kernel(name, **params))


def parse_steps(text: str, default_method: str | None = None) -> List[Step]:
    """Parse ``"dither:method=atkinson|binary:level=0.3"`` into steps."""

    chunks = [chunk for chunk in text.split(STEP_SEPARATOR) if chunk.strip()]
    if not chunks:
        raise InvalidParameter("No steps given")
    return [parse_step(chunk, default_method) for chunk in chunks]


def run_steps(buffer: PixelBuffer, steps: Sequence[Step]) -> PixelBuffer:
    for step in steps:
        buffer = step.run(buffer)
    return buffer


def render_examples(img: Image.Image, settings: Settings = SETTINGS) -> List[Image.Image]:
    """Run every example preset on ``img`` and frame each result."""

    source = PixelBuffer.from_image(img)
    framed = []
    for _, preset in EXAMPLE_PRESETS:
        result = run_steps(source, parse_steps(preset)).to_image()
        framed.append(border(result, inset=settings.border_inset, radius=settings.border_radius))
    return framed
