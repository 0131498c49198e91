from __future__ import annotations

import random
from pathlib import Path
from typing import List, Union

from PIL import Image

IMAGE_SUFFIXES = frozenset({".png", ".jpg", ".jpeg", ".gif", ".bmp", ".tif", ".tiff", ".webp"})


def list_samples(directory: Union[str, Path]) -> List[Path]:
    root = Path(directory)
    if not root.is_dir():
        return []
    return sorted(
        path for path in root.iterdir() if path.is_file() and path.suffix.lower() in IMAGE_SUFFIXES
    )


def pick_sample(directory: Union[str, Path], rng: random.Random | None = None) -> Image.Image:
    """Decode a randomly chosen image from ``directory`` as RGBA."""

    samples = list_samples(directory)
    if not samples:
        raise FileNotFoundError(f"No sample images found in {directory}")
    chosen = (rng or random).choice(samples)
    with Image.open(chosen) as img:
        return img.convert("RGBA")
