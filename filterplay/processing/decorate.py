from __future__ import annotations

from typing import Sequence

from PIL import Image, ImageDraw

from ..errors import EmptyBuffer, InvalidParameter

_FRAME_COLOR = (255, 255, 255, 255)
_OUTLINE_COLOR = (0, 0, 0, 255)
_OUTLINE_WIDTH = 5
_INNER_COLOR = (77, 77, 77, 255)


def border(img: Image.Image, inset: float = 15, radius: float = 5) -> Image.Image:
    """Return a copy of ``img`` framed for display in a gallery.

    The frame is a white rounded band ``inset`` pixels wide with a thin black
    outline on the outer edge and a one pixel gray rule along its inner edge.
    """

    width, height = img.size
    if width == 0 or height == 0:
        raise EmptyBuffer(f"Cannot frame a {width}x{height} image")

    out = img.convert("RGBA")
    draw = ImageDraw.Draw(out)
    band = max(1, min(int(round(inset)), min(width, height) // 2))
    corner = max(0, int(round(radius)))
    bounds = (0, 0, width - 1, height - 1)

    draw.rounded_rectangle(bounds, radius=corner, outline=_FRAME_COLOR, width=band)
    draw.rounded_rectangle(bounds, radius=corner, outline=_OUTLINE_COLOR, width=min(_OUTLINE_WIDTH, band))

    # Images narrower than the frame have no room left for the inner rule.
    if width - 1 - band > band and height - 1 - band > band:
        draw.rectangle(
            (band, band, width - 1 - band, height - 1 - band),
            outline=_INNER_COLOR,
            width=1,
        )
    return out


def gallery(images: Sequence[Image.Image], ratio: float = 1.0) -> Image.Image:
    """Stack ``images`` top to bottom as thumbnails scaled by ``1 / ratio``.

    Every thumbnail takes the size of the first one so the column lines up.
    """

    if not images:
        raise EmptyBuffer("Cannot build a gallery without images")
    if ratio <= 0:
        raise InvalidParameter(f"Thumbnail ratio must be positive, got {ratio}")

    first_width, first_height = images[0].size
    thumb_size = (
        max(1, int(round(first_width / ratio))),
        max(1, int(round(first_height / ratio))),
    )
    out = Image.new("RGBA", (thumb_size[0], thumb_size[1] * len(images)), (0, 0, 0, 0))
    for index, img in enumerate(images):
        thumb = img.convert("RGBA")
        if thumb.size != thumb_size:
            thumb = thumb.resize(thumb_size, Image.Resampling.LANCZOS)
        out.paste(thumb, (0, index * thumb_size[1]))
    return out
