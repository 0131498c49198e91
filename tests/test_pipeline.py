from dataclasses import replace

import pytest
from PIL import Image

from filterplay.config import SETTINGS
from filterplay.errors import EmptyBuffer, InvalidParameter
from filterplay.processing.decorate import border, gallery
from filterplay.processing.dither import Dither, apply_dither
from filterplay.processing.filters import Binary, Tint, apply_filter
from filterplay.processing.pipeline import EXAMPLE_PRESETS, parse_steps, render_examples, run_steps


def test_parse_steps_builds_dither_and_filter_steps():
    steps = parse_steps("dither:method=atkinson|binary:level=0.335,transparent=false")

    assert [step.name for step in steps] == ["dither", "binary"]
    assert steps[0].method is Dither.ATKINSON
    assert steps[1].kernel == Binary(level=0.335, transparent=False)


def test_bare_dither_step_uses_default_method():
    (step,) = parse_steps("dither", default_method="stucki")

    assert step.method is Dither.STUCKI


@pytest.mark.parametrize(
    "text",
    ["", " | ", "sepia:level", "dither:method=bayer", "dither:level=0.2", "blur", "tint:red=1.2"],
)
def test_parse_steps_rejects_bad_chains(text):
    with pytest.raises(InvalidParameter):
        parse_steps(text)


@pytest.mark.parametrize("name, preset", EXAMPLE_PRESETS)
def test_example_presets_parse(name, preset):
    assert parse_steps(preset)


def test_run_steps_matches_manual_composition(gradient_buffer):
    steps = parse_steps("dither:method=jarvis_judice_ninke|binary:level=0.98,transparent=true|tint:red=0.5,blue=0.5")

    expected = apply_dither(gradient_buffer, Dither.JARVIS_JUDICE_NINKE)
    expected = apply_filter(expected, Binary(level=0.98, transparent=True))
    expected = apply_filter(expected, Tint(red=0.5, blue=0.5))

    assert run_steps(gradient_buffer, steps) == expected


def test_run_steps_without_steps_returns_input(gradient_buffer):
    assert run_steps(gradient_buffer, []) is gradient_buffer


def test_double_invert_chain(gradient_buffer):
    assert run_steps(gradient_buffer, parse_steps("invert|invert")) == gradient_buffer


def test_border_frames_a_copy():
    src = Image.new("RGBA", (40, 40), color=(10, 200, 10, 255))

    framed = border(src, inset=15, radius=5)

    assert src.getpixel((20, 2)) == (10, 200, 10, 255)
    assert framed.getpixel((20, 2)) == (0, 0, 0, 255)
    assert framed.getpixel((20, 10)) == (255, 255, 255, 255)
    assert framed.getpixel((20, 15)) == (77, 77, 77, 255)
    assert framed.getpixel((20, 20)) == (10, 200, 10, 255)


def test_border_on_small_image_skips_inner_rule():
    framed = border(Image.new("RGB", (20, 20), color=(10, 200, 10)), inset=15, radius=5)

    assert framed.size == (20, 20)
    assert framed.mode == "RGBA"


def test_border_rejects_empty_image():
    with pytest.raises(EmptyBuffer):
        border(Image.new("RGBA", (0, 5)))


def test_gallery_stacks_thumbnails():
    first = Image.new("RGBA", (40, 30), color=(255, 0, 0, 255))
    second = Image.new("RGBA", (20, 20), color=(0, 0, 255, 255))

    out = gallery([first, second], ratio=2.0)

    assert out.size == (20, 30)
    assert out.getpixel((10, 5)) == (255, 0, 0, 255)
    assert out.getpixel((10, 25)) == (0, 0, 255, 255)


def test_gallery_requires_images():
    with pytest.raises(EmptyBuffer):
        gallery([])


def test_gallery_rejects_non_positive_ratio():
    with pytest.raises(InvalidParameter):
        gallery([Image.new("RGBA", (4, 4))], ratio=0)


def test_render_examples_frames_every_preset(gradient_image):
    settings = replace(SETTINGS, border_inset=10, border_radius=3)

    framed = render_examples(gradient_image, settings=settings)

    assert len(framed) == len(EXAMPLE_PRESETS)
    for img in framed:
        assert img.size == gradient_image.size
        assert img.getpixel((20, 1)) == (0, 0, 0, 255)
