import pytest
from PIL import Image

from filterplay.processing.buffer import PixelBuffer


def make_buffer(width, height, pixels):
    data = bytes(channel for pixel in pixels for channel in pixel)
    return PixelBuffer(width, height, data)


@pytest.fixture
def gradient_image():
    img = Image.new("RGBA", (40, 40))
    pixels = img.load()
    for y in range(40):
        for x in range(40):
            pixels[x, y] = (x * 6, y * 6, (x + y) * 3, 255)
    return img


@pytest.fixture
def gradient_buffer(gradient_image):
    return PixelBuffer.from_image(gradient_image)
