import logging

import numpy as np

from asciiart.image import WHITE, PixelGrid

logger = logging.getLogger(__name__)


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (1 is 2**0)."""
    if n < 1:
        raise ValueError(f"Dimension must be positive, got {n}")
    return 1 << (n - 1).bit_length()


def pad(image: PixelGrid) -> PixelGrid:
    """Centre the image on a white canvas whose sides are powers of two.

    When the padding on an axis is odd, the top/left edge gets the smaller
    half and the bottom/right edge gets the extra pixel.
    """
    width = next_power_of_two(image.width)
    height = next_power_of_two(image.height)
    if (width, height) == (image.width, image.height):
        return PixelGrid(image.pixels)

    top = (height - image.height) // 2
    left = (width - image.width) // 2
    canvas = np.empty((height, width, 3), dtype=np.uint8)
    canvas[:] = WHITE
    canvas[top : top + image.height, left : left + image.width] = image.pixels
    logger.debug("Padded %dx%d to %dx%d", image.width, image.height, width, height)
    return PixelGrid(canvas)
