import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image

from asciiart.errors import ImageLoadError

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255)


@dataclass(frozen=True, eq=False)
class PixelGrid:
    """Immutable grid of RGB pixels, stored as a (height, width, 3) uint8 array."""

    pixels: np.ndarray

    def __post_init__(self):
        arr = np.array(self.pixels, dtype=np.uint8)
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise ValueError(f"Expected an array of shape (height, width, 3), got {arr.shape}")
        arr.flags.writeable = False
        object.__setattr__(self, "pixels", arr)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def __eq__(self, other):
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return np.array_equal(self.pixels, other.pixels)

    __hash__ = None

    @classmethod
    def filled(cls, width: int, height: int, colour: tuple[int, int, int] = WHITE) -> "PixelGrid":
        return cls(np.full((height, width, 3), colour, dtype=np.uint8))

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelGrid":
        """Build a grid from a Pillow image, flattening any transparency onto white."""
        if image.mode.startswith("I"):
            # 16-bit greyscale: keep the high byte of each sample
            gray = (np.asarray(image).astype(np.int64) >> 8).clip(0, 255).astype(np.uint8)
            return cls(np.repeat(gray[:, :, np.newaxis], 3, axis=2))
        if image.mode in ("RGBA", "LA", "PA") or (image.mode == "P" and "transparency" in image.info):
            rgba = image.convert("RGBA")
            background = Image.new("RGBA", rgba.size, WHITE + (255,))
            image = Image.alpha_composite(background, rgba)
        return cls(np.asarray(image.convert("RGB")))

    def to_image(self) -> Image.Image:
        return Image.fromarray(np.ascontiguousarray(self.pixels))


def load_image(path: str | Path) -> PixelGrid:
    path = Path(path)
    try:
        with Image.open(path) as image:
            image.load()
            grid = PixelGrid.from_image(image)
    except (OSError, Image.DecompressionBombError) as e:
        raise ImageLoadError(f"Could not load image {path}: {e}") from e
    logger.debug("Loaded %s (%dx%d)", path, grid.width, grid.height)
    return grid
