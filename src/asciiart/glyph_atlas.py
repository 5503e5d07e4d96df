import logging
import subprocess
from typing import Protocol

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from asciiart.config import COVERAGE_SIZE, DEFAULT_FONT

logger = logging.getLogger(__name__)

# Pen position as fractions of the bitmap size
X_OFFSET_FACTOR = 0.2
BASELINE_FACTOR = 0.75


class Rasterizer(Protocol):
    size: int

    def render(self, char: str) -> np.ndarray:
        """Return a (size, size) bool array, True where the cell is left lit by the glyph."""
        ...


def find_font(family: str) -> str | None:
    """Ask fontconfig for the file that provides a font family."""
    try:
        result = subprocess.run(["fc-match", "-f", "%{file}", family], capture_output=True, text=True)
    except FileNotFoundError:
        return None
    if result.returncode == 0 and result.stdout.strip():
        return result.stdout.strip()
    return None


def _load_font(font: str, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Open `font` as a file path or a fontconfig family, falling back to Pillow's bundled font."""
    for candidate in (font, find_font(font), find_font("monospace")):
        if not candidate:
            continue
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue
    logger.warning("No TrueType font found for %r, using Pillow's default font", font)
    return ImageFont.load_default(size=size)


class FontRasterizer:
    """Draws characters dark-on-light into a fixed-size bitmap using Pillow."""

    def __init__(self, font: str = DEFAULT_FONT, size: int = COVERAGE_SIZE):
        self.size = size
        self.font = _load_font(font, size)
        self._origin = (round(size * X_OFFSET_FACTOR), round(size * BASELINE_FACTOR))

    def render(self, char: str) -> np.ndarray:
        img = Image.new("L", (self.size, self.size), 0)
        draw = ImageDraw.Draw(img)
        draw.text(self._origin, char, fill=255, font=self.font, anchor="ls")
        return np.asarray(img) == 0
