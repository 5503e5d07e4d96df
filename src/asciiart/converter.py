import logging
from pathlib import Path

from PIL import Image

from asciiart.errors import EmptyWorkingSetError, ResolutionError
from asciiart.image import PixelGrid, load_image
from asciiart.model import CharBrightnessIndex
from asciiart.padding import next_power_of_two, pad
from asciiart.sampling import partition

logger = logging.getLogger(__name__)

RESOLUTION_UP = "up"
RESOLUTION_DOWN = "down"


def resolution_bounds(image: PixelGrid) -> tuple[int, int]:
    """Smallest and largest column counts that keep cells square and inside the padded image."""
    width, height = next_power_of_two(image.width), next_power_of_two(image.height)
    return max(1, width // height), width


def check_resolution(image: PixelGrid, resolution: int) -> int:
    lo, hi = resolution_bounds(image)
    if resolution < 1 or resolution & (resolution - 1):
        raise ResolutionError(f"Resolution must be a power of two, got {resolution}")
    if not lo <= resolution <= hi:
        raise ResolutionError(f"Resolution {resolution} is outside [{lo}, {hi}] for this image")
    return resolution


def step_resolution(resolution: int, direction: str, image: PixelGrid) -> int:
    """Double ("up") or halve ("down") the resolution, staying within bounds."""
    if direction == RESOLUTION_UP:
        new_resolution = resolution * 2
    elif direction == RESOLUTION_DOWN:
        new_resolution = resolution // 2
    else:
        raise ResolutionError(f"Unknown resolution step: {direction!r}")
    return check_resolution(image, new_resolution)


def run(image: PixelGrid, resolution: int, index: CharBrightnessIndex) -> list[list[str]]:
    """Convert an image into rows of characters, `resolution` characters wide."""
    if not len(index):
        raise EmptyWorkingSetError("Cannot convert with an empty character set")

    padded = pad(image)
    regions = partition(padded, resolution)
    rows = len(regions) // resolution
    grid = [[""] * resolution for _ in range(rows)]
    for i, region in enumerate(regions):
        grid[i // resolution][i % resolution] = index.nearest(region.brightness)

    logger.debug("Converted %dx%d image to %dx%d characters", image.width, image.height, resolution, rows)
    return grid


def image_to_ascii(
    image: PixelGrid | Image.Image | str | Path,
    index: CharBrightnessIndex,
    resolution: int,
) -> list[list[str]]:
    if isinstance(image, Image.Image):
        image = PixelGrid.from_image(image)
    elif not isinstance(image, PixelGrid):
        image = load_image(image)
    return run(image, resolution, index)
