from dataclasses import dataclass, field

import numpy as np

from asciiart.errors import ResolutionError
from asciiart.image import PixelGrid

# ITU-R BT.709 luma weights (0.2126, 0.7152, 0.0722) scaled to integers so
# that they sum to exactly LUMA_SCALE
LUMA_WEIGHTS = np.array([2126, 7152, 722], dtype=np.int64)
LUMA_SCALE = 10_000
MAX_CHANNEL = 255


def brightness(grid: PixelGrid) -> float:
    """Mean BT.709 luma of a grid, normalized to [0, 1]."""
    total = int((grid.pixels.astype(np.int64) @ LUMA_WEIGHTS).sum())
    count = grid.width * grid.height
    return total / (count * MAX_CHANNEL * LUMA_SCALE)


@dataclass(frozen=True)
class SubRegion:
    grid: PixelGrid
    brightness: float = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "brightness", brightness(self.grid))


def side_length(padded: PixelGrid, resolution: int) -> int:
    """Side of the square cells that split `padded` into `resolution` columns."""
    side = padded.width // resolution if resolution > 0 else 0
    if side == 0 or padded.width % side or padded.height % side or padded.width // side != resolution:
        raise ResolutionError(f"Resolution {resolution} does not evenly divide a {padded.width}x{padded.height} image")
    return side


def partition(padded: PixelGrid, resolution: int) -> list[SubRegion]:
    """Split a padded image into square sub-regions, in row-major order."""
    side = side_length(padded, resolution)
    rows = padded.height // side
    cols = padded.width // side

    # (rows, side, cols, side, 3) -> (rows, cols, side, side, 3)
    cells = padded.pixels.reshape(rows, side, cols, side, 3).transpose(0, 2, 1, 3, 4)
    return [SubRegion(PixelGrid(cells[r, c])) for r in range(rows) for c in range(cols)]
