import shutil
import subprocess

import numpy as np
import pytest

_FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu-sans-mono-fonts/DejaVuSansMono.ttf",
]


def _find_monospace_font():
    """Find a monospace font on the system."""
    for path in _FONT_CANDIDATES:
        if shutil.os.path.exists(path):
            return path
    result = shutil.which("fc-match")
    if result:
        out = subprocess.run(["fc-match", "-f", "%{file}", "monospace"], capture_output=True, text=True)
        if out.returncode == 0 and out.stdout.strip():
            return out.stdout.strip()
    return None


FONT_PATH = _find_monospace_font()
needs_font = pytest.mark.skipif(FONT_PATH is None, reason="No monospace font found on system")


class CountingRasterizer:
    """Fake rasterizer that lights a fixed number of cells per character.

    By default a character lights ord(char) cells, so brightness follows
    code point order. `counts` overrides individual characters.
    """

    def __init__(self, counts=None, size=16):
        self.size = size
        self.counts = counts or {}
        self.calls = []

    def render(self, char):
        self.calls.append(char)
        lit = self.counts.get(char, ord(char)) % (self.size * self.size + 1)
        flat = np.zeros(self.size * self.size, dtype=bool)
        flat[:lit] = True
        return flat.reshape(self.size, self.size)
