import html
import logging
from pathlib import Path

from asciiart.config import HTML_FONT

logger = logging.getLogger(__name__)

BASE_FONT_SIZE = 150.0
BASE_LINE_SPACING = 0.8

_HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<body style="COLOR:#000000; TEXT-ALIGN:center; FONT-SIZE:1px;">
<p style="white-space:pre; FONT-FAMILY:{font}; FONT-SIZE:{size:f}rem; LETTER-SPACING:0.15em; LINE-HEIGHT:{line:f}em;">
{body}
</p>
</body>
</html>
"""


def format_console(grid: list[list[str]]) -> str:
    return "\n".join(" ".join(row) for row in grid)


def render_html(grid: list[list[str]], font_name: str = HTML_FONT) -> str:
    """Build a standalone HTML page showing the grid in a monospaced font."""
    columns = len(grid[0]) if grid else 1
    body = "\n".join(html.escape("".join(row), quote=False) for row in grid)
    return _HTML_TEMPLATE.format(
        font=html.escape(font_name), size=BASE_FONT_SIZE / columns, line=BASE_LINE_SPACING, body=body
    )


def write_html(grid: list[list[str]], path: str | Path, font_name: str = HTML_FONT) -> Path:
    path = Path(path)
    path.write_text(render_html(grid, font_name), encoding="utf-8")
    logger.info("Wrote %d rows to %s", len(grid), path)
    return path
