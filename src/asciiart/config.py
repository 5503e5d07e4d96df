import logging

DEFAULT_RESOLUTION = 128
DEFAULT_CHARSET = "0123456789"

# Side length of the square bitmap every character is rendered into
COVERAGE_SIZE = 16
DEFAULT_FONT = "Courier New"

HTML_FILENAME = "out.html"
HTML_FONT = "Courier New"

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)
