import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler: logging.Handler | None = None


def setup(level: str = "INFO") -> None:
    """Configure the root logger once; later calls only adjust the level."""
    global _handler
    root = logging.getLogger()
    root.setLevel(level.upper())

    if _handler is not None and _handler in root.handlers:
        return

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(_handler)
