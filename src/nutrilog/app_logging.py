"""Logging configuration helpers."""

import logging

_FORMAT = "%(asctime)s %(levelname)s: %(name)s: %(message)s"


def configure_logging(level: int | str = logging.INFO) -> None:
    """Attach a single stream handler to the ``nutrilog`` logger.

    Repeated calls only update the level. Per-request httpx logging is
    limited to warnings so remote lookups do not flood the output.
    """
    logger = logging.getLogger("nutrilog")
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
