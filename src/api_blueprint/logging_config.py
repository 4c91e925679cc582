import sys

from loguru import logger

_logging_configured = False


def setup_logging(level: str = "INFO", force: bool = False) -> None:
    """Replace loguru's default sink with a single stderr sink.

    Only the first call has an effect unless ``force`` is set.
    """
    global _logging_configured

    if _logging_configured and not force:
        return
    _logging_configured = True

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>",
        colorize=True,
    )
