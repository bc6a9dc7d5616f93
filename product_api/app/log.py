import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

def configure_logging(level: str = "INFO", environment: str = "production") -> None:
    """
    Replace loguru's default sink with a single stderr sink.
    Tracebacks include local variables outside production only.
    """
    verbose = environment.lower() != "production"
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format=LOG_FORMAT,
        colorize=True,
        backtrace=verbose,
        diagnose=verbose,
        enqueue=False,
    )
