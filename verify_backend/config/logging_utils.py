import logging
import sys
from .settings import settings

def get_logger(name: str, level: int = None) -> logging.Logger:
    """
    Configures and returns a logger.
    """
    # Use the level from settings if not provided
    if level is None:
        level_name = settings.log_level.upper()
        level = getattr(logging, level_name, logging.INFO)
    logger = logging.getLogger(name)
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout) # Log to stdout
    handler.setLevel(level)

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)

    # get_logger may be called repeatedly for the same name
    if not logger.handlers:
        logger.addHandler(handler)

    return logger


def mask_seed(seed: str, visible: int = 8) -> str:
    """Shorten a seed for log output so revealed server seeds never hit the logs in full."""
    if not seed:
        return "<empty>"
    if len(seed) <= visible:
        return seed
    return f"{seed[:visible]}..."
