from .settings import settings
from .logging_utils import get_logger, mask_seed

__all__ = [
    "settings",
    "get_logger",
    "mask_seed",
]
