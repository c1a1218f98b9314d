from .config import config, check_config, add_args
from .logging_config import setup_logging

__all__ = [
    "config",
    "check_config",
    "add_args",
    "setup_logging",
]
