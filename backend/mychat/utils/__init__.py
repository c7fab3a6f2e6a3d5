"""Utility modules for the application."""
from mychat.utils.logger import (
    setup_logging,
    get_logger,
    safe_repr,
)

__all__ = [
    'setup_logging',
    'get_logger',
    'safe_repr',
]
