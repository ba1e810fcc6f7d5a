"""Utility modules for Block Version."""

from .colors import strip_color, translate_alternate_color_codes
from .logging import get_logger, reset_logging, setup_logging

__all__ = [
    "get_logger",
    "reset_logging",
    "setup_logging",
    "strip_color",
    "translate_alternate_color_codes",
]
