"""
Utility module providing shared helper functions.

Depends only on the standard library.
"""

from .text_utils import camelize, to_int

__all__ = [
    "camelize",
    "to_int"
]
