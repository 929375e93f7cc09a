"""
Modules package for range regime classification.
"""

from . import config

__all__ = ["config"]
