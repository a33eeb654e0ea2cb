"""Utility modules."""

from .logger import setup_logger
from .sans import SplitSANs, build_general_names, split_sans

__all__ = ["setup_logger", "split_sans", "SplitSANs", "build_general_names"]
