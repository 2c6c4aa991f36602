"""Utility modules"""

from .batch import gather_in_order

__all__ = ["gather_in_order"]
