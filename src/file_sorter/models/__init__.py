"""Data models for file sorter."""

from .config import CategoryRule, SorterConfig

__all__ = ["CategoryRule", "SorterConfig"]
