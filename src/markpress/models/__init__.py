"""
Pydantic models for WordPress API records.
"""

from .base import ApiModel
from .wordpress import CustomField, WordPressPost, WordPressTag

__all__ = [
    "ApiModel",
    "CustomField",
    "WordPressPost",
    "WordPressTag",
]
