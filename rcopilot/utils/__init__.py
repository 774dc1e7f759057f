"""Small text helpers shared by the research components and CLIs."""

from .text import contains_any, matching_keywords, split_fields, unique_by

__all__ = ["contains_any", "matching_keywords", "split_fields", "unique_by"]
