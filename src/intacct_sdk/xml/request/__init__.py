"""Request content blocks."""

from .content import Content, ContentBlock, ReadView, ReadRelated, ReadMore

__all__ = [
    "Content",
    "ContentBlock",
    "ReadView",
    "ReadRelated",
    "ReadMore",
]
