from .content_element import ContentElement
from .page import Page

__all__ = [
    "ContentElement",
    "Page",
]
