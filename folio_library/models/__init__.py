"""Domain models shared by the admin API and the synchronization core."""

from .content import CamelCaseModel
from .content import ImageFormat
from .content import ImageSettings
from .content import LayoutSettings
from .content import NavigationItem
from .content import Page
from .content import PageUpdate

__all__ = [
    "CamelCaseModel",
    "ImageFormat",
    "ImageSettings",
    "LayoutSettings",
    "NavigationItem",
    "Page",
    "PageUpdate",
]
