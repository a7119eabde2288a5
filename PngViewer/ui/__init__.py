"""UI components package."""

from .viewer import ImageViewer
from .widgets import ImageLabel
from .dialogs import HelpDialog, InfoDialog

__all__ = [
    "ImageViewer",
    "ImageLabel",
    "HelpDialog",
    "InfoDialog",
]
