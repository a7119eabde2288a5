"""Dialogs package."""

from .help_dialog import HelpDialog
from .info_dialog import InfoDialog

__all__ = ["HelpDialog", "InfoDialog"]
