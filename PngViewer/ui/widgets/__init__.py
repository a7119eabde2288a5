"""Reusable widgets."""

from .image_label import ImageLabel

__all__ = ["ImageLabel"]
