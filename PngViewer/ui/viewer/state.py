"""Viewer state as a closed set of cases.

The viewer is always in exactly one of three states:

- ``Empty``: nothing loaded yet; a placeholder glyph is shown.
- ``Loading``: a decode is running in the background. The state that was
  on screen before is kept in ``previous`` so it can be restored.
- ``Loaded``: a decoded image is shown.

Transitions are plain functions returning the next state. A failed load
returns to the state that was shown before loading started, so a partially
decoded image is never displayed.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Union

import numpy as np

from ...core.chunks import Header
from ...core.constants import PLACEHOLDER_GLYPHS


@dataclass(frozen=True)
class Empty:
    placeholder: str


@dataclass(frozen=True)
class Loading:
    path: str
    previous: Union[Empty, Loaded]


@dataclass(frozen=True, eq=False)
class Loaded:
    path: str
    array: np.ndarray
    header: Header


ViewerState = Union[Empty, Loading, Loaded]


def initial_state(rng: random.Random | None = None) -> Empty:
    """Return an Empty state with a random placeholder glyph."""
    rng = rng or random
    return Empty(rng.choice(PLACEHOLDER_GLYPHS))


def begin_loading(state: ViewerState, path: str) -> Loading:
    """Start loading ``path``.

    A load started while another is running replaces it; the state to fall
    back to stays the one shown before the first load began.
    """
    match state:
        case Empty() | Loaded():
            return Loading(path, state)
        case Loading(previous=previous):
            return Loading(path, previous)
        case _:
            raise TypeError(f"unhandled viewer state: {state!r}")


def finish_loading(state: ViewerState, path: str, array: np.ndarray, header: Header) -> ViewerState:
    """Apply a finished decode. Results for a superseded load are ignored."""
    match state:
        case Loading(path=loading_path) if loading_path == path:
            return Loaded(path, array, header)
        case Loading() | Empty() | Loaded():
            return state
        case _:
            raise TypeError(f"unhandled viewer state: {state!r}")


def fail_loading(state: ViewerState, path: str) -> ViewerState:
    """Apply a failed decode: go back to what was shown before loading."""
    match state:
        case Loading(path=loading_path, previous=previous) if loading_path == path:
            return previous
        case Loading() | Empty() | Loaded():
            return state
        case _:
            raise TypeError(f"unhandled viewer state: {state!r}")


def close_image(state: ViewerState, rng: random.Random | None = None) -> ViewerState:
    """Drop the shown image and return to a fresh placeholder."""
    match state:
        case Loaded():
            return initial_state(rng)
        case Empty() | Loading():
            return state
        case _:
            raise TypeError(f"unhandled viewer state: {state!r}")


def displayed(state: ViewerState) -> Union[Empty, Loaded]:
    """Return the state whose content is on screen."""
    match state:
        case Empty() | Loaded():
            return state
        case Loading(previous=previous):
            return previous
        case _:
            raise TypeError(f"unhandled viewer state: {state!r}")
