import os

import pytest

# Qt widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from png_factory import GRADIENT_HEIGHT, GRADIENT_WIDTH, gradient_rgb_rows, make_png  # noqa: E402


@pytest.fixture(scope="session")
def gradient_rows():
    return gradient_rgb_rows(GRADIENT_WIDTH, GRADIENT_HEIGHT)


@pytest.fixture(scope="session")
def gradient_png(gradient_rows):
    """293x165 8-bit RGB image using every filter type, split over several IDAT chunks."""
    return make_png(
        GRADIENT_WIDTH, GRADIENT_HEIGHT, 8, 2, gradient_rows, filters=(0, 1, 2, 3, 4), idat_parts=4
    )


@pytest.fixture
def gradient_file(tmp_path, gradient_png):
    path = tmp_path / "gradient.png"
    path.write_bytes(gradient_png)
    return path
