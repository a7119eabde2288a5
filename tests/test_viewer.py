"""Smoke tests for the main window (offscreen Qt platform)."""

import pytest
from PySide6.QtWidgets import QApplication

from PngViewer.core.image_io import load_png
from PngViewer.ui.viewer import loader as loader_module
from PngViewer.ui.viewer import viewer as viewer_module
from PngViewer.ui.viewer.loader import DecodeTask
from PngViewer.ui.viewer.state import Empty, Loaded, Loading, begin_loading


@pytest.fixture(scope="module")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def viewer(qapp):
    w = viewer_module.ImageViewer()
    yield w
    w.close()


def test_starts_empty(viewer):
    assert isinstance(viewer.state, Empty)
    assert not viewer.has_image()
    assert viewer.image_label.placeholder == viewer.state.placeholder
    assert viewer.width() == 700
    assert viewer.minimumWidth() == 200


def test_decoded_image_is_shown(viewer, gradient_file):
    path = str(gradient_file)
    arr, header = load_png(path)
    viewer.set_state(begin_loading(viewer.state, path))
    assert isinstance(viewer.state, Loading)
    viewer._on_decode_finished(path, arr, header)

    assert isinstance(viewer.state, Loaded)
    assert viewer.has_image()
    assert viewer.image_label.width() == header.width
    assert viewer.windowTitle().startswith("gradient.png")

    assert viewer.zoom_in()
    assert viewer.image_label.width() == int(header.width * 1.5)
    viewer.zoom_toggle()
    assert viewer.scale == 4.0

    viewer.close_current_image()
    assert isinstance(viewer.state, Empty)


def test_failed_load_keeps_previous_image(viewer, gradient_file, monkeypatch):
    shown = []
    monkeypatch.setattr(viewer, "_show_load_error", lambda path, msg: shown.append(msg))
    path = str(gradient_file)
    arr, header = load_png(path)
    viewer.set_state(begin_loading(viewer.state, path))
    viewer._on_decode_finished(path, arr, header)
    loaded = viewer.state

    viewer.set_state(begin_loading(viewer.state, "other.png"))
    viewer._on_decode_failed("other.png", "missing or corrupt PNG signature")
    assert viewer.state is loaded
    assert shown == ["missing or corrupt PNG signature"]


def _run_task(path):
    finished, failed = [], []
    task = DecodeTask(str(path))
    task.signals.finished.connect(lambda *args: finished.append(args))
    task.signals.failed.connect(lambda *args: failed.append(args))
    task.run()
    return finished, failed


def test_decode_task_reports_success(qapp, gradient_file):
    finished, failed = _run_task(gradient_file)
    assert failed == []
    ((path, arr, header),) = finished
    assert path == str(gradient_file)
    assert arr.shape == (header.height, header.width, 4)


def test_decode_task_reports_png_errors(qapp, tmp_path):
    bad = tmp_path / "bad.png"
    bad.write_bytes(b"not a png")
    finished, failed = _run_task(bad)
    assert finished == []
    ((path, message),) = failed
    assert path == str(bad)
    assert "signature" in message


def test_decode_task_reports_out_of_memory(qapp, gradient_file, monkeypatch):
    def exhausted(path):
        raise MemoryError()

    monkeypatch.setattr(loader_module, "load_png", exhausted)
    finished, failed = _run_task(gradient_file)
    assert finished == []
    ((_, message),) = failed
    assert "memory" in message
