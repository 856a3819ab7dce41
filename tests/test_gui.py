from pathlib import Path
from types import SimpleNamespace
from unittest import mock

import pytest
from PIL import Image

from squaresnap.files import FileManager
from squaresnap.gui import MainWindow, RegionSelector, preview_size, square_size
from squaresnap.settings import (
    APP_NAME,
    DEFAULT_WINDOW_SIZE,
    PREVIEW_WINDOW_PADDING,
    SAVE_PATH_KEY,
    Settings,
)
from squaresnap.theme import ThemeManager


@pytest.fixture
def tk_mocks():
    with mock.patch("squaresnap.gui.tk") as tk_mock, \
            mock.patch("squaresnap.gui.ttk") as ttk_mock, \
            mock.patch("squaresnap.gui.ImageTk") as imagetk_mock, \
            mock.patch("squaresnap.gui.ImageGrab") as grab_mock, \
            mock.patch("squaresnap.gui.messagebox") as messagebox_mock, \
            mock.patch("squaresnap.gui.webbrowser") as browser_mock:
        yield SimpleNamespace(
            tk=tk_mock,
            ttk=ttk_mock,
            imagetk=imagetk_mock,
            grab=grab_mock,
            messagebox=messagebox_mock,
            browser=browser_mock,
        )


@pytest.fixture
def window(tk_mocks, tmp_path):
    settings = Settings(tmp_path / "settings.json")
    settings.set(SAVE_PATH_KEY, str(tmp_path / "shots"))
    root = tk_mocks.tk.Tk()
    return MainWindow(root, FileManager(settings), ThemeManager(settings))


def _bindings(widget_mock):
    return {call.args[0]: call.args[1] for call in widget_mock.bind.call_args_list}


def _event(x, y):
    return SimpleNamespace(x=x, y=y, num=1)


def test_square_size_is_shorter_side():
    assert square_size(400, 300) == 300
    assert square_size(250, 700) == 250
    assert square_size(123, 456) == square_size(456, 123)


def test_preview_size_default_window():
    assert preview_size(DEFAULT_WINDOW_SIZE, DEFAULT_WINDOW_SIZE, PREVIEW_WINDOW_PADDING) == (360, 360)


def test_preview_size_is_square_and_without_padding_fills_window():
    width, height = preview_size(500, 320, 0)
    assert width == height == square_size(500, 320)


def test_initial_status_ready(window, tk_mocks):
    assert window.status == "Ready"
    window.root.title.assert_called_with(APP_NAME)


def test_selection_cancelled_status(window):
    window.on_selection_cancelled()
    assert window.status == "Capture cancelled"


def test_region_selected_none_reports_failure(window):
    window.on_region_selected(None)
    assert window.status == "Capture failed"
    assert window.current_image is None


def test_save_without_image(window):
    assert window.save_current() is None
    assert window.status == "No image to save"


def test_cancel_current_clears_image(window):
    window.current_image = Image.new("RGB", (20, 20))
    window.cancel_current()
    assert window.current_image is None
    assert window.status == "Ready"


def test_save_current_writes_file(window, tk_mocks):
    tk_mocks.messagebox.askyesno.return_value = False
    window.current_image = Image.new("RGB", (30, 30), "red")
    saved = window.save_current()
    assert saved.exists()
    assert saved.parent == window.file_manager.save_path
    assert window.status == f"Image saved to: {saved.name}"
    tk_mocks.browser.open.assert_not_called()


def test_save_current_opens_when_asked(window, tk_mocks):
    tk_mocks.messagebox.askyesno.return_value = True
    window.current_image = Image.new("RGB", (30, 30), "blue")
    saved = window.save_current()
    tk_mocks.browser.open.assert_called_once_with(saved.resolve().as_uri())


def test_save_current_failure(window, tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x")
    window.on_save_path_changed(str(blocker))
    window.current_image = Image.new("RGB", (30, 30))
    assert window.save_current() is None
    assert window.status == "Failed to save image"


def test_save_path_changed(window, tmp_path):
    target = tmp_path / "elsewhere"
    window.on_save_path_changed(str(target))
    assert window.file_manager.save_path == target
    assert target.is_dir()
    assert window.status == "Save path updated"


def test_empty_save_path_ignored(window):
    before = window.file_manager.save_path
    window.on_save_path_changed("")
    assert window.file_manager.save_path == before
    assert window.status == "Ready"


def test_dark_mode_changed(window):
    window.on_dark_mode_changed(False)
    assert window.theme_manager.dark_mode is False
    window.on_dark_mode_changed(True)
    assert window.theme_manager.dark_mode is True


def test_window_kept_square(window):
    handler = _bindings(window.root)["<Configure>"]
    handler(SimpleNamespace(widget=window.root, width=400, height=300))
    window.root.geometry.assert_called_with("300x300")


def test_preview_save_shortcut_saves(window, tk_mocks):
    top = tk_mocks.tk.Toplevel.return_value
    tk_mocks.messagebox.askyesno.return_value = False

    def press_save():
        _bindings(top)["<Control-s>"](None)

    top.wait_window.side_effect = press_save
    window.on_region_selected(Image.new("RGB", (40, 40), "green"))
    top.title.assert_any_call(f"{APP_NAME} - Preview")
    saved = list(Path(window.file_manager.save_path).iterdir())
    assert len(saved) == 1
    assert window.status == f"Image saved to: {saved[0].name}"


def test_preview_escape_discards(window, tk_mocks):
    top = tk_mocks.tk.Toplevel.return_value
    top.wait_window.side_effect = lambda: _bindings(top)["<Escape>"](None)
    window.on_region_selected(Image.new("RGB", (40, 40)))
    assert window.current_image is None
    assert window.status == "Ready"


def test_capture_status_and_overlay(window, tk_mocks):
    tk_mocks.grab.grab.return_value = Image.new("RGB", (100, 80))
    window.capture()
    assert window.status == "Select a square region..."
    tk_mocks.tk.Toplevel.assert_called_once()


def test_grab_failure_shows_no_overlay(tk_mocks):
    tk_mocks.grab.grab.side_effect = OSError("no display")
    cancelled = mock.Mock()
    selector = RegionSelector(mock.Mock(), mock.Mock(), cancelled)
    selector.start()
    tk_mocks.tk.Toplevel.assert_not_called()
    cancelled.assert_not_called()


def test_drag_delivers_square_crop(tk_mocks):
    shot = Image.new("RGB", (200, 150), "navy")
    shot.paste((255, 165, 0), (10, 10, 200, 150))
    tk_mocks.grab.grab.return_value = shot
    received = []
    selector = RegionSelector(mock.Mock(), received.append, mock.Mock())
    selector.start()

    handlers = _bindings(tk_mocks.tk.Canvas.return_value)
    handlers["<ButtonPress-1>"](_event(10, 10))
    handlers["<B1-Motion>"](_event(60, 40))
    handlers["<ButtonRelease-1>"](_event(60, 40))

    assert len(received) == 1
    width, height = received[0].size
    assert width == height
    assert width > 10
    assert received[0].getcolors() == [(width * height, shot.getpixel((10, 10)))]
    tk_mocks.tk.Toplevel.return_value.destroy.assert_called()


def test_small_drag_selects_nothing(tk_mocks):
    tk_mocks.grab.grab.return_value = Image.new("RGB", (100, 100))
    received = []
    selector = RegionSelector(mock.Mock(), received.append, mock.Mock())
    selector.start()
    handlers = _bindings(tk_mocks.tk.Canvas.return_value)
    handlers["<ButtonPress-1>"](_event(5, 5))
    handlers["<ButtonRelease-1>"](_event(8, 8))
    assert received == []


def test_escape_cancels_selection(tk_mocks):
    tk_mocks.grab.grab.return_value = Image.new("RGB", (100, 100))
    cancelled = mock.Mock()
    selected = mock.Mock()
    selector = RegionSelector(mock.Mock(), selected, cancelled)
    selector.start()
    _bindings(tk_mocks.tk.Toplevel.return_value)["<Escape>"](None)
    cancelled.assert_called_once_with()
    selected.assert_not_called()