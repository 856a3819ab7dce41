# squaresnap

A small desktop tool that captures **square** screenshots.

Press *Take Screenshot* (or `Ctrl+N`) and the screen is grabbed and shown
dimmed in a full-screen overlay. Drag with the left mouse button: the
selection is the rectangle between the two corners, shrunk to a square of its
shorter side and kept at its top-left corner. Its size (`W x H`) is shown next
to it while you drag. Selections of 10 pixels or less are ignored. Press `Esc`
to cancel.

After you release the mouse, a preview window opens. Choose **Save** (or
`Ctrl+S` / `Enter`) to write the image, or **Cancel** (or `Esc`) to discard it.
Once saved, you are asked whether to open the image; if you say yes, it is
shown in a simple viewer window.

## Installing and running

```
pip install .
squaresnap
```

Options:

- `--settings FILE` uses the given settings file instead of the per-user one.
- `--version` prints the version and exits.

The window uses Tk (`tkinter`), which ships with most Python installations but
is not installed by pip. Pillow is used to grab the screen and to write the
images.

## Where images go

Images are saved as PNG files in `~/Pictures/SquareSnap` by default. File
names hold the date and a running number for that day:

```
SquareSnap-20240131001.png
SquareSnap-20240131002.png
```

The number continues from the highest number already in the folder for that
date.

## Settings

*File → Settings* (`Ctrl+P`) lets you choose a different save folder and turn
dark mode on or off. Dark mode is on by default. Both choices are kept in a
JSON file (`settings.json`) in your user configuration directory and are
reused the next time the program starts.

Other shortcuts: `Ctrl+Q` quits. *Help → About* shows the version.

## Using it from Python

```python
from squaresnap.settings import Settings, default_settings_path
from squaresnap.files import FileManager
from squaresnap.selection import Rect, RegionSelection, square_rect, crop
from squaresnap.theme import ThemeManager

settings = Settings(default_settings_path())
files = FileManager(settings)
print(files.save_path)              # e.g. /home/me/Pictures/SquareSnap
print(files.generate_file_name())   # e.g. SquareSnap-20240131001.png

square = square_rect(Rect.from_points((10, 10), (200, 120)))
# square is 111 x 111, anchored at (10, 10)

drag = RegionSelection()
drag.press(0, 0)
drag.move(50, 80)
rect = drag.release(50, 80)         # Rect(0, 0, 51, 51), or None if too small

theme = ThemeManager(settings)
theme.toggle_theme()                # switches and stores the dark-mode choice
```

`FileManager.save_image(image)` writes a Pillow image under the next free name
and returns its path; it raises `OSError` if the folder cannot be created or
the file cannot be written. `crop(image, rect)` returns the part of a Pillow
image under a rectangle, or `None` for an empty one.

## What it does not do

- There is no command-line capture: taking a screenshot always goes through
  the window and the overlay.
- Saved images are shown in the program's own viewer window; they are not
  handed to another application.
- The light theme uses Tk's default colours; no style sheets are loaded.