# gridview

`gridview` holds the logic behind a graphical front end for a terminal-style,
grid-based text editor. It has no dependencies outside the standard library.

## Modules

- `gridview.animation`: the easing functions (`ease_linear`, `ease_in_quad`,
  `ease_out_quad`, `ease_in_out_quad`, `ease_in_cubic`, `ease_out_cubic`,
  `ease_in_out_cubic`, `ease_in_expo`, `ease_out_expo`), plus `lerp`, `ease`,
  `ease_point` and an immutable `Point` with `length`, `normalized`, `dot` and
  `is_zero`.
- `gridview.settings`: `Settings` stores one setting group per type. `get`
  returns a copy and raises `KeyError` for a missing group. `Settings` also keeps
  named update and reader callbacks, which `handle_changed_notification` calls.
  A shared instance is available as `SETTINGS`.
- `gridview.values`: lenient parsers (`parse_f32`, `parse_u64`, `parse_u32`,
  `parse_i32`, `parse_str`, `parse_bool`). A parser logs an error and returns
  the current value when the incoming value has the wrong type.
- `gridview.window_settings`, `gridview.cursor_settings`: the `WindowSettings`,
  `KeyboardSettings` and `CursorSettings` dataclasses and their defaults.
- `gridview.geometry`: `parse_window_geometry` parses `<width>x<height>` and
  raises `GeometryError` on bad input. `save_window_geometry` and
  `load_last_window_settings` keep the last window state (`Maximized` or
  `Windowed`) in a JSON file under the editor's data directory, or at a path
  you give.
- `gridview.font_options`: `FontOptions.parse` reads `guifont` strings, and
  `points_to_pixels` converts font sizes.
- `gridview.keyboard`: `KeyboardManager` turns queued `KeyEvent`s and
  input-method text into key notation. It escapes special characters, adds
  modifier prefixes and handles dead keys.
- `gridview.mouse`: `MouseManager` turns pointer motion, button presses, line
  and pixel scrolling and touch gestures into `DragCommand`,
  `MouseButtonCommand` and `ScrollCommand` values.
- `gridview.blink`: `BlinkStatus` runs the cursor blink cycle from the
  cursor's `blinkwait`, `blinkon` and `blinkoff` timings.
- `gridview.cursor`, `gridview.cursor_vfx`: `CursorAnimator` moves four
  `Corner`s towards the cursor cell for each `CursorShape`. It can also run a
  `PointHighlight` or `ParticleTrail` effect chosen by `VfxMode`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

```python
from gridview.animation import Point, ease, ease_in_out_cubic, ease_point, ease_linear

ease(ease_in_out_cubic, 1.0, 0.0, 0.25)                  # 0.9375
ease_point(ease_linear, Point(0, 0), Point(1, 1), 1.0)   # Point(x=1.0, y=1.0)
```

```python
from gridview.font_options import FontOptions

options = FontOptions.parse("Fira_Code,Noto:h12:b")
options.primary_font()   # "Fira Code"
options.bold             # True
```

```python
from gridview.geometry import parse_window_geometry

parse_window_geometry("120x40")   # Dimensions(width=120, height=40)
parse_window_geometry("0x40")     # raises GeometryError
```

```python
from gridview.settings import SETTINGS
from gridview.window_settings import WindowSettings
from gridview.values import parse_bool

SETTINGS.set(WindowSettings(refresh_rate=120))
SETTINGS.get(WindowSettings).refresh_rate   # 120
parse_bool(False, 1)                        # True
```

```python
from gridview.keyboard import KeyboardManager, KeyEvent, KeyState

keyboard = KeyboardManager()
keyboard.set_modifiers(ctrl=True)
keyboard.queue_key_event(KeyEvent(state=KeyState.PRESSED, key="a", text="a"))
keyboard.flush()   # ["<C-a>"]
```

```python
from gridview.mouse import MouseManager, PointerContext

context = PointerContext(window_size=(800, 600), font_dimensions=(10, 20))
MouseManager().handle_line_scroll(0.0, 1.0, context)
# [ScrollCommand(direction="up", grid_id=0, position=(0, 0), modifier_string="")]
```

## What it does not do

`gridview` does not draw anything, open a window, load or shape fonts, or talk
to a running editor. You supply the events, window regions and timing, and you
handle the commands, keybindings and cursor positions it returns. The package
also has no command-line program, and it does not track whether an application
is running or what its exit code is.