# nanoffmpeg

Building blocks for a keyboard-driven terminal front-end to ffmpeg: themed
text styling, a frame with breadcrumb and key hints, help overlays, and the
screens that take a user from choosing an operation to a ready-to-run set of
ffmpeg command lines.

## Modules

- `nanoffmpeg.ui.style` — `Style`, an immutable text style (`bold`,
  `foreground`, `background`, `width`, `padding`, `padding_left`,
  `padding_right`, `border`, `border_foreground`, `render`), `Border` with the
  `ROUNDED` glyph set, and the helpers `visible_width`, `height`, `strip_ansi`
  and `join_vertical`. Colours are `#RRGGBB` strings; colour codes are only
  emitted when stdout is a terminal (or `CLICOLOR_FORCE` is set) and never
  when `NO_COLOR` is set.
- `nanoffmpeg.ui.theme` — the dark and light `Palette`s and the shared
  `Styles`. Use `set_theme`, `current_theme`, `normalize_theme`,
  `is_valid_theme`, `palette()` and `styles()`. Unknown theme names fall back
  to `"dark"`.
- `nanoffmpeg.ui.frame` — `Frame(width, height).render(breadcrumb,
  status_line, content, key_hints)` surrounds content with a top bar, an
  optional status line and a bottom bar of `KeyHint`s, padding or cutting the
  content so the result is exactly the frame's height.
- `nanoffmpeg.ui.help` — `help_overlay(sections, width, height)` draws
  `HelpSection`s of `HelpEntry`s in a centred rounded box; `home_help`,
  `file_picker_help`, `operations_help`, `settings_help` and `progress_help`
  return the catalogue for each screen.
- `nanoffmpeg.ui.responsive` — `check_terminal_size` returns a warning below
  80x24 (an empty string otherwise); `content_width` gives the usable width.
- `nanoffmpeg.screens.messages` — `ScreenID`, `NavigateMsg`, `StatusMsg`,
  `BackMsg`, `QuitMsg`, `KeyMsg`, `WindowSizeMsg` and the abstract `Screen`.
- `nanoffmpeg.screens.operations` — `OperationID`, `Operation`,
  `ALL_OPERATIONS`, `OperationSelectedMsg` and `OperationsScreen`.
- `nanoffmpeg.screens.home` — `HomeScreen(info, caps, recent_files)`, showing
  the ffmpeg version and capability counts, up to five recent files and the
  operation list.
- `nanoffmpeg.screens.filepicker` — `FilePicker(ffprobe_path, start_dir,
  prober)`, a directory browser (directories first, hidden entries left out)
  with a typed-path mode; plus `is_media_file`, `format_size` and `parse_fps`.
- `nanoffmpeg.screens.settings_fields` — `FieldType`, `Option`, `Field`
  (select, text and toggle fields with cursor editing), `fields_for(op_id,
  probe)` and `clamp_cursor`.
- `nanoffmpeg.screens.settings` — `SettingsScreen(op_id, op_name, file_path,
  probe, ffmpeg_path, filter_checker)`, the option form for one operation,
  and helpers such as `operation_slug`, `overlay_position`,
  `escape_subtitles_path`, `clamp_fade_out_start`, `format_ffmpeg_seconds`,
  `has_ffmpeg_filter` and `parse_int`.
- `nanoffmpeg.screens.result` — `ResultScreen(output_path, input_size)`,
  showing the output path and the size change, and `open_url`.

Every screen has the same interface: `init()`, `update(msg)`, `view()`,
`breadcrumb()` and `key_hints()`. `update` returns the screen together with
an optional command — a callable that produces the next message when called.

## Example

```python
from nanoffmpeg.ui.frame import Frame
from nanoffmpeg.ui.theme import set_theme
from nanoffmpeg.screens.operations import OperationsScreen
from nanoffmpeg.screens.messages import KeyMsg

set_theme("light")

screen = OperationsScreen()
screen, _ = screen.update(KeyMsg("down"))
screen, command = screen.update(KeyMsg("enter"))
selected = command()          # OperationSelectedMsg for "Extract Audio"

frame = Frame(80, 24)
print(frame.render(screen.breadcrumb(), "", screen.view(), screen.key_hints()))
```

## Building ffmpeg commands

`SettingsScreen` fills its form from `fields_for` and, on Enter, returns a
command producing an `ExecuteMsg` whose `commands` are the ffmpeg invocations
to run in order. Each has `build()` (the argument list without the binary)
and a shell-quoted string form, which the screen shows as a preview. Output
files are named next to the input, for example `clip_convert_format.mp4`.

- Merge writes a `.nano-ffmpeg-merge.ffconcat` list of the sibling files that
  share the input's extension and uses it as the input.
- Stabilisation uses a two-pass vidstab pipeline when `filter_checker`
  (by default `has_ffmpeg_filter`, which runs `ffmpeg -filters`) reports both
  vidstab filters, and a single `deshake` pass otherwise, with a notice on
  the form.
- The fade-out of the audio fade starts two seconds before the probed
  duration, never below zero.

## What this package does not do

It is a library of screens and helpers, not a finished program:

- there is no command to start and no loop that reads keys from the terminal
  and dispatches messages between screens;
- it does not run ffmpeg or show encoding progress; `ExecuteMsg` is handed
  to the caller;
- it does not probe media files or query ffmpeg's version and capabilities
  itself: `FilePicker` takes a `prober` callable, and `HomeScreen` and
  `SettingsScreen` take objects the caller has filled in.

## Requirements

Python 3.10 or later and `wcwidth`. Install the `test` extra for pytest.