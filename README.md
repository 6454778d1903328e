# haribote

This package holds the parts of a small 32-bit hobby operating system as
plain Python objects. No hardware or emulator is needed. Each part works
on ordinary Python data such as integers, `bytes` and `bytearray`, so you
can drive it, inspect it and test it directly.

## Contents

| Module | What it provides |
| --- | --- |
| `haribote.fifo` | `Fifo32`, a bounded integer FIFO. `put` raises `FifoOverrun` when the FIFO is full, and `get` raises `IndexError` when it is empty. An optional `wake` callback runs after each `put`. |
| `haribote.mtask` | `TaskController`, a multi-level round-robin scheduler, with `Task` and `TaskState`. It starts a main task on level 0 and an idle task on the last level. |
| `haribote.timer` | `TimerController` and `Timer`. Timers are one-shot and kept in timeout order. `tick()` delivers each expired timer's data into its FIFO. |
| `haribote.mouse` | `MouseDecoder`, which decodes three-byte PS/2 packets into `btn`, `x` and `y`. |
| `haribote.descriptors` | `segment_descriptor` and `gate_descriptor`. Each returns a descriptor whose `to_bytes()` gives the eight table bytes. |
| `haribote.fat` | FAT12 image reading: `read_fat`, `parse_directory`, `search_file`, `load_file` and `FileInfo`. |
| `haribote.graphic` | 8-bit palettised drawing: `palette`, `Color`, `boxfill8`, `init_screen8`, `putfont8`, `putblock8_8`, `mouse_cursor8`, and `TextRenderer` for ASCII, Shift-JIS and EUC-JP text. |
| `haribote.sheet` | `SheetController` and `Sheet`, stacked layers with a per-pixel ownership map. They support `updown`, `slide`, `refresh` and `free`. |
| `haribote.window` | Drawing into sheets: window frames, title bars, text boxes, active and inactive title recolouring, and text on a background. |
| `haribote.console` | `Console`, a 30×8 character console with tab, newline, scrolling and `cls`. Also `classify_command`/`CommandKind`, `format_mem`, `format_dir`, `draw_line` and `FileHandle` (seek, query, read). |
| `haribote.jpeg` | `jpeg_info` and `decode_jpeg`, a baseline DCT JPEG decoder that produces 32-bit BGRX or 16-bit 5-6-5 pixels. |
| `haribote.gview` | `rgb2pal` and `dither_image`, which map RGB onto the 6×6×6 colour cube with 2×2 ordered dithering. Also `window_size`. |
| `haribote.calc` | `evaluate` and `CalcError`, a 32-bit integer expression evaluator, and the `haribote-calc` command. |
| `haribote.invader` | `InvaderGame`, the invader shooting game as a frame-by-frame model. `step()` advances the game and `render()` gives 14 text lines. Also `setdec8`. |
| `haribote.demos` | The data behind small demo programs: `bball_segments`, `color_gradient`, `beep_frequencies`, `lang_message` and `line_segments`. |
| `haribote.keymap` | `key_to_char` and `KeyboardState`. They translate scan codes and track shift, lock keys and pending LED commands. |

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## The calculator

The package installs one command, `haribote-calc`. It joins its arguments
into one expression and evaluates it with 32-bit signed arithmetic. It
supports these operators, with C-like precedence:

- `+ - * / % << >> & ^ |`
- unary `+ - ~`
- parentheses

Numbers may be decimal, octal (leading `0`) or hexadecimal (`0x`).

```
haribote-calc "(1 + 2) * 3"
= 9 = 0x9
```

Some expressions cannot be evaluated: a syntax error, division or modulo by
zero, or a shift by zero. For these the command prints `error!` and exits
with status 1.

From Python:

```python
from haribote.calc import evaluate, CalcError

evaluate("(1 + 2) * 3")      # 9
try:
    evaluate("1 / 0")
except CalcError:
    ...
```

## Small examples

Colour mapping with ordered dithering:

```python
from haribote.gview import rgb2pal

rgb2pal(0, 0, 0, 0, 0)         # 16, black in the colour cube
rgb2pal(255, 255, 255, 0, 0)   # 231, white in the colour cube
```

Eight-digit score formatting:

```python
from haribote.invader import setdec8

setdec8(123)                   # "00000123"
```

Reading a file out of a FAT12 floppy image:

```python
from pathlib import Path

from haribote.fat import load_file, parse_directory, read_fat, search_file

image = Path("disk.img").read_bytes()
fat = read_fat(image[0x200:])
entries = parse_directory(image[0x2600:], 224)
info = search_file("readme.txt", entries)
if info is not None:
    data = load_file(info.clustno, info.size, fat, image[0x3E00:])
```

## What the package does not do

The package does not boot and does not run as an operating system. It has:

- no interrupt handling, port I/O or other hardware access;
- no memory manager;
- no loader for application binaries.

There is no event loop that ties the parts into a desktop. For example,
`KeyboardState.feed` reports an action such as `"new_console"`, but nothing
here acts on it.

`classify_command` works out what a console command line asks for, but
the package does not run commands or applications.

The picture helpers decode JPEG only; there is no BMP decoder.

No fonts are bundled. `TextRenderer` needs a 4096-byte half-width font from
the caller, and optionally a full-width font.