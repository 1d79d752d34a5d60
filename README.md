# glyphatlas

Building blocks for laying out glyph atlases of signed distance field fonts.
The package packs glyph boxes into a texture and grows it as glyphs are added.
It keeps font metrics and kerning, parses character set descriptions and
writes atlas bitmaps to disk in raw and text formats.

## Installation

```
pip install glyphatlas
```

The tests need the `test` extra:

```
pip install "glyphatlas[test]"
pytest
```

## Modules

- `glyphatlas.charset`: `Charset`, a set of Unicode codepoints. Iteration
  yields them in ascending order. `Charset.ascii()` returns the 95 printable
  ASCII characters. `parse()` reads a description from a string and `load()`
  reads one from a file. The syntax has decimal and hexadecimal numbers (`65`,
  `0x41`), character literals (`'A'`), strings (`"abc"`) and ranges
  (`[0x20, 0x7e]` or `['a', 'z']`). Escapes `\n \r \t \s \0` are allowed, and
  files may use `@include "other.txt"`. Malformed input raises `CharsetError`.
  Codepoints read before the error stay in the set. `load()` raises `OSError`
  when the file cannot be read. A failed include is skipped. `parse()` ignores
  includes.
- `glyphatlas.rectangle`: `Point`, `Rectangle`, `OrientedRectangle` and
  `Remap`, which records how one part of an atlas moved.
- `glyphatlas.rectangle_packer`: `RectanglePacker`, a guillotine single-bin
  packer. `pack()` sets the positions of `Rectangle`s. `pack_oriented()` may
  also rotate `OrientedRectangle`s. Both return the number that did not fit.
  `expand()` enlarges the bin.
- `glyphatlas.geometry`: `Range`, `Bounds` and `Padding`, plus `pad()`, which
  grows bounds by a padding.
- `glyphatlas.glyph_geometry`: `GlyphGeometry`, `GlyphAttributes` and
  `GlyphIdentifierType`.
  - `wrap_box()` sizes a glyph's box to fit its bounds at a given scale,
    distance range and padding.
  - `frame_box()` aligns the glyph inside a box of given dimensions.
  - `place_box()` and `set_box_rect()` set where the box sits in the atlas.
  - `quad_plane_bounds()` and `quad_atlas_bounds()` give the quad to render.
- `glyphatlas.font_geometry`: `FontGeometry` and `FontMetrics`.
  - `load_metrics()` derives the geometry scale from the em size. A
    non-positive em size counts as 2048 units.
  - `add_glyph()` and `add_kerning()` fill the font.
  - `glyph_by_index()` and `glyph_by_codepoint()` look glyphs up.
  - `advance_by_index()` and `advance_by_codepoint()` return advances with
    kerning applied, and raise `KeyError` for a missing glyph.
  - Several fonts can share one glyph storage list.
- `glyphatlas.dynamic_atlas`: `DynamicAtlas`, a square atlas that grows to
  powers of two as glyphs are added.
  - It hands the rendering work to a generator object with `generate()`,
    `resize()` and `rearrange()` methods.
  - `add()` returns `ChangeFlag` values that tell whether the atlas was
    resized or rearranged.
- `glyphatlas.workload`: `Workload`, which runs `worker(chunk, thread_no)`
  over numbered chunks on one or more threads. A worker that returns `False`
  stops the run.
- `glyphatlas.bitmap_blit`: `blit()` and `blit_section()` copy between numpy
  bitmaps with 1, 3 or 4 channels. They clip the copy to both bitmaps. Float
  pixels copied into `uint8` bitmaps are clamped to [0, 1] and quantized.
- `glyphatlas.image_save`: `save_image()` and `ImageFormat`. A `uint8`
  bitmap can be written as `TEXT` (hex bytes) or `BINARY`. A float bitmap can
  be written as `TEXT_FLOAT`, `BINARY_FLOAT` (little-endian) or
  `BINARY_FLOAT_BE`. Any other combination raises `ImageSaveError`.

## Example

```python
from glyphatlas.charset import Charset
from glyphatlas.rectangle import Rectangle
from glyphatlas.rectangle_packer import RectanglePacker

charset = Charset()
charset.parse("[0x41, 0x5a], 'a', \"xyz\"")
print(len(charset))  # 30

packer = RectanglePacker(64, 64)
rects = [Rectangle(0, 0, 16, 16) for _ in range(4)]
remaining = packer.pack(rects)  # 0 when every rectangle fits
```

## What the package does not do

- It does not read font files. The caller supplies glyph bounds, advances,
  font metrics and kerning values.
- It does not render distance fields.
- It has no command-line tool.
- `ImageFormat` lists PNG, BMP, TIFF, RGBA and FL32, but `save_image()`
  cannot write them and raises `ImageSaveError`.
- Apart from `DynamicAtlas`, there is no ready-made packer that chooses atlas
  dimensions and glyph scale for a fixed set of glyphs. That layout is built
  from `RectanglePacker` and `GlyphGeometry.wrap_box()`.