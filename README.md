# jbig2enc

Building blocks for encoding bi-level (1 bit per pixel) images in the JBIG2
format, written in pure Python with no third-party dependencies.

## Modules

### `jbig2enc.state_table`

`STATE_TABLE` is the QM-coder probability estimation table: a tuple of 92
frozen `StateEntry(qe, mps, lps)` records, states 0–45 for MPS = 0 and
states 46–91 for MPS = 1.

### `jbig2enc.arith`

`ArithEncoder` is the JBIG2 arithmetic (QM) coder.

- `encode_bit(context, ctx_num, d)` codes one bit `d` with the state held in
  `context[ctx_num]` (any mutable sequence of state indices, such as a
  `bytearray`) and updates that state.
- `encode_int(proc, value)` codes an integer with one of the integer
  procedures named by `IntProc` (`AI`, `DH`, `DS`, `DT`, `DW`, `EX`, `FS`, `IT`,
  `RDH`, `RDW`, `RDX`, `RDY`, `RI`); each procedure has its own 512-entry
  context. Values outside ±2,000,000,000 raise `ValueError`.
- `encode_oob(proc)` codes the out-of-band sentinel for a procedure.
- `encode_iaid(symcodelen, value)` codes a symbol ID in `symcodelen` bits
  (0 codes nothing; more than 31 bits, or a value that does not fit, raises
  `ValueError`).
- `encode_final()` terminates the stream; the output always ends with the
  bytes `0xFF 0xAC`.
- `to_bytes()` returns the output so far and `data_size()` its length.
- `reset()` clears the coder state and all contexts but keeps the output;
  `flush()` discards the output.

The encoder's `context` attribute is the 65,536-entry context array used for
image coding. `MAX_CTX`, `INT_CTX_COUNT` and `INT_CTX_SIZE` give the context
sizes.

### `jbig2enc.generic_region`

- `encode_bitimage(encoder, data, mx, my, duplicate_line_removal=False)`
  codes an `mx` × `my` packed image as a generic region with template 0 and
  the default adaptive pixels. With `duplicate_line_removal` true, each row
  first codes a typical-prediction (TPGD) flag in context `TPGD_CTX` and rows
  equal to the one above are skipped.
- `encode_refine(encoder, templ, tx, ty, target, mx, my, ox=0, oy=0)` codes
  `target` (`mx` × `my`) as a refinement of `templ` (`tx` × `ty`) with a
  13-pixel template, the template shifted by `ox` (−1, 0 or 1; anything else
  raises `ValueError`) and `oy`.

Both raise `ValueError` when the word sequences are too short for the given
sizes. Neither calls `encode_final`; do that once the region is complete.

### `jbig2enc.comparator`

`Bitmap(width, height)` is a small 1 bpp bitmap (1 is black) with
`get_pixel`, `set_pixel`, `set_all`, `xor`, `count_pixels`, a `wpl`
property (32-bit words per row) and equality. Pixel access outside the bitmap
raises `IndexError`.

`are_equivalent(first, second)` decides whether two symbol bitmaps look the
same. Bitmaps of different size are never equivalent, nor are those whose XOR
difference exceeds a quarter of the black pixels of `first`. Otherwise the
difference is spread over a 9 × 9 grid and rejected if it forms a horizontal,
vertical or diagonal line, or a concentrated blot. Because the thresholds
scale with the cell size, very small bitmaps (for example 9 × 9 or smaller)
are judged not equivalent even when identical.

### `jbig2enc.cli`

`parse_args(argv)` turns a list of command-line arguments (without the
program name) into an `Args` dataclass; malformed arguments raise `CliError`.
`Args.validate()` checks ranges and combinations and raises `CliError`:

- `-t` threshold must be within 0.4–0.97 and `-w` weight within 0.1–0.9,
- `-D` DPI, if given, within 1–9600,
- `-2` and `-4` cannot be combined,
- `-r` (refinement) is always rejected.

`Args.effective_bw_threshold()` returns `-T` if given, else 128 with `-G`,
else 200. `CliError.kind` is one of `CliError.Kind.INVALID_ARGS`, `IMAGE` or
`IO`.

## Image data layout

Images are passed as sequences of 32-bit words, row after row. Each row
occupies `ceil(width / 32)` words, pixels are packed most significant bit
first, `1` is black, and the padding bits at the end of each row must be zero.

## Example

```python
from jbig2enc.arith import ArithEncoder, IntProc
from jbig2enc.generic_region import encode_bitimage

# 8x2 image: a row of alternating pixels, then a blank row
rows = [0xAA00_0000, 0x0000_0000]

encoder = ArithEncoder()
encode_bitimage(encoder, rows, 8, 2, True)
encoder.encode_final()
region_data = encoder.to_bytes()
assert region_data.endswith(b"\xff\xac")

# Integers share one encoder; each procedure keeps its own contexts
ints = ArithEncoder()
ints.encode_int(IntProc.DH, 19)
ints.encode_oob(IntProc.FS)
ints.encode_final()
print(len(ints.to_bytes()), ints.data_size())
```

```python
from jbig2enc.comparator import Bitmap, are_equivalent

a = Bitmap(36, 36)
a.set_all(1)
b = Bitmap(36, 36)
b.set_all(1)
b.set_pixel(5, 5, 0)
print(are_equivalent(a, b))  # True: a single stray pixel
```

```python
from jbig2enc.cli import parse_args

args = parse_args(["-s", "-t", "0.85", "page.png"])
args.validate()
print(args.effective_bw_threshold())  # 200
```

## What this package does not do

- It installs no command. `jbig2enc.cli` only parses and checks options; it
  does not read images or write files.
- It does not load, threshold, upsample or segment images; callers supply
  packed 1 bpp word data or `Bitmap` objects.
- It does not build JBIG2 files or PDF streams: there is no file header,
  segment header, page information, symbol dictionary or text region writer,
  and no symbol classification across pages. The output is the raw
  arithmetic-coded data of a region.