"""Generic and refinement region bitmap coding on top of the arithmetic coder."""

from __future__ import annotations

from typing import Sequence

from .arith import ArithEncoder

__all__ = ["encode_bitimage", "encode_refine", "TPGD_CTX"]

TPGD_CTX = 0x9B25
"""Context number used for the typical-prediction (TPGD) flag bit."""

_MASK32 = 0xFFFFFFFF


def _words_per_row(width: int) -> int:
    return (width + 31) // 32


def encode_bitimage(
    encoder: ArithEncoder,
    data: Sequence[int],
    mx: int,
    my: int,
    duplicate_line_removal: bool = False,
) -> None:
    """Encode a packed 1 bpp image with generic template 0 and default AT pixels.

    ``data`` holds 32-bit words, most significant bit first, each row padded
    to a whole number of words with zero bits.
    """
    wpr = _words_per_row(mx)
    words = tuple(word & _MASK32 for word in data)
    if len(words) < wpr * my:
        raise ValueError(
            f"image of {mx}x{my} needs {wpr * my} words, got {len(words)}"
        )

    ctx = encoder.context
    encode = encoder.encode_bit
    ltp = 0
    sltp = 0

    for y in range(my):
        row = y * wpr
        w1 = words[row - 2 * wpr] if y >= 2 else 0
        w2 = words[row - wpr] if y >= 1 else 0

        if duplicate_line_removal:
            if y >= 1:
                if words[row:row + wpr] == words[row - wpr:row]:
                    sltp = ltp ^ 1
                    ltp = 1
                else:
                    sltp = ltp
                    ltp = 0
            encode(ctx, TPGD_CTX, sltp)
            if ltp:
                continue

        w3 = words[row]
        c1 = w1 >> 29
        c2 = w2 >> 28
        c3 = 0
        w1 = (w1 << 3) & _MASK32
        w2 = (w2 << 4) & _MASK32

        for x in range(mx):
            tval = (c1 << 11) | (c2 << 4) | c3
            v = (w3 >> 31) & 1
            encode(ctx, tval, v)

            c1 = (c1 << 1) | (w1 >> 31)
            c2 = (c2 << 1) | (w2 >> 31)
            c3 = (c3 << 1) | v

            m = x % 32
            wordno = x // 32 + 1

            if m == 28 and y >= 2:
                w1 = words[row - 2 * wpr + wordno] if wordno < wpr else 0
            else:
                w1 = (w1 << 1) & _MASK32

            if m == 27 and y >= 1:
                w2 = words[row - wpr + wordno] if wordno < wpr else 0
            else:
                w2 = (w2 << 1) & _MASK32

            if m == 31:
                w3 = words[row + wordno] if wordno < wpr else 0
            else:
                w3 = (w3 << 1) & _MASK32

            c1 &= 0x1F
            c2 &= 0x7F
            c3 &= 0x0F


def encode_refine(
    encoder: ArithEncoder,
    templ: Sequence[int],
    tx: int,
    ty: int,
    target: Sequence[int],
    mx: int,
    my: int,
    ox: int = 0,
    oy: int = 0,
) -> None:
    """Encode ``target`` as a refinement of ``templ`` with a 13-pixel template.

    ``ox`` is the horizontal offset of the template and must be -1, 0 or 1.
    """
    if ox not in (-1, 0, 1):
        raise ValueError(f"ox must be -1, 0 or 1, got {ox}")

    twpr = _words_per_row(tx)
    wpr = _words_per_row(mx)
    tmpl_words = tuple(word & _MASK32 for word in templ)
    target_words = tuple(word & _MASK32 for word in target)
    if len(tmpl_words) < twpr * ty:
        raise ValueError(
            f"template of {tx}x{ty} needs {twpr * ty} words, got {len(tmpl_words)}"
        )
    if len(target_words) < wpr * my:
        raise ValueError(
            f"target of {mx}x{my} needs {wpr * my} words, got {len(target_words)}"
        )

    def templ_word(trow: int, wordno: int) -> int:
        if 0 <= trow < ty and wordno < twpr:
            return tmpl_words[trow * twpr + wordno]
        return 0

    ctx = encoder.context
    encode = encoder.encode_bit
    shiftoffset = 30 + ox
    bits_to_trim = 2 - ox
    reload_at = 29 + ox

    for y in range(my):
        temply = y + oy
        row = y * wpr

        w1 = templ_word(temply - 1, 0)
        w2 = templ_word(temply, 0)
        w3 = templ_word(temply + 1, 0)
        w4 = target_words[row - wpr] if y >= 1 else 0
        w5 = target_words[row]

        c1 = (w1 >> shiftoffset) & 3
        c2 = (w2 >> shiftoffset) & 3
        c3 = (w3 >> shiftoffset) & 3
        c4 = (w4 >> 30) & 3
        c5 = 0

        w1 = (w1 << bits_to_trim) & _MASK32
        w2 = (w2 << bits_to_trim) & _MASK32
        w3 = (w3 << bits_to_trim) & _MASK32
        w4 = (w4 << 2) & _MASK32

        for x in range(mx):
            tval = (c1 << 10) | (c2 << 7) | (c3 << 4) | (c4 << 1) | c5
            v = (w5 >> 31) & 1
            encode(ctx, tval, v)

            c1 = ((c1 << 1) | (w1 >> 31)) & 7
            c2 = ((c2 << 1) | (w2 >> 31)) & 7
            c3 = ((c3 << 1) | (w3 >> 31)) & 7
            c4 = ((c4 << 1) | (w4 >> 31)) & 7
            c5 = v

            m = x % 32
            wordno = x // 32 + 1

            if m == reload_at:
                w1 = templ_word(temply - 1, wordno)
                w2 = templ_word(temply, wordno)
                w3 = templ_word(temply + 1, wordno)
            else:
                w1 = (w1 << 1) & _MASK32
                w2 = (w2 << 1) & _MASK32
                w3 = (w3 << 1) & _MASK32

            if m == 29 and y >= 1:
                w4 = target_words[row - wpr + wordno] if wordno < wpr else 0
            else:
                w4 = (w4 << 1) & _MASK32

            if m == 31:
                w5 = target_words[row + wordno] if wordno < wpr else 0
            else:
                w5 = (w5 << 1) & _MASK32