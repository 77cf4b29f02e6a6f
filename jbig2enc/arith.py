"""JBIG2 arithmetic (QM) coder with integer and symbol-ID procedures."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import MutableSequence

from .state_table import STATE_TABLE

__all__ = ["IntProc", "ArithEncoder", "MAX_CTX", "INT_CTX_COUNT", "INT_CTX_SIZE"]

MAX_CTX = 65536
INT_CTX_COUNT = 13
INT_CTX_SIZE = 512

_MASK32 = 0xFFFFFFFF
_INT_LIMIT = 2_000_000_000


class IntProc(enum.IntEnum):
    """Integer coding procedures (JBIG2 section 6.4), each with its own context."""

    AI = 0
    DH = 1
    DS = 2
    DT = 3
    DW = 4
    EX = 5
    FS = 6
    IT = 7
    RDH = 8
    RDW = 9
    RDX = 10
    RDY = 11
    RI = 12


@dataclass(frozen=True)
class _IntRange:
    bot: int
    top: int
    data: int
    bits: int
    delta: int
    intbits: int


_INT_RANGES = (
    _IntRange(0, 3, 0, 2, 0, 2),
    _IntRange(-1, -1, 9, 4, 0, 0),
    _IntRange(-3, -2, 5, 3, 2, 1),
    _IntRange(4, 19, 2, 3, 4, 4),
    _IntRange(-19, -4, 3, 3, 4, 4),
    _IntRange(20, 83, 6, 4, 20, 6),
    _IntRange(-83, -20, 7, 4, 20, 6),
    _IntRange(84, 339, 14, 5, 84, 8),
    _IntRange(-339, -84, 15, 5, 84, 8),
    _IntRange(340, 4435, 30, 6, 340, 12),
    _IntRange(-4435, -340, 31, 6, 340, 12),
    _IntRange(4436, _INT_LIMIT, 62, 6, 4436, 32),
    _IntRange(-_INT_LIMIT, -4436, 63, 6, 4436, 32),
)


def _update_prev(prev: int, v: int) -> int:
    if prev & 0x100:
        return (((prev << 1) | v) & 0x1FF) | 0x100
    return (prev << 1) | v


class ArithEncoder:
    """QM arithmetic encoder producing a JBIG2 arithmetic-coded byte stream."""

    def __init__(self) -> None:
        self.c = 0
        self.a = 0x8000
        self.ct = 12
        self.b = 0
        self.bp = -1
        self.output = bytearray()
        self.context = bytearray(MAX_CTX)
        self.intctx = [bytearray(INT_CTX_SIZE) for _ in range(INT_CTX_COUNT)]
        self.iaidctx = bytearray()

    def reset(self) -> None:
        """Reset the coder state and contexts, keeping the output produced so far."""
        self.a = 0x8000
        self.c = 0
        self.ct = 12
        self.bp = -1
        self.b = 0
        self.context[:] = bytes(MAX_CTX)
        for ctx in self.intctx:
            ctx[:] = bytes(INT_CTX_SIZE)
        self.iaidctx = bytearray()

    def flush(self) -> None:
        """Discard all output produced so far."""
        self.output.clear()
        self.bp = -1

    def _emit(self, byte: int) -> None:
        if self.bp >= 0:
            self.output.append(byte)

    def _byteout(self) -> None:
        if self.b == 0xFF:
            self._emit(self.b)
            self.b = (self.c >> 20) & 0xFF
            self.bp += 1
            self.c &= 0xFFFFF
            self.ct = 7
            return

        if self.c < 0x8000000:
            self._emit(self.b)
            self.b = (self.c >> 19) & 0xFF
            self.bp += 1
            self.c &= 0x7FFFF
            self.ct = 8
            return

        # carry into the pending byte
        self.b += 1
        if self.b != 0xFF:
            self._emit(self.b)
            self.b = (self.c >> 19) & 0xFF
            self.bp += 1
            self.c &= 0x7FFFF
            self.ct = 8
            return

        self.c &= 0x7FFFFFF
        self._emit(self.b)
        self.b = (self.c >> 20) & 0xFF
        self.bp += 1
        self.c &= 0xFFFFF
        self.ct = 7

    def _renormalise(self) -> None:
        while True:
            self.a = (self.a << 1) & 0xFFFF
            self.c = (self.c << 1) & _MASK32
            self.ct -= 1
            if self.ct == 0:
                self._byteout()
            if self.a & 0x8000:
                break

    def encode_bit(self, context: MutableSequence[int], ctx_num: int, d: int) -> None:
        """Encode bit ``d`` using state ``context[ctx_num]``, updating that state."""
        i = context[ctx_num]
        mps = 1 if i > 46 else 0
        entry = STATE_TABLE[i]
        qe = entry.qe

        if d != mps:
            self.a -= qe
            if self.a < qe:
                self.c = (self.c + qe) & _MASK32
            else:
                self.a = qe
            context[ctx_num] = entry.lps
            self._renormalise()
        else:
            self.a -= qe
            if not self.a & 0x8000:
                if self.a < qe:
                    self.a = qe
                else:
                    self.c = (self.c + qe) & _MASK32
                context[ctx_num] = entry.mps
                self._renormalise()
            else:
                self.c = (self.c + qe) & _MASK32

    def encode_final(self) -> None:
        """Terminate the coded stream, ending it with the 0xFF 0xAC marker."""
        tempc = (self.c + self.a) & _MASK32
        self.c |= 0xFFFF
        if self.c >= tempc:
            self.c -= 0x8000

        self.c = (self.c << self.ct) & _MASK32
        self._byteout()
        self.c = (self.c << self.ct) & _MASK32
        self._byteout()
        self._emit(self.b)
        if self.b != 0xFF:
            self.b = 0xFF
            self._emit(self.b)
        self.b = 0xAC
        self._emit(self.b)

    def data_size(self) -> int:
        """Number of bytes of output produced so far."""
        return len(self.output)

    def to_bytes(self) -> bytes:
        """The encoded data produced so far."""
        return bytes(self.output)

    def encode_int(self, proc: IntProc, value: int) -> None:
        """Encode an integer with the given integer coding procedure."""
        if not -_INT_LIMIT <= value <= _INT_LIMIT:
            raise ValueError(f"value out of range: {value}")

        ctx = self.intctx[IntProc(proc)]
        rng = next(r for r in _INT_RANGES if r.bot <= value <= r.top)

        encoded = abs(value) - rng.delta
        prev = 1

        data = rng.data
        for _ in range(rng.bits):
            v = data & 1
            self.encode_bit(ctx, prev, v)
            data >>= 1
            prev = _update_prev(prev, v)

        if rng.intbits:
            encoded = (encoded << (32 - rng.intbits)) & _MASK32
        for _ in range(rng.intbits):
            v = (encoded >> 31) & 1
            self.encode_bit(ctx, prev, v)
            encoded = (encoded << 1) & _MASK32
            prev = _update_prev(prev, v)

    def encode_oob(self, proc: IntProc) -> None:
        """Encode the out-of-band sentinel for the given procedure."""
        ctx = self.intctx[IntProc(proc)]
        for ctx_num, bit in ((1, 1), (3, 0), (6, 0), (12, 0)):
            self.encode_bit(ctx, ctx_num, bit)

    def encode_iaid(self, symcodelen: int, value: int) -> None:
        """Encode a symbol ID as a fixed-length ``symcodelen``-bit value."""
        if symcodelen == 0:
            return
        if not 0 < symcodelen <= 31:
            raise ValueError(f"symcodelen {symcodelen} must be between 0 and 31")
        if not 0 <= value < (1 << symcodelen):
            raise ValueError(f"value {value} does not fit in {symcodelen} bits")

        needed = 1 << symcodelen
        if len(self.iaidctx) < needed:
            self.iaidctx.extend(bytes(needed - len(self.iaidctx)))

        mask = (1 << (symcodelen + 1)) - 1 if symcodelen < 31 else _MASK32
        shifted = (value << (32 - symcodelen)) & _MASK32
        prev = 1
        for _ in range(symcodelen):
            v = (shifted >> 31) & 1
            self.encode_bit(self.iaidctx, prev & mask, v)
            prev = (prev << 1) | v
            shifted = (shifted << 1) & _MASK32