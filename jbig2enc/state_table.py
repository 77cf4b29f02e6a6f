"""Probability estimation state table for the QM arithmetic coder."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["StateEntry", "STATE_TABLE"]


@dataclass(frozen=True)
class StateEntry:
    """One coder state: LPS probability estimate and the next states."""

    qe: int
    mps: int
    lps: int


def _build() -> tuple[StateEntry, ...]:
    # Rows of (qe, next state after MPS, next state after LPS), MPS=0 side
    # first (states 0..45), then the MPS=1 side (states 46..91).
    rows = (
        (0x5601, 1, 47), (0x3401, 2, 6), (0x1801, 3, 9), (0x0AC1, 4, 12),
        (0x0521, 5, 29), (0x0221, 38, 33), (0x5601, 7, 52), (0x5401, 8, 14),
        (0x4801, 9, 14), (0x3801, 10, 14), (0x3001, 11, 17), (0x2401, 12, 18),
        (0x1C01, 13, 20), (0x1601, 29, 21), (0x5601, 15, 60), (0x5401, 16, 14),
        (0x5101, 17, 15), (0x4801, 18, 16), (0x3801, 19, 17), (0x3401, 20, 18),
        (0x3001, 21, 19), (0x2801, 22, 19), (0x2401, 23, 20), (0x2201, 24, 21),
        (0x1C01, 25, 22), (0x1801, 26, 23), (0x1601, 27, 24), (0x1401, 28, 25),
        (0x1201, 29, 26), (0x1101, 30, 27), (0x0AC1, 31, 28), (0x09C1, 32, 29),
        (0x08A1, 33, 30), (0x0521, 34, 31), (0x0441, 35, 32), (0x02A1, 36, 33),
        (0x0221, 37, 34), (0x0141, 38, 35), (0x0111, 39, 36), (0x0085, 40, 37),
        (0x0049, 41, 38), (0x0025, 42, 39), (0x0015, 43, 40), (0x0009, 44, 41),
        (0x0005, 45, 42), (0x0001, 45, 43),
        (0x5601, 47, 1), (0x3401, 48, 52), (0x1801, 49, 55), (0x0AC1, 50, 58),
        (0x0521, 51, 75), (0x0221, 84, 79), (0x5601, 53, 6), (0x5401, 54, 60),
        (0x4801, 55, 60), (0x3801, 56, 60), (0x3001, 57, 63), (0x2401, 58, 64),
        (0x1C01, 59, 66), (0x1601, 75, 67), (0x5601, 61, 14), (0x5401, 62, 60),
        (0x5101, 63, 61), (0x4801, 64, 62), (0x3801, 65, 63), (0x3401, 66, 64),
        (0x3001, 67, 65), (0x2801, 68, 65), (0x2401, 69, 66), (0x2201, 70, 67),
        (0x1C01, 71, 68), (0x1801, 72, 69), (0x1601, 73, 70), (0x1401, 74, 71),
        (0x1201, 75, 72), (0x1101, 76, 73), (0x0AC1, 77, 74), (0x09C1, 78, 75),
        (0x08A1, 79, 76), (0x0521, 80, 77), (0x0441, 81, 78), (0x02A1, 82, 79),
        (0x0221, 83, 80), (0x0141, 84, 81), (0x0111, 85, 82), (0x0085, 86, 83),
        (0x0049, 87, 84), (0x0025, 88, 85), (0x0015, 89, 86), (0x0009, 90, 87),
        (0x0005, 91, 88), (0x0001, 91, 89),
    )
    return tuple(StateEntry(qe, mps, lps) for qe, mps, lps in rows)


STATE_TABLE: tuple[StateEntry, ...] = _build()
"""The 92 QM coder states (46 per MPS value), as in JBIG2 Table E.1."""