"""Command-line arguments of the JBIG2 encoder and their validation."""

from __future__ import annotations

import argparse
import enum
from dataclasses import dataclass, field
from typing import NoReturn, Optional, Sequence

__all__ = ["CliError", "Args", "parse_args"]


class CliError(Exception):
    """An error raised by the command-line front end."""

    class Kind(enum.Enum):
        INVALID_ARGS = "invalid arguments"
        IMAGE = "image error"
        IO = "I/O error"

    def __init__(self, kind: "CliError.Kind", message: str) -> None:
        super().__init__(f"{kind.value}: {message}")
        self.kind = kind
        self.message = message

    @classmethod
    def invalid_args(cls, message: str) -> "CliError":
        return cls(cls.Kind.INVALID_ARGS, message)

    @classmethod
    def image(cls, message: str) -> "CliError":
        return cls(cls.Kind.IMAGE, message)

    @classmethod
    def io(cls, error: OSError) -> "CliError":
        return cls(cls.Kind.IO, str(error))


@dataclass
class Args:
    """Options of one encoder run."""

    files: list[str] = field(default_factory=list)
    basename: str = "output"
    duplicate_line_removal: bool = False
    pdf: bool = False
    symbol_mode: bool = False
    threshold: float = 0.92
    weight: float = 0.5
    bw_threshold: Optional[int] = None
    global_: bool = False
    refine: bool = False
    output_threshold: Optional[str] = None
    up2: bool = False
    up4: bool = False
    segment: bool = False
    jpeg_output: bool = False
    auto_thresh: bool = False
    no_hash: bool = False
    dpi: Optional[int] = None
    verbose: bool = False

    def validate(self) -> None:
        """Check value ranges and option combinations, raising CliError."""
        if self.refine:
            if not self.symbol_mode:
                raise CliError.invalid_args("refinement requires symbol mode (-s)")
            raise CliError.invalid_args(
                "refinement broke in recent releases since it's rarely used"
            )
        if self.up2 and self.up4:
            raise CliError.invalid_args("cannot use both -2 and -4")
        if not 0.4 <= self.threshold <= 0.97:
            raise CliError.invalid_args(
                f"threshold must be between 0.40 and 0.97, got {self.threshold}"
            )
        if not 0.1 <= self.weight <= 0.9:
            raise CliError.invalid_args(
                f"weight must be between 0.10 and 0.90, got {self.weight}"
            )
        if self.dpi is not None and not 1 <= self.dpi <= 9600:
            raise CliError.invalid_args(
                f"DPI must be between 1 and 9600, got {self.dpi}"
            )

    def effective_bw_threshold(self) -> int:
        """The 1 bpp threshold: explicit -T, else 128 in global mode, else 200."""
        if self.bw_threshold is not None:
            return self.bw_threshold
        return 128 if self.global_ else 200


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise CliError.invalid_args(message)


def _byte(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    if not 0 <= value <= 255:
        raise argparse.ArgumentTypeError(f"must be between 0 and 255: {value}")
    return value


def _unsigned(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    if not 0 <= value <= 0xFFFFFFFF:
        raise argparse.ArgumentTypeError(f"out of range: {value}")
    return value


def _build_parser() -> argparse.ArgumentParser:
    p = _Parser(prog="jbig2", description="JBIG2 encoder")
    p.add_argument("-b", dest="basename", default="output",
                   help="output file basename for symbol mode")
    p.add_argument("-d", "--duplicate-line-removal", action="store_true",
                   help="use TPGD duplicate line removal in generic region coder")
    p.add_argument("-p", "--pdf", action="store_true", help="produce PDF ready data")
    p.add_argument("-s", "--symbol-mode", action="store_true",
                   help="use text region, not generic coder")
    p.add_argument("-t", dest="threshold", type=float, default=0.92,
                   help="classification threshold for symbol coder (0.4-0.97)")
    p.add_argument("-w", dest="weight", type=float, default=0.5,
                   help="classification weight for symbol coder (0.1-0.9)")
    p.add_argument("-T", dest="bw_threshold", type=_byte, default=None,
                   help="1 bpp threshold (0-255)")
    p.add_argument("-G", "--global", dest="global_", action="store_true",
                   help="use global BW threshold on 8 bpp images")
    p.add_argument("-r", "--refine", action="store_true",
                   help="use refinement (requires -s: lossless)")
    p.add_argument("-O", dest="output_threshold", default=None,
                   help="dump thresholded image as PNG")
    p.add_argument("-2", dest="up2", action="store_true",
                   help="upsample 2x before thresholding")
    p.add_argument("-4", dest="up4", action="store_true",
                   help="upsample 4x before thresholding")
    p.add_argument("-S", dest="segment", action="store_true",
                   help="remove images from mixed input and save separately")
    p.add_argument("-j", "--jpeg-output", action="store_true",
                   help="write images from mixed input as JPEG")
    p.add_argument("-a", "--auto-thresh", action="store_true",
                   help="use automatic thresholding in symbol encoder")
    p.add_argument("--no-hash", action="store_true",
                   help="disable hash function for automatic thresholding")
    p.add_argument("-D", "--dpi", type=_unsigned, default=None,
                   help="force DPI (1-9600)")
    p.add_argument("-v", dest="verbose", action="store_true", help="be verbose")
    p.add_argument("files", nargs="+", help="input files")
    return p


def parse_args(argv: Optional[Sequence[str]] = None) -> Args:
    """Parse command-line arguments (without the program name) into Args.

    Malformed arguments raise CliError; ranges are checked by Args.validate.
    """
    namespace = _build_parser().parse_args(argv)
    return Args(**vars(namespace))