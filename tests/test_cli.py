from dataclasses import replace

import pytest

from jbig2enc.cli import Args, CliError, parse_args


def default_args() -> Args:
    return Args(files=["input.png"])


def assert_invalid(args: Args) -> CliError:
    with pytest.raises(CliError) as info:
        args.validate()
    assert info.value.kind is CliError.Kind.INVALID_ARGS
    return info.value


def test_default_args_pass_validation():
    assert default_args().validate() is None


def test_default_bw_threshold_is_200():
    assert default_args().effective_bw_threshold() == 200


def test_global_mode_bw_threshold_is_128():
    assert replace(default_args(), global_=True).effective_bw_threshold() == 128


def test_explicit_bw_threshold_overrides_default():
    assert replace(default_args(), bw_threshold=150).effective_bw_threshold() == 150


def test_explicit_bw_threshold_overrides_global_default():
    args = replace(default_args(), bw_threshold=150, global_=True)
    assert args.effective_bw_threshold() == 150


@pytest.mark.parametrize(
    "changes",
    [
        {"threshold": 0.4},
        {"threshold": 0.97},
        {"weight": 0.1},
        {"weight": 0.9},
        {"up2": True},
        {"up4": True},
        {"dpi": 1},
        {"dpi": 9600},
        {"segment": True},
    ],
)
def test_accepted(changes):
    assert replace(default_args(), **changes).validate() is None


@pytest.mark.parametrize(
    "changes",
    [
        {"threshold": 0.39},
        {"threshold": 0.98},
        {"weight": 0.09},
        {"weight": 0.91},
        {"up2": True, "up4": True},
        {"dpi": 0},
        {"dpi": 9601},
        {"refine": True, "symbol_mode": False},
    ],
)
def test_rejected(changes):
    assert_invalid(replace(default_args(), **changes))


def test_refine_without_symbol_mode_message():
    err = assert_invalid(replace(default_args(), refine=True))
    assert "symbol mode" in str(err)


def test_refine_with_symbol_mode_is_rejected_as_broken():
    err = assert_invalid(replace(default_args(), refine=True, symbol_mode=True))
    assert "broke" in str(err)


def test_error_message_prefix():
    err = assert_invalid(replace(default_args(), up2=True, up4=True))
    assert str(err) == "invalid arguments: cannot use both -2 and -4"


def test_error_kinds_display():
    assert str(CliError.image("bad")) == "image error: bad"
    assert str(CliError.io(OSError("gone"))) == "I/O error: gone"


def test_parse_defaults():
    args = parse_args(["input.png"])
    assert args == default_args()
    assert args.basename == "output"
    assert args.threshold == 0.92
    assert args.weight == 0.5
    assert args.bw_threshold is None
    assert args.output_threshold is None
    assert args.dpi is None
    assert args.files == ["input.png"]


def test_parse_all_flags():
    args = parse_args([
        "-b", "out", "-d", "-p", "-s", "-t", "0.85", "-w", "0.3",
        "-T", "180", "-G", "-O", "debug.png", "-2", "-a", "--no-hash",
        "-D", "300", "-v", "a.png", "b.png",
    ])
    assert args.basename == "out"
    assert args.duplicate_line_removal
    assert args.pdf
    assert args.symbol_mode
    assert args.threshold == 0.85
    assert args.weight == 0.3
    assert args.bw_threshold == 180
    assert args.global_
    assert args.output_threshold == "debug.png"
    assert args.up2
    assert not args.up4
    assert args.auto_thresh
    assert args.no_hash
    assert args.dpi == 300
    assert args.verbose
    assert args.files == ["a.png", "b.png"]


def test_parse_long_options():
    args = parse_args(["--pdf", "--symbol-mode", "--global", "--dpi", "72", "x.png"])
    assert (args.pdf, args.symbol_mode, args.global_, args.dpi) == (True, True, True, 72)


def test_parse_requires_files():
    with pytest.raises(CliError) as info:
        parse_args([])
    assert info.value.kind is CliError.Kind.INVALID_ARGS


def test_parse_rejects_bw_threshold_out_of_byte_range():
    with pytest.raises(CliError):
        parse_args(["-T", "256", "x.png"])


def test_parse_rejects_negative_dpi():
    with pytest.raises(CliError):
        parse_args(["-D", "x", "x.png"])