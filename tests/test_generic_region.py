import pytest

from jbig2enc.arith import ArithEncoder
from jbig2enc.generic_region import encode_bitimage, encode_refine


def bitimage(data, mx, my, tpgd=False):
    enc = ArithEncoder()
    encode_bitimage(enc, data, mx, my, tpgd)
    enc.encode_final()
    return enc.to_bytes()


def refine(templ, tx, ty, target, mx, my, ox=0, oy=0):
    enc = ArithEncoder()
    encode_refine(enc, templ, tx, ty, target, mx, my, ox, oy)
    enc.encode_final()
    return enc.to_bytes()


def assert_terminated(out):
    assert len(out) >= 2
    assert out[-2:] == b"\xff\xac"


def test_bitimage_1x1_white():
    assert_terminated(bitimage([0], 1, 1))


def test_bitimage_1x1_black():
    assert_terminated(bitimage([0x80000000], 1, 1))


def test_bitimage_1x1_white_vs_black():
    assert bitimage([0], 1, 1) != bitimage([0x80000000], 1, 1)


def test_bitimage_8x1_partial_word():
    assert_terminated(bitimage([0xAA000000], 8, 1))


def test_bitimage_32x1_full_word():
    assert_terminated(bitimage([0xFFFFFFFF], 32, 1))


def test_bitimage_33x1_two_words():
    assert_terminated(bitimage([0xFFFFFFFF, 0x80000000], 33, 1))


def test_bitimage_4x4_all_white():
    assert_terminated(bitimage([0] * 4, 4, 4))


def test_bitimage_4x4_all_black():
    assert_terminated(bitimage([0xF0000000] * 4, 4, 4))


def test_bitimage_tpgd_identical_rows():
    without = bitimage([0, 0], 4, 2, False)
    with_tpgd = bitimage([0, 0], 4, 2, True)
    assert_terminated(without)
    assert_terminated(with_tpgd)


def test_bitimage_tpgd_same_vs_different_rows():
    same = bitimage([0, 0], 4, 2, True)
    diff = bitimage([0, 0xF0000000], 4, 2, True)
    assert same != diff


def test_bitimage_deterministic_after_reset():
    data = [0xDEADBEEF, 0x01020304]
    enc = ArithEncoder()
    encode_bitimage(enc, [0xFFFFFFFF, 0x12345678], 32, 2, False)
    enc.encode_final()
    enc.reset()
    enc.flush()
    encode_bitimage(enc, data, 32, 2, False)
    enc.encode_final()
    reused = enc.to_bytes()
    assert_terminated(reused)
    assert reused == bitimage(data, 32, 2)


def test_bitimage_8x8_checkerboard():
    data = [0xAA000000, 0x55000000] * 4
    assert_terminated(bitimage(data, 8, 8))


def test_bitimage_data_size_matches_output():
    enc = ArithEncoder()
    encode_bitimage(enc, [0xDEADBEEF, 0x01020304, 0xFFFF0000], 32, 3, True)
    enc.encode_final()
    assert enc.data_size() == len(enc.to_bytes())


def test_bitimage_accepts_tuple_and_list_alike():
    data = [0x12345678, 0x9ABCDEF0]
    assert bitimage(data, 32, 2) == bitimage(tuple(data), 32, 2)


def test_bitimage_too_little_data_rejected():
    enc = ArithEncoder()
    with pytest.raises(ValueError):
        encode_bitimage(enc, [0], 4, 2, False)


def test_refine_identical_images():
    assert_terminated(refine([0], 1, 1, [0], 1, 1))


def test_refine_different_images():
    assert_terminated(refine([0], 1, 1, [0x80000000], 1, 1))


def test_refine_identical_vs_different():
    same = refine([0], 1, 1, [0], 1, 1)
    diff = refine([0], 1, 1, [0x80000000], 1, 1)
    assert same != diff


@pytest.mark.parametrize("ox", [-1, 0, 1])
def test_refine_offset_variations(ox):
    assert_terminated(refine([0, 0], 2, 2, [0, 0], 2, 2, ox, 0))


def test_refine_deterministic_after_reset():
    templ = [0xF0F0F0F0, 0x0F0F0F0F, 0xAAAAAAAA]
    target = [0xF0F0F0F0, 0x0F0F0F0E, 0xAAAAAAAB]
    enc = ArithEncoder()
    encode_refine(enc, target, 32, 3, templ, 32, 3, 0, 0)
    enc.encode_final()
    enc.reset()
    enc.flush()
    encode_refine(enc, templ, 32, 3, target, 32, 3, 1, -1)
    enc.encode_final()
    reused = enc.to_bytes()
    assert_terminated(reused)
    assert reused == refine(templ, 32, 3, target, 32, 3, 1, -1)


def test_refine_invalid_ox_rejected():
    enc = ArithEncoder()
    with pytest.raises(ValueError):
        encode_refine(enc, [0], 1, 1, [0], 1, 1, 2, 0)


def test_refine_too_little_target_rejected():
    enc = ArithEncoder()
    with pytest.raises(ValueError):
        encode_refine(enc, [0], 1, 1, [], 1, 1, 0, 0)