import pytest

from rusmorph.defs import (
    ARGUMENT_FAILED,
    BUFFER_OVERFLOW,
    GRAMBUFF_FAILED,
    LEMMBUFF_FAILED,
    LIDSBUFF_FAILED,
    WORDBUFF_FAILED,
    GramInfo,
    LemmInfo,
    MorphError,
    raise_for_code,
)


@pytest.mark.parametrize("code", [0, 1, 7, 32])
def test_non_negative_code_passes_through(code):
    assert raise_for_code(code) == code


@pytest.mark.parametrize(
    "code, message",
    [
        (WORDBUFF_FAILED, "invalid string passed"),
        (LEMMBUFF_FAILED, "not enough space in forms buffer"),
        (LIDSBUFF_FAILED, "not enough space in stems buffer"),
        (GRAMBUFF_FAILED, "not enough space in grams buffer"),
        (ARGUMENT_FAILED, "unknown error"),
        (BUFFER_OVERFLOW, "unknown error"),
    ],
)
def test_error_codes_raise(code, message):
    with pytest.raises(MorphError) as info:
        raise_for_code(code)
    assert info.value.code == code
    assert str(info.value) == message


def test_morph_error_custom_message():
    err = MorphError(WORDBUFF_FAILED, "bad word")
    assert str(err) == "bad word"
    assert err.code == WORDBUFF_FAILED


def test_gram_info_equality_and_defaults():
    assert GramInfo(1, 2, 3, 4) == GramInfo(wd_info=1, id_form=2, gr_info=3, flags=4)
    assert GramInfo() == GramInfo(0, 0, 0, 0)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"wd_info": 0x10000},
        {"id_form": 256},
        {"gr_info": -1},
        {"flags": 0x100},
    ],
)
def test_gram_info_rejects_out_of_range(kwargs):
    with pytest.raises(ValueError):
        GramInfo(**kwargs)


def test_lemm_info_converts_grams_to_tuple():
    grams = [GramInfo(1, 2, 3, 4), GramInfo(5, 6, 7, 8)]
    lemm = LemmInfo(10, "слово", grams)
    assert lemm.grams == tuple(grams)
    grams.append(GramInfo())
    assert len(lemm.grams) == 2


def test_lemm_info_defaults_and_range():
    lemm = LemmInfo(3)
    assert lemm.lemma is None
    assert lemm.grams == ()
    with pytest.raises(ValueError):
        LemmInfo(-1)
    with pytest.raises(ValueError):
        LemmInfo(0x100000000)