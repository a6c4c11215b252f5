"""Shared definitions of the morphological analyser: records, flags and errors."""

from __future__ import annotations

from dataclasses import dataclass, field

# Lemmatizer error codes.
LEMMBUFF_FAILED = -1
LIDSBUFF_FAILED = -2
GRAMBUFF_FAILED = -3
WORDBUFF_FAILED = -4
ARGUMENT_FAILED = -5
BUFFER_OVERFLOW = -6

# Search flags.
SF_STOP_AFTER_FIRST = 0x0001
SF_IGNORE_CAPITALS = 0x0002
SF_HARD_FORMS = 0x0004
SF_CONNECTOR_VOWELS = 0x0008
NF_ADJ_VERBS = 0x0100

# Additional information byte accompanying each inflexion.
AF_ANIMATED = 0x01
AF_NOT_ALIVE = 0x02
AF_LIFELESS = 0x02
AF_HARD_FORM = 0x04
AF_JOINING_C = 0x08

# Grammatical information of inflected words (two low bytes).
GF_RET_FORMS = 0x8000
GF_FORM_MASK = 0x7000
GF_MULTIPLE = 0x0800
GF_GEND_MASK = 0x0600
GF_SHORT_ONE = 0x0100
GF_COMPARED = 0x0080
GF_VERB_FORM = 0x0060
GF_ADVERB = 0x0040
GF_VERB_FACE = 0x0018
GF_VERB_TIME = 0x0007

# Verb tense.
VT_INFINITIV = 0x0001
VT_IMPERATIV = 0x0002
VT_FUTURE = 0x0003
VT_PRESENT = 0x0004
VT_PAST = 0x0005

# Verb person.
VB_FIRST_FACE = 0x0008
VB_SECOND_FACE = 0x0010
VB_THIRD_FACE = 0x0018

# Verb form.
VF_VERB = 0x0000
VF_VERB_ACTIVE = 0x0020
VF_VERB_PASSIV = 0x0040
VF_VERB_DOING = 0x0060

# Word flags.
WF_MULTIPLE = 0x0040
WF_PLURAL = 0x0040
WF_UNION_S = 0x0040
WF_EXCELLENT = 0x0080
WF_COUNTABLE = 0x0100
WF_INFORMAL = 0x0200
WF_OBSCENE = 0x0400

_ERROR_MESSAGES = {
    WORDBUFF_FAILED: "invalid string passed",
    LEMMBUFF_FAILED: "not enough space in forms buffer",
    LIDSBUFF_FAILED: "not enough space in stems buffer",
    GRAMBUFF_FAILED: "not enough space in grams buffer",
}


class MorphError(RuntimeError):
    """An error reported by the analyser, carrying its numeric code."""

    def __init__(self, code: int, message: str | None = None) -> None:
        self.code = code
        super().__init__(message or _ERROR_MESSAGES.get(code, "unknown error"))


def raise_for_code(code: int) -> int:
    """Return a non-negative result unchanged; raise MorphError for an error code."""
    if code >= 0:
        return code
    raise MorphError(code)


def _check_range(name: str, value: int, limit: int) -> None:
    if not 0 <= value <= limit:
        raise ValueError(f"{name} must be in range 0..{limit:#x}, got {value}")


@dataclass(frozen=True)
class GramInfo:
    """Grammatical description of one word form."""

    wd_info: int = 0
    id_form: int = 0
    gr_info: int = 0
    flags: int = 0

    def __post_init__(self) -> None:
        _check_range("wd_info", self.wd_info, 0xFFFF)
        _check_range("id_form", self.id_form, 0xFF)
        _check_range("gr_info", self.gr_info, 0xFFFF)
        _check_range("flags", self.flags, 0xFF)


@dataclass(frozen=True)
class LemmInfo:
    """A lexeme recognised for a word: its id, normal form and grammatical forms."""

    nlexid: int
    lemma: str | None = None
    grams: tuple[GramInfo, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        _check_range("nlexid", self.nlexid, 0xFFFFFFFF)
        object.__setattr__(self, "grams", tuple(self.grams))