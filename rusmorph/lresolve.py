"""Resolution helpers for dictionary articles: word types, flags and remarks."""

from __future__ import annotations

from dataclasses import dataclass, field

from rusmorph.defs import (
    WF_COUNTABLE,
    WF_EXCELLENT,
    WF_INFORMAL,
    WF_MULTIPLE,
    WF_OBSCENE,
    WF_UNION_S,
)
from rusmorph.serial import write_u16

# Flags stored in the serialized word info when tables are referenced.
WF_FLEXES = 0x8000
WF_MIXTAB = 0x4000

_TYPES: dict[str, int] = {
    # verbs
    "# нсв": 1,
    "# нсв_нп": 2,
    "# св": 3,
    "# св_нп": 4,
    "# св-нсв": 5,
    "# св-нсв_нп": 6,
    # inanimate masculine nouns
    "# м": 7,
    "м мп": 7,
    "м ммс": 7,
    "мн. м": 7 + WF_MULTIPLE,
    "# мн._от_м": 7 + WF_MULTIPLE,
    "мн._неод. мп": 7 + WF_MULTIPLE,
    # animate masculine nouns
    "# мо": 8,
    "мо мпо": 8,
    "мо момс": 8,
    "мн. мо": 8 + WF_MULTIPLE,
    "мн._одуш. мпо": 8 + WF_MULTIPLE,
    "# м//мо": 9,
    "# мо//м": 9,
    "м с": 10,
    "мо жо": 11,
    "мо со": 12,
    # feminine nouns
    "# ж": 13,
    "ж жп": 13,
    "ж жмс": 13,
    "мн. ж": 13 + WF_MULTIPLE,
    "# мн._от_ж": 13 + WF_MULTIPLE,
    "# жо": 14,
    "жо жпо": 14,
    "мн. жо": 14 + WF_MULTIPLE,
    "# ж//жо": 15,
    "# жо//ж": 15,
    # neuter nouns
    "# с": 16,
    "с сп": 16,
    "с смс": 16,
    "мн. с": 16 + WF_MULTIPLE,
    "# мн._от_с": 16 + WF_MULTIPLE,
    "мн._от_с сп": 16 + WF_MULTIPLE,
    "# со": 17,
    "со спо": 17,
    "мн. со": 17 + WF_MULTIPLE,
    "# с//со": 18,
    "# со//с": 18,
    # common gender nouns
    "м//ж ж": 19,
    "# мо-жо": 20,
    "# мо//жо": 20,
    "мо-жо жо": 20,
    "мо//жо жо": 20,
    "# м//с": 21,
    "# с//м": 21,
    "мо//со со": 22,
    "# ж//с": 23,
    "# с//ж": 23,
    "мн. ж//м": 24 + WF_MULTIPLE,
    "мн. м//ж": 24 + WF_MULTIPLE,
    # adjectives
    "# п": 25,
    "# г-п": 26,
    "п мс": 27,
    "мс-п мсп": 28,
    "# мс-п": 28,
    # pronouns
    "# мс": 29,
    "# мс_мн.": 93,
    "# мсм": 30,
    "# мсж": 31,
    "# мсс": 32,
    # numerals
    "# числ.": 33,
    "# числ._2": 34,
    "# числ._с": 35,
    "числ.-п мс": 36,
    "числ.-п мсп": 36,
    "числ.-п мс-п": 36,
    # proper names
    "# и": 37,
    "# им": 38,
    "им иж": 38,
    "# иж": 39,
    "# ом": 40,
    "# ож": 41,
    "# ф": 42,
    "ф фп": 42,
    # geographic names
    "# г": 43,
    "# гп": 43,
    "# гм": 44,
    "# гмп": 44,
    "# гж": 45,
    "# гжп": 45,
    "# гс": 46,
    "# гсп": 46,
    "# мн._от_гж": 47 + WF_MULTIPLE,
    "# мн._от_гм": 47 + WF_MULTIPLE,
    "мн. гп": 47 + WF_MULTIPLE,
    # uninflected parts of speech
    "# вводн.": 48,
    "# межд.": 49,
    "# предик.": 50,
    "# предл.": 51,
    "# союз": 52,
    "# союз_соч.": 52 + WF_UNION_S,
    "# част.": 53,
    "# н": 54,
    "# сокр._сущ.": 55,
    "# сокр._прил.": 56,
    "# сокр._вводн.": 57,
    "# сравн.": 58,
    # abbreviations
    "# АБ": 59,
    "# аб": 60,
    "# #1": 61,
    "# #2": 62,
}

_LEX_FLAGS = (
    ("{превосх.}", WF_EXCELLENT),
    ("{исчисл.}", WF_COUNTABLE),
    ("{разг.}", WF_INFORMAL),
    ("{руг.}", WF_OBSCENE),
)

_CASE_MARK = "ШП:"
_CASE_SCALE = "ИРДВТП"
_REFLEX = "ся"
_POST_MARK = "post:"


def _is_word_char(ch: str) -> bool:
    return ord(ch) > 0x20


@dataclass
class MorphClass:
    """Inflexion class of a lexeme: word info and table offsets."""

    wdinfo: int = 0
    tfoffs: int = 0
    mtoffs: int = 0

    def buf_len(self) -> int:
        """Return the size of the serialized class in bytes."""
        return 2 + (2 if self.tfoffs else 0) + (2 if self.mtoffs else 0)

    def serialize(self) -> bytes:
        """Return the word info, flagged, followed by the non-zero offsets."""
        wdinfo = self.wdinfo
        if self.tfoffs:
            wdinfo |= WF_FLEXES
        if self.mtoffs:
            wdinfo |= WF_MIXTAB
        out = write_u16(wdinfo & 0xFFFF)
        if self.tfoffs:
            out += write_u16(self.tfoffs)
        if self.mtoffs:
            out += write_u16(self.mtoffs)
        return out


NULL_CLASS = MorphClass()


@dataclass
class LexemeInfo:
    """A resolved dictionary stem with its class, character range and postfix."""

    ststem: str = ""
    mclass: MorphClass = field(default_factory=MorphClass)
    chrmin: int = 0
    chrmax: int = 0
    stpost: str = ""


def type_code(key: str) -> int:
    """Return the word type for a 'grammar type' key, or 0 if it is unknown."""
    return _TYPES.get(key, 0)


def lex_flags(comments: str) -> int:
    """Return the lexical flags whose marks appear in the comments."""
    flags = 0
    for mark, flag in _LEX_FLAGS:
        if mark in comments:
            flags |= flag
    return flags


def get_remark(comment: str) -> str:
    """Return the first remark written as -xx- in the comment, or an empty string."""
    start = comment.find("-")
    while start != -1:
        end = start + 1
        while end < len(comment) and comment[end] != "-" and _is_word_char(comment[end]):
            end += 1
        if end < len(comment) and comment[end] == "-":
            return comment[start + 1 : end]
        start = comment.find("-", start + 1)
    return ""


def reflexive(s: str) -> bool:
    """Tell whether the word ends with the reflexive particle."""
    return len(s) > len(_REFLEX) and s.endswith(_REFLEX)


def case_scale(s: str) -> int:
    """Return the bit scale of the cases a preposition governs, per its comments."""
    pos = s.find(_CASE_MARK)
    if pos == -1:
        return 0
    value = 0
    for ch in s[pos + len(_CASE_MARK) :]:
        index = _CASE_SCALE.find(ch)
        if index == -1:
            break
        value |= 1 << index
    return value


def get_postfix(s: str) -> str:
    """Return the postfix given after 'post:' in the comments, or an empty string."""
    pos = s.find(_POST_MARK)
    if pos == -1:
        return ""
    pos += len(_POST_MARK)
    while pos < len(s) and not _is_word_char(s[pos]):
        pos += 1
    end = pos
    while end < len(s) and _is_word_char(s[end]):
        end += 1
    return s[pos:end]