"""Stem records produced by the dictionary-free analyser."""

from __future__ import annotations

from dataclasses import dataclass, field

from rusmorph.defs import GramInfo


@dataclass(frozen=True)
class StemInfo:
    """A stem recognised for a word: its length, inflexion class, lemma and forms."""

    ccstem: int
    nclass: int
    lemma: str | None = None
    grams: tuple[GramInfo, ...] = field(default_factory=tuple)
    weight: float = 0.0

    def __post_init__(self) -> None:
        if self.ccstem < 0:
            raise ValueError(f"ccstem must not be negative, got {self.ccstem}")
        if self.nclass < 0:
            raise ValueError(f"nclass must not be negative, got {self.nclass}")
        if self.lemma is not None and self.ccstem > len(self.lemma):
            raise ValueError(
                f"ccstem {self.ccstem} exceeds lemma length {len(self.lemma)}"
            )
        object.__setattr__(self, "grams", tuple(self.grams))

    def stem(self) -> str:
        """Return the stem part of the lemma, or an empty string if there is no lemma."""
        if self.lemma is None:
            return ""
        return self.lemma[: self.ccstem]