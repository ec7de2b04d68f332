# This file is part of dmoji.
#
# SPDX-License-Identifier: GPL-3.0-only

from __future__ import annotations

from typing import NamedTuple
from typing import TYPE_CHECKING

from dataclasses import dataclass
from dataclasses import field

from dmoji.common.const import EmojiCategory
from dmoji.common.const import MatchTier

if TYPE_CHECKING:
    from dmoji.common.index import Index


@dataclass(frozen=True, slots=True)
class EmojiRecord:
    codepoints: tuple[int, ...]
    category: EmojiCategory
    description: str = ''
    normalized: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.codepoints:
            raise ValueError('an emoji record needs at least one codepoint')
        object.__setattr__(self, 'normalized', normalize(self.description))

    @property
    def text(self) -> str:
        return ''.join(map(chr, self.codepoints))

    @property
    def hex(self) -> str:
        return ' '.join(f'{cp:04X}' for cp in self.codepoints)

    def with_description(self, description: str) -> EmojiRecord:
        return EmojiRecord(self.codepoints, self.category, description)


@dataclass(frozen=True, slots=True)
class Candidate:
    index: Index = field(repr=False, compare=False)
    position: int
    tier: MatchTier
    score: int
    span: tuple[int, int] | None = None

    @property
    def sort_key(self) -> tuple[int, int]:
        return (-self.score, self.position)

    @property
    def record(self) -> EmojiRecord:
        return self.index.records[self.position]


class Selection(NamedTuple):
    text: str
    description: str

    def encode(self, encoding: str = 'utf-8') -> bytes:
        return self.text.encode(encoding)


def normalize(text: str) -> str:
    return ' '.join(text.lower().split())
