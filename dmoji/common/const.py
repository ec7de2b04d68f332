# This file is part of dmoji.
#
# SPDX-License-Identifier: GPL-3.0-only

from __future__ import annotations

from typing import Final

from enum import Enum
from enum import IntEnum
from enum import unique

EMOJI_SEQUENCES: Final = 'emoji-sequences.txt'
EMOJI_ZWJ_SEQUENCES: Final = 'emoji-zwj-sequences.txt'

DATA_DIR_NAME: Final = 'dmoji'
EMOJI_DATA_URL: Final = 'https://www.unicode.org/Public/emoji/latest/'

DEFAULT_MENU_COMMAND: Final = 'dmenu'
DEFAULT_COPY_COMMAND: Final = 'wl-copy'

MAX_CODEPOINT: Final = 0x10FFFF
SURROGATES: Final = range(0xD800, 0xE000)

# Width of a score band, a penalty never pushes a match into the tier below
TIER_SPAN: Final = 1000


@unique
class EmojiCategory(Enum):
    BASIC = 'basic'
    KEYCAP = 'keycap'
    FLAG = 'flag'
    TAG = 'tag'
    MODIFIER = 'modifier'
    ZWJ = 'zwj'

    @classmethod
    def from_label(cls, label: str) -> EmojiCategory:
        '''
        Raises KeyError for labels not used by any Unicode release
        '''
        return _CATEGORY_LABELS[label]


_CATEGORY_LABELS: dict[str, EmojiCategory] = {
    'Basic_Emoji': EmojiCategory.BASIC,
    'Emoji_Basic': EmojiCategory.BASIC,
    'Emoji_Keycap_Sequence': EmojiCategory.KEYCAP,
    'Emoji_Combining_Sequence': EmojiCategory.KEYCAP,
    'RGI_Emoji_Flag_Sequence': EmojiCategory.FLAG,
    'Emoji_Flag_Sequence': EmojiCategory.FLAG,
    'RGI_Emoji_Tag_Sequence': EmojiCategory.TAG,
    'Emoji_Tag_Sequence': EmojiCategory.TAG,
    'RGI_Emoji_Modifier_Sequence': EmojiCategory.MODIFIER,
    'Emoji_Modifier_Sequence': EmojiCategory.MODIFIER,
    'Emoji_Modifier': EmojiCategory.MODIFIER,
    'RGI_Emoji_ZWJ_Sequence': EmojiCategory.ZWJ,
    'Emoji_ZWJ_Sequence': EmojiCategory.ZWJ,
}


@unique
class MatchTier(IntEnum):
    BROWSE = 0
    FUZZY = 1
    SUBSTRING = 2
    PREFIX = 3
    EXACT = 4

    @property
    def base_score(self) -> int:
        return int(self) * TIER_SPAN


@unique
class PathLocation(IntEnum):
    EXPLICIT = 0
    USER = 1
    SYSTEM = 2
    PREFIX = 3
    SOURCE = 4
