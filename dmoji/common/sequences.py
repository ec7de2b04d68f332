# This file is part of dmoji.
#
# SPDX-License-Identifier: GPL-3.0-only

'''
Reader for the Unicode emoji-sequences.txt and emoji-zwj-sequences.txt
data files.

Data lines look like this (current and older releases):

    1F600 ; Basic_Emoji ; grinning face # E1.0 [1] (😀)
    231A..231B ; Basic_Emoji ; watch..hourglass done # E0.6 [2] (⌚..⌛)
    1F1E6 1F1E8 ; Emoji_Flag_Sequence ; # 6.0 [1] (🇦🇨) flag: Ascension Island
'''

from __future__ import annotations

from collections.abc import Iterator

import logging
import re
import unicodedata

from dmoji.common.const import EmojiCategory
from dmoji.common.const import MAX_CODEPOINT
from dmoji.common.const import SURROGATES
from dmoji.common.exceptions import ParseError
from dmoji.common.structs import EmojiRecord

log = logging.getLogger('dmoji.common.sequences')

HEX_REGEX = re.compile(r'[0-9A-Fa-f]{1,6}')
ESCAPE_REGEX = re.compile(r'\\x\{([0-9A-Fa-f]{1,6})\}')
VERSION_REGEX = re.compile(r'E?\d+(?:\.\d+)+\s*')
COUNT_REGEX = re.compile(r'\[\d+\]\s*')
PAREN_REGEX = re.compile(r'\(([^)]*)\)\s*')

# Glyph renderings consist of symbols, marks and format characters
_GLYPH_CATEGORIES = frozenset(('So', 'Sk', 'Mn', 'Me', 'Cf'))


def parse_sequences(text: str,
                    source: str | None = None) -> list[EmojiRecord]:
    records = list(iter_sequences(text, source))
    log.info('Parsed %s records from %s', len(records), source or '<data>')
    return records


def iter_sequences(text: str,
                   source: str | None = None) -> Iterator[EmojiRecord]:

    for line_number, raw in enumerate(text.splitlines(), start=1):
        data, _, comment = raw.partition('#')
        if not data.strip():
            continue

        try:
            yield from _parse_line(data, comment)
        except ValueError as error:
            raise ParseError(line_number, raw, str(error), source) from error


def _parse_line(data: str, comment: str) -> Iterator[EmojiRecord]:
    fields = [f.strip() for f in data.split(';')]
    if len(fields) < 2 or not fields[1]:
        raise ValueError('missing category field')

    try:
        category = EmojiCategory.from_label(fields[1])
    except KeyError:
        raise ValueError(f'unknown category {fields[1]!r}') from None

    description = fields[2] if len(fields) > 2 else ''
    if not description:
        description = description_from_comment(comment)
    description = clean_description(description)

    codepoint_field = fields[0]
    if not codepoint_field:
        raise ValueError('missing codepoint field')

    if '..' in codepoint_field or '-' in codepoint_field:
        low, high = parse_range(codepoint_field)
        yield from _expand_range(low, high, category, description)
        return

    codepoints = tuple(parse_codepoint(v) for v in codepoint_field.split())
    yield EmojiRecord(codepoints, category, description)


def _expand_range(low: int,
                  high: int,
                  category: EmojiCategory,
                  label: str) -> Iterator[EmojiRecord]:

    for offset, codepoint in enumerate(range(low, high + 1)):
        description = f'{label} {offset}' if label else ''
        yield EmojiRecord((codepoint,), category, description)


def parse_codepoint(value: str) -> int:
    if HEX_REGEX.fullmatch(value) is None:
        raise ValueError(f'malformed codepoint {value!r}')

    codepoint = int(value, 16)
    if codepoint > MAX_CODEPOINT or codepoint in SURROGATES:
        raise ValueError(f'not a unicode scalar value {value!r}')
    return codepoint


def parse_range(value: str) -> tuple[int, int]:
    separator = '..' if '..' in value else '-'
    low, high = (v.strip() for v in value.split(separator, 1))
    low_cp = parse_codepoint(low)
    high_cp = parse_codepoint(high)
    if low_cp > high_cp:
        raise ValueError(f'empty range {value!r}')
    return low_cp, high_cp


def description_from_comment(comment: str) -> str:
    '''
    Drop the version, code point count and glyph renderings in front of the
    name, e.g. "E0.6 [1] (😀) grinning face" or "😀 grinning face"
    '''
    rest = comment.strip()
    while rest:
        stripped = _strip_annotation(rest)
        if stripped == rest:
            break
        rest = stripped
    return rest


def _strip_annotation(text: str) -> str:
    for regex in (VERSION_REGEX, COUNT_REGEX):
        match = regex.match(text)
        if match is not None:
            return text[match.end():]

    match = PAREN_REGEX.match(text)
    if match is not None and is_glyph(match.group(1)):
        return text[match.end():]

    token, _, rest = text.partition(' ')
    if is_glyph(token):
        return rest.lstrip()
    return text


def is_glyph(text: str) -> bool:
    if any(ch.isascii() and ch.isalpha() for ch in text):
        return False
    return any(unicodedata.category(ch) in _GLYPH_CATEGORIES for ch in text)


def clean_description(description: str) -> str:
    description = ESCAPE_REGEX.sub(lambda m: chr(int(m.group(1), 16)),
                                   description)
    return ' '.join(description.split())
