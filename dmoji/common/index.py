# This file is part of dmoji.
#
# SPDX-License-Identifier: GPL-3.0-only

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping

import bisect
import itertools
import logging
import re
import warnings
from pathlib import Path
from types import MappingProxyType

from dmoji.common.const import EMOJI_SEQUENCES
from dmoji.common.const import EMOJI_ZWJ_SEQUENCES
from dmoji.common.exceptions import DataDirError
from dmoji.common.exceptions import EmptyIndexWarning
from dmoji.common.sequences import parse_sequences
from dmoji.common.structs import EmojiRecord

log = logging.getLogger('dmoji.common.index')

TOKEN_SPLIT_REGEX = re.compile(r'[\W_]+')


def tokenize(text: str) -> list[str]:
    return [token for token in TOKEN_SPLIT_REGEX.split(text.lower()) if token]


class Index:
    '''
    Read-only collection of emoji records in load order, plus a mapping of
    description tokens to the positions of the records using them
    '''

    __slots__ = ('_records', '_tokens', '_vocabulary')

    def __init__(self, records: Iterable[EmojiRecord] = ()) -> None:
        self._records = tuple(records)

        token_map: dict[str, list[int]] = {}
        for position, record in enumerate(self._records):
            for token in dict.fromkeys(tokenize(record.description)):
                token_map.setdefault(token, []).append(position)

        self._tokens: Mapping[str, tuple[int, ...]] = MappingProxyType(
            {token: tuple(positions) for token, positions in token_map.items()})
        self._vocabulary = tuple(sorted(token_map))

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[EmojiRecord]:
        return iter(self._records)

    def __repr__(self) -> str:
        return (f'<Index records={len(self._records)} '
                f'tokens={len(self._vocabulary)}>')

    @property
    def records(self) -> tuple[EmojiRecord, ...]:
        return self._records

    @property
    def tokens(self) -> Mapping[str, tuple[int, ...]]:
        return self._tokens

    def positions_for(self, token: str) -> tuple[int, ...]:
        return self._tokens.get(token, ())

    def tokens_with_prefix(self, prefix: str) -> Iterator[str]:
        start = bisect.bisect_left(self._vocabulary, prefix)
        for position in range(start, len(self._vocabulary)):
            token = self._vocabulary[position]
            if not token.startswith(prefix):
                break
            yield token


def build_index(sequences: Iterable[EmojiRecord],
                zwj_sequences: Iterable[EmojiRecord]) -> Index:

    positions: dict[tuple[int, ...], int] = {}
    records: list[EmojiRecord] = []

    for record in itertools.chain(sequences, zwj_sequences):
        position = positions.get(record.codepoints)
        if position is None:
            positions[record.codepoints] = len(records)
            records.append(record)
            continue

        if record.description:
            log.debug('Duplicate sequence %s, using description %r',
                      record.hex, record.description)
            records[position] = records[position].with_description(
                record.description)

    return Index(records)


def load(sequences_text: str,
         zwj_sequences_text: str,
         sources: tuple[str, str] = (EMOJI_SEQUENCES,
                                     EMOJI_ZWJ_SEQUENCES)) -> Index:

    sequences = parse_sequences(sequences_text, sources[0])
    zwj_sequences = parse_sequences(zwj_sequences_text, sources[1])

    index = build_index(sequences, zwj_sequences)
    if not len(index):
        log.warning('No emoji found in %s and %s', *sources)
        warnings.warn('emoji index is empty', EmptyIndexWarning, stacklevel=2)
    else:
        log.info('Loaded %s emoji', len(index))
    return index


def load_files(data_dir: Path) -> Index:
    texts: list[str] = []
    for filename in (EMOJI_SEQUENCES, EMOJI_ZWJ_SEQUENCES):
        path = data_dir / filename
        log.debug('Reading %s', path)
        try:
            texts.append(path.read_text(encoding='utf-8-sig'))
        except (OSError, UnicodeDecodeError) as error:
            raise DataDirError(f'Could not read {path}: {error}') from error

    return load(texts[0], texts[1],
                sources=(str(data_dir / EMOJI_SEQUENCES),
                         str(data_dir / EMOJI_ZWJ_SEQUENCES)))
