# This file is part of dmoji.
#
# SPDX-License-Identifier: GPL-3.0-only

from __future__ import annotations

from typing import NamedTuple

import logging
import re
from operator import attrgetter

from dmoji.common.const import MatchTier
from dmoji.common.const import TIER_SPAN
from dmoji.common.index import Index
from dmoji.common.index import tokenize
from dmoji.common.structs import Candidate
from dmoji.common.structs import normalize

log = logging.getLogger('dmoji.common.matcher')


class Match(NamedTuple):
    tier: MatchTier
    penalty: int
    span: tuple[int, int] | None

    @property
    def score(self) -> int:
        return self.tier.base_score - min(self.penalty, TIER_SPAN - 1)


def query(index: Index,
          query_string: str,
          limit: int | None = None) -> list[Candidate]:
    '''
    Return the candidates matching query_string, best first. Records with
    equal scores keep their load order.
    '''
    if limit is not None and limit < 1:
        raise ValueError(f'limit must be at least 1, got {limit}')

    needle = normalize(query_string)
    if not needle:
        return []

    prefix_penalties = _prefix_penalties(index, tokenize(needle))

    candidates: list[Candidate] = []
    for position, record in enumerate(index.records):
        match = score_record(record.normalized,
                             needle,
                             prefix_penalties.get(position))
        if match is None:
            continue
        candidates.append(Candidate(index=index,
                                    position=position,
                                    tier=match.tier,
                                    score=match.score,
                                    span=match.span))

    candidates.sort(key=attrgetter('sort_key'))
    log.debug('Query %r matched %s records', needle, len(candidates))
    if limit is not None:
        return candidates[:limit]
    return candidates


def browse(index: Index) -> list[Candidate]:
    return [Candidate(index=index,
                      position=position,
                      tier=MatchTier.BROWSE,
                      score=MatchTier.BROWSE.base_score)
            for position in range(len(index))]


def score_record(description: str,
                 needle: str,
                 prefix_penalty: int | None = None) -> Match | None:
    '''
    Score one normalized description against a normalized query, the
    prefix penalty comes from the token lookup in the index
    '''
    if not description:
        return None

    if description == needle:
        return Match(MatchTier.EXACT, 0, (0, len(description)))

    if prefix_penalty is not None:
        span = (_boundary_span(description, needle) or
                _boundary_span(description, tokenize(needle)[0]))
        return Match(MatchTier.PREFIX, prefix_penalty, span)

    offset = description.find(needle)
    if offset != -1:
        unmatched = len(description) - len(needle)
        return Match(MatchTier.SUBSTRING,
                     offset + unmatched,
                     (offset, offset + len(needle)))

    return fuzzy_match(description, needle)


def fuzzy_match(description: str, needle: str) -> Match | None:
    '''
    Match the query characters in order, gaps between them and a late
    start make the match worse
    '''
    chars = ''.join(needle.split())
    if not chars:
        return None

    start = -1
    pos = -1
    for char in chars:
        pos = description.find(char, pos + 1)
        if pos == -1:
            return None
        if start == -1:
            start = pos

    gaps = pos + 1 - start - len(chars)
    return Match(MatchTier.FUZZY, start + gaps, (start, pos + 1))


def _prefix_penalties(index: Index,
                      query_tokens: list[str]) -> dict[int, int]:
    '''
    Map the position of every record where each query token starts one of
    the description tokens to the summed length of the unmatched suffixes
    '''
    if not query_tokens:
        return {}

    result: dict[int, int] | None = None
    for query_token in query_tokens:
        best: dict[int, int] = {}
        for token in index.tokens_with_prefix(query_token):
            suffix = len(token) - len(query_token)
            for position in index.positions_for(token):
                if suffix < best.get(position, TIER_SPAN):
                    best[position] = suffix

        if result is None:
            result = best
        else:
            result = {position: penalty + best[position]
                      for position, penalty in result.items()
                      if position in best}

        if not result:
            return {}

    return result or {}


def _boundary_span(description: str, text: str) -> tuple[int, int] | None:
    match = re.search(rf'(?:^|[\W_])({re.escape(text)})', description)
    if match is None:
        return None
    return match.span(1)
