# This file is part of dmoji.
#
# SPDX-License-Identifier: GPL-3.0-only

from __future__ import annotations

from dmoji.common.exceptions import IndexInvariantError
from dmoji.common.structs import Candidate
from dmoji.common.structs import Selection


def resolve(candidate: Candidate) -> Selection:
    records = candidate.index.records
    if not 0 <= candidate.position < len(records):
        raise IndexInvariantError(
            f'candidate position {candidate.position} is outside the index '
            f'({len(records)} records)')

    record = records[candidate.position]
    return Selection(record.text, record.description)
