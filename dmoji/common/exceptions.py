# This file is part of dmoji.
#
# SPDX-License-Identifier: GPL-3.0-only

from __future__ import annotations


class DmojiError(Exception):
    '''
    Base class for errors reported to the user
    '''

    def __init__(self, text: str = '') -> None:
        Exception.__init__(self)
        self.text = text

    def __str__(self) -> str:
        return self.text


class ParseError(DmojiError):
    '''
    A data file line could not be parsed
    '''

    def __init__(self,
                 line: int,
                 raw: str,
                 reason: str,
                 source: str | None = None) -> None:

        self.line = line
        self.raw = raw
        self.reason = reason
        self.source = source
        location = f'{source or "<data>"}:{line}'
        DmojiError.__init__(self, f'{location}: {reason}: {raw.strip()!r}')


class DataDirError(DmojiError):
    pass


class MenuError(DmojiError):
    pass


class IndexInvariantError(AssertionError):
    '''
    A candidate points at a record its index does not hold
    '''


class EmptyIndexWarning(UserWarning):
    pass
