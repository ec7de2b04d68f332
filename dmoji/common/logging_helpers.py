# This file is part of dmoji.
#
# SPDX-License-Identifier: GPL-3.0-only

from __future__ import annotations

import logging
import os
import sys

RESET = '\x1b[0m'
NAME_COLOR = '\x1b[36m'
LEVEL_COLORS = {
    logging.DEBUG: '\x1b[34m',
    logging.INFO: '\x1b[32m',
    logging.WARNING: '\x1b[33m',
    logging.ERROR: '\x1b[31m',
    logging.CRITICAL: '\x1b[31;1m',
}


def parseLogLevel(arg: str) -> int:
    '''
    Either a number or a level name, "debug" works as well as "DEBUG"
    '''
    if arg.isdigit():
        return int(arg)
    level = logging.getLevelName(arg.upper())
    if isinstance(level, int):
        return level
    print('%r is not a valid loglevel' % arg, file=sys.stderr)
    return logging.NOTSET


def parseLogTarget(arg: str) -> str:
    '''
    common.index  ->  dmoji.common.index
    .other        ->  other
    <empty>       ->  dmoji
    '''
    arg = arg.lower()
    if arg.startswith('.'):
        return arg[1:]
    if arg.partition('.')[0] == 'dmoji':
        return arg
    return f'dmoji.{arg}' if arg else 'dmoji'


def parseAndSetLogLevels(arg: str) -> None:
    '''
    Apply comma separated TARGET=LEVEL directives, a bare LEVEL applies to
    the dmoji logger: "INFO,common.index=DEBUG"
    '''
    for directive in filter(None, (d.strip() for d in arg.split(','))):
        target, _, level = directive.rpartition('=')
        logger = logging.getLogger(parseLogTarget(target.strip()))
        logger.setLevel(parseLogLevel(level.strip()))


class FancyFormatter(logging.Formatter):
    '''
    Shortens the level to "(I)" and pads the logger name, with ANSI colors
    when writing to a terminal
    '''

    def __init__(self,
                 fmt: str | None = None,
                 datefmt: str | None = None,
                 use_color: bool = False) -> None:
        logging.Formatter.__init__(self, fmt, datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        levelname = '(%s)' % record.levelname[0]
        name = record.name
        if self.use_color:
            levelname = LEVEL_COLORS.get(record.levelno, '') + levelname + RESET
            name = NAME_COLOR + name + RESET

        record.levelname = levelname
        record.name = '%-25s|' % name
        return logging.Formatter.format(self, record)


def init() -> None:
    '''
    Send everything below the dmoji logger to stderr, warnings and up
    unless DMOJI_DEBUG is set
    '''
    use_color = os.name != 'nt' and sys.stderr.isatty()
    _stream_handler.setFormatter(
        FancyFormatter('%(asctime)s %(levelname)s %(name)-35s %(message)s',
                       '%x %H:%M:%S',
                       use_color))

    root_log = logging.getLogger('dmoji')
    root_log.setLevel(logging.WARNING)
    if _stream_handler not in root_log.handlers:
        root_log.addHandler(_stream_handler)
    root_log.propagate = False

    if os.environ.get('DMOJI_DEBUG'):
        set_verbose()


def set_verbose() -> None:
    parseAndSetLogLevels('dmoji=DEBUG')


def set_quiet() -> None:
    parseAndSetLogLevels('dmoji=CRITICAL')


_stream_handler = logging.StreamHandler()
