# This file is part of dmoji.
#
# SPDX-License-Identifier: GPL-3.0-only

from __future__ import annotations

from typing import TYPE_CHECKING

import argparse
import logging
import os
import signal
import sys

from packaging.version import Version as V

import dmoji
from dmoji.common.const import DEFAULT_COPY_COMMAND
from dmoji.common.const import DEFAULT_MENU_COMMAND

if TYPE_CHECKING:
    from dmoji.common.index import Index

log = logging.getLogger('dmoji')

_MIN_PYGOBJECT_VER = '3.42.0'
_MIN_GLIB_VER = '2.60.0'


def check_version(dep_name: str, current_ver: str, min_ver: str) -> None:
    if V(current_ver) < V(min_ver):
        sys.exit('dmoji needs %s >= %s (found %s) to run. '
                 'Quitting...' % (dep_name, min_ver, current_ver))


def _check_required_deps() -> None:
    error_message = 'dmoji needs %s to run. Quitting… (Error: %s)'

    try:
        import gi
    except ImportError as error:
        sys.exit(error_message % ('pygobject', error))

    try:
        gi.require_versions({'GLib': '2.0', 'Gio': '2.0'})
    except ValueError as error:
        sys.exit('Missing dependency: %s' % error)

    from gi.repository import GLib
    glib_ver = '.'.join(map(str, [GLib.MAJOR_VERSION,
                                  GLib.MINOR_VERSION,
                                  GLib.MICRO_VERSION]))

    check_version('pygobject', gi.__version__, _MIN_PYGOBJECT_VER)
    check_version('glib', glib_ver, _MIN_GLIB_VER)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f'invalid number: {value!r}') from None
    if number < 1:
        raise argparse.ArgumentTypeError(f'must be at least 1: {number}')
    return number


def create_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='dmoji',
        description='Search emoji by name and copy the one you pick')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {dmoji.__version__}')
    parser.add_argument('--data-dir',
                        help='Directory holding emoji-sequences.txt and '
                             'emoji-zwj-sequences.txt')
    parser.add_argument('--menu',
                        default=os.environ.get('DMOJI_MENU',
                                               DEFAULT_MENU_COMMAND),
                        help='Menu program reading choices from stdin '
                             '(default: %(default)s)')
    parser.add_argument('--copy',
                        default=os.environ.get('DMOJI_COPY',
                                               DEFAULT_COPY_COMMAND),
                        help='Program receiving the selected emoji on stdin '
                             '(default: %(default)s)')
    parser.add_argument('--stdout', action='store_true',
                        help='Print the selected emoji instead of copying it')
    parser.add_argument('-l', '--loglevel',
                        help='Set log levels, e.g. "index=DEBUG,INFO"')
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-v', '--verbose', action='store_true',
                           help='Print debug output')
    verbosity.add_argument('-q', '--quiet', action='store_true',
                           help='Only print fatal errors')

    subparsers = parser.add_subparsers(metavar='commands', dest='command')

    subparser = subparsers.add_parser(
        'pick',
        help='Choose an emoji with the menu program (default)')
    subparser.add_argument('--query', default='',
                           help='Only offer emoji matching this query')
    subparser.add_argument('--limit', type=_positive_int, default=None,
                           help='Offer at most this many matches')

    subparser = subparsers.add_parser(
        'search',
        help='Print the emoji matching a query, best first')
    subparser.add_argument('query', nargs='+')
    subparser.add_argument('--limit', type=_positive_int, default=20,
                           help='Print at most this many matches '
                                '(default: %(default)s)')
    subparser.add_argument('--first', action='store_true',
                           help='Only print the best matching emoji')

    return parser


def _init_logging(args: argparse.Namespace) -> None:
    from dmoji.common import logging_helpers
    logging_helpers.init()
    if args.verbose:
        logging_helpers.set_verbose()
    elif args.quiet:
        logging_helpers.set_quiet()
    if args.loglevel:
        logging_helpers.parseAndSetLogLevels(args.loglevel)


def _load_index(args: argparse.Namespace) -> Index:
    from dmoji.common import configpaths
    from dmoji.common.index import load_files

    configpaths.set_data_dir(args.data_dir)
    return load_files(configpaths.find_data_dir())


def _emit(text: str, args: argparse.Namespace) -> None:
    if args.stdout:
        print(text)
        return

    from dmoji.common.menu import copy_text
    copy_text(text, args.copy)


def _run_pick(args: argparse.Namespace) -> int:
    from dmoji.common.matcher import browse
    from dmoji.common.matcher import query
    from dmoji.common.menu import Picker
    from dmoji.common.resolver import resolve

    index = _load_index(args)
    query_string = getattr(args, 'query', '')
    if query_string.strip():
        candidates = query(index, query_string, getattr(args, 'limit', None))
    else:
        candidates = browse(index)

    candidate = Picker(candidates, args.menu).run()
    if candidate is None:
        return 1

    selection = resolve(candidate)
    log.info('Selected %s', selection.description)
    _emit(selection.text, args)
    return 0


def _run_search(args: argparse.Namespace) -> int:
    from dmoji.common.matcher import query
    from dmoji.common.resolver import resolve

    index = _load_index(args)
    candidates = query(index, ' '.join(args.query), args.limit)
    if not candidates:
        return 1

    if args.first:
        _emit(resolve(candidates[0]).text, args)
        return 0

    for candidate in candidates:
        selection = resolve(candidate)
        print(f'{selection.text}\t{selection.description}\t'
              f'{candidate.tier.name.lower()}')
    return 0


def run(argv: list[str] | None = None) -> int:
    from dmoji.common.exceptions import DmojiError

    args = create_arg_parser().parse_args(argv)
    _init_logging(args)

    try:
        if args.command == 'search':
            return _run_search(args)
        return _run_pick(args)
    except DmojiError as error:
        log.error('%s', error)
        return 1


def main() -> None:
    if sys.platform != 'win32':
        signal.signal(signal.SIGPIPE, signal.SIG_DFL)

    _check_required_deps()
    sys.exit(run())


if __name__ == '__main__':
    main()
