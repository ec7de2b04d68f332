# This file is part of dmoji.
#
# SPDX-License-Identifier: GPL-3.0-only

from __future__ import annotations

from collections.abc import Iterable

import logging
import shlex

from gi.repository import Gio
from gi.repository import GLib

from dmoji.common.exceptions import MenuError
from dmoji.common.structs import Candidate
from dmoji.common.structs import EmojiRecord

log = logging.getLogger('dmoji.common.menu')


def format_label(record: EmojiRecord) -> str:
    return f'{record.text} {record.description or record.hex}'


def split_command(command: str | list[str]) -> list[str]:
    if isinstance(command, str):
        command = shlex.split(command)
    if not command:
        raise MenuError('Empty command')
    return command


def _communicate(argv: list[str],
                 flags: Gio.SubprocessFlags,
                 input_text: str) -> tuple[Gio.Subprocess, str]:

    log.debug('Spawning %s', argv)
    try:
        proc = Gio.Subprocess.new(argv, flags)
        _success, stdout, _stderr = proc.communicate_utf8(input_text, None)
    except GLib.Error as error:
        raise MenuError(f'Failed to run {argv[0]}: {error.message}') from error

    return proc, stdout or ''


class Picker:
    '''
    Offers candidates to an external menu program (dmenu, rofi -dmenu,
    fzf, ...) and maps the line it prints back to a candidate
    '''

    def __init__(self,
                 candidates: Iterable[Candidate],
                 command: str | list[str]) -> None:

        self._argv = split_command(command)
        self._choices: dict[str, Candidate] = {}
        for candidate in candidates:
            self._choices.setdefault(format_label(candidate.record), candidate)

    @property
    def labels(self) -> list[str]:
        return list(self._choices)

    def lookup(self, selection: str) -> Candidate | None:
        return self._choices.get(selection.strip())

    def run(self) -> Candidate | None:
        input_text = ''.join(f'{label}\n' for label in self._choices)
        proc, stdout = _communicate(
            self._argv,
            Gio.SubprocessFlags.STDIN_PIPE | Gio.SubprocessFlags.STDOUT_PIPE,
            input_text)

        if not proc.get_successful():
            log.info('%s exited without a selection', self._argv[0])
            return None

        candidate = self.lookup(stdout)
        if candidate is None:
            log.info('Selection %r is not a known emoji', stdout.strip())
        return candidate


def copy_text(text: str, command: str | list[str]) -> None:
    argv = split_command(command)
    proc, _stdout = _communicate(argv, Gio.SubprocessFlags.STDIN_PIPE, text)
    if not proc.get_successful():
        raise MenuError(f'{argv[0]} failed to take the selection')
    log.info('Copied %r with %s', text, argv[0])
