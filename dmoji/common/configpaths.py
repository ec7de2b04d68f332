# This file is part of dmoji.
#
# SPDX-License-Identifier: GPL-3.0-only

from __future__ import annotations

from collections.abc import Generator

import logging
import os
import sys
from pathlib import Path

from gi.repository import GLib

import dmoji
from dmoji.common.const import DATA_DIR_NAME
from dmoji.common.const import EMOJI_DATA_URL
from dmoji.common.const import EMOJI_SEQUENCES
from dmoji.common.const import EMOJI_ZWJ_SEQUENCES
from dmoji.common.const import PathLocation
from dmoji.common.exceptions import DataDirError

log = logging.getLogger('dmoji.common.configpaths')

PathTupleT = tuple[PathLocation, Path]


def set_data_dir(data_dir: str | None) -> None:
    _paths.custom_data_dir = Path(data_dir).expanduser() if data_dir else None
    _paths.init()


def find_data_dir() -> Path:
    return _paths.find()


class ConfigPaths:
    def __init__(self) -> None:
        self._paths: list[PathTupleT] = []
        self.custom_data_dir: Path | None = None

    def items(self) -> Generator[PathTupleT, None, None]:
        if not self._paths:
            self.init()
        yield from self._paths

    def add(self, location: PathLocation, path: Path | str) -> None:
        path = Path(path)
        if any(path == known for _, known in self._paths):
            return
        self._paths.append((location, path))

    def init(self) -> None:
        self._paths.clear()

        custom_dir = self.custom_data_dir
        if custom_dir is None and os.environ.get('DMOJI_DATA_DIR'):
            custom_dir = Path(os.environ['DMOJI_DATA_DIR']).expanduser()

        if custom_dir is not None:
            self.add(PathLocation.EXPLICIT, custom_dir)
            return

        self.add(PathLocation.USER, Path(GLib.get_user_data_dir()) / DATA_DIR_NAME)
        for system_dir in GLib.get_system_data_dirs():
            self.add(PathLocation.SYSTEM, Path(system_dir) / DATA_DIR_NAME)

        self.add(PathLocation.PREFIX, Path(sys.prefix) / 'share' / DATA_DIR_NAME)
        if dmoji.IS_SOURCE_CHECKOUT:
            self.add(PathLocation.SOURCE, dmoji.SOURCE_DIR / 'data')

    def find(self) -> Path:
        tried: list[str] = []
        for location, path in self.items():
            if (path / EMOJI_SEQUENCES).is_file():
                log.info('Using data dir %s (%s)', path, location.name.lower())
                return path
            tried.append(str(path))

        raise DataDirError(
            'No data dir found, tried: %s. Download %s and %s from %s '
            'into one of them' % (', '.join(tried), EMOJI_SEQUENCES,
                                  EMOJI_ZWJ_SEQUENCES, EMOJI_DATA_URL))


_paths = ConfigPaths()
