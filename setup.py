#!/usr/bin/env python3

from __future__ import annotations

from typing import cast

import sys

if sys.version_info < (3, 10):
    sys.exit('dmoji needs Python 3.10+')

from pathlib import Path

from setuptools import find_packages
from setuptools import setup
from setuptools.command.build_py import build_py as _build
from setuptools.command.install import install as _install


DataFilesT = list[tuple[str, list[str]]]


MAN_FILES = [
    'dmoji.1',
]
EMOJI_DATA_FILES = [
    'emoji-sequences.txt',
    'emoji-zwj-sequences.txt',
]

REPO_DIR = Path(__file__).resolve().parent
BUILD_DIR = REPO_DIR / 'build'
DATA_DIR = Path('data')


def get_version() -> str:
    init_file = REPO_DIR / 'dmoji' / '__init__.py'
    for line in init_file.read_text(encoding='utf8').splitlines():
        if line.startswith('__version__'):
            return line.split('=')[1].strip().strip('\'')
    raise ValueError('__version__ not found in %s' % init_file)


def newer(source: Path, target: Path) -> bool:
    if not source.exists():
        raise ValueError('file "%s" does not exist' % source.resolve())
    if not target.exists():
        return True

    from stat import ST_MTIME
    mtime1 = source.stat()[ST_MTIME]
    mtime2 = target.stat()[ST_MTIME]

    return mtime1 > mtime2


def build_man() -> None:
    '''
    Compress dmoji manual files
    '''
    newdir = BUILD_DIR / 'man'
    if not (newdir.is_dir() or newdir.is_symlink()):
        newdir.mkdir(parents=True)

    for man in MAN_FILES:
        filename = DATA_DIR / man
        man_file_gz = newdir / (man + '.gz')
        if man_file_gz.exists():
            if newer(filename, man_file_gz):
                man_file_gz.unlink()
            else:
                continue

        import gzip
        # Binary io, so open is OK
        with open(filename, 'rb') as f_in,\
                gzip.open(man_file_gz, 'wb') as f_out:
            f_out.writelines(f_in)
            print('Compiling %s >> %s' % (filename, man_file_gz))


def install_man(data_files: DataFilesT) -> None:
    man_dir = BUILD_DIR / 'man'
    target = 'share/man/man1'

    for man in MAN_FILES:
        man_file_gz = str(man_dir / (man + '.gz'))
        data_files.append((target, [man_file_gz]))


def install_emoji_data(data_files: DataFilesT) -> None:
    '''
    The Unicode data files are not part of the repository, they are
    installed when a packager drops them into data/
    '''
    files = [str(DATA_DIR / name) for name in EMOJI_DATA_FILES
             if (DATA_DIR / name).exists()]
    if not files:
        print('No emoji data files in %s, skipping' % DATA_DIR)
        return
    data_files.append(('share/dmoji', files))


class build(_build):
    def run(self):
        if sys.platform != 'win32':
            build_man()
        _build.run(self)


class install(_install):
    def run(self):
        data_files = cast(DataFilesT, self.distribution.data_files)  # pyright: ignore  # noqa: E501
        install_emoji_data(data_files)
        if sys.platform != 'win32':
            install_man(data_files)
        _install.run(self)  # pyright: ignore


data_files: DataFilesT = []

setup(
    name='dmoji',
    version=get_version(),
    description='Search emoji by name and copy the one you pick',
    license='GPL-3.0-only',
    python_requires='>=3.10',
    packages=find_packages(exclude=['test', 'test.*']),
    install_requires=[
        'packaging',
        'PyGObject>=3.42.0',
    ],
    cmdclass={
        'build_py': build,
        'install': install,
    },
    entry_points={
        'console_scripts': [
            'dmoji = dmoji.dmoji:main',
        ],
    },
    data_files=data_files
)
