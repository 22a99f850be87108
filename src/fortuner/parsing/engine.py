"""Parsing engine for fortuner.

Fortune files are plain text in which a line holding a single ``%`` closes
the record above it.  Blank lines inside a record are kept; text after the
last terminator is not a record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List

from ..errors import FileOpenError

logger = logging.getLogger(__name__)

TERMINATOR = '%'


@dataclass(frozen=True)
class Fortune:
    source: str
    text: str


def _decode_line(raw: bytes) -> str:
    line = raw.decode('utf-8')
    if line.endswith('\n'):
        line = line[:-1]
        if line.endswith('\r'):
            line = line[:-1]
    return line


def parse_lines(lines: Iterable[str], source: str) -> Iterator[Fortune]:
    """Split already-decoded ``lines`` into fortunes labeled with ``source``."""
    buffer: List[str] = []
    for line in lines:
        if line == TERMINATOR:
            if buffer:
                yield Fortune(source=source, text='\n'.join(buffer))
                buffer = []
        else:
            buffer.append(line)


def _read_lines(fh, path: Path) -> Iterator[str]:
    try:
        for raw in fh:
            yield _decode_line(raw)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning('Stopped reading %s early: %s', path, exc)


def read_file(path: Path) -> List[Fortune]:
    """Read the fortunes of a single file.

    Raises:
        FileOpenError: if the file cannot be opened.
    """
    try:
        fh = path.open('rb')
    except OSError as exc:
        raise FileOpenError(path, exc) from exc
    with fh:
        fortunes = list(parse_lines(_read_lines(fh, path), path.name))
    logger.debug('Parsed %d fortune(s) from %s', len(fortunes), path)
    return fortunes


def read_fortunes(paths: Iterable[Path]) -> List[Fortune]:
    """Read every file in ``paths`` and concatenate their fortunes in order."""
    fortunes: List[Fortune] = []
    for path in paths:
        fortunes.extend(read_file(Path(path)))
    return fortunes
