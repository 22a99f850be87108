"""Discovery engine for fortuner.

This module turns the sources named on the command line into the list of
fortune files to read.  Each source must exist; directories are walked
recursively with ``os.scandir`` and any entry that cannot be inspected along
the way is skipped.  Companion ``.dat`` index files are never returned.
"""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Iterator, List, Sequence

from ..errors import PathNotFoundError

logger = logging.getLogger(__name__)

EXCLUDED_SUFFIX = '.dat'


def walk_files(root: Path) -> Iterator[Path]:
    """Yield every regular file below ``root``, at any depth.

    Unreadable directories and entries whose type cannot be determined are
    logged at debug level and dropped.  Symlinks are not followed.  Pending
    directories are kept on an explicit stack, so depth is bounded by the
    filesystem rather than the interpreter's recursion limit.
    """
    pending = [root]
    while pending:
        directory = pending.pop()
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as exc:
            logger.debug('Skipping unreadable directory %s: %s', directory, exc)
            continue
        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = not is_dir and entry.is_file(follow_symlinks=False)
            except OSError as exc:
                logger.debug('Skipping entry %s: %s', entry.path, exc)
                continue
            if is_dir:
                pending.append(Path(entry.path))
            elif is_file:
                yield Path(entry.path)


def iter_source(source: str) -> Iterator[Path]:
    """Yield the candidate files of a single source path.

    Raises:
        PathNotFoundError: if ``source`` itself cannot be stat'ed.
    """
    path = Path(source)
    try:
        st = path.stat()
    except OSError as exc:
        raise PathNotFoundError(source, exc) from exc
    if stat.S_ISDIR(st.st_mode):
        logger.debug('Walking directory %s', path)
        yield from walk_files(path)
    elif stat.S_ISREG(st.st_mode):
        yield path


def discover_files(sources: Sequence[str]) -> List[Path]:
    """Return the sorted, duplicate-free fortune files under ``sources``.

    Args:
        sources: File or directory paths, in the order given by the user.

    Returns:
        Paths sorted by their string form.  Files ending in ``.dat`` are
        excluded.  An empty list is returned when nothing qualifies.

    Raises:
        PathNotFoundError: as soon as any source does not exist.  No partial
            result is returned in that case.
    """
    found: List[Path] = []
    for source in sources:
        found.extend(p for p in iter_source(source) if p.suffix != EXCLUDED_SUFFIX)
    files = sorted(set(found), key=str)
    logger.debug('Discovered %d fortune file(s) from %d source(s)', len(files), len(sources))
    return files
