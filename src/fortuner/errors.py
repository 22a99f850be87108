"""Error types for fortuner.

Only ``PathNotFoundError`` and ``FileOpenError`` escape the pipeline as hard
failures.  ``ConfigurationError`` is raised while building the configuration,
before any file is touched.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union


def _reason(cause: BaseException) -> str:
    if isinstance(cause, OSError) and cause.strerror:
        return cause.strerror
    return str(cause)


class FortunerError(Exception):
    """Base class for all fortuner failures."""


class ConfigurationError(FortunerError):
    pass


class PathNotFoundError(FortunerError):
    """A top-level source path does not exist or cannot be stat'ed."""

    def __init__(self, path: Union[str, Path], cause: BaseException):
        self.path = str(path)
        self.cause = cause
        super().__init__(f'{self.path}: {_reason(cause)}')


class FileOpenError(FortunerError):
    """A discovered fortune file cannot be opened for reading."""

    def __init__(self, path: Union[str, Path], cause: BaseException):
        self.path = str(path)
        self.cause = cause
        super().__init__(f'{self.path}: {_reason(cause)}')
