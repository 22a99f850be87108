"""Selection engine for fortuner.

Two modes are supported.  With a pattern, every matching fortune is kept
and labeled with its source whenever the source changes from the previous
match.  Without one, a single fortune is drawn at random from a source that
is either seeded (reproducible) or backed by the operating system's entropy.
"""

from __future__ import annotations

import logging
import random
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..parsing.engine import Fortune

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = 'No fortunes found'


@dataclass(frozen=True)
class LabeledFortune:
    """A matched fortune and the source header to show before it, if any."""

    header: Optional[str]
    fortune: Fortune


def make_random_source(seed: Optional[int] = None) -> random.Random:
    """Return a seeded generator for ``seed`` or an entropy-backed one for ``None``."""
    if seed is None:
        return random.SystemRandom()
    return random.Random(seed)


def pick_fortune(fortunes: Sequence[Fortune], rng: random.Random) -> Optional[Fortune]:
    """Choose one fortune uniformly from ``fortunes``.

    Returns ``None`` when there is nothing to choose from.
    """
    if not fortunes:
        return None
    choice = fortunes[rng.randrange(len(fortunes))]
    logger.debug('Picked a fortune from %s out of %d', choice.source, len(fortunes))
    return choice


def filter_fortunes(fortunes: Sequence[Fortune], pattern: re.Pattern) -> List[Fortune]:
    return [f for f in fortunes if pattern.search(f.text)]


def label_matches(fortunes: Sequence[Fortune], pattern: re.Pattern) -> List[LabeledFortune]:
    """Filter ``fortunes`` by ``pattern`` and attach source headers.

    A header is attached to the first match and to every match whose source
    differs from the match before it.
    """
    labeled: List[LabeledFortune] = []
    previous: Optional[str] = None
    for fortune in filter_fortunes(fortunes, pattern):
        header = fortune.source if fortune.source != previous else None
        labeled.append(LabeledFortune(header=header, fortune=fortune))
        previous = fortune.source
    logger.debug('%d of %d fortune(s) matched %r', len(labeled), len(fortunes), pattern.pattern)
    return labeled
