"""Random no-self-assignment pairing over a list of participants."""

from __future__ import annotations

import logging
import random as _random
from dataclasses import dataclass
from typing import Callable, List, Sequence

from opendraw.errors import DerangementUnsatisfiable, DuplicateParticipant, InsufficientParticipants

logger = logging.getLogger(__name__)

MIN_PARTICIPANTS = 3
MAX_ATTEMPTS = 1000


@dataclass(frozen=True)
class Assignment:
    giver: str
    receiver: str

    def __post_init__(self):
        if self.giver == self.receiver:
            raise ValueError("giver and receiver must differ")


def _check_participants(names: Sequence[str]) -> None:
    if len(names) < MIN_PARTICIPANTS:
        raise InsufficientParticipants(len(names), MIN_PARTICIPANTS)
    seen = set()
    for name in names:
        key = name.strip()
        if key in seen:
            raise DuplicateParticipant(key)
        seen.add(key)


def _shuffle(items: List[str], random: Callable[[], float]) -> None:
    # Fisher-Yates, in place
    for i in range(len(items) - 1, 0, -1):
        j = int(random() * (i + 1))
        items[i], items[j] = items[j], items[i]


def generate(
    names: Sequence[str],
    random: Callable[[], float] = _random.random,
    max_attempts: int = MAX_ATTEMPTS,
) -> List[str]:
    """Return receivers such that ``names[i]`` gives to ``result[i]``.

    ``random`` must return uniform deviates in [0, 1). Shuffles are rejected
    until one has no fixed point; after ``max_attempts`` rejections
    :class:`DerangementUnsatisfiable` is raised.
    """
    _check_participants(names)
    receivers = list(names)
    for attempt in range(1, max_attempts + 1):
        _shuffle(receivers, random)
        if all(giver != receiver for giver, receiver in zip(names, receivers)):
            logger.debug("Derangement of %d found after %d attempt(s)", len(names), attempt)
            return receivers
    logger.warning("No derangement of %d names after %d attempts", len(names), max_attempts)
    raise DerangementUnsatisfiable(max_attempts)


def assignments(names: Sequence[str], receivers: Sequence[str]) -> List[Assignment]:
    return [Assignment(giver, receiver) for giver, receiver in zip(names, receivers)]
