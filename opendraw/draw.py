"""Running a whole draw and reading a single link back."""

from __future__ import annotations

import asyncio
import logging
import random as _random
import re
import urllib.parse
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Mapping, Optional, Sequence

from opendraw import link_codec
from opendraw.derangement import assignments, generate

logger = logging.getLogger(__name__)

GIVER_PARAM = "u"
TOKEN_PARAM = "k"


@dataclass(frozen=True)
class ShareableReference:
    giver: str
    token: str

    def query(self) -> str:
        # the token alphabet is already URL-safe
        return f"?{GIVER_PARAM}={urllib.parse.quote(self.giver, safe='')}&{TOKEN_PARAM}={self.token}"

    def url(self, base_url: str = "") -> str:
        return base_url + self.query()

    @classmethod
    def from_query(cls, params: Mapping) -> Optional["ShareableReference"]:
        """Build a reference from already-decoded query parameters.

        Returns None unless both the giver and the token are present.
        """
        giver = params.get(GIVER_PARAM)
        token = params.get(TOKEN_PARAM)
        if isinstance(giver, list):
            giver = giver[0] if giver else None
        if isinstance(token, list):
            token = token[0] if token else None
        if not giver or not token:
            return None
        return cls(giver, token)

    @classmethod
    def from_url(cls, url: str) -> Optional["ShareableReference"]:
        query = urllib.parse.urlsplit(url).query
        return cls.from_query(urllib.parse.parse_qs(query))


@dataclass(frozen=True)
class DrawResult:
    giver: str
    url: str


def parse_names(text: str) -> List[str]:
    """One name per line; surrounding whitespace and blank lines are dropped."""
    return [line.strip() for line in re.split(r"\r?\n", text) if line.strip()]


async def draw_async(
    names: Sequence[str],
    *,
    base_url: str = "",
    random: Callable[[], float] = _random.random,
    timeout: Optional[float] = None,
    executor: Optional[Executor] = None,
) -> List[DrawResult]:
    """Draw and encrypt one link per giver.

    Either every giver gets a link or an exception propagates and nothing is
    returned. Key derivation runs in worker threads, on ``executor`` when
    given, otherwise on the loop's default executor.
    """
    receivers = generate(names, random=random)
    pairs = assignments(names, receivers)

    loop = asyncio.get_running_loop()
    batch = asyncio.gather(
        *(loop.run_in_executor(executor, link_codec.encode, pair.receiver, pair.giver) for pair in pairs)
    )
    tokens = await asyncio.wait_for(batch, timeout)

    logger.info("Draw completed for %d participants", len(pairs))
    return [
        DrawResult(pair.giver, ShareableReference(pair.giver, token).url(base_url))
        for pair, token in zip(pairs, tokens)
    ]


def run_draw(names: Sequence[str], **kwargs) -> List[DrawResult]:
    """Synchronous draw. On timeout it returns at once; workers still
    deriving keys are abandoned and their results discarded."""
    executor = ThreadPoolExecutor(max_workers=max(1, len(names)), thread_name_prefix="opendraw")
    try:
        results = asyncio.run(draw_async(names, executor=executor, **kwargs))
    except BaseException:
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    executor.shutdown()
    return results


def reveal(reference: ShareableReference) -> str:
    return link_codec.decode(reference.token, reference.giver)
