"""Keeps the admin's link list for the current browser session."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import List, MutableMapping, Optional, Sequence

from opendraw.draw import DrawResult

logger = logging.getLogger(__name__)

RESULTS_KEY = "opendraw_results"


class SessionStore:
    """Reads and writes the serialized results under a single key.

    ``store`` is any mutable mapping; the app passes ``st.session_state``.
    """

    def __init__(self, store: MutableMapping, key: str = RESULTS_KEY):
        self._store = store
        self._key = key

    def save(self, results: Sequence[DrawResult]) -> None:
        self._store[self._key] = json.dumps([asdict(r) for r in results])

    def load(self) -> Optional[List[DrawResult]]:
        blob = self._store.get(self._key)
        if blob is None:
            return None
        try:
            items = json.loads(blob)
            results = [DrawResult(giver=item["giver"], url=item["url"]) for item in items]
        except (TypeError, ValueError, KeyError) as e:
            logger.warning("Discarding unreadable stored draw: %s", e)
            self.clear()
            return None
        if not results:
            logger.warning("Discarding empty stored draw")
            self.clear()
            return None
        return results

    def clear(self) -> None:
        if self._key in self._store:
            del self._store[self._key]
