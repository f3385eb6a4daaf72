"""Route bookkeeping for the console views."""

from __future__ import annotations

import logging
from typing import List, Optional
from urllib.parse import parse_qs, urlparse

logger = logging.getLogger(__name__)


class Navigator:
    """Records where the console currently is; controllers call ``go`` after a submit or delete."""

    def __init__(self, start: str = "/") -> None:
        self.history: List[str] = [start]

    @property
    def current(self) -> str:
        return self.history[-1]

    def go(self, path: str) -> None:
        logger.debug("Navigating %s -> %s", self.current, path)
        self.history.append(path)

    def back(self) -> str:
        if len(self.history) > 1:
            self.history.pop()
        return self.current


def owner_from_query(location: str) -> Optional[int]:
    """Read a pre-selected ``clientId`` from a location like ``/policies/create?clientId=3``."""
    values = parse_qs(urlparse(location).query).get("clientId")
    if not values:
        return None
    try:
        return int(values[0])
    except ValueError:
        logger.warning("Ignoring non-numeric clientId in %s", location)
        return None
