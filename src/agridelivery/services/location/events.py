"""In-process change notifications for the active location."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ...models.domain import UserLocation

logger = logging.getLogger(__name__)

LocationListener = Callable[[Optional[UserLocation]], None]


class LocationEvents:
    """Synchronous publish/subscribe channel owned by a location session.

    Listeners run in subscription order on every publish. A failing listener
    is logged and does not prevent delivery to the rest.
    """

    def __init__(self) -> None:
        self._listeners: list[LocationListener] = []

    def subscribe(self, listener: LocationListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def publish(self, location: Optional[UserLocation]) -> None:
        listeners = list(self._listeners)
        logger.debug(f"Broadcasting location change to {len(listeners)} listeners")
        for listener in listeners:
            try:
                listener(location)
            except Exception:
                logger.exception("Location listener failed")
